from datetime import datetime
from typing import Dict, Set

from backoffice.domain.exceptions import InvalidTransitionError

DRAFT = "draft"
REVIEW = "review"
PUBLISHED = "published"
ARCHIVED = "archived"

DOCUMENT_STATUSES = (DRAFT, REVIEW, PUBLISHED, ARCHIVED)

# Explicit allowed state transitions; archived is terminal
ALLOWED_DOCUMENT_TRANSITIONS: Dict[str, Set[str]] = {
    DRAFT: {REVIEW, PUBLISHED, ARCHIVED},
    REVIEW: {PUBLISHED, ARCHIVED},
    PUBLISHED: {ARCHIVED},
    ARCHIVED: set(),
}

# Named lifecycle actions → target status
TRANSITION_TARGETS: Dict[str, str] = {
    "submit_for_review": REVIEW,
    "publish": PUBLISHED,
    "archive": ARCHIVED,
}


def assert_document_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards document lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_DOCUMENT_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvalidTransitionError(from_status, to_status)


def apply_transition(document, *, action: str, now: datetime) -> str:
    """
    Moves ``document`` along the edge named by ``action``.

    Returns the previous status. ``published_at`` is written only on the
    first entry into published and is never cleared.
    """
    to_status = TRANSITION_TARGETS.get(action)
    if to_status is None:
        raise InvalidTransitionError(document.status, action)

    from_status = document.status
    assert_document_transition(from_status=from_status, to_status=to_status)

    document.status = to_status

    if to_status == PUBLISHED and document.published_at is None:
        document.published_at = now

    return from_status
