import re

from backoffice.domain.exceptions import InvariantViolation
from backoffice.domain.lifecycle.document import DOCUMENT_STATUSES

SLUG_PATTERN = re.compile(r"^[a-z0-9\-/]+$")

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 255
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 500


def assert_title(title):
    if not title or not title.strip():
        raise InvariantViolation("Document title is required.")

    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        raise InvariantViolation(
            f"Document title must be between {TITLE_MIN_LENGTH} and "
            f"{TITLE_MAX_LENGTH} characters."
        )


def assert_slug(slug):
    if not slug:
        raise InvariantViolation("Document slug is required.")

    if not SLUG_MIN_LENGTH <= len(slug) <= SLUG_MAX_LENGTH:
        raise InvariantViolation(
            f"Document slug must be between {SLUG_MIN_LENGTH} and "
            f"{SLUG_MAX_LENGTH} characters."
        )

    if not SLUG_PATTERN.match(slug):
        raise InvariantViolation(
            "Document slug may only contain lowercase letters, digits, hyphens and slashes."
        )


def assert_document(document):
    assert_title(document.title)
    assert_slug(document.slug)

    if document.status not in DOCUMENT_STATUSES:
        raise InvariantViolation(f"Unknown document status: {document.status}")
