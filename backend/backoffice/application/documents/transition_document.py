# backoffice/application/documents/transition_document.py
from typing import Optional
from flask import current_app
from backoffice.models.base import utc_now
from backoffice.models.document import Document
from backoffice.domain.lifecycle.document import apply_transition
from backoffice.domain.invariants.document import assert_document
from backoffice.utils.audit import log_action
from backoffice.utils.transaction import transactional
from .loading import lock_document


def transition_document(
    *,
    document_id: str,
    action: str,
    actor_id: Optional[str],
) -> Document:
    """
    Apply a named lifecycle action (submit_for_review, publish, archive).

    Responsibilities:
    - row lock on the document
    - lifecycle guard (InvalidTransitionError surfaces unchanged)
    - audit logging
    """
    with transactional():
        document = lock_document(document_id)

        from_status = apply_transition(document, action=action, now=utc_now())
        document.updated_by = actor_id

        assert_document(document)

        log_action(
            action=f"document.{action}",
            entity_type="document",
            entity_id=document.id,
            actor_id=actor_id,
            payload={
                "from": from_status,
                "to": document.status,
                "version": document.version,
            },
        )

    current_app.logger.info(
        f"Document {document_id} moved {from_status} → {document.status} by {actor_id}"
    )
    return document


def submit_document_for_review(*, document_id: str, actor_id: Optional[str]) -> Document:
    return transition_document(document_id=document_id, action="submit_for_review", actor_id=actor_id)


def publish_document(*, document_id: str, actor_id: Optional[str]) -> Document:
    return transition_document(document_id=document_id, action="publish", actor_id=actor_id)


def archive_document(*, document_id: str, actor_id: Optional[str]) -> Document:
    return transition_document(document_id=document_id, action="archive", actor_id=actor_id)
