from typing import Optional
from flask import current_app
from backoffice.extensions import db
from backoffice.utils.audit import log_action
from backoffice.utils.transaction import transactional
from .loading import lock_document


def delete_document(
    *,
    document_id: str,
    actor_id: Optional[str],
) -> None:
    """
    Hard-delete a document and every one of its versions.

    The current-version pointer is cleared first so the circular foreign
    key never blocks the cascade.
    """
    with transactional():
        document = lock_document(document_id)
        slug = document.slug
        version_count = len(document.versions)

        document.current_version = None
        db.session.flush()

        db.session.delete(document)

        log_action(
            action="document.delete",
            entity_type="document",
            entity_id=document_id,
            actor_id=actor_id,
            payload={
                "slug": slug,
                "versions": version_count,
            },
        )

    current_app.logger.info(f"Document {document_id} deleted with {version_count} versions by {actor_id}")
