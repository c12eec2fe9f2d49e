from typing import Optional
from flask import current_app
from backoffice.utils.audit import log_action
from backoffice.utils.transaction import transactional
from .loading import lock_document
from .version_store import delete_version as remove_version, get_version


def delete_version(
    *,
    document_id: str,
    version_id: str,
    actor_id: Optional[str],
) -> None:
    """Delete one historical version; the current version is protected."""
    with transactional():
        document = lock_document(document_id)
        version = get_version(version_id, document_id=document.id)
        number = version.version

        remove_version(version)

        log_action(
            action="version.delete",
            entity_type="document",
            entity_id=document.id,
            actor_id=actor_id,
            payload={
                "version_id": version_id,
                "version": number,
            },
        )

    current_app.logger.info(f"Version {number} of document {document_id} deleted by {actor_id}")
