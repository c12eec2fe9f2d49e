# backoffice/application/documents/rollback_document.py
from typing import Optional
from flask import current_app
from backoffice.models.document_version import DocumentVersion
from backoffice.domain.exceptions import DocumentLifecycleError, VersionOwnershipError
from backoffice.domain.versioning import Bump
from backoffice.utils.audit import log_action
from backoffice.utils.transaction import transactional
from .loading import lock_document
from .version_store import create_snapshot, current_of, get_version


def rollback_document(
    *,
    document_id: str,
    version_id: str,
    actor_id: Optional[str],
) -> DocumentVersion:
    """
    Restore a document to the content of a previous version.

    The restore is a new snapshot numbered as a minor bump of the *current*
    version, so history only moves forward. No existing snapshot is
    deleted, reordered or modified (other than the current flag flip).
    Status is left as it is.
    """
    try:
        with transactional():
            document = lock_document(document_id)
            target = get_version(version_id)

            if target.document_id != document.id:
                raise VersionOwnershipError(
                    f"Version {version_id} does not belong to document {document_id}"
                )

            previous = current_of(document)

            restored = create_snapshot(
                document=document,
                title=target.title,
                content=target.content,
                change_log=f"Restored to version {target.version}",
                bump=Bump.MINOR,
                actor_id=actor_id,
            )

            log_action(
                action="document.rollback",
                entity_type="document",
                entity_id=document.id,
                actor_id=actor_id,
                payload={
                    "target_version": target.version,
                    "from_version": previous.version,
                    "to_version": restored.version,
                },
            )
    except DocumentLifecycleError:
        raise
    except Exception as exc:
        current_app.logger.error(f"Rollback of document {document_id} to {version_id} failed: {exc}")
        raise

    current_app.logger.info(
        f"Document {document_id} rolled back to {target.version}; new version {restored.version}"
    )
    return restored
