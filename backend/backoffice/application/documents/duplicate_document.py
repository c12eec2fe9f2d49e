from typing import Optional
from flask import current_app
from backoffice.models.document import Document
from backoffice.domain.invariants.document import TITLE_MAX_LENGTH
from backoffice.utils.audit import log_action
from backoffice.utils.transaction import transactional
from .create_document import build_document
from .loading import get_document
from .version_store import current_of


def duplicate_document(
    *,
    document_id: str,
    actor_id: Optional[str],
) -> Document:
    """
    Copy a document's current content into a brand-new draft document.

    The copy gets its own identity, a slug derived from its title and a
    fresh 1.0 version; the source's history and status are not carried over.
    """
    with transactional():
        source = get_document(document_id)
        source_version = current_of(source)

        suffix = current_app.config.get("DUPLICATE_TITLE_SUFFIX", " (Copy)")
        title = source_version.title[: TITLE_MAX_LENGTH - len(suffix)] + suffix

        duplicate = build_document(
            title=title,
            content=source_version.content,
            description=source.description,
            actor_id=actor_id,
            change_log=f"Duplicated from {source.slug} version {source_version.version}",
        )

        log_action(
            action="document.duplicate",
            entity_type="document",
            entity_id=duplicate.id,
            actor_id=actor_id,
            payload={
                "source_id": source.id,
                "source_version": source_version.version,
                "slug": duplicate.slug,
            },
        )

    current_app.logger.info(f"Document {document_id} duplicated as {duplicate.id} ('{duplicate.slug}')")
    return duplicate
