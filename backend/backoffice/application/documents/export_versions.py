# backoffice/application/documents/export_versions.py
from typing import Any, Dict, Optional
from flask import current_app
from backoffice.models.base import utc_now
from backoffice.models.document import Document
from backoffice.normalizers.version import EXPORT_TIMESTAMP_FORMAT, normalize_version_export
from .loading import get_document
from .version_store import list_by_document


def export_document_history(
    *,
    document_id: str,
    actor_id: Optional[str],
) -> Dict[str, Any]:
    """
    Serialize a document's full version history for download.

    The per-version keys are a contract relied on by downstream tooling.
    """
    document = get_document(document_id)
    versions = list_by_document(document)

    current_app.logger.info(f"Exporting {len(versions)} versions of document {document_id} for {actor_id}")

    return {
        "document": {
            "id": document.id,
            "title": document.title,
            "slug": document.slug,
            "status": document.status,
        },
        "versions": [normalize_version_export(v) for v in versions],
        "exported_at": utc_now().strftime(EXPORT_TIMESTAMP_FORMAT),
        "exported_by": actor_id,
    }


def version_stats(document: Document) -> Dict[str, Any]:
    versions = list_by_document(document)

    first = versions[0] if versions else None
    latest = versions[-1] if versions else None

    return {
        "total_versions": len(versions),
        "current_version": document.version,
        "first_created": first.created_at.isoformat() if first else None,
        "last_modified": latest.created_at.isoformat() if latest else None,
    }
