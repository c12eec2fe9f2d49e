# backoffice/application/documents/verify_versions.py
from typing import Any, Dict, List, Optional
from flask import current_app
from backoffice.models.document_version import DocumentVersion
from backoffice.domain.exceptions import IntegrityMismatchError
from backoffice.domain.versioning import verify
from .loading import get_document
from .version_store import find_by_checksum, get_version, list_by_document


def verify_snapshot(version: DocumentVersion, expected_checksum: Optional[str] = None) -> str:
    """
    Recompute a snapshot's digest against its stored checksum and, for
    import paths, against an externally supplied one.
    """
    actual = verify(version.content, version.checksum)

    if expected_checksum is not None:
        verify(version.content, expected_checksum)

    return actual


def verify_version(
    *,
    document_id: str,
    version_id: str,
    expected_checksum: Optional[str] = None,
) -> Dict[str, Any]:
    version = get_version(version_id, document_id=document_id)

    try:
        checksum = verify_snapshot(version, expected_checksum)
    except IntegrityMismatchError:
        current_app.logger.warning(
            f"Integrity check failed for version {version.version} of document {document_id}"
        )
        raise

    return {
        "version_id": version.id,
        "version": version.version,
        "checksum": checksum,
        "valid": True,
    }


def verify_document(*, document_id: str) -> List[Dict[str, Any]]:
    """Integrity report for every snapshot of a document; never raises on mismatch."""
    document = get_document(document_id)
    report = []

    for version in list_by_document(document):
        valid = version.verify_integrity()
        if not valid:
            current_app.logger.warning(
                f"Version {version.version} of document {document_id} fails its checksum"
            )

        report.append({
            "version_id": version.id,
            "version": version.version,
            "checksum": version.checksum,
            "valid": valid,
        })

    return report


def find_versions_by_checksum(checksum: str) -> List[DocumentVersion]:
    if not checksum or not checksum.strip():
        raise ValueError("A checksum is required")
    return find_by_checksum(checksum)
