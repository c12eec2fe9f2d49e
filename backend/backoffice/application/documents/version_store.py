# backoffice/application/documents/version_store.py
"""
Sole writer of DocumentVersion rows.

Functions here never commit. They are called inside a ``transactional()``
block owned by the use case, so the flip of the previous current snapshot
and the insert of the new one commit or roll back together.
"""
from datetime import datetime
from typing import List, Optional

from flask import current_app
from sqlalchemy import func, select

from backoffice.extensions import db
from backoffice.models.document import Document
from backoffice.models.document_version import DocumentVersion
from backoffice.domain.exceptions import (
    CurrentVersionProtectedError,
    NoCurrentVersionError,
    VersionNotFoundError,
)
from backoffice.domain.invariants.version import assert_version
from backoffice.domain.versioning import (
    Bump,
    VersionNumber,
    content_length,
    digest,
    next_version_number,
)


def _current_query(document_id: str):
    return select(DocumentVersion).where(
        DocumentVersion.document_id == document_id,
        DocumentVersion.is_current.is_(True),
    )


def _next_sequence(document_id: str) -> int:
    last = db.session.execute(
        select(func.max(DocumentVersion.sequence))
        .where(DocumentVersion.document_id == document_id)
    ).scalar()
    return (last or 0) + 1


def current_of(document: Document) -> DocumentVersion:
    version = db.session.execute(_current_query(document.id)).scalar_one_or_none()

    if version is None:
        raise NoCurrentVersionError(f"Document {document.id} has never been saved")

    return version


def create_snapshot(
    *,
    document: Document,
    title: str,
    content: Optional[str],
    change_log: Optional[str],
    bump: Optional[Bump],
    actor_id: Optional[str],
) -> DocumentVersion:
    """
    Append a new current snapshot to ``document``.

    1. Re-read the current snapshot under a row lock
    2. Derive the next number from that locked read (1.0 when none exists)
    3. Flip the previous snapshot off
    4. Insert the new snapshot as current and repoint the document
    """
    previous = db.session.execute(
        _current_query(document.id).with_for_update()
    ).scalar_one_or_none()

    if previous is None:
        number = VersionNumber.initial()
    else:
        if bump in (None, Bump.NONE):
            raise ValueError("A minor or major bump is required to append a version")
        number = next_version_number(previous.version, bump)

    sequence = _next_sequence(document.id)

    if previous is not None:
        previous.is_current = False
        # Flush the flip first so the partial unique index never sees two rows
        db.session.flush()

    version = DocumentVersion()
    version.document_id = document.id
    version.sequence = sequence
    version.version = str(number)
    version.title = title
    version.content = content
    version.change_log = change_log
    version.is_current = True
    version.checksum = digest(content)
    version.content_length = content_length(content)
    version.file_size = content_length(content)
    version.created_by = actor_id

    assert_version(version, document)

    db.session.add(version)
    db.session.flush()

    # Denormalized mirror of the current snapshot
    document.current_version = version
    document.title = version.title
    document.content = version.content
    document.updated_by = actor_id

    current_app.logger.debug(
        f"Snapshot {version.version} created for document {document.id} "
        f"(previous: {previous.version if previous else 'none'})"
    )

    return version


def list_by_document(document: Document) -> List[DocumentVersion]:
    return list(
        db.session.execute(
            select(DocumentVersion)
            .where(DocumentVersion.document_id == document.id)
            .order_by(DocumentVersion.created_at.asc(), DocumentVersion.sequence.asc())
        ).scalars()
    )


def get_version(version_id: str, *, document_id: Optional[str] = None) -> DocumentVersion:
    version = db.session.get(DocumentVersion, version_id)

    if version is None or (document_id is not None and version.document_id != document_id):
        raise VersionNotFoundError(f"Version {version_id} not found")

    return version


def find_by_checksum(checksum: str) -> List[DocumentVersion]:
    return list(
        db.session.execute(
            select(DocumentVersion)
            .where(DocumentVersion.checksum == checksum.strip().lower())
            .order_by(DocumentVersion.created_at.asc())
        ).scalars()
    )


def delete_version(version: DocumentVersion) -> None:
    """Permanently remove a non-current snapshot. Siblings are untouched."""
    db.session.refresh(version, with_for_update=True)

    if version.is_current:
        raise CurrentVersionProtectedError(
            f"Version {version.version} is the current version and cannot be deleted"
        )

    db.session.delete(version)
    db.session.flush()


def find_recent(limit: int = 20) -> List[DocumentVersion]:
    """Newest snapshots across all documents."""
    return list(
        db.session.execute(
            select(DocumentVersion)
            .order_by(DocumentVersion.created_at.desc(), DocumentVersion.sequence.desc())
            .limit(limit)
        ).scalars()
    )


def find_by_creator(actor_id: str) -> List[DocumentVersion]:
    return list(
        db.session.execute(
            select(DocumentVersion)
            .where(DocumentVersion.created_by == actor_id)
            .order_by(DocumentVersion.created_at.desc())
        ).scalars()
    )


def find_by_date_range(start: datetime, end: datetime) -> List[DocumentVersion]:
    """Snapshots created between ``start`` and ``end``, both inclusive, newest first."""
    return list(
        db.session.execute(
            select(DocumentVersion)
            .where(DocumentVersion.created_at.between(start, end))
            .order_by(DocumentVersion.created_at.desc())
        ).scalars()
    )
