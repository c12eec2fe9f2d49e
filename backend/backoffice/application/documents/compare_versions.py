# backoffice/application/documents/compare_versions.py
from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from backoffice.models.document_version import DocumentVersion
from backoffice.domain.exceptions import CrossDocumentComparisonError, VersionNotFoundError
from backoffice.domain.versioning import VersionNumber
from .version_store import get_version

DEFAULT_TRACKED_FIELDS = ("title", "content")
TRACKABLE_FIELDS = ("title", "content", "change_log", "checksum", "content_length", "file_size")
TEXT_FIELDS = {"title", "content", "change_log"}


@dataclass(frozen=True)
class FieldDiff:
    field: str
    old_value: Any
    new_value: Any
    changed: bool
    diff: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class VersionComparison:
    older: DocumentVersion
    newer: DocumentVersion
    field_diffs: Tuple[FieldDiff, ...]

    @property
    def changed_fields(self) -> List[str]:
        return [d.field for d in self.field_diffs if d.changed]


def chronological_key(version: DocumentVersion):
    """created_at, then version number, then insertion sequence."""
    return (
        version.created_at,
        version.version_number or VersionNumber(0, 0),
        version.sequence,
    )


def tracked_fields(extra: Optional[Iterable[str]] = None) -> Tuple[str, ...]:
    fields = list(DEFAULT_TRACKED_FIELDS)

    for name in extra or ():
        if name not in TRACKABLE_FIELDS:
            raise ValueError(f"Field '{name}' cannot be compared")
        if name not in fields:
            fields.append(name)

    return tuple(fields)


def _text_diff(older: DocumentVersion, newer: DocumentVersion, old: Any, new: Any) -> Tuple[str, ...]:
    return tuple(
        difflib.unified_diff(
            (old or "").splitlines(),
            (new or "").splitlines(),
            fromfile=f"v{older.version}",
            tofile=f"v{newer.version}",
            lineterm="",
        )
    )


def compare_versions(
    first: DocumentVersion,
    second: DocumentVersion,
    *,
    fields: Optional[Iterable[str]] = None,
) -> VersionComparison:
    """
    Field-level diff between two snapshots of the same document.

    The pair is ordered chronologically first, so the result does not
    depend on argument order.
    """
    if first.document_id != second.document_id:
        raise CrossDocumentComparisonError("Versions must belong to the same document")

    older, newer = sorted((first, second), key=chronological_key)

    diffs = []
    for name in tracked_fields(fields):
        old_value = getattr(older, name)
        new_value = getattr(newer, name)
        changed = old_value != new_value

        diffs.append(
            FieldDiff(
                field=name,
                old_value=old_value,
                new_value=new_value,
                changed=changed,
                diff=_text_diff(older, newer, old_value, new_value)
                if changed and name in TEXT_FIELDS else None,
            )
        )

    return VersionComparison(older=older, newer=newer, field_diffs=tuple(diffs))


def compare_version_ids(
    *,
    document_id: str,
    first_id: str,
    second_id: str,
    fields: Optional[Iterable[str]] = None,
) -> VersionComparison:
    first = get_version(first_id)
    second = get_version(second_id)

    comparison = compare_versions(first, second, fields=fields)

    if comparison.older.document_id != document_id:
        raise VersionNotFoundError(f"Versions not found for document {document_id}")

    return comparison
