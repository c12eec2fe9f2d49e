# backoffice/normalizers/version.py
from typing import Any, Dict

EXPORT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def normalize_version(version, include_content=False):
    data = {
        "id": version.id,
        "document_id": version.document_id,
        "version": version.version,
        "title": version.title,
        "change_log": version.change_log,
        "is_current": version.is_current,
        "checksum": version.checksum,
        "content_length": version.content_length,
        "file_size": version.file_size,
        "created_at": version.created_at.isoformat() if version.created_at else None,
        "created_by": version.created_by,
    }

    if include_content:
        data["content"] = version.content

    return data


def normalize_version_export(version) -> Dict[str, Any]:
    """
    One entry of the version-history export.

    Key names and the timestamp format are a download contract; do not
    rename them.
    """
    return {
        "id": version.id,
        "version": version.version,
        "title": version.title,
        "content_length": version.content_length,
        "change_log": version.change_log,
        "is_current": version.is_current,
        "file_size": version.file_size,
        "checksum": version.checksum,
        "created_at": version.created_at.strftime(EXPORT_TIMESTAMP_FORMAT),
        "created_by": version.created_by_name,
    }


def normalize_comparison(comparison) -> Dict[str, Any]:
    return {
        "older": normalize_version(comparison.older),
        "newer": normalize_version(comparison.newer),
        "field_diffs": [
            {
                "field": d.field,
                "old_value": d.old_value,
                "new_value": d.new_value,
                "changed": d.changed,
                "diff": list(d.diff) if d.diff is not None else None,
            }
            for d in comparison.field_diffs
        ],
    }
