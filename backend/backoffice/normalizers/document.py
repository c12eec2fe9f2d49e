from .version import normalize_version


def normalize_document(document, admin=False, stats=None):
    data = {
        "id": document.id,
        "title": document.title,
        "slug": document.slug,
        "description": document.description,
        "content": document.content,
        "status": document.status,
        "published_at": document.published_at.isoformat() if document.published_at else None,
        "version": document.version,
    }

    if admin:
        data["current_version"] = (
            normalize_version(document.current_version)
            if document.current_version else None
        )
        data["created_by"] = document.created_by
        data["updated_by"] = document.updated_by
        data["created_at"] = document.created_at.isoformat() if document.created_at else None
        data["updated_at"] = document.updated_at.isoformat() if document.updated_at else None

    if stats is not None:
        data["stats"] = stats

    return data
