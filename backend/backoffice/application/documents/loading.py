# backoffice/application/documents/loading.py
from sqlalchemy import select

from backoffice.extensions import db
from backoffice.models.document import Document
from backoffice.domain.exceptions import DocumentNotFoundError


def get_document(document_id: str) -> Document:
    document = db.session.get(Document, document_id)
    if not document:
        raise DocumentNotFoundError(f"Document {document_id} not found")
    return document


def lock_document(document_id: str) -> Document:
    """Fetch a document with a row-level lock held until commit."""
    document = (
        db.session.execute(
            select(Document)
            .where(Document.id == document_id)
            .with_for_update()
        )
        .scalar_one_or_none()
    )

    if not document:
        raise DocumentNotFoundError(f"Document {document_id} not found")

    return document


def slug_taken(slug: str) -> bool:
    return db.session.execute(
        select(Document.id).where(Document.slug == slug)
    ).first() is not None
