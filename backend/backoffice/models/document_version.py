# backoffice/models/document_version.py
from sqlalchemy import event, inspect

from backoffice.extensions import db
from backoffice.domain.versioning import VersionNumber, digest
from .base import BaseModel


class DocumentVersion(BaseModel):
    """
    Immutable snapshot of a document's content at one version number.

    Only ``is_current`` may change after insert, and only from True to False.
    """
    __tablename__ = "document_versions"

    document_id = db.Column(
        db.String(36),
        db.ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Insertion order within the document; tie-breaker for created_at
    sequence = db.Column(db.Integer, nullable=False)
    version = db.Column(db.String(50), nullable=False)

    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=True)
    change_log = db.Column(db.Text, nullable=True)

    is_current = db.Column(db.Boolean, nullable=False, default=False)

    checksum = db.Column(db.String(64), nullable=True, index=True)
    content_length = db.Column(db.Integer, nullable=False, default=0)
    file_size = db.Column(db.BigInteger, nullable=True)

    created_by = db.Column(db.String(36), nullable=True)

    document = db.relationship(
        "Document",
        back_populates="versions",
        foreign_keys=[document_id],
    )

    __table_args__ = (
        db.UniqueConstraint("document_id", "sequence", name="uq_document_version_sequence"),
        db.Index("idx_document_version_document", "document_id", "created_at"),
        db.Index(
            "uq_document_versions_current",
            "document_id",
            unique=True,
            sqlite_where=db.text("is_current = 1"),
            postgresql_where=db.text("is_current"),
        ),
    )

    @property
    def version_number(self):
        return VersionNumber.parse_or_none(self.version)

    @property
    def created_by_name(self):
        return self.created_by or "System"

    def verify_integrity(self) -> bool:
        return bool(self.checksum) and self.checksum == digest(self.content)

    def __repr__(self):
        return f"<DocumentVersion {self.document_id} v{self.version} current={self.is_current}>"


MUTABLE_VERSION_FIELDS = {"is_current", "updated_at"}


@event.listens_for(DocumentVersion, "before_update")
def prevent_version_mutation(mapper, connection, target):
    state = inspect(target)

    for attr in mapper.column_attrs:
        history = state.attrs[attr.key].history
        if not history.has_changes():
            continue

        if attr.key not in MUTABLE_VERSION_FIELDS:
            raise RuntimeError(
                f"Document versions are immutable (attempted change to {attr.key})"
            )

        if attr.key == "is_current" and list(history.added) != [False]:
            raise RuntimeError("A document version can never become current again")
