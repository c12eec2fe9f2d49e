from backoffice.extensions import db
from .base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(500), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    content = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(50), nullable=False, default="draft", index=True)
    published_at = db.Column(db.DateTime, nullable=True)

    # Pointer to the single current snapshot; the snapshot row is the
    # source of truth, title/content/description above mirror it for reads.
    current_version_id = db.Column(
        db.String(36),
        db.ForeignKey(
            "document_versions.id",
            use_alter=True,
            name="fk_documents_current_version",
        ),
        nullable=True,
    )

    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    versions = db.relationship(
        "DocumentVersion",
        back_populates="document",
        foreign_keys="DocumentVersion.document_id",
        order_by="DocumentVersion.sequence",
        cascade="all, delete-orphan",
    )

    current_version = db.relationship(
        "DocumentVersion",
        foreign_keys=[current_version_id],
        post_update=True,
    )

    @property
    def version(self):
        return self.current_version.version if self.current_version else None

    def __repr__(self):
        return f"<Document {self.slug} status={self.status}>"
