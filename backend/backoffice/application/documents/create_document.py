from typing import Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from backoffice.extensions import db
from backoffice.models.document import Document
from backoffice.domain.exceptions import SlugConflictError
from backoffice.domain.invariants.document import assert_document, assert_slug, assert_title
from backoffice.domain.lifecycle.document import DRAFT
from backoffice.utils.audit import log_action
from backoffice.utils.slug import unique_slug
from backoffice.utils.transaction import transactional
from .loading import slug_taken
from .version_store import create_snapshot

INITIAL_CHANGE_LOG = "Initial version"


def resolve_slug(title: str, slug: Optional[str] = None) -> str:
    """Validate an explicit slug, or derive a free one from the title."""
    if slug:
        assert_slug(slug)
        if slug_taken(slug):
            raise SlugConflictError(f"A document with slug '{slug}' already exists")
        return slug

    return unique_slug(title, slug_taken)


def build_document(
    *,
    title: str,
    content: Optional[str],
    actor_id: Optional[str],
    description: Optional[str] = None,
    slug: Optional[str] = None,
    change_log: str = INITIAL_CHANGE_LOG,
) -> Document:
    """
    Stage a draft document and its 1.0 snapshot in the open transaction.
    """
    assert_title(title)

    document = Document()
    document.title = title
    document.content = content
    document.description = description
    document.slug = resolve_slug(title, slug)
    document.status = DRAFT
    document.created_by = actor_id
    document.updated_by = actor_id

    # 🔒 Domain invariants (single source of truth)
    assert_document(document)

    db.session.add(document)
    db.session.flush()  # ensures document.id is available

    create_snapshot(
        document=document,
        title=title,
        content=content,
        change_log=change_log,
        bump=None,
        actor_id=actor_id,
    )

    return document


def create_document(
    *,
    title: str,
    content: Optional[str],
    actor_id: Optional[str],
    description: Optional[str] = None,
    slug: Optional[str] = None,
) -> Document:
    """
    Create a new document in DRAFT state with its initial 1.0 version.

    Edge cases handled:
    - Missing or malformed title / slug
    - Duplicate slug (explicit, or raced on insert)
    """
    try:
        with transactional():
            document = build_document(
                title=title,
                content=content,
                actor_id=actor_id,
                description=description,
                slug=slug,
            )

            log_action(
                action="document.create",
                entity_type="document",
                entity_id=document.id,
                actor_id=actor_id,
                payload={
                    "title": document.title,
                    "slug": document.slug,
                    "status": document.status,
                    "version": document.version,
                },
            )

    except IntegrityError as exc:
        # Unique slug constraint lost a race with a concurrent insert
        db.session.rollback()
        raise SlugConflictError("A document with this slug already exists") from exc

    current_app.logger.info(f"Document {document.id} created as '{document.slug}' by {actor_id}")
    return document
