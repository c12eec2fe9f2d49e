from typing import NamedTuple, Optional, Union
from flask import current_app
from backoffice.models.document import Document
from backoffice.models.document_version import DocumentVersion
from backoffice.domain.exceptions import MissingChangeLogError, UnversionedEditError
from backoffice.domain.invariants.document import assert_document, assert_title
from backoffice.domain.versioning import Bump, digest
from backoffice.utils.audit import log_action
from backoffice.utils.transaction import transactional
from .loading import lock_document
from .version_store import create_snapshot, current_of


class DocumentUpdate(NamedTuple):
    document: Document
    version: Optional[DocumentVersion]  # None for unversioned edits
    created: bool = False  # a new snapshot was appended


def update_document(
    *,
    document_id: str,
    actor_id: Optional[str],
    title: Optional[str] = None,
    content: Optional[str] = None,
    description: Optional[str] = None,
    bump: Union[Bump, str] = Bump.MINOR,
    change_log: Optional[str] = None,
) -> DocumentUpdate:
    """
    Edit a document's title/content, appending a snapshot unless bump is none.

    Design rules:
    - Versioned edits require a non-empty change log
    - bump=none only rewrites the denormalized fields on the document and
      leaves no snapshot behind; it is audited separately and can be
      disabled with ALLOW_UNVERSIONED_EDITS
    - With SKIP_UNCHANGED_VERSIONS, an edit identical to the current
      snapshot appends nothing and returns that snapshot
    """
    bump = Bump(bump)
    change_log = change_log.strip() if change_log else None

    if bump != Bump.NONE and not change_log:
        raise MissingChangeLogError("A change log message is required to create a new version")

    if bump == Bump.NONE and not current_app.config.get("ALLOW_UNVERSIONED_EDITS", True):
        raise UnversionedEditError("Edits without a version bump are disabled")

    if title is not None:
        assert_title(title)

    version: Optional[DocumentVersion] = None
    created = False

    with transactional():
        document = lock_document(document_id)

        new_title = title if title is not None else document.title
        new_content = content if content is not None else document.content

        if bump == Bump.NONE:
            if description is not None:
                document.description = description
            document.title = new_title
            document.content = new_content
            document.updated_by = actor_id
            assert_document(document)

            current_app.logger.warning(
                f"Document {document.id} edited without a version bump; "
                "the change has no snapshot"
            )
            log_action(
                action="document.update_unversioned",
                entity_type="document",
                entity_id=document.id,
                actor_id=actor_id,
                payload={"title": new_title},
            )

        else:
            current = current_of(document)
            unchanged = (
                current.title == new_title
                and current.checksum == digest(new_content)
            )

            if unchanged and current_app.config.get("SKIP_UNCHANGED_VERSIONS", False):
                version = current
                current_app.logger.info(
                    f"Document {document.id} unchanged since {current.version}; no version created"
                )

                if description is not None and description != document.description:
                    document.description = description
                    document.updated_by = actor_id
                    log_action(
                        action="document.update",
                        entity_type="document",
                        entity_id=document.id,
                        actor_id=actor_id,
                        payload={
                            "from_version": current.version,
                            "to_version": current.version,
                            "description_only": True,
                        },
                    )
            else:
                if description is not None:
                    document.description = description

                version = create_snapshot(
                    document=document,
                    title=new_title,
                    content=new_content,
                    change_log=change_log,
                    bump=bump,
                    actor_id=actor_id,
                )
                created = True
                assert_document(document)

                log_action(
                    action="document.update",
                    entity_type="document",
                    entity_id=document.id,
                    actor_id=actor_id,
                    payload={
                        "from_version": current.version,
                        "to_version": version.version,
                        "bump": bump.value,
                        "change_log": change_log,
                    },
                )

    if created:
        current_app.logger.info(f"Document {document_id} updated to version {version.version} by {actor_id}")

    return DocumentUpdate(document, version, created)
