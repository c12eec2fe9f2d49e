# backoffice/application/documents/facade.py
"""
Entry point for presentation-layer callers.

Each state-changing method runs in its own transaction and returns fresh
ORM objects; every error from backoffice.domain.exceptions propagates
unchanged. Authorization is assumed to have happened before any call.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from backoffice.models.document import Document
from backoffice.models.document_version import DocumentVersion
from backoffice.domain.versioning import Bump
from . import version_store
from .compare_versions import VersionComparison, compare_version_ids, compare_versions
from .create_document import create_document
from .delete_document import delete_document
from .delete_version import delete_version
from .duplicate_document import duplicate_document
from .export_versions import export_document_history, version_stats
from .rollback_document import rollback_document
from .transition_document import (
    archive_document,
    publish_document,
    submit_document_for_review,
)
from .update_document import DocumentUpdate, update_document
from .verify_versions import find_versions_by_checksum, verify_document, verify_version


class DocumentLifecycleFacade:

    def create(
        self,
        title: str,
        content: Optional[str],
        actor_id: Optional[str],
        *,
        description: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> Document:
        return create_document(
            title=title,
            content=content,
            actor_id=actor_id,
            description=description,
            slug=slug,
        )

    def update(
        self,
        document: Document,
        title: Optional[str],
        content: Optional[str],
        bump: Union[Bump, str],
        change_log: Optional[str],
        actor_id: Optional[str],
        *,
        description: Optional[str] = None,
    ) -> DocumentUpdate:
        return update_document(
            document_id=document.id,
            title=title,
            content=content,
            description=description,
            bump=bump,
            change_log=change_log,
            actor_id=actor_id,
        )

    def submit_for_review(self, document: Document, actor_id: Optional[str]) -> Document:
        return submit_document_for_review(document_id=document.id, actor_id=actor_id)

    def publish(self, document: Document, actor_id: Optional[str]) -> Document:
        return publish_document(document_id=document.id, actor_id=actor_id)

    def archive(self, document: Document, actor_id: Optional[str]) -> Document:
        return archive_document(document_id=document.id, actor_id=actor_id)

    def duplicate(self, document: Document, actor_id: Optional[str]) -> Document:
        return duplicate_document(document_id=document.id, actor_id=actor_id)

    def delete(self, document: Document, actor_id: Optional[str]) -> None:
        delete_document(document_id=document.id, actor_id=actor_id)

    def delete_version(self, version: DocumentVersion, actor_id: Optional[str] = None) -> None:
        delete_version(
            document_id=version.document_id,
            version_id=version.id,
            actor_id=actor_id,
        )

    def rollback(
        self,
        document: Document,
        target: DocumentVersion,
        actor_id: Optional[str],
    ) -> DocumentVersion:
        return rollback_document(
            document_id=document.id,
            version_id=target.id,
            actor_id=actor_id,
        )

    # Read side

    def current_version(self, document: Document) -> DocumentVersion:
        return version_store.current_of(document)

    def list_versions(self, document: Document) -> List[DocumentVersion]:
        return version_store.list_by_document(document)

    def get_version(self, document: Document, version_id: str) -> DocumentVersion:
        return version_store.get_version(version_id, document_id=document.id)

    def compare(
        self,
        first: DocumentVersion,
        second: DocumentVersion,
        fields: Optional[Iterable[str]] = None,
    ) -> VersionComparison:
        return compare_versions(first, second, fields=fields)

    def compare_ids(
        self,
        document: Document,
        first_id: str,
        second_id: str,
        fields: Optional[Iterable[str]] = None,
    ) -> VersionComparison:
        return compare_version_ids(
            document_id=document.id,
            first_id=first_id,
            second_id=second_id,
            fields=fields,
        )

    def export(self, document: Document, actor_id: Optional[str]) -> Dict[str, Any]:
        return export_document_history(document_id=document.id, actor_id=actor_id)

    def stats(self, document: Document) -> Dict[str, Any]:
        return version_stats(document)

    def verify_version(
        self,
        version: DocumentVersion,
        expected_checksum: Optional[str] = None,
    ) -> Dict[str, Any]:
        return verify_version(
            document_id=version.document_id,
            version_id=version.id,
            expected_checksum=expected_checksum,
        )

    def verify_document(self, document: Document) -> List[Dict[str, Any]]:
        return verify_document(document_id=document.id)

    def find_by_checksum(self, checksum: str) -> List[DocumentVersion]:
        return find_versions_by_checksum(checksum)

    def recent_versions(self, limit: int = 20) -> List[DocumentVersion]:
        return version_store.find_recent(limit)

    def versions_by_creator(self, actor_id: str) -> List[DocumentVersion]:
        return version_store.find_by_creator(actor_id)

    def versions_between(self, start: datetime, end: datetime) -> List[DocumentVersion]:
        if start > end:
            raise ValueError("Range start must not be after its end")
        return version_store.find_by_date_range(start, end)


documents = DocumentLifecycleFacade()
