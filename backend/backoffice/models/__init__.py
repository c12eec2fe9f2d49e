from .document import Document
from .document_version import DocumentVersion
from .audit_log import AuditLog

__all__ = ["Document", "DocumentVersion", "AuditLog"]
