"""
Caller-facing errors raised by the document engine.

Every error is recoverable: the facade surfaces it unchanged and the HTTP
layer (app.errors) turns it into a JSON response using ``status_code`` and
``to_dict()``.
"""
from typing import Any, Dict, Optional


class DocumentLifecycleError(Exception):
    status_code = 400

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": str(self),
        }


class InvariantViolation(DocumentLifecycleError):
    """A document record failed validation (title, slug, status)."""


class DocumentNotFoundError(DocumentLifecycleError):
    status_code = 404


class VersionNotFoundError(DocumentLifecycleError):
    status_code = 404


class MissingChangeLogError(DocumentLifecycleError):
    status_code = 422


class UnversionedEditError(DocumentLifecycleError):
    status_code = 422


class SlugConflictError(DocumentLifecycleError):
    status_code = 409


class InvalidTransitionError(DocumentLifecycleError):
    status_code = 409

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Illegal document transition: {from_status} → {to_status}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["from"] = self.from_status
        data["to"] = self.to_status
        return data


class CurrentVersionProtectedError(DocumentLifecycleError):
    status_code = 409


class NoCurrentVersionError(DocumentLifecycleError):
    status_code = 409


class CrossDocumentComparisonError(DocumentLifecycleError):
    pass


class VersionOwnershipError(DocumentLifecycleError):
    pass


class IntegrityMismatchError(DocumentLifecycleError):
    status_code = 422

    def __init__(self, expected: Optional[str], actual: str, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Checksum mismatch: expected {expected}, got {actual}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["expected"] = self.expected
        data["actual"] = self.actual
        return data
