# backoffice/domain/versioning/integrity.py
import hashlib
import hmac
from typing import Optional, Union

from backoffice.domain.exceptions import IntegrityMismatchError

DIGEST_ALGORITHM = "sha256"

Content = Union[str, bytes, None]


def _as_bytes(content: Content) -> bytes:
    if content is None:
        return b""
    if isinstance(content, bytes):
        return content
    return content.encode("utf-8")


def digest(content: Content) -> str:
    """SHA-256 hex digest over the exact UTF-8 bytes of ``content``."""
    return hashlib.new(DIGEST_ALGORITHM, _as_bytes(content)).hexdigest()


def content_length(content: Content) -> int:
    """Byte length of ``content`` once encoded."""
    return len(_as_bytes(content))


def verify(content: Content, expected: Optional[str]) -> str:
    """
    Recompute the digest of ``content`` and compare it with ``expected``.

    Returns the recomputed digest; raises IntegrityMismatchError on mismatch
    or when no checksum was recorded.
    """
    actual = digest(content)

    if not expected:
        raise IntegrityMismatchError(expected, actual, "No checksum recorded for content")

    # Compared as bytes; caller-supplied checksums may be non-ASCII
    if not hmac.compare_digest(actual.encode("ascii"), expected.strip().lower().encode("utf-8")):
        raise IntegrityMismatchError(expected, actual)

    return actual
