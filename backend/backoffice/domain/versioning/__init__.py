from .version_number import Bump, VersionNumber, next_version_number
from .integrity import content_length, digest, verify

__all__ = [
    "Bump",
    "VersionNumber",
    "next_version_number",
    "content_length",
    "digest",
    "verify",
]
