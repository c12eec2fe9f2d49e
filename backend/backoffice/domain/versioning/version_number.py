# backoffice/domain/versioning/version_number.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)$")


class Bump(str, Enum):
    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"


@dataclass(frozen=True, order=True)
class VersionNumber:
    """
    ``major.minor`` identifier of a document snapshot.

    Ordering is lexicographic on (major, minor), so ``1.10 > 1.9``.
    """
    major: int
    minor: int

    @classmethod
    def initial(cls) -> "VersionNumber":
        return cls(1, 0)

    @classmethod
    def parse(cls, raw: str) -> "VersionNumber":
        match = VERSION_PATTERN.match(raw or "")
        if not match:
            raise ValueError(f"Invalid version number: {raw!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def parse_or_none(cls, raw: Optional[str]) -> Optional["VersionNumber"]:
        try:
            return cls.parse(raw or "")
        except ValueError:
            return None

    def next(self, bump: Bump) -> "VersionNumber":
        if bump == Bump.MAJOR:
            return VersionNumber(self.major + 1, 0)
        if bump == Bump.MINOR:
            return VersionNumber(self.major, self.minor + 1)
        raise ValueError(f"Bump {bump!r} does not produce a version number")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def next_version_number(current: Optional[str], bump: Bump) -> VersionNumber:
    """
    Version that follows the persisted ``current`` string.

    No current version yields 1.0. A persisted value that does not match
    ``major.minor`` is corrupt state: it is logged and numbering restarts
    at 1.0.
    """
    if current is None:
        return VersionNumber.initial()

    parsed = VersionNumber.parse_or_none(current)
    if parsed is None:
        logger.warning(
            f"Corrupt version number {current!r} on current snapshot; "
            "next version defaults to 1.0"
        )
        return VersionNumber.initial()

    return parsed.next(bump)
