import re
from typing import Callable
from werkzeug.utils import secure_filename

MAX_SLUG_ATTEMPTS = 1000


def slugify(text: str) -> str:
    """
    ASCII-folded, lower-case, hyphenated form of ``text``.

    Built on werkzeug's secure_filename, which already strips accents and
    anything outside [A-Za-z0-9_.-].
    """
    cleaned = secure_filename(text or "")
    cleaned = re.sub(r"[_.\s]+", "-", cleaned.lower())
    cleaned = re.sub(r"-{2,}", "-", cleaned)
    return cleaned.strip("-")


def unique_slug(title: str, exists: Callable[[str], bool], fallback: str = "document") -> str:
    """
    First free slug among ``base``, ``base-1``, ``base-2``, ...

    ``exists`` is queried for each candidate. Gives up after
    MAX_SLUG_ATTEMPTS and returns the last candidate.
    """
    base = slugify(title)
    if len(base) < 3:
        base = f"{base}-{fallback}".strip("-")

    slug = base
    counter = 1

    while exists(slug):
        slug = f"{base}-{counter}"
        counter += 1

        if counter > MAX_SLUG_ATTEMPTS:
            break

    return slug
