"""Small text helpers shared across modules."""

from __future__ import annotations

import re
from pathlib import Path

SLUG_PATTERN = re.compile(r"[^a-z0-9\-]+")
WHITESPACE_PATTERN = re.compile(r"\s+")
INDEX_STEMS = {"index", "_index"}


def slugify(value: str) -> str:
    """Convert arbitrary text into a filesystem-safe slug."""
    text = value.strip().lower()
    text = WHITESPACE_PATTERN.sub("-", text)
    text = re.sub(r"_+", "-", text)
    text = SLUG_PATTERN.sub("-", text)
    text = re.sub(r"-{2,}", "-", text)
    return text.strip("-") or "item"


def title_from_slug(slug: str) -> str:
    """Generate a human-friendly title from a slug."""
    text = slug.replace("_", " ").replace("-", " ")
    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    if not text:
        return "Untitled"
    words = [word.capitalize() if not word.isupper() else word for word in text.split()]
    return " ".join(words)


def slug_from_path(path: str | Path) -> str:
    """Derive a slug from a document path.

    Documents stored as ``<slug>/index.md`` take their directory name.
    """
    source = Path(path)
    stem = source.stem
    if stem.lower() in INDEX_STEMS and source.parent.name:
        stem = source.parent.name
    return slugify(stem)


def normalize_alias(alias: str) -> str:
    """Canonical form used when comparing aliases across records."""
    return alias.strip().strip("/").casefold()
