"""Pydantic models describing the derived collection index."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from ..utils import normalize_alias


def utc_now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


class IndexEntry(BaseModel):
    """Slim record representation for renderer consumption."""

    slug: str = Field(...)
    title: str = Field(...)
    author: str = Field(...)
    date: dt.date = Field(...)
    description: Optional[str] = Field(default=None)
    excerpt: Optional[str] = Field(default=None)
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    series: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    image: Optional[str] = Field(default=None)
    source_path: Optional[str] = Field(default=None)
    word_count: int = Field(default=0, ge=0)
    reading_time_minutes: int = Field(default=0, ge=0)
    code_languages: list[str] = Field(default_factory=list)


class CollectionIndex(BaseModel):
    """Disposable lookup tables rebuilt from the records on every run."""

    total_items: int = Field(ge=0)
    entries: list[IndexEntry] = Field(default_factory=list)
    tags: dict[str, list[str]] = Field(default_factory=dict)
    categories: dict[str, list[str]] = Field(default_factory=dict)
    series: dict[str, list[str]] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(default_factory=dict)
    archive: dict[str, list[str]] = Field(default_factory=dict)
    generated_at: dt.datetime = Field(default_factory=utc_now)

    def resolve(self, path: str) -> Optional[str]:
        """Return the slug an alias or slug resolves to."""
        key = normalize_alias(path)
        if key in self.aliases:
            return self.aliases[key]
        for entry in self.entries:
            if entry.slug.casefold() == key:
                return entry.slug
        return None
