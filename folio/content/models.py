"""Typed representation of a front-matter content record."""

from __future__ import annotations

import re
import datetime as dt
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..markdown import CodeSample, extract_code_samples

ISO_DATE_PATTERN = re.compile(
    r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[Tt ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:[Zz]|[+-]\d{2}:?\d{2})?)?\s*$"
)

RECOGNIZED_KEYS: tuple[str, ...] = (
    "author",
    "title",
    "date",
    "description",
    "tags",
    "categories",
    "series",
    "aliases",
    "image",
)
REQUIRED_KEYS: tuple[str, ...] = ("author", "title", "date")
SEQUENCE_KEYS: tuple[str, ...] = ("tags", "categories", "series", "aliases")


def parse_calendar_date(value: Any) -> dt.date:
    """Coerce a YAML scalar into a calendar date.

    Accepts ``date`` and ``datetime`` objects (the time part is dropped) and
    ISO-like strings such as ``2025-02-17`` or ``2025-02-17T09:30:00+08:00``.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        match = ISO_DATE_PATTERN.match(value)
        if match is None:
            raise ValueError(f"'{value}' is not an ISO date (expected YYYY-MM-DD)")
        year, month, day = (int(part) for part in match.groups())
        try:
            return dt.date(year, month, day)
        except ValueError as exc:
            raise ValueError(f"'{value.strip()}' is not a valid calendar date: {exc}") from None
    raise ValueError(f"Unsupported date value of type {type(value).__name__}")


class ContentRecord(BaseModel):
    """One blog post: front-matter metadata plus the untouched Markdown body."""

    author: str = Field(description="Post author.")
    title: str = Field(description="Human-readable title.")
    date: dt.date = Field(description="Publication date; drives archive ordering.")
    description: Optional[str] = Field(default=None, description="Short summary.")
    tags: list[str] = Field(default_factory=list, description="Free-form tags.")
    categories: list[str] = Field(default_factory=list, description="Grouping labels.")
    series: list[str] = Field(default_factory=list, description="Series this post belongs to.")
    aliases: list[str] = Field(
        default_factory=list, description="Alternate URL slugs resolving to this post."
    )
    image: Optional[str] = Field(
        default=None, description="Cover image path relative to the document directory."
    )
    extra: dict[str, Any] = Field(
        default_factory=dict, description="Unrecognized front-matter keys, passed through."
    )
    body: str = Field(default="", description="Raw Markdown body.")
    source_path: Optional[str] = Field(default=None, description="Path to the source file.")
    slug: Optional[str] = Field(default=None, description="Primary identifier.")

    @field_validator("author", "title")
    def _require_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("value cannot be empty")
        return cleaned

    @field_validator("date", mode="before")
    def _coerce_date(cls, value: Any) -> dt.date:
        return parse_calendar_date(value)

    @field_validator("tags", "categories", "series", "aliases", mode="before")
    def _coerce_sequence(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError("expected a list of strings")
        return [item.strip() if isinstance(item, str) else item for item in value]

    @field_validator("description", "image")
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @property
    def identity(self) -> str:
        """Stable identifier used in diagnostics."""
        return self.source_path or self.slug or self.title

    @property
    def directory(self) -> Path | None:
        if self.source_path is None:
            return None
        return Path(self.source_path).parent

    @property
    def code_samples(self) -> list[CodeSample]:
        return extract_code_samples(self.body)

    def has_tag(self, tag: str) -> bool:
        wanted = tag.strip().casefold()
        return any(existing.casefold() == wanted for existing in self.tags)

    def metadata(self) -> dict[str, Any]:
        """Return the front-matter mapping: recognized keys first, then extras."""
        data: dict[str, Any] = {}
        for key in RECOGNIZED_KEYS:
            value = getattr(self, key)
            if value is None or (key in SEQUENCE_KEYS and not value):
                continue
            data[key] = list(value) if key in SEQUENCE_KEYS else value
        for key, value in self.extra.items():
            if key not in data:
                data[key] = value
        return data
