"""Utilities for scaffolding new Folio documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import yaml

from .config import Config
from .utils import slugify, title_from_slug

DOCUMENT_FILENAME = "index.md"


class ScaffoldError(RuntimeError):
    """Raised when scaffolding cannot continue."""


@dataclass(slots=True)
class ScaffoldResult:
    """Details about filesystem writes performed during scaffolding."""

    created: list[Path] = field(default_factory=list)
    updated: list[Path] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def record(self, path: Path, existed: bool) -> None:
        if existed:
            self.updated.append(path)
        else:
            self.created.append(path)


def normalize_slug(raw: str) -> str:
    """Convert arbitrary user input into a filesystem-safe slug."""
    slug = slugify(raw)
    if not slug or slug == "item":
        raise ScaffoldError("Unable to derive a valid slug. Provide letters, numbers, or hyphens.")
    return slug


def scaffold_record(
    config: Config,
    slug: str,
    *,
    title: str | None = None,
    author: str | None = None,
    today: date | None = None,
    force: bool = False,
) -> ScaffoldResult:
    """Create ``<content_dir>/<slug>/index.md`` with a starter front-matter block."""
    slug = normalize_slug(slug)
    title = title.strip() if title else ""
    if not title:
        title = title_from_slug(slug)
    author = (author or config.default_author or "").strip()
    if not author:
        raise ScaffoldError("An author is required. Pass --author or set default_author in folio.yml.")

    document_dir = config.content_dir / slug
    document_path = document_dir / DOCUMENT_FILENAME
    text = render_starter_document(title=title, author=author, published=today or date.today())
    existed = _write_text(document_path, text, force=force)

    result = ScaffoldResult()
    result.record(document_path, existed)
    result.notes.append(
        f"Place the cover image and other assets in {document_dir.as_posix()} "
        "and reference them by file name (e.g. 'image: cover.png')."
    )
    return result


def render_starter_document(*, title: str, author: str, published: date) -> str:
    front_matter = yaml.safe_dump(
        {
            "author": author,
            "title": title,
            "date": published,
            "description": "",
            "tags": [],
            "categories": [],
        },
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{front_matter}---\nMarkdown body starts here.\n"


def _write_text(path: Path, content: str, *, force: bool) -> bool:
    path.parent.mkdir(parents=True, exist_ok=True)
    existed = path.exists()
    if existed and not force:
        raise ScaffoldError(f"Path already exists: {path}")
    path.write_text(content, encoding="utf-8")
    return existed
