"""Markdown body inspection helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from math import ceil

from markdown_it import MarkdownIt
from markdown_it.token import Token

WORDS_PER_MINUTE = 200


@dataclass(slots=True, frozen=True)
class CodeSample:
    """A fenced code block embedded in a post body."""

    language: str | None
    code: str
    line: int


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    """Configure and cache a CommonMark-compliant parser."""
    md = MarkdownIt("commonmark", {"html": True})
    md.enable("table").enable("strikethrough")
    return md


def extract_code_samples(body: str) -> list[CodeSample]:
    """Return every fenced code block in document order."""
    if not body.strip():
        return []
    samples: list[CodeSample] = []
    for token in _parser().parse(body):
        if token.type != "fence":
            continue
        info = token.info.strip()
        language = info.split(maxsplit=1)[0] if info else None
        line = token.map[0] + 1 if token.map else 0
        samples.append(CodeSample(language=language, code=token.content, line=line))
    return samples


def plain_text(body: str) -> str:
    """Strip Markdown syntax and code blocks, leaving prose."""
    if not body.strip():
        return ""
    parts: list[str] = []
    for token in _parser().parse(body):
        if token.type != "inline":
            continue
        text = "".join(_inline_text(child) for child in token.children or [])
        text = re.sub(r"\s+", " ", text).strip()
        if text:
            parts.append(text)
    return " ".join(parts)


def _inline_text(token: Token) -> str:
    if token.type in {"text", "code_inline"}:
        return token.content
    if token.type in {"softbreak", "hardbreak"}:
        return " "
    return ""


def word_count(body: str) -> int:
    text = plain_text(body)
    return len(text.split()) if text else 0


def reading_time_minutes(words: int) -> int:
    if words == 0:
        return 0
    return max(1, ceil(words / WORDS_PER_MINUTE))


def excerpt(body: str, limit: int = 240) -> str | None:
    text = plain_text(body)
    if not text:
        return None
    if len(text) <= limit:
        return text
    truncated = text[:limit].rsplit(" ", 1)[0]
    return f"{truncated}…"
