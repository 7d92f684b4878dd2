"""Build the derived collection index from parsed records."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..content import ContentRecord
from ..ingest import sort_records
from ..markdown import excerpt, reading_time_minutes, word_count
from ..utils import normalize_alias
from .models import CollectionIndex, IndexEntry


def build_index(records: Iterable[ContentRecord]) -> CollectionIndex:
    """Group records by taxonomy, series, alias, and year.

    Taxonomy and archive lists are newest first; series lists follow reading
    order (oldest first). When two records claim one alias the first record in
    archive order keeps it.
    """
    ordered = sort_records(records)
    entries = [to_entry(record) for record in ordered]

    tags: dict[str, list[str]] = {}
    categories: dict[str, list[str]] = {}
    archive: dict[str, list[str]] = {}
    aliases: dict[str, str] = {}
    for entry in entries:
        _group(tags, entry.tags, entry.slug)
        _group(categories, entry.categories, entry.slug)
        archive.setdefault(str(entry.date.year), []).append(entry.slug)
        for alias in entry.aliases:
            key = normalize_alias(alias)
            if key:
                aliases.setdefault(key, entry.slug)

    series: dict[str, list[str]] = {}
    for entry in reversed(entries):
        _group(series, entry.series, entry.slug)

    return CollectionIndex(
        total_items=len(entries),
        entries=entries,
        tags=dict(sorted(tags.items(), key=lambda item: item[0].casefold())),
        categories=dict(sorted(categories.items(), key=lambda item: item[0].casefold())),
        series=dict(sorted(series.items(), key=lambda item: item[0].casefold())),
        aliases=dict(sorted(aliases.items())),
        archive=dict(sorted(archive.items(), reverse=True)),
    )


def to_entry(record: ContentRecord) -> IndexEntry:
    words = word_count(record.body)
    languages: list[str] = []
    for sample in record.code_samples:
        if sample.language and sample.language not in languages:
            languages.append(sample.language)
    return IndexEntry(
        slug=record.slug or record.identity,
        title=record.title,
        author=record.author,
        date=record.date,
        description=record.description,
        excerpt=record.description or excerpt(record.body),
        tags=record.tags,
        categories=record.categories,
        series=record.series,
        aliases=record.aliases,
        image=record.image,
        source_path=record.source_path,
        word_count=words,
        reading_time_minutes=reading_time_minutes(words),
        code_languages=languages,
    )


def _group(groups: dict[str, list[str]], labels: Sequence[str], slug: str) -> None:
    # Labels match case-insensitively; the first spelling seen names the group.
    keys = {key.casefold(): key for key in groups}
    for label in labels:
        if not label:
            continue
        key = keys.setdefault(label.casefold(), label)
        bucket = groups.setdefault(key, [])
        if slug not in bucket:
            bucket.append(slug)
