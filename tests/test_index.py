import json
from datetime import date
from pathlib import Path

from folio.content import ContentRecord
from folio.index import INDEX_FILENAME, build_index, write_index


def _record(
    slug: str,
    day: date,
    *,
    tags: list[str] | None = None,
    categories: list[str] | None = None,
    series: list[str] | None = None,
    aliases: list[str] | None = None,
    body: str = "Sample body text for index testing.",
) -> ContentRecord:
    return ContentRecord(
        author="yuhao",
        title=slug.replace("-", " ").title(),
        date=day,
        tags=tags or [],
        categories=categories or [],
        series=series or [],
        aliases=aliases or [],
        body=body,
        slug=slug,
    )


def test_entries_are_newest_first() -> None:
    index = build_index(
        [
            _record("old", date(2022, 1, 1)),
            _record("new", date(2025, 2, 17)),
            _record("mid", date(2024, 6, 1)),
        ]
    )

    assert [entry.slug for entry in index.entries] == ["new", "mid", "old"]
    assert index.total_items == 3
    assert index.archive == {"2025": ["new"], "2024": ["mid"], "2022": ["old"]}


def test_tags_group_case_insensitively() -> None:
    index = build_index(
        [
            _record("a", date(2025, 1, 1), tags=["CSharp", "strings"]),
            _record("b", date(2025, 1, 2), tags=["csharp"]),
        ]
    )

    assert index.tags == {"csharp": ["b", "a"], "strings": ["a"]}


def test_series_lists_follow_reading_order() -> None:
    index = build_index(
        [
            _record("part-2", date(2025, 2, 1), series=["Images"]),
            _record("part-1", date(2025, 1, 1), series=["Images"]),
            _record("part-3", date(2025, 3, 1), series=["Images"]),
        ]
    )

    assert index.series == {"Images": ["part-1", "part-2", "part-3"]}


def test_aliases_resolve_to_slugs() -> None:
    index = build_index(
        [
            _record("di", date(2025, 1, 1), aliases=["/posts/di-intro/"]),
            _record("strings", date(2025, 1, 2)),
        ]
    )

    assert index.aliases == {"posts/di-intro": "di"}
    assert index.resolve("/posts/DI-intro") == "di"
    assert index.resolve("strings") == "strings"
    assert index.resolve("/nowhere/") is None


def test_entry_summaries_include_code_languages_and_reading_time() -> None:
    body = "Intro text here.\n\n```csharp\nvar a = 1;\n```\n\n```csharp\nvar b = 2;\n```\n"
    index = build_index([_record("code", date(2025, 1, 1), body=body)])
    entry = index.entries[0]

    assert entry.code_languages == ["csharp"]
    assert entry.word_count == 3
    assert entry.reading_time_minutes == 1
    assert entry.excerpt == "Intro text here."


def test_write_index_writes_json(tmp_path: Path) -> None:
    index = build_index([_record("a", date(2025, 2, 17), categories=["Tutorials"])])

    path = write_index(index, tmp_path / "public")

    assert path.name == INDEX_FILENAME
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["total_items"] == 1
    assert data["entries"][0]["date"] == "2025-02-17"
    assert data["categories"] == {"Tutorials": ["a"]}
