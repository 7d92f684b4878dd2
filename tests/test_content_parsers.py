from datetime import date
from pathlib import Path

import pytest

from folio.content import (
    ContentRecord,
    InvalidFieldValue,
    MalformedMetadata,
    MissingRequiredField,
    load_record,
    parse,
    render_document,
)

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "content" / "posts"


def test_loads_complete_document() -> None:
    record = load_record(FIXTURE_DIR / "dependency-injection" / "index.md")

    assert record.slug == "dependency-injection"
    assert record.author == "yuhao"
    assert record.title == "Dependency Injection in C#"
    assert record.date == date(2025, 2, 17)
    assert record.description == "Registering services with the built-in container."
    assert record.tags == ["csharp", "dependency-injection"]
    assert record.categories == ["Tutorials"]
    assert record.series == ["C# Basics"]
    assert record.aliases == ["/posts/di-intro/"]
    assert record.image == "cover.png"
    assert record.extra == {"toc": True}
    assert record.body.startswith("Hello world.")


def test_minimal_document_defaults_sequences_to_empty() -> None:
    record = parse('---\nauthor: "yuhao"\ntitle: "X"\ndate: "2025-02-17"\n---\nBody\n')

    assert record.tags == []
    assert record.categories == []
    assert record.series == []
    assert record.aliases == []
    assert record.description is None
    assert record.image is None
    assert record.date == date(2025, 2, 17)
    assert record.slug == "x"


def test_body_is_returned_untouched() -> None:
    body = "\n  # Heading\n\nText with trailing spaces   \n\n"
    record = parse(f"---\nauthor: a\ntitle: t\ndate: 2024-01-01\n---\n{body}")

    assert record.body == body


def test_unrecognized_keys_pass_through() -> None:
    record = parse(
        "---\nauthor: a\ntitle: t\ndate: 2024-01-01\ndraft: true\nweight: 3\n---\n"
    )

    assert record.extra == {"draft": True, "weight": 3}


def test_bare_string_tags_become_single_item_list() -> None:
    record = parse("---\nauthor: a\ntitle: t\ndate: 2024-01-01\ntags: csharp\n---\n")

    assert record.tags == ["csharp"]


def test_datetime_values_keep_the_calendar_date() -> None:
    record = parse("---\nauthor: a\ntitle: t\ndate: 2024-03-05T10:30:00+08:00\n---\n")

    assert record.date == date(2024, 3, 5)


def test_missing_opening_delimiter_is_malformed() -> None:
    with pytest.raises(MalformedMetadata):
        parse("author: a\ntitle: t\ndate: 2024-01-01\n\nBody")


def test_rejects_missing_front_matter_end(tmp_path: Path) -> None:
    tmp = tmp_path / "broken.md"
    tmp.write_text("---\ntitle: Missing\n", encoding="utf-8")

    with pytest.raises(MalformedMetadata) as excinfo:
        load_record(tmp)

    assert "broken.md" in str(excinfo.value)


def test_undecodable_yaml_is_malformed() -> None:
    with pytest.raises(MalformedMetadata):
        parse("---\ntitle: [unclosed\n---\nBody")


def test_self_referencing_anchor_is_malformed() -> None:
    with pytest.raises(MalformedMetadata) as excinfo:
        parse("---\nauthor: a\ntitle: t\ndate: 2025-01-01\nloop: &a [*a]\n---\n")

    assert "self-referencing" in excinfo.value.message


def test_shared_anchor_is_accepted() -> None:
    record = parse("---\nauthor: a\ntitle: t\ndate: 2025-01-01\nfirst: &x [1]\nsecond: *x\n---\n")

    assert record.extra == {"first": [1], "second": [1]}


def test_deeply_nested_front_matter_is_malformed() -> None:
    nested = "[" * 3000 + "]" * 3000
    with pytest.raises(MalformedMetadata):
        parse(f"---\nauthor: a\ntitle: t\ndate: 2025-01-01\nx: {nested}\n---\n")


def test_indented_delimiter_inside_block_scalar_is_content() -> None:
    record = parse(
        "---\nauthor: a\ntitle: t\ndate: 2025-01-01\n"
        "description: |\n  ---\n  more text\n---\nBody"
    )

    assert record.description == "---\nmore text\n"
    assert record.body == "Body"


def test_non_mapping_front_matter_is_malformed() -> None:
    with pytest.raises(MalformedMetadata):
        parse("---\n- just\n- a list\n---\nBody")


def test_missing_title_names_title() -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        parse("---\nauthor: a\ndate: 2024-01-01\n---\nBody")

    assert excinfo.value.field == "title"


def test_required_fields_are_checked_in_fixed_order() -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        parse("---\ndescription: nothing else\n---\nBody")

    assert excinfo.value.field == "author"


def test_blank_required_field_counts_as_missing() -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        parse('---\nauthor: a\ntitle: "   "\ndate: 2024-01-01\n---\n')

    assert excinfo.value.field == "title"


def test_impossible_calendar_date_is_invalid() -> None:
    with pytest.raises(InvalidFieldValue) as excinfo:
        parse('---\nauthor: a\ntitle: t\ndate: "2025-02-30"\n---\n')

    assert excinfo.value.pointer == "date"


def test_non_date_string_is_invalid() -> None:
    with pytest.raises(InvalidFieldValue) as excinfo:
        parse("---\nauthor: a\ntitle: t\ndate: yesterday\n---\n")

    assert excinfo.value.pointer == "date"


def test_date_with_trailing_text_is_invalid() -> None:
    with pytest.raises(InvalidFieldValue) as excinfo:
        parse('---\nauthor: a\ntitle: t\ndate: "2025-02-17 not a time"\n---\n')

    assert excinfo.value.pointer == "date"


def test_date_with_time_suffix_keeps_the_day() -> None:
    record = parse('---\nauthor: a\ntitle: t\ndate: "2025-02-17 09:30"\n---\n')

    assert record.date == date(2025, 2, 17)


def test_wrongly_typed_tags_are_invalid() -> None:
    with pytest.raises(InvalidFieldValue) as excinfo:
        parse("---\nauthor: a\ntitle: t\ndate: 2024-01-01\ntags:\n  nested: mapping\n---\n")

    assert excinfo.value.pointer == "tags"


def test_render_document_round_trips() -> None:
    original = load_record(FIXTURE_DIR / "dependency-injection" / "index.md")
    reparsed = parse(
        render_document(original),
        source_path=original.source_path,
    )

    assert reparsed == original


def test_rendered_metadata_omits_empty_optionals() -> None:
    record = ContentRecord(author="a", title="t", date=date(2024, 1, 1), body="Body\n")
    text = render_document(record)

    assert text.startswith("---\nauthor: a\ntitle: t\ndate: 2024-01-01\n---\n")
    assert "tags" not in text
    assert text.endswith("Body\n")


def test_has_tag_ignores_case_and_order() -> None:
    record = parse("---\nauthor: a\ntitle: t\ndate: 2024-01-01\ntags: [Strings, CSharp]\n---\n")

    assert record.has_tag("csharp")
    assert record.has_tag(" strings ")
    assert not record.has_tag("images")
