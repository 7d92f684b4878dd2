"""Parse source documents into `ContentRecord` instances."""

from __future__ import annotations

import datetime as dt
import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from ..utils import slug_from_path, slugify
from .errors import InvalidFieldValue, MalformedMetadata, MissingRequiredField
from .models import RECOGNIZED_KEYS, REQUIRED_KEYS, ContentRecord

SCHEMA_PACKAGE = "folio.schemas"
FRONT_MATTER_SCHEMA_NAME = "front_matter.schema.json"
DELIMITER = "---"
CLOSING_DELIMITERS = {"---", "..."}
BOM = "\ufeff"


def parse(
    text: str,
    *,
    source_path: str | Path | None = None,
    slug: str | None = None,
) -> ContentRecord:
    """Parse document text into a content record.

    Raises ``MalformedMetadata`` when the front-matter block is missing or
    cannot be decoded, ``MissingRequiredField`` for the first absent field in
    the order author, title, date, and ``InvalidFieldValue`` when a value has
    the wrong shape.
    """
    source = str(source_path) if source_path is not None else None
    raw_front_matter, body = split_front_matter(text, source=source)
    data = _decode(raw_front_matter, source=source)

    for key in REQUIRED_KEYS:
        if _is_blank(data.get(key)):
            raise MissingRequiredField(key, source=source)

    _validate_schema(data, source=source)

    fields = {key: data[key] for key in RECOGNIZED_KEYS if key in data}
    extra = {key: value for key, value in data.items() if key not in RECOGNIZED_KEYS}

    if slug is None:
        slug = slug_from_path(source_path) if source_path is not None else slugify(data["title"])
    try:
        record = ContentRecord(**fields, extra=extra, body=body, source_path=source, slug=slug)
    except ValidationError as exc:
        first = exc.errors()[0]
        pointer = "/".join(str(part) for part in first["loc"]) or None
        message = first["msg"]
        if pointer:
            message = f"Invalid value for '{pointer}': {message}"
        raise InvalidFieldValue(message, source=source, pointer=pointer) from exc
    return record


def load_record(path: str | Path) -> ContentRecord:
    """Load a markdown file with YAML front matter into a content record."""
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedMetadata(f"File is not valid UTF-8: {exc}", source=str(source_path)) from exc
    return parse(text, source_path=source_path)


def split_front_matter(text: str, *, source: str | None = None) -> tuple[str, str]:
    """Split raw text into the front-matter block and the untouched body."""
    if text.startswith(BOM):
        text = text[len(BOM) :]
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        raise MalformedMetadata(
            f"Document must start with a '{DELIMITER}' front matter delimiter.", source=source
        )

    for idx, line in enumerate(lines[1:], start=1):
        # Only column-0 delimiters close the block; indented ones belong to YAML scalars.
        if line.rstrip() in CLOSING_DELIMITERS:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])
    raise MalformedMetadata(
        f"Closing front matter delimiter '{DELIMITER}' missing.", source=source
    )


def dump_front_matter(record: ContentRecord) -> str:
    """Encode the record metadata as a YAML block (without delimiters)."""
    return yaml.safe_dump(
        record.metadata(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def render_document(record: ContentRecord) -> str:
    """Rebuild full document text from a record."""
    return f"{DELIMITER}\n{dump_front_matter(record)}{DELIMITER}\n{record.body}"


def _decode(raw: str, *, source: str | None) -> dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MalformedMetadata(f"Front matter is not valid YAML: {exc}", source=source) from exc
    except RecursionError as exc:
        raise MalformedMetadata("Front matter is nested too deeply to decode.", source=source) from exc
    except ValueError as exc:
        # Raised by the timestamp constructor for values such as 2025-02-30.
        raise MalformedMetadata(f"Front matter could not be decoded: {exc}", source=source) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedMetadata(
            f"Front matter must be a mapping, got {type(data).__name__}", source=source
        )
    return {str(key): value for key, value in data.items()}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _validate_schema(data: Mapping[str, Any], *, source: str | None) -> None:
    validator = _get_front_matter_validator()
    try:
        instance = _jsonable(data, source=source)
        errors = sorted(validator.iter_errors(instance), key=lambda err: list(map(str, err.path)))
    except RecursionError as exc:
        raise MalformedMetadata("Front matter is nested too deeply to validate.", source=source) from exc
    if not errors:
        return
    first = errors[0]
    pointer = "/".join(str(elem) for elem in first.path) or None
    message = first.message
    if pointer:
        message = f"Invalid value for '{pointer}': {message}"
    raise InvalidFieldValue(message, source=source, pointer=pointer)


def _jsonable(value: Any, *, source: str | None, _active: frozenset[int] = frozenset()) -> Any:
    """Convert YAML-native scalars (dates, timestamps) into JSON types.

    Anchors that refer back to an enclosing container are rejected.
    """
    if isinstance(value, (dict, list, tuple)):
        if id(value) in _active:
            raise MalformedMetadata(
                "Front matter contains a self-referencing YAML anchor.", source=source
            )
        active = _active | {id(value)}
        if isinstance(value, dict):
            return {
                str(key): _jsonable(item, source=source, _active=active)
                for key, item in value.items()
            }
        return [_jsonable(item, source=source, _active=active) for item in value]
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


@lru_cache(maxsize=1)
def _get_front_matter_validator() -> Draft202012Validator:
    return Draft202012Validator(_load_schema(FRONT_MATTER_SCHEMA_NAME))


def _load_schema(name: str) -> dict[str, Any]:
    with resources.files(SCHEMA_PACKAGE).joinpath(name).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Schema '{name}' must be a JSON object.")
    return payload
