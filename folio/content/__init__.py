"""Utilities for loading and validating front-matter content records."""

from .errors import InvalidFieldValue, MalformedMetadata, MissingRequiredField, RecordError
from .models import ContentRecord, parse_calendar_date
from .parsers import dump_front_matter, load_record, parse, render_document, split_front_matter

__all__ = [
    "ContentRecord",
    "InvalidFieldValue",
    "MalformedMetadata",
    "MissingRequiredField",
    "RecordError",
    "dump_front_matter",
    "load_record",
    "parse",
    "parse_calendar_date",
    "render_document",
    "split_front_matter",
]
