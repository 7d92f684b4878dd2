"""Derived index structures and helpers."""

from .generator import build_index, to_entry
from .models import CollectionIndex, IndexEntry
from .writer import INDEX_FILENAME, write_index

__all__ = [
    "INDEX_FILENAME",
    "CollectionIndex",
    "IndexEntry",
    "build_index",
    "to_entry",
    "write_index",
]
