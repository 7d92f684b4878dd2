"""Persistence helpers for the collection index."""

from __future__ import annotations

import json
from pathlib import Path

from .models import CollectionIndex

INDEX_FILENAME = "index.json"


def write_index(index: CollectionIndex, destination: Path) -> Path:
    """Serialize the index to ``index.json`` inside the destination directory."""
    destination.mkdir(parents=True, exist_ok=True)
    path = destination / INDEX_FILENAME
    with path.open("w", encoding="utf-8") as handle:
        json.dump(index.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
        handle.write("\n")
    return path
