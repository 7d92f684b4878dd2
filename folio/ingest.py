"""High-level helpers to load a content collection from the workspace."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from .config import Config
from .content import ContentRecord, MalformedMetadata, RecordError, load_record
from .issues import IssueSeverity, ValidationIssue
from .validation import AssetLookup, validate_collection

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".md", ".markdown"}


@dataclass(slots=True)
class CollectionResult:
    """Valid records (newest first) plus every problem found while loading."""

    records: list[ContentRecord] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)
    document_count: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.WARNING)

    def is_fatal(self, *, strict: bool = False) -> bool:
        return self.error_count > 0 or (strict and self.warning_count > 0)


def load_collection(
    source: Config | str | Path,
    *,
    asset_exists: AssetLookup | None = None,
) -> CollectionResult:
    """Parse every document under the content directory, then cross-validate.

    Per-document failures are collected as issues; they never stop the rest of
    the collection from loading.
    """
    if isinstance(source, Config):
        config = source
    else:
        config = Config(content_dir=Path(source))

    result = CollectionResult()
    root = config.content_dir
    if not root.exists():
        logger.warning("Content directory %s does not exist", root)
        return result

    suffixes = set(config.document_suffixes)
    for path in iter_content_files(root, suffixes):
        result.document_count += 1
        try:
            record = load_record(path)
        except RecordError as exc:
            logger.debug("Rejected %s: %s", path, exc.message)
            result.issues.append(exc.to_issue(str(path)))
            continue
        except OSError as exc:
            logger.warning("Unable to read %s: %s", path, exc)
            failure = MalformedMetadata(f"Unable to read document: {exc}", source=str(path))
            result.issues.append(failure.to_issue())
            continue
        result.records.append(record)

    result.issues.extend(
        validate_collection(
            result.records,
            asset_exists=asset_exists,
            dangling_assets_fatal=config.dangling_assets_fatal,
            require_code_language=config.require_code_language,
        )
    )
    result.records = sort_records(result.records)
    return result


def sort_records(records: Iterable[ContentRecord]) -> list[ContentRecord]:
    """Archive order: most recent first, then title, then slug."""
    by_name = sorted(records, key=lambda record: (record.title.lower(), record.slug or ""))
    return sorted(by_name, key=lambda record: record.date, reverse=True)


def iter_content_files(root: Path, suffixes: Iterable[str] = SUPPORTED_SUFFIXES) -> Iterator[Path]:
    """Yield document paths in deterministic directory order."""
    wanted = {suffix.lower() for suffix in suffixes}
    directories = sorted(p for p in root.rglob("*") if p.is_dir())
    directories.insert(0, root)

    for directory in directories:
        for path in sorted(directory.iterdir()):
            if path.is_file() and path.suffix.lower() in wanted:
                yield path
