"""Cross-record validation and lint diagnostics for a content collection."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from .content import ContentRecord
from .issues import IssueKind, IssueSeverity, ValidationIssue
from .utils import normalize_alias

logger = logging.getLogger(__name__)

AssetLookup = Callable[[ContentRecord, str], bool]


def validate_collection(
    records: Iterable[ContentRecord],
    *,
    asset_exists: AssetLookup | None = None,
    dangling_assets_fatal: bool = False,
    require_code_language: bool = False,
) -> Iterator[ValidationIssue]:
    """Yield every cross-record and asset problem in the collection.

    Nothing is raised: all violations are reported in a single pass.
    """
    records = list(records)
    lookup = asset_exists or sibling_asset_exists

    yield from _check_aliases(records)

    severity = IssueSeverity.ERROR if dangling_assets_fatal else IssueSeverity.WARNING
    for record in records:
        if record.image is None:
            continue
        if lookup(record, record.image):
            continue
        logger.debug("Cover image %s not found for %s", record.image, record.identity)
        yield ValidationIssue(
            kind=IssueKind.DANGLING_ASSET_REFERENCE,
            severity=severity,
            message=f"Image '{record.image}' does not resolve to a file beside the document.",
            sources=(record.identity,),
            pointer="image",
        )

    if require_code_language:
        for record in records:
            yield from _check_code_languages(record)


def sibling_asset_exists(record: ContentRecord, relative_path: str) -> bool:
    """Resolve an asset path against the document's own directory."""
    directory = record.directory
    if directory is None:
        return False
    normalized = relative_path.strip()
    if not normalized or normalized.startswith("/"):
        return False
    base = directory.resolve()
    candidate = (base / normalized).resolve()
    try:
        candidate.relative_to(base)
    except ValueError:
        return False
    return candidate.is_file()


def _check_aliases(records: list[ContentRecord]) -> Iterator[ValidationIssue]:
    claims: dict[str, list[ContentRecord]] = {}
    spelling: dict[str, str] = {}
    for record in records:
        seen: set[str] = set()
        for alias in record.aliases:
            key = normalize_alias(alias)
            if not key or key in seen:
                continue
            seen.add(key)
            claims.setdefault(key, []).append(record)
            spelling.setdefault(key, alias)

    for key, owners in claims.items():
        if len(owners) < 2:
            continue
        identities = tuple(owner.identity for owner in owners)
        yield ValidationIssue(
            kind=IssueKind.DUPLICATE_ALIAS,
            severity=IssueSeverity.ERROR,
            message=f"Alias '{spelling[key]}' is claimed by {len(owners)} documents: "
            + ", ".join(identities),
            sources=identities,
            pointer="aliases",
        )


def _check_code_languages(record: ContentRecord) -> Iterator[ValidationIssue]:
    for sample in record.code_samples:
        if sample.language:
            continue
        yield ValidationIssue(
            kind=IssueKind.UNTAGGED_CODE_BLOCK,
            severity=IssueSeverity.WARNING,
            message=f"Fenced code block at body line {sample.line} has no language tag.",
            sources=(record.identity,),
            pointer=f"body:{sample.line}",
        )


def sort_issues(issues: Iterable[ValidationIssue]) -> list[ValidationIssue]:
    """Order issues errors-first, then by document and kind."""
    return sorted(
        issues,
        key=lambda issue: (
            0 if issue.severity is IssueSeverity.ERROR else 1,
            issue.source,
            issue.kind.value,
            issue.pointer or "",
        ),
    )
