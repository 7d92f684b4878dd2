"""Collection reporting helpers for Folio."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from .index import CollectionIndex
from .ingest import CollectionResult
from .issues import IssueSeverity

REPORT_FILENAME = "collection-report.json"


class CollectionStats(BaseModel):
    documents: int
    records: int
    rejected: int
    tags: int
    categories: int
    series: int
    aliases: int


class IssueSummary(BaseModel):
    kind: str
    severity: str
    message: str
    sources: list[str]
    pointer: str | None = None


class CollectionReport(BaseModel):
    project: str
    generated_at: datetime
    stats: CollectionStats
    errors: int
    warnings: int
    issues: list[IssueSummary] = Field(default_factory=list)


def build_collection_stats(result: CollectionResult, index: CollectionIndex) -> CollectionStats:
    return CollectionStats(
        documents=result.document_count,
        records=len(result.records),
        rejected=result.document_count - len(result.records),
        tags=len(index.tags),
        categories=len(index.categories),
        series=len(index.series),
        aliases=len(index.aliases),
    )


def assemble_report(*, project: str, result: CollectionResult, index: CollectionIndex) -> CollectionReport:
    issues = [
        IssueSummary(
            kind=issue.kind.value,
            severity=issue.severity.name.lower(),
            message=issue.message,
            sources=list(issue.sources),
            pointer=issue.pointer,
        )
        for issue in result.issues
    ]
    return CollectionReport(
        project=project,
        generated_at=datetime.now(timezone.utc),
        stats=build_collection_stats(result, index),
        errors=sum(1 for issue in result.issues if issue.severity is IssueSeverity.ERROR),
        warnings=sum(1 for issue in result.issues if issue.severity is IssueSeverity.WARNING),
        issues=issues,
    )


def write_report(report: CollectionReport, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / REPORT_FILENAME
    with target.open("w", encoding="utf-8") as handle:
        json.dump(report.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
    return target
