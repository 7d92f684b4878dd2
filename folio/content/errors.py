"""Exceptions raised while parsing a single document."""

from __future__ import annotations

from ..issues import IssueKind, IssueSeverity, ValidationIssue


class RecordError(ValueError):
    """Base class for per-document parse failures."""

    kind: IssueKind = IssueKind.MALFORMED_METADATA

    def __init__(self, message: str, *, source: str | None = None, pointer: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.pointer = pointer

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message

    def to_issue(self, source: str | None = None) -> ValidationIssue:
        identity = source or self.source or "<unknown>"
        return ValidationIssue(
            kind=self.kind,
            severity=IssueSeverity.ERROR,
            message=self.message,
            sources=(identity,),
            pointer=self.pointer,
        )


class MalformedMetadata(RecordError):
    """The front-matter block is missing or cannot be decoded."""

    kind = IssueKind.MALFORMED_METADATA


class MissingRequiredField(RecordError):
    """A required front-matter key is absent or blank."""

    kind = IssueKind.MISSING_REQUIRED_FIELD

    def __init__(self, field: str, *, source: str | None = None) -> None:
        super().__init__(f"Missing required field '{field}'", source=source, pointer=field)
        self.field = field


class InvalidFieldValue(RecordError):
    """A front-matter value has the wrong type or an impossible value."""

    kind = IssueKind.INVALID_FIELD_VALUE
