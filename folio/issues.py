"""Issue types shared by the loader and the collection validator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class IssueSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = auto()
    WARNING = auto()


class IssueKind(str, Enum):
    """Category of a validation issue."""

    MALFORMED_METADATA = "MalformedMetadata"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    INVALID_FIELD_VALUE = "InvalidFieldValue"
    DUPLICATE_ALIAS = "DuplicateAlias"
    DANGLING_ASSET_REFERENCE = "DanglingAssetReference"
    UNTAGGED_CODE_BLOCK = "UntaggedCodeBlock"


@dataclass(slots=True, frozen=True)
class ValidationIssue:
    """A single problem found in one or more documents."""

    kind: IssueKind
    severity: IssueSeverity
    message: str
    sources: tuple[str, ...]
    pointer: str | None = None

    @property
    def source(self) -> str:
        return self.sources[0] if self.sources else ""
