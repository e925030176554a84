# roadmap_assembler/validation/report.py
"""
Validation outcome value objects.

Every violation is a structured ``ValidationIssue``; the human-readable
``message`` keeps the stable wording the UI displays, while ``code``
drives hint lookup so nothing has to pattern-match on message text.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    """Machine-readable category of a validation issue."""

    # Structural
    NOT_AN_OBJECT = "not_an_object"
    MISSING_REQUIRED = "missing_required"
    INVALID_TYPE = "invalid_type"
    INVALID_ENUM = "invalid_enum"
    INVALID_VALUE = "invalid_value"
    DUPLICATE_ID = "duplicate_id"
    COUNT_MISMATCH = "count_mismatch"
    WRONG_FRAGMENT_KIND = "wrong_fragment_kind"
    SCHEMA_TYPE_MISMATCH = "schema_type_mismatch"

    # Reference
    ROADMAP_ID_MISMATCH = "roadmap_id_mismatch"
    PHASE_NOT_FOUND = "phase_not_found"
    TASK_NOT_FOUND = "task_not_found"
    PHASE_MISMATCH = "phase_mismatch"
    MISSING_PARENT = "missing_parent"
    UNSUPPORTED_PAIR = "unsupported_pair"


REFERENCE_CODES = frozenset(
    {
        ErrorCode.ROADMAP_ID_MISMATCH,
        ErrorCode.PHASE_NOT_FOUND,
        ErrorCode.TASK_NOT_FOUND,
        ErrorCode.PHASE_MISMATCH,
        ErrorCode.MISSING_PARENT,
        ErrorCode.UNSUPPORTED_PAIR,
    }
)


class ValidationIssue(BaseModel):
    """One violation found in a document."""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode = Field(..., description="Error category")
    message: str = Field(..., description="User-facing text, location prefix included")
    location: str = Field(default="", description="Positional label, e.g. 'Phase 2, Task 3'")
    path: str = Field(default="", description="Machine path, e.g. 'roadmap.phases[1].phase_tasks[2]'")
    field: str | None = Field(default=None, description="Offending key, dotted relative to location")
    expected: str | None = Field(default=None, description="Expected type or allowed values")
    actual: str | None = Field(default=None, description="Value or type actually found")

    def with_prefix(self, prefix: str) -> "ValidationIssue":
        """Return a copy whose message and location are scoped under prefix."""
        location = f"{prefix}, {self.location}" if self.location else prefix
        return self.model_copy(update={"message": f"{prefix}: {self.message}", "location": location})


class ValidationReport(BaseModel):
    """Outcome of validating one document or one fragment pair."""

    model_config = ConfigDict(frozen=True)

    issues: tuple[ValidationIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues]

    def codes(self) -> list[ErrorCode]:
        return [issue.code for issue in self.issues]

    def prefixed(self, prefix: str) -> "ValidationReport":
        return ValidationReport(issues=tuple(issue.with_prefix(prefix) for issue in self.issues))

    def __add__(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport(issues=self.issues + other.issues)

    @classmethod
    def ok(cls) -> "ValidationReport":
        return cls()

    @classmethod
    def combine(cls, reports: "list[ValidationReport]") -> "ValidationReport":
        issues: tuple[ValidationIssue, ...] = ()
        for report in reports:
            issues += report.issues
        return cls(issues=issues)

    def as_dict(self) -> dict:
        """Serialize for the UI: ``{is_valid, errors, issues}``."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "issues": [issue.model_dump(mode="json") for issue in self.issues],
        }
