# roadmap_assembler/validation/hints.py
"""Remediation hints for validation issues, looked up by error code."""

from dataclasses import dataclass
from typing import Literal

from roadmap_assembler.validation.report import ErrorCode, ValidationIssue

Severity = Literal["error", "warning", "info"]


@dataclass(frozen=True)
class Hint:
    """How bad an issue is and what the author should do about it."""

    severity: Severity
    suggestion: str


_HINTS: dict[ErrorCode, Hint] = {
    ErrorCode.NOT_AN_OBJECT: Hint(
        "error", "Ensure this value is formatted as an object with curly braces {{}}."
    ),
    ErrorCode.MISSING_REQUIRED: Hint(
        "error", 'Add the "{field}" property to your JSON structure.'
    ),
    ErrorCode.INVALID_TYPE: Hint(
        "error", "Change '{field}' to a JSON {expected}."
    ),
    ErrorCode.INVALID_ENUM: Hint(
        "warning", "Use one of the allowed values: {expected}."
    ),
    ErrorCode.INVALID_VALUE: Hint(
        "warning", "Check the allowed values in the schema documentation."
    ),
    ErrorCode.DUPLICATE_ID: Hint(
        "error", "Give every entry a unique {field}; '{actual}' is used more than once."
    ),
    ErrorCode.COUNT_MISMATCH: Hint(
        "warning", "Update '{field}' to {expected} or remove it."
    ),
    ErrorCode.WRONG_FRAGMENT_KIND: Hint(
        "error", "Upload this file in the {actual} section instead."
    ),
    ErrorCode.SCHEMA_TYPE_MISMATCH: Hint(
        "error", "Set schema_metadata.schema_type to '{expected}' or upload the file in the matching section."
    ),
    ErrorCode.ROADMAP_ID_MISMATCH: Hint(
        "error", "Make sure every fragment declares roadmap_id '{expected}'."
    ),
    ErrorCode.PHASE_NOT_FOUND: Hint(
        "error", "Point target_phase_id at an existing phase: {expected}."
    ),
    ErrorCode.TASK_NOT_FOUND: Hint(
        "error", "Point target_task_id at an existing task: {expected}."
    ),
    ErrorCode.PHASE_MISMATCH: Hint(
        "error", "Set target_phase_id to '{expected}' to match the phase tasks fragment."
    ),
    ErrorCode.MISSING_PARENT: Hint(
        "error", "Upload the phase tasks file for phase '{actual}' alongside its task details."
    ),
    ErrorCode.UNSUPPORTED_PAIR: Hint(
        "info", "Refer to the schema documentation for the correct format."
    ),
}

_FALLBACK = Hint("info", "Refer to the schema documentation for the correct format.")


def hint_for(issue: ValidationIssue) -> Hint:
    """Resolve the hint for an issue, filling its placeholders from the issue."""
    template = _HINTS.get(issue.code, _FALLBACK)
    suggestion = template.suggestion.format(
        field=issue.field or "",
        expected=issue.expected or "",
        actual=issue.actual or "",
    )
    return Hint(template.severity, suggestion)


def annotate(issues: "tuple[ValidationIssue, ...] | list[ValidationIssue]") -> list[dict]:
    """Serialize issues with their severity and suggestion attached."""
    annotated = []
    for issue in issues:
        hint = hint_for(issue)
        entry = issue.model_dump(mode="json")
        entry["severity"] = hint.severity
        entry["suggestion"] = hint.suggestion
        annotated.append(entry)
    return annotated
