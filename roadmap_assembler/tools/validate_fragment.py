# roadmap_assembler/tools/validate_fragment.py
"""
validate_fragment tool implementation.

Structurally validates one document against one document kind.
"""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from roadmap_assembler.models.responses import IssueEntry, ValidateResponse
from roadmap_assembler.schemas.descriptors import SchemaKind
from roadmap_assembler.validation.hints import annotate
from roadmap_assembler.validation.report import ValidationReport
from roadmap_assembler.validation.structural import StructuralValidator

logger = logging.getLogger(__name__)


def issue_entries(report: ValidationReport) -> list[IssueEntry]:
    """Attach severity and suggestion to every issue of a report."""
    return [IssueEntry(**entry) for entry in annotate(report.issues)]


def parse_kind(kind: str) -> SchemaKind:
    """
    Resolve a document kind name.

    Raises:
        ToolError: If kind is not one of skeleton, phase_tasks, task_details, final
    """
    try:
        return SchemaKind(kind.strip().lower())
    except ValueError:
        allowed = ", ".join(k.value for k in SchemaKind)
        raise ToolError(f"Unknown document kind '{kind}'. Must be one of: {allowed}")


def validate_fragment(document: Any, kind: str, strict_fragment_kind: bool = True) -> dict:
    """
    Validate one parsed JSON document.

    Args:
        document: Parsed JSON value
        kind: Document kind (skeleton, phase_tasks, task_details, final)
        strict_fragment_kind: Report files uploaded in the wrong slot

    Returns:
        ValidateResponse as dict

    Raises:
        ToolError: If kind is unknown
    """
    schema_kind = parse_kind(kind)
    validator = StructuralValidator(strict_fragment_kind=strict_fragment_kind)
    report = validator.validate(document, schema_kind)

    response = ValidateResponse(
        kind=schema_kind.value,
        is_valid=report.is_valid,
        errors=report.errors,
        issues=issue_entries(report),
    )

    logger.info(f"Validated {schema_kind.value} document: {len(report.issues)} issue(s)")
    return response.model_dump()
