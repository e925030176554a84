# roadmap_assembler/tools/assemble_roadmap.py
"""
assemble_roadmap tool implementation.

Runs the full validate-then-merge pipeline over one upload.
"""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from roadmap_assembler.models.responses import AssembleResponse, MergeStatsEntry
from roadmap_assembler.pipeline.assembler import assemble
from roadmap_assembler.tools.validate_fragment import issue_entries

logger = logging.getLogger(__name__)


def assemble_roadmap(
    skeleton: Any,
    phase_tasks: list[Any],
    task_details: list[Any] | None = None,
    strict_fragment_kind: bool = True,
) -> dict:
    """
    Assemble a roadmap from a skeleton, phase-tasks files and task-details files.

    Validation failures are part of a normal response (``is_valid`` False);
    only malformed arguments raise.

    Args:
        skeleton: Parsed skeleton JSON
        phase_tasks: Parsed phase-tasks JSON documents
        task_details: Parsed task-details JSON documents
        strict_fragment_kind: Report files uploaded in the wrong slot

    Returns:
        AssembleResponse as dict

    Raises:
        ToolError: If phase_tasks or task_details is not a list
    """
    if not isinstance(phase_tasks, list):
        raise ToolError("phase_tasks must be a list of phase tasks documents")
    if task_details is not None and not isinstance(task_details, list):
        raise ToolError("task_details must be a list of task details documents")

    result = assemble(skeleton, phase_tasks, task_details or [], strict_fragment_kind)

    stats = None
    if result.stats is not None:
        stats = MergeStatsEntry(**result.stats.model_dump())

    response = AssembleResponse(
        is_valid=result.is_valid,
        stage=result.stage,
        errors=result.report.errors,
        issues=issue_entries(result.report),
        roadmap=result.document.to_wire() if result.document is not None else None,
        stats=stats,
    )

    logger.info(f"Assembly finished at stage '{result.stage}' (valid={result.is_valid})")
    return response.model_dump()
