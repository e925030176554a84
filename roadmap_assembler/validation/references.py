# roadmap_assembler/validation/references.py
"""
Pairwise reference validation between a parent and a child fragment.

Callers invoke this once per (parent, child) pair before merging; it never
walks a whole fragment set on its own.
"""

import logging

from roadmap_assembler.schemas.fragments import (
    Fragment,
    PhaseTasksFragment,
    SkeletonFragment,
    TaskDetailsFragment,
)
from roadmap_assembler.validation.report import ErrorCode, ValidationIssue, ValidationReport

logger = logging.getLogger(__name__)


def _issue(code: ErrorCode, message: str, path: str = "", **kwargs) -> ValidationIssue:
    return ValidationIssue(code=code, message=message, path=path, **kwargs)


def validate_references(parent: Fragment, child: Fragment) -> ValidationReport:
    """
    Check that child fragment's declared parent keys exist in parent.

    Supported pairs are skeleton -> phase_tasks and phase_tasks ->
    task_details. Both fragments must already be structurally valid.

    Args:
        parent: Skeleton or phase-tasks fragment
        child: Phase-tasks or task-details fragment

    Returns:
        ValidationReport with one issue per broken reference
    """
    issues: list[ValidationIssue] = []

    if parent.schema_metadata.roadmap_id != child.schema_metadata.roadmap_id:
        issues.append(
            _issue(
                ErrorCode.ROADMAP_ID_MISMATCH,
                "Roadmap ID mismatch between schemas",
                "schema_metadata.roadmap_id",
                field="roadmap_id",
                expected=parent.schema_metadata.roadmap_id,
                actual=child.schema_metadata.roadmap_id,
            )
        )

    if isinstance(parent, SkeletonFragment) and isinstance(child, PhaseTasksFragment):
        issues.extend(_check_phase_target(parent, child))
    elif isinstance(parent, PhaseTasksFragment) and isinstance(child, TaskDetailsFragment):
        issues.extend(_check_task_target(parent, child))
    else:
        issues.append(
            _issue(
                ErrorCode.UNSUPPORTED_PAIR,
                f"Cannot check references from {type(parent).__name__} "
                f"to {type(child).__name__}",
            )
        )

    if issues:
        logger.info(f"Reference validation found {len(issues)} issue(s)")
    return ValidationReport(issues=tuple(issues))


def _check_phase_target(
    skeleton: SkeletonFragment, fragment: PhaseTasksFragment
) -> list[ValidationIssue]:
    target = fragment.target_phase_id
    phase_ids = {phase.phase_id for phase in skeleton.phases}
    if target in phase_ids:
        return []
    return [
        _issue(
            ErrorCode.PHASE_NOT_FOUND,
            f"Target phase '{target}' not found in roadmap skeleton",
            "schema_metadata.target_phase_id",
            field="target_phase_id",
            expected=", ".join(sorted(phase_ids)),
            actual=target,
        )
    ]


def _check_task_target(
    phase_tasks: PhaseTasksFragment, fragment: TaskDetailsFragment
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    parent_phase = phase_tasks.target_phase_id
    child_phase = fragment.target_phase_id
    if parent_phase and child_phase and parent_phase != child_phase:
        issues.append(
            _issue(
                ErrorCode.PHASE_MISMATCH,
                f"Target phase '{child_phase}' does not match phase tasks fragment "
                f"'{parent_phase}'",
                "schema_metadata.target_phase_id",
                field="target_phase_id",
                expected=parent_phase,
                actual=child_phase,
            )
        )

    target = fragment.target_task_id
    task_ids = {task.task_id for task in phase_tasks.tasks}
    if target not in task_ids:
        issues.append(
            _issue(
                ErrorCode.TASK_NOT_FOUND,
                f"Target task '{target}' not found in phase tasks",
                "schema_metadata.target_task_id",
                field="target_task_id",
                expected=", ".join(sorted(task_ids)),
                actual=target,
            )
        )
    return issues
