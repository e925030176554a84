# roadmap_assembler/pipeline/assembler.py
"""
Whole-upload assembly: structural -> reference -> merge -> final check.

One skeleton, N phase-tasks files and M task-details files go in; a combined
ValidationReport comes out, plus the merged document and its MergeStats when
every stage passed. A stage only runs when the previous one reported no
issues, so the merge engine never sees unvalidated input.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from roadmap_assembler.merge.engine import build_complete_roadmap
from roadmap_assembler.merge.stats import MergeStats, compute_merge_stats
from roadmap_assembler.schemas.descriptors import SchemaKind
from roadmap_assembler.schemas.document import RoadmapDocument
from roadmap_assembler.schemas.fragments import (
    PhaseTasksFragment,
    SkeletonFragment,
    TaskDetailsFragment,
    parse_phase_tasks,
    parse_skeleton,
    parse_task_details,
)
from roadmap_assembler.validation.references import validate_references
from roadmap_assembler.validation.report import ErrorCode, ValidationIssue, ValidationReport
from roadmap_assembler.validation.structural import StructuralValidator

logger = logging.getLogger(__name__)

SKELETON_LABEL = "Skeleton"
MERGED_LABEL = "Merged roadmap"


def task_file_label(index: int) -> str:
    return f"Task file {index + 1}"


def detail_file_label(index: int) -> str:
    return f"Detail file {index + 1}"


@dataclass(frozen=True)
class AssemblyResult:
    """Outcome of one assembly run.

    ``document`` and ``stats`` are set only when ``report`` is valid.
    """

    report: ValidationReport
    document: RoadmapDocument | None = None
    stats: MergeStats | None = None
    stage: str = "complete"

    @property
    def is_valid(self) -> bool:
        return self.report.is_valid and self.document is not None


def _parse(parser, data: dict, label: str) -> tuple[Any, ValidationReport]:
    """Build a record from already-validated JSON, reporting anything pydantic still rejects."""
    try:
        return parser(data), ValidationReport.ok()
    except ValidationError as e:
        issues = tuple(
            ValidationIssue(
                code=ErrorCode.INVALID_VALUE,
                message=f"{label}: Invalid value for '{'.'.join(str(p) for p in err['loc'])}': {err['msg']}",
                location=label,
                path=".".join(str(p) for p in err["loc"]),
                field=str(err["loc"][-1]) if err["loc"] else None,
            )
            for err in e.errors()
        )
        return None, ValidationReport(issues=issues)


def _check_structure(
    validator: StructuralValidator,
    skeleton_data: Any,
    phase_tasks_data: Sequence[Any],
    task_details_data: Sequence[Any],
) -> ValidationReport:
    reports = [validator.validate(skeleton_data, SchemaKind.SKELETON).prefixed(SKELETON_LABEL)]
    reports.extend(
        validator.validate(data, SchemaKind.PHASE_TASKS).prefixed(task_file_label(i))
        for i, data in enumerate(phase_tasks_data)
    )
    reports.extend(
        validator.validate(data, SchemaKind.TASK_DETAILS).prefixed(detail_file_label(i))
        for i, data in enumerate(task_details_data)
    )
    return ValidationReport.combine(reports)


def _check_references(
    skeleton: SkeletonFragment,
    task_fragments: Sequence[PhaseTasksFragment],
    detail_fragments: Sequence[TaskDetailsFragment],
) -> ValidationReport:
    reports = [
        validate_references(skeleton, fragment).prefixed(task_file_label(i))
        for i, fragment in enumerate(task_fragments)
    ]

    parents = {fragment.target_phase_id: fragment for fragment in task_fragments}
    for i, fragment in enumerate(detail_fragments):
        label = detail_file_label(i)
        parent = parents.get(fragment.target_phase_id)
        if parent is None:
            reports.append(
                ValidationReport(
                    issues=(
                        ValidationIssue(
                            code=ErrorCode.MISSING_PARENT,
                            message=f"No phase tasks file uploaded for phase '{fragment.target_phase_id}'",
                            path="schema_metadata.target_phase_id",
                            field="target_phase_id",
                            actual=fragment.target_phase_id,
                        ),
                    )
                ).prefixed(label)
            )
            continue
        reports.append(validate_references(parent, fragment).prefixed(label))

    return ValidationReport.combine(reports)


def assemble(
    skeleton_data: Any,
    phase_tasks_data: Sequence[Any],
    task_details_data: Sequence[Any] = (),
    strict_fragment_kind: bool = True,
) -> AssemblyResult:
    """
    Validate and merge one upload of modular roadmap files.

    Args:
        skeleton_data: Parsed skeleton JSON
        phase_tasks_data: Parsed phase-tasks JSON documents
        task_details_data: Parsed task-details JSON documents
        strict_fragment_kind: Report files uploaded in the wrong slot

    Returns:
        AssemblyResult; ``stage`` names the stage that stopped the run
    """
    validator = StructuralValidator(strict_fragment_kind=strict_fragment_kind)

    structural = _check_structure(validator, skeleton_data, phase_tasks_data, task_details_data)
    if not structural.is_valid:
        logger.info(f"Assembly stopped at structural validation: {len(structural.issues)} issue(s)")
        return AssemblyResult(report=structural, stage="structural")

    skeleton, report = _parse(parse_skeleton, skeleton_data, SKELETON_LABEL)
    parse_reports = [report]
    task_fragments = []
    for i, data in enumerate(phase_tasks_data):
        fragment, report = _parse(parse_phase_tasks, data, task_file_label(i))
        task_fragments.append(fragment)
        parse_reports.append(report)
    detail_fragments = []
    for i, data in enumerate(task_details_data):
        fragment, report = _parse(parse_task_details, data, detail_file_label(i))
        detail_fragments.append(fragment)
        parse_reports.append(report)

    parsed = ValidationReport.combine(parse_reports)
    if not parsed.is_valid:
        logger.info(f"Assembly stopped while parsing fragments: {len(parsed.issues)} issue(s)")
        return AssemblyResult(report=parsed, stage="structural")

    references = _check_references(skeleton, task_fragments, detail_fragments)
    if not references.is_valid:
        logger.info(f"Assembly stopped at reference validation: {len(references.issues)} issue(s)")
        return AssemblyResult(report=references, stage="references")

    document = build_complete_roadmap(skeleton, task_fragments, detail_fragments)

    final = validator.validate(document.to_wire(), SchemaKind.FINAL).prefixed(MERGED_LABEL)
    if not final.is_valid:
        logger.warning(f"Merged roadmap failed final validation: {len(final.issues)} issue(s)")
        return AssemblyResult(report=final, stage="final")

    stats = compute_merge_stats(document, task_fragments, detail_fragments)
    logger.info(
        f"Assembled roadmap '{document.title}': {stats.total_phases} phases, "
        f"{stats.total_tasks} tasks, {stats.completion_percentage}% detailed"
    )
    return AssemblyResult(report=final, document=document, stats=stats)
