# roadmap_assembler/merge/engine.py
"""
Deterministic merge of modular fragments into one canonical roadmap.

Fragments are attached by key, never by position: task fragments by
``target_phase_id``, detail fragments by ``target_phase_id`` then
``target_task_id``. Output order is always the skeleton's phase order and
each fragment's task order. Inputs are never mutated; every phase and task
that changes is rebuilt with ``model_copy(update=...)``.

The merger assumes its inputs already passed structural and reference
validation and does not re-check them.
"""

import logging
from collections.abc import Sequence

from roadmap_assembler.schemas.document import Phase, PhaseId, RoadmapDocument, Task, TaskDetail, TaskId
from roadmap_assembler.schemas.fragments import (
    PhaseTasksFragment,
    SkeletonFragment,
    TaskDetailsFragment,
)

logger = logging.getLogger(__name__)


class MergeInvariantViolation(TypeError):
    """Merge was called with inputs no validated caller could produce."""


def _require_sequence(value: object, item_type: type, name: str) -> None:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise MergeInvariantViolation(
            f"{name} must be a list of {item_type.__name__}, got {type(value).__name__}"
        )
    for index, item in enumerate(value):
        if not isinstance(item, item_type):
            raise MergeInvariantViolation(
                f"{name}[{index}] must be {item_type.__name__}, got {type(item).__name__}"
            )


def index_task_fragments(
    task_fragments: Sequence[PhaseTasksFragment],
) -> dict[PhaseId, tuple[Task, ...]]:
    """Build the ``phase_id -> tasks`` lookup. A later fragment for the same phase wins."""
    lookup: dict[PhaseId, tuple[Task, ...]] = {}
    for fragment in task_fragments:
        phase_id = fragment.target_phase_id
        if phase_id in lookup:
            logger.warning(f"Duplicate task fragment for phase '{phase_id}'; using the later one")
        lookup[phase_id] = fragment.tasks
    return lookup


def index_detail_fragments(
    detail_fragments: Sequence[TaskDetailsFragment],
) -> dict[PhaseId, dict[TaskId, TaskDetail]]:
    """Group detail fragments by phase, then key them by task."""
    grouped: dict[PhaseId, dict[TaskId, TaskDetail]] = {}
    for fragment in detail_fragments:
        by_task = grouped.setdefault(fragment.target_phase_id, {})
        if fragment.target_task_id in by_task:
            logger.warning(
                f"Duplicate detail fragment for task '{fragment.target_task_id}' "
                f"in phase '{fragment.target_phase_id}'; using the later one"
            )
        by_task[fragment.target_task_id] = fragment.detail
    return grouped


def merge(
    skeleton: SkeletonFragment, task_fragments: Sequence[PhaseTasksFragment]
) -> RoadmapDocument:
    """
    Merge a skeleton with its phase-task fragments.

    A phase with no supplied fragment gets an empty task tuple; that is the
    "not yet authored" state, not an error.

    Args:
        skeleton: Validated skeleton fragment
        task_fragments: Validated phase-tasks fragments, in any order

    Returns:
        New canonical RoadmapDocument

    Raises:
        MergeInvariantViolation: If inputs are not fragment records
    """
    if not isinstance(skeleton, SkeletonFragment):
        raise MergeInvariantViolation(
            f"skeleton must be SkeletonFragment, got {type(skeleton).__name__}"
        )
    _require_sequence(task_fragments, PhaseTasksFragment, "task_fragments")

    lookup = index_task_fragments(task_fragments)
    phases = tuple(
        phase.model_copy(update={"tasks": lookup.get(phase.phase_id, ())})
        for phase in skeleton.phases
    )

    unused = set(lookup) - {phase.phase_id for phase in skeleton.phases}
    if unused:
        logger.warning(f"Ignored task fragments for unknown phases: {sorted(unused)}")

    document = RoadmapDocument(
        title=skeleton.title,
        description=skeleton.description,
        tags=skeleton.tags,
        project_level=skeleton.project_level,
        phases=phases,
    )
    logger.info(
        f"Merged {len(task_fragments)} task fragment(s) into {len(phases)} phase(s), "
        f"{document.total_tasks()} task(s)"
    )
    return document


def _attach_details(phase: Phase, details: dict[TaskId, TaskDetail]) -> Phase:
    tasks = tuple(
        task.model_copy(update={"detail": details[task.task_id]})
        if task.task_id in details
        else task
        for task in phase.tasks
    )
    return phase.model_copy(update={"tasks": tasks})


def build_complete_roadmap(
    skeleton: SkeletonFragment,
    task_fragments: Sequence[PhaseTasksFragment],
    detail_fragments: Sequence[TaskDetailsFragment],
) -> RoadmapDocument:
    """
    Two-level build: merge task fragments, then attach task details.

    A task with no matching detail fragment keeps ``detail=None``.

    Args:
        skeleton: Validated skeleton fragment
        task_fragments: Validated phase-tasks fragments
        detail_fragments: Validated task-details fragments

    Returns:
        New canonical RoadmapDocument with details attached

    Raises:
        MergeInvariantViolation: If inputs are not fragment records
    """
    _require_sequence(detail_fragments, TaskDetailsFragment, "detail_fragments")
    document = merge(skeleton, task_fragments)

    grouped = index_detail_fragments(detail_fragments)
    if not grouped:
        return document

    phases = tuple(
        _attach_details(phase, grouped[phase.phase_id]) if phase.phase_id in grouped else phase
        for phase in document.phases
    )
    attached = sum(
        1 for phase in phases for task in phase.tasks if task.detail is not None
    )
    logger.info(f"Attached details to {attached} task(s) from {len(detail_fragments)} fragment(s)")
    return document.model_copy(update={"phases": phases})
