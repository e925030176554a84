# roadmap_assembler/merge/stats.py
"""Summary counts of a merged roadmap, shown next to the assembled document."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from roadmap_assembler.schemas.document import PhaseId, RoadmapDocument
from roadmap_assembler.schemas.fragments import PhaseTasksFragment, TaskDetailsFragment


class MergeStats(BaseModel):
    """How complete an assembled roadmap is."""

    model_config = ConfigDict(frozen=True)

    total_phases: int = Field(..., ge=0)
    phases_with_tasks: int = Field(..., ge=0)
    total_tasks: int = Field(..., ge=0)
    task_files: int = Field(..., ge=0, description="Phase tasks fragments supplied")
    detail_files: int = Field(..., ge=0, description="Task details fragments supplied")
    tasks_with_details: int = Field(..., ge=0)
    completion_percentage: int = Field(..., ge=0, le=100, description="Share of tasks with details")
    phases_without_fragments: tuple[PhaseId, ...] = Field(
        default=(), description="Skeleton phases no task fragment targeted"
    )


def compute_merge_stats(
    document: RoadmapDocument,
    task_fragments: Sequence[PhaseTasksFragment] = (),
    detail_fragments: Sequence[TaskDetailsFragment] = (),
) -> MergeStats:
    """Count phases, tasks and detail coverage of a merged document."""
    targeted = {fragment.target_phase_id for fragment in task_fragments}
    total_tasks = document.total_tasks()
    with_details = sum(
        1 for phase in document.phases for task in phase.tasks if task.detail is not None
    )
    completion = round(100 * with_details / total_tasks) if total_tasks else 0

    return MergeStats(
        total_phases=len(document.phases),
        phases_with_tasks=sum(1 for phase in document.phases if phase.tasks),
        total_tasks=total_tasks,
        task_files=len(task_fragments),
        detail_files=len(detail_fragments),
        tasks_with_details=with_details,
        completion_percentage=completion,
        phases_without_fragments=tuple(
            phase.phase_id for phase in document.phases if phase.phase_id not in targeted
        ),
    )
