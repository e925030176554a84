# roadmap_assembler/schemas/fragments.py
"""
Modular fragment records: skeleton, phase-tasks and task-details files.

Each fragment carries a ``schema_metadata`` block naming the roadmap it
belongs to and, for child fragments, the phase/task it attaches to. The
metadata never appears on a canonical document.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from roadmap_assembler.schemas.document import (
    Phase,
    PhaseId,
    RoadmapId,
    RoadmapShape,
    Task,
    TaskDetail,
    TaskId,
)

SchemaType = Literal["roadmap_skeleton", "skeleton", "phase_tasks", "task_details"]

SKELETON_SCHEMA_TYPES: tuple[str, ...] = ("roadmap_skeleton", "skeleton")


class SchemaMetadata(BaseModel):
    """Join key used by reference validation and merge."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    schema_type: SchemaType
    roadmap_id: RoadmapId
    target_phase_id: PhaseId | None = None
    target_task_id: TaskId | None = None

    @property
    def is_skeleton(self) -> bool:
        return self.schema_type in SKELETON_SCHEMA_TYPES


class SkeletonFragment(RoadmapShape):
    """Top-level roadmap declaring phases and metadata but no task bodies."""

    schema_metadata: SchemaMetadata
    phases: tuple[Phase, ...] = ()


class PhaseTasksFragment(BaseModel):
    """Task list for one phase, keyed by ``schema_metadata.target_phase_id``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    schema_metadata: SchemaMetadata
    tasks: tuple[Task, ...] = Field(default=(), alias="phase_tasks")

    @property
    def target_phase_id(self) -> PhaseId | None:
        return self.schema_metadata.target_phase_id


class TaskDetailsFragment(BaseModel):
    """Detail body for one task, keyed by target phase and target task."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    schema_metadata: SchemaMetadata
    detail: TaskDetail = Field(alias="task_detail")

    @property
    def target_phase_id(self) -> PhaseId | None:
        return self.schema_metadata.target_phase_id

    @property
    def target_task_id(self) -> TaskId | None:
        return self.schema_metadata.target_task_id


Fragment = SkeletonFragment | PhaseTasksFragment | TaskDetailsFragment


def parse_skeleton(data: dict[str, Any]) -> SkeletonFragment:
    return SkeletonFragment.model_validate(data)


def parse_phase_tasks(data: dict[str, Any]) -> PhaseTasksFragment:
    return PhaseTasksFragment.model_validate(data)


def parse_task_details(data: dict[str, Any]) -> TaskDetailsFragment:
    return TaskDetailsFragment.model_validate(data)
