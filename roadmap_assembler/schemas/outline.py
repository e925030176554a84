# roadmap_assembler/schemas/outline.py
"""Storage shapes produced by partitioning a canonical roadmap."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from roadmap_assembler.schemas.document import PhaseFields, PhaseId, RoadmapShape, Task


class PhaseOutline(PhaseFields):
    """A phase with its task bodies removed and replaced by a count."""

    task_count: int = Field(default=0, ge=0, description="Number of tasks held in the phase fragment")


class RoadmapOutline(RoadmapShape):
    """Outline document, sized O(phases)."""

    phases: tuple[PhaseOutline, ...] = ()

    def total_tasks(self) -> int:
        return sum(phase.task_count for phase in self.phases)


class PhaseTaskFragment(BaseModel):
    """Full task array of one phase, sized O(tasks in that phase)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    phase_id: PhaseId
    tasks: tuple[Task, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
