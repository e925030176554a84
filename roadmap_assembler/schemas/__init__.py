# roadmap_assembler/schemas/__init__.py
"""Roadmap records, fragment records and the static schema descriptors."""

from roadmap_assembler.schemas.descriptors import (
    DESCRIPTORS,
    FieldType,
    NodeDescriptor,
    SchemaDescriptor,
    SchemaKind,
    get_descriptor,
)
from roadmap_assembler.schemas.document import (
    Dependency,
    Difficulty,
    Explanation,
    Phase,
    PhaseFields,
    PhaseId,
    ResourceLink,
    RoadmapDocument,
    RoadmapId,
    Task,
    TaskDetail,
    TaskId,
    TimeAmount,
    TimeEstimate,
)
from roadmap_assembler.schemas.fragments import (
    PhaseTasksFragment,
    SchemaMetadata,
    SkeletonFragment,
    TaskDetailsFragment,
)
from roadmap_assembler.schemas.outline import PhaseOutline, PhaseTaskFragment, RoadmapOutline

__all__ = [
    "RoadmapId",
    "PhaseId",
    "TaskId",
    "RoadmapDocument",
    "Phase",
    "PhaseFields",
    "Task",
    "TaskDetail",
    "Dependency",
    "Difficulty",
    "Explanation",
    "ResourceLink",
    "TimeAmount",
    "TimeEstimate",
    "SchemaMetadata",
    "SkeletonFragment",
    "PhaseTasksFragment",
    "TaskDetailsFragment",
    "RoadmapOutline",
    "PhaseOutline",
    "PhaseTaskFragment",
    "SchemaKind",
    "FieldType",
    "NodeDescriptor",
    "SchemaDescriptor",
    "DESCRIPTORS",
    "get_descriptor",
]
