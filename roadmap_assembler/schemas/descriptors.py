# roadmap_assembler/schemas/descriptors.py
"""
Static schema descriptors for every document kind.

Pure lookup tables: required fields, field types, enumerations and nested
collections. ``StructuralValidator`` walks these tables; nothing here
contains validation logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import get_args

from roadmap_assembler.schemas.document import (
    DependencyType,
    DifficultyLevel,
    ExplanationFormat,
    ProjectLevel,
    ResourceType,
    TaskPriority,
    TimeUnit,
)
from roadmap_assembler.schemas.fragments import SKELETON_SCHEMA_TYPES, SchemaType


class SchemaKind(str, Enum):
    """Document kinds the engine knows how to validate."""

    SKELETON = "skeleton"
    PHASE_TASKS = "phase_tasks"
    TASK_DETAILS = "task_details"
    FINAL = "final"


class FieldType(str, Enum):
    """JSON value types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


PROJECT_LEVELS: tuple[str, ...] = get_args(ProjectLevel)
TASK_PRIORITIES: tuple[str, ...] = get_args(TaskPriority)
DIFFICULTY_LEVELS: tuple[str, ...] = get_args(DifficultyLevel)
DEPENDENCY_TYPES: tuple[str, ...] = get_args(DependencyType)
EXPLANATION_FORMATS: tuple[str, ...] = get_args(ExplanationFormat)
TIME_UNITS: tuple[str, ...] = get_args(TimeUnit)
RESOURCE_TYPES: tuple[str, ...] = get_args(ResourceType)
SCHEMA_TYPES: tuple[str, ...] = get_args(SchemaType)


@dataclass(frozen=True)
class NodeDescriptor:
    """Shape of one JSON object.

    Attributes:
        name: Descriptor name, used in logs only
        label: Positional label when the object is an array element
            ("Phase" renders as "Phase 2"); None for plain nested objects
        required: Keys that must be present
        types: Expected JSON type for each known key
        enums: Allowed values for enumerated string keys
        item_types: Element type for arrays of scalars
        children: Descriptor for nested objects, or for the elements of
            arrays of objects
        unique: Array key -> identifier key that must be unique among its items
        non_blank_items: Arrays whose string items must not be blank
        positive: Numeric keys that must be greater than zero
    """

    name: str
    label: str | None = None
    required: tuple[str, ...] = ()
    types: dict[str, FieldType] = field(default_factory=dict)
    enums: dict[str, tuple[str, ...]] = field(default_factory=dict)
    item_types: dict[str, FieldType] = field(default_factory=dict)
    children: dict[str, "NodeDescriptor"] = field(default_factory=dict)
    unique: dict[str, str] = field(default_factory=dict)
    non_blank_items: tuple[str, ...] = ()
    positive: tuple[str, ...] = ()


@dataclass(frozen=True)
class SchemaDescriptor:
    """Descriptor for one document kind.

    Attributes:
        kind: Document kind
        root: Descriptor of the top-level object
        schema_types: Accepted ``schema_metadata.schema_type`` values
            (empty for the canonical document, which carries no metadata)
        foreign_markers: Top-level key -> kind it betrays; a document
            carrying one was uploaded in the wrong slot
        count_checks: (count key, array path) pairs that must agree
    """

    kind: SchemaKind
    root: NodeDescriptor
    schema_types: tuple[str, ...] = ()
    foreign_markers: dict[str, SchemaKind] = field(default_factory=dict)
    count_checks: tuple[tuple[str, str], ...] = ()


S = FieldType.STRING
N = FieldType.NUMBER
B = FieldType.BOOLEAN
A = FieldType.ARRAY
O = FieldType.OBJECT  # noqa: E741

TIME_AMOUNT = NodeDescriptor(
    name="time_amount",
    required=("amount", "unit"),
    types={"amount": N, "unit": S},
    enums={"unit": TIME_UNITS},
    positive=("amount",),
)

EST_TIME = NodeDescriptor(
    name="est_time",
    required=("min_time",),
    types={"min_time": O, "max_time": O, "factors_affecting_time": A},
    item_types={"factors_affecting_time": S},
    children={"min_time": TIME_AMOUNT, "max_time": TIME_AMOUNT},
)

DIFFICULTY = NodeDescriptor(
    name="difficulty",
    required=("level",),
    types={"level": S, "reason_of_difficulty": S, "prerequisites_needed": A},
    enums={"level": DIFFICULTY_LEVELS},
    item_types={"prerequisites_needed": S},
)

EXPLANATION = NodeDescriptor(
    name="explanation",
    required=("content", "format"),
    types={"content": S, "format": S},
    enums={"format": EXPLANATION_FORMATS},
)

RESOURCE_LINK = NodeDescriptor(
    name="resource_link",
    label="Resource",
    required=("display_text", "url", "type", "is_essential"),
    types={"display_text": S, "url": S, "type": S, "is_essential": B},
    enums={"type": RESOURCE_TYPES},
)

DEPENDENCY = NodeDescriptor(
    name="dependency",
    label="Dependency",
    required=("phase_id", "task_id", "dependency_type"),
    types={"phase_id": S, "task_id": S, "dependency_type": S},
    enums={"dependency_type": DEPENDENCY_TYPES},
)

TASK_DETAIL = NodeDescriptor(
    name="task_detail",
    required=("explanation", "difficulty", "est_time"),
    types={
        "explanation": O,
        "difficulty": O,
        "est_time": O,
        "resource_links": A,
        "code_blocks": A,
        "outcomes": A,
        "subtasks": A,
    },
    item_types={"code_blocks": O, "outcomes": S, "subtasks": O},
    children={
        "explanation": EXPLANATION,
        "difficulty": DIFFICULTY,
        "est_time": EST_TIME,
        "resource_links": RESOURCE_LINK,
    },
)

TASK = NodeDescriptor(
    name="task",
    label="Task",
    required=("task_id", "task_title", "task_summary"),
    types={
        "task_id": S,
        "task_title": S,
        "task_summary": S,
        "task_priority": S,
        "task_tags": A,
        "task_dependencies": A,
        "task_detail": O,
    },
    enums={"task_priority": TASK_PRIORITIES},
    item_types={"task_tags": S},
    children={"task_dependencies": DEPENDENCY, "task_detail": TASK_DETAIL},
)

_PHASE_REQUIRED = ("phase_id", "phase_title", "phase_summary")
_PHASE_TYPES = {
    "phase_id": S,
    "phase_title": S,
    "phase_summary": S,
    "phase_details": A,
    "phase_dependencies": A,
    "key_milestones": A,
    "success_indicators": A,
}
_PHASE_ITEM_TYPES = {
    "phase_details": S,
    "phase_dependencies": S,
    "key_milestones": S,
    "success_indicators": S,
}

SKELETON_PHASE = NodeDescriptor(
    name="skeleton_phase",
    label="Phase",
    required=_PHASE_REQUIRED,
    types=dict(_PHASE_TYPES),
    item_types=dict(_PHASE_ITEM_TYPES),
)

FINAL_PHASE = NodeDescriptor(
    name="phase",
    label="Phase",
    required=_PHASE_REQUIRED + ("phase_tasks",),
    types={**_PHASE_TYPES, "phase_tasks": A},
    item_types=dict(_PHASE_ITEM_TYPES),
    children={"phase_tasks": TASK},
    unique={"phase_tasks": "task_id"},
)


def _roadmap_body(phase: NodeDescriptor) -> NodeDescriptor:
    return NodeDescriptor(
        name="roadmap",
        required=("phases",),
        types={"phases": A},
        children={"phases": phase},
        unique={"phases": "phase_id"},
    )


def _metadata(*targets: str) -> NodeDescriptor:
    return NodeDescriptor(
        name="schema_metadata",
        required=("schema_type", "roadmap_id") + targets,
        types={
            "schema_type": S,
            "roadmap_id": S,
            "target_phase_id": S,
            "target_task_id": S,
        },
        enums={"schema_type": SCHEMA_TYPES},
    )


_DOCUMENT_REQUIRED = ("title", "description", "tags", "project_level", "roadmap")
_DOCUMENT_TYPES = {
    "title": S,
    "description": S,
    "tags": A,
    "project_level": S,
    "roadmap": O,
}

SKELETON = SchemaDescriptor(
    kind=SchemaKind.SKELETON,
    root=NodeDescriptor(
        name="skeleton",
        required=("schema_metadata",) + _DOCUMENT_REQUIRED,
        types={"schema_metadata": O, **_DOCUMENT_TYPES, "num_of_phases": N},
        enums={"project_level": PROJECT_LEVELS},
        item_types={"tags": S},
        children={"schema_metadata": _metadata(), "roadmap": _roadmap_body(SKELETON_PHASE)},
        non_blank_items=("tags",),
    ),
    schema_types=SKELETON_SCHEMA_TYPES,
    foreign_markers={
        "phase_tasks": SchemaKind.PHASE_TASKS,
        "task_detail": SchemaKind.TASK_DETAILS,
    },
    count_checks=(("num_of_phases", "roadmap.phases"),),
)

PHASE_TASKS = SchemaDescriptor(
    kind=SchemaKind.PHASE_TASKS,
    root=NodeDescriptor(
        name="phase_tasks",
        required=("schema_metadata", "phase_tasks"),
        types={"schema_metadata": O, "phase_tasks": A},
        children={"schema_metadata": _metadata("target_phase_id"), "phase_tasks": TASK},
        unique={"phase_tasks": "task_id"},
    ),
    schema_types=("phase_tasks",),
    foreign_markers={
        "roadmap": SchemaKind.SKELETON,
        "task_detail": SchemaKind.TASK_DETAILS,
    },
)

TASK_DETAILS = SchemaDescriptor(
    kind=SchemaKind.TASK_DETAILS,
    root=NodeDescriptor(
        name="task_details",
        required=("schema_metadata", "task_detail"),
        types={"schema_metadata": O, "task_detail": O},
        children={
            "schema_metadata": _metadata("target_phase_id", "target_task_id"),
            "task_detail": TASK_DETAIL,
        },
    ),
    schema_types=("task_details",),
    foreign_markers={
        "roadmap": SchemaKind.SKELETON,
        "phase_tasks": SchemaKind.PHASE_TASKS,
    },
)

FINAL = SchemaDescriptor(
    kind=SchemaKind.FINAL,
    root=NodeDescriptor(
        name="final",
        required=_DOCUMENT_REQUIRED,
        types=dict(_DOCUMENT_TYPES),
        enums={"project_level": PROJECT_LEVELS},
        item_types={"tags": S},
        children={"roadmap": _roadmap_body(FINAL_PHASE)},
        non_blank_items=("tags",),
    ),
    foreign_markers={
        "phase_tasks": SchemaKind.PHASE_TASKS,
        "task_detail": SchemaKind.TASK_DETAILS,
    },
)

DESCRIPTORS: dict[SchemaKind, SchemaDescriptor] = {
    SchemaKind.SKELETON: SKELETON,
    SchemaKind.PHASE_TASKS: PHASE_TASKS,
    SchemaKind.TASK_DETAILS: TASK_DETAILS,
    SchemaKind.FINAL: FINAL,
}


def get_descriptor(kind: SchemaKind | str) -> SchemaDescriptor:
    """Look up the descriptor for a document kind.

    Raises:
        ValueError: If kind is not a known document kind
    """
    return DESCRIPTORS[SchemaKind(kind)]
