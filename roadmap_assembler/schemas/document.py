# roadmap_assembler/schemas/document.py
"""
Canonical roadmap document records.

Every record is frozen and every sequence is a tuple, so a merged or
reconstructed document can be handed to several callers without copies.
Attribute names follow the roadmap vocabulary (``phases``, ``tasks``,
``detail``); the JSON wire keys (``roadmap.phases``, ``phase_tasks``,
``task_detail``) are accepted on input and produced by ``to_wire()``.
"""

from typing import Any, ClassVar, Literal, NewType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

RoadmapId = NewType("RoadmapId", str)
PhaseId = NewType("PhaseId", str)
TaskId = NewType("TaskId", str)

ProjectLevel = Literal["beginner", "intermediate", "advanced", "expert"]
TaskPriority = Literal["low", "mid", "high", "critical"]
DifficultyLevel = Literal["very_easy", "easy", "normal", "difficult", "challenging"]
DependencyType = Literal["required", "recommended", "optional"]
ExplanationFormat = Literal["plaintext", "markdown", "html"]
TimeUnit = Literal["minutes", "hours", "days", "weeks"]
ResourceType = Literal[
    "document", "tutorial", "video", "article", "tool", "reference", "example", "course"
]


class OptionalFieldsModel(BaseModel):
    """Omits the listed optional fields from dumps while they are None.

    Other None values, including preserved extra keys, are dumped as is.
    """

    omit_when_none: ClassVar[tuple[str, ...]] = ()

    @model_serializer(mode="wrap")
    def _omit_unset_optionals(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        for name in self.omit_when_none:
            if getattr(self, name) is None:
                field = type(self).model_fields[name]
                data.pop(field.alias if info.by_alias and field.alias else name, None)
        return data


class Explanation(BaseModel):
    """Long-form explanation of a task."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    content: str = Field(default="", description="Explanation body")
    format: ExplanationFormat = Field(default="plaintext", description="How content is rendered")


class Difficulty(BaseModel):
    """Difficulty rating of a task."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    level: DifficultyLevel = Field(default="normal")
    reason: str = Field(default="", alias="reason_of_difficulty")
    prerequisites: tuple[str, ...] = Field(default=(), alias="prerequisites_needed")


class TimeAmount(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: int | float
    unit: TimeUnit


class TimeEstimate(OptionalFieldsModel):
    """Estimated effort range."""

    omit_when_none = ("max_time",)

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    min_time: TimeAmount
    max_time: TimeAmount | None = None
    factors: tuple[str, ...] = Field(default=(), alias="factors_affecting_time")


class ResourceLink(BaseModel):
    """External learning resource attached to a task."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    display_text: str
    url: str
    type: ResourceType = "reference"
    is_essential: bool = False


class TaskDetail(OptionalFieldsModel):
    """Detail body of a task, authored in its own task_details fragment."""

    omit_when_none = ("est_time",)

    model_config = ConfigDict(frozen=True, extra="ignore")

    explanation: Explanation = Field(default_factory=Explanation)
    difficulty: Difficulty = Field(default_factory=Difficulty)
    est_time: TimeEstimate | None = None
    resource_links: tuple[ResourceLink, ...] = ()
    code_blocks: tuple[dict[str, Any], ...] = ()
    outcomes: tuple[str, ...] = ()
    subtasks: tuple[dict[str, Any], ...] = ()


class Dependency(BaseModel):
    """Reference to another task. May point at a task that does not exist yet."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    phase_id: PhaseId
    task_id: TaskId
    dependency_type: DependencyType = "recommended"


class Task(OptionalFieldsModel):
    """A single task inside a phase.

    Unknown keys (``task_number`` and friends) are kept so they survive
    merge and storage round-trips.
    """

    omit_when_none = ("detail",)

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    task_id: TaskId
    task_title: str
    task_summary: str
    task_priority: TaskPriority = "mid"
    task_tags: tuple[str, ...] = ()
    task_dependencies: tuple[Dependency, ...] = ()
    detail: TaskDetail | None = Field(default=None, alias="task_detail")


class PhaseFields(BaseModel):
    """Every phase field except its task bodies.

    Shared by ``Phase`` (canonical document) and ``PhaseOutline`` (storage).
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    phase_id: PhaseId
    phase_title: str
    phase_summary: str = ""
    phase_details: tuple[str, ...] = ()
    phase_dependencies: tuple[PhaseId, ...] = ()
    key_milestones: tuple[str, ...] = ()
    success_indicators: tuple[str, ...] = ()


class Phase(PhaseFields):
    tasks: tuple[Task, ...] = Field(default=(), alias="phase_tasks")


class RoadmapShape(BaseModel):
    """Document-level fields shared by skeletons, canonical documents and outlines.

    On the wire the phase list lives under ``roadmap.phases``; it is lifted
    to a top-level ``phases`` attribute on input and pushed back down by
    ``to_wire()``. Subclasses declare ``phases`` with their own phase type.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: str
    description: str = ""
    tags: tuple[str, ...] = ()
    project_level: ProjectLevel = "beginner"

    @model_validator(mode="before")
    @classmethod
    def _lift_phases(cls, data: Any) -> Any:
        if isinstance(data, dict) and "phases" not in data:
            body = data.get("roadmap")
            if isinstance(body, dict) and "phases" in body:
                data = {k: v for k, v in data.items() if k != "roadmap"}
                data["phases"] = body["phases"]
        return data

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON wire layout (aliases, ``roadmap.phases`` nesting)."""
        data = self.model_dump(mode="json", by_alias=True)
        phases = data.pop("phases", [])
        data["roadmap"] = {"phases": phases}
        return data


class RoadmapDocument(RoadmapShape):
    """The canonical, fully merged roadmap."""

    phases: tuple[Phase, ...] = ()

    def phase_ids(self) -> list[PhaseId]:
        return [phase.phase_id for phase in self.phases]

    def total_tasks(self) -> int:
        return sum(len(phase.tasks) for phase in self.phases)
