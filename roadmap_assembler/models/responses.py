# roadmap_assembler/models/responses.py
"""
Pydantic response models for tool outputs.

The CLI and the MCP server return these (as dicts) so both surfaces
report results the same way.
"""

from typing import Any

from pydantic import BaseModel, Field


class IssueEntry(BaseModel):
    """A validation issue with its remediation hint attached."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="User-facing error text")
    location: str = Field(default="", description="Positional label, e.g. 'Phase 2, Task 3'")
    path: str = Field(default="", description="Machine path to the offending value")
    field: str | None = Field(default=None, description="Offending key")
    expected: str | None = Field(default=None)
    actual: str | None = Field(default=None)
    severity: str = Field(description="error, warning or info")
    suggestion: str = Field(description="How to fix the issue")


class ValidateResponse(BaseModel):
    """Response from validate_fragment tool."""

    kind: str = Field(description="Document kind validated against")
    is_valid: bool = Field(description="True if no issues were found")
    errors: list[str] = Field(default_factory=list, description="Error messages, in order")
    issues: list[IssueEntry] = Field(default_factory=list, description="Structured issues")


class MergeStatsEntry(BaseModel):
    total_phases: int
    phases_with_tasks: int
    total_tasks: int
    task_files: int
    detail_files: int
    tasks_with_details: int
    completion_percentage: int
    phases_without_fragments: list[str] = Field(default_factory=list)


class AssembleResponse(BaseModel):
    """Response from assemble_roadmap tool."""

    is_valid: bool = Field(description="True if every stage passed")
    stage: str = Field(description="Stage that stopped the run, or 'complete'")
    errors: list[str] = Field(default_factory=list)
    issues: list[IssueEntry] = Field(default_factory=list)
    roadmap: dict[str, Any] | None = Field(
        default=None, description="Merged roadmap JSON when valid"
    )
    stats: MergeStatsEntry | None = Field(default=None, description="Merge statistics when valid")


class PartitionResponse(BaseModel):
    """Response from split_roadmap tool."""

    outline: dict[str, Any] = Field(description="Outline JSON (phases carry task_count)")
    phase_fragments: list[dict[str, Any]] = Field(
        default_factory=list, description="One fragment per phase with tasks"
    )
    fragment_sizes: dict[str, int] = Field(
        default_factory=dict, description="Serialized size in bytes, by phase_id"
    )


class ReconstructResponse(BaseModel):
    """Response from reconstruct_roadmap and load_roadmap tools."""

    roadmap: dict[str, Any] = Field(description="Canonical roadmap JSON")
    complete: bool = Field(description="False if some phase fragments were missing")
    missing_phases: list[str] = Field(
        default_factory=list, description="Phases whose declared tasks could not be loaded"
    )
    errors: list[str] = Field(default_factory=list)


class RoadmapSummary(BaseModel):
    """Summary information for a stored roadmap (used in list_roadmaps)."""

    roadmap_id: str = Field(description="Roadmap identifier")
    title: str = Field(description="Roadmap title")
    total_phases: int = Field(ge=0)
    total_tasks: int = Field(ge=0)
    updated_at: str = Field(description="Last save timestamp (ISO format)")


class SaveResponse(BaseModel):
    """Response from save_roadmap tool."""

    roadmap_id: str
    total_phases: int
    total_tasks: int
    fragments_written: int = Field(description="Phase fragments written")
    fragments_removed: int = Field(description="Stale phase fragments removed")


class ListRoadmapsResponse(BaseModel):
    """Response from list_roadmaps tool."""

    roadmaps: list[RoadmapSummary] = Field(default_factory=list)
    total: int = Field(description="Total number of stored roadmaps")


class DeleteResponse(BaseModel):
    roadmap_id: str
    fragments_removed: int


class RecountEntry(BaseModel):
    """Outcome of recounting one stored roadmap."""

    roadmap_id: str
    total_tasks: int = Field(ge=0)
    changed: bool = Field(description="True if stored counts were corrected")


class RecountResponse(BaseModel):
    """Response from recount_roadmaps tool."""

    roadmaps: list[RecountEntry] = Field(default_factory=list)
    corrected: int = Field(description="Number of outlines rewritten")
