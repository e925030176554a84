# roadmap_assembler/models/__init__.py
"""
Persistence and response models for roadmap-assembler.

Provides the FragmentStore backends, the RoadmapRepository that partitions
roadmaps onto them, and the Pydantic response models tools return.
"""

from roadmap_assembler.models.memory_store import InMemoryFragmentStore
from roadmap_assembler.models.repository import (
    RoadmapNotFoundError,
    RoadmapRepository,
    generate_roadmap_id,
    outline_key,
    phase_key,
)
from roadmap_assembler.models.responses import (
    AssembleResponse,
    DeleteResponse,
    IssueEntry,
    ListRoadmapsResponse,
    MergeStatsEntry,
    PartitionResponse,
    RecountEntry,
    RecountResponse,
    ReconstructResponse,
    RoadmapSummary,
    SaveResponse,
    ValidateResponse,
)
from roadmap_assembler.models.sqlite_store import SQLiteFragmentStore
from roadmap_assembler.models.store import FragmentStore

__all__ = [
    # Storage
    "FragmentStore",
    "InMemoryFragmentStore",
    "SQLiteFragmentStore",
    "RoadmapRepository",
    "RoadmapNotFoundError",
    "generate_roadmap_id",
    "outline_key",
    "phase_key",
    # Response models
    "IssueEntry",
    "ValidateResponse",
    "AssembleResponse",
    "MergeStatsEntry",
    "PartitionResponse",
    "ReconstructResponse",
    "RoadmapSummary",
    "SaveResponse",
    "ListRoadmapsResponse",
    "DeleteResponse",
    "RecountEntry",
    "RecountResponse",
]
