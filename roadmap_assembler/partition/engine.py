# roadmap_assembler/partition/engine.py
"""
Partition a canonical roadmap into storage-sized pieces and rebuild it.

``split`` produces an outline (every phase field except the task bodies,
plus a ``task_count``) and one PhaseTaskFragment per non-empty phase.
``reconstruct`` is its inverse: ``reconstruct(split(D)).document == D``.

A missing fragment for a phase whose outline declares tasks is reported as
a PartitionConsistencyError. Whether that degrades to an empty phase or
aborts the load is the caller's choice of MissingFragmentPolicy.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from roadmap_assembler.schemas.document import Phase, PhaseId, RoadmapDocument
from roadmap_assembler.schemas.outline import PhaseOutline, PhaseTaskFragment, RoadmapOutline

logger = logging.getLogger(__name__)

DEFAULT_MAX_FRAGMENT_BYTES = 1_048_576


class MissingFragmentPolicy(str, Enum):
    """What reconstruct does when an outline phase has no fragment."""

    DEGRADE = "degrade"
    FAIL = "fail"


class PartitionConsistencyError(Exception):
    """An outline phase declares tasks but its fragment was not supplied."""

    def __init__(self, phase_id: PhaseId, expected_tasks: int):
        self.phase_id = phase_id
        self.expected_tasks = expected_tasks
        super().__init__(
            f"Phase '{phase_id}' declares {expected_tasks} task(s) but its fragment is missing"
        )


class FragmentTooLargeError(ValueError):
    """A serialized fragment exceeds the configured storage limit."""

    def __init__(self, key: str, size: int, limit: int):
        self.key = key
        self.size = size
        self.limit = limit
        super().__init__(f"Fragment '{key}' is {size} bytes, limit is {limit} bytes")


@dataclass(frozen=True)
class PartitionResult:
    outline: RoadmapOutline
    phase_fragments: tuple[PhaseTaskFragment, ...]


@dataclass(frozen=True)
class ReconstructionResult:
    """Rebuilt document plus the consistency errors tolerated on the way."""

    document: RoadmapDocument
    errors: tuple[PartitionConsistencyError, ...] = field(default=())

    @property
    def is_complete(self) -> bool:
        return not self.errors


def fragment_size(body: Any) -> int:
    """UTF-8 byte size of a JSON body in compact form."""
    return len(json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def split(document: RoadmapDocument) -> PartitionResult:
    """
    Split a canonical document into an outline and per-phase task fragments.

    Phases without tasks get no fragment; their outline entry carries
    ``task_count=0``.

    Args:
        document: Canonical roadmap document

    Returns:
        PartitionResult with the outline and the non-empty phase fragments
    """
    outline_phases = []
    fragments = []
    for phase in document.phases:
        outline_phases.append(
            PhaseOutline.model_validate(
                {**phase.model_dump(exclude={"tasks"}), "task_count": len(phase.tasks)}
            )
        )
        if phase.tasks:
            fragments.append(PhaseTaskFragment(phase_id=phase.phase_id, tasks=phase.tasks))

    outline = RoadmapOutline(
        title=document.title,
        description=document.description,
        tags=document.tags,
        project_level=document.project_level,
        phases=tuple(outline_phases),
    )
    logger.info(
        f"Split roadmap '{document.title}' into outline ({len(outline_phases)} phases) "
        f"and {len(fragments)} phase fragment(s)"
    )
    return PartitionResult(outline=outline, phase_fragments=tuple(fragments))


def index_fragments(fragments: Iterable[PhaseTaskFragment]) -> dict[PhaseId, PhaseTaskFragment]:
    """Key fragments by phase_id. A later fragment for the same phase wins."""
    indexed: dict[PhaseId, PhaseTaskFragment] = {}
    for fragment in fragments:
        if fragment.phase_id in indexed:
            logger.warning(f"Duplicate phase fragment for '{fragment.phase_id}'; using the later one")
        indexed[fragment.phase_id] = fragment
    return indexed


def reconstruct(
    outline: RoadmapOutline,
    fragments_by_key: Mapping[PhaseId, PhaseTaskFragment],
    policy: MissingFragmentPolicy = MissingFragmentPolicy.DEGRADE,
) -> ReconstructionResult:
    """
    Rebuild the canonical document from an outline and its phase fragments.

    Args:
        outline: Stored outline
        fragments_by_key: Phase fragments keyed by phase_id
        policy: DEGRADE returns an empty phase plus the error, FAIL raises

    Returns:
        ReconstructionResult with the document and any tolerated errors

    Raises:
        PartitionConsistencyError: Under FAIL, for the first missing fragment
    """
    policy = MissingFragmentPolicy(policy)
    errors: list[PartitionConsistencyError] = []
    phases = []

    for entry in outline.phases:
        fragment = fragments_by_key.get(entry.phase_id)
        if fragment is None:
            tasks = ()
            if entry.task_count > 0:
                error = PartitionConsistencyError(entry.phase_id, entry.task_count)
                if policy is MissingFragmentPolicy.FAIL:
                    raise error
                logger.warning(str(error))
                errors.append(error)
        else:
            tasks = fragment.tasks
            if len(tasks) != entry.task_count:
                logger.warning(
                    f"Phase '{entry.phase_id}' outline says {entry.task_count} task(s), "
                    f"fragment holds {len(tasks)}"
                )

        phases.append(
            Phase.model_validate({**entry.model_dump(exclude={"task_count"}), "tasks": tasks})
        )

    document = RoadmapDocument(
        title=outline.title,
        description=outline.description,
        tags=outline.tags,
        project_level=outline.project_level,
        phases=tuple(phases),
    )
    return ReconstructionResult(document=document, errors=tuple(errors))
