# roadmap_assembler/models/repository.py
"""
Roadmap persistence on top of a FragmentStore.

A roadmap is stored as one outline envelope plus one fragment per
non-empty phase:

    roadmaps/<roadmap_id>                          outline envelope
    roadmaps/<roadmap_id>/phase_tasks/<phase_id>   phase fragment (parent: outline)

Every body is size-checked before anything is written, and a re-save
removes phase fragments the new document no longer has.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from roadmap_assembler.config.schema import RoadmapAssemblerConfig
from roadmap_assembler.models.responses import RecountEntry, RoadmapSummary, SaveResponse
from roadmap_assembler.models.store import FragmentStore
from roadmap_assembler.partition.engine import (
    DEFAULT_MAX_FRAGMENT_BYTES,
    FragmentTooLargeError,
    MissingFragmentPolicy,
    ReconstructionResult,
    fragment_size,
    index_fragments,
    reconstruct,
    split,
)
from roadmap_assembler.schemas.document import RoadmapDocument, RoadmapId
from roadmap_assembler.schemas.outline import PhaseTaskFragment, RoadmapOutline

logger = logging.getLogger(__name__)

KEY_ROOT = "roadmaps"


class RoadmapNotFoundError(LookupError):
    """No outline is stored under the requested roadmap ID."""

    def __init__(self, roadmap_id: str):
        self.roadmap_id = roadmap_id
        super().__init__(f"Roadmap '{roadmap_id}' not found")


def outline_key(roadmap_id: str) -> str:
    return f"{KEY_ROOT}/{roadmap_id}"


def phase_key(roadmap_id: str, phase_id: str) -> str:
    return f"{KEY_ROOT}/{roadmap_id}/phase_tasks/{phase_id}"


def generate_roadmap_id(title: str = "") -> RoadmapId:
    """
    Generate a roadmap ID from a title.

    Returns:
        Lowercase slug of the title (max 48 chars) plus an 8-character hex
        suffix, e.g. ``learn-rust-3f9a1c2b``
    """
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")[:48].rstrip("-")
    return RoadmapId(f"{slug or 'roadmap'}-{uuid4().hex[:8]}")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RoadmapRepository:
    """
    Saves and loads canonical roadmaps as outline + phase fragments.

    Args:
        store: Fragment storage backend
        max_fragment_bytes: Largest serialized body the store will accept
        policy: Default handling of missing phase fragments on load
    """

    def __init__(
        self,
        store: FragmentStore,
        max_fragment_bytes: int = DEFAULT_MAX_FRAGMENT_BYTES,
        policy: MissingFragmentPolicy = MissingFragmentPolicy.DEGRADE,
    ) -> None:
        self._store = store
        self._max_bytes = max_fragment_bytes
        self._policy = MissingFragmentPolicy(policy)

    @classmethod
    def from_config(cls, store: FragmentStore, config: RoadmapAssemblerConfig) -> "RoadmapRepository":
        """Build a repository using the configured partition settings."""
        return cls(
            store,
            max_fragment_bytes=config.partition.max_fragment_bytes,
            policy=MissingFragmentPolicy(config.partition.missing_fragment_policy),
        )

    def _check_size(self, key: str, body: dict[str, Any]) -> None:
        size = fragment_size(body)
        if size > self._max_bytes:
            raise FragmentTooLargeError(key, size, self._max_bytes)

    @staticmethod
    def _envelope(roadmap_id: str, outline: RoadmapOutline) -> dict[str, Any]:
        return {
            "roadmap_id": roadmap_id,
            "outline": outline.to_wire(),
            "total_phases": len(outline.phases),
            "total_tasks": outline.total_tasks(),
            "updated_at": _now(),
        }

    async def save(self, roadmap_id: str, document: RoadmapDocument) -> SaveResponse:
        """
        Partition and store a roadmap, replacing any previous version.

        Args:
            roadmap_id: Sanitized roadmap ID
            document: Canonical roadmap

        Returns:
            SaveResponse with fragment counts

        Raises:
            FragmentTooLargeError: If the outline or any phase fragment is
                over the size limit (nothing is written)
        """
        partition = split(document)
        parent = outline_key(roadmap_id)
        positions = {phase.phase_id: i + 1 for i, phase in enumerate(document.phases)}

        entries: list[tuple[str, dict[str, Any], str | None]] = []
        for fragment in partition.phase_fragments:
            body = {
                "roadmap_id": roadmap_id,
                "phase_number": positions[fragment.phase_id],
                **fragment.to_wire(),
            }
            entries.append((phase_key(roadmap_id, fragment.phase_id), body, parent))
        # Outline last so it never references a fragment that was not written
        entries.append((parent, self._envelope(roadmap_id, partition.outline), None))

        for key, body, _ in entries:
            self._check_size(key, body)

        previous = await self._store.list_keys(f"{parent}/phase_tasks/")
        current = {key for key, _, owner in entries if owner is not None}
        stale_keys = [key for key in previous if key not in current]

        await self._store.replace_fragments(entries, stale_keys)
        stale = len(stale_keys)

        written = len(partition.phase_fragments)
        logger.info(
            f"Saved roadmap {roadmap_id}: outline + {written} phase fragment(s), "
            f"{stale} stale fragment(s) removed"
        )
        return SaveResponse(
            roadmap_id=roadmap_id,
            total_phases=len(document.phases),
            total_tasks=document.total_tasks(),
            fragments_written=written,
            fragments_removed=stale,
        )

    async def _read_outline(self, roadmap_id: str) -> tuple[dict[str, Any], RoadmapOutline] | None:
        envelope = await self._store.read_fragment(outline_key(roadmap_id))
        if envelope is None:
            return None
        return envelope, RoadmapOutline.model_validate(envelope["outline"])

    async def _read_fragments(self, roadmap_id: str) -> list[PhaseTaskFragment]:
        bodies = await self._store.list_fragments(outline_key(roadmap_id))
        return [PhaseTaskFragment.model_validate(body) for body in bodies]

    async def load(
        self, roadmap_id: str, policy: MissingFragmentPolicy | None = None
    ) -> ReconstructionResult | None:
        """
        Load and reconstruct a stored roadmap.

        Args:
            roadmap_id: Roadmap ID
            policy: Missing-fragment policy, defaults to the repository's

        Returns:
            ReconstructionResult, or None if no outline is stored

        Raises:
            PartitionConsistencyError: Under FAIL, if a phase fragment is missing
        """
        stored = await self._read_outline(roadmap_id)
        if stored is None:
            return None
        _, outline = stored

        fragments = index_fragments(await self._read_fragments(roadmap_id))
        result = reconstruct(outline, fragments, policy or self._policy)
        logger.info(
            f"Loaded roadmap {roadmap_id}: {len(result.document.phases)} phases, "
            f"{result.document.total_tasks()} tasks"
        )
        return result

    async def delete(self, roadmap_id: str) -> int:
        """
        Delete a roadmap and all its phase fragments.

        Returns:
            Number of phase fragments removed

        Raises:
            RoadmapNotFoundError: If no outline is stored
        """
        parent = outline_key(roadmap_id)
        if await self._store.read_fragment(parent) is None:
            raise RoadmapNotFoundError(roadmap_id)

        removed = await self._store.delete_children(parent)
        await self._store.delete_fragment(parent)
        logger.info(f"Deleted roadmap {roadmap_id} ({removed} phase fragment(s))")
        return removed

    async def list_ids(self) -> list[str]:
        prefix = f"{KEY_ROOT}/"
        return [
            key[len(prefix):]
            for key in await self._store.list_keys(prefix)
            if "/" not in key[len(prefix):]
        ]

    async def list_summaries(self) -> list[RoadmapSummary]:
        """
        List every stored roadmap, most recently saved first.
        """
        summaries = []
        for roadmap_id in await self.list_ids():
            envelope = await self._store.read_fragment(outline_key(roadmap_id))
            if envelope is None:
                continue
            summaries.append(
                RoadmapSummary(
                    roadmap_id=roadmap_id,
                    title=envelope["outline"].get("title", ""),
                    total_phases=envelope.get("total_phases", 0),
                    total_tasks=envelope.get("total_tasks", 0),
                    updated_at=envelope.get("updated_at", ""),
                )
            )
        summaries.sort(key=lambda s: s.updated_at, reverse=True)
        return summaries

    async def recount(self, roadmap_id: str) -> RecountEntry:
        """
        Recompute one outline's task counts from its stored fragments.

        The outline is rewritten only when a count changed.

        Raises:
            RoadmapNotFoundError: If no outline is stored
        """
        stored = await self._read_outline(roadmap_id)
        if stored is None:
            raise RoadmapNotFoundError(roadmap_id)
        envelope, outline = stored

        counts = {
            fragment.phase_id: len(fragment.tasks)
            for fragment in await self._read_fragments(roadmap_id)
        }
        phases = tuple(
            phase.model_copy(update={"task_count": counts.get(phase.phase_id, 0)})
            for phase in outline.phases
        )
        recounted = outline.model_copy(update={"phases": phases})
        total = recounted.total_tasks()

        changed = recounted != outline or envelope.get("total_tasks") != total
        if changed:
            await self._store.write_fragment(
                outline_key(roadmap_id), self._envelope(roadmap_id, recounted)
            )
            logger.info(f"Recounted roadmap {roadmap_id}: {total} task(s)")
        return RecountEntry(roadmap_id=roadmap_id, total_tasks=total, changed=changed)

    async def recount_all(self) -> list[RecountEntry]:
        """
        Recount every stored roadmap. Idempotent: a second run changes nothing.
        """
        return [await self.recount(roadmap_id) for roadmap_id in await self.list_ids()]
