# roadmap_assembler/models/memory_store.py
"""
In-memory fragment storage.

Used by tests and by one-shot CLI commands that never touch disk.
"""

import copy
import logging
from typing import Any

from roadmap_assembler.models.store import FragmentStore

logger = logging.getLogger(__name__)


class InMemoryFragmentStore(FragmentStore):
    """
    Dict-backed fragment store.

    Bodies are deep-copied on the way in and out so callers can never
    mutate stored state through a reference they hold.
    """

    def __init__(self) -> None:
        self._bodies: dict[str, dict[str, Any]] = {}
        self._parents: dict[str, str | None] = {}
        logger.info("Initialized InMemoryFragmentStore")

    async def write_fragment(
        self, key: str, body: dict[str, Any], parent_key: str | None = None
    ) -> None:
        self._bodies[key] = copy.deepcopy(body)
        self._parents[key] = parent_key
        logger.debug(f"Wrote fragment {key}")

    async def read_fragment(self, key: str) -> dict[str, Any] | None:
        body = self._bodies.get(key)
        return copy.deepcopy(body) if body is not None else None

    async def list_fragments(self, parent_key: str) -> list[dict[str, Any]]:
        keys = sorted(k for k, parent in self._parents.items() if parent == parent_key)
        return [copy.deepcopy(self._bodies[k]) for k in keys]

    async def delete_fragment(self, key: str) -> bool:
        if key not in self._bodies:
            return False
        del self._bodies[key]
        del self._parents[key]
        logger.debug(f"Deleted fragment {key}")
        return True

    async def delete_children(self, parent_key: str) -> int:
        children = [k for k, parent in self._parents.items() if parent == parent_key]
        for key in children:
            del self._bodies[key]
            del self._parents[key]
        if children:
            logger.debug(f"Deleted {len(children)} child fragment(s) of {parent_key}")
        return len(children)

    async def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._bodies if k.startswith(prefix))
