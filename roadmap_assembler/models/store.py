# roadmap_assembler/models/store.py
"""
Fragment store protocol definition.

Defines the abstract interface that both InMemoryFragmentStore and
SQLiteFragmentStore implement. A store only knows keys, JSON bodies and
an optional parent key; it has no idea what a roadmap is.
"""

from abc import ABC, abstractmethod
from typing import Any


class FragmentStore(ABC):
    """
    Abstract base class for fragment storage backends.

    Bodies are JSON-compatible dicts. Writes are upserts.
    """

    @abstractmethod
    async def write_fragment(
        self, key: str, body: dict[str, Any], parent_key: str | None = None
    ) -> None:
        """
        Insert or replace a fragment.

        Args:
            key: Fragment key
            body: JSON-compatible body
            parent_key: Key of the owning fragment, if any
        """
        pass

    @abstractmethod
    async def read_fragment(self, key: str) -> dict[str, Any] | None:
        """
        Read a fragment body.

        Returns:
            Body if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_fragments(self, parent_key: str) -> list[dict[str, Any]]:
        """
        List the bodies of every fragment owned by parent_key, ordered by key.
        """
        pass

    @abstractmethod
    async def delete_fragment(self, key: str) -> bool:
        """
        Delete one fragment.

        Returns:
            True if a fragment was deleted
        """
        pass

    @abstractmethod
    async def delete_children(self, parent_key: str) -> int:
        """
        Delete every fragment owned by parent_key.

        Returns:
            Number of fragments deleted
        """
        pass

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> list[str]:
        """
        List fragment keys starting with prefix, sorted.
        """
        pass

    async def write_fragments(
        self, entries: list[tuple[str, dict[str, Any], str | None]]
    ) -> None:
        """
        Write several ``(key, body, parent_key)`` entries.

        Backends that support transactions override this to write all
        entries atomically.
        """
        for key, body, parent_key in entries:
            await self.write_fragment(key, body, parent_key)

    async def replace_fragments(
        self,
        entries: list[tuple[str, dict[str, Any], str | None]],
        stale_keys: list[str],
    ) -> None:
        """
        Write entries, then delete stale_keys.

        A failed write leaves every existing fragment in place. Backends
        that support transactions override this to do both atomically.

        Args:
            entries: ``(key, body, parent_key)`` tuples
            stale_keys: Keys to delete once every entry is written
        """
        await self.write_fragments(entries)
        for key in stale_keys:
            await self.delete_fragment(key)

    async def close(self) -> None:
        """Release backend resources. No-op unless overridden."""
        return None
