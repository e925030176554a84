# roadmap_assembler/models/sqlite_store.py
"""
SQLite-backed fragment persistence.

Provides async upsert/read/delete with WAL mode and IMMEDIATE transactions
so a multi-fragment write either lands completely or not at all.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from roadmap_assembler.models.schema import init_db
from roadmap_assembler.models.store import FragmentStore
from roadmap_assembler.partition.engine import fragment_size

logger = logging.getLogger(__name__)

_UPSERT_SQL = """
INSERT INTO fragments (key, parent_key, body, size_bytes, updated_at)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT(key) DO UPDATE SET
    parent_key = excluded.parent_key,
    body = excluded.body,
    size_bytes = excluded.size_bytes,
    updated_at = excluded.updated_at
"""


def _row_values(key: str, body: dict[str, Any], parent_key: str | None) -> tuple:
    return (
        key,
        parent_key,
        json.dumps(body, separators=(",", ":"), ensure_ascii=False),
        fragment_size(body),
        datetime.now(timezone.utc).isoformat(),
    )


class SQLiteFragmentStore(FragmentStore):
    """
    Async SQLite-backed fragment storage.

    Features:
        - WAL mode for concurrent reads/writes
        - IMMEDIATE transactions for write safety
        - No persistent connections (avoids resource leaks)
    """

    def __init__(self, db_path: str) -> None:
        """
        Initialize SQLite fragment store.

        Args:
            db_path: Path to SQLite database file
        """
        self._db_path = db_path
        logger.info(f"Created SQLiteFragmentStore with path: {db_path}")

    async def initialize(self) -> None:
        """Create the database directory and schema."""
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        await init_db(self._db_path)

    async def write_fragment(
        self, key: str, body: dict[str, Any], parent_key: str | None = None
    ) -> None:
        await self.write_fragments([(key, body, parent_key)])

    async def write_fragments(
        self, entries: list[tuple[str, dict[str, Any], str | None]]
    ) -> None:
        """
        Write several fragments in one IMMEDIATE transaction.

        Args:
            entries: ``(key, body, parent_key)`` tuples
        """
        if not entries:
            return

        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")

            try:
                await db.executemany(
                    _UPSERT_SQL,
                    [_row_values(key, body, parent) for key, body, parent in entries],
                )
                await db.commit()
                logger.info(f"Wrote {len(entries)} fragment(s)")

            except Exception:
                await db.rollback()
                raise

    async def replace_fragments(
        self,
        entries: list[tuple[str, dict[str, Any], str | None]],
        stale_keys: list[str],
    ) -> None:
        """
        Upsert entries and delete stale_keys in one IMMEDIATE transaction.
        """
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")

            try:
                await db.executemany(
                    _UPSERT_SQL,
                    [_row_values(key, body, parent) for key, body, parent in entries],
                )
                await db.executemany(
                    "DELETE FROM fragments WHERE key = ?", [(key,) for key in stale_keys]
                )
                await db.commit()
                logger.info(
                    f"Wrote {len(entries)} fragment(s), deleted {len(stale_keys)} stale fragment(s)"
                )

            except Exception:
                await db.rollback()
                raise

    async def read_fragment(self, key: str) -> dict[str, Any] | None:
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute("SELECT body FROM fragments WHERE key = ?", (key,))
            row = await cursor.fetchone()

            if not row:
                return None

            return json.loads(row[0])

    async def list_fragments(self, parent_key: str) -> list[dict[str, Any]]:
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(
                "SELECT body FROM fragments WHERE parent_key = ? ORDER BY key",
                (parent_key,),
            )
            rows = await cursor.fetchall()

            return [json.loads(row[0]) for row in rows]

    async def delete_fragment(self, key: str) -> bool:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")

            try:
                cursor = await db.execute("DELETE FROM fragments WHERE key = ?", (key,))
                deleted = cursor.rowcount
                await db.commit()

            except Exception:
                await db.rollback()
                raise

        if deleted:
            logger.info(f"Deleted fragment {key}")
        return deleted > 0

    async def delete_children(self, parent_key: str) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")

            try:
                cursor = await db.execute(
                    "DELETE FROM fragments WHERE parent_key = ?", (parent_key,)
                )
                deleted = cursor.rowcount
                await db.commit()

            except Exception:
                await db.rollback()
                raise

        if deleted:
            logger.info(f"Deleted {deleted} child fragment(s) of {parent_key}")
        return deleted

    async def list_keys(self, prefix: str = "") -> list[str]:
        # substr() rather than LIKE: keys routinely contain '_'
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(
                "SELECT key FROM fragments WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix),
            )
            rows = await cursor.fetchall()

            return [row[0] for row in rows]

    async def close(self) -> None:
        """
        Checkpoint WAL and close database.

        Truncates WAL file to avoid unbounded growth.
        """
        try:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute("PRAGMA wal_checkpoint(TRUNCATE)")
                logger.info("WAL checkpoint completed")
        except Exception as e:
            logger.warning(f"WAL checkpoint failed: {e}")
