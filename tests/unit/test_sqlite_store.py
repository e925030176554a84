# tests/unit/test_sqlite_store.py
"""
Unit tests for FragmentStore backends.

Every test runs against both InMemoryFragmentStore and SQLiteFragmentStore
so the two backends stay interchangeable.
"""

from pathlib import Path

import pytest
import pytest_asyncio

from roadmap_assembler.models.memory_store import InMemoryFragmentStore
from roadmap_assembler.models.sqlite_store import SQLiteFragmentStore
from roadmap_assembler.models.store import FragmentStore

PARENT = "roadmaps/rust-101"


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request, tmp_path: Path) -> FragmentStore:
    """Create and initialize a test store of each backend."""
    if request.param == "memory":
        store = InMemoryFragmentStore()
    else:
        store = SQLiteFragmentStore(str(tmp_path / "test_fragments.db"))
        await store.initialize()
    yield store
    await store.close()


@pytest.mark.asyncio
async def test_write_and_read_roundtrip(store: FragmentStore):
    """Test writing a fragment and reading it back preserves the body."""
    body = {"roadmap_id": "rust-101", "title": "Learn Rust ✓", "phases": [{"n": 1}]}
    await store.write_fragment(PARENT, body)

    assert await store.read_fragment(PARENT) == body


@pytest.mark.asyncio
async def test_read_missing_returns_none(store: FragmentStore):
    """Test reading an unknown key returns None."""
    assert await store.read_fragment("roadmaps/missing") is None


@pytest.mark.asyncio
async def test_write_is_upsert(store: FragmentStore):
    """Test writing the same key twice replaces the body."""
    await store.write_fragment(PARENT, {"version": 1})
    await store.write_fragment(PARENT, {"version": 2})

    assert await store.read_fragment(PARENT) == {"version": 2}
    assert await store.list_keys() == [PARENT]


@pytest.mark.asyncio
async def test_list_fragments_ordered_by_key(store: FragmentStore):
    """Test children are listed in key order, whatever the write order."""
    await store.write_fragment(PARENT, {"outline": True})
    await store.write_fragment(f"{PARENT}/phase_tasks/P2", {"phase_id": "P2"}, PARENT)
    await store.write_fragment(f"{PARENT}/phase_tasks/P1", {"phase_id": "P1"}, PARENT)

    bodies = await store.list_fragments(PARENT)
    assert [body["phase_id"] for body in bodies] == ["P1", "P2"]


@pytest.mark.asyncio
async def test_list_fragments_scoped_to_parent(store: FragmentStore):
    """Test another roadmap's children are not listed."""
    await store.write_fragment(f"{PARENT}/phase_tasks/P1", {"phase_id": "P1"}, PARENT)
    await store.write_fragment("roadmaps/go-101/phase_tasks/P1", {"phase_id": "G1"}, "roadmaps/go-101")

    bodies = await store.list_fragments(PARENT)
    assert bodies == [{"phase_id": "P1"}]


@pytest.mark.asyncio
async def test_write_fragments_batch(store: FragmentStore):
    """Test a batch write stores every entry with its parent."""
    await store.write_fragments(
        [
            (PARENT, {"outline": True}, None),
            (f"{PARENT}/phase_tasks/P1", {"phase_id": "P1"}, PARENT),
            (f"{PARENT}/phase_tasks/P2", {"phase_id": "P2"}, PARENT),
        ]
    )

    assert len(await store.list_fragments(PARENT)) == 2
    assert await store.read_fragment(PARENT) == {"outline": True}


@pytest.mark.asyncio
async def test_write_fragments_empty_is_noop(store: FragmentStore):
    """Test an empty batch writes nothing."""
    await store.write_fragments([])
    assert await store.list_keys() == []


@pytest.mark.asyncio
async def test_delete_fragment(store: FragmentStore):
    """Test deleting a fragment reports whether it existed."""
    await store.write_fragment(PARENT, {"outline": True})

    assert await store.delete_fragment(PARENT) is True
    assert await store.read_fragment(PARENT) is None
    assert await store.delete_fragment(PARENT) is False


@pytest.mark.asyncio
async def test_delete_children(store: FragmentStore):
    """Test deleting children leaves the parent in place."""
    await store.write_fragment(PARENT, {"outline": True})
    await store.write_fragment(f"{PARENT}/phase_tasks/P1", {"phase_id": "P1"}, PARENT)
    await store.write_fragment(f"{PARENT}/phase_tasks/P2", {"phase_id": "P2"}, PARENT)

    assert await store.delete_children(PARENT) == 2
    assert await store.list_fragments(PARENT) == []
    assert await store.read_fragment(PARENT) == {"outline": True}
    assert await store.delete_children(PARENT) == 0


@pytest.mark.asyncio
async def test_replace_fragments(store: FragmentStore):
    """Test replace upserts the new entries and removes only the stale keys."""
    await store.write_fragment(PARENT, {"version": 1})
    await store.write_fragment(f"{PARENT}/phase_tasks/P1", {"version": 1}, PARENT)
    await store.write_fragment(f"{PARENT}/phase_tasks/P2", {"version": 1}, PARENT)

    await store.replace_fragments(
        [
            (f"{PARENT}/phase_tasks/P1", {"version": 2}, PARENT),
            (PARENT, {"version": 2}, None),
        ],
        [f"{PARENT}/phase_tasks/P2"],
    )

    assert await store.list_keys() == [PARENT, f"{PARENT}/phase_tasks/P1"]
    assert await store.list_fragments(PARENT) == [{"version": 2}]
    assert await store.read_fragment(PARENT) == {"version": 2}


@pytest.mark.asyncio
async def test_sqlite_replace_rolls_back_on_error(tmp_path: Path, monkeypatch):
    """Test a failed replace leaves every previous fragment in place."""
    store = SQLiteFragmentStore(str(tmp_path / "test_fragments.db"))
    await store.initialize()
    await store.write_fragment(f"{PARENT}/phase_tasks/P1", {"version": 1}, PARENT)

    def fail(*args):
        raise OSError("disk full")

    monkeypatch.setattr("roadmap_assembler.models.sqlite_store._row_values", fail)

    with pytest.raises(OSError, match="disk full"):
        await store.replace_fragments(
            [(f"{PARENT}/phase_tasks/P2", {"version": 2}, PARENT)],
            [f"{PARENT}/phase_tasks/P1"],
        )

    assert await store.read_fragment(f"{PARENT}/phase_tasks/P1") == {"version": 1}
    assert await store.list_keys() == [f"{PARENT}/phase_tasks/P1"]


@pytest.mark.asyncio
async def test_list_keys_prefix_with_underscores(store: FragmentStore):
    """Test prefix matching treats '_' literally."""
    await store.write_fragment(f"{PARENT}/phase_tasks/P1", {}, PARENT)
    await store.write_fragment(f"{PARENT}/phaseXtasks/P1", {}, PARENT)
    await store.write_fragment("roadmaps/other", {})

    keys = await store.list_keys(f"{PARENT}/phase_tasks/")
    assert keys == [f"{PARENT}/phase_tasks/P1"]
    assert await store.list_keys("roadmaps/") == sorted(
        [f"{PARENT}/phase_tasks/P1", f"{PARENT}/phaseXtasks/P1", "roadmaps/other"]
    )


@pytest.mark.asyncio
async def test_returned_body_is_a_copy(store: FragmentStore):
    """Test mutating a returned body does not change stored state."""
    await store.write_fragment(PARENT, {"tags": ["rust"]})

    body = await store.read_fragment(PARENT)
    body["tags"].append("go")

    assert await store.read_fragment(PARENT) == {"tags": ["rust"]}


@pytest.mark.asyncio
async def test_sqlite_persists_across_instances(tmp_path: Path):
    """Test fragments survive a new store instance on the same file."""
    db_path = str(tmp_path / "persist.db")
    first = SQLiteFragmentStore(db_path)
    await first.initialize()
    await first.write_fragment(PARENT, {"outline": True})
    await first.close()

    second = SQLiteFragmentStore(db_path)
    await second.initialize()
    assert await second.read_fragment(PARENT) == {"outline": True}
    await second.close()


@pytest.mark.asyncio
async def test_sqlite_initialize_creates_directory(tmp_path: Path):
    """Test initialize creates missing parent directories."""
    db_path = tmp_path / "nested" / "dir" / "fragments.db"
    store = SQLiteFragmentStore(str(db_path))
    await store.initialize()

    assert db_path.exists()
