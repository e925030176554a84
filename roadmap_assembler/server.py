# roadmap_assembler/server.py
"""
FastMCP server instance with tool registration.

CRITICAL: configure_logging() is called first to prevent stdout pollution.
All logging goes to stderr as JSON.
"""

# Configure logging FIRST before any other imports
from roadmap_assembler.logging_config import configure_logging

configure_logging()

# Now safe to import everything else
import logging
from typing import Any

from fastmcp import FastMCP

from roadmap_assembler.config.loader import get_db_path, load_config
from roadmap_assembler.config.schema import RoadmapAssemblerConfig
from roadmap_assembler.models.repository import RoadmapRepository
from roadmap_assembler.models.sqlite_store import SQLiteFragmentStore
from roadmap_assembler.tools.assemble_roadmap import assemble_roadmap as _assemble_roadmap
from roadmap_assembler.tools.delete_roadmap import delete_roadmap as _delete_roadmap
from roadmap_assembler.tools.list_roadmaps import list_roadmaps as _list_roadmaps
from roadmap_assembler.tools.load_roadmap import load_roadmap as _load_roadmap
from roadmap_assembler.tools.partition_roadmap import reconstruct_roadmap as _reconstruct_roadmap
from roadmap_assembler.tools.partition_roadmap import split_roadmap as _split_roadmap
from roadmap_assembler.tools.recount_roadmaps import recount_roadmaps as _recount_roadmaps
from roadmap_assembler.tools.save_roadmap import save_roadmap as _save_roadmap
from roadmap_assembler.tools.validate_fragment import validate_fragment as _validate_fragment

logger = logging.getLogger(__name__)

mcp = FastMCP("roadmap-assembler")

_config = load_config()
logger.info(
    f"Loaded configuration: policy={_config.partition.missing_fragment_policy}, "
    f"max_fragment_bytes={_config.partition.max_fragment_bytes}"
)

# Set by initialize_store() from __main__.py
_store: SQLiteFragmentStore | None = None


async def initialize_store(config: RoadmapAssemblerConfig | None = None) -> None:
    """
    Open the SQLite fragment store.

    Must be called before any storage tool call. Called by __main__.py on startup.
    """
    global _store

    db_path = get_db_path(config or _config)
    logger.info(f"Initializing fragment store with db_path={db_path}")

    _store = SQLiteFragmentStore(str(db_path))
    await _store.initialize()


async def shutdown_store() -> None:
    if _store is not None:
        await _store.close()


def get_repository() -> RoadmapRepository:
    """
    Raises:
        RuntimeError: If initialize_store() was not called
    """
    if _store is None:
        raise RuntimeError("Fragment store not initialized. Call initialize_store() first.")
    return RoadmapRepository.from_config(_store, _config)


@mcp.tool()
async def validate_fragment(document: Any, kind: str) -> dict:
    """Validate one roadmap document. kind is skeleton, phase_tasks, task_details or final."""
    return _validate_fragment(
        document, kind, strict_fragment_kind=_config.validation.strict_fragment_kind
    )


@mcp.tool()
async def assemble_roadmap(
    skeleton: Any, phase_tasks: list[Any], task_details: list[Any] | None = None
) -> dict:
    """Validate a skeleton with its phase tasks and task details files and merge them into one roadmap."""
    return _assemble_roadmap(
        skeleton,
        phase_tasks,
        task_details,
        strict_fragment_kind=_config.validation.strict_fragment_kind,
    )


@mcp.tool()
async def split_roadmap(roadmap: Any) -> dict:
    """Split a roadmap into an outline plus one task fragment per phase."""
    return _split_roadmap(roadmap)


@mcp.tool()
async def reconstruct_roadmap(
    outline: Any, phase_fragments: list[Any], policy: str = "degrade"
) -> dict:
    """Rebuild a roadmap from an outline and its phase fragments."""
    return _reconstruct_roadmap(outline, phase_fragments, policy)


@mcp.tool()
async def save_roadmap(roadmap: Any, roadmap_id: str | None = None) -> dict:
    """Store a roadmap. Overwrites roadmap_id if given, otherwise generates a new ID."""
    return await _save_roadmap(roadmap, get_repository(), roadmap_id)


@mcp.tool()
async def load_roadmap(roadmap_id: str, policy: str | None = None) -> dict:
    """Load a stored roadmap. Reports phases whose task fragments are missing."""
    return await _load_roadmap(roadmap_id, get_repository(), policy)


@mcp.tool()
async def list_roadmaps() -> dict:
    """List stored roadmaps with phase and task totals."""
    return await _list_roadmaps(get_repository())


@mcp.tool()
async def delete_roadmap(roadmap_id: str) -> dict:
    """Delete a stored roadmap and all its phase fragments."""
    return await _delete_roadmap(roadmap_id, get_repository())


@mcp.tool()
async def recount_roadmaps() -> dict:
    """Recompute task counts of every stored roadmap from its phase fragments."""
    return await _recount_roadmaps(get_repository())


logger.info("MCP server initialized with 9 tools")
