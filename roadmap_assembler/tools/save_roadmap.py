# roadmap_assembler/tools/save_roadmap.py
"""
save_roadmap tool implementation.

Validates a canonical roadmap and stores it as outline + phase fragments.
"""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from roadmap_assembler.models.repository import RoadmapRepository, generate_roadmap_id
from roadmap_assembler.partition.engine import FragmentTooLargeError
from roadmap_assembler.tools.partition_roadmap import parse_roadmap
from roadmap_assembler.validation.sanitize import sanitize_roadmap_id

logger = logging.getLogger(__name__)


async def save_roadmap(
    roadmap: Any, repository: RoadmapRepository, roadmap_id: str | None = None
) -> dict:
    """
    Save a roadmap, replacing any previous version under the same ID.

    Args:
        roadmap: Parsed canonical roadmap JSON
        repository: Roadmap repository
        roadmap_id: Existing ID to overwrite; generated from the title if None

    Returns:
        SaveResponse as dict

    Raises:
        ToolError: If the roadmap or ID is invalid, or a fragment is too large
    """
    document = parse_roadmap(roadmap)
    target_id = sanitize_roadmap_id(roadmap_id) if roadmap_id else generate_roadmap_id(document.title)

    try:
        response = await repository.save(target_id, document)
    except FragmentTooLargeError as e:
        raise ToolError(f"Cannot save roadmap: {e}")

    logger.info(f"Saved roadmap {target_id}")
    return response.model_dump()
