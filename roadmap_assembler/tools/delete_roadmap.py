# roadmap_assembler/tools/delete_roadmap.py
"""delete_roadmap tool implementation."""

import logging

from fastmcp.exceptions import ToolError

from roadmap_assembler.models.repository import RoadmapNotFoundError, RoadmapRepository
from roadmap_assembler.models.responses import DeleteResponse
from roadmap_assembler.validation.sanitize import sanitize_roadmap_id

logger = logging.getLogger(__name__)


async def delete_roadmap(roadmap_id: str, repository: RoadmapRepository) -> dict:
    """
    Delete a stored roadmap and its phase fragments.

    Raises:
        ToolError: If roadmap not found
    """
    roadmap_id = sanitize_roadmap_id(roadmap_id)

    try:
        removed = await repository.delete(roadmap_id)
    except RoadmapNotFoundError as e:
        raise ToolError(str(e))

    return DeleteResponse(roadmap_id=roadmap_id, fragments_removed=removed).model_dump()
