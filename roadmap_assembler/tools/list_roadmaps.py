# roadmap_assembler/tools/list_roadmaps.py
"""
list_roadmaps tool implementation.

Lists stored roadmaps with their phase and task totals.
"""

import logging

from roadmap_assembler.models.repository import RoadmapRepository
from roadmap_assembler.models.responses import ListRoadmapsResponse

logger = logging.getLogger(__name__)


async def list_roadmaps(repository: RoadmapRepository) -> dict:
    """
    List all stored roadmaps, most recently saved first.

    Args:
        repository: Roadmap repository

    Returns:
        ListRoadmapsResponse as dict
    """
    summaries = await repository.list_summaries()
    response = ListRoadmapsResponse(roadmaps=summaries, total=len(summaries))

    logger.info(f"Listed {len(summaries)} roadmaps")
    return response.model_dump()
