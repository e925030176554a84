# roadmap_assembler/tools/recount_roadmaps.py
"""
recount_roadmaps tool implementation.

Batch maintenance: recompute every stored outline's task counts from the
phase fragments actually present.
"""

import logging

from roadmap_assembler.models.repository import RoadmapRepository
from roadmap_assembler.models.responses import RecountResponse

logger = logging.getLogger(__name__)


async def recount_roadmaps(repository: RoadmapRepository) -> dict:
    """
    Recount all stored roadmaps.

    Args:
        repository: Roadmap repository

    Returns:
        RecountResponse as dict
    """
    entries = await repository.recount_all()
    corrected = sum(1 for entry in entries if entry.changed)

    logger.info(f"Recounted {len(entries)} roadmaps, corrected {corrected}")
    return RecountResponse(roadmaps=entries, corrected=corrected).model_dump()
