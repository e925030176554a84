# roadmap_assembler/tools/load_roadmap.py
"""
load_roadmap tool implementation.

Reads a stored outline and its phase fragments and rebuilds the roadmap.
"""

import logging

from fastmcp.exceptions import ToolError

from roadmap_assembler.models.repository import RoadmapRepository
from roadmap_assembler.partition.engine import PartitionConsistencyError
from roadmap_assembler.tools.partition_roadmap import parse_policy, reconstruction_response
from roadmap_assembler.validation.sanitize import sanitize_roadmap_id

logger = logging.getLogger(__name__)


async def load_roadmap(
    roadmap_id: str, repository: RoadmapRepository, policy: str | None = None
) -> dict:
    """
    Load a stored roadmap.

    Args:
        roadmap_id: Roadmap identifier
        repository: Roadmap repository
        policy: 'degrade' or 'fail'; the configured policy if None

    Returns:
        ReconstructResponse as dict

    Raises:
        ToolError: If roadmap not found, or a fragment is missing under 'fail'
    """
    roadmap_id = sanitize_roadmap_id(roadmap_id)

    try:
        result = await repository.load(roadmap_id, parse_policy(policy))
    except PartitionConsistencyError as e:
        raise ToolError(f"Roadmap '{roadmap_id}' is incomplete: {e}")

    if result is None:
        raise ToolError(f"Roadmap '{roadmap_id}' not found")

    if not result.is_complete:
        logger.warning(f"Roadmap {roadmap_id} loaded with {len(result.errors)} missing fragment(s)")
    return reconstruction_response(result).model_dump()
