# roadmap_assembler/tools/partition_roadmap.py
"""
split_roadmap and reconstruct_roadmap tool implementations.

Expose the partition engine without a store: a roadmap in, outline plus
phase fragments out, and back.
"""

import logging
from typing import Any

from fastmcp.exceptions import ToolError
from pydantic import ValidationError

from roadmap_assembler.models.responses import PartitionResponse, ReconstructResponse
from roadmap_assembler.partition.engine import (
    MissingFragmentPolicy,
    PartitionConsistencyError,
    ReconstructionResult,
    fragment_size,
    index_fragments,
    reconstruct,
    split,
)
from roadmap_assembler.schemas.descriptors import SchemaKind
from roadmap_assembler.schemas.document import RoadmapDocument
from roadmap_assembler.schemas.outline import PhaseTaskFragment, RoadmapOutline
from roadmap_assembler.validation.structural import validate

logger = logging.getLogger(__name__)


def parse_roadmap(roadmap: Any) -> RoadmapDocument:
    """
    Validate and parse a canonical roadmap.

    Raises:
        ToolError: If the roadmap fails structural validation
    """
    report = validate(roadmap, SchemaKind.FINAL)
    if not report.is_valid:
        raise ToolError(f"Invalid roadmap: {'; '.join(report.errors)}")
    try:
        return RoadmapDocument.model_validate(roadmap)
    except ValidationError as e:
        raise ToolError(f"Invalid roadmap: {e}")


def parse_policy(policy: str | None) -> MissingFragmentPolicy | None:
    """
    Raises:
        ToolError: If policy is not 'degrade' or 'fail'
    """
    if policy is None:
        return None
    try:
        return MissingFragmentPolicy(policy.strip().lower())
    except ValueError:
        raise ToolError(f"Unknown missing-fragment policy '{policy}'. Must be one of: degrade, fail")


def reconstruction_response(result: ReconstructionResult) -> ReconstructResponse:
    return ReconstructResponse(
        roadmap=result.document.to_wire(),
        complete=result.is_complete,
        missing_phases=[error.phase_id for error in result.errors],
        errors=[str(error) for error in result.errors],
    )


def split_roadmap(roadmap: Any) -> dict:
    """
    Split a canonical roadmap into an outline and per-phase task fragments.

    Args:
        roadmap: Parsed canonical roadmap JSON

    Returns:
        PartitionResponse as dict

    Raises:
        ToolError: If the roadmap is invalid
    """
    document = parse_roadmap(roadmap)
    result = split(document)

    fragments = [fragment.to_wire() for fragment in result.phase_fragments]
    response = PartitionResponse(
        outline=result.outline.to_wire(),
        phase_fragments=fragments,
        fragment_sizes={body["phase_id"]: fragment_size(body) for body in fragments},
    )

    logger.info(f"Split roadmap into {len(fragments)} phase fragment(s)")
    return response.model_dump()


def reconstruct_roadmap(
    outline: Any, phase_fragments: list[Any], policy: str = "degrade"
) -> dict:
    """
    Rebuild a canonical roadmap from an outline and its phase fragments.

    Args:
        outline: Parsed outline JSON (phases carry task_count)
        phase_fragments: Parsed phase fragments ``{phase_id, tasks}``
        policy: 'degrade' (empty phase plus error) or 'fail'

    Returns:
        ReconstructResponse as dict

    Raises:
        ToolError: If inputs are malformed, or a fragment is missing under 'fail'
    """
    missing_policy = parse_policy(policy) or MissingFragmentPolicy.DEGRADE

    try:
        parsed_outline = RoadmapOutline.model_validate(outline)
        fragments = [PhaseTaskFragment.model_validate(body) for body in phase_fragments]
    except ValidationError as e:
        raise ToolError(f"Invalid outline or phase fragment: {e}")

    try:
        result = reconstruct(parsed_outline, index_fragments(fragments), missing_policy)
    except PartitionConsistencyError as e:
        raise ToolError(str(e))

    logger.info(f"Reconstructed roadmap (complete={result.is_complete})")
    return reconstruction_response(result).model_dump()
