# roadmap_assembler/__init__.py
"""
roadmap-assembler: validate, merge and partition modular roadmap documents.

The engine is importable on its own; ``roadmap_assembler.cli`` and
``roadmap_assembler.server`` are thin surfaces over ``roadmap_assembler.tools``.
"""

from roadmap_assembler.merge.engine import (
    MergeInvariantViolation,
    build_complete_roadmap,
    merge,
)
from roadmap_assembler.partition.engine import (
    MissingFragmentPolicy,
    PartitionConsistencyError,
    reconstruct,
    split,
)
from roadmap_assembler.pipeline.assembler import assemble
from roadmap_assembler.schemas.descriptors import SchemaKind
from roadmap_assembler.schemas.document import RoadmapDocument
from roadmap_assembler.validation.references import validate_references
from roadmap_assembler.validation.report import ErrorCode, ValidationReport
from roadmap_assembler.validation.structural import validate

__version__ = "0.1.0"

__all__ = [
    "RoadmapDocument",
    "SchemaKind",
    "ErrorCode",
    "ValidationReport",
    "validate",
    "validate_references",
    "merge",
    "build_complete_roadmap",
    "MergeInvariantViolation",
    "split",
    "reconstruct",
    "MissingFragmentPolicy",
    "PartitionConsistencyError",
    "assemble",
]
