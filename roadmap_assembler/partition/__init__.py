# roadmap_assembler/partition/__init__.py
"""Outline + phase-fragment partitioning of canonical roadmaps."""

from .engine import (
    DEFAULT_MAX_FRAGMENT_BYTES,
    FragmentTooLargeError,
    MissingFragmentPolicy,
    PartitionConsistencyError,
    PartitionResult,
    ReconstructionResult,
    fragment_size,
    index_fragments,
    reconstruct,
    split,
)

__all__ = [
    "split",
    "reconstruct",
    "index_fragments",
    "fragment_size",
    "PartitionResult",
    "ReconstructionResult",
    "MissingFragmentPolicy",
    "PartitionConsistencyError",
    "FragmentTooLargeError",
    "DEFAULT_MAX_FRAGMENT_BYTES",
]
