# roadmap_assembler/merge/__init__.py
"""Keyed merge of skeleton, task and detail fragments."""

from .engine import MergeInvariantViolation, build_complete_roadmap, merge
from .stats import MergeStats, compute_merge_stats

__all__ = [
    "merge",
    "build_complete_roadmap",
    "MergeInvariantViolation",
    "MergeStats",
    "compute_merge_stats",
]
