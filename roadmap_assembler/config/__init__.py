# roadmap_assembler/config/__init__.py
"""Configuration system for roadmap-assembler."""

from .loader import get_config_path, get_db_path, load_config
from .schema import (
    OutputConfig,
    PartitionConfig,
    RoadmapAssemblerConfig,
    StorageConfig,
    ValidationConfig,
)

__all__ = [
    "RoadmapAssemblerConfig",
    "ValidationConfig",
    "PartitionConfig",
    "StorageConfig",
    "OutputConfig",
    "load_config",
    "get_config_path",
    "get_db_path",
]
