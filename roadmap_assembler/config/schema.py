# roadmap_assembler/config/schema.py
"""
Pydantic configuration models for roadmap-assembler.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ValidationConfig(BaseModel):
    """Structural validation behaviour."""

    model_config = ConfigDict(extra="ignore")

    strict_fragment_kind: bool = Field(
        default=True,
        description="Report files uploaded in the wrong slot (e.g. a task file as skeleton)",
    )


class PartitionConfig(BaseModel):
    """Storage partitioning limits and missing-fragment handling."""

    model_config = ConfigDict(extra="ignore")

    missing_fragment_policy: Literal["degrade", "fail"] = Field(
        default="degrade",
        description="On load, 'degrade' returns empty phases plus errors, 'fail' aborts",
    )
    max_fragment_bytes: int = Field(
        default=1_048_576,
        gt=0,
        description="Largest serialized outline or phase fragment the store accepts",
    )


class StorageConfig(BaseModel):
    """Fragment store location."""

    model_config = ConfigDict(extra="ignore")

    db_path: str | None = Field(
        default=None,
        description="SQLite database path (defaults to fragments.db in the config dir)",
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = ConfigDict(extra="ignore")

    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )


class RoadmapAssemblerConfig(BaseModel):
    """Root configuration for roadmap-assembler."""

    model_config = ConfigDict(extra="ignore")

    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    partition: PartitionConfig = Field(default_factory=PartitionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
