# roadmap_assembler/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config directory management.
"""

import logging
from pathlib import Path

import yaml
from platformdirs import user_config_path

from .schema import RoadmapAssemblerConfig

logger = logging.getLogger(__name__)

APP_NAME = "roadmap-assembler"


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path(APP_NAME, ensure_exists=True)
    return config_dir / "config.yaml"


def get_db_path(config: RoadmapAssemblerConfig) -> Path:
    """Resolve the fragment database path, defaulting to the config directory."""
    if config.storage.db_path:
        return Path(config.storage.db_path).expanduser()
    return user_config_path(APP_NAME, ensure_exists=True) / "fragments.db"


def load_config(config_path: Path | None = None) -> RoadmapAssemblerConfig:
    """
    Load configuration from YAML file.

    If config file doesn't exist, creates it with defaults.
    Returns validated Pydantic model.

    Args:
        config_path: Override for the config file location
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        default_config = RoadmapAssemblerConfig()
        config_dict = default_config.model_dump(mode="json")

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Created default config at {config_path}")
        return default_config

    with config_path.open("r") as f:
        # An empty file parses to None
        config_data = yaml.safe_load(f) or {}

    config = RoadmapAssemblerConfig(**config_data)
    logger.info(f"Loaded config from {config_path}")
    return config
