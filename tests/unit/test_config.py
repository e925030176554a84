# tests/unit/test_config.py
"""Tests for configuration loading and defaults."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from roadmap_assembler.config import RoadmapAssemblerConfig, get_db_path, load_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_creates_default_file(self, tmp_path: Path):
        config_path = tmp_path / "nested" / "config.yaml"

        config = load_config(config_path)

        assert config_path.exists()
        assert config == RoadmapAssemblerConfig()
        written = yaml.safe_load(config_path.read_text())
        assert written["partition"]["missing_fragment_policy"] == "degrade"
        assert written["partition"]["max_fragment_bytes"] == 1_048_576

    def test_reads_overrides(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "partition:\n"
            "  missing_fragment_policy: fail\n"
            "  max_fragment_bytes: 4096\n"
            "validation:\n"
            "  strict_fragment_kind: false\n"
            "output:\n"
            "  verbosity: quiet\n"
        )

        config = load_config(config_path)

        assert config.partition.missing_fragment_policy == "fail"
        assert config.partition.max_fragment_bytes == 4096
        assert config.validation.strict_fragment_kind is False
        assert config.output.verbosity == "quiet"
        assert config.storage.db_path is None

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        assert load_config(config_path) == RoadmapAssemblerConfig()

    def test_unknown_keys_ignored(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("legacy:\n  model: x\npartition:\n  colour: blue\n")

        assert load_config(config_path) == RoadmapAssemblerConfig()

    def test_invalid_policy_rejected(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("partition:\n  missing_fragment_policy: ignore\n")

        with pytest.raises(ValidationError):
            load_config(config_path)

    def test_non_positive_limit_rejected(self):
        with pytest.raises(ValidationError):
            RoadmapAssemblerConfig(partition={"max_fragment_bytes": 0})


class TestGetDbPath:
    """Tests for get_db_path()."""

    def test_default_in_config_dir(self, tmp_path: Path):
        with patch("roadmap_assembler.config.loader.user_config_path", return_value=tmp_path):
            assert get_db_path(RoadmapAssemblerConfig()) == tmp_path / "fragments.db"

    def test_override_expands_user(self):
        config = RoadmapAssemblerConfig(storage={"db_path": "~/roadmaps/store.db"})

        path = get_db_path(config)

        assert path == Path("~/roadmaps/store.db").expanduser()
        assert "~" not in str(path)
