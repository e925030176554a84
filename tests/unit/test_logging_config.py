# tests/unit/test_logging_config.py
"""Tests for stderr logging configuration."""

import json
import logging
import sys

import pytest

from roadmap_assembler.logging_config import (
    JsonFormatter,
    configure_cli_logging,
    configure_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Put the root and fastmcp loggers back the way pytest left them."""
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    fastmcp_logger = logging.getLogger("fastmcp")
    saved_fastmcp = (list(fastmcp_logger.handlers), fastmcp_logger.level, fastmcp_logger.propagate)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    fastmcp_logger.handlers[:] = saved_fastmcp[0]
    fastmcp_logger.setLevel(saved_fastmcp[1])
    fastmcp_logger.propagate = saved_fastmcp[2]


def test_json_formatter_emits_one_object():
    record = logging.LogRecord("roadmap_assembler.merge", logging.WARNING, __file__, 1, "Duplicate %s", ("P1",), None)

    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "WARNING"
    assert data["logger"] == "roadmap_assembler.merge"
    assert data["msg"] == "Duplicate P1"
    assert "exc" not in data


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    data = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in data["exc"]


def test_configure_logging_uses_stderr_only():
    configure_logging()

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stderr
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    assert logging.getLogger("fastmcp").propagate is False


@pytest.mark.parametrize(
    "verbosity, level",
    [("quiet", logging.WARNING), ("normal", logging.INFO), ("verbose", logging.DEBUG), ("loud", logging.INFO)],
)
def test_cli_verbosity_levels(verbosity, level):
    configure_cli_logging(verbosity)

    root = logging.getLogger()
    assert root.level == level
    assert root.handlers[0].stream is sys.stderr
