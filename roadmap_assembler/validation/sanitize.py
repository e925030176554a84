# roadmap_assembler/validation/sanitize.py
"""
Input sanitization for the tool layer.

Checks identifiers and file paths handed in by the CLI or MCP clients
before they reach the engine or the fragment store.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from fastmcp.exceptions import ToolError

logger = logging.getLogger(__name__)

_ROADMAP_ID_PATTERN = r"^[a-zA-Z0-9_-]{1,128}$"


def sanitize_roadmap_id(roadmap_id: str) -> str:
    """
    Sanitize and validate a roadmap ID.

    Roadmap IDs become storage keys, so they are limited to letters,
    digits, hyphens and underscores (1-128 characters).

    Args:
        roadmap_id: User-provided roadmap ID

    Returns:
        Validated roadmap ID

    Raises:
        ToolError: If roadmap ID format is invalid
    """
    cleaned = roadmap_id.strip()
    if not re.match(_ROADMAP_ID_PATTERN, cleaned):
        raise ToolError(
            f"Invalid roadmap ID '{roadmap_id}': must be 1-128 letters, digits, "
            f"hyphens or underscores"
        )
    return cleaned


def sanitize_file_stem(name: str) -> str:
    """
    Check that an identifier taken from document data, such as a
    phase_id, is a bare file name.

    Raises:
        ToolError: If name is empty, "." or "..", or contains a separator
    """
    if name in ("", ".", "..") or "/" in name or "\\" in name or "\0" in name:
        raise ToolError(f"Invalid file name '{name}': must not contain path separators")
    return name


def sanitize_json_path(user_path: str | Path) -> Path:
    """
    Resolve a JSON file path and check that it exists.

    Raises:
        ToolError: If path is invalid, missing, or not a file
    """
    try:
        resolved = Path(user_path).resolve()
    except (ValueError, OSError) as e:
        raise ToolError(f"Invalid path '{user_path}': {e}")

    if not resolved.exists():
        raise ToolError(f"Path does not exist: {resolved}")

    if not resolved.is_file():
        raise ToolError(f"Path is not a file: {resolved}")

    return resolved


def load_json_file(user_path: str | Path) -> Any:
    """
    Read and parse a UTF-8 JSON file.

    Args:
        user_path: Path to the JSON file

    Returns:
        Parsed JSON value

    Raises:
        ToolError: If the file cannot be read, is not UTF-8, or is not valid JSON
    """
    path = sanitize_json_path(user_path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ToolError(f"Invalid JSON in {path.name}: {e}")
    except UnicodeDecodeError as e:
        raise ToolError(f"{path.name} is not valid UTF-8: {e}")
    except OSError as e:
        raise ToolError(f"Could not read {path}: {e}")

    logger.info(f"Loaded {path}")
    return data
