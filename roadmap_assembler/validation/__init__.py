# roadmap_assembler/validation/__init__.py
"""Structural and reference validation of roadmap documents and fragments."""

from .hints import Hint, annotate, hint_for
from .references import validate_references
from .report import ErrorCode, ValidationIssue, ValidationReport
from .sanitize import load_json_file, sanitize_json_path, sanitize_roadmap_id
from .structural import StructuralValidator, validate

__all__ = [
    "ErrorCode",
    "ValidationIssue",
    "ValidationReport",
    "StructuralValidator",
    "validate",
    "validate_references",
    "Hint",
    "hint_for",
    "annotate",
    "sanitize_roadmap_id",
    "sanitize_json_path",
    "load_json_file",
]
