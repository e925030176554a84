# roadmap_assembler/pipeline/__init__.py
"""Ordered validate-then-merge pipeline for a whole upload."""

from .assembler import AssemblyResult, assemble

__all__ = ["assemble", "AssemblyResult"]
