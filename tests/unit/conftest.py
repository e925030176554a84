# tests/unit/conftest.py
"""Shared builders for roadmap fragments and canonical documents."""

import pytest

from roadmap_assembler.schemas.document import RoadmapDocument

ROADMAP_ID = "rust-101"


def build_task(task_id: str, number: int = 1, **overrides) -> dict:
    """Build a valid task dict."""
    task = {
        "task_id": task_id,
        "task_number": number,
        "task_title": f"Task {task_id}",
        "task_summary": f"Summary of {task_id}",
        "task_priority": "mid",
        "task_tags": ["rust"],
        "task_dependencies": [],
    }
    task.update(overrides)
    return task


def build_task_detail(level: str = "normal") -> dict:
    """Build a valid task_detail body."""
    return {
        "explanation": {"content": "Read the book chapter.", "format": "markdown"},
        "difficulty": {
            "level": level,
            "reason_of_difficulty": "New syntax",
            "prerequisites_needed": ["basic programming"],
        },
        "est_time": {
            "min_time": {"amount": 1, "unit": "hours"},
            "max_time": {"amount": 3, "unit": "hours"},
            "factors_affecting_time": ["prior experience"],
        },
        "resource_links": [
            {
                "display_text": "The Rust Book",
                "url": "https://doc.rust-lang.org/book/",
                "type": "document",
                "is_essential": True,
            }
        ],
        "outcomes": ["Can write a hello world program"],
    }


def build_skeleton(phase_ids=("P1", "P2"), roadmap_id: str = ROADMAP_ID, **overrides) -> dict:
    """Build a valid skeleton fragment with one phase per ID and no tasks."""
    skeleton = {
        "schema_metadata": {"schema_type": "roadmap_skeleton", "roadmap_id": roadmap_id},
        "title": "Learn Rust",
        "description": "From zero to async Rust",
        "tags": ["rust", "systems"],
        "project_level": "beginner",
        "roadmap": {
            "phases": [
                {
                    "phase_id": phase_id,
                    "phase_number": i + 1,
                    "phase_title": f"Phase {phase_id}",
                    "phase_summary": f"Summary of {phase_id}",
                    "key_milestones": [f"Finish {phase_id}"],
                }
                for i, phase_id in enumerate(phase_ids)
            ]
        },
    }
    skeleton.update(overrides)
    return skeleton


def build_phase_tasks(phase_id: str, task_ids, roadmap_id: str = ROADMAP_ID) -> dict:
    """Build a valid phase_tasks fragment."""
    return {
        "schema_metadata": {
            "schema_type": "phase_tasks",
            "roadmap_id": roadmap_id,
            "target_phase_id": phase_id,
        },
        "phase_tasks": [build_task(task_id, i + 1) for i, task_id in enumerate(task_ids)],
    }


def build_task_details(
    phase_id: str, task_id: str, roadmap_id: str = ROADMAP_ID, level: str = "normal"
) -> dict:
    """Build a valid task_details fragment."""
    return {
        "schema_metadata": {
            "schema_type": "task_details",
            "roadmap_id": roadmap_id,
            "target_phase_id": phase_id,
            "target_task_id": task_id,
        },
        "task_detail": build_task_detail(level),
    }


def build_roadmap(tasks_per_phase: dict[str, int], detailed: bool = False) -> dict:
    """Build a canonical roadmap JSON with ``{phase_id: task count}``."""
    return {
        "title": "Learn Rust",
        "description": "From zero to async Rust",
        "tags": ["rust"],
        "project_level": "intermediate",
        "roadmap": {
            "phases": [
                {
                    "phase_id": phase_id,
                    "phase_number": i + 1,
                    "phase_title": f"Phase {phase_id}",
                    "phase_summary": f"Summary of {phase_id}",
                    "phase_tasks": [
                        build_task(
                            f"{phase_id}-T{n}",
                            n,
                            **({"task_detail": build_task_detail()} if detailed else {}),
                        )
                        for n in range(1, count + 1)
                    ],
                }
                for i, (phase_id, count) in enumerate(tasks_per_phase.items())
            ]
        },
    }


def build_document(tasks_per_phase: dict[str, int], detailed: bool = False) -> RoadmapDocument:
    return RoadmapDocument.model_validate(build_roadmap(tasks_per_phase, detailed))


@pytest.fixture
def make_skeleton():
    return build_skeleton


@pytest.fixture
def make_phase_tasks():
    return build_phase_tasks


@pytest.fixture
def make_task_details():
    return build_task_details


@pytest.fixture
def make_roadmap():
    return build_roadmap


@pytest.fixture
def make_document():
    return build_document
