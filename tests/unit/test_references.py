# tests/unit/test_references.py
"""Tests for pairwise reference validation."""

from roadmap_assembler.schemas import PhaseTasksFragment, SkeletonFragment, TaskDetailsFragment
from roadmap_assembler.validation import ErrorCode, validate_references


def _skeleton(build, *args, **kwargs) -> SkeletonFragment:
    return SkeletonFragment.model_validate(build(*args, **kwargs))


def _tasks(build, *args, **kwargs) -> PhaseTasksFragment:
    return PhaseTasksFragment.model_validate(build(*args, **kwargs))


def _details(build, *args, **kwargs) -> TaskDetailsFragment:
    return TaskDetailsFragment.model_validate(build(*args, **kwargs))


class TestSkeletonToPhaseTasks:
    """References from a phase tasks fragment to the skeleton."""

    def test_valid_target(self, make_skeleton, make_phase_tasks):
        report = validate_references(
            _skeleton(make_skeleton, ("P1", "P2")),
            _tasks(make_phase_tasks, "P2", ["T1"]),
        )
        assert report.is_valid

    def test_unknown_target_phase(self, make_skeleton, make_phase_tasks):
        """An unknown target phase yields exactly one reference error."""
        report = validate_references(
            _skeleton(make_skeleton, ("P1", "P2")),
            _tasks(make_phase_tasks, "P9", ["T1"]),
        )

        assert report.codes() == [ErrorCode.PHASE_NOT_FOUND]
        assert report.errors == ["Target phase 'P9' not found in roadmap skeleton"]
        assert report.issues[0].expected == "P1, P2"
        assert report.issues[0].actual == "P9"

    def test_roadmap_id_mismatch(self, make_skeleton, make_phase_tasks):
        report = validate_references(
            _skeleton(make_skeleton, ("P1",)),
            _tasks(make_phase_tasks, "P1", ["T1"], roadmap_id="go-101"),
        )

        assert report.codes() == [ErrorCode.ROADMAP_ID_MISMATCH]
        assert report.errors == ["Roadmap ID mismatch between schemas"]
        assert report.issues[0].expected == "rust-101"
        assert report.issues[0].actual == "go-101"

    def test_id_mismatch_and_missing_phase_both_reported(self, make_skeleton, make_phase_tasks):
        report = validate_references(
            _skeleton(make_skeleton, ("P1",)),
            _tasks(make_phase_tasks, "P9", ["T1"], roadmap_id="go-101"),
        )
        assert report.codes() == [ErrorCode.ROADMAP_ID_MISMATCH, ErrorCode.PHASE_NOT_FOUND]


class TestPhaseTasksToDetails:
    """References from a task details fragment to its phase tasks fragment."""

    def test_valid_target(self, make_phase_tasks, make_task_details):
        report = validate_references(
            _tasks(make_phase_tasks, "P1", ["T1", "T2"]),
            _details(make_task_details, "P1", "T2"),
        )
        assert report.is_valid

    def test_unknown_task(self, make_phase_tasks, make_task_details):
        report = validate_references(
            _tasks(make_phase_tasks, "P1", ["T1"]),
            _details(make_task_details, "P1", "T7"),
        )

        assert report.codes() == [ErrorCode.TASK_NOT_FOUND]
        assert report.errors == ["Target task 'T7' not found in phase tasks"]

    def test_phase_mismatch(self, make_phase_tasks, make_task_details):
        report = validate_references(
            _tasks(make_phase_tasks, "P1", ["T1"]),
            _details(make_task_details, "P2", "T1"),
        )

        assert report.codes() == [ErrorCode.PHASE_MISMATCH]
        assert report.issues[0].expected == "P1"
        assert report.issues[0].actual == "P2"


class TestUnsupportedPairs:
    """Pairs that have no parent/child relationship."""

    def test_skeleton_to_details(self, make_skeleton, make_task_details):
        report = validate_references(
            _skeleton(make_skeleton, ("P1",)),
            _details(make_task_details, "P1", "T1"),
        )
        assert report.codes() == [ErrorCode.UNSUPPORTED_PAIR]
        assert "SkeletonFragment" in report.errors[0]

    def test_reversed_pair(self, make_skeleton, make_phase_tasks):
        report = validate_references(
            _tasks(make_phase_tasks, "P1", ["T1"]),
            _skeleton(make_skeleton, ("P1",)),
        )
        assert report.codes() == [ErrorCode.UNSUPPORTED_PAIR]
