# tests/unit/test_partition.py
"""Tests for splitting roadmaps into outline + phase fragments and rebuilding them."""

import logging

import pytest

from roadmap_assembler.partition import (
    MissingFragmentPolicy,
    PartitionConsistencyError,
    fragment_size,
    index_fragments,
    reconstruct,
    split,
)
from roadmap_assembler.schemas import PhaseTaskFragment, Task


def _fragments(result) -> dict:
    return {fragment.phase_id: fragment for fragment in result.phase_fragments}


class TestSplit:
    """Tests for split()."""

    def test_outline_has_counts_and_no_tasks(self, make_document):
        result = split(make_document({"P1": 3, "P2": 1}))

        assert [p.task_count for p in result.outline.phases] == [3, 1]
        assert result.outline.total_tasks() == 4
        assert "phase_tasks" not in result.outline.to_wire()["roadmap"]["phases"][0]

    def test_one_fragment_per_non_empty_phase(self, make_document):
        result = split(make_document({"P1": 2, "P2": 0, "P3": 1}))

        assert [f.phase_id for f in result.phase_fragments] == ["P1", "P3"]
        assert result.outline.phases[1].task_count == 0

    def test_outline_keeps_phase_fields(self, make_document):
        result = split(make_document({"P1": 1}))
        entry = result.outline.phases[0]

        assert entry.phase_title == "Phase P1"
        assert entry.phase_summary == "Summary of P1"
        assert entry.model_extra["phase_number"] == 1

    def test_document_fields_copied(self, make_document):
        document = make_document({"P1": 1})
        outline = split(document).outline

        assert outline.title == document.title
        assert outline.tags == document.tags
        assert outline.project_level == "intermediate"


class TestReconstruct:
    """Tests for reconstruct()."""

    def test_round_trip_large_roadmap(self, make_document):
        """Three phases of fifty detailed tasks survive split + reconstruct unchanged."""
        document = make_document({"P1": 50, "P2": 50, "P3": 50}, detailed=True)
        result = split(document)

        rebuilt = reconstruct(result.outline, _fragments(result))
        assert rebuilt.is_complete
        assert rebuilt.document == document
        assert rebuilt.document.total_tasks() == 150

    def test_round_trip_with_empty_phase(self, make_document):
        document = make_document({"P1": 2, "P2": 0})
        result = split(document)

        rebuilt = reconstruct(result.outline, _fragments(result), MissingFragmentPolicy.FAIL)
        assert rebuilt.document == document
        assert rebuilt.document.phases[1].tasks == ()

    def test_unknown_keys_survive_round_trip(self, make_document):
        document = make_document({"P1": 1})
        rebuilt = reconstruct(split(document).outline, _fragments(split(document))).document

        task = rebuilt.phases[0].tasks[0]
        assert task.model_extra["task_number"] == 1
        assert rebuilt.phases[0].model_extra["phase_number"] == 1

    def test_missing_fragment_degrades(self, make_document, caplog):
        """Under DEGRADE the phase is empty and the error is reported alongside."""
        result = split(make_document({"P1": 2, "P2": 3}))
        fragments = _fragments(result)
        del fragments["P2"]

        with caplog.at_level(logging.WARNING):
            rebuilt = reconstruct(result.outline, fragments, MissingFragmentPolicy.DEGRADE)

        assert not rebuilt.is_complete
        assert rebuilt.document.phases[1].tasks == ()
        assert len(rebuilt.document.phases[0].tasks) == 2
        assert len(rebuilt.errors) == 1
        assert rebuilt.errors[0].phase_id == "P2"
        assert rebuilt.errors[0].expected_tasks == 3
        assert "Phase 'P2' declares 3 task(s) but its fragment is missing" in caplog.text

    def test_missing_fragment_fails(self, make_document):
        result = split(make_document({"P1": 2, "P2": 3}))
        fragments = _fragments(result)
        del fragments["P1"]

        with pytest.raises(PartitionConsistencyError, match="Phase 'P1' declares 2 task"):
            reconstruct(result.outline, fragments, MissingFragmentPolicy.FAIL)

    def test_policy_accepts_string(self, make_document):
        result = split(make_document({"P1": 1}))
        with pytest.raises(PartitionConsistencyError):
            reconstruct(result.outline, {}, "fail")

    def test_count_mismatch_uses_fragment(self, make_document, caplog):
        result = split(make_document({"P1": 2}))
        fragment = result.phase_fragments[0]
        trimmed = PhaseTaskFragment(phase_id="P1", tasks=fragment.tasks[:1])

        with caplog.at_level(logging.WARNING):
            rebuilt = reconstruct(result.outline, {"P1": trimmed})

        assert rebuilt.is_complete
        assert len(rebuilt.document.phases[0].tasks) == 1
        assert "outline says 2 task(s), fragment holds 1" in caplog.text


class TestFragmentHelpers:
    """Tests for index_fragments() and fragment_size()."""

    def test_index_later_fragment_wins(self, caplog):
        first = PhaseTaskFragment(phase_id="P1", tasks=())
        second = PhaseTaskFragment(
            phase_id="P1", tasks=(Task(task_id="T1", task_title="t", task_summary="s"),)
        )

        with caplog.at_level(logging.WARNING):
            indexed = index_fragments([first, second])

        assert indexed["P1"] is second
        assert "Duplicate phase fragment for 'P1'" in caplog.text

    def test_fragment_size_is_compact_utf8(self):
        assert fragment_size({"a": 1}) == len('{"a":1}')
        assert fragment_size({"t": "é"}) == len('{"t":""}') + 2
