# tests/unit/test_hints.py
"""Tests for validation reports and remediation hints."""

import pytest

from roadmap_assembler.validation import (
    ErrorCode,
    ValidationIssue,
    ValidationReport,
    annotate,
    hint_for,
    validate,
)


class TestValidationReport:
    """Tests for ValidationReport helpers."""

    def test_ok_is_valid(self):
        report = ValidationReport.ok()
        assert report.is_valid
        assert report.errors == []

    def test_prefixed_scopes_message_and_location(self):
        issue = ValidationIssue(
            code=ErrorCode.MISSING_REQUIRED,
            message="Task 1: Missing required property 'task_id'",
            location="Task 1",
        )
        report = ValidationReport(issues=(issue,)).prefixed("Task file 2")

        assert report.errors == ["Task file 2: Task 1: Missing required property 'task_id'"]
        assert report.issues[0].location == "Task file 2, Task 1"

    def test_prefixed_without_location(self):
        issue = ValidationIssue(code=ErrorCode.MISSING_REQUIRED, message="Missing required property 'title'")
        prefixed = issue.with_prefix("Skeleton")

        assert prefixed.message == "Skeleton: Missing required property 'title'"
        assert prefixed.location == "Skeleton"

    def test_combine_preserves_order(self):
        first = ValidationReport(
            issues=(ValidationIssue(code=ErrorCode.MISSING_REQUIRED, message="a"),)
        )
        second = ValidationReport(
            issues=(ValidationIssue(code=ErrorCode.INVALID_TYPE, message="b"),)
        )

        combined = ValidationReport.combine([first, second])
        assert combined.errors == ["a", "b"]
        assert (first + second) == combined

    def test_as_dict(self, make_roadmap):
        data = make_roadmap({"P1": 1})
        del data["title"]

        payload = validate(data, "final").as_dict()
        assert payload["is_valid"] is False
        assert payload["errors"] == ["Missing required property 'title'"]
        assert payload["issues"][0]["code"] == "missing_required"


class TestHints:
    """Tests for hint lookup."""

    @pytest.mark.parametrize("code", list(ErrorCode))
    def test_every_code_resolves(self, code):
        """Every error code maps to a severity and a non-empty suggestion."""
        hint = hint_for(ValidationIssue(code=code, message="x"))

        assert hint.severity in ("error", "warning", "info")
        assert hint.suggestion
        assert "{" not in hint.suggestion.replace("{}", "")

    def test_placeholders_filled_from_issue(self):
        issue = ValidationIssue(
            code=ErrorCode.MISSING_REQUIRED,
            message="Missing required property 'title'",
            field="title",
        )
        assert hint_for(issue).suggestion == 'Add the "title" property to your JSON structure.'

    def test_object_hint_keeps_braces(self):
        hint = hint_for(ValidationIssue(code=ErrorCode.NOT_AN_OBJECT, message="x"))
        assert hint.suggestion.endswith("curly braces {}.")

    def test_annotate_adds_severity_and_suggestion(self, make_task_details):
        report = validate(make_task_details("P1", "T1", level="impossible"), "task_details")

        entries = annotate(report.issues)
        assert len(entries) == 1
        assert entries[0]["severity"] == "warning"
        assert entries[0]["suggestion"].startswith("Use one of the allowed values: very_easy")
        assert entries[0]["message"] == report.errors[0]
