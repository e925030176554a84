# roadmap_assembler/validation/structural.py
"""
Structural validation of one document against one schema descriptor.

Walks raw parsed JSON (dicts/lists) with no knowledge of other documents.
Validation is total: every violation is collected in a single pass and the
walk never raises on malformed input.
"""

import logging
from typing import Any

from roadmap_assembler.schemas.descriptors import (
    FieldType,
    NodeDescriptor,
    SchemaDescriptor,
    SchemaKind,
    get_descriptor,
)
from roadmap_assembler.validation.report import ErrorCode, ValidationIssue, ValidationReport

logger = logging.getLogger(__name__)


def json_type(value: Any) -> str:
    """Name the JSON type of a parsed value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return FieldType.BOOLEAN.value
    if isinstance(value, (int, float)):
        return FieldType.NUMBER.value
    if isinstance(value, str):
        return FieldType.STRING.value
    if isinstance(value, (list, tuple)):
        return FieldType.ARRAY.value
    if isinstance(value, dict):
        return FieldType.OBJECT.value
    return type(value).__name__


class _Walk:
    """Issue collector for one validation call."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []

    def add(
        self,
        code: ErrorCode,
        text: str,
        location: tuple[str, ...],
        path: str,
        field: str | None = None,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        label = ", ".join(location)
        self.issues.append(
            ValidationIssue(
                code=code,
                message=f"{label}: {text}" if label else text,
                location=label,
                path=path,
                field=field,
                expected=expected,
                actual=actual,
            )
        )


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


class StructuralValidator:
    """Validates a document instance against a ``SchemaDescriptor``.

    Args:
        strict_fragment_kind: Report documents that carry another kind's
            top-level keys (a task file dropped in the skeleton slot) and
            skip the rest of their validation
    """

    def __init__(self, strict_fragment_kind: bool = True) -> None:
        self._strict = strict_fragment_kind

    def validate(self, document: Any, kind: SchemaKind | str) -> ValidationReport:
        """
        Validate one document.

        Args:
            document: Parsed JSON value
            kind: Document kind to validate against

        Returns:
            ValidationReport listing every violation found

        Raises:
            ValueError: If kind is not a known document kind
        """
        descriptor = get_descriptor(kind)
        walk = _Walk()

        if not isinstance(document, dict):
            walk.add(
                ErrorCode.NOT_AN_OBJECT,
                f"Document must be an object, got {json_type(document)}",
                (),
                "",
                expected=FieldType.OBJECT.value,
                actual=json_type(document),
            )
            return ValidationReport(issues=tuple(walk.issues))

        if self._strict and self._check_foreign_markers(document, descriptor, walk):
            return ValidationReport(issues=tuple(walk.issues))

        self._walk_node(document, descriptor.root, (), "", "", walk)
        self._check_schema_type(document, descriptor, walk)
        self._check_counts(document, descriptor, walk)

        report = ValidationReport(issues=tuple(walk.issues))
        logger.debug(f"Validated {descriptor.kind.value} document: {len(report.issues)} issue(s)")
        return report

    def _check_foreign_markers(
        self, document: dict, descriptor: SchemaDescriptor, walk: _Walk
    ) -> bool:
        for marker, other in descriptor.foreign_markers.items():
            if marker in document:
                walk.add(
                    ErrorCode.WRONG_FRAGMENT_KIND,
                    f"This appears to be a {other.value} file, not a {descriptor.kind.value} file",
                    (),
                    "",
                    field=marker,
                    expected=descriptor.kind.value,
                    actual=other.value,
                )
                return True
        return False

    def _walk_node(
        self,
        data: dict,
        node: NodeDescriptor,
        location: tuple[str, ...],
        prefix: str,
        path: str,
        walk: _Walk,
    ) -> None:
        """Validate one object. ``prefix`` is the dotted key path since the last label."""
        for key in node.required:
            if key not in data:
                walk.add(
                    ErrorCode.MISSING_REQUIRED,
                    f"Missing required property '{prefix}{key}'",
                    location,
                    _join(path, key),
                    field=f"{prefix}{key}",
                )

        for key, expected in node.types.items():
            if key not in data:
                continue
            value = data[key]
            name = f"{prefix}{key}"
            key_path = _join(path, key)
            actual = json_type(value)

            if actual != expected.value:
                walk.add(
                    ErrorCode.INVALID_TYPE,
                    f"Invalid type for '{name}': expected {expected.value}, got {actual}",
                    location,
                    key_path,
                    field=name,
                    expected=expected.value,
                    actual=actual,
                )
                continue

            allowed = node.enums.get(key)
            if allowed is not None and value not in allowed:
                walk.add(
                    ErrorCode.INVALID_ENUM,
                    f"Invalid value '{value}' for '{name}'. Must be one of: {', '.join(allowed)}",
                    location,
                    key_path,
                    field=name,
                    expected=", ".join(allowed),
                    actual=str(value),
                )

            if key in node.positive and value <= 0:
                walk.add(
                    ErrorCode.INVALID_VALUE,
                    f"Invalid value for '{name}': must be a positive number",
                    location,
                    key_path,
                    field=name,
                    expected="> 0",
                    actual=str(value),
                )

            if expected is FieldType.ARRAY:
                self._walk_array(value, key, node, location, prefix, key_path, walk)
            elif expected is FieldType.OBJECT and key in node.children:
                self._walk_node(value, node.children[key], location, f"{name}.", key_path, walk)

    def _walk_array(
        self,
        items: list,
        key: str,
        node: NodeDescriptor,
        location: tuple[str, ...],
        prefix: str,
        path: str,
        walk: _Walk,
    ) -> None:
        name = f"{prefix}{key}"
        item_type = node.item_types.get(key)
        if item_type is not None:
            for index, item in enumerate(items):
                actual = json_type(item)
                if actual != item_type.value:
                    walk.add(
                        ErrorCode.INVALID_TYPE,
                        f"Invalid type for '{name}[{index}]': expected {item_type.value}, got {actual}",
                        location,
                        f"{path}[{index}]",
                        field=f"{name}[{index}]",
                        expected=item_type.value,
                        actual=actual,
                    )
                elif key in node.non_blank_items and not item.strip():
                    walk.add(
                        ErrorCode.INVALID_VALUE,
                        f"Invalid value for '{name}[{index}]': must not be blank",
                        location,
                        f"{path}[{index}]",
                        field=f"{name}[{index}]",
                        actual=repr(item),
                    )

        child = node.children.get(key)
        if child is None:
            return

        for index, item in enumerate(items):
            item_location = location + (f"{child.label or key} {index + 1}",)
            item_path = f"{path}[{index}]"
            if not isinstance(item, dict):
                walk.add(
                    ErrorCode.NOT_AN_OBJECT,
                    f"Must be an object, got {json_type(item)}",
                    item_location,
                    item_path,
                    expected=FieldType.OBJECT.value,
                    actual=json_type(item),
                )
                continue
            self._walk_node(item, child, item_location, "", item_path, walk)

        id_key = node.unique.get(key)
        if id_key is not None:
            seen: set[str] = set()
            for item in items:
                if not isinstance(item, dict):
                    continue
                ident = item.get(id_key)
                if not isinstance(ident, str):
                    continue
                if ident in seen:
                    walk.add(
                        ErrorCode.DUPLICATE_ID,
                        f"Duplicate {id_key} '{ident}' in '{name}'",
                        location,
                        path,
                        field=id_key,
                        actual=ident,
                    )
                seen.add(ident)

    def _check_schema_type(
        self, document: dict, descriptor: SchemaDescriptor, walk: _Walk
    ) -> None:
        if not descriptor.schema_types:
            return
        metadata = document.get("schema_metadata")
        if not isinstance(metadata, dict):
            return
        schema_type = metadata.get("schema_type")
        allowed = descriptor.root.children["schema_metadata"].enums["schema_type"]
        if schema_type in allowed and schema_type not in descriptor.schema_types:
            walk.add(
                ErrorCode.SCHEMA_TYPE_MISMATCH,
                f"Expected schema_type '{descriptor.schema_types[0]}', got '{schema_type}'",
                (),
                "schema_metadata.schema_type",
                field="schema_metadata.schema_type",
                expected=descriptor.schema_types[0],
                actual=str(schema_type),
            )

    def _check_counts(
        self, document: dict, descriptor: SchemaDescriptor, walk: _Walk
    ) -> None:
        for count_key, array_path in descriptor.count_checks:
            declared = document.get(count_key)
            if json_type(declared) != FieldType.NUMBER.value:
                continue
            items: Any = document
            for part in array_path.split("."):
                items = items.get(part) if isinstance(items, dict) else None
            if not isinstance(items, list):
                continue
            if declared != len(items):
                walk.add(
                    ErrorCode.COUNT_MISMATCH,
                    f"{count_key} ({declared}) does not match actual count ({len(items)})",
                    (),
                    count_key,
                    field=count_key,
                    expected=str(len(items)),
                    actual=str(declared),
                )


_default_validator = StructuralValidator()


def validate(document: Any, kind: SchemaKind | str) -> ValidationReport:
    """Validate a document with the default (strict) validator."""
    return _default_validator.validate(document, kind)
