"""
Argument validation against a registered Schema.

Every violated field is collected before returning, so a caller can fix all
of them in one round trip. Values are checked, never coerced.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wpengine_mcp.exceptions import ValidationError
from wpengine_mcp.models import Failure, FieldError, ValidatedArguments
from wpengine_mcp.schemas import Field, Schema

REQUIRED = "required"


def _type_name(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _check_string(spec: Field, value: str, label: str) -> list[FieldError]:
    errors = []
    if spec.min_length is not None and len(value) < spec.min_length:
        errors.append(FieldError(label, f"must be at least {spec.min_length} characters"))
    if spec.max_length is not None and len(value) > spec.max_length:
        errors.append(FieldError(label, f"must be at most {spec.max_length} characters"))
    pattern = spec.compiled_pattern
    if pattern is not None and not pattern.fullmatch(value):
        errors.append(FieldError(label, spec.pattern_message or "has an invalid format"))
    return errors


def _check_range(spec: Field, value, label: str) -> list[FieldError]:
    errors = []
    if spec.minimum is not None and value < spec.minimum:
        errors.append(FieldError(label, f"must be greater than or equal to {spec.minimum:g}"))
    if spec.maximum is not None and value > spec.maximum:
        errors.append(FieldError(label, f"must be less than or equal to {spec.maximum:g}"))
    return errors


def check_value(spec: Field, value: Any, label: str | None = None) -> list[FieldError]:
    """Return the violations of a present (non-null) value against its field spec."""
    label = label or spec.name
    kind = spec.type

    if kind in ("string", "enum"):
        if not isinstance(value, str):
            return [FieldError(label, f"expected string, received {_type_name(value)}")]
        if kind == "enum":
            if value not in spec.choices:
                allowed = ", ".join(repr(c) for c in spec.choices)
                return [FieldError(label, f"must be one of {allowed}, received {value!r}")]
            return []
        return _check_string(spec, value, label)

    if kind == "integer":
        if isinstance(value, bool) or not isinstance(value, int):
            return [FieldError(label, f"expected integer, received {_type_name(value)}")]
        return _check_range(spec, value, label)

    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return [FieldError(label, f"expected number, received {_type_name(value)}")]
        return _check_range(spec, value, label)

    if kind == "boolean":
        if not isinstance(value, bool):
            return [FieldError(label, f"expected boolean, received {_type_name(value)}")]
        return []

    # array
    if not isinstance(value, (list, tuple)):
        return [FieldError(label, f"expected array, received {_type_name(value)}")]
    errors = []
    if spec.min_items is not None and len(value) < spec.min_items:
        errors.append(FieldError(label, f"must contain at least {spec.min_items} item(s)"))
    if spec.max_items is not None and len(value) > spec.max_items:
        errors.append(FieldError(label, f"must contain at most {spec.max_items} item(s)"))
    if spec.items is not None:
        for i, element in enumerate(value):
            if element is None:
                errors.append(FieldError(f"{label}.{i}", REQUIRED))
            else:
                errors.extend(check_value(spec.items, element, f"{label}.{i}"))
    return errors


def validate(schema: Schema, raw_arguments) -> ValidatedArguments | Failure:
    """Check raw tool arguments against ``schema``.

    Returns ValidatedArguments on success, or a ``validation`` Failure whose
    details list every violated field. Keys the schema does not declare are
    ignored; callers on newer clients may send fields we do not know yet.
    """
    if raw_arguments is None:
        raw_arguments = {}
    if not isinstance(raw_arguments, Mapping):
        reason = f"expected object, received {_type_name(raw_arguments)}"
        return Failure.from_error(ValidationError([FieldError("arguments", reason)]))

    errors: list[FieldError] = []
    values: dict[str, Any] = {}
    for spec in schema.fields:
        value = raw_arguments.get(spec.name)
        if value is None:
            if spec.required:
                errors.append(FieldError(spec.name, REQUIRED))
            elif spec.has_default:
                values[spec.name] = spec.default
            continue
        problems = check_value(spec, value)
        if problems:
            errors.extend(problems)
        else:
            values[spec.name] = list(value) if isinstance(value, tuple) else value

    if errors:
        return Failure.from_error(ValidationError(errors))
    return ValidatedArguments(operation=schema.name, arguments=values)
