"""
Argument validation for tool calls.

Checks a raw argument bag against a tool descriptor's input schema and
builds the tool's argument record. Unknown fields are passed through in
the record's ``extra`` mapping.
"""

import re
from typing import Any

from google_services_mcp.types import (
    InvalidEnumValue,
    InvalidFieldType,
    MissingRequiredField,
    ToolArgs,
    ToolDescriptor,
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_field_name(wire_name: str) -> str:
    """Convert a wire field name (camelCase) to its record attribute name."""
    return _CAMEL_BOUNDARY.sub("_", wire_name).lower()


def type_name(value: Any) -> str:
    """Name the JSON type of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def matches_type(value: Any, expected: str) -> bool:
    """Check a value against a JSON schema primitive type."""
    actual = type_name(value)
    if expected == "integer":
        return actual == "number" and float(value).is_integer()
    return actual == expected


def _check_field(name: str, value: Any, prop: dict[str, Any]) -> None:
    expected = prop.get("type")
    if expected and not matches_type(value, expected):
        raise InvalidFieldType(name, expected, type_name(value))

    allowed = prop.get("enum")
    if allowed is not None and value not in allowed:
        raise InvalidEnumValue(name, value, allowed)

    items = prop.get("items")
    if items and isinstance(value, list):
        for position, item in enumerate(value):
            _check_field(f"{name}[{position}]", item, items)


def validate(descriptor: ToolDescriptor, arguments: Any) -> ToolArgs:
    """
    Validate raw arguments for a tool and build its argument record.

    Args:
        descriptor: The tool being called
        arguments: Decoded JSON arguments (None is treated as empty)

    Returns:
        An instance of descriptor.arguments

    Raises:
        MissingRequiredField: A required field is absent or null
        InvalidFieldType: A field has the wrong JSON type
        InvalidEnumValue: A field is outside its enumerated values
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidFieldType("arguments", "object", type_name(arguments))

    for name in descriptor.required:
        if arguments.get(name) is None:
            raise MissingRequiredField(name)

    properties = descriptor.properties
    fields: dict[str, Any] = {}
    extra: dict[str, Any] = {}

    for name, value in arguments.items():
        prop = properties.get(name)
        if prop is None:
            extra[name] = value
            continue
        # Optional fields sent as null are treated as absent
        if value is None:
            continue
        _check_field(name, value, prop)
        fields[to_field_name(name)] = value

    return descriptor.arguments(extra=extra, **fields)
