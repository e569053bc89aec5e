"""Tool catalog exporter: projects the schema registry into MCP discovery format."""

from __future__ import annotations

from typing import Any

from wpengine_mcp.schemas import Field, Schema, SchemaRegistry
from wpengine_mcp.types import ToolDescriptor


def field_json_schema(spec: Field) -> dict[str, Any]:
    """JSON Schema for one declared field."""
    if spec.type == "enum":
        out: dict[str, Any] = {"type": "string", "enum": list(spec.choices)}
    else:
        out = {"type": spec.type}
    if spec.description:
        out["description"] = spec.description
    if spec.pattern:
        out["pattern"] = spec.pattern
    if spec.min_length is not None:
        out["minLength"] = spec.min_length
    if spec.max_length is not None:
        out["maxLength"] = spec.max_length
    if spec.minimum is not None:
        out["minimum"] = spec.minimum
    if spec.maximum is not None:
        out["maximum"] = spec.maximum
    if spec.min_items is not None:
        out["minItems"] = spec.min_items
    if spec.max_items is not None:
        out["maxItems"] = spec.max_items
    if spec.items is not None:
        out["items"] = field_json_schema(spec.items)
    if spec.has_default:
        out["default"] = spec.default
    return out


def input_schema(schema: Schema) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {f.name: field_json_schema(f) for f in schema.fields},
        "required": [f.name for f in schema.fields if f.required],
    }


def export(registry: SchemaRegistry) -> list[ToolDescriptor]:
    """Discovery catalog in registry order."""
    return [
        {
            "name": schema.name,
            "description": schema.description,
            "inputSchema": input_schema(schema),
        }
        for schema in registry
    ]
