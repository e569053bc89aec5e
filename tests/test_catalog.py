"""Tests for catalog.py: discovery descriptors mirror the registry."""

from wpengine_mcp.catalog import export, field_json_schema
from wpengine_mcp.schemas import EMAIL_PATTERN, Field, build_registry

REGISTRY = build_registry()


class TestExport:
    def test_one_descriptor_per_schema_in_order(self):
        tools = export(REGISTRY)
        assert [t["name"] for t in tools] == REGISTRY.names()

    def test_required_and_optional_match_registry(self):
        for tool in export(REGISTRY):
            schema = REGISTRY.lookup(tool["name"])
            props = tool["inputSchema"]["properties"]
            required = set(tool["inputSchema"]["required"])
            assert required == schema.required_names()
            assert set(props) - required == schema.optional_names()

    def test_descriptor_shape(self):
        tool = next(t for t in export(REGISTRY) if t["name"] == "get_site")
        assert tool["description"]
        assert tool["inputSchema"]["type"] == "object"
        site_id = tool["inputSchema"]["properties"]["site_id"]
        assert site_id["type"] == "string"
        assert "pattern" in site_id

    def test_no_argument_tool(self):
        tool = next(t for t in export(REGISTRY) if t["name"] == "get_api_status")
        assert tool["inputSchema"] == {"type": "object", "properties": {}, "required": []}


class TestFieldJsonSchema:
    def test_enum(self):
        out = field_json_schema(Field("type", "enum", choices=("page", "all")))
        assert out == {"type": "string", "enum": ["page", "all"]}

    def test_integer_bounds_and_default(self):
        out = field_json_schema(
            Field("limit", "integer", description="n", default=25, minimum=1, maximum=100)
        )
        assert out == {
            "type": "integer",
            "description": "n",
            "minimum": 1,
            "maximum": 100,
            "default": 25,
        }

    def test_array_items(self):
        spec = Field(
            "emails",
            "array",
            min_items=1,
            items=Field("email", "string", pattern=EMAIL_PATTERN),
        )
        out = field_json_schema(spec)
        assert out["minItems"] == 1
        assert out["items"] == {"type": "string", "pattern": EMAIL_PATTERN}

    def test_string_lengths(self):
        out = field_json_schema(Field("name", "string", min_length=3, max_length=50))
        assert out["minLength"] == 3
        assert out["maxLength"] == 50
