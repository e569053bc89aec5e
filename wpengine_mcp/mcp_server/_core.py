"""Core helpers: client and registry caching, envelope -> CallToolResult."""

from __future__ import annotations

import json

from mcp import types

from wpengine_mcp.client import WPEngineClient
from wpengine_mcp.schemas import SchemaRegistry, build_registry
from wpengine_mcp.types import Envelope

_client: WPEngineClient | None = None
_registry: SchemaRegistry | None = None


def _get_client() -> WPEngineClient:
    """Return a cached WPEngineClient, creating one on first use."""
    global _client
    if _client is None:
        _client = WPEngineClient()
    return _client


def _get_registry() -> SchemaRegistry:
    """Return the process-wide schema registry, building it on first use."""
    global _registry
    if _registry is None:
        _registry = build_registry()
    return _registry


def _envelope_text(envelope: Envelope) -> str:
    return json.dumps(envelope, indent=2, ensure_ascii=False, default=str)


def _to_call_result(envelope: Envelope) -> types.CallToolResult:
    """One text block with the serialized envelope; isError mirrors ``success``."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=_envelope_text(envelope))],
        isError=not envelope.get("success", False),
    )
