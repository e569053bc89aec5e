"""Discovery and invocation handlers registered on the low-level MCP server."""

from __future__ import annotations

import asyncio
from typing import Any

from mcp import types

from wpengine_mcp import catalog
from wpengine_mcp.invocation import invoke
from wpengine_mcp.mcp_server import _core


async def list_tools() -> list[types.Tool]:
    """Answer a discovery request from the exported catalog."""
    return [
        types.Tool(name=t["name"], description=t["description"], inputSchema=t["inputSchema"])
        for t in catalog.export(_core._get_registry())
    ]


async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
    """Run one invocation off the event loop; the backend call is blocking I/O."""
    envelope = await asyncio.to_thread(
        invoke,
        name,
        arguments or {},
        registry=_core._get_registry(),
        client=_core._get_client(),
    )
    return _core._to_call_result(envelope)


def register(server):
    """Register discovery and call handlers with the Server instance."""
    server.list_tools()(list_tools)
    # Arguments are checked by validation.validate inside invoke().
    server.call_tool(validate_input=False)(call_tool)
