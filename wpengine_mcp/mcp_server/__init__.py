"""MCP server exposing the WP Engine API as tools.

Package structure:
  __init__.py  Server init, register() call, main()
  __main__.py  ``python -m wpengine_mcp.mcp_server`` entry point
  _core.py     Client/registry caching, envelope -> CallToolResult
  _tools.py    list_tools / call_tool handlers

Run: wpengine-mcp serve   (or python -m wpengine_mcp.mcp_server)
"""

from __future__ import annotations

import asyncio
import logging
import sys

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from wpengine_mcp import config
from wpengine_mcp.exceptions import SetupError
from wpengine_mcp.mcp_server import _core, _tools
from wpengine_mcp.models import Failure

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "WP Engine hosting management tools (accounts, sites, installs, domains, "
    "backups, cache, account users, SSH keys). "
    "All IDs must be full 36-char UUIDs. "
    "Every result is a JSON envelope {success, data|error, message?}; "
    "validation errors list every invalid field at once. "
    "delete_* tools are permanent."
)


def build_server() -> Server:
    server = Server(config.SERVER_NAME, version=config.VERSION, instructions=INSTRUCTIONS)
    _tools.register(server)
    return server


server = build_server()

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from wpengine_mcp.mcp_server._core import (  # noqa: E402, F401
    _get_client,
    _get_registry,
    _to_call_result,
)
from wpengine_mcp.mcp_server._tools import call_tool, list_tools  # noqa: E402, F401


async def _serve_stdio():
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def _check_connection():
    """GET /user once before serving; exit 1 when the API rejects us."""
    outcome = _core._get_client().get_current_user()
    if isinstance(outcome, Failure):
        print(f"Failed to connect to WP Engine API: {outcome.message}", file=sys.stderr)
        sys.exit(1)
    logger.info("Connected to WP Engine API")


def main():
    """Run the MCP server (stdio transport). Exits 2 on bad configuration.

    With WPENGINE_STARTUP_CHECK set, the credentials are tried against the
    API first and a rejected connection exits 1.
    """
    config.configure_logging()
    try:
        config.check_config()
    except SetupError as e:
        print(f"Environment configuration error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    _core._get_registry()
    if config.STARTUP_CHECK:
        _check_connection()
    asyncio.run(_serve_stdio())
