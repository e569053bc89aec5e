"""Typed response definitions for tool invocations.

These TypedDicts document the shape of dicts returned to the MCP layer.
Runtime values are plain dicts.
"""

from __future__ import annotations

from typing import Any, TypedDict


class Envelope(TypedDict, total=False):
    """Uniform result of one invocation.

    ``success`` is True iff ``data`` is present and ``error`` is absent.
    """

    success: bool
    data: Any
    message: str
    error: str


class ToolDescriptor(TypedDict):
    """One entry of the discovery catalog."""

    name: str
    description: str
    inputSchema: dict[str, Any]
