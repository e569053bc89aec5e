"""
Single-invocation pipeline: lookup -> validate -> dispatch -> normalize.

Each call is memoryless. The registry is read-only and the client keeps no
per-call state, so concurrent invocations need no locking.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wpengine_mcp.dispatcher import dispatch
from wpengine_mcp.exceptions import CliError, UnknownOperationError
from wpengine_mcp.models import Failure
from wpengine_mcp.normalizer import normalize
from wpengine_mcp.schemas import SchemaRegistry
from wpengine_mcp.types import Envelope
from wpengine_mcp.validation import validate


def invoke(
    name: str,
    arguments: Mapping[str, Any] | None,
    *,
    registry: SchemaRegistry,
    client,
) -> Envelope:
    """Run one tool call and return its envelope.

    The backend is only reached when validation succeeds.
    """
    try:
        schema = registry.lookup(name)
    except UnknownOperationError as e:
        return normalize(Failure.from_error(e), operation=str(name))

    checked = validate(schema, arguments)
    if isinstance(checked, Failure):
        return normalize(checked, schema)

    try:
        outcome = dispatch(schema.name, checked, client)
    except CliError as e:
        # Configuration problems surfaced by the client (e.g. credentials unset).
        outcome = Failure(kind="error", message=str(e))
    return normalize(outcome, schema, checked)
