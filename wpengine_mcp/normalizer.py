"""Result normalizer: Outcome -> Envelope, plus the failure log stream."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from wpengine_mcp.models import Failure, Outcome, Success
from wpengine_mcp.schemas import Schema
from wpengine_mcp.types import Envelope

logger = logging.getLogger(__name__)


def success_message(schema: Schema | None, arguments: Mapping | None) -> str | None:
    """Human-readable summary for mutating operations, e.g. "Site 'x' created successfully"."""
    if schema is None or schema.mutation is None:
        return None
    mutation = schema.mutation
    args = arguments or {}
    subject = next((args[f] for f in mutation.subject if args.get(f) is not None), None)
    if subject is None:
        return f"{mutation.resource} {mutation.verb} successfully"
    return f"{mutation.resource} '{subject}' {mutation.verb} successfully"


def failure_text(failure: Failure) -> str:
    detail = failure.detail_text()
    return f"{failure.message}: {detail}" if detail else failure.message


def log_failure(failure: Failure, operation: str | None = None) -> None:
    logger.warning(
        "tool failure operation=%s kind=%s status=%s error=%s",
        operation or "-",
        failure.kind,
        failure.status if failure.status is not None else "-",
        failure_text(failure),
    )


def normalize(
    outcome: Outcome,
    schema: Schema | None = None,
    arguments: Mapping | None = None,
    operation: str | None = None,
) -> Envelope:
    """Wrap a Success or Failure in the uniform ``{success, data|error, message?}`` shape."""
    if isinstance(outcome, Success):
        envelope: Envelope = {"success": True}
        message = success_message(schema, arguments)
        if message:
            envelope["message"] = message
        envelope["data"] = outcome.payload
        return envelope
    if isinstance(outcome, Failure):
        log_failure(outcome, operation or (schema.name if schema else None))
        return {"success": False, "error": failure_text(outcome)}
    raise TypeError(f"normalize expected Success or Failure, got {type(outcome).__name__}")
