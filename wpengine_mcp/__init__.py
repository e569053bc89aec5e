"""wpengine-mcp: WP Engine hosting API exposed as Model Context Protocol tools."""

from wpengine_mcp.client import WPEngineClient
from wpengine_mcp.config import VERSION
from wpengine_mcp.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    BackendUnavailableError,
    CliError,
    DuplicateOperationError,
    GenericBackendError,
    NotFoundError,
    RateLimitedError,
    SetupError,
    TransportError,
    UnknownOperationError,
    ValidationError,
    WPEngineError,
)
from wpengine_mcp.models import Failure, FieldError, Success, ValidatedArguments
from wpengine_mcp.types import Envelope, ToolDescriptor

__all__ = [
    "VERSION",
    "WPEngineClient",
    "CliError",
    "SetupError",
    "WPEngineError",
    "ValidationError",
    "UnknownOperationError",
    "DuplicateOperationError",
    "BackendError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "BackendUnavailableError",
    "TransportError",
    "GenericBackendError",
    "Success",
    "Failure",
    "FieldError",
    "ValidatedArguments",
    "Envelope",
    "ToolDescriptor",
]
