"""
wpengine-mcp exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1: bad arguments, unusable responses, unknown commands."""

    exit_code = 1


class SetupError(CliError):
    """Exit code 2: missing credentials or a bad base URL."""

    exit_code = 2


class HTTPError(Exception):
    """Raised by _http_request for non-2xx responses; classified by the caller."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}


# ---------------------------------------------------------------------------
# Tool-call taxonomy
# ---------------------------------------------------------------------------


class WPEngineError(CliError):
    """Base for failures that end up in a tool-call envelope."""

    kind = "error"


class ValidationError(WPEngineError):
    """One or more argument violations. Never reaches the backend."""

    kind = "validation"

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("Invalid input")


class UnknownOperationError(WPEngineError):
    kind = "unknown_operation"

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class DuplicateOperationError(WPEngineError):
    kind = "duplicate_operation"

    def __init__(self, name):
        self.name = name
        super().__init__(f"Operation already registered: {name}")


class BackendError(WPEngineError):
    """Failure reported by (or on the way to) the WP Engine API."""

    kind = "backend_error"

    def __init__(self, message, status=None):
        self.status = status
        super().__init__(message)


class AuthenticationError(BackendError):
    kind = "authentication"


class AuthorizationError(BackendError):
    kind = "authorization"


class NotFoundError(BackendError):
    kind = "not_found"


class RateLimitedError(BackendError):
    kind = "rate_limited"


class BackendUnavailableError(BackendError):
    kind = "backend_unavailable"


class TransportError(BackendError):
    """DNS, connect, or timeout failure. No HTTP status available."""

    kind = "transport"


class GenericBackendError(BackendError):
    kind = "backend_error"
