"""
wpengine-mcp shared configuration, constants, and module-level state.
Standalone module; imports only from exceptions.
"""

import base64
import logging
import os
import sys

from wpengine_mcp.exceptions import SetupError

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Read from os.environ when absent from .env (Docker / MCP client config).
KNOWN_ENV_KEYS = (
    "WPENGINE_USERNAME",
    "WPENGINE_PASSWORD",
    "WPENGINE_API_TOKEN",
    "WPENGINE_API_BASE_URL",
    "WPENGINE_HTTP_TIMEOUT_SECONDS",
    "WPENGINE_HTTP_MAX_RESPONSE_BYTES",
    "WPENGINE_HTTP_LOG",
    "WPENGINE_LOG_LEVEL",
    "WPENGINE_STARTUP_CHECK",
)


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in KNOWN_ENV_KEYS:
        if key not in env and os.environ.get(key):
            env[key] = os.environ[key]
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.2.0"
SERVER_NAME = "wpengine-mcp"

DEFAULT_BASE_URL = "https://api.wpengineapi.com/v1"

VALID_ENVIRONMENTS = ("production", "staging", "development")
VALID_CACHE_TYPES = ("object", "page", "cdn", "all")
VALID_USER_ROLES = ("owner", "full", "full,billing", "partial", "partial,billing")

AUTH_BASIC = "basic"
AUTH_BEARER = "bearer"

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env / environment)
# ---------------------------------------------------------------------------

env = load_env()

USERNAME = env.get("WPENGINE_USERNAME", "")
PASSWORD = env.get("WPENGINE_PASSWORD", "")
API_TOKEN = env.get("WPENGINE_API_TOKEN", "")
BASE_URL = env.get("WPENGINE_API_BASE_URL", "") or DEFAULT_BASE_URL
HTTP_TIMEOUT_SECONDS = _env_int("WPENGINE_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("WPENGINE_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("WPENGINE_HTTP_LOG", False)
LOG_LEVEL = env.get("WPENGINE_LOG_LEVEL", "WARNING").upper()
STARTUP_CHECK = _env_bool("WPENGINE_STARTUP_CHECK", False)


# ---------------------------------------------------------------------------
# Startup checks and credentials
# ---------------------------------------------------------------------------


def auth_scheme():
    """Return the credential scheme selected by the configured variables.

    A complete username/password pair wins over an API token. Returns None
    when neither scheme is fully configured.
    """
    if USERNAME and PASSWORD:
        return AUTH_BASIC
    if API_TOKEN:
        return AUTH_BEARER
    return None


def check_config():
    """Validate startup configuration. Raises SetupError; returns the auth scheme."""
    if not BASE_URL.lower().startswith("https://"):
        raise SetupError(
            f"[SETUP_NEEDED] WPENGINE_API_BASE_URL must use HTTPS, got: {BASE_URL!r}"
        )
    if bool(USERNAME) != bool(PASSWORD) and not API_TOKEN:
        missing = "WPENGINE_PASSWORD" if USERNAME else "WPENGINE_USERNAME"
        raise SetupError(
            f"[SETUP_NEEDED] {missing} is not set. WPENGINE_USERNAME and "
            "WPENGINE_PASSWORD must be configured together."
        )
    scheme = auth_scheme()
    if scheme is None:
        raise SetupError(
            "[SETUP_NEEDED] No WP Engine credentials configured. Set "
            "WPENGINE_USERNAME and WPENGINE_PASSWORD (from the Portal API Access "
            "page), or WPENGINE_API_TOKEN."
        )
    if HTTP_TIMEOUT_SECONDS <= 0:
        raise SetupError("[SETUP_NEEDED] WPENGINE_HTTP_TIMEOUT_SECONDS must be positive.")
    return scheme


def auth_header():
    """Build the Authorization header value for the selected scheme."""
    scheme = auth_scheme()
    if scheme == AUTH_BASIC:
        raw = f"{USERNAME}:{PASSWORD}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")
    if scheme == AUTH_BEARER:
        return f"Bearer {API_TOKEN}"
    raise SetupError("[SETUP_NEEDED] No WP Engine credentials configured.")


def configure_logging(level=None):
    """Send the package logger to stderr; stdout belongs to the MCP transport."""
    logger = logging.getLogger("wpengine_mcp")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level or LOG_LEVEL)
    return logger
