"""
HTTP request layer, status classification, and security helpers for wpengine-mcp.

``request()`` is the only entry point used by the client. It returns a
Success or Failure outcome; HTTP and network exceptions never cross it.
"""

import http.client
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from wpengine_mcp import config
from wpengine_mcp.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    BackendUnavailableError,
    CliError,
    GenericBackendError,
    HTTPError,
    NotFoundError,
    RateLimitedError,
    TransportError,
)
from wpengine_mcp.models import Failure, Success

_SENSITIVE_QUERY_KEYS = {"token", "api_key", "apikey", "password", "access_token"}


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _safe_json_parse(text, context="input"):
    """Parse JSON with friendly error message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CliError(f"[ERROR] Invalid JSON in {context}: {e.msg} at position {e.pos}") from None


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SENSITIVE_QUERY_KEYS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------


def _api_error_detail(body):
    """Pull a human-readable message out of a WP Engine error body."""
    if not body:
        return ""
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return _sanitize_error(body)
    if isinstance(parsed, dict):
        err = parsed.get("error")
        if isinstance(err, dict) and err.get("message"):
            return _sanitize_error(str(err["message"]))
        if isinstance(err, str) and err:
            return _sanitize_error(err)
        if parsed.get("message"):
            return _sanitize_error(str(parsed["message"]))
        errors = parsed.get("errors")
        if isinstance(errors, list) and errors:
            parts = []
            for item in errors:
                if isinstance(item, dict):
                    parts.append(str(item.get("message") or item))
                else:
                    parts.append(str(item))
            return _sanitize_error("; ".join(parts))
    return _sanitize_error(body)


def error_for_status(code, reason="", body=""):
    """Map an HTTP status to the matching BackendError subclass."""
    if code == 401:
        return AuthenticationError(
            "WP Engine API authentication failed. Please check your API credentials.",
            status=code,
        )
    if code == 403:
        return AuthorizationError(
            "WP Engine API access forbidden. Please check your permissions.", status=code
        )
    if code == 404:
        return NotFoundError(
            "WP Engine API endpoint not found or resource does not exist.", status=code
        )
    if code == 429:
        return RateLimitedError(
            "WP Engine API rate limit exceeded. Please try again later.", status=code
        )
    if code >= 500:
        return BackendUnavailableError(
            f"WP Engine API server error (HTTP {code}). Please try again later.", status=code
        )
    detail = _api_error_detail(body) or f"HTTP {code}: {reason}".rstrip(": ")
    return GenericBackendError(f"WP Engine API error: {detail}", status=code)


def _unwrap(body):
    """Strip the ``{success, data[, message]}`` wrapper some endpoints add."""
    if (
        isinstance(body, dict)
        and "data" in body
        and "success" in body
        and set(body) <= {"data", "success", "message"}
    ):
        return body["data"]
    return body


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, data=None, headers=None, method="GET"):
    """Make one HTTP request. No retries.

    Returns parsed JSON (or None for an empty body).
    Raises HTTPError for non-2xx statuses, TransportError for network and
    timeout errors, GenericBackendError for unusable response bodies.
    """
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    start = time.perf_counter()
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    _log_http_event(
        phase="request",
        method=method,
        url=safe_url,
        request_id=request_id,
        timeout_seconds=timeout,
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=getattr(resp, "status", 200),
                content_type=content_type,
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        _log_http_event(
            phase="response",
            method=method,
            url=safe_url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            request_id=request_id,
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        _log_http_event(
            phase="network_error", method=method, url=safe_url, error="timeout",
            request_id=request_id,
        )
        raise TransportError(
            f"Request to WP Engine API timed out after {timeout} seconds."
        ) from e
    except urllib.error.URLError as e:
        _log_http_event(
            phase="network_error", method=method, url=safe_url,
            error=f"url_error: {e.reason}", request_id=request_id,
        )
        raise TransportError(f"Connection to WP Engine API failed: {e.reason}") from e
    except (http.client.HTTPException, OSError) as e:
        # Raised from getresponse()/read(); urlopen does not wrap these.
        _log_http_event(
            phase="network_error", method=method, url=safe_url,
            error=f"{type(e).__name__}: {e}", request_id=request_id,
        )
        raise TransportError(
            f"Connection to WP Engine API failed: {type(e).__name__}: {e}"
        ) from e

    if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
        raise GenericBackendError(
            "Response too large from WP Engine API "
            f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
        )
    if not raw.strip():
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        if content_type and "json" not in content_type.lower():
            raise GenericBackendError(
                f"Unexpected Content-Type from WP Engine API ({content_type}). "
                "This may be a proxy or network issue."
            ) from None
        raise GenericBackendError(
            "Unexpected response from WP Engine API (not valid JSON)."
        ) from None


def build_url(path, params=None):
    url = config.BASE_URL.rstrip("/") + path
    if params:
        query = {k: v for k, v in params.items() if v is not None}
        if query:
            url += "?" + urllib.parse.urlencode(query)
    return url


def request(method, path, params=None, data=None):
    """Call the WP Engine API once and return a Success or Failure outcome.

    Raises SetupError only when no credentials are configured, which
    startup checks rule out.
    """
    url = build_url(path, params)
    headers = {
        "Authorization": config.auth_header(),
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-Request-Id": str(uuid.uuid4()),
    }
    try:
        body = _http_request(url, data, headers, method)
    except HTTPError as e:
        return Failure.from_error(error_for_status(e.code, e.reason, e.body))
    except BackendError as e:
        return Failure.from_error(e)
    return Success(_unwrap(body))

