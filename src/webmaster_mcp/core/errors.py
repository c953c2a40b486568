"""Exception hierarchy for webmaster_mcp.

Every module imports from here. The hierarchy is:

    WebmasterError
    ├── ParameterError
    │   └── RequiredFieldError(field)
    ├── ApiError
    │   ├── ApiStatusError(status_code, body)
    │   ├── ApiTimeoutError(timeout)
    │   ├── ApiTransportError
    │   └── ResponseParseError(body)
    └── ConfigError
"""

from __future__ import annotations


class WebmasterError(Exception):
    """Base exception for all webmaster_mcp errors."""


# ─── Parameter Errors ─────────────────────────────────────────


class ParameterError(WebmasterError):
    """Caller-supplied parameters were rejected before any network I/O."""


class RequiredFieldError(ParameterError):
    """A required field is missing, None, or a blank string."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required and must be non-empty")


# ─── API Errors ───────────────────────────────────────────────


class ApiError(WebmasterError):
    """Base for failures talking to the Webmaster API."""


class ApiStatusError(ApiError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Yandex Webmaster error {status_code}: {body}")


class ApiTimeoutError(ApiError):
    """No response arrived before the per-attempt timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Yandex Webmaster request timed out after {timeout:g}s")


class ApiTransportError(ApiError):
    """Connection-level failure (DNS, refused, TLS, ...)."""


class ResponseParseError(ApiError):
    """Response body was non-empty but not valid JSON."""

    def __init__(self, body: str) -> None:
        self.body = body
        preview = body if len(body) <= 200 else body[:200] + "..."
        super().__init__(f"Invalid JSON in Yandex Webmaster response: {preview}")


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(WebmasterError):
    """Invalid or incomplete configuration."""
