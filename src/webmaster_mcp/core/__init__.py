"""Core errors, retry policy, and logging setup."""

from webmaster_mcp.core.errors import (
    ApiError,
    ApiStatusError,
    ApiTimeoutError,
    ApiTransportError,
    ConfigError,
    ParameterError,
    RequiredFieldError,
    ResponseParseError,
    WebmasterError,
)
from webmaster_mcp.core.retry import RetryConfig, is_retryable, retry_with_backoff

__all__ = [
    "ApiError",
    "ApiStatusError",
    "ApiTimeoutError",
    "ApiTransportError",
    "ConfigError",
    "ParameterError",
    "RequiredFieldError",
    "ResponseParseError",
    "RetryConfig",
    "WebmasterError",
    "is_retryable",
    "retry_with_backoff",
]
