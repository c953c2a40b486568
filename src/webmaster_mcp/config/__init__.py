"""Configuration loading and validation."""

from webmaster_mcp.config.loader import load_config, require_token
from webmaster_mcp.config.schema import ApiConfig, LoggingConfig, WebmasterConfig

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "WebmasterConfig",
    "load_config",
    "require_token",
]
