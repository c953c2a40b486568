"""Pydantic models for webmaster_mcp configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://api.webmaster.yandex.net/v4"


class ApiConfig(BaseModel):
    """Webmaster API connection settings. Times are in seconds."""

    base_url: str = DEFAULT_BASE_URL
    token: str | None = None
    token_env: str = "YANDEX_API_KEY"
    timeout: float = Field(default=30.0, gt=0)
    retries: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=1.0, ge=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    structured: bool = False


class WebmasterConfig(BaseModel):
    """Top-level configuration for webmaster_mcp."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
