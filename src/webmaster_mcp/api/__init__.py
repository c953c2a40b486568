"""HTTP client for the Yandex Webmaster API."""

from webmaster_mcp.api.client import (
    ApiRequest,
    ClientConfig,
    WebmasterClient,
    require_fields,
)

__all__ = ["ApiRequest", "ClientConfig", "WebmasterClient", "require_fields"]
