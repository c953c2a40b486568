"""WebmasterClient -- async client for the Yandex Webmaster REST API."""

from __future__ import annotations

import asyncio
import json
import logging
from urllib.parse import quote
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import httpx

from webmaster_mcp.config.schema import DEFAULT_BASE_URL
from webmaster_mcp.core.errors import (
    ApiStatusError,
    ApiTimeoutError,
    ApiTransportError,
    RequiredFieldError,
    ResponseParseError,
)
from webmaster_mcp.core.retry import RetryConfig, retry_with_backoff

if TYPE_CHECKING:
    from webmaster_mcp.config.schema import ApiConfig

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "DELETE"]


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Per-client transport policy. Times are in seconds."""

    timeout: float = 30.0
    retries: int = 3
    retry_delay: float = 1.0

    @classmethod
    def from_api_config(cls, api: ApiConfig) -> ClientConfig:
        return cls(timeout=api.timeout, retries=api.retries, retry_delay=api.retry_delay)


@dataclass(frozen=True, slots=True)
class ApiRequest:
    """One logical API call."""

    url: str
    method: HttpMethod = "GET"
    body: dict[str, Any] | None = None


def require_fields(**fields: Any) -> None:
    """Raise RequiredFieldError for the first missing or blank field."""
    for name, value in fields.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise RequiredFieldError(name)


def _segment(value: str) -> str:
    """Percent-encode one path segment. Colons stay literal (host IDs)."""
    if value in (".", ".."):
        return value.replace(".", "%2E")
    return quote(value, safe=":")


def _with_optional(params: dict[str, Any], **optional: Any) -> dict[str, Any]:
    for key, value in optional.items():
        if value is not None:
            params[key] = value
    return params


class WebmasterClient:
    """Client for the Yandex Webmaster API v4.

    Every endpoint method validates its required arguments, builds the
    URL and hands an :class:`ApiRequest` to :meth:`execute`, which owns
    auth, timeout, retry and JSON decoding.

    Usage::

        async with WebmasterClient(token) as client:
            user = await client.get_user_id()
            hosts = await client.get_hosts(str(user["user_id"]))
    """

    def __init__(
        self,
        token: str,
        config: ClientConfig | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._retry = RetryConfig(
            max_attempts=self._config.retries,
            base_delay=self._config.retry_delay,
        )
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            headers={
                "Authorization": f"OAuth {token}",
                "Content-Type": "application/json",
            },
            timeout=self._config.timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> WebmasterClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -- Transport -------------------------------------------------------------

    async def execute(self, request: ApiRequest) -> Any:
        """Run *request* with retries and return the decoded JSON body.

        An empty body decodes to ``{}``.

        Raises:
            ApiStatusError: Non-2xx response (after retries for 500/502/503).
            ApiTimeoutError: Every attempt timed out.
            ApiTransportError: Connection-level failure.
            ResponseParseError: Body is not valid JSON.
        """

        def _on_retry(attempt: int, delay: float, error: Exception) -> None:
            logger.warning(
                "%s %s failed on attempt %d/%d (%s); retrying in %.2fs",
                request.method,
                request.url,
                attempt,
                self._retry.max_attempts,
                error,
                delay,
            )

        return await retry_with_backoff(
            lambda: self._send(request),
            config=self._retry,
            on_retry=_on_retry,
        )

    async def _send(self, request: ApiRequest) -> Any:
        """One physical attempt."""
        try:
            async with asyncio.timeout(self._config.timeout):
                response = await self._http.request(
                    request.method, request.url, json=request.body
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise ApiTimeoutError(self._config.timeout) from e
        except httpx.HTTPError as e:
            raise ApiTransportError(f"{request.method} {request.url} failed: {e}") from e

        if not response.is_success:
            raise ApiStatusError(response.status_code, response.text)

        text = response.text
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError as e:
            raise ResponseParseError(text) from e

    # -- URL helpers -----------------------------------------------------------

    def _url(self, path: str, params: dict[str, Any] | None = None) -> str:
        url = f"{self._base_url}{path}"
        if params:
            url = f"{url}?{httpx.QueryParams(params)}"
        return url

    def _host_path(self, user_id: str, host_id: str, path: str = "") -> str:
        return f"/user/{_segment(user_id)}/hosts/{_segment(host_id)}{path}"

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.execute(ApiRequest(self._url(path, params)))

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        return await self.execute(ApiRequest(self._url(path), "POST", body))

    async def _delete(self, path: str) -> Any:
        return await self.execute(ApiRequest(self._url(path), "DELETE"))

    # -- User ------------------------------------------------------------------

    async def get_user_id(self) -> Any:
        return await self._get("/user")

    # -- Hosts -----------------------------------------------------------------

    async def get_hosts(self, user_id: str) -> Any:
        require_fields(user_id=user_id)
        return await self._get(f"/user/{_segment(user_id)}/hosts")

    async def get_host_info(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id))

    async def add_host(self, user_id: str, host_url: str) -> Any:
        require_fields(user_id=user_id, host_url=host_url)
        return await self._post(
            f"/user/{_segment(user_id)}/hosts", {"host_url": host_url}
        )

    async def delete_host(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._delete(self._host_path(user_id, host_id))

    # -- Verification ----------------------------------------------------------

    async def verify_host(
        self, user_id: str, host_id: str, verification_type: str
    ) -> Any:
        require_fields(
            user_id=user_id, host_id=host_id, verification_type=verification_type
        )
        return await self._post(
            self._host_path(user_id, host_id, "/verification"),
            {"verification_type": verification_type},
        )

    async def get_verification_status(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/verification"))

    async def get_host_owners(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/owners"))

    # -- Search queries --------------------------------------------------------

    async def get_popular_queries(
        self,
        user_id: str,
        host_id: str,
        date_from: str,
        date_to: str,
        order_by: str,
        query_indicator: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        require_fields(
            user_id=user_id,
            host_id=host_id,
            date_from=date_from,
            date_to=date_to,
            order_by=order_by,
        )
        params = _with_optional(
            {"date_from": date_from, "date_to": date_to, "order_by": order_by},
            query_indicator=query_indicator,
            limit=limit,
            offset=offset,
        )
        return await self._get(
            self._host_path(user_id, host_id, "/search-queries/popular"), params
        )

    async def get_query_history(
        self, user_id: str, host_id: str, date_from: str, date_to: str
    ) -> Any:
        require_fields(
            user_id=user_id, host_id=host_id, date_from=date_from, date_to=date_to
        )
        return await self._get(
            self._host_path(user_id, host_id, "/search-queries/history/all"),
            {"date_from": date_from, "date_to": date_to},
        )

    async def get_single_query_history(
        self,
        user_id: str,
        host_id: str,
        query_text: str,
        date_from: str,
        date_to: str,
    ) -> Any:
        require_fields(
            user_id=user_id,
            host_id=host_id,
            query_text=query_text,
            date_from=date_from,
            date_to=date_to,
        )
        return await self._get(
            self._host_path(user_id, host_id, "/search-queries/history"),
            {"query_text": query_text, "date_from": date_from, "date_to": date_to},
        )

    # -- Indexing --------------------------------------------------------------

    async def get_indexing_summary(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/summary"))

    async def get_indexing_history(
        self, user_id: str, host_id: str, date_from: str, date_to: str
    ) -> Any:
        require_fields(
            user_id=user_id, host_id=host_id, date_from=date_from, date_to=date_to
        )
        return await self._get(
            self._host_path(user_id, host_id, "/indexing/history"),
            {"date_from": date_from, "date_to": date_to},
        )

    async def get_indexing_samples(
        self,
        user_id: str,
        host_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(
            self._host_path(user_id, host_id, "/indexing/samples"),
            _with_optional({}, limit=limit, offset=offset),
        )

    # -- Recrawl ---------------------------------------------------------------

    async def request_recrawl(self, user_id: str, host_id: str, url: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id, url=url)
        return await self._post(
            self._host_path(user_id, host_id, "/recrawl"), {"url": url}
        )

    async def get_recrawl_tasks(
        self,
        user_id: str,
        host_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(
            self._host_path(user_id, host_id, "/recrawl/tasks"),
            _with_optional({}, limit=limit, offset=offset),
        )

    async def get_recrawl_task_status(
        self, user_id: str, host_id: str, task_id: str
    ) -> Any:
        require_fields(user_id=user_id, host_id=host_id, task_id=task_id)
        return await self._get(
            self._host_path(user_id, host_id, f"/recrawl/tasks/{_segment(task_id)}")
        )

    async def get_recrawl_quota(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/recrawl/quota"))

    # -- Sitemaps --------------------------------------------------------------

    async def get_sitemaps(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/sitemaps"))

    async def get_sitemap_info(
        self, user_id: str, host_id: str, sitemap_id: str
    ) -> Any:
        require_fields(user_id=user_id, host_id=host_id, sitemap_id=sitemap_id)
        return await self._get(
            self._host_path(user_id, host_id, f"/sitemaps/{_segment(sitemap_id)}")
        )

    async def add_sitemap(self, user_id: str, host_id: str, sitemap_url: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id, sitemap_url=sitemap_url)
        return await self._post(
            self._host_path(user_id, host_id, "/user-added-sitemaps"),
            {"url": sitemap_url},
        )

    async def delete_sitemap(self, user_id: str, host_id: str, sitemap_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id, sitemap_id=sitemap_id)
        return await self._delete(
            self._host_path(
                user_id, host_id, f"/user-added-sitemaps/{_segment(sitemap_id)}"
            )
        )

    # -- Links -----------------------------------------------------------------

    async def get_internal_links(
        self,
        user_id: str,
        host_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(
            self._host_path(user_id, host_id, "/links/internal/samples"),
            _with_optional({}, limit=limit, offset=offset),
        )

    async def get_external_links(
        self,
        user_id: str,
        host_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(
            self._host_path(user_id, host_id, "/links/external/samples"),
            _with_optional({}, limit=limit, offset=offset),
        )

    # -- SQI -------------------------------------------------------------------

    async def get_sqi_history(
        self, user_id: str, host_id: str, date_from: str, date_to: str
    ) -> Any:
        require_fields(
            user_id=user_id, host_id=host_id, date_from=date_from, date_to=date_to
        )
        return await self._get(
            self._host_path(user_id, host_id, "/sqi/history"),
            {"date_from": date_from, "date_to": date_to},
        )

    # -- RSS feeds -------------------------------------------------------------

    async def get_rss_feeds(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/rss-feeds"))

    async def add_rss_feed(self, user_id: str, host_id: str, feed_url: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id, feed_url=feed_url)
        return await self._post(
            self._host_path(user_id, host_id, "/rss-feeds"), {"url": feed_url}
        )

    async def get_rss_feed_info(self, user_id: str, host_id: str, feed_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id, feed_id=feed_id)
        return await self._get(
            self._host_path(user_id, host_id, f"/rss-feeds/{_segment(feed_id)}")
        )

    async def delete_rss_feed(self, user_id: str, host_id: str, feed_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id, feed_id=feed_id)
        return await self._delete(
            self._host_path(user_id, host_id, f"/rss-feeds/{_segment(feed_id)}")
        )

    # -- Diagnostics -----------------------------------------------------------

    async def get_site_diagnostics(self, user_id: str, host_id: str) -> Any:
        require_fields(user_id=user_id, host_id=host_id)
        return await self._get(self._host_path(user_id, host_id, "/diagnostics"))
