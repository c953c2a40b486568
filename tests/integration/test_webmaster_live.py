"""Live read-only tests against the real Yandex Webmaster API.

Skipped unless YANDEX_API_KEY, TEST_USER_ID and TEST_HOST_ID are set.
Tools that create, delete or spend recrawl quota are never called here.
"""

from __future__ import annotations

import os
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

import pytest

from webmaster_mcp.api.client import ClientConfig, WebmasterClient
from webmaster_mcp.core.errors import ApiStatusError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable

TOKEN = os.environ.get("YANDEX_API_KEY")
USER_ID = os.environ.get("TEST_USER_ID", "")
HOST_ID = os.environ.get("TEST_HOST_ID", "")

pytestmark = pytest.mark.skipif(
    not (TOKEN and USER_ID and HOST_ID),
    reason="YANDEX_API_KEY, TEST_USER_ID and TEST_HOST_ID are required",
)


def _days_ago(days: int) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


async def _unless_missing(
    call: Awaitable[dict[str, Any]], *statuses: int
) -> dict[str, Any] | None:
    """Await *call*, returning None if the host lacks that data."""
    try:
        return await call
    except ApiStatusError as e:
        if e.status_code not in (statuses or (404,)):
            raise
        return None


@pytest.fixture
async def client() -> AsyncIterator[WebmasterClient]:
    async with WebmasterClient(TOKEN or "", ClientConfig(timeout=30.0)) as c:
        yield c


class TestUserAndHosts:
    async def test_user_id(self, client):
        result = await client.get_user_id()
        assert isinstance(result["user_id"], int)

    async def test_hosts(self, client):
        result = await client.get_hosts(USER_ID)
        assert isinstance(result["hosts"], list)

    async def test_host_info(self, client):
        result = await client.get_host_info(USER_ID, HOST_ID)
        assert result["host_id"] == HOST_ID

    async def test_verification_status(self, client):
        result = await client.get_verification_status(USER_ID, HOST_ID)
        assert "verification_state" in result

    async def test_owners(self, client):
        result = await client.get_host_owners(USER_ID, HOST_ID)
        assert isinstance(result["users"], list)


class TestSearchQueries:
    async def test_popular_queries(self, client):
        result = await client.get_popular_queries(
            USER_ID, HOST_ID, _days_ago(30), _days_ago(1), "TOTAL_CLICKS"
        )
        assert isinstance(result["queries"], list)

    async def test_query_history(self, client):
        result = await _unless_missing(
            client.get_query_history(USER_ID, HOST_ID, _days_ago(30), _days_ago(1))
        )
        if result is not None:
            assert "indicators" in result

    async def test_single_query_history(self, client):
        result = await _unless_missing(
            client.get_single_query_history(
                USER_ID, HOST_ID, "test", _days_ago(30), _days_ago(1)
            ),
            400,
            404,
        )
        if result is not None:
            assert "indicators" in result


class TestIndexing:
    async def test_summary(self, client):
        assert isinstance(await client.get_indexing_summary(USER_ID, HOST_ID), dict)

    async def test_history(self, client):
        result = await client.get_indexing_history(
            USER_ID, HOST_ID, _days_ago(30), _days_ago(1)
        )
        assert "indicators" in result

    async def test_samples(self, client):
        result = await client.get_indexing_samples(USER_ID, HOST_ID, limit=10)
        assert isinstance(result["samples"], list)


class TestSitemaps:
    async def test_sitemaps_and_info(self, client):
        result = await client.get_sitemaps(USER_ID, HOST_ID)
        assert isinstance(result["sitemaps"], list)
        if result["sitemaps"]:
            sitemap_id = result["sitemaps"][0]["sitemap_id"]
            info = await client.get_sitemap_info(USER_ID, HOST_ID, sitemap_id)
            assert "sitemap_id" in info


class TestRecrawl:
    async def test_quota(self, client):
        result = await client.get_recrawl_quota(USER_ID, HOST_ID)
        assert "daily_quota" in result
        assert "quota_remainder" in result

    async def test_tasks_and_status(self, client):
        result = await _unless_missing(client.get_recrawl_tasks(USER_ID, HOST_ID))
        if result is None:
            return
        assert isinstance(result["tasks"], list)
        if result["tasks"]:
            task_id = result["tasks"][0]["task_id"]
            status = await client.get_recrawl_task_status(USER_ID, HOST_ID, task_id)
            assert "task_id" in status


class TestLinksAndQuality:
    async def test_external_links(self, client):
        result = await client.get_external_links(USER_ID, HOST_ID, limit=10)
        assert isinstance(result["links"], list)

    async def test_internal_links(self, client):
        result = await _unless_missing(
            client.get_internal_links(USER_ID, HOST_ID, limit=10)
        )
        if result is not None:
            assert isinstance(result["links"], list)

    async def test_sqi_history(self, client):
        result = await _unless_missing(
            client.get_sqi_history(USER_ID, HOST_ID, _days_ago(90), _days_ago(1))
        )
        if result is not None:
            assert isinstance(result["points"], list)

    async def test_diagnostics(self, client):
        assert isinstance(await client.get_site_diagnostics(USER_ID, HOST_ID), dict)


class TestRssFeeds:
    async def test_feeds_and_info(self, client):
        result = await _unless_missing(client.get_rss_feeds(USER_ID, HOST_ID))
        if result is None:
            return
        assert isinstance(result["feeds"], list)
        if result["feeds"]:
            feed_id = result["feeds"][0]["feed_id"]
            info = await _unless_missing(
                client.get_rss_feed_info(USER_ID, HOST_ID, feed_id)
            )
            if info is not None:
                assert "feed_id" in info
