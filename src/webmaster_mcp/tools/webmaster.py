"""Webmaster tool table.

One :class:`ToolSpec` per API operation. Each tool name is also the
name of the :class:`WebmasterClient` method it calls, and its parameter
names are that method's keyword arguments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from webmaster_mcp.tools.base import ParamSpec, ToolSpec
from webmaster_mcp.tools.boundary import text_result
from webmaster_mcp.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from mcp.types import CallToolResult

    from webmaster_mcp.api.client import WebmasterClient
    from webmaster_mcp.tools.boundary import ToolHandler

QUERY_METRICS = ("TOTAL_SHOWS", "TOTAL_CLICKS", "AVG_SHOW_POSITION", "AVG_CLICK_POSITION")
VERIFICATION_TYPES = ("DNS", "HTML_FILE", "META_TAG", "WHOIS", "TXT_FILE")

USER_ID = ParamSpec(description="Yandex Webmaster user ID")
HOST_ID = ParamSpec(description="Host ID of the site")
DATE_FROM = ParamSpec(description="Start date in YYYY-MM-DD format")
DATE_TO = ParamSpec(description="End date in YYYY-MM-DD format")
LIMIT = ParamSpec("integer", required=False, description="Maximum number of results")
OFFSET = ParamSpec("integer", required=False, description="Offset for pagination")

_HOST = {"user_id": USER_ID, "host_id": HOST_ID}
_DATE_RANGE = {"date_from": DATE_FROM, "date_to": DATE_TO}
_PAGING = {"limit": LIMIT, "offset": OFFSET}


WEBMASTER_TOOLS: tuple[ToolSpec, ...] = (
    # User
    ToolSpec(
        "get_user_id",
        "Get User ID",
        "Get the authenticated user ID from Yandex Webmaster",
    ),
    # Hosts
    ToolSpec(
        "get_hosts",
        "Get Hosts",
        "Get the list of all sites (hosts) added to Yandex Webmaster",
        {"user_id": USER_ID},
    ),
    ToolSpec(
        "get_host_info",
        "Get Host Info",
        "Get detailed information about a specific site",
        _HOST,
    ),
    ToolSpec(
        "add_host",
        "Add Host",
        "Add a new site to Yandex Webmaster",
        {
            "user_id": USER_ID,
            "host_url": ParamSpec(
                description="URL of the site to add (e.g., https://example.com)"
            ),
        },
    ),
    ToolSpec(
        "delete_host",
        "Delete Host",
        "Remove a site from Yandex Webmaster",
        {"user_id": USER_ID, "host_id": ParamSpec(description="Host ID of the site to delete")},
    ),
    # Verification
    ToolSpec(
        "verify_host",
        "Verify Host",
        "Start the site verification process",
        {
            **_HOST,
            "verification_type": ParamSpec(
                description="Verification method: " + ", ".join(VERIFICATION_TYPES),
                choices=VERIFICATION_TYPES,
            ),
        },
    ),
    ToolSpec(
        "get_verification_status",
        "Get Verification Status",
        "Get the current verification status of a site",
        _HOST,
    ),
    ToolSpec(
        "get_host_owners",
        "Get Host Owners",
        "Get the list of users who have verified rights to the site",
        _HOST,
    ),
    # Search queries
    ToolSpec(
        "get_popular_queries",
        "Get Popular Queries",
        "Get popular search queries for the site with statistics",
        {
            **_HOST,
            **_DATE_RANGE,
            "order_by": ParamSpec(
                description="Sort by (required): " + ", ".join(QUERY_METRICS),
                choices=QUERY_METRICS,
            ),
            "query_indicator": ParamSpec(
                required=False,
                description="Metric: " + ", ".join(QUERY_METRICS),
                choices=QUERY_METRICS,
            ),
            **_PAGING,
        },
    ),
    ToolSpec(
        "get_query_history",
        "Get Query History",
        "Get aggregated search query statistics for all queries",
        {**_HOST, **_DATE_RANGE},
    ),
    ToolSpec(
        "get_single_query_history",
        "Get Single Query History",
        "Get statistics history for a specific search query",
        {
            **_HOST,
            "query_text": ParamSpec(
                description="The search query text to get statistics for"
            ),
            **_DATE_RANGE,
        },
    ),
    # Indexing
    ToolSpec(
        "get_indexing_summary",
        "Get Indexing Summary",
        "Get summary of site indexing statistics",
        _HOST,
    ),
    ToolSpec(
        "get_indexing_history",
        "Get Indexing History",
        "Get historical indexing data for the site",
        {**_HOST, **_DATE_RANGE},
    ),
    ToolSpec(
        "get_indexing_samples",
        "Get Indexing Samples",
        "Get examples of indexed pages",
        {**_HOST, **_PAGING},
    ),
    # Recrawl
    ToolSpec(
        "request_recrawl",
        "Request Recrawl",
        "Request Yandex to recrawl/reindex a specific page",
        {**_HOST, "url": ParamSpec(description="Full URL of the page to recrawl")},
    ),
    ToolSpec(
        "get_recrawl_tasks",
        "Get Recrawl Tasks",
        "Get the list of recrawl tasks",
        {**_HOST, **_PAGING},
    ),
    ToolSpec(
        "get_recrawl_task_status",
        "Get Recrawl Task Status",
        "Get the status of a specific recrawl task",
        {**_HOST, "task_id": ParamSpec(description="Recrawl task ID")},
    ),
    ToolSpec(
        "get_recrawl_quota",
        "Get Recrawl Quota",
        "Get the recrawl quota information (daily limit)",
        _HOST,
    ),
    # Sitemaps
    ToolSpec(
        "get_sitemaps",
        "Get Sitemaps",
        "Get the list of sitemaps for the site",
        _HOST,
    ),
    ToolSpec(
        "get_sitemap_info",
        "Get Sitemap Info",
        "Get detailed information about a specific sitemap",
        {**_HOST, "sitemap_id": ParamSpec(description="Sitemap ID")},
    ),
    ToolSpec(
        "add_sitemap",
        "Add Sitemap",
        "Add a new sitemap to the site",
        {**_HOST, "sitemap_url": ParamSpec(description="Full URL to the sitemap file")},
    ),
    ToolSpec(
        "delete_sitemap",
        "Delete Sitemap",
        "Remove a user-added sitemap from the site",
        {**_HOST, "sitemap_id": ParamSpec(description="Sitemap ID to delete")},
    ),
    # Links
    ToolSpec(
        "get_internal_links",
        "Get Internal Links",
        "Get samples of internal links on the site",
        {**_HOST, **_PAGING},
    ),
    ToolSpec(
        "get_external_links",
        "Get External Links",
        "Get samples of external links pointing to the site (backlinks)",
        {**_HOST, **_PAGING},
    ),
    # SQI
    ToolSpec(
        "get_sqi_history",
        "Get SQI History",
        "Get the Site Quality Index (SQI) history - Yandex metric for site quality",
        {**_HOST, **_DATE_RANGE},
    ),
    # RSS feeds
    ToolSpec(
        "get_rss_feeds",
        "Get RSS Feeds",
        "Get the list of RSS feeds added to the site",
        _HOST,
    ),
    ToolSpec(
        "add_rss_feed",
        "Add RSS Feed",
        "Add a new RSS feed to the site",
        {**_HOST, "feed_url": ParamSpec(description="Full URL to the RSS feed")},
    ),
    ToolSpec(
        "get_rss_feed_info",
        "Get RSS Feed Info",
        "Get detailed information about a specific RSS feed",
        {**_HOST, "feed_id": ParamSpec(description="RSS feed ID")},
    ),
    ToolSpec(
        "delete_rss_feed",
        "Delete RSS Feed",
        "Remove an RSS feed from the site",
        {**_HOST, "feed_id": ParamSpec(description="RSS feed ID to delete")},
    ),
    # Diagnostics
    ToolSpec(
        "get_site_diagnostics",
        "Get Site Diagnostics",
        "Get information about site problems and diagnostics",
        _HOST,
    ),
)


def _bind(client: WebmasterClient, spec: ToolSpec) -> ToolHandler:
    method = getattr(client, spec.name, None)
    if method is None:
        msg = f"WebmasterClient has no method for tool {spec.name}"
        raise ValueError(msg)

    async def handler(params: dict[str, Any]) -> CallToolResult:
        return text_result(await method(**params))

    return handler


def build_registry(
    client: WebmasterClient,
    specs: tuple[ToolSpec, ...] = WEBMASTER_TOOLS,
) -> ToolRegistry:
    """Register every tool in *specs* against *client*."""
    registry = ToolRegistry()
    for spec in specs:
        registry.register(spec, _bind(client, spec))
    return registry
