"""MCP server for the Yandex Webmaster tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool, ToolAnnotations

from webmaster_mcp import __version__

if TYPE_CHECKING:
    from webmaster_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "yandex-webmaster-mcp-server"


def _get_tools(registry: ToolRegistry) -> list[Tool]:
    """Define the MCP tools from the registry."""
    return [
        Tool(
            name=d.name,
            title=d.title,
            description=d.description,
            inputSchema=d.input_schema,
            annotations=ToolAnnotations(
                title=d.title,
                readOnlyHint=d.read_only,
                destructiveHint=d.destructive,
            ),
        )
        for d in registry.list_definitions()
    ]


async def _call_tool(
    registry: ToolRegistry, name: str, arguments: dict[str, Any] | None
) -> CallToolResult:
    return await registry.execute(name, arguments)


def create_server(registry: ToolRegistry) -> Server:
    """Build an MCP server whose tools are served from *registry*."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        return _get_tools(registry)

    # Arguments are validated and coerced by the registry.
    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        return await _call_tool(registry, name, arguments)

    return server


async def run_server(server: Server) -> None:
    """Serve *server* on stdio."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("%s %s started on stdin/stdout", SERVER_NAME, __version__)
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
