"""Main CLI application.

Click commands for the Yandex Webmaster MCP server: serve, tools, call.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any

import click

from webmaster_mcp import __version__
from webmaster_mcp.config.loader import load_config, require_token
from webmaster_mcp.core.errors import ConfigError
from webmaster_mcp.core.log import setup_logging

if TYPE_CHECKING:
    from mcp.types import CallToolResult

    from webmaster_mcp.api.client import WebmasterClient
    from webmaster_mcp.config.schema import WebmasterConfig


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> WebmasterConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _make_client(config: WebmasterConfig) -> WebmasterClient:
    """Build the API client, exiting if no token is configured."""
    from webmaster_mcp.api.client import ClientConfig, WebmasterClient

    try:
        token = require_token(config)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable
    return WebmasterClient(
        token,
        ClientConfig.from_api_config(config.api),
        base_url=config.api.base_url,
    )


def _parse_arguments(pairs: tuple[str, ...], raw_json: str | None) -> dict[str, Any]:
    """Merge ``--json`` and ``--arg key=value`` options into one dict."""
    arguments: dict[str, Any] = {}
    if raw_json:
        try:
            parsed = json.loads(raw_json)
        except json.JSONDecodeError as e:
            msg = f"Invalid --json value: {e}"
            raise click.BadParameter(msg) from e
        if not isinstance(parsed, dict):
            msg = "--json must be a JSON object"
            raise click.BadParameter(msg)
        arguments.update(parsed)
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got: {pair}"
            raise click.BadParameter(msg)
        arguments[key.strip()] = value
    return arguments


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="yandex-webmaster-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """yandex-webmaster-mcp - Yandex Webmaster API as MCP tools.

    Runs the stdio MCP server when no command is given.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdin/stdout."""
    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging)
    client = _make_client(config)

    try:
        asyncio.run(_serve(client))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        click.echo(f"Fatal error: {e}", err=True)
        sys.exit(1)


async def _serve(client: WebmasterClient) -> None:
    from webmaster_mcp.mcp.server import create_server, run_server
    from webmaster_mcp.tools.webmaster import build_registry

    async with client:
        server = create_server(build_registry(client))
        await run_server(server)


# ── tools ────────────────────────────────────────────────────────


@cli.command()
def tools() -> None:
    """List the available tools."""
    from rich.console import Console
    from rich.table import Table

    from webmaster_mcp.tools.webmaster import WEBMASTER_TOOLS

    table = Table(title="Yandex Webmaster tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("Description")
    for spec in WEBMASTER_TOOLS:
        params = ", ".join(
            name if p.required else f"[{name}]" for name, p in spec.params.items()
        )
        table.add_row(spec.name, params, spec.description)
    Console().print(table)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "--arg",
    "pairs",
    multiple=True,
    metavar="KEY=VALUE",
    help="Tool argument (repeatable).",
)
@click.option("--json", "raw_json", default=None, help="Tool arguments as a JSON object.")
@click.pass_context
def call(
    ctx: click.Context, name: str, pairs: tuple[str, ...], raw_json: str | None
) -> None:
    """Invoke a single tool and print its result."""
    arguments = _parse_arguments(pairs, raw_json)
    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging)
    client = _make_client(config)

    result = asyncio.run(_call(client, name, arguments))
    for block in result.content:
        click.echo(getattr(block, "text", ""))
    if result.isError:
        sys.exit(1)


async def _call(
    client: WebmasterClient, name: str, arguments: dict[str, Any]
) -> CallToolResult:
    from webmaster_mcp.tools.webmaster import build_registry

    async with client:
        return await build_registry(client).execute(name, arguments)
