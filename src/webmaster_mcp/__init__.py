"""MCP server exposing the Yandex Webmaster API as tools."""

__version__ = "0.1.0"
