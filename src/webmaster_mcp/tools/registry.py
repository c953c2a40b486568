"""Tool registry: manages available tools.

Provides registration, lookup, listing, and execution of tools. Every
registered handler runs behind argument validation and the error
boundary, so :meth:`ToolRegistry.execute` always returns a result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from webmaster_mcp.tools.base import ToolDefinition, validate_arguments
from webmaster_mcp.tools.boundary import error_result, with_error_handling

if TYPE_CHECKING:
    from mcp.types import CallToolResult

    from webmaster_mcp.tools.base import ToolSpec
    from webmaster_mcp.tools.boundary import ToolHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegisteredTool:
    spec: ToolSpec
    invoke: ToolHandler


class ToolRegistry:
    """Registry for managing available tools."""

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, spec: ToolSpec, handler: ToolHandler) -> None:
        """Register a handler under *spec*.

        The handler receives arguments already validated against
        ``spec.params``.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if spec.name in self._tools:
            msg = f"Tool already registered: {spec.name}"
            raise ValueError(msg)

        async def invoke(arguments: dict[str, Any]) -> CallToolResult:
            params = validate_arguments(spec.params, arguments)
            return await handler(params)

        self._tools[spec.name] = RegisteredTool(spec, with_error_handling(invoke))

    def get(self, name: str) -> RegisteredTool:
        """Get a tool by name.

        Raises:
            KeyError: If the tool is not found.
        """
        if name not in self._tools:
            msg = f"Tool not found: {name}"
            raise KeyError(msg)
        return self._tools[name]

    def list_definitions(self) -> list[ToolDefinition]:
        """Return tool definitions for all registered tools, in registration order."""
        return [
            ToolDefinition(
                name=t.spec.name,
                title=t.spec.title,
                description=t.spec.description,
                input_schema=t.spec.input_schema,
                read_only=t.spec.read_only,
                destructive=t.spec.destructive,
            )
            for t in self._tools.values()
        ]

    async def execute(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> CallToolResult:
        """Execute a tool by name. Never raises."""
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return error_result(f"Unknown tool: {name}")
        return await tool.invoke(arguments or {})

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def list_names(self) -> list[str]:
        """Return names of all registered tools."""
        return list(self._tools.keys())
