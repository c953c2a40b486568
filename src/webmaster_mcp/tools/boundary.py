"""Error boundary for tool handlers.

:func:`with_error_handling` turns any handler into one that never
raises: failures come back as a ``CallToolResult`` with ``isError`` set
and a single ``"Error: <message>"`` text block.
"""

from __future__ import annotations

import functools
import json
import logging
from typing import TYPE_CHECKING, Any

from mcp.types import CallToolResult, TextContent

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    ToolHandler = Callable[[dict[str, Any]], Awaitable[CallToolResult]]

logger = logging.getLogger(__name__)


def text_result(payload: Any) -> CallToolResult:
    """Wrap a JSON payload as a single pretty-printed text block."""
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    return CallToolResult(content=[TextContent(type="text", text=text)])


def error_result(message: str) -> CallToolResult:
    return CallToolResult(
        isError=True,
        content=[TextContent(type="text", text=f"Error: {message}")],
    )


def error_message(exc: BaseException) -> str:
    """Human-readable message for any exception."""
    return str(exc) or type(exc).__name__


def with_error_handling(handler: ToolHandler) -> ToolHandler:
    """Wrap *handler* so failures become error results instead of exceptions.

    Successful results are returned unchanged.
    """

    @functools.wraps(handler)
    async def wrapper(params: dict[str, Any]) -> CallToolResult:
        try:
            return await handler(params)
        except Exception as exc:
            message = error_message(exc)
            logger.error("[Tool Error] %s", message)
            return error_result(message)

    return wrapper
