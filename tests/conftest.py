"""Shared test fixtures for webmaster_mcp."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from webmaster_mcp.api.client import ClientConfig, WebmasterClient


class RecordingTransport(httpx.MockTransport):
    """MockTransport that replays canned responses and records requests.

    Each entry in *responses* is an ``httpx.Response``, an exception to
    raise, or a ``(status_code, body)`` tuple. The last entry repeats
    once the list is exhausted.
    """

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        entry = self.responses[index]
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, httpx.Response):
            return entry
        status, body = entry
        text = body if isinstance(body, str) else json.dumps(body)
        return httpx.Response(status_code=status, text=text)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
async def make_client() -> Any:
    """Factory fixture: (responses, **config) -> (client, transport)."""
    clients: list[WebmasterClient] = []

    def _make(
        responses: list[Any], **config: Any
    ) -> tuple[WebmasterClient, RecordingTransport]:
        transport = RecordingTransport(responses)
        client = WebmasterClient(
            "test-token",
            ClientConfig(**config),
            base_url="https://api.test/v4",
            transport=transport,
        )
        clients.append(client)
        return client, transport

    yield _make

    for client in clients:
        await client.aclose()

