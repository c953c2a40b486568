"""Tests for retry with backoff utility."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from webmaster_mcp.core.errors import (
    ApiStatusError,
    ApiTimeoutError,
    ApiTransportError,
    RequiredFieldError,
    ResponseParseError,
)
from webmaster_mcp.core.retry import (
    RetryConfig,
    compute_delay,
    is_retryable,
    retry_with_backoff,
)

# ─── RetryConfig ──────────────────────────────────────────────


class TestRetryConfig:
    def test_defaults(self):
        cfg = RetryConfig()
        assert cfg.max_attempts == 3
        assert cfg.base_delay == 1.0

    def test_frozen(self):
        cfg = RetryConfig()
        with pytest.raises(AttributeError):
            cfg.max_attempts = 5  # type: ignore[misc]


# ─── is_retryable ─────────────────────────────────────────────


class TestIsRetryable:
    def test_timeout_is_retryable(self):
        assert is_retryable(ApiTimeoutError(30.0)) is True

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors_are_retryable(self, status):
        assert is_retryable(ApiStatusError(status, "")) is True

    @pytest.mark.parametrize("status", [400, 401, 404, 429, 501, 504])
    def test_other_statuses_are_not_retryable(self, status):
        assert is_retryable(ApiStatusError(status, "")) is False

    def test_status_text_is_ignored(self):
        assert is_retryable(ApiStatusError(404, "upstream said 503")) is False

    def test_parse_error_is_not_retryable(self):
        assert is_retryable(ResponseParseError("<html>")) is False

    def test_validation_error_is_not_retryable(self):
        assert is_retryable(RequiredFieldError("user_id")) is False

    def test_transport_error_is_not_retryable(self):
        assert is_retryable(ApiTransportError("refused")) is False

    def test_generic_exception_is_not_retryable(self):
        assert is_retryable(ValueError("503")) is False


# ─── compute_delay ────────────────────────────────────────────


class TestComputeDelay:
    def test_linear_backoff(self):
        cfg = RetryConfig(base_delay=1.0)
        assert compute_delay(1, cfg) == 1.0
        assert compute_delay(2, cfg) == 2.0
        assert compute_delay(3, cfg) == 3.0

    def test_scales_with_base_delay(self):
        cfg = RetryConfig(base_delay=0.25)
        assert compute_delay(4, cfg) == 1.0


# ─── retry_with_backoff ───────────────────────────────────────


class TestRetryWithBackoff:
    async def test_succeeds_on_first_try(self):
        fn = AsyncMock(return_value="ok")
        result = await retry_with_backoff(fn)
        assert result == "ok"
        assert fn.call_count == 1

    async def test_retries_on_timeout(self):
        fn = AsyncMock(side_effect=[ApiTimeoutError(1.0), "ok"])
        with patch.object(asyncio, "sleep", new_callable=AsyncMock):
            result = await retry_with_backoff(fn)
        assert result == "ok"
        assert fn.call_count == 2

    async def test_retries_on_503(self):
        fn = AsyncMock(side_effect=[ApiStatusError(503, "busy"), "ok"])
        with patch.object(asyncio, "sleep", new_callable=AsyncMock):
            result = await retry_with_backoff(fn)
        assert result == "ok"
        assert fn.call_count == 2

    async def test_fails_fast_on_404(self):
        fn = AsyncMock(side_effect=ApiStatusError(404, "missing"))
        with pytest.raises(ApiStatusError, match="404"):
            await retry_with_backoff(fn)
        assert fn.call_count == 1

    async def test_fails_fast_on_generic_exception(self):
        fn = AsyncMock(side_effect=ValueError("bad"))
        with pytest.raises(ValueError, match="bad"):
            await retry_with_backoff(fn)
        assert fn.call_count == 1

    async def test_exhausts_attempts_then_raises(self):
        cfg = RetryConfig(max_attempts=3)
        fn = AsyncMock(side_effect=ApiStatusError(503, "down"))
        with (
            patch.object(asyncio, "sleep", new_callable=AsyncMock),
            pytest.raises(ApiStatusError, match="503"),
        ):
            await retry_with_backoff(fn, config=cfg)
        # max_attempts counts the first try
        assert fn.call_count == 3

    async def test_linear_delays(self):
        cfg = RetryConfig(max_attempts=4, base_delay=1.0)
        fn = AsyncMock(
            side_effect=[
                ApiTimeoutError(1.0),
                ApiStatusError(502, ""),
                ApiStatusError(500, ""),
                "ok",
            ],
        )
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            result = await retry_with_backoff(fn, config=cfg)
        assert result == "ok"
        delays = [call.args[0] for call in mock_sleep.call_args_list]
        assert delays == [1.0, 2.0, 3.0]

    async def test_on_retry_callback_called(self):
        cfg = RetryConfig(max_attempts=3, base_delay=0.5)
        fn = AsyncMock(
            side_effect=[ApiStatusError(503, ""), ApiTimeoutError(1.0), "ok"],
        )
        callback = MagicMock()
        with patch.object(asyncio, "sleep", new_callable=AsyncMock):
            result = await retry_with_backoff(fn, config=cfg, on_retry=callback)
        assert result == "ok"
        assert callback.call_count == 2
        first, second = callback.call_args_list
        assert first.args[0] == 1
        assert first.args[1] == 0.5
        assert isinstance(first.args[2], ApiStatusError)
        assert second.args[0] == 2
        assert second.args[1] == 1.0
        assert isinstance(second.args[2], ApiTimeoutError)

    async def test_single_attempt_never_sleeps(self):
        cfg = RetryConfig(max_attempts=1)
        fn = AsyncMock(side_effect=ApiTimeoutError(1.0))
        with (
            patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep,
            pytest.raises(ApiTimeoutError),
        ):
            await retry_with_backoff(fn, config=cfg)
        assert fn.call_count == 1
        mock_sleep.assert_not_called()

    async def test_zero_attempts_is_an_error(self):
        fn = AsyncMock(return_value="ok")
        with pytest.raises(RuntimeError, match="max_attempts=0"):
            await retry_with_backoff(fn, config=RetryConfig(max_attempts=0))
        fn.assert_not_called()
