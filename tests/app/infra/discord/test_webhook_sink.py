"""Testes do sink Discord com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from app.infra.discord.webhook_sink import create_discord_webhook_sink
from config.settings import DiscordSettings

WEBHOOK_URL = "https://discord.com/api/webhooks/123/token"
MESSAGE = {"embeds": [{"title": "✨ New Event: Planning"}]}


def _sink(handler, *, max_attempts: int = 3):
    settings = DiscordSettings(
        max_attempts=max_attempts,
        backoff_base_seconds=0.0,
        backoff_max_seconds=0.0,
    )
    return create_discord_webhook_sink(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_posts_json_embed() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    result = await _sink(handler).send(WEBHOOK_URL, MESSAGE)

    assert result.success is True
    assert result.message_id is None
    assert seen[0].method == "POST"
    assert seen[0].url.params.get("wait") is None
    assert json.loads(seen[0].content) == MESSAGE


@pytest.mark.asyncio
async def test_send_with_wait_returns_message_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["wait"] == "true"
        return httpx.Response(200, json={"id": "1122334455"})

    result = await _sink(handler).send(WEBHOOK_URL, MESSAGE, wait=True)

    assert result.message_id == "1122334455"


@pytest.mark.asyncio
async def test_edit_patches_message() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "42"})

    result = await _sink(handler).edit(WEBHOOK_URL, "42", MESSAGE)

    assert result.success is True
    assert seen[0].method == "PATCH"
    assert seen[0].url.path.endswith("/123/token/messages/42")


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 404])
async def test_invalid_webhook_is_not_retried(status: int) -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(status)

    result = await _sink(handler).send(WEBHOOK_URL, MESSAGE)

    assert result.success is False
    assert result.status_code == status
    assert "invalid or deleted" in result.error
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_rate_limit_is_not_retried() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(429, json={"retry_after": 1})

    result = await _sink(handler).send(WEBHOOK_URL, MESSAGE)

    assert (result.success, result.status_code) == (False, 429)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_server_errors_are_retried_then_reported() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(502)

    result = await _sink(handler, max_attempts=3).send(WEBHOOK_URL, MESSAGE)

    assert result.success is False
    assert result.attempts == 3
    assert len(calls) == 3
    assert WEBHOOK_URL not in result.error


@pytest.mark.asyncio
async def test_transient_failure_recovers() -> None:
    responses = iter([httpx.Response(503), httpx.Response(204)])

    result = await _sink(lambda request: next(responses)).send(WEBHOOK_URL, MESSAGE)

    assert result.success is True


@pytest.mark.asyncio
async def test_transport_error_becomes_failed_result() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = await _sink(handler, max_attempts=2).send(WEBHOOK_URL, MESSAGE)

    assert result.success is False
    assert result.status_code is None
    assert result.attempts == 2
