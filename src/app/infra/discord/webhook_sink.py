"""Sink de notificações via webhooks de canal do Discord.

- POST `{url}?wait=true` quando o chamador precisa do id da mensagem
- PATCH `{url}/messages/{id}` para editar o status board do dia
- 404/401: webhook inválido ou removido, sem retry
- 5xx e falhas de transporte: retry com backoff exponencial

A URL do webhook contém o token do Discord e nunca é logada.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import get_correlation_id
from app.protocols.notification_sink import DeliveryResult, NotificationSinkProtocol

if TYPE_CHECKING:
    import httpx

    from config.settings import DiscordSettings

logger = logging.getLogger(__name__)

_COMPONENT = "discord_webhook_sink"
_INVALID_WEBHOOK_STATUSES = frozenset({401, 404})


class DiscordWebhookSink(NotificationSinkProtocol):
    """Entrega mensagens (embeds) em webhooks Discord."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    async def send(
        self,
        webhook_url: str,
        message: dict[str, Any],
        *,
        wait: bool = False,
    ) -> DeliveryResult:
        params = {"wait": "true"} if wait else None
        try:
            response = await self._http.post(webhook_url, json=message, params=params)
        except HttpError as exc:
            return self._failed("send", exc)
        return self._result("send", response, expect_id=wait)

    async def edit(
        self,
        webhook_url: str,
        message_id: str,
        message: dict[str, Any],
    ) -> DeliveryResult:
        url = f"{webhook_url.rstrip('/')}/messages/{message_id}"
        try:
            response = await self._http.patch(url, json=message)
        except HttpError as exc:
            return self._failed("edit", exc)
        return self._result("edit", response, expect_id=True)

    def _result(self, action: str, response: httpx.Response, *, expect_id: bool) -> DeliveryResult:
        status = response.status_code
        if status in _INVALID_WEBHOOK_STATUSES:
            error = f"Discord webhook returned {status}. Webhook may be invalid or deleted."
            self._log(action, "invalid_webhook", status_code=status)
            return DeliveryResult(success=False, status_code=status, error=error)
        if status >= 400:
            self._log(action, "rejected", status_code=status)
            return DeliveryResult(
                success=False,
                status_code=status,
                error=f"Discord webhook failed: {status}",
            )

        message_id = None
        if expect_id and status != 204:
            body = response.json()
            message_id = str(body["id"]) if isinstance(body, dict) and body.get("id") else None
        self._log(action, "ok", status_code=status)
        return DeliveryResult(success=True, status_code=status, message_id=message_id)

    def _failed(self, action: str, exc: HttpError) -> DeliveryResult:
        self._log(action, "failed", status_code=exc.status_code, attempts=exc.attempts)
        return DeliveryResult(
            success=False,
            status_code=exc.status_code,
            error=f"Discord webhook failed after {exc.attempts} attempts: {exc}",
            attempts=exc.attempts,
        )

    def _log(self, action: str, result: str, **fields: Any) -> None:
        level = logging.INFO if result == "ok" else logging.WARNING
        logger.log(
            level,
            "discord_webhook_delivery",
            extra={
                "component": _COMPONENT,
                "action": action,
                "result": result,
                "correlation_id": get_correlation_id(),
                **fields,
            },
        )


def create_discord_webhook_sink(
    settings: DiscordSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DiscordWebhookSink:
    """Factory com retry/backoff das settings de Discord."""
    config = HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=max(settings.max_attempts - 1, 0),
        backoff_base_seconds=settings.backoff_base_seconds,
        backoff_max_seconds=settings.backoff_max_seconds,
        default_headers={"Content-Type": "application/json"},
    )
    return DiscordWebhookSink(HttpClient(config, transport=transport))
