"""Fake do sink Discord: grava mensagens em vez de postar."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.protocols import DeliveryResult, NotificationSinkProtocol


@dataclass
class FakeNotificationSink(NotificationSinkProtocol):
    """Registra envios/edições; `fail_with` força falha de entrega."""

    sent: list[dict[str, Any]] = field(default_factory=list)
    edited: list[dict[str, Any]] = field(default_factory=list)
    fail_with: int | None = None
    _message_counter: int = 0

    async def send(
        self,
        webhook_url: str,
        message: dict[str, Any],
        *,
        wait: bool = False,
    ) -> DeliveryResult:
        if self.fail_with is not None:
            return DeliveryResult(success=False, status_code=self.fail_with, error="rejected")
        self._message_counter += 1
        message_id = f"msg-{self._message_counter}"
        self.sent.append({"webhook_url": webhook_url, "message": message, "wait": wait})
        return DeliveryResult(
            success=True,
            status_code=200 if wait else 204,
            message_id=message_id if wait else None,
        )

    async def edit(
        self,
        webhook_url: str,
        message_id: str,
        message: dict[str, Any],
    ) -> DeliveryResult:
        if self.fail_with is not None:
            return DeliveryResult(success=False, status_code=self.fail_with, error="rejected")
        self.edited.append(
            {"webhook_url": webhook_url, "message_id": message_id, "message": message}
        )
        return DeliveryResult(success=True, status_code=200, message_id=message_id)

    @property
    def titles(self) -> list[str]:
        return [item["message"]["embeds"][0]["title"] for item in self.sent]
