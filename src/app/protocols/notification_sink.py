"""Contrato do sink de notificacoes (webhooks Discord).

O sink nunca levanta por falha de entrega: o resultado descreve o erro e
o chamador decide (logar e contar).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DeliveryResult:
    """Resultado de uma entrega.

    Attributes:
        success: Mensagem aceita pelo destino
        status_code: Ultimo status HTTP (None em falha de transporte)
        message_id: Id da mensagem criada (apenas com wait=True)
        error: Descricao curta do erro, sem URL do webhook
        attempts: Tentativas realizadas
    """

    success: bool
    status_code: int | None = None
    message_id: str | None = None
    error: str | None = None
    attempts: int = 1


class NotificationSinkProtocol(ABC):
    """Entrega e edicao de mensagens em webhooks."""

    @abstractmethod
    async def send(
        self,
        webhook_url: str,
        message: dict[str, Any],
        *,
        wait: bool = False,
    ) -> DeliveryResult:
        """Posta mensagem; com `wait=True` o resultado traz `message_id`."""

    @abstractmethod
    async def edit(
        self,
        webhook_url: str,
        message_id: str,
        message: dict[str, Any],
    ) -> DeliveryResult:
        """Edita mensagem previamente postada pelo mesmo webhook."""
