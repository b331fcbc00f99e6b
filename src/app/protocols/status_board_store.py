"""Protocolos auxiliares: referencia da mensagem do status board e lease de sync."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StatusBoardStoreProtocol(ABC):
    """Guarda o id da mensagem do quadro do dia por assinatura."""

    @abstractmethod
    async def get_message_id(self, subscription_id: str) -> str | None:
        """Retorna id da mensagem atual, ou None."""

    @abstractmethod
    async def set_message_id(self, subscription_id: str, message_id: str) -> None:
        """Registra a mensagem postada."""

    @abstractmethod
    async def clear(self, subscription_id: str) -> None:
        """Esquece a mensagem anterior."""


class SyncLockProtocol(ABC):
    """Lease consultivo por assinatura contra syncs concorrentes."""

    @abstractmethod
    async def acquire(self, subscription_id: str, ttl_seconds: int) -> str | None:
        """Tenta obter o lease; retorna token do dono ou None se ocupado."""

    @abstractmethod
    async def release(self, subscription_id: str, token: str) -> None:
        """Libera o lease se ainda pertence a `token`."""
