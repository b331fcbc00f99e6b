"""Protocolo do cache de eventos por assinatura (base do diff)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.records import CachedEvent


class EventCacheProtocol(ABC):
    """Ultimo estado visto por (assinatura, evento), com TTL."""

    @abstractmethod
    async def get(self, subscription_id: str, event_id: str) -> CachedEvent | None:
        """Retorna snapshot ou None (ausente/expirado)."""

    @abstractmethod
    async def put(self, subscription_id: str, cached: CachedEvent) -> None:
        """Grava snapshot (last write wins) renovando o TTL."""

    @abstractmethod
    async def clear(self, subscription_id: str) -> int:
        """Remove todos os snapshots da assinatura; retorna quantos."""
