"""Protocolo do store de assinaturas com indices reversos.

Invariante: `find_by_push_channel(id)` so resolve o push channel atual da
assinatura; trocar o channel remove o indice anterior.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.records import CalendarSubscription


class SubscriptionStoreProtocol(ABC):
    """Persistencia de CalendarSubscription."""

    @abstractmethod
    async def create(self, subscription: CalendarSubscription) -> CalendarSubscription:
        """Persiste e indexa por usuario e no conjunto global."""

    @abstractmethod
    async def get(self, subscription_id: str) -> CalendarSubscription | None:
        """Retorna a assinatura ou None."""

    @abstractmethod
    async def update(self, subscription_id: str, **fields: Any) -> CalendarSubscription:
        """Aplica patch parcial e atualiza `updated_at`.

        Mudar `google_channel_id` reescreve o indice de push channel.

        Raises:
            SubscriptionNotFoundError: assinatura inexistente.
        """

    @abstractmethod
    async def find_by_push_channel(self, channel_id: str) -> CalendarSubscription | None:
        """Resolve push channel -> assinatura."""

    @abstractmethod
    async def list_user_subscriptions(self, user_id: str) -> list[CalendarSubscription]:
        """Assinaturas de um usuario (ativas ou nao)."""

    @abstractmethod
    async def list_active(self) -> list[CalendarSubscription]:
        """Todas as assinaturas ativas (jobs em lote)."""
