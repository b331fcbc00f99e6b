"""Ciclo de vida das assinaturas pela API de gerenciamento.

Toda operação sobre uma assinatura existente confere o dono antes de agir:
assinatura ausente vira 404 e de outro usuário vira 403 na borda.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from app.domain.records import CalendarSubscription
from app.observability import get_correlation_id
from app.use_cases.subscriptions.accounts import require_user
from utils.errors import (
    DiscordChannelNotFoundError,
    InvalidRequestError,
    SubscriptionForbiddenError,
    SubscriptionNotFoundError,
)

if TYPE_CHECKING:
    from app.domain.calendar_event import WatchChannel
    from app.use_cases.sync import SyncEngine, SyncOutcome

logger = logging.getLogger(__name__)

_COMPONENT = "subscriptions"

# Campos que o dono pode alterar após a criação
UPDATABLE_FIELDS = frozenset(
    {
        "active",
        "notify_new_events",
        "notify_updates",
        "notify_cancellations",
        "notify_window_minutes",
    }
)


class SubscriptionManager:
    """Operações de gerenciamento sobre o mesmo motor de sync."""

    def __init__(self, engine: SyncEngine) -> None:
        self._engine = engine
        self._deps = engine.deps

    async def list_subscriptions(self, user_id: str) -> list[CalendarSubscription]:
        await require_user(self._deps.users, user_id)
        return await self._deps.subscriptions.list_user_subscriptions(user_id)

    async def subscribe(
        self,
        user_id: str,
        *,
        calendar_id: str,
        discord_channel_id: str,
        calendar_summary: str | None = None,
        notify_new_events: bool = True,
        notify_updates: bool = True,
        notify_cancellations: bool = True,
        notify_window_minutes: int = 0,
    ) -> CalendarSubscription:
        """Cria a assinatura e tenta sync inicial e push channel.

        Falhas no sync inicial ou no watch não desfazem a criação; o cron
        periódico e a renovação recuperam depois.
        """
        deps = self._deps
        await require_user(deps.users, user_id)
        if not calendar_id or not discord_channel_id:
            raise InvalidRequestError("calendar_id and discord_channel_id are required")
        if notify_window_minutes < 0:
            raise InvalidRequestError("notify_window_minutes must be >= 0")

        channel = await deps.channels.get_channel(discord_channel_id)
        if channel is None or channel.user_id != user_id:
            raise DiscordChannelNotFoundError(f"Discord channel not found: {discord_channel_id}")

        subscription = await deps.subscriptions.create(
            CalendarSubscription(
                id=str(uuid.uuid4()),
                user_id=user_id,
                calendar_id=calendar_id,
                calendar_summary=calendar_summary or calendar_id,
                discord_channel_id=discord_channel_id,
                notify_new_events=notify_new_events,
                notify_updates=notify_updates,
                notify_cancellations=notify_cancellations,
                notify_window_minutes=notify_window_minutes,
            )
        )
        self._log("subscription_created", subscription.id, action="subscribe", result="ok")

        try:
            await self._engine.perform_initial_sync(subscription.id)
        except Exception as exc:
            self._log(
                "initial_sync_failed",
                subscription.id,
                action="subscribe",
                result="error",
                level=logging.WARNING,
                error_type=type(exc).__name__,
            )

        try:
            await self._engine.setup_watch_channel(subscription.id)
        except Exception as exc:
            self._log(
                "watch_setup_failed",
                subscription.id,
                action="subscribe",
                result="error",
                level=logging.WARNING,
                error_type=type(exc).__name__,
            )

        return await deps.require_subscription(subscription.id)

    async def update_subscription(
        self,
        user_id: str,
        subscription_id: str,
        changes: dict[str, Any],
    ) -> CalendarSubscription:
        """Aplica apenas os campos conhecidos e presentes no patch."""
        await self.require_owned(user_id, subscription_id)
        patch = {
            key: value
            for key, value in changes.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        window = patch.get("notify_window_minutes")
        if window is not None and window < 0:
            raise InvalidRequestError("notify_window_minutes must be >= 0")
        if not patch:
            return await self._deps.require_subscription(subscription_id)

        updated = await self._deps.subscriptions.update(subscription_id, **patch)
        self._log(
            "subscription_updated",
            subscription_id,
            action="update",
            result="ok",
            fields=sorted(patch),
        )
        return updated

    async def unsubscribe(self, user_id: str, subscription_id: str) -> None:
        """Para o push channel (best-effort), desativa a assinatura e limpa o cache.

        O sync token é mantido: reativar retoma o incremental, e eventos sem
        snapshot no cache contam como novos, como após expirar o TTL.
        """
        await self.require_owned(user_id, subscription_id)
        await self._engine.stop_watch_channel(subscription_id)
        await self._deps.subscriptions.update(subscription_id, active=False)
        cleared = await self._deps.cache.clear(subscription_id)
        self._log(
            "subscription_deactivated",
            subscription_id,
            action="unsubscribe",
            result="ok",
            events_cleared=cleared,
        )

    async def trigger_sync(self, user_id: str, subscription_id: str) -> SyncOutcome:
        await self.require_owned(user_id, subscription_id)
        return await self._engine.sync_subscription(subscription_id)

    async def trigger_watch(self, user_id: str, subscription_id: str) -> WatchChannel:
        await self.require_owned(user_id, subscription_id)
        return await self._engine.setup_watch_channel(subscription_id)

    async def require_owned(self, user_id: str, subscription_id: str) -> CalendarSubscription:
        """Retorna a assinatura se pertencer ao usuário.

        Raises:
            SubscriptionNotFoundError: assinatura inexistente.
            SubscriptionForbiddenError: assinatura de outro usuário.
        """
        await require_user(self._deps.users, user_id)
        subscription = await self._deps.subscriptions.get(subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(f"Subscription not found: {subscription_id}")
        if subscription.user_id != user_id:
            raise SubscriptionForbiddenError("Forbidden")
        return subscription

    def _log(
        self,
        message: str,
        subscription_id: str,
        *,
        action: str,
        result: str,
        level: int = logging.INFO,
        **fields: object,
    ) -> None:
        logger.log(
            level,
            message,
            extra={
                "component": _COMPONENT,
                "action": action,
                "result": result,
                "subscription_id": subscription_id,
                "correlation_id": get_correlation_id(),
                **fields,
            },
        )
