"""Dependências compartilhadas pelos casos de uso de sync."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from app.domain.records import utcnow
from utils.errors import SubscriptionNotFoundError, UserNotFoundError

if TYPE_CHECKING:
    from app.domain.records import CalendarSubscription, User
    from app.protocols import (
        CalendarProviderProtocol,
        DiscordChannelStoreProtocol,
        EventCacheProtocol,
        NotificationSinkProtocol,
        SubscriptionStoreProtocol,
        SyncLockProtocol,
        UserStoreProtocol,
    )
    from config.settings import SyncSettings


@dataclass(frozen=True)
class SyncDependencies:
    """Protocolos + settings injetados pelo bootstrap.

    Attributes:
        clock: Retorna "agora" aware em UTC (injetável em testes)
        lock: Lease por assinatura; usado apenas com SYNC_LOCK_ENABLED
    """

    subscriptions: SubscriptionStoreProtocol
    users: UserStoreProtocol
    channels: DiscordChannelStoreProtocol
    cache: EventCacheProtocol
    calendar: CalendarProviderProtocol
    sink: NotificationSinkProtocol
    settings: SyncSettings
    page_size: int = 2500
    lock: SyncLockProtocol | None = None
    clock: Callable[[], datetime] = field(default=utcnow)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.settings.calendar_timezone)

    async def require_subscription(self, subscription_id: str) -> CalendarSubscription:
        subscription = await self.subscriptions.get(subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(f"Subscription not found: {subscription_id}")
        return subscription

    async def require_user(self, subscription: CalendarSubscription) -> User:
        user = await self.users.get_user(subscription.user_id)
        if user is None:
            raise UserNotFoundError(
                f"User not found for subscription {subscription.id}: {subscription.user_id}"
            )
        return user
