"""Stores em memória, apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
Segredos ficam em texto plano (não há repouso a proteger).
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, Any

from app.domain.records import CachedEvent, CalendarSubscription, DiscordChannel, User, utcnow
from app.protocols.account_store import DiscordChannelStoreProtocol, UserStoreProtocol
from app.protocols.event_cache import EventCacheProtocol
from app.protocols.status_board_store import StatusBoardStoreProtocol, SyncLockProtocol
from app.protocols.subscription_store import SubscriptionStoreProtocol
from utils.errors import SubscriptionNotFoundError, UserNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryAccountStore(UserStoreProtocol, DiscordChannelStoreProtocol):
    """Usuários e canais Discord em memória, apenas para dev/test."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._channels: dict[str, DiscordChannel] = {}

    async def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def save_user(self, user: User) -> None:
        self._users[user.id] = user

    async def update_tokens(
        self,
        user_id: str,
        *,
        access_token: str,
        expires_at: int,
        refresh_token: str | None = None,
    ) -> User:
        current = self._users.get(user_id)
        if current is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        updated = current.model_copy(
            update={
                "access_token": access_token,
                "access_token_expires_at": expires_at,
                "refresh_token": refresh_token or current.refresh_token,
                "updated_at": utcnow(),
            }
        )
        self._users[user_id] = updated
        return updated

    async def create_channel(self, channel: DiscordChannel) -> DiscordChannel:
        self._channels[channel.id] = channel
        return channel

    async def get_channel(self, channel_id: str) -> DiscordChannel | None:
        return self._channels.get(channel_id)

    async def list_user_channels(self, user_id: str) -> list[DiscordChannel]:
        return sorted(
            (channel for channel in self._channels.values() if channel.user_id == user_id),
            key=lambda channel: channel.id,
        )


class MemorySubscriptionStore(SubscriptionStoreProtocol):
    """Assinaturas em memória com índice de push channel, apenas para dev/test."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, CalendarSubscription] = {}
        self._push_index: dict[str, str] = {}  # channel_id -> subscription_id

    async def create(self, subscription: CalendarSubscription) -> CalendarSubscription:
        self._subscriptions[subscription.id] = subscription
        if subscription.google_channel_id:
            self._push_index[subscription.google_channel_id] = subscription.id
        return subscription

    async def get(self, subscription_id: str) -> CalendarSubscription | None:
        return self._subscriptions.get(subscription_id)

    async def update(self, subscription_id: str, **fields: Any) -> CalendarSubscription:
        current = self._subscriptions.get(subscription_id)
        if current is None:
            raise SubscriptionNotFoundError(f"Subscription not found: {subscription_id}")
        updated = CalendarSubscription.model_validate(
            {**current.model_dump(), **fields, "updated_at": utcnow()}
        )
        if current.google_channel_id != updated.google_channel_id:
            if current.google_channel_id:
                self._push_index.pop(current.google_channel_id, None)
            if updated.google_channel_id:
                self._push_index[updated.google_channel_id] = subscription_id
        self._subscriptions[subscription_id] = updated
        return updated

    async def find_by_push_channel(self, channel_id: str) -> CalendarSubscription | None:
        subscription_id = self._push_index.get(channel_id)
        return self._subscriptions.get(subscription_id) if subscription_id else None

    async def list_user_subscriptions(self, user_id: str) -> list[CalendarSubscription]:
        return [s for s in self._sorted() if s.user_id == user_id]

    async def list_active(self) -> list[CalendarSubscription]:
        return [s for s in self._sorted() if s.active]

    def _sorted(self) -> list[CalendarSubscription]:
        return [self._subscriptions[key] for key in sorted(self._subscriptions)]


class MemoryEventCache(EventCacheProtocol):
    """Cache de eventos em memória com TTL, apenas para dev/test."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        # (subscription_id, event_id) -> (snapshot, expires_at)
        self._store: dict[tuple[str, str], tuple[CachedEvent, float]] = {}

    async def get(self, subscription_id: str, event_id: str) -> CachedEvent | None:
        key = (subscription_id, event_id)
        entry = self._store.get(key)
        if entry is None:
            return None
        cached, expires_at = entry
        if self._clock() > expires_at:
            del self._store[key]
            return None
        return cached

    async def put(self, subscription_id: str, cached: CachedEvent) -> None:
        self._store[(subscription_id, cached.event_id)] = (cached, self._clock() + self._ttl)

    async def clear(self, subscription_id: str) -> int:
        doomed = [key for key in self._store if key[0] == subscription_id]
        for key in doomed:
            del self._store[key]
        return len(doomed)

    def count(self, subscription_id: str) -> int:
        return sum(1 for key in self._store if key[0] == subscription_id)


class MemoryStatusBoardStore(StatusBoardStoreProtocol):
    def __init__(self) -> None:
        self._messages: dict[str, str] = {}

    async def get_message_id(self, subscription_id: str) -> str | None:
        return self._messages.get(subscription_id)

    async def set_message_id(self, subscription_id: str, message_id: str) -> None:
        self._messages[subscription_id] = message_id

    async def clear(self, subscription_id: str) -> None:
        self._messages.pop(subscription_id, None)


class MemorySyncLock(SyncLockProtocol):
    """Lease em memória, apenas para dev/test (processo único)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._leases: dict[str, tuple[str, float]] = {}

    async def acquire(self, subscription_id: str, ttl_seconds: int) -> str | None:
        now = self._clock()
        lease = self._leases.get(subscription_id)
        if lease is not None and lease[1] > now:
            return None
        token = uuid.uuid4().hex
        self._leases[subscription_id] = (token, now + ttl_seconds)
        return token

    async def release(self, subscription_id: str, token: str) -> None:
        lease = self._leases.get(subscription_id)
        if lease is not None and lease[0] == token:
            del self._leases[subscription_id]
