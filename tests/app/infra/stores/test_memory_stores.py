"""Testes dos stores em memória."""

from __future__ import annotations

import pytest

from app.domain.records import CachedEvent, CalendarSubscription, User
from app.infra.stores.memory_stores import (
    MemoryAccountStore,
    MemoryEventCache,
    MemoryStatusBoardStore,
    MemorySubscriptionStore,
    MemorySyncLock,
)
from utils.errors import SubscriptionNotFoundError, UserNotFoundError


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _subscription(subscription_id: str, **fields: object) -> CalendarSubscription:
    data: dict[str, object] = {
        "id": subscription_id,
        "user_id": "user-1",
        "calendar_id": "primary",
        "discord_channel_id": "chan-1",
        **fields,
    }
    return CalendarSubscription(**data)


class TestMemoryAccountStore:
    @pytest.mark.asyncio
    async def test_update_tokens_keeps_refresh_token_when_absent(self) -> None:
        store = MemoryAccountStore()
        await store.save_user(User(id="user-1", access_token="a1", refresh_token="r1"))

        updated = await store.update_tokens("user-1", access_token="a2", expires_at=123)

        assert updated.access_token == "a2"
        assert updated.refresh_token == "r1"
        assert updated.access_token_expires_at == 123
        assert await store.get_user("user-1") == updated

    @pytest.mark.asyncio
    async def test_update_tokens_for_unknown_user_raises(self) -> None:
        with pytest.raises(UserNotFoundError):
            await MemoryAccountStore().update_tokens("ghost", access_token="a", expires_at=1)


class TestMemorySubscriptionStore:
    @pytest.mark.asyncio
    async def test_push_channel_index_follows_current_channel(self) -> None:
        """Trocar o channel remove o índice antigo."""
        store = MemorySubscriptionStore()
        await store.create(_subscription("sub-1", google_channel_id="ch-1"))

        await store.update("sub-1", google_channel_id="ch-2")

        assert await store.find_by_push_channel("ch-1") is None
        assert (await store.find_by_push_channel("ch-2")).id == "sub-1"

        await store.update("sub-1", google_channel_id=None)
        assert await store.find_by_push_channel("ch-2") is None

    @pytest.mark.asyncio
    async def test_list_active_and_by_user(self) -> None:
        store = MemorySubscriptionStore()
        await store.create(_subscription("sub-2"))
        await store.create(_subscription("sub-1", active=False))
        await store.create(_subscription("sub-3", user_id="user-2"))

        assert [s.id for s in await store.list_active()] == ["sub-2", "sub-3"]
        assert [s.id for s in await store.list_user_subscriptions("user-1")] == ["sub-1", "sub-2"]

    @pytest.mark.asyncio
    async def test_update_unknown_raises(self) -> None:
        with pytest.raises(SubscriptionNotFoundError):
            await MemorySubscriptionStore().update("missing", active=False)


class TestMemoryEventCache:
    @pytest.mark.asyncio
    async def test_entries_expire_after_ttl(self) -> None:
        clock = _Clock()
        cache = MemoryEventCache(60, clock=clock)
        await cache.put("sub-1", CachedEvent(event_id="evt-1", summary="Planning"))

        assert (await cache.get("sub-1", "evt-1")).summary == "Planning"
        clock.now = 61
        assert await cache.get("sub-1", "evt-1") is None

    @pytest.mark.asyncio
    async def test_clear_only_touches_one_subscription(self) -> None:
        cache = MemoryEventCache(60)
        await cache.put("sub-1", CachedEvent(event_id="evt-1"))
        await cache.put("sub-1", CachedEvent(event_id="evt-2"))
        await cache.put("sub-2", CachedEvent(event_id="evt-1"))

        assert await cache.clear("sub-1") == 2
        assert cache.count("sub-1") == 0
        assert cache.count("sub-2") == 1


class TestMemoryStatusBoardStore:
    @pytest.mark.asyncio
    async def test_set_get_clear(self) -> None:
        store = MemoryStatusBoardStore()

        await store.set_message_id("sub-1", "msg-1")
        assert await store.get_message_id("sub-1") == "msg-1"

        await store.clear("sub-1")
        assert await store.get_message_id("sub-1") is None


class TestMemorySyncLock:
    @pytest.mark.asyncio
    async def test_lease_is_exclusive_until_release_or_expiry(self) -> None:
        clock = _Clock()
        lock = MemorySyncLock(clock=clock)

        token = await lock.acquire("sub-1", 30)
        assert token is not None
        assert await lock.acquire("sub-1", 30) is None

        await lock.release("sub-1", "not-the-owner")
        assert await lock.acquire("sub-1", 30) is None

        clock.now = 31
        assert await lock.acquire("sub-1", 30) is not None
