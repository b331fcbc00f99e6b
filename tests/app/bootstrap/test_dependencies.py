"""Testes do composition root: escolha de backend e singletons."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from app.bootstrap import dependencies
from app.infra.stores import (
    MemoryAccountStore,
    MemorySyncLock,
    RedisAccountStore,
    RedisSubscriptionStore,
    RedisSyncLock,
)
from app.use_cases.sync import SyncEngine
from config.settings import SecuritySettings, StoreSettings, SyncSettings


@pytest.fixture(autouse=True)
def _fresh_singletons() -> Iterator[None]:
    dependencies.reset_dependencies()
    yield
    dependencies.reset_dependencies()


def test_memory_backend_wires_engine_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "get_store_settings", lambda: StoreSettings())
    monkeypatch.setattr(dependencies, "get_sync_settings", lambda: SyncSettings())

    engine = dependencies.get_sync_engine()

    assert isinstance(engine, SyncEngine)
    assert dependencies.get_sync_engine() is engine
    assert isinstance(dependencies.get_account_store(), MemoryAccountStore)
    assert dependencies.get_sync_lock() is None


def test_lock_enabled_uses_memory_lease(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "get_store_settings", lambda: StoreSettings())
    monkeypatch.setattr(
        dependencies, "get_sync_settings", lambda: SyncSettings(sync_lock_enabled=True)
    )

    assert isinstance(dependencies.get_sync_lock(), MemorySyncLock)


def test_redis_backend_shares_one_client(monkeypatch: pytest.MonkeyPatch) -> None:
    client = MagicMock()
    monkeypatch.setattr(dependencies, "get_store_settings", lambda: StoreSettings(backend="redis"))
    monkeypatch.setattr(
        dependencies, "get_sync_settings", lambda: SyncSettings(sync_lock_enabled=True)
    )
    monkeypatch.setattr(
        dependencies,
        "get_security_settings",
        lambda: SecuritySettings(encryption_key="k" * 32),
    )
    monkeypatch.setattr(dependencies, "create_async_redis_client", lambda: client)

    assert isinstance(dependencies.get_account_store(), RedisAccountStore)
    assert isinstance(dependencies.get_subscription_store(), RedisSubscriptionStore)
    assert isinstance(dependencies.get_sync_lock(), RedisSyncLock)
