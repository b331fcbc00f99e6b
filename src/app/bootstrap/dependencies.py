"""Factories de dependências: criação de implementações concretas.

Escolhe o backend dos stores por `STORE_BACKEND` e conecta adapters de
Google Calendar, Discord e criptografia aos casos de uso. Cada factory é
um singleton por processo; `reset_dependencies()` limpa tudo (testes).
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.bootstrap.clients import create_async_redis_client, create_oauth_http_client
from app.infra.calendar.google_calendar_client import GoogleCalendarClient
from app.infra.calendar.token_refresher import GoogleTokenRefresher
from app.infra.crypto import AesGcmTokenCipher
from app.infra.discord.webhook_sink import create_discord_webhook_sink
from app.infra.stores import (
    MemoryAccountStore,
    MemoryEventCache,
    MemoryStatusBoardStore,
    MemorySubscriptionStore,
    MemorySyncLock,
    RedisAccountStore,
    RedisEventCache,
    RedisStatusBoardStore,
    RedisSubscriptionStore,
    RedisSyncLock,
)
from app.protocols import (
    CalendarProviderProtocol,
    EventCacheProtocol,
    NotificationSinkProtocol,
    StatusBoardStoreProtocol,
    SubscriptionStoreProtocol,
    SyncLockProtocol,
    TokenCipherProtocol,
)
from app.use_cases.daily_digest import DailyDigestPublisher
from app.use_cases.jobs import (
    DailyStatusBoardJob,
    DailySummaryJob,
    PeriodicSyncJob,
    RenewChannelsJob,
)
from app.use_cases.status_board import StatusBoardPublisher
from app.use_cases.subscriptions import SubscriptionManager
from app.use_cases.sync import SyncDependencies, SyncEngine
from config.settings import (
    get_base_settings,
    get_discord_settings,
    get_google_calendar_settings,
    get_security_settings,
    get_status_board_settings,
    get_store_settings,
    get_sync_settings,
)

logger = logging.getLogger(__name__)


def _use_redis() -> bool:
    return get_store_settings().backend == "redis"


def _log_created(name: str, backend: str) -> None:
    logger.info(
        "dependency_created",
        extra={"component": "bootstrap", "dependency": name, "backend": backend},
    )


# ──────────────────────────────────────────────────────────────────────────────
# Stores
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_token_cipher() -> TokenCipherProtocol:
    """Cipher de segredos em repouso.

    Raises:
        TokenCipherError: ENCRYPTION_KEY ausente ou curta demais.
    """
    return AesGcmTokenCipher(get_security_settings().encryption_key)


@lru_cache(maxsize=1)
def get_account_store() -> MemoryAccountStore | RedisAccountStore:
    """Store único para usuários e canais Discord."""
    if _use_redis():
        store: MemoryAccountStore | RedisAccountStore = RedisAccountStore(
            create_async_redis_client(), get_token_cipher()
        )
        _log_created("account_store", "redis")
        return store
    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            "memory_store_in_non_dev",
            extra={"component": "bootstrap", "backend": "memory", "environment": environment},
        )
    _log_created("account_store", "memory")
    return MemoryAccountStore()


@lru_cache(maxsize=1)
def get_subscription_store() -> SubscriptionStoreProtocol:
    if _use_redis():
        _log_created("subscription_store", "redis")
        return RedisSubscriptionStore(create_async_redis_client())
    _log_created("subscription_store", "memory")
    return MemorySubscriptionStore()


@lru_cache(maxsize=1)
def get_event_cache() -> EventCacheProtocol:
    ttl_seconds = get_store_settings().event_cache_ttl_seconds
    if _use_redis():
        _log_created("event_cache", "redis")
        return RedisEventCache(create_async_redis_client(), ttl_seconds)
    _log_created("event_cache", "memory")
    return MemoryEventCache(ttl_seconds)


@lru_cache(maxsize=1)
def get_status_board_store() -> StatusBoardStoreProtocol:
    if _use_redis():
        return RedisStatusBoardStore(create_async_redis_client())
    return MemoryStatusBoardStore()


@lru_cache(maxsize=1)
def get_sync_lock() -> SyncLockProtocol | None:
    """Lease por assinatura; None quando SYNC_LOCK_ENABLED está desligado."""
    if not get_sync_settings().sync_lock_enabled:
        return None
    if _use_redis():
        return RedisSyncLock(create_async_redis_client())
    return MemorySyncLock()


# ──────────────────────────────────────────────────────────────────────────────
# Adapters externos
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_calendar_provider() -> CalendarProviderProtocol:
    settings = get_google_calendar_settings()
    users = get_account_store()
    refresher = GoogleTokenRefresher(
        user_store=users, settings=settings, http_client=create_oauth_http_client()
    )
    _log_created("calendar_provider", "google")
    return GoogleCalendarClient(user_store=users, token_refresher=refresher, settings=settings)


@lru_cache(maxsize=1)
def get_notification_sink() -> NotificationSinkProtocol:
    _log_created("notification_sink", "discord")
    return create_discord_webhook_sink(get_discord_settings())


# ──────────────────────────────────────────────────────────────────────────────
# Casos de uso
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_status_board_publisher() -> StatusBoardPublisher:
    return StatusBoardPublisher(
        calendar=get_calendar_provider(),
        channels=get_account_store(),
        sink=get_notification_sink(),
        store=get_status_board_store(),
        settings=get_status_board_settings(),
        page_size=get_google_calendar_settings().page_size,
    )


@lru_cache(maxsize=1)
def get_daily_digest_publisher() -> DailyDigestPublisher:
    return DailyDigestPublisher(
        calendar=get_calendar_provider(),
        channels=get_account_store(),
        sink=get_notification_sink(),
        timezone=get_status_board_settings().timezone,
        page_size=get_google_calendar_settings().page_size,
    )


@lru_cache(maxsize=1)
def get_sync_engine() -> SyncEngine:
    accounts = get_account_store()
    calendar_settings = get_google_calendar_settings()
    deps = SyncDependencies(
        subscriptions=get_subscription_store(),
        users=accounts,
        channels=accounts,
        cache=get_event_cache(),
        calendar=get_calendar_provider(),
        sink=get_notification_sink(),
        settings=get_sync_settings(),
        page_size=calendar_settings.page_size,
        lock=get_sync_lock(),
    )
    publisher = get_status_board_publisher()
    return SyncEngine(
        deps,
        public_base_url=get_base_settings().public_base_url,
        webhook_path=calendar_settings.webhook_path,
        status_board=publisher if publisher.enabled else None,
    )


@lru_cache(maxsize=1)
def get_subscription_manager() -> SubscriptionManager:
    return SubscriptionManager(get_sync_engine())


def get_periodic_sync_job() -> PeriodicSyncJob:
    return PeriodicSyncJob(engine=get_sync_engine(), subscriptions=get_subscription_store())


def get_renew_channels_job() -> RenewChannelsJob:
    return RenewChannelsJob(
        engine=get_sync_engine(),
        subscriptions=get_subscription_store(),
        threshold_hours=get_sync_settings().renewal_threshold_hours,
    )


def get_daily_status_board_job() -> DailyStatusBoardJob:
    return DailyStatusBoardJob(
        publisher=get_status_board_publisher(),
        subscriptions=get_subscription_store(),
    )


def get_daily_summary_job() -> DailySummaryJob:
    return DailySummaryJob(
        publisher=get_daily_digest_publisher(),
        subscriptions=get_subscription_store(),
    )


def reset_dependencies() -> None:
    """Descarta singletons (útil em testes que trocam env)."""
    for factory in (
        get_token_cipher,
        get_account_store,
        get_subscription_store,
        get_event_cache,
        get_status_board_store,
        get_sync_lock,
        get_calendar_provider,
        get_notification_sink,
        get_status_board_publisher,
        get_daily_digest_publisher,
        get_sync_engine,
        get_subscription_manager,
    ):
        factory.cache_clear()
