"""Clientes externos compartilhados: Redis (stores) e HTTP do OAuth Google.

Singletons por processo. O webhook Discord monta seu próprio HttpClient em
`create_discord_webhook_sink`, porque o retry dele segue DiscordSettings.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.infra.http import HttpClient, HttpClientConfig
from config.settings import get_base_settings, get_google_calendar_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

_REDIS_TIMEOUT_SECONDS = 5.0


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis[bytes]:
    """Cliente Redis assíncrono usado por todos os stores.

    Raises:
        ValueError: REDIS_URL ausente (STORE_BACKEND=redis exige).
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        raise ValueError("REDIS_URL não configurado")

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=_REDIS_TIMEOUT_SECONDS,
        socket_connect_timeout=_REDIS_TIMEOUT_SECONDS,
        health_check_interval=30,
    )
    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info(
        "redis_client_created",
        extra={"component": "bootstrap", "action": "create_client", "host": host},
    )
    return client


@lru_cache(maxsize=1)
def create_oauth_http_client() -> HttpClient:
    """HttpClient do token endpoint; timeout e retries de GoogleCalendarSettings."""
    settings = get_google_calendar_settings()
    return HttpClient(
        HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
            default_headers={"Accept": "application/json"},
        )
    )


async def close_async_redis_client() -> None:
    """Fecha o pool Redis no shutdown, se chegou a ser criado."""
    if create_async_redis_client.cache_info().currsize == 0:
        return
    client = create_async_redis_client()
    try:
        await client.aclose()
    except Exception as exc:
        logger.warning(
            "redis_client_close_failed",
            extra={"component": "bootstrap", "error_type": type(exc).__name__},
        )
    create_async_redis_client.cache_clear()
