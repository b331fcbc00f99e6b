"""Cache de eventos em Redis com TTL (padrão 30 dias)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.domain.records import CachedEvent
from app.infra.stores import redis_keys as keys
from app.protocols.event_cache import EventCacheProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


class RedisEventCache(EventCacheProtocol):
    """Snapshots por (assinatura, evento) com TTL renovado a cada escrita."""

    def __init__(self, async_redis_client: AsyncRedis[bytes], ttl_seconds: int) -> None:
        self._redis = async_redis_client
        self._ttl = ttl_seconds

    async def get(self, subscription_id: str, event_id: str) -> CachedEvent | None:
        try:
            data = await self._redis.get(keys.event_cache_key(subscription_id, event_id))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao ler cache de evento no Redis") from exc
        return CachedEvent.model_validate_json(data) if data is not None else None

    async def put(self, subscription_id: str, cached: CachedEvent) -> None:
        members_key = keys.subscription_events_key(subscription_id)
        try:
            pipeline = self._redis.pipeline()
            pipeline.setex(
                keys.event_cache_key(subscription_id, cached.event_id),
                self._ttl,
                cached.model_dump_json(),
            )
            pipeline.sadd(members_key, cached.event_id)
            pipeline.expire(members_key, self._ttl)
            await pipeline.execute()
        except RedisError as exc:
            raise RedisConnectionError("Falha ao gravar cache de evento no Redis") from exc

    async def clear(self, subscription_id: str) -> int:
        members_key = keys.subscription_events_key(subscription_id)
        try:
            members = await self._redis.smembers(members_key)
            event_keys = [
                keys.event_cache_key(subscription_id, keys.decode(member) or "")
                for member in members
            ]
            if event_keys:
                await self._redis.delete(*event_keys)
            await self._redis.delete(members_key)
        except RedisError as exc:
            raise RedisConnectionError("Falha ao limpar cache de eventos no Redis") from exc
        logger.info(
            "event_cache_cleared",
            extra={"subscription_id": subscription_id, "count": len(event_keys)},
        )
        return len(event_keys)
