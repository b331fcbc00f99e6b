"""Referência da mensagem do status board e lease de sync em Redis."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.infra.stores import redis_keys as keys
from app.protocols.status_board_store import StatusBoardStoreProtocol, SyncLockProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

# Mensagem do quadro só é editada no mesmo dia; 2 dias cobre fusos
STATUS_BOARD_TTL_SECONDS = 2 * 24 * 3600

# Libera apenas se o lease ainda pertence ao token
_RELEASE_SCRIPT = """
if redis.call('get', KEYS[1]) == ARGV[1] then
    return redis.call('del', KEYS[1])
end
return 0
"""


class RedisStatusBoardStore(StatusBoardStoreProtocol):
    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    async def get_message_id(self, subscription_id: str) -> str | None:
        try:
            return keys.decode(await self._redis.get(keys.status_board_key(subscription_id)))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao ler status board no Redis") from exc

    async def set_message_id(self, subscription_id: str, message_id: str) -> None:
        try:
            await self._redis.setex(
                keys.status_board_key(subscription_id), STATUS_BOARD_TTL_SECONDS, message_id
            )
        except RedisError as exc:
            raise RedisConnectionError("Falha ao gravar status board no Redis") from exc

    async def clear(self, subscription_id: str) -> None:
        try:
            await self._redis.delete(keys.status_board_key(subscription_id))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao limpar status board no Redis") from exc


class RedisSyncLock(SyncLockProtocol):
    """Lease por assinatura usando SET NX EX."""

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    async def acquire(self, subscription_id: str, ttl_seconds: int) -> str | None:
        token = uuid.uuid4().hex
        try:
            acquired = await self._redis.set(
                keys.sync_lock_key(subscription_id), token, nx=True, ex=ttl_seconds
            )
        except RedisError as exc:
            raise RedisConnectionError("Falha ao obter lease de sync no Redis") from exc
        return token if acquired else None

    async def release(self, subscription_id: str, token: str) -> None:
        try:
            await self._redis.eval(_RELEASE_SCRIPT, 1, keys.sync_lock_key(subscription_id), token)
        except RedisError as exc:
            raise RedisConnectionError("Falha ao liberar lease de sync no Redis") from exc
