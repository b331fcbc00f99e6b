"""Store de assinaturas em Redis com índices reversos.

Mantém `google_channel:{id}` apontando apenas para o push channel atual:
trocar o channel apaga o índice anterior na mesma pipeline.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from app.domain.records import CalendarSubscription, utcnow
from app.infra.stores import redis_keys as keys
from app.protocols.subscription_store import SubscriptionStoreProtocol
from utils.errors import RedisConnectionError, SubscriptionNotFoundError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


class RedisSubscriptionStore(SubscriptionStoreProtocol):
    """Persistência de CalendarSubscription em JSON."""

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    async def create(self, subscription: CalendarSubscription) -> CalendarSubscription:
        try:
            pipeline = self._redis.pipeline()
            pipeline.set(keys.subscription_key(subscription.id), subscription.model_dump_json())
            pipeline.sadd(keys.user_subscriptions_key(subscription.user_id), subscription.id)
            pipeline.sadd(keys.ALL_SUBSCRIPTIONS_KEY, subscription.id)
            if subscription.google_channel_id:
                pipeline.set(keys.push_channel_key(subscription.google_channel_id), subscription.id)
            await pipeline.execute()
        except RedisError as exc:
            raise RedisConnectionError("Falha ao criar assinatura no Redis") from exc
        logger.info(
            "subscription_created",
            extra={"subscription_id": subscription.id, "user_id": subscription.user_id},
        )
        return subscription

    async def get(self, subscription_id: str) -> CalendarSubscription | None:
        try:
            data = await self._redis.get(keys.subscription_key(subscription_id))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao ler assinatura no Redis") from exc
        return CalendarSubscription.model_validate_json(data) if data is not None else None

    async def update(self, subscription_id: str, **fields: Any) -> CalendarSubscription:
        current = await self.get(subscription_id)
        if current is None:
            raise SubscriptionNotFoundError(f"Subscription not found: {subscription_id}")

        updated = CalendarSubscription.model_validate(
            {**current.model_dump(), **fields, "updated_at": utcnow()}
        )
        old_channel = current.google_channel_id
        new_channel = updated.google_channel_id
        try:
            pipeline = self._redis.pipeline()
            pipeline.set(keys.subscription_key(subscription_id), updated.model_dump_json())
            if old_channel != new_channel:
                if old_channel:
                    pipeline.delete(keys.push_channel_key(old_channel))
                if new_channel:
                    pipeline.set(keys.push_channel_key(new_channel), subscription_id)
            await pipeline.execute()
        except RedisError as exc:
            raise RedisConnectionError("Falha ao atualizar assinatura no Redis") from exc
        return updated

    async def find_by_push_channel(self, channel_id: str) -> CalendarSubscription | None:
        try:
            subscription_id = keys.decode(await self._redis.get(keys.push_channel_key(channel_id)))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao resolver push channel no Redis") from exc
        if not subscription_id:
            return None
        return await self.get(subscription_id)

    async def list_user_subscriptions(self, user_id: str) -> list[CalendarSubscription]:
        return await self._load_set(keys.user_subscriptions_key(user_id))

    async def list_active(self) -> list[CalendarSubscription]:
        subscriptions = await self._load_set(keys.ALL_SUBSCRIPTIONS_KEY)
        return [subscription for subscription in subscriptions if subscription.active]

    async def _load_set(self, set_key: str) -> list[CalendarSubscription]:
        try:
            members = await self._redis.smembers(set_key)
            subscription_ids = sorted(keys.decode(member) or "" for member in members)
            if not subscription_ids:
                return []
            payloads = await self._redis.mget(
                [keys.subscription_key(subscription_id) for subscription_id in subscription_ids]
            )
        except RedisError as exc:
            raise RedisConnectionError("Falha ao listar assinaturas no Redis") from exc
        return [
            CalendarSubscription.model_validate_json(data) for data in payloads if data is not None
        ]
