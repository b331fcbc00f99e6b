"""Credential store em Redis: usuários e canais Discord.

Tokens OAuth e webhook URLs são cifrados antes de gravar e decifrados na
leitura; o restante do sistema só vê texto plano.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.domain.records import DiscordChannel, User, utcnow
from app.infra.stores import redis_keys as keys
from app.protocols.account_store import DiscordChannelStoreProtocol, UserStoreProtocol
from utils.errors import RedisConnectionError, UserNotFoundError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.protocols.crypto import TokenCipherProtocol

logger = logging.getLogger(__name__)


class RedisAccountStore(UserStoreProtocol, DiscordChannelStoreProtocol):
    """Usuários e canais Discord em Redis, com segredos cifrados.

    Args:
        async_redis_client: Cliente Redis assíncrono
        cipher: Cifra usada para tokens e webhook URLs
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes], cipher: TokenCipherProtocol) -> None:
        self._redis = async_redis_client
        self._cipher = cipher

    # ──────────────────────────────────────────────────────────────
    # Usuários
    # ──────────────────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> User | None:
        try:
            data = await self._redis.get(keys.user_key(user_id))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao ler usuário no Redis") from exc
        if data is None:
            return None
        stored = User.model_validate_json(data)
        return stored.model_copy(
            update={
                "access_token": self._cipher.decrypt(stored.access_token),
                "refresh_token": self._cipher.decrypt(stored.refresh_token),
            }
        )

    async def save_user(self, user: User) -> None:
        encrypted = user.model_copy(
            update={
                "access_token": self._cipher.encrypt(user.access_token),
                "refresh_token": self._cipher.encrypt(user.refresh_token),
            }
        )
        try:
            await self._redis.set(keys.user_key(user.id), encrypted.model_dump_json())
        except RedisError as exc:
            raise RedisConnectionError("Falha ao gravar usuário no Redis") from exc
        logger.debug("user_saved", extra={"user_id": user.id})

    async def update_tokens(
        self,
        user_id: str,
        *,
        access_token: str,
        expires_at: int,
        refresh_token: str | None = None,
    ) -> User:
        current = await self.get_user(user_id)
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
        await self.save_user(updated)
        return updated

    # ──────────────────────────────────────────────────────────────
    # Canais Discord
    # ──────────────────────────────────────────────────────────────

    async def create_channel(self, channel: DiscordChannel) -> DiscordChannel:
        encrypted = channel.model_copy(
            update={"webhook_url": self._cipher.encrypt(channel.webhook_url)}
        )
        try:
            pipeline = self._redis.pipeline()
            pipeline.set(keys.discord_channel_key(channel.id), encrypted.model_dump_json())
            pipeline.sadd(keys.user_channels_key(channel.user_id), channel.id)
            await pipeline.execute()
        except RedisError as exc:
            raise RedisConnectionError("Falha ao gravar canal Discord no Redis") from exc
        logger.info(
            "discord_channel_created",
            extra={"channel_id": channel.id, "user_id": channel.user_id},
        )
        return channel

    async def get_channel(self, channel_id: str) -> DiscordChannel | None:
        try:
            data = await self._redis.get(keys.discord_channel_key(channel_id))
        except RedisError as exc:
            raise RedisConnectionError("Falha ao ler canal Discord no Redis") from exc
        if data is None:
            return None
        return self._decrypt_channel(DiscordChannel.model_validate_json(data))

    async def list_user_channels(self, user_id: str) -> list[DiscordChannel]:
        try:
            members = await self._redis.smembers(keys.user_channels_key(user_id))
            channel_ids = sorted(keys.decode(member) or "" for member in members)
            if not channel_ids:
                return []
            payloads = await self._redis.mget([keys.discord_channel_key(cid) for cid in channel_ids])
        except RedisError as exc:
            raise RedisConnectionError("Falha ao listar canais Discord no Redis") from exc
        return [
            self._decrypt_channel(DiscordChannel.model_validate_json(data))
            for data in payloads
            if data is not None
        ]

    def _decrypt_channel(self, channel: DiscordChannel) -> DiscordChannel:
        return channel.model_copy(update={"webhook_url": self._cipher.decrypt(channel.webhook_url)})
