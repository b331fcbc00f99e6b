"""Usuários e destinos Discord: cadastro pós-login e canais de entrega."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.records import DiscordChannel, User, utcnow
from app.observability import get_correlation_id
from utils.errors import InvalidRequestError, UserNotFoundError

if TYPE_CHECKING:
    from app.domain.calendar_event import CalendarListEntry
    from app.protocols import (
        CalendarProviderProtocol,
        DiscordChannelStoreProtocol,
        UserStoreProtocol,
    )

logger = logging.getLogger(__name__)

_COMPONENT = "accounts"

DISCORD_WEBHOOK_PREFIX = "https://discord.com/api/webhooks/"
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600


@dataclass(frozen=True, slots=True)
class SignInTokens:
    """Resultado do OAuth entregue pelo provedor de identidade.

    Attributes:
        expires_at: Expiração em epoch segundos (como o OAuth devolve)
    """

    user_id: str
    email: str
    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None

    def expires_at_ms(self) -> int:
        if self.expires_at:
            return self.expires_at * 1000
        return int((time.time() + DEFAULT_TOKEN_LIFETIME_SECONDS) * 1000)


class RegisterUserUseCase:
    """Upsert do usuário no callback de sign-in.

    Primeiro login exige refresh token. Logins seguintes podem vir sem ele;
    nesse caso o refresh token salvo é preservado.
    """

    def __init__(self, users: UserStoreProtocol) -> None:
        self._users = users

    async def execute(self, tokens: SignInTokens) -> User:
        if not tokens.user_id or not tokens.email:
            raise InvalidRequestError("user_id and email are required")
        if not tokens.access_token:
            raise InvalidRequestError("access_token is required")

        existing = await self._users.get_user(tokens.user_id)
        if existing is None:
            if not tokens.refresh_token:
                raise InvalidRequestError("refresh_token is required on first sign-in")
            user = User(
                id=tokens.user_id,
                email=tokens.email,
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                access_token_expires_at=tokens.expires_at_ms(),
            )
            result = "created"
        else:
            user = existing.model_copy(
                update={
                    "email": tokens.email,
                    "access_token": tokens.access_token,
                    "refresh_token": tokens.refresh_token or existing.refresh_token,
                    "access_token_expires_at": tokens.expires_at_ms(),
                    "updated_at": utcnow(),
                }
            )
            result = "updated"

        await self._users.save_user(user)
        logger.info(
            "user_registered",
            extra={
                "component": _COMPONENT,
                "action": "register_user",
                "result": result,
                "user_id": user.id,
                "correlation_id": get_correlation_id(),
            },
        )
        return user


class ListCalendarsUseCase:
    def __init__(self, users: UserStoreProtocol, calendar: CalendarProviderProtocol) -> None:
        self._users = users
        self._calendar = calendar

    async def execute(self, user_id: str) -> list[CalendarListEntry]:
        await require_user(self._users, user_id)
        return await self._calendar.list_calendars(user_id)


class CreateDiscordChannelUseCase:
    """Cadastra um webhook Discord como destino do usuário."""

    def __init__(self, users: UserStoreProtocol, channels: DiscordChannelStoreProtocol) -> None:
        self._users = users
        self._channels = channels

    async def execute(
        self,
        user_id: str,
        *,
        webhook_url: str,
        name: str | None = None,
        is_default: bool = False,
    ) -> DiscordChannel:
        await require_user(self._users, user_id)
        if not webhook_url:
            raise InvalidRequestError("webhook_url is required")
        if not webhook_url.startswith(DISCORD_WEBHOOK_PREFIX):
            raise InvalidRequestError("Invalid Discord webhook URL format")

        channel = await self._channels.create_channel(
            DiscordChannel(
                id=str(uuid.uuid4()),
                user_id=user_id,
                webhook_url=webhook_url,
                name=name or None,
                is_default=is_default,
            )
        )
        logger.info(
            "discord_channel_created",
            extra={
                "component": _COMPONENT,
                "action": "create_discord_channel",
                "result": "ok",
                "user_id": user_id,
                "discord_channel_id": channel.id,
                "correlation_id": get_correlation_id(),
            },
        )
        return channel


class ListDiscordChannelsUseCase:
    def __init__(self, users: UserStoreProtocol, channels: DiscordChannelStoreProtocol) -> None:
        self._users = users
        self._channels = channels

    async def execute(self, user_id: str) -> list[DiscordChannel]:
        await require_user(self._users, user_id)
        return await self._channels.list_user_channels(user_id)


async def require_user(users: UserStoreProtocol, user_id: str) -> User:
    user = await users.get_user(user_id)
    if user is None:
        raise UserNotFoundError(f"User not found: {user_id}")
    return user
