"""Protocolos de persistencia de usuarios e canais Discord.

Implementacoes criptografam tokens e webhook URLs em repouso; consumidores
sempre recebem texto plano.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.records import DiscordChannel, User


class UserStoreProtocol(ABC):
    """Credential store de usuarios."""

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Retorna usuario com tokens decifrados, ou None."""

    @abstractmethod
    async def save_user(self, user: User) -> None:
        """Cria ou substitui o usuario (upsert)."""

    @abstractmethod
    async def update_tokens(
        self,
        user_id: str,
        *,
        access_token: str,
        expires_at: int,
        refresh_token: str | None = None,
    ) -> User:
        """Persiste tokens renovados.

        Raises:
            UserNotFoundError: usuario inexistente.
        """


class DiscordChannelStoreProtocol(ABC):
    """Store de destinos Discord por usuario."""

    @abstractmethod
    async def create_channel(self, channel: DiscordChannel) -> DiscordChannel:
        """Persiste o canal e o indexa no usuario."""

    @abstractmethod
    async def get_channel(self, channel_id: str) -> DiscordChannel | None:
        """Retorna canal com webhook URL decifrada, ou None."""

    @abstractmethod
    async def list_user_channels(self, user_id: str) -> list[DiscordChannel]:
        """Lista canais do usuario."""
