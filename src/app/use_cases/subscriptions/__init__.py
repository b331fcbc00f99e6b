"""Gerenciamento de usuários, destinos Discord e assinaturas."""

from .accounts import (
    CreateDiscordChannelUseCase,
    ListCalendarsUseCase,
    ListDiscordChannelsUseCase,
    RegisterUserUseCase,
    SignInTokens,
)
from .manage import SubscriptionManager

__all__ = [
    "CreateDiscordChannelUseCase",
    "ListCalendarsUseCase",
    "ListDiscordChannelsUseCase",
    "RegisterUserUseCase",
    "SignInTokens",
    "SubscriptionManager",
]
