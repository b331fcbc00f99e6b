"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CalendarApiError,
    DiscordChannelNotFoundError,
    InfrastructureError,
    InvalidRequestError,
    NotFoundError,
    ReauthenticationRequiredError,
    RedisConnectionError,
    SubscriptionForbiddenError,
    SubscriptionNotFoundError,
    SyncTokenExpiredError,
    UserNotFoundError,
)

__all__ = [
    "CalendarApiError",
    "DiscordChannelNotFoundError",
    "InfrastructureError",
    "InvalidRequestError",
    "NotFoundError",
    "ReauthenticationRequiredError",
    "RedisConnectionError",
    "SubscriptionForbiddenError",
    "SubscriptionNotFoundError",
    "SyncTokenExpiredError",
    "UserNotFoundError",
]
