"""Protocolos e contratos do core da aplicação."""

from .account_store import DiscordChannelStoreProtocol, UserStoreProtocol
from .calendar_provider import CalendarProviderProtocol
from .crypto import TokenCipherProtocol
from .event_cache import EventCacheProtocol
from .notification_sink import DeliveryResult, NotificationSinkProtocol
from .status_board_store import StatusBoardStoreProtocol, SyncLockProtocol
from .subscription_store import SubscriptionStoreProtocol

__all__ = [
    "CalendarProviderProtocol",
    "DeliveryResult",
    "DiscordChannelStoreProtocol",
    "EventCacheProtocol",
    "NotificationSinkProtocol",
    "StatusBoardStoreProtocol",
    "SubscriptionStoreProtocol",
    "SyncLockProtocol",
    "TokenCipherProtocol",
    "UserStoreProtocol",
]
