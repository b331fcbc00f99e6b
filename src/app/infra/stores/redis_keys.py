"""Layout de chaves Redis do relay.

    user:{id}                              JSON (tokens cifrados)
    user:{id}:discord_channels             SET de channel ids
    user:{id}:calendar_subscriptions       SET de subscription ids
    discord_channel:{id}                   JSON (webhook_url cifrada)
    calendar_subscription:{id}             JSON
    calendar_subscriptions                 SET global de subscription ids
    google_channel:{channel_id}            subscription id (push channel atual)
    event_cache:{sub}:{event}              JSON + TTL
    subscription:{sub}:events              SET de event ids em cache
    status_board:{sub}                     id da mensagem do quadro do dia
    sync_lock:{sub}                        lease de sync (SET NX EX)
"""

from __future__ import annotations

ALL_SUBSCRIPTIONS_KEY = "calendar_subscriptions"


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def user_channels_key(user_id: str) -> str:
    return f"user:{user_id}:discord_channels"


def user_subscriptions_key(user_id: str) -> str:
    return f"user:{user_id}:calendar_subscriptions"


def discord_channel_key(channel_id: str) -> str:
    return f"discord_channel:{channel_id}"


def subscription_key(subscription_id: str) -> str:
    return f"calendar_subscription:{subscription_id}"


def push_channel_key(channel_id: str) -> str:
    return f"google_channel:{channel_id}"


def event_cache_key(subscription_id: str, event_id: str) -> str:
    return f"event_cache:{subscription_id}:{event_id}"


def subscription_events_key(subscription_id: str) -> str:
    return f"subscription:{subscription_id}:events"


def status_board_key(subscription_id: str) -> str:
    return f"status_board:{subscription_id}"


def sync_lock_key(subscription_id: str) -> str:
    return f"sync_lock:{subscription_id}"


def decode(value: bytes | str | None) -> str | None:
    """Normaliza respostas do client (decode_responses=False)."""
    if value is None:
        return None
    return value.decode("utf-8") if isinstance(value, bytes) else value
