"""Política de notificação por assinatura (toggles + janela de antecedência)."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from app.domain.changes import ChangeType

if TYPE_CHECKING:
    from datetime import datetime
    from zoneinfo import ZoneInfo

    from app.domain.changes import EventChange
    from app.domain.records import CalendarSubscription


def should_notify(
    change: EventChange,
    subscription: CalendarSubscription,
    *,
    now: datetime,
    zone: ZoneInfo,
) -> bool:
    """Decide se a mudança gera notificação.

    - cancelled: apenas `notify_cancellations`
    - new: `notify_new_events` e, com janela W > 0, início <= now + W
    - updated: `notify_updates` e, se o horário mudou e W > 0, novo início <= now + W

    Dia inteiro começa 00:00 em `zone`. Evento sem início não é barrado pela janela.
    """
    if change.type is ChangeType.CANCELLED:
        return subscription.notify_cancellations

    if change.type is ChangeType.NEW:
        if not subscription.notify_new_events:
            return False
        return _within_window(change, subscription.notify_window_minutes, now, zone)

    if not subscription.notify_updates:
        return False
    if "time" not in change.changes:
        return True
    return _within_window(change, subscription.notify_window_minutes, now, zone)


def _within_window(change: EventChange, window_minutes: int, now: datetime, zone: ZoneInfo) -> bool:
    if window_minutes <= 0:
        return True
    start = change.event.start.to_datetime(zone) if change.event.start else None
    if start is None:
        return True
    return start <= now + timedelta(minutes=window_minutes)


__all__ = ["should_notify"]
