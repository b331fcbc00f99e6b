"""Detecção de mudança entre evento recebido e último snapshot em cache.

Função pura: não lê nem grava cache; o motor de sync cuida do IO.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.changes import ChangeType, EventChange

if TYPE_CHECKING:
    from app.domain.calendar_event import GoogleCalendarEvent
    from app.domain.records import CachedEvent


def detect_change(event: GoogleCalendarEvent, cached: CachedEvent | None) -> EventChange | None:
    """Classifica o evento como new/updated/cancelled, ou None sem mudança.

    Cancelamento vence qualquer estado do cache. Em updates, `changes` lista
    os campos alterados na ordem summary, time, location.
    """
    if event.is_cancelled:
        return EventChange(type=ChangeType.CANCELLED, event=event, previous=cached)

    if cached is None:
        return EventChange(type=ChangeType.NEW, event=event)

    changes = diff_fields(event, cached)
    if not changes:
        return None
    return EventChange(type=ChangeType.UPDATED, event=event, previous=cached, changes=changes)


def diff_fields(event: GoogleCalendarEvent, cached: CachedEvent) -> list[str]:
    changes: list[str] = []
    if (event.summary or "") != cached.summary:
        changes.append("summary")
    if (event.start_value, event.end_value) != (cached.start_time, cached.end_time):
        changes.append("time")
    if (event.location or "") != cached.location:
        changes.append("location")
    return changes


__all__ = ["detect_change", "diff_fields"]
