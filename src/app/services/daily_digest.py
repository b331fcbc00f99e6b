"""Resumo diário dos eventos de uma agenda ("Today's Events").

Um embed por assinatura, com um field por evento do dia em ordem de início.
Dia sem eventos não gera mensagem.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.services.message_formatting import UNTITLED_EVENT, format_clock, format_long_date

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime
    from zoneinfo import ZoneInfo

    from app.domain.calendar_event import GoogleCalendarEvent

DIGEST_COLOR = 0x4285F4
DESCRIPTION_PREVIEW_LENGTH = 100
# Limite de fields por embed no Discord
MAX_DIGEST_FIELDS = 25


def format_daily_digest(
    events: Iterable[GoogleCalendarEvent],
    calendar_summary: str,
    *,
    today: date,
    now: datetime,
    zone: ZoneInfo,
) -> dict[str, Any] | None:
    """Monta o payload do resumo do dia; None quando não há eventos.

    Eventos cancelados são ignorados. Eventos de dia inteiro aparecem
    primeiro, como ``All day``.
    """
    active = sorted(
        (event for event in events if not event.is_cancelled),
        key=lambda event: _start_sort_key(event, zone),
    )
    if not active:
        return None

    count = len(active)
    embed: dict[str, Any] = {
        "title": f"📅 Today's Events - {calendar_summary}",
        "description": f"You have {count} event{'s' if count > 1 else ''} scheduled for today",
        "color": DIGEST_COLOR,
        "fields": [_event_field(event, zone) for event in active[:MAX_DIGEST_FIELDS]],
        "footer": {"text": f"Daily Summary • {format_long_date(today)}"},
        "timestamp": now.isoformat(),
    }
    return {"embeds": [embed]}


def format_time_range(event: GoogleCalendarEvent, zone: ZoneInfo) -> str:
    """Ex: ``9:00 AM - 10:30 AM`` ou ``All day``."""
    if event.start is None:
        return ""
    if event.start.is_all_day:
        return "All day"
    start = event.start.to_datetime(zone)
    if start is None:
        return ""
    value = format_clock(start.astimezone(zone))
    end = event.end.to_datetime(zone) if event.end is not None else None
    if end is not None:
        value += f" - {format_clock(end.astimezone(zone))}"
    return value


def _event_field(event: GoogleCalendarEvent, zone: ZoneInfo) -> dict[str, Any]:
    lines = [f"🕐 {format_time_range(event, zone)}"]
    if event.location:
        lines.append(f"📍 {event.location}")
    if event.description:
        preview = event.description[:DESCRIPTION_PREVIEW_LENGTH]
        if len(event.description) > DESCRIPTION_PREVIEW_LENGTH:
            preview += "..."
        lines.append(f"📝 {preview}")
    return {"name": event.summary or UNTITLED_EVENT, "value": "\n".join(lines), "inline": False}


def _start_sort_key(event: GoogleCalendarEvent, zone: ZoneInfo) -> tuple[int, float]:
    start = event.start.to_datetime(zone) if event.start is not None else None
    if start is None:
        return (0, 0.0)
    return (0 if event.start.is_all_day else 1, start.timestamp())


__all__ = ["DIGEST_COLOR", "format_daily_digest", "format_time_range"]
