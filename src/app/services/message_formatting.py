"""Formatação de mudanças de evento como mensagem Discord (embed).

Texto voltado ao usuário final em inglês, igual ao restante do canal.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.domain.changes import ChangeType

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from app.domain.calendar_event import EventDateTime
    from app.domain.changes import EventChange

CHANGE_EMOJI = {
    ChangeType.NEW: "✨",
    ChangeType.UPDATED: "✏️",
    ChangeType.CANCELLED: "❌",
}
CHANGE_STATUS = {
    ChangeType.NEW: "New Event",
    ChangeType.UPDATED: "Event Updated",
    ChangeType.CANCELLED: "Event Cancelled",
}
CHANGE_COLOR = {
    ChangeType.NEW: 3066993,
    ChangeType.UPDATED: 3447003,
    ChangeType.CANCELLED: 15158332,
}
UNTITLED_EVENT = "(No title)"


def format_event_change(
    change: EventChange,
    calendar_summary: str,
    *,
    now: datetime,
    zone: ZoneInfo,
) -> dict[str, Any]:
    """Monta o payload do webhook para uma mudança.

    O título sempre contém o resumo do evento; cancelamentos sem resumo
    usam o snapshot anterior.
    """
    status = CHANGE_STATUS[change.type]
    summary = change.event.summary or (change.previous.summary if change.previous else "")
    embed: dict[str, Any] = {
        "title": f"{CHANGE_EMOJI[change.type]} {status}: {summary or UNTITLED_EVENT}",
        "color": CHANGE_COLOR[change.type],
        "fields": [],
        "timestamp": now.isoformat(),
    }
    if calendar_summary:
        embed["description"] = f"Calendar: {calendar_summary}"
    if change.event.html_link:
        embed["url"] = change.event.html_link

    when = format_when(change.event.start, change.event.end, now=now, zone=zone)
    if when:
        embed["fields"].append({"name": "When", "value": when, "inline": False})
    if change.event.location:
        embed["fields"].append({"name": "Where", "value": change.event.location, "inline": False})
    if change.type is ChangeType.UPDATED and change.changes:
        embed["fields"].append(
            {"name": "Changes", "value": ", ".join(change.changes), "inline": False}
        )
    embed["fields"].append({"name": "Status", "value": status, "inline": True})
    return {"embeds": [embed]}


def format_when(
    start: EventDateTime | None,
    end: EventDateTime | None,
    *,
    now: datetime,
    zone: ZoneInfo,
) -> str | None:
    if start is None:
        return None
    start_dt = start.to_datetime(zone)
    if start_dt is None:
        return None

    if start.is_all_day:
        value = format_long_date(start_dt.date())
        # `end.date` de dia inteiro é exclusivo na API
        if end is not None and end.date:
            last_day = date.fromisoformat(end.date) - timedelta(days=1)
            if last_day > start_dt.date():
                value += f" to {format_long_date(last_day)}"
        return value

    local_start = start_dt.astimezone(zone)
    value = f"{format_long_date(local_start.date())} at {format_clock(local_start)}"
    if start_dt > now:
        value += f" ({format_relative(start_dt, now)})"
    end_dt = end.to_datetime(zone) if end is not None else None
    if end_dt is not None:
        value += f" - {format_clock(end_dt.astimezone(zone))}"
    return value


def format_long_date(day: date) -> str:
    """Ex: ``Friday, October 17, 2026``."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def format_clock(moment: datetime) -> str:
    """Ex: ``9:05 AM``."""
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.minute:02d} {'AM' if moment.hour < 12 else 'PM'}"


def format_relative(moment: datetime, now: datetime) -> str:
    """Distância aproximada para o futuro, ex: ``in about 2 hours``."""
    minutes = round((moment - now).total_seconds() / 60)
    if minutes < 1:
        distance = "less than a minute"
    elif minutes < 45:
        distance = _plural(minutes, "minute")
    elif minutes < 90:
        distance = "about 1 hour"
    elif minutes < 1440:
        distance = f"about {_plural(round(minutes / 60), 'hour')}"
    elif minutes < 2520:
        distance = "1 day"
    elif minutes < 43200:
        distance = _plural(round(minutes / 1440), "day")
    elif minutes < 86400:
        distance = "about 1 month"
    elif minutes < 525600:
        distance = _plural(round(minutes / 43200), "month")
    else:
        distance = f"about {_plural(round(minutes / 525600), 'year')}"
    return f"in {distance}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


__all__ = ["format_event_change", "format_relative", "format_when"]
