"""Quadro diário de localização da equipe.

Títulos de evento no formato ``INICIAIS - LOCAL`` (ex: ``AW - WFH``) definem
onde cada pessoa do roster está hoje; sem evento, vale o local padrão.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from app.domain.status_board import ParsedSummary, PersonLocation

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date, datetime
    from zoneinfo import ZoneInfo

    from app.domain.calendar_event import GoogleCalendarEvent
    from app.domain.status_board import TrackedPerson

DEFAULT_LOCATION = "OFFICE"
STATUS_BOARD_TITLE = "📍 Team Location Status"
STATUS_BOARD_COLOR = 0x4285F4
STATUS_BOARD_FOOTER = "Updated automatically from calendar events"

_SUMMARY_PATTERN = re.compile(r"^([A-Z]{2,3})\s*-\s*(.+)$", re.IGNORECASE)


def parse_event_summary(summary: str | None) -> ParsedSummary | None:
    if not summary:
        return None
    match = _SUMMARY_PATTERN.match(summary.strip())
    if not match:
        return None
    return ParsedSummary(
        initials=match.group(1).upper(),
        location=match.group(2).strip().upper(),
    )


def build_location_status(
    events: Iterable[GoogleCalendarEvent],
    roster: Sequence[TrackedPerson],
    *,
    today: date,
    zone: ZoneInfo,
    default_location: str = DEFAULT_LOCATION,
) -> list[PersonLocation]:
    """Resolve o local de cada pessoa do roster para `today`.

    Eventos cancelados, fora do formato, de pessoas fora do roster ou de
    outro dia são ignorados. Vários eventos no dia: vale o último.
    """
    names = {person.initials: person.name for person in roster}
    locations = {person.initials: default_location for person in roster}

    for event in events:
        if event.is_cancelled:
            continue
        parsed = parse_event_summary(event.summary)
        if parsed is None or parsed.initials not in locations:
            continue
        start = event.start.to_datetime(zone) if event.start else None
        if start is None or start.astimezone(zone).date() != today:
            continue
        locations[parsed.initials] = parsed.location

    return [
        PersonLocation(initials=initials, name=names[initials], location=location)
        for initials, location in locations.items()
    ]


def format_status_board(
    statuses: Sequence[PersonLocation],
    *,
    today: date,
    now: datetime,
) -> dict[str, Any]:
    """Embed agrupado por local (ordem alfabética)."""
    by_location: dict[str, list[PersonLocation]] = {}
    for person in statuses:
        by_location.setdefault(person.location or DEFAULT_LOCATION, []).append(person)

    fields = [
        {
            "name": location,
            "value": ", ".join(f"**{p.name}** ({p.initials})" for p in by_location[location])
            or "_No one_",
            "inline": False,
        }
        for location in sorted(by_location)
    ]
    return {
        "title": STATUS_BOARD_TITLE,
        "description": f"Status for {today:%A}, {today:%B} {today.day}, {today.year}",
        "color": STATUS_BOARD_COLOR,
        "fields": fields,
        "footer": {"text": STATUS_BOARD_FOOTER},
        "timestamp": now.isoformat(),
    }


__all__ = [
    "DEFAULT_LOCATION",
    "STATUS_BOARD_COLOR",
    "STATUS_BOARD_TITLE",
    "build_location_status",
    "format_status_board",
    "parse_event_summary",
]
