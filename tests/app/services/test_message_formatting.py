"""Testes da formatação de mudanças como embed Discord."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.domain.calendar_event import EventDateTime, GoogleCalendarEvent
from app.domain.changes import ChangeType, EventChange
from app.domain.records import CachedEvent
from app.services.message_formatting import (
    CHANGE_COLOR,
    format_clock,
    format_event_change,
    format_relative,
    format_when,
)
from tests.fakes.sync_harness import NOW, make_event

UTC_ZONE = ZoneInfo("UTC")


def _embed(change: EventChange, calendar: str = "Team Calendar") -> dict:
    payload = format_event_change(change, calendar, now=NOW, zone=UTC_ZONE)
    assert list(payload) == ["embeds"]
    return payload["embeds"][0]


def test_new_event_title_contains_summary() -> None:
    embed = _embed(EventChange(type=ChangeType.NEW, event=make_event("evt-1", "Quarterly review")))

    assert embed["title"] == "✨ New Event: Quarterly review"
    assert embed["description"] == "Calendar: Team Calendar"
    assert embed["color"] == CHANGE_COLOR[ChangeType.NEW]
    assert embed["url"].endswith("eid=evt-1")
    assert embed["timestamp"] == NOW.isoformat()


def test_when_field_has_date_clock_and_relative_distance() -> None:
    embed = _embed(EventChange(type=ChangeType.NEW, event=make_event("evt-1")))
    fields = {field["name"]: field["value"] for field in embed["fields"]}

    assert fields["When"] == "Tuesday, March 10, 2026 at 11:00 AM (in about 2 hours) - 12:00 PM"
    assert fields["Status"] == "New Event"
    assert "Where" not in fields


def test_updated_embed_lists_changes_and_location() -> None:
    event = make_event("evt-1", "Standup", location="Room 4")
    change = EventChange(
        type=ChangeType.UPDATED, event=event, changes=["summary", "location"]
    )

    embed = _embed(change)
    fields = {field["name"]: field["value"] for field in embed["fields"]}

    assert embed["title"] == "✏️ Event Updated: Standup"
    assert fields["Where"] == "Room 4"
    assert fields["Changes"] == "summary, location"


def test_cancelled_without_summary_falls_back_to_cached_title() -> None:
    cancelled = GoogleCalendarEvent(id="evt-1", status="cancelled")
    previous = CachedEvent.from_event(make_event("evt-1", "Offsite"))

    embed = _embed(EventChange(type=ChangeType.CANCELLED, event=cancelled, previous=previous))

    assert embed["title"] == "❌ Event Cancelled: Offsite"
    assert all(field["name"] != "When" for field in embed["fields"])


def test_untitled_event_and_empty_calendar_name() -> None:
    embed = _embed(EventChange(type=ChangeType.NEW, event=make_event("evt-1", None)), calendar="")

    assert embed["title"] == "✨ New Event: (No title)"
    assert "description" not in embed


def test_all_day_range_treats_end_date_as_exclusive() -> None:
    start = EventDateTime(date="2026-03-11")
    end = EventDateTime(date="2026-03-14")

    assert (
        format_when(start, end, now=NOW, zone=UTC_ZONE)
        == "Wednesday, March 11, 2026 to Friday, March 13, 2026"
    )


def test_single_all_day_has_no_range() -> None:
    start = EventDateTime(date="2026-03-11")
    end = EventDateTime(date="2026-03-12")

    assert format_when(start, end, now=NOW, zone=UTC_ZONE) == "Wednesday, March 11, 2026"


def test_past_event_has_no_relative_suffix() -> None:
    start = EventDateTime(date_time=(NOW - timedelta(hours=1)).isoformat())

    assert format_when(start, None, now=NOW, zone=UTC_ZONE) == "Tuesday, March 10, 2026 at 8:00 AM"


def test_when_renders_in_calendar_zone() -> None:
    start = EventDateTime(date_time="2026-03-10T15:30:00Z")

    value = format_when(start, None, now=NOW, zone=ZoneInfo("America/New_York"))

    assert value.startswith("Tuesday, March 10, 2026 at 11:30 AM")


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=20), "in less than a minute"),
        (timedelta(minutes=1), "in 1 minute"),
        (timedelta(minutes=30), "in 30 minutes"),
        (timedelta(minutes=60), "in about 1 hour"),
        (timedelta(hours=5), "in about 5 hours"),
        (timedelta(days=1), "in 1 day"),
        (timedelta(days=3), "in 3 days"),
    ],
)
def test_format_relative(delta: timedelta, expected: str) -> None:
    assert format_relative(NOW + delta, NOW) == expected


def test_format_clock_noon_and_midnight() -> None:
    assert format_clock(datetime(2026, 1, 1, 0, 5, tzinfo=UTC)) == "12:05 AM"
    assert format_clock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC)) == "12:00 PM"
