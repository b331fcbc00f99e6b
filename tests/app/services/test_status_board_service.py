"""Testes do parser e da montagem do quadro de localização."""

from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from app.domain.status_board import PersonLocation, TrackedPerson
from app.services.status_board import (
    STATUS_BOARD_COLOR,
    STATUS_BOARD_TITLE,
    build_location_status,
    format_status_board,
    parse_event_summary,
)
from tests.fakes.sync_harness import NOW, make_event

ROSTER = [
    TrackedPerson(initials="AW", name="Andrew Williams"),
    TrackedPerson(initials="RM", name="Rhys Morgan"),
]
TODAY = date(2026, 3, 10)
UTC_ZONE = ZoneInfo("UTC")


@pytest.mark.parametrize(
    ("summary", "initials", "location"),
    [
        ("AW - WFH", "AW", "WFH"),
        ("aw-wfh", "AW", "WFH"),
        ("RMX -  client site ", "RMX", "CLIENT SITE"),
    ],
)
def test_parse_event_summary_accepts_initials_dash_location(
    summary: str, initials: str, location: str
) -> None:
    parsed = parse_event_summary(summary)

    assert parsed is not None
    assert (parsed.initials, parsed.location) == (initials, location)


@pytest.mark.parametrize("summary", [None, "", "Team sync", "A - WFH", "ABCD - WFH", "AW WFH"])
def test_parse_event_summary_rejects_other_titles(summary: str | None) -> None:
    assert parse_event_summary(summary) is None


def test_everyone_defaults_to_office_without_events() -> None:
    statuses = build_location_status([], ROSTER, today=TODAY, zone=UTC_ZONE)

    assert [(s.initials, s.location) for s in statuses] == [("AW", "OFFICE"), ("RM", "OFFICE")]


def test_today_event_sets_location_for_tracked_person() -> None:
    events = [
        make_event("e1", "AW - WFH", start=NOW),
        make_event("e2", "ZZ - Beach", start=NOW),  # fora do roster
        make_event("e3", "RM - Leave", start=NOW, status="cancelled"),
        make_event("e4", "Standup", start=NOW),
    ]

    statuses = build_location_status(events, ROSTER, today=TODAY, zone=UTC_ZONE)

    assert {s.initials: s.location for s in statuses} == {"AW": "WFH", "RM": "OFFICE"}


def test_events_from_other_days_are_ignored_and_last_wins() -> None:
    events = [
        make_event("e1", "AW - Leave", all_day="2026-03-11"),
        make_event("e2", "RM - WFH", start=NOW),
        make_event("e3", "RM - Client", start=NOW.replace(hour=14)),
    ]

    statuses = build_location_status(events, ROSTER, today=TODAY, zone=UTC_ZONE)

    assert {s.initials: s.location for s in statuses} == {"AW": "OFFICE", "RM": "CLIENT"}


def test_all_day_event_counts_for_its_day() -> None:
    events = [make_event("e1", "AW - Leave", all_day="2026-03-10")]

    statuses = build_location_status(events, ROSTER, today=TODAY, zone=UTC_ZONE)

    assert statuses[0].location == "LEAVE"


def test_format_status_board_groups_by_sorted_location() -> None:
    statuses = [
        PersonLocation(initials="AW", name="Andrew Williams", location="WFH"),
        PersonLocation(initials="RM", name="Rhys Morgan", location="OFFICE"),
        PersonLocation(initials="JD", name="Jane Doe", location="OFFICE"),
    ]

    embed = format_status_board(statuses, today=TODAY, now=NOW)

    assert embed["title"] == STATUS_BOARD_TITLE
    assert embed["color"] == STATUS_BOARD_COLOR
    assert embed["description"] == "Status for Tuesday, March 10, 2026"
    assert [field["name"] for field in embed["fields"]] == ["OFFICE", "WFH"]
    assert embed["fields"][0]["value"] == "**Rhys Morgan** (RM), **Jane Doe** (JD)"
    assert embed["footer"]["text"]
