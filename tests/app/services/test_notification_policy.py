"""Testes da política de notificação (toggles e janela W)."""

from __future__ import annotations

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from app.domain.changes import ChangeType, EventChange
from app.domain.records import CalendarSubscription
from app.services.notification_policy import should_notify
from tests.fakes.sync_harness import NOW, make_event

UTC_ZONE = ZoneInfo("UTC")


def _subscription(**overrides: object) -> CalendarSubscription:
    fields: dict[str, object] = {
        "id": "sub-1",
        "user_id": "user-1",
        "calendar_id": "primary",
        "discord_channel_id": "chan-1",
        **overrides,
    }
    return CalendarSubscription(**fields)


def _change(
    change_type: ChangeType,
    *,
    hours_ahead: float = 2,
    changes: list[str] | None = None,
) -> EventChange:
    event = make_event(
        "evt-1",
        start=NOW + timedelta(hours=hours_ahead),
        status="cancelled" if change_type is ChangeType.CANCELLED else "confirmed",
    )
    return EventChange(type=change_type, event=event, changes=changes or [])


@pytest.mark.parametrize(
    ("change_type", "toggle"),
    [
        (ChangeType.NEW, "notify_new_events"),
        (ChangeType.UPDATED, "notify_updates"),
        (ChangeType.CANCELLED, "notify_cancellations"),
    ],
)
def test_toggle_off_suppresses_its_change_type(change_type: ChangeType, toggle: str) -> None:
    change = _change(change_type, changes=["summary"])

    assert should_notify(change, _subscription(), now=NOW, zone=UTC_ZONE) is True
    assert should_notify(change, _subscription(**{toggle: False}), now=NOW, zone=UTC_ZONE) is False


def test_window_zero_means_unlimited() -> None:
    far = _change(ChangeType.NEW, hours_ahead=24 * 90)

    assert should_notify(far, _subscription(notify_window_minutes=0), now=NOW, zone=UTC_ZONE)


def test_window_filters_new_events_outside_range() -> None:
    """W=60: evento em 30 min notifica, evento em 2 h não."""
    subscription = _subscription(notify_window_minutes=60)

    soon = _change(ChangeType.NEW, hours_ahead=0.5)
    later = _change(ChangeType.NEW, hours_ahead=2)

    assert should_notify(soon, subscription, now=NOW, zone=UTC_ZONE) is True
    assert should_notify(later, subscription, now=NOW, zone=UTC_ZONE) is False


def test_window_applies_to_updates_only_when_time_changed() -> None:
    subscription = _subscription(notify_window_minutes=60)
    renamed = _change(ChangeType.UPDATED, hours_ahead=5, changes=["summary"])
    moved = _change(ChangeType.UPDATED, hours_ahead=5, changes=["time"])

    assert should_notify(renamed, subscription, now=NOW, zone=UTC_ZONE) is True
    assert should_notify(moved, subscription, now=NOW, zone=UTC_ZONE) is False


def test_cancellations_ignore_window() -> None:
    subscription = _subscription(notify_window_minutes=1)
    cancelled = _change(ChangeType.CANCELLED, hours_ahead=48)

    assert should_notify(cancelled, subscription, now=NOW, zone=UTC_ZONE) is True


def test_all_day_event_starts_at_midnight_in_calendar_zone() -> None:
    """Dia inteiro em 2026-03-11 começa 00:00 em São Paulo (03:00 UTC)."""
    zone = ZoneInfo("America/Sao_Paulo")
    event = make_event("evt-1", all_day="2026-03-11")
    change = EventChange(type=ChangeType.NEW, event=event)
    now = NOW.replace(day=10, hour=20)  # 17:00 em São Paulo

    assert should_notify(change, _subscription(notify_window_minutes=420), now=now, zone=zone)
    assert not should_notify(change, _subscription(notify_window_minutes=360), now=now, zone=zone)
