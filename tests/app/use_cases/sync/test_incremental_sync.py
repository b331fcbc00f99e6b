"""Testes do sync incremental: primeiro sync, diff, token expirado, entrega."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.domain.calendar_event import GoogleCalendarEvent
from app.domain.records import CachedEvent, CalendarSubscription
from app.infra.stores import MemorySyncLock
from app.use_cases.sync import SyncStatus
from config.settings import SyncSettings
from tests.fakes.sync_harness import NOW, SyncHarness, make_event
from utils.errors import UserNotFoundError


@pytest.mark.asyncio
async def test_first_sync_notifies_every_event_as_new() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.calendar.add_event(make_event("evt-1", "Planning"))
    harness.calendar.add_event(make_event("evt-2", "Retro"))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.status is SyncStatus.SYNCED
    assert outcome.first_sync is True
    assert outcome.notifications_sent == 2
    assert harness.sink.titles == ["✨ New Event: Planning", "✨ New Event: Retro"]
    assert harness.cache.count("sub-1") == 2
    subscription = await harness.subscriptions.get("sub-1")
    assert subscription.sync_token == "token-1"
    assert subscription.last_sync_at == NOW


@pytest.mark.asyncio
async def test_first_sync_marks_event_already_cached_as_new() -> None:
    """Sem token salvo, todo evento ativo vira `new`, mesmo se já estiver em cache."""
    harness = SyncHarness()
    await harness.seed()
    event = make_event("evt-1", "Planning")
    harness.calendar.add_event(event)
    await harness.cache.put("sub-1", CachedEvent.from_event(event))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.notifications_sent == 1


@pytest.mark.asyncio
async def test_resync_without_changes_is_idempotent() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.calendar.add_event(make_event("evt-1"))
    await harness.engine.sync_subscription("sub-1")

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.first_sync is False
    assert outcome.changes_detected == 0
    assert len(harness.sink.sent) == 1
    assert harness.calendar.list_calls[-1].sync_token == "token-1"
    assert (await harness.subscriptions.get("sub-1")).sync_token == "token-2"


@pytest.mark.asyncio
async def test_incremental_update_and_cancellation() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.calendar.add_event(make_event("evt-1", "Planning"))
    harness.calendar.add_event(make_event("evt-2", "Offsite"))
    await harness.engine.sync_subscription("sub-1")

    harness.calendar.push_change(make_event("evt-1", "Planning v2", etag='"evt-1-2"'))
    harness.calendar.push_change(GoogleCalendarEvent(id="evt-2", status="cancelled"))
    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.changes_detected == 2
    assert harness.sink.titles[-2:] == [
        "✏️ Event Updated: Planning v2",
        "❌ Event Cancelled: Offsite",
    ]


@pytest.mark.asyncio
async def test_etag_only_change_is_not_notified() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.calendar.add_event(make_event("evt-1"))
    await harness.engine.sync_subscription("sub-1")

    harness.calendar.push_change(make_event("evt-1", etag='"evt-1-9"'))
    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.events_seen == 1
    assert outcome.notifications_sent == 0


@pytest.mark.asyncio
async def test_expired_token_falls_back_to_time_range_and_diffs_against_cache() -> None:
    harness = SyncHarness()
    await harness.seed(sync_token="stale")
    harness.calendar.expired_tokens.add("stale")
    known = make_event("evt-1", "Known")
    harness.calendar.add_event(known)
    harness.calendar.add_event(make_event("evt-2", "Fresh"))
    await harness.cache.put("sub-1", CachedEvent.from_event(known))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.token_reset is True
    assert outcome.first_sync is False
    assert harness.sink.titles == ["✨ New Event: Fresh"]
    calls = harness.calendar.list_calls
    assert [call.sync_token for call in calls] == ["stale", None]
    assert calls[1].time_min == NOW
    assert (await harness.subscriptions.get("sub-1")).sync_token == "token-1"


@pytest.mark.asyncio
async def test_incremental_fetch_follows_pages() -> None:
    harness = SyncHarness()
    harness.calendar.page_limit = 2
    await harness.seed()
    for index in range(5):
        harness.calendar.add_event(make_event(f"evt-{index}"))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.events_seen == 5
    assert [call.page_token for call in harness.calendar.list_calls] == [None, "2", "4"]
    assert (await harness.subscriptions.get("sub-1")).sync_token == "token-1"


@pytest.mark.asyncio
async def test_window_filters_far_events() -> None:
    harness = SyncHarness()
    await harness.seed(notify_window_minutes=60)
    harness.calendar.add_event(make_event("soon", "Soon", start=NOW + timedelta(minutes=30)))
    harness.calendar.add_event(make_event("later", "Later", start=NOW + timedelta(hours=3)))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert harness.sink.titles == ["✨ New Event: Soon"]
    assert outcome.changes_detected == 2
    assert harness.cache.count("sub-1") == 2


@pytest.mark.asyncio
async def test_disabled_toggle_still_caches_event() -> None:
    harness = SyncHarness()
    await harness.seed(notify_new_events=False)
    harness.calendar.add_event(make_event("evt-1"))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.notifications_sent == 0
    assert harness.cache.count("sub-1") == 1


@pytest.mark.asyncio
async def test_delivery_failure_is_counted_and_sync_token_still_saved() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.sink.fail_with = 500
    harness.calendar.add_event(make_event("evt-1"))
    harness.calendar.add_event(make_event("evt-2"))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.notifications_sent == 0
    assert outcome.notifications_failed == 2
    assert outcome.sync_token_updated is True
    assert (await harness.subscriptions.get("sub-1")).sync_token == "token-1"


@pytest.mark.asyncio
async def test_missing_discord_channel_skips_delivery() -> None:
    harness = SyncHarness()
    await harness.seed(discord_channel_id="chan-gone")
    harness.calendar.add_event(make_event("evt-1"))

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.notifications_skipped == 1
    assert harness.sink.sent == []
    assert harness.cache.count("sub-1") == 1


@pytest.mark.asyncio
async def test_missing_and_inactive_subscriptions_are_skipped() -> None:
    harness = SyncHarness()
    await harness.seed(active=False)

    inactive = await harness.engine.sync_subscription("sub-1")
    missing = await harness.engine.sync_subscription("sub-404")

    assert (inactive.status, inactive.reason) == (SyncStatus.SKIPPED, "inactive")
    assert (missing.status, missing.reason) == (SyncStatus.SKIPPED, "not_found")
    assert harness.calendar.list_calls == []


@pytest.mark.asyncio
async def test_missing_owner_raises() -> None:
    harness = SyncHarness()
    await harness.subscriptions.create(
        CalendarSubscription(
            id="sub-9", user_id="ghost", calendar_id="primary", discord_channel_id="chan-1"
        )
    )

    with pytest.raises(UserNotFoundError):
        await harness.engine.sync_subscription("sub-9")


@pytest.mark.asyncio
async def test_held_lease_skips_sync() -> None:
    lock = MemorySyncLock()
    harness = SyncHarness(settings=SyncSettings(sync_lock_enabled=True), lock=lock)
    await harness.seed()
    assert await lock.acquire("sub-1", 60) is not None

    outcome = await harness.engine.sync_subscription("sub-1")

    assert outcome.reason == "locked"


@pytest.mark.asyncio
async def test_lease_is_released_after_sync() -> None:
    lock = MemorySyncLock()
    harness = SyncHarness(settings=SyncSettings(sync_lock_enabled=True), lock=lock)
    await harness.seed()

    await harness.engine.sync_subscription("sub-1")

    assert await lock.acquire("sub-1", 60) is not None


@pytest.mark.asyncio
async def test_status_board_message_is_refreshed_after_notifications() -> None:
    harness = SyncHarness(roster={"AW": "Andrew Williams"})
    await harness.seed()
    await harness.board_store.set_message_id("sub-1", "msg-board")
    harness.calendar.add_event(make_event("evt-1", "AW - WFH", start=NOW + timedelta(hours=1)))

    await harness.engine.sync_subscription("sub-1")

    assert len(harness.sink.edited) == 1
    edited = harness.sink.edited[0]
    assert edited["message_id"] == "msg-board"
    fields = edited["message"]["embeds"][0]["fields"]
    assert fields == [{"name": "WFH", "value": "**Andrew Williams** (AW)", "inline": False}]


@pytest.mark.asyncio
async def test_status_board_not_touched_when_nothing_sent() -> None:
    harness = SyncHarness(roster={"AW": "Andrew Williams"})
    await harness.seed()
    await harness.board_store.set_message_id("sub-1", "msg-board")

    await harness.engine.sync_subscription("sub-1")

    assert harness.sink.edited == []
