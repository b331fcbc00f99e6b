"""Testes dos jobs em lote: sync periódico, renovação, status board e resumo diário."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.records import CalendarSubscription
from app.use_cases.daily_digest import DailyDigestPublisher
from app.use_cases.jobs import (
    DailyStatusBoardJob,
    DailySummaryJob,
    PeriodicSyncJob,
    RenewChannelsJob,
    needs_renewal,
)
from tests.fakes.sync_harness import NOW, WEBHOOK_URL, SyncHarness, make_event
from utils.errors import CalendarApiError


def _orphan(subscription_id: str, **fields: object) -> CalendarSubscription:
    data: dict[str, object] = {
        "id": subscription_id,
        "user_id": "ghost",
        "calendar_id": "primary",
        "discord_channel_id": "chan-1",
        **fields,
    }
    return CalendarSubscription(**data)


def _ms(delta: timedelta) -> int:
    return int((NOW + delta).timestamp() * 1000)


@pytest.mark.asyncio
async def test_periodic_sync_counts_success_missing_and_inactive() -> None:
    harness = SyncHarness()
    await harness.seed()
    await harness.subscriptions.create(_orphan("sub-2"))
    await harness.subscriptions.create(_orphan("sub-3", active=False))
    harness.calendar.add_event(make_event("evt-1"))

    summary = await PeriodicSyncJob(
        engine=harness.engine, subscriptions=harness.subscriptions
    ).run()

    data = summary.to_dict()
    assert data["job"] == "periodic-sync"
    assert data["details"]["succeeded"] == ["sub-1"]
    assert data["details"]["skipped"] == ["sub-2"]
    assert data["errors"] == 0
    assert len(harness.sink.sent) == 1


@pytest.mark.asyncio
async def test_periodic_sync_keeps_going_after_failure() -> None:
    harness = SyncHarness()
    await harness.seed()
    await harness.subscriptions.create(_orphan("sub-0", user_id="user-1"))
    outcomes = []

    async def _sync(subscription_id: str):
        if subscription_id == "sub-0":
            raise CalendarApiError("boom", status_code=500)
        outcome = await harness.engine.sync_subscription(subscription_id)
        outcomes.append(outcome)
        return outcome

    engine = MagicMock()
    engine.sync_subscription = AsyncMock(side_effect=_sync)

    summary = await PeriodicSyncJob(engine=engine, subscriptions=harness.subscriptions).run()

    assert summary.errors == [{"subscription_id": "sub-0", "error": "boom"}]
    assert summary.succeeded == ["sub-1"]
    assert len(outcomes) == 1


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({}, True),
        ({"google_channel_id": "c", "google_channel_expiration": None}, True),
        ({"google_channel_id": "c", "google_channel_expiration": _ms(timedelta(hours=2))}, True),
        ({"google_channel_id": "c", "google_channel_expiration": _ms(timedelta(days=3))}, False),
    ],
)
def test_needs_renewal(fields: dict[str, object], expected: bool) -> None:
    deadline = _ms(timedelta(hours=6))

    assert needs_renewal(_orphan("sub-1", **fields), deadline_ms=deadline) is expected


@pytest.mark.asyncio
async def test_renew_channels_renews_only_expiring_or_missing() -> None:
    harness = SyncHarness()
    await harness.seed(
        google_channel_id="old-channel",
        google_resource_id="old-resource",
        google_channel_expiration=_ms(timedelta(hours=1)),
    )
    await harness.subscriptions.create(
        _orphan(
            "sub-2",
            user_id="user-1",
            google_channel_id="fresh",
            google_resource_id="r",
            google_channel_expiration=_ms(timedelta(days=5)),
        )
    )
    await harness.subscriptions.create(_orphan("sub-3"))

    summary = await RenewChannelsJob(
        engine=harness.engine,
        subscriptions=harness.subscriptions,
        threshold_hours=6,
        clock=lambda: NOW,
    ).run()

    assert summary.succeeded == ["sub-1"]
    assert sorted(summary.skipped) == ["sub-2", "sub-3"]
    assert harness.calendar.stop_calls == [
        {"channel_id": "old-channel", "resource_id": "old-resource"}
    ]
    renewed = await harness.subscriptions.get("sub-1")
    assert renewed.google_channel_expiration == 1_900_000_000_000


@pytest.mark.asyncio
async def test_daily_status_board_disabled_without_roster() -> None:
    harness = SyncHarness()
    await harness.seed()

    summary = await DailyStatusBoardJob(
        publisher=harness.publisher, subscriptions=harness.subscriptions
    ).run()

    assert "disabled" in summary.to_dict()["message"]
    assert harness.sink.sent == []


@pytest.mark.asyncio
async def test_daily_status_board_posts_new_message_per_subscription() -> None:
    harness = SyncHarness(roster={"AW": "Andrew Williams", "RM": "Rhys Morgan"})
    await harness.seed()
    await harness.board_store.set_message_id("sub-1", "yesterday")
    await harness.subscriptions.create(_orphan("sub-2", user_id="user-1", discord_channel_id="x"))
    harness.calendar.add_event(make_event("evt-1", "RM - Leave", all_day="2026-03-10"))

    summary = await DailyStatusBoardJob(
        publisher=harness.publisher, subscriptions=harness.subscriptions
    ).run()

    assert summary.succeeded == ["sub-1"]
    assert summary.skipped == ["sub-2"]
    posted = harness.sink.sent[0]
    assert posted["webhook_url"] == WEBHOOK_URL
    assert posted["wait"] is True
    fields = posted["message"]["embeds"][0]["fields"]
    assert [field["name"] for field in fields] == ["LEAVE", "OFFICE"]
    assert await harness.board_store.get_message_id("sub-1") == "msg-1"


@pytest.mark.asyncio
async def test_daily_status_board_records_delivery_failure() -> None:
    harness = SyncHarness(roster={"AW": "Andrew Williams"})
    await harness.seed()
    harness.sink.fail_with = 404

    summary = await DailyStatusBoardJob(
        publisher=harness.publisher, subscriptions=harness.subscriptions
    ).run()

    assert summary.errors == [{"subscription_id": "sub-1", "error": "rejected"}]
    assert await harness.board_store.get_message_id("sub-1") is None


def _daily_summary_job(harness: SyncHarness) -> DailySummaryJob:
    publisher = DailyDigestPublisher(
        calendar=harness.calendar,
        channels=harness.accounts,
        sink=harness.sink,
        clock=lambda: NOW,
    )
    return DailySummaryJob(publisher=publisher, subscriptions=harness.subscriptions)


@pytest.mark.asyncio
async def test_daily_summary_posts_digest_for_day_with_events() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.calendar.add_event(make_event("evt-1", "Standup", location="Room 4"))

    summary = await _daily_summary_job(harness).run()

    assert summary.succeeded == ["sub-1"]
    posted = harness.sink.sent[0]
    assert posted["webhook_url"] == WEBHOOK_URL
    assert posted["wait"] is False
    embed = posted["message"]["embeds"][0]
    assert embed["title"] == "📅 Today's Events - Team Calendar"
    assert embed["fields"][0]["name"] == "Standup"
    call = harness.calendar.list_calls[0]
    assert call.time_min.isoformat() == "2026-03-10T00:00:00+00:00"
    assert call.time_max.isoformat() == "2026-03-11T00:00:00+00:00"


@pytest.mark.asyncio
async def test_daily_summary_skips_empty_day_and_missing_channel() -> None:
    harness = SyncHarness()
    await harness.seed()
    await harness.subscriptions.create(_orphan("sub-2", user_id="user-1", discord_channel_id="x"))

    summary = await _daily_summary_job(harness).run()

    assert sorted(summary.skipped) == ["sub-1", "sub-2"]
    assert summary.errors == []
    assert harness.sink.sent == []


@pytest.mark.asyncio
async def test_daily_summary_runs_without_roster_and_records_failures() -> None:
    harness = SyncHarness()
    await harness.seed()
    harness.calendar.add_event(make_event("evt-1"))
    harness.sink.fail_with = 404

    summary = await _daily_summary_job(harness).run()

    assert harness.publisher.enabled is False
    assert summary.errors == [{"subscription_id": "sub-1", "error": "rejected"}]
