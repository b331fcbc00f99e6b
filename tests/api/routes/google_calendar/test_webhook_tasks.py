"""Testes das tasks de sync em background disparadas pelo webhook."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from api.routes.google_calendar.webhook_tasks import (
    active_task_count,
    drain_sync_tasks,
    run_sync_safe,
    schedule_sync_task,
)
from utils.errors import (
    CalendarApiError,
    ReauthenticationRequiredError,
    SubscriptionNotFoundError,
)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        SubscriptionNotFoundError("gone"),
        ReauthenticationRequiredError("revoked"),
        CalendarApiError("down", status_code=503),
        RuntimeError("bug"),
    ],
)
async def test_run_sync_safe_never_raises(error: Exception) -> None:
    engine = MagicMock()
    engine.sync_subscription = AsyncMock(side_effect=error)

    await run_sync_safe(engine, "sub-1", "corr-1")

    engine.sync_subscription.assert_awaited_once_with("sub-1")


@pytest.mark.asyncio
async def test_scheduled_task_runs_and_drains() -> None:
    started = asyncio.Event()
    release = asyncio.Event()

    async def _slow_sync(subscription_id: str) -> None:
        started.set()
        await release.wait()

    engine = MagicMock()
    engine.sync_subscription = AsyncMock(side_effect=_slow_sync)

    schedule_sync_task(engine=engine, subscription_id="sub-1", correlation_id="corr-1")
    await started.wait()
    assert active_task_count() == 1

    release.set()
    await drain_sync_tasks(timeout_seconds=1.0)
    await asyncio.sleep(0)

    assert active_task_count() == 0
    engine.sync_subscription.assert_awaited_once_with("sub-1")


@pytest.mark.asyncio
async def test_drain_cancels_tasks_after_timeout() -> None:
    async def _stuck_sync(subscription_id: str) -> None:
        await asyncio.sleep(60)

    engine = MagicMock()
    engine.sync_subscription = AsyncMock(side_effect=_stuck_sync)

    schedule_sync_task(engine=engine, subscription_id="sub-1", correlation_id="corr-1")
    await asyncio.sleep(0)

    await drain_sync_tasks(timeout_seconds=0.01)
    await asyncio.sleep(0)

    assert active_task_count() == 0
