"""Job de sync periódico: rede de segurança para push notifications perdidas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.use_cases.jobs.summary import JobSummary
from app.use_cases.sync.results import SyncStatus
from utils.errors import NotFoundError

if TYPE_CHECKING:
    from app.protocols import SubscriptionStoreProtocol
    from app.use_cases.sync.engine import SyncEngine

JOB_NAME = "periodic-sync"


class PeriodicSyncJob:
    def __init__(self, *, engine: SyncEngine, subscriptions: SubscriptionStoreProtocol) -> None:
        self._engine = engine
        self._subscriptions = subscriptions

    async def run(self) -> JobSummary:
        summary = JobSummary(job=JOB_NAME)
        for subscription in await self._subscriptions.list_active():
            try:
                outcome = await self._engine.sync_subscription(subscription.id)
            except NotFoundError as exc:
                summary.record_missing(subscription.id, exc)
                continue
            except Exception as exc:
                summary.record_error(subscription.id, exc)
                continue
            if outcome.status is SyncStatus.SYNCED:
                summary.record_success(subscription.id)
            else:
                summary.record_skip(subscription.id)
        summary.log_completed()
        return summary
