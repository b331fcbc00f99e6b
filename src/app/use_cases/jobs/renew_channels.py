"""Job de renovação de push channels prestes a expirar.

Seleciona assinaturas ativas cujo channel expira dentro do limiar
(RENEWAL_THRESHOLD_HOURS, padrão 6h) ou que ainda não têm channel.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from app.domain.records import utcnow
from app.use_cases.jobs.summary import JobSummary
from utils.errors import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from app.domain.records import CalendarSubscription
    from app.protocols import SubscriptionStoreProtocol
    from app.use_cases.sync.engine import SyncEngine

JOB_NAME = "renew-channels"


def needs_renewal(subscription: CalendarSubscription, *, deadline_ms: int) -> bool:
    if not subscription.google_channel_id or subscription.google_channel_expiration is None:
        return True
    return subscription.google_channel_expiration < deadline_ms


class RenewChannelsJob:
    def __init__(
        self,
        *,
        engine: SyncEngine,
        subscriptions: SubscriptionStoreProtocol,
        threshold_hours: int = 6,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._engine = engine
        self._subscriptions = subscriptions
        self._threshold = timedelta(hours=threshold_hours)
        self._clock = clock

    async def run(self) -> JobSummary:
        summary = JobSummary(job=JOB_NAME)
        deadline_ms = int((self._clock() + self._threshold).timestamp() * 1000)
        for subscription in await self._subscriptions.list_active():
            if not needs_renewal(subscription, deadline_ms=deadline_ms):
                summary.record_skip(subscription.id)
                continue
            try:
                await self._engine.setup_watch_channel(subscription.id)
            except NotFoundError as exc:
                summary.record_missing(subscription.id, exc)
                continue
            except Exception as exc:
                summary.record_error(subscription.id, exc)
                continue
            summary.record_success(subscription.id)
        summary.log_completed()
        return summary
