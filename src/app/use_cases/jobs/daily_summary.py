"""Job diário "Today's Events": um resumo por assinatura ativa."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.use_cases.jobs.summary import JobSummary
from utils.errors import NotFoundError

if TYPE_CHECKING:
    from app.protocols import SubscriptionStoreProtocol
    from app.use_cases.daily_digest import DailyDigestPublisher

JOB_NAME = "daily-summary"


class DailySummaryJob:
    def __init__(
        self,
        *,
        publisher: DailyDigestPublisher,
        subscriptions: SubscriptionStoreProtocol,
    ) -> None:
        self._publisher = publisher
        self._subscriptions = subscriptions

    async def run(self) -> JobSummary:
        summary = JobSummary(job=JOB_NAME)
        for subscription in await self._subscriptions.list_active():
            try:
                result = await self._publisher.publish(subscription)
            except NotFoundError as exc:
                summary.record_missing(subscription.id, exc)
                continue
            except Exception as exc:
                summary.record_error(subscription.id, exc)
                continue
            if result is None:
                summary.record_skip(subscription.id)
            elif result.success:
                summary.record_success(subscription.id)
            else:
                summary.record_error(subscription.id, result.error or "delivery_failed")
        summary.log_completed()
        return summary
