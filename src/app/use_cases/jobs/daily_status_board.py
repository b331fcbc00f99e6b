"""Job diário do status board: uma mensagem nova por assinatura ativa."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.use_cases.jobs.summary import JobSummary
from utils.errors import NotFoundError

if TYPE_CHECKING:
    from app.protocols import SubscriptionStoreProtocol
    from app.use_cases.status_board import StatusBoardPublisher

JOB_NAME = "daily-status-board"


class DailyStatusBoardJob:
    def __init__(
        self,
        *,
        publisher: StatusBoardPublisher,
        subscriptions: SubscriptionStoreProtocol,
    ) -> None:
        self._publisher = publisher
        self._subscriptions = subscriptions

    async def run(self) -> JobSummary:
        summary = JobSummary(job=JOB_NAME)
        if not self._publisher.enabled:
            summary.message = "status board disabled: STATUS_BOARD_ROSTER is empty"
            summary.log_completed()
            return summary

        for subscription in await self._subscriptions.list_active():
            try:
                result = await self._publisher.publish_daily(subscription)
            except NotFoundError as exc:
                summary.record_missing(subscription.id, exc)
                continue
            except Exception as exc:
                summary.record_error(subscription.id, exc)
                continue
            if result.success:
                summary.record_success(subscription.id)
            else:
                summary.record_error(subscription.id, result.error or "delivery_failed")
        summary.log_completed()
        return summary
