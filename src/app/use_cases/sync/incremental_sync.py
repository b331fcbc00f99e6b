"""Sync incremental de uma assinatura: busca, diff, cache, notificação.

Estados por assinatura:
    sem token -> (primeiro sync) -> incremental -> (token expirado) -> sem token

Primeiro sync (sem token salvo): todo evento não cancelado vira `new`.
Token recusado: limpa o token e refaz a mesma busca por tempo uma vez,
ainda comparando com o cache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.changes import ChangeType, EventChange
from app.domain.records import CachedEvent
from app.observability import get_correlation_id, record_sync_result
from app.services.change_detection import detect_change
from app.services.message_formatting import format_event_change
from app.services.notification_policy import should_notify
from app.use_cases.sync.fetch import fetch_events
from app.use_cases.sync.results import SyncOutcome, SyncStatus
from utils.errors import SyncTokenExpiredError

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.calendar_event import GoogleCalendarEvent
    from app.domain.records import CalendarSubscription
    from app.use_cases.status_board import StatusBoardPublisher
    from app.use_cases.sync.dependencies import SyncDependencies

logger = logging.getLogger(__name__)

_COMPONENT = "sync_engine"


class SyncSubscriptionUseCase:
    """Executa um sync incremental e entrega as notificações filtradas."""

    def __init__(
        self,
        deps: SyncDependencies,
        *,
        status_board: StatusBoardPublisher | None = None,
    ) -> None:
        self._deps = deps
        self._status_board = status_board

    async def execute(self, subscription_id: str) -> SyncOutcome:
        """Assinatura ausente, inativa ou com lease ocupado vira `skipped`.

        Raises:
            UserNotFoundError: dono da assinatura inexistente.
            ReauthenticationRequiredError: credenciais inválidas.
            CalendarApiError: falha do provider (inclui segunda recusa de token).
        """
        deps = self._deps
        subscription = await deps.subscriptions.get(subscription_id)
        if subscription is None:
            self._log("sync_skipped", subscription_id, result="not_found", level=logging.WARNING)
            return SyncOutcome.skipped(subscription_id, "not_found")
        if not subscription.active:
            self._log("sync_skipped", subscription_id, result="inactive")
            return SyncOutcome.skipped(subscription_id, "inactive")

        lock_token: str | None = None
        if deps.lock is not None and deps.settings.sync_lock_enabled:
            lock_token = await deps.lock.acquire(subscription_id, deps.settings.sync_lock_ttl_seconds)
            if lock_token is None:
                self._log("sync_skipped", subscription_id, result="locked")
                return SyncOutcome.skipped(subscription_id, "locked")
        try:
            return await self._run(subscription)
        finally:
            if lock_token is not None and deps.lock is not None:
                await deps.lock.release(subscription_id, lock_token)

    async def _run(self, subscription: CalendarSubscription) -> SyncOutcome:
        deps = self._deps
        await deps.require_user(subscription)
        now = deps.clock()
        first_sync = subscription.sync_token is None

        events, next_sync_token, token_reset = await self._fetch(subscription, now)

        changes: list[EventChange] = []
        for event in events:
            change = await self._classify(subscription.id, event, first_sync=first_sync)
            if change is not None:
                changes.append(change)
            if not event.is_cancelled:
                await deps.cache.put(subscription.id, CachedEvent.from_event(event, seen_at=now))

        to_send = [
            change
            for change in changes
            if should_notify(change, subscription, now=now, zone=deps.zone)
        ]
        sent, failed, skipped = await self._deliver(subscription, to_send, now)

        if next_sync_token:
            await deps.subscriptions.update(
                subscription.id, sync_token=next_sync_token, last_sync_at=now
            )

        if sent and self._status_board is not None:
            await self._status_board.refresh(subscription)

        outcome = SyncOutcome(
            subscription_id=subscription.id,
            status=SyncStatus.SYNCED,
            first_sync=first_sync,
            token_reset=token_reset,
            events_seen=len(events),
            changes_detected=len(changes),
            notifications_sent=sent,
            notifications_failed=failed,
            notifications_skipped=skipped,
            sync_token_updated=bool(next_sync_token),
        )
        self._log(
            "sync_completed",
            subscription.id,
            result="ok",
            first_sync=first_sync,
            token_reset=token_reset,
            events_seen=len(events),
            changes_detected=len(changes),
            notifications_sent=sent,
            notifications_failed=failed,
        )
        record_sync_result(
            subscription.id,
            mode="initial" if first_sync else "incremental",
            events_seen=len(events),
            notifications_sent=sent,
            correlation_id=get_correlation_id(),
        )
        return outcome

    async def _fetch(
        self,
        subscription: CalendarSubscription,
        now: datetime,
    ) -> tuple[list[GoogleCalendarEvent], str | None, bool]:
        deps = self._deps
        if subscription.sync_token is None:
            events, token = await fetch_events(
                deps.calendar, subscription, time_min=now, page_size=deps.page_size
            )
            return events, token, False
        try:
            events, token = await fetch_events(
                deps.calendar,
                subscription,
                sync_token=subscription.sync_token,
                page_size=deps.page_size,
            )
            return events, token, False
        except SyncTokenExpiredError:
            self._log("sync_token_expired", subscription.id, result="reset", level=logging.WARNING)
            await deps.subscriptions.update(subscription.id, sync_token=None)

        # Segunda falha propaga para o chamador
        events, token = await fetch_events(
            deps.calendar, subscription, time_min=now, page_size=deps.page_size
        )
        return events, token, True

    async def _classify(
        self,
        subscription_id: str,
        event: GoogleCalendarEvent,
        *,
        first_sync: bool,
    ) -> EventChange | None:
        if first_sync and not event.is_cancelled:
            return EventChange(type=ChangeType.NEW, event=event)
        cached = await self._deps.cache.get(subscription_id, event.id)
        return detect_change(event, cached)

    async def _deliver(
        self,
        subscription: CalendarSubscription,
        changes: list[EventChange],
        now: datetime,
    ) -> tuple[int, int, int]:
        """Retorna (enviadas, falhas, puladas). Falhas de entrega nunca propagam."""
        if not changes:
            return 0, 0, 0
        deps = self._deps
        channel = await deps.channels.get_channel(subscription.discord_channel_id)
        if channel is None:
            self._log(
                "discord_channel_missing",
                subscription.id,
                result="skipped",
                level=logging.ERROR,
                discord_channel_id=subscription.discord_channel_id,
            )
            return 0, 0, len(changes)

        sent = failed = 0
        for change in changes:
            message = format_event_change(
                change, subscription.calendar_summary, now=now, zone=deps.zone
            )
            result = await deps.sink.send(channel.webhook_url, message)
            if result.success:
                sent += 1
                continue
            failed += 1
            self._log(
                "notification_failed",
                subscription.id,
                result="error",
                level=logging.ERROR,
                change_type=str(change.type),
                event_id=change.event.id,
                status_code=result.status_code,
                error=result.error,
            )
        return sent, failed, 0

    def _log(
        self,
        message: str,
        subscription_id: str,
        *,
        result: str,
        level: int = logging.INFO,
        **fields: object,
    ) -> None:
        logger.log(
            level,
            message,
            extra={
                "component": _COMPONENT,
                "action": "sync_subscription",
                "result": result,
                "subscription_id": subscription_id,
                "correlation_id": get_correlation_id(),
                **fields,
            },
        )
