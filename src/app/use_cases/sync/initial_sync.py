"""Sync inicial: povoa o cache e obtém o primeiro sync token, sem notificar."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.records import CachedEvent
from app.observability import get_correlation_id, record_sync_result
from app.use_cases.sync.fetch import fetch_events
from app.use_cases.sync.results import InitialSyncResult

if TYPE_CHECKING:
    from app.use_cases.sync.dependencies import SyncDependencies

logger = logging.getLogger(__name__)


class PerformInitialSyncUseCase:
    """Baixa eventos de agora em diante e grava todos no cache.

    Pode ser reexecutado: o cache é chaveado por event id (last write wins).
    """

    def __init__(self, deps: SyncDependencies) -> None:
        self._deps = deps

    async def execute(self, subscription_id: str) -> InitialSyncResult:
        """Executa o sync inicial.

        Raises:
            SubscriptionNotFoundError: assinatura inexistente.
            UserNotFoundError: dono da assinatura inexistente.
        """
        deps = self._deps
        subscription = await deps.require_subscription(subscription_id)
        await deps.require_user(subscription)

        now = deps.clock()
        events, sync_token = await fetch_events(
            deps.calendar,
            subscription,
            time_min=now,
            page_size=deps.page_size,
        )
        # Cancelados também entram aqui; o caminho incremental só guarda ativos
        for event in events:
            await deps.cache.put(subscription_id, CachedEvent.from_event(event, seen_at=now))

        if sync_token:
            await deps.subscriptions.update(subscription_id, sync_token=sync_token, last_sync_at=now)
            logger.info(
                "initial_sync_completed",
                extra={
                    "component": "sync_engine",
                    "action": "initial_sync",
                    "result": "ok",
                    "subscription_id": subscription_id,
                    "events_cached": len(events),
                    "correlation_id": get_correlation_id(),
                },
            )
        else:
            logger.warning(
                "initial_sync_missing_token",
                extra={
                    "component": "sync_engine",
                    "action": "initial_sync",
                    "result": "no_token",
                    "subscription_id": subscription_id,
                    "correlation_id": get_correlation_id(),
                },
            )

        record_sync_result(
            subscription_id,
            mode="initial",
            events_seen=len(events),
            notifications_sent=0,
            correlation_id=get_correlation_id(),
        )
        return InitialSyncResult(
            subscription_id=subscription_id,
            events_cached=len(events),
            sync_token_stored=bool(sync_token),
        )
