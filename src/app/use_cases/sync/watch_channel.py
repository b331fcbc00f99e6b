"""Ciclo de vida do push channel (events.watch) de uma assinatura.

Cada setup substitui o channel anterior: o stop do antigo é best-effort e
o store reescreve o índice `google_channel:{id}` para o novo id.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from app.observability import get_correlation_id

if TYPE_CHECKING:
    from app.domain.calendar_event import WatchChannel
    from app.domain.records import CalendarSubscription
    from app.use_cases.sync.dependencies import SyncDependencies

logger = logging.getLogger(__name__)

_COMPONENT = "watch_channel"


class SetupWatchChannelUseCase:
    """Cria (ou recria) o push channel de uma assinatura."""

    def __init__(self, deps: SyncDependencies, *, base_url: str, webhook_path: str) -> None:
        self._deps = deps
        self._base_url = base_url.rstrip("/")
        self._webhook_path = webhook_path

    async def execute(self, subscription_id: str, base_url: str | None = None) -> WatchChannel:
        """Registra channel novo e persiste id, resource id e expiração.

        Raises:
            SubscriptionNotFoundError: assinatura inexistente.
            CalendarApiError: falha ao criar o channel novo.
        """
        deps = self._deps
        subscription = await deps.require_subscription(subscription_id)
        await deps.require_user(subscription)

        await stop_existing_channel(deps, subscription)

        webhook_url = f"{(base_url or self._base_url).rstrip('/')}{self._webhook_path}"
        watch = await deps.calendar.watch_events(
            subscription.user_id,
            subscription.calendar_id,
            channel_id=str(uuid.uuid4()),
            webhook_url=webhook_url,
        )
        await deps.subscriptions.update(
            subscription_id,
            google_channel_id=watch.channel_id,
            google_resource_id=watch.resource_id or None,
            google_channel_expiration=watch.expiration,
        )
        logger.info(
            "watch_channel_established",
            extra={
                "component": _COMPONENT,
                "action": "setup",
                "result": "ok",
                "subscription_id": subscription_id,
                "expiration": watch.expiration,
                "correlation_id": get_correlation_id(),
            },
        )
        return watch


class StopWatchChannelUseCase:
    """Encerra o push channel atual (best-effort) e limpa a referência."""

    def __init__(self, deps: SyncDependencies) -> None:
        self._deps = deps

    async def execute(self, subscription_id: str) -> bool:
        """Retorna True se o provider confirmou o stop."""
        deps = self._deps
        subscription = await deps.require_subscription(subscription_id)
        if not subscription.google_channel_id:
            return False
        stopped = await stop_existing_channel(deps, subscription)
        await deps.subscriptions.update(
            subscription_id,
            google_channel_id=None,
            google_resource_id=None,
            google_channel_expiration=None,
        )
        return stopped


async def stop_existing_channel(deps: SyncDependencies, subscription: CalendarSubscription) -> bool:
    """Para o channel registrado; falhas são logadas e engolidas."""
    if not (subscription.google_channel_id and subscription.google_resource_id):
        return False
    try:
        await deps.calendar.stop_channel(
            subscription.user_id,
            channel_id=subscription.google_channel_id,
            resource_id=subscription.google_resource_id,
        )
    except Exception as exc:
        logger.warning(
            "watch_channel_stop_failed",
            extra={
                "component": _COMPONENT,
                "action": "stop",
                "result": "error",
                "subscription_id": subscription.id,
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )
        return False
    return True
