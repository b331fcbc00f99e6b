"""Fachada do motor de sync usada por rotas, jobs e CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.use_cases.sync.incremental_sync import SyncSubscriptionUseCase
from app.use_cases.sync.initial_sync import PerformInitialSyncUseCase
from app.use_cases.sync.watch_channel import SetupWatchChannelUseCase, StopWatchChannelUseCase

if TYPE_CHECKING:
    from app.domain.calendar_event import WatchChannel
    from app.use_cases.status_board import StatusBoardPublisher
    from app.use_cases.sync.dependencies import SyncDependencies
    from app.use_cases.sync.results import InitialSyncResult, SyncOutcome


class SyncEngine:
    """Agrupa os casos de uso de sync sobre as mesmas dependências."""

    def __init__(
        self,
        deps: SyncDependencies,
        *,
        public_base_url: str,
        webhook_path: str,
        status_board: StatusBoardPublisher | None = None,
    ) -> None:
        self.deps = deps
        self._initial = PerformInitialSyncUseCase(deps)
        self._incremental = SyncSubscriptionUseCase(deps, status_board=status_board)
        self._setup_watch = SetupWatchChannelUseCase(
            deps, base_url=public_base_url, webhook_path=webhook_path
        )
        self._stop_watch = StopWatchChannelUseCase(deps)

    async def perform_initial_sync(self, subscription_id: str) -> InitialSyncResult:
        return await self._initial.execute(subscription_id)

    async def sync_subscription(self, subscription_id: str) -> SyncOutcome:
        return await self._incremental.execute(subscription_id)

    async def setup_watch_channel(
        self,
        subscription_id: str,
        base_url: str | None = None,
    ) -> WatchChannel:
        return await self._setup_watch.execute(subscription_id, base_url)

    async def stop_watch_channel(self, subscription_id: str) -> bool:
        return await self._stop_watch.execute(subscription_id)
