"""Motor de sincronização Google Calendar -> Discord."""

from .dependencies import SyncDependencies
from .engine import SyncEngine
from .fetch import fetch_events
from .incremental_sync import SyncSubscriptionUseCase
from .initial_sync import PerformInitialSyncUseCase
from .results import InitialSyncResult, SyncOutcome, SyncStatus
from .watch_channel import SetupWatchChannelUseCase, StopWatchChannelUseCase

__all__ = [
    "InitialSyncResult",
    "PerformInitialSyncUseCase",
    "SetupWatchChannelUseCase",
    "StopWatchChannelUseCase",
    "SyncDependencies",
    "SyncEngine",
    "SyncOutcome",
    "SyncStatus",
    "SyncSubscriptionUseCase",
    "fetch_events",
]
