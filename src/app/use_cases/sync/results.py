"""Resultados dos casos de uso de sync."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class SyncStatus(StrEnum):
    SYNCED = "synced"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Resultado de um sync incremental.

    Falhas não viram outcome: são exceções para o chamador.
    """

    subscription_id: str
    status: SyncStatus
    reason: str | None = None
    first_sync: bool = False
    token_reset: bool = False
    events_seen: int = 0
    changes_detected: int = 0
    notifications_sent: int = 0
    notifications_failed: int = 0
    notifications_skipped: int = 0
    sync_token_updated: bool = False

    @classmethod
    def skipped(cls, subscription_id: str, reason: str) -> SyncOutcome:
        return cls(subscription_id=subscription_id, status=SyncStatus.SKIPPED, reason=reason)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = str(self.status)
        return data


@dataclass(frozen=True, slots=True)
class InitialSyncResult:
    subscription_id: str
    events_cached: int
    sync_token_stored: bool
