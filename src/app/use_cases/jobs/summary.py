"""Resumo padronizado de jobs em lote (cron e CLI)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from app.observability import get_correlation_id

logger = logging.getLogger(__name__)


@dataclass
class JobSummary:
    """Acumula o resultado por assinatura; uma falha nunca aborta o lote."""

    job: str
    succeeded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[dict[str, str]] = field(default_factory=list)
    message: str | None = None

    def record_success(self, subscription_id: str) -> None:
        self.succeeded.append(subscription_id)

    def record_skip(self, subscription_id: str) -> None:
        self.skipped.append(subscription_id)

    def record_missing(self, subscription_id: str, exc: BaseException) -> None:
        """Registro ausente (usuário, canal) vira skip com log, não erro do lote."""
        self.skipped.append(subscription_id)
        logger.warning(
            "job_subscription_skipped",
            extra={
                "component": "jobs",
                "action": self.job,
                "result": "missing_record",
                "subscription_id": subscription_id,
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )

    def record_error(self, subscription_id: str, exc: BaseException | str) -> None:
        error = exc if isinstance(exc, str) else (str(exc) or type(exc).__name__)
        self.errors.append({"subscription_id": subscription_id, "error": error})
        logger.error(
            "job_subscription_failed",
            extra={
                "component": "jobs",
                "action": self.job,
                "result": "error",
                "subscription_id": subscription_id,
                "error_type": "delivery_failed" if isinstance(exc, str) else type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "job": self.job,
            "succeeded": len(self.succeeded),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
            "details": {
                "succeeded": list(self.succeeded),
                "skipped": list(self.skipped),
                "errors": list(self.errors),
            },
        }
        if self.message:
            data["message"] = self.message
        return data

    def log_completed(self) -> None:
        logger.info(
            "job_completed",
            extra={
                "component": "jobs",
                "action": self.job,
                "result": "ok" if not self.errors else "partial",
                "succeeded": len(self.succeeded),
                "skipped": len(self.skipped),
                "errors": len(self.errors),
                "correlation_id": get_correlation_id(),
            },
        )
