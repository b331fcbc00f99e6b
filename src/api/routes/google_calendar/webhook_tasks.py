"""Controle de tasks assíncronas de sync disparadas por push notifications."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from utils.errors import InfrastructureError, NotFoundError, ReauthenticationRequiredError

if TYPE_CHECKING:
    from app.use_cases.sync import SyncEngine

logger = logging.getLogger(__name__)

_TASK_SEMAPHORE = asyncio.Semaphore(20)
_active_tasks: set[asyncio.Task[Any]] = set()


def schedule_sync_task(
    *,
    engine: SyncEngine,
    subscription_id: str,
    correlation_id: str,
) -> int:
    """Agenda sync em background com limite de concorrência.

    A task herda o contexto atual, incluindo o correlation_id.
    """
    task = asyncio.create_task(_run_with_limit(engine, subscription_id, correlation_id))
    _active_tasks.add(task)
    task.add_done_callback(_on_sync_task_done)
    logger.info(
        "webhook_sync_scheduled",
        extra={
            "component": "google_calendar_webhook",
            "subscription_id": subscription_id,
            "correlation_id": correlation_id,
            "active_tasks": len(_active_tasks),
        },
    )
    return len(_active_tasks)


async def _run_with_limit(engine: SyncEngine, subscription_id: str, correlation_id: str) -> None:
    async with _TASK_SEMAPHORE:
        await run_sync_safe(engine, subscription_id, correlation_id)


async def run_sync_safe(engine: SyncEngine, subscription_id: str, correlation_id: str) -> None:
    """Executa o sync com classificação explícita de erros; nunca propaga."""
    base_extra = {
        "component": "google_calendar_webhook",
        "subscription_id": subscription_id,
        "correlation_id": correlation_id,
    }
    try:
        await engine.sync_subscription(subscription_id)
    except NotFoundError as exc:
        logger.warning(
            "webhook_sync_skipped",
            extra={**base_extra, "result": "not_found", "error_type": type(exc).__name__},
        )
    except ReauthenticationRequiredError:
        logger.warning("webhook_sync_reauth_required", extra={**base_extra, "result": "reauth"})
    except InfrastructureError as exc:
        logger.error(
            "webhook_sync_infra_failed",
            extra={**base_extra, "result": "error", "error_type": type(exc).__name__},
        )
    except Exception:
        logger.exception("webhook_sync_failed", extra={**base_extra, "result": "error"})


def _on_sync_task_done(task: asyncio.Task[Any]) -> None:
    _active_tasks.discard(task)
    with contextlib.suppress(asyncio.CancelledError):
        exc = task.exception()
        if exc is not None:
            logger.error(
                "webhook_sync_task_failed",
                extra={
                    "component": "google_calendar_webhook",
                    "error_type": type(exc).__name__,
                    "active_tasks": len(_active_tasks),
                },
            )


def active_task_count() -> int:
    return len(_active_tasks)


async def drain_sync_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda syncs pendentes durante shutdown do processo."""
    if not _active_tasks:
        return

    pending_now = list(_active_tasks)
    logger.info(
        "webhook_sync_shutdown_wait",
        extra={
            "component": "google_calendar_webhook",
            "pending_tasks": len(pending_now),
            "timeout_seconds": timeout_seconds,
        },
    )
    _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not pending:
        return

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning(
        "webhook_sync_shutdown_cancelled",
        extra={"component": "google_calendar_webhook", "cancelled_tasks": len(pending)},
    )
