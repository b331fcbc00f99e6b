"""Endpoints de jobs agendados (Vercel Cron, Cloud Scheduler ou similar).

Endpoints (todos GET, protegidos por `Authorization: Bearer $CRON_SECRET`):
- /cron/periodic-sync: sync incremental de todas as assinaturas ativas
- /cron/renew-channels: renova push channels perto de expirar
- /cron/daily-status-board: posta o quadro de localização do dia
- /cron/daily-summary: posta o resumo "Today's Events" de cada assinatura
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.routes.bearer import require_cron_secret
from app.bootstrap.dependencies import (
    get_daily_status_board_job,
    get_daily_summary_job,
    get_periodic_sync_job,
    get_renew_channels_job,
)
from app.observability import correlation_scope, record_latency

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.use_cases.jobs import JobSummary

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_cron_secret)])


async def _run_job(
    request: Request,
    name: str,
    run: Callable[[], Awaitable[JobSummary]],
) -> JSONResponse:
    started_at = time.perf_counter()
    with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
        logger.info(
            "cron_job_started",
            extra={"component": "cron", "action": name, "correlation_id": correlation_id},
        )
        try:
            summary = await run()
        except Exception as exc:
            logger.exception(
                "cron_job_failed",
                extra={
                    "component": "cron",
                    "action": name,
                    "result": "error",
                    "error_type": type(exc).__name__,
                    "correlation_id": correlation_id,
                },
            )
            return JSONResponse(
                content={"job": name, "error": str(exc) or type(exc).__name__},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        finally:
            record_latency(
                "cron", name, (time.perf_counter() - started_at) * 1000, correlation_id
            )
        return JSONResponse(content=summary.to_dict(), status_code=status.HTTP_200_OK)


@router.get("/periodic-sync")
async def periodic_sync(request: Request) -> JSONResponse:
    """Rede de segurança para push notifications perdidas."""
    return await _run_job(request, "periodic-sync", get_periodic_sync_job().run)


@router.get("/renew-channels")
async def renew_channels(request: Request) -> JSONResponse:
    """Renova channels que expiram dentro de RENEWAL_THRESHOLD_HOURS."""
    return await _run_job(request, "renew-channels", get_renew_channels_job().run)


@router.get("/daily-status-board")
async def daily_status_board(request: Request) -> JSONResponse:
    return await _run_job(request, "daily-status-board", get_daily_status_board_job().run)


@router.get("/daily-summary")
async def daily_summary(request: Request) -> JSONResponse:
    """Resumo dos eventos do dia; dias sem eventos ficam em `skipped`."""
    return await _run_job(request, "daily-summary", get_daily_summary_job().run)
