"""Endpoint de push notifications da Google Calendar API.

Endpoint:
- POST /webhook/google-calendar

Fluxo:
1. Valida headers X-Goog-Channel-ID / X-Goog-Resource-ID
2. Resolve o channel para a assinatura atual (índice reverso)
3. Confere o resource id registrado
4. `sync`/`exists`: agenda sync em background e responde 200 na hora

Erros internos são logados e respondidos com 200 para o Google não
reenviar em rajada.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.routes.google_calendar.webhook_tasks import schedule_sync_task
from app.bootstrap.dependencies import get_subscription_store, get_sync_engine
from app.observability import correlation_scope, record_latency

logger = logging.getLogger(__name__)

router = APIRouter()

_COMPONENT = "google_calendar_webhook"
SYNC_STATES = frozenset({"sync", "exists"})


@router.post("", response_model=None)
async def receive_notification(request: Request) -> JSONResponse:
    """Recebe uma push notification de mudança no calendário."""
    started_at = time.perf_counter()
    with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
        try:
            response = await _handle_notification(request, correlation_id)
        except Exception:
            logger.exception(
                "webhook_internal_error",
                extra={"component": _COMPONENT, "result": "error", "correlation_id": correlation_id},
            )
            response = JSONResponse(
                content={"error": "internal_error"}, status_code=status.HTTP_200_OK
            )
        record_latency(
            _COMPONENT,
            "receive_notification",
            (time.perf_counter() - started_at) * 1000,
            correlation_id=correlation_id,
        )
        return response


async def _handle_notification(request: Request, correlation_id: str) -> JSONResponse:
    channel_id = request.headers.get("x-goog-channel-id")
    resource_id = request.headers.get("x-goog-resource-id")
    resource_state = request.headers.get("x-goog-resource-state", "")
    base_extra: dict[str, Any] = {
        "component": _COMPONENT,
        "resource_state": resource_state,
        "correlation_id": correlation_id,
    }

    if not channel_id or not resource_id:
        logger.warning("webhook_missing_headers", extra={**base_extra, "result": "rejected"})
        return _error("Missing required headers", status.HTTP_400_BAD_REQUEST)

    subscription = await get_subscription_store().find_by_push_channel(channel_id)
    if subscription is None:
        logger.warning("webhook_unknown_channel", extra={**base_extra, "result": "not_found"})
        return _error("Subscription not found", status.HTTP_404_NOT_FOUND)

    base_extra["subscription_id"] = subscription.id
    if subscription.google_resource_id != resource_id:
        logger.warning("webhook_resource_mismatch", extra={**base_extra, "result": "rejected"})
        return _error("Resource ID mismatch", status.HTTP_400_BAD_REQUEST)

    if resource_state in SYNC_STATES:
        schedule_sync_task(
            engine=get_sync_engine(),
            subscription_id=subscription.id,
            correlation_id=correlation_id,
        )
    elif resource_state == "not_exists":
        logger.warning("webhook_channel_not_exists", extra={**base_extra, "result": "renewal_needed"})
    else:
        logger.info("webhook_unknown_state", extra={**base_extra, "result": "ignored"})

    return JSONResponse(
        content={"received": True, "subscription_id": subscription.id},
        status_code=status.HTTP_200_OK,
    )


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)
