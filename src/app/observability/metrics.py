"""Registro de métricas via structured logging.

As métricas saem como logs estruturados e são agregadas fora do serviço
(ex: Cloud Logging, CloudWatch Insights).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Sync: contadores de eventos vistos e notificações entregues por sync
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "sync_engine", "cron")
        operation: Nome da operação (ex: "incremental_sync", "renew_channels")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_sync_result(
    subscription_id: str,
    *,
    mode: str,
    events_seen: int,
    notifications_sent: int,
    correlation_id: str | None = None,
) -> None:
    """Registra contadores de um sync concluído.

    Args:
        subscription_id: Assinatura sincronizada
        mode: "initial" ou "incremental"
        events_seen: Eventos retornados pela API
        notifications_sent: Mensagens entregues ao Discord
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_sync_result",
        extra={
            "metric_type": "sync_result",
            "component": "sync_engine",
            "subscription_id": subscription_id,
            "mode": mode,
            "events_seen": events_seen,
            "notifications_sent": notifications_sent,
            "correlation_id": correlation_id,
        },
    )
