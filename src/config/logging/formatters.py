"""Formatter JSON com os campos obrigatórios do relay."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Formatter de uma linha JSON por record.

    Além dos campos obrigatórios, grava `timestamp` ISO-8601 em UTC (os
    jobs de cron e o status board são conferidos por horário) e mantém
    acentos legíveis.

    Exemplo:
        {"asctime": "2026-10-17 09:00:00,120", "level": "INFO",
         "logger": "app.use_cases.sync.incremental_sync",
         "message": "sync_completed", "correlation_id": "abc-123",
         "service": "calendar_relay", "subscription_id": "sub-1",
         "timestamp": "2026-10-17T09:00:00.120000+00:00"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        timestamp=True,
        json_ensure_ascii=False,
    )
