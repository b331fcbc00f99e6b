"""Filters de logging do relay.

- CorrelationIdFilter: injeta `correlation_id` (webhook/job) e `service`.
- SecretRedactionFilter: mascara tokens OAuth, sync tokens e URLs de
  webhook Discord que escapem para `extra` ou para a mensagem.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[redacted]"

SECRET_FIELDS = frozenset(
    {
        "access_token",
        "refresh_token",
        "sync_token",
        "webhook_url",
        "authorization",
        "client_secret",
    }
)

_DISCORD_WEBHOOK_RE = re.compile(
    r"https://(?:canary\.|ptb\.)?discord(?:app)?\.com/api/webhooks/\S+"
)
_BEARER_RE = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+")


def redact_text(text: str) -> str:
    """Remove URLs de webhook e bearer tokens de um texto livre."""
    text = _DISCORD_WEBHOOK_RE.sub(REDACTED, text)
    return _BEARER_RE.sub(rf"\1{REDACTED}", text)


class CorrelationIdFilter(logging.Filter):
    """Enriquece cada record com correlation_id e service; nunca descarta.

    Um `correlation_id` passado via `extra` tem precedência sobre o contexto.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        record.service = self._service_name
        return True


class SecretRedactionFilter(logging.Filter):
    """Mascara segredos conhecidos antes da formatação JSON."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in SECRET_FIELDS:
            if getattr(record, name, None):
                setattr(record, name, REDACTED)
        if isinstance(record.msg, str) and not record.args:
            record.msg = redact_text(record.msg)
        return True
