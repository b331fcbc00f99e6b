"""Serviços de aplicação.

Funções puras reutilizáveis (sem IO direto): diff de eventos, política de
notificação, formatação de mensagens, status board e resumo diário.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.change_detection import detect_change, diff_fields
from app.services.daily_digest import format_daily_digest
from app.services.message_formatting import format_event_change
from app.services.notification_policy import should_notify
from app.services.status_board import (
    build_location_status,
    format_status_board,
    parse_event_summary,
)

__all__ = [
    "build_location_status",
    "detect_change",
    "diff_fields",
    "format_daily_digest",
    "format_event_change",
    "format_status_board",
    "parse_event_summary",
    "should_notify",
]
