"""Busca paginada de eventos para uma assinatura.

O Google só devolve `nextSyncToken` na última página, então a busca segue
`nextPageToken` até o fim e conta como uma única busca lógica.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.calendar_event import GoogleCalendarEvent
    from app.domain.records import CalendarSubscription
    from app.protocols import CalendarProviderProtocol

logger = logging.getLogger(__name__)


async def fetch_events(
    calendar: CalendarProviderProtocol,
    subscription: CalendarSubscription,
    *,
    sync_token: str | None = None,
    time_min: datetime | None = None,
    time_max: datetime | None = None,
    page_size: int = 2500,
) -> tuple[list[GoogleCalendarEvent], str | None]:
    """Retorna (eventos, próximo sync token ou None)."""
    items: list[GoogleCalendarEvent] = []
    next_sync_token: str | None = None
    page_token: str | None = None
    pages = 0

    while True:
        page = await calendar.list_events(
            subscription.user_id,
            subscription.calendar_id,
            time_min=None if sync_token else time_min,
            time_max=None if sync_token else time_max,
            sync_token=sync_token,
            page_token=page_token,
            max_results=page_size,
        )
        pages += 1
        items.extend(page.items)
        if page.next_sync_token:
            next_sync_token = page.next_sync_token
        if not page.next_page_token or page.next_page_token == page_token:
            break
        page_token = page.next_page_token

    logger.debug(
        "events_fetched",
        extra={
            "subscription_id": subscription.id,
            "pages": pages,
            "events": len(items),
            "mode": "sync_token" if sync_token else "time_range",
        },
    )
    return items, next_sync_token
