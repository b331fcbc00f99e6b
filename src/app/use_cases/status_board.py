"""Publicação do quadro diário de localização da equipe.

- Diário: limpa a referência anterior, posta mensagem nova (`wait=true`)
  e guarda o id retornado.
- Ao longo do dia: após um sync que entregou notificações, reconstrói o
  quadro e edita a mensagem do dia, se houver.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from app.domain.records import utcnow
from app.domain.status_board import TrackedPerson
from app.observability import get_correlation_id
from app.services.status_board import build_location_status, format_status_board
from app.use_cases.sync.fetch import fetch_events
from utils.errors import DiscordChannelNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from app.domain.calendar_event import GoogleCalendarEvent
    from app.domain.records import CalendarSubscription
    from app.protocols import (
        CalendarProviderProtocol,
        DeliveryResult,
        DiscordChannelStoreProtocol,
        NotificationSinkProtocol,
        StatusBoardStoreProtocol,
    )
    from config.settings import StatusBoardSettings

logger = logging.getLogger(__name__)

_COMPONENT = "status_board"


async def fetch_today(
    calendar: CalendarProviderProtocol,
    subscription: CalendarSubscription,
    *,
    now: datetime,
    zone: ZoneInfo,
    page_size: int,
) -> tuple[date, list[GoogleCalendarEvent]]:
    """Eventos de hoje (00:00 a 00:00 do dia seguinte em `zone`)."""
    today = now.astimezone(zone).date()
    day_start = datetime.combine(today, time.min, tzinfo=zone)
    events, _ = await fetch_events(
        calendar,
        subscription,
        time_min=day_start,
        time_max=day_start + timedelta(days=1),
        page_size=page_size,
    )
    return today, events


class StatusBoardPublisher:
    """Monta e publica o quadro de uma assinatura."""

    def __init__(
        self,
        *,
        calendar: CalendarProviderProtocol,
        channels: DiscordChannelStoreProtocol,
        sink: NotificationSinkProtocol,
        store: StatusBoardStoreProtocol,
        settings: StatusBoardSettings,
        page_size: int = 2500,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._calendar = calendar
        self._channels = channels
        self._sink = sink
        self._store = store
        self._settings = settings
        self._page_size = page_size
        self._clock = clock
        self._roster = [
            TrackedPerson(initials=initials, name=name)
            for initials, name in settings.roster.items()
        ]

    @property
    def enabled(self) -> bool:
        return bool(self._roster)

    async def build_message(self, subscription: CalendarSubscription) -> dict[str, Any]:
        zone = ZoneInfo(self._settings.timezone)
        now = self._clock()
        today, events = await fetch_today(
            self._calendar, subscription, now=now, zone=zone, page_size=self._page_size
        )
        statuses = build_location_status(
            events,
            self._roster,
            today=today,
            zone=zone,
            default_location=self._settings.default_location,
        )
        return {"embeds": [format_status_board(statuses, today=today, now=now)]}

    async def publish_daily(self, subscription: CalendarSubscription) -> DeliveryResult:
        """Posta o quadro do dia como mensagem nova.

        Raises:
            DiscordChannelNotFoundError: canal da assinatura inexistente.
        """
        channel = await self._channels.get_channel(subscription.discord_channel_id)
        if channel is None:
            raise DiscordChannelNotFoundError(
                f"Discord channel not found: {subscription.discord_channel_id}"
            )
        message = await self.build_message(subscription)

        await self._store.clear(subscription.id)
        result = await self._sink.send(channel.webhook_url, message, wait=True)
        if result.success and result.message_id:
            await self._store.set_message_id(subscription.id, result.message_id)
        self._log("status_board_posted", subscription.id, "ok" if result.success else "error")
        return result

    async def refresh(self, subscription: CalendarSubscription) -> bool:
        """Edita a mensagem do dia; falhas são apenas logadas."""
        if not self.enabled:
            return False
        try:
            message_id = await self._store.get_message_id(subscription.id)
            if not message_id:
                return False
            channel = await self._channels.get_channel(subscription.discord_channel_id)
            if channel is None:
                return False
            message = await self.build_message(subscription)
            result = await self._sink.edit(channel.webhook_url, message_id, message)
        except Exception as exc:
            self._log(
                "status_board_refresh_failed",
                subscription.id,
                "error",
                level=logging.WARNING,
                error_type=type(exc).__name__,
            )
            return False
        self._log("status_board_refreshed", subscription.id, "ok" if result.success else "error")
        return result.success

    def _log(
        self,
        message: str,
        subscription_id: str,
        result: str,
        *,
        level: int = logging.INFO,
        **fields: object,
    ) -> None:
        logger.log(
            level,
            message,
            extra={
                "component": _COMPONENT,
                "result": result,
                "subscription_id": subscription_id,
                "correlation_id": get_correlation_id(),
                **fields,
            },
        )
