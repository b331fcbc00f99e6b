"""Resumo diário "Today's Events" de uma assinatura.

Mesma janela do status board (o dia em STATUS_BOARD_TIMEZONE), mas
independente do roster: roda para toda assinatura ativa.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from app.domain.records import utcnow
from app.observability import get_correlation_id
from app.services.daily_digest import format_daily_digest
from app.use_cases.status_board import fetch_today
from utils.errors import DiscordChannelNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from app.domain.records import CalendarSubscription
    from app.protocols import (
        CalendarProviderProtocol,
        DeliveryResult,
        DiscordChannelStoreProtocol,
        NotificationSinkProtocol,
    )

logger = logging.getLogger(__name__)


class DailyDigestPublisher:
    def __init__(
        self,
        *,
        calendar: CalendarProviderProtocol,
        channels: DiscordChannelStoreProtocol,
        sink: NotificationSinkProtocol,
        timezone: str = "UTC",
        page_size: int = 2500,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._calendar = calendar
        self._channels = channels
        self._sink = sink
        self._zone = ZoneInfo(timezone)
        self._page_size = page_size
        self._clock = clock

    async def publish(self, subscription: CalendarSubscription) -> DeliveryResult | None:
        """Posta o resumo do dia; None quando o dia não tem eventos.

        Raises:
            DiscordChannelNotFoundError: canal da assinatura inexistente.
        """
        channel = await self._channels.get_channel(subscription.discord_channel_id)
        if channel is None:
            raise DiscordChannelNotFoundError(
                f"Discord channel not found: {subscription.discord_channel_id}"
            )
        now = self._clock()
        today, events = await fetch_today(
            self._calendar, subscription, now=now, zone=self._zone, page_size=self._page_size
        )
        message = format_daily_digest(
            events,
            subscription.calendar_summary or subscription.calendar_id,
            today=today,
            now=now,
            zone=self._zone,
        )
        if message is None:
            logger.info(
                "daily_digest_skipped",
                extra={
                    "component": "daily_digest",
                    "result": "no_events",
                    "subscription_id": subscription.id,
                    "correlation_id": get_correlation_id(),
                },
            )
            return None

        result = await self._sink.send(channel.webhook_url, message)
        logger.info(
            "daily_digest_posted",
            extra={
                "component": "daily_digest",
                "result": "ok" if result.success else "error",
                "subscription_id": subscription.id,
                "events": len(message["embeds"][0]["fields"]),
                "correlation_id": get_correlation_id(),
            },
        )
        return result
