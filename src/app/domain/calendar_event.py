"""Modelos de dominio para recursos da Google Calendar API.

Representam apenas os campos que o relay consome. Os aliases camelCase
permitem validar o JSON do provider direto, sem mapeamento manual.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo


class EventDateTime(BaseModel):
    """Inicio/fim de evento: horario preciso (`dateTime`) ou dia inteiro (`date`)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date_time: str | None = Field(default=None, alias="dateTime")
    date: str | None = Field(default=None, description="Data YYYY-MM-DD de evento de dia inteiro.")
    time_zone: str | None = Field(default=None, alias="timeZone")

    @property
    def resolved(self) -> str:
        """Valor textual usado em cache e diff: dateTime, senao date, senao vazio."""
        return self.date_time or self.date or ""

    @property
    def is_all_day(self) -> bool:
        return self.date_time is None and self.date is not None

    def to_datetime(self, zone: ZoneInfo) -> datetime | None:
        """Converte para datetime aware; dia inteiro vira 00:00 em `zone`."""
        if self.date_time:
            parsed = datetime.fromisoformat(self.date_time.replace("Z", "+00:00"))
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=zone)
        if self.date:
            return datetime.fromisoformat(self.date).replace(tzinfo=zone)
        return None


class GoogleCalendarEvent(BaseModel):
    """Evento como retornado por `events.list`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    status: str = Field(default="confirmed", description="confirmed | tentative | cancelled")
    etag: str = ""
    summary: str | None = None
    location: str | None = None
    description: str | None = None
    html_link: str | None = Field(default=None, alias="htmlLink")
    updated: str | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == "cancelled"

    @property
    def start_value(self) -> str:
        return self.start.resolved if self.start else ""

    @property
    def end_value(self) -> str:
        return self.end.resolved if self.end else ""


class EventListPage(BaseModel):
    """Uma pagina de `events.list`; o sync token so vem na ultima pagina."""

    model_config = ConfigDict(extra="ignore")

    items: list[GoogleCalendarEvent] = Field(default_factory=list)
    next_page_token: str | None = None
    next_sync_token: str | None = None


class WatchChannel(BaseModel):
    """Push channel criado por `events.watch`."""

    model_config = ConfigDict(extra="ignore")

    channel_id: str
    resource_id: str
    expiration: int | None = Field(default=None, description="Epoch em milissegundos.")


class CalendarListEntry(BaseModel):
    """Calendario visivel para o usuario (`calendarList.list`)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    summary: str = ""
    primary: bool = False
    access_role: str = ""


__all__ = [
    "CalendarListEntry",
    "EventDateTime",
    "EventListPage",
    "GoogleCalendarEvent",
    "WatchChannel",
]
