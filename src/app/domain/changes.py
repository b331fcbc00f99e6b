"""Resultado da deteccao de mudancas entre evento recebido e cache."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from app.domain.calendar_event import GoogleCalendarEvent
from app.domain.records import CachedEvent


class ChangeType(StrEnum):
    NEW = "new"
    UPDATED = "updated"
    CANCELLED = "cancelled"


class EventChange(BaseModel):
    """Mudanca notificavel de um evento."""

    model_config = ConfigDict(extra="ignore")

    type: ChangeType
    event: GoogleCalendarEvent
    previous: CachedEvent | None = None
    changes: list[str] = Field(
        default_factory=list,
        description="Campos alterados (summary, time, location) em updates.",
    )


__all__ = ["ChangeType", "EventChange"]
