"""Registros persistidos do relay: usuario, canal Discord, assinatura, cache.

Tokens OAuth e webhook URLs ficam em texto plano aqui; a criptografia em
repouso e responsabilidade do store.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from app.domain.calendar_event import GoogleCalendarEvent


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """Usuario autenticado no Google."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Google user id.")
    email: str = ""
    access_token: str = ""
    refresh_token: str = ""
    access_token_expires_at: int | None = Field(
        default=None, description="Expiracao do access token em epoch ms."
    )
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class DiscordChannel(BaseModel):
    """Destino Discord (webhook de canal) de um usuario."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    webhook_url: str
    name: str | None = None
    is_default: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class CalendarSubscription(BaseModel):
    """Ligacao calendario -> canal Discord, com estado de sync e push channel."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    calendar_id: str
    calendar_summary: str = ""
    discord_channel_id: str
    active: bool = True
    notify_new_events: bool = True
    notify_updates: bool = True
    notify_cancellations: bool = True
    notify_window_minutes: int = Field(default=0, ge=0, description="0 = sem limite.")
    google_channel_id: str | None = None
    google_resource_id: str | None = None
    google_channel_expiration: int | None = Field(default=None, description="Epoch ms.")
    sync_token: str | None = None
    last_sync_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class CachedEvent(BaseModel):
    """Ultimo estado visto de um evento, base para o diff."""

    model_config = ConfigDict(extra="ignore")

    event_id: str
    etag: str = ""
    start_time: str = ""
    end_time: str = ""
    summary: str = ""
    location: str = ""
    status: str = ""
    last_seen_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_event(cls, event: GoogleCalendarEvent, *, seen_at: datetime | None = None) -> CachedEvent:
        return cls(
            event_id=event.id,
            etag=event.etag,
            start_time=event.start_value,
            end_time=event.end_value,
            summary=event.summary or "",
            location=event.location or "",
            status=event.status,
            last_seen_at=seen_at or utcnow(),
        )


__all__ = ["CachedEvent", "CalendarSubscription", "DiscordChannel", "User", "utcnow"]
