"""Modelos de request/response da API de gerenciamento.

Respostas nunca expõem tokens OAuth nem webhook URLs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.calendar_event import CalendarListEntry
from app.domain.records import CalendarSubscription, DiscordChannel, User


class RegisterUserRequest(BaseModel):
    """Tokens entregues pelo provedor de identidade no sign-in."""

    model_config = ConfigDict(extra="ignore")

    user_id: str = Field(..., min_length=1, description="Google user id.")
    email: str = Field(..., min_length=1)
    access_token: str = Field(..., min_length=1)
    refresh_token: str | None = None
    expires_at: int | None = Field(default=None, description="Epoch segundos.")


class CreateDiscordChannelRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    webhook_url: str = ""
    name: str | None = None
    is_default: bool = False


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calendar_id: str = ""
    discord_channel_id: str = ""
    calendar_summary: str | None = None
    notify_new_events: bool = True
    notify_updates: bool = True
    notify_cancellations: bool = True
    notify_window_minutes: int = Field(default=0, ge=0)


class UpdateSubscriptionRequest(BaseModel):
    """Patch parcial; campos ausentes ficam como estão."""

    model_config = ConfigDict(extra="ignore")

    active: bool | None = None
    notify_new_events: bool | None = None
    notify_updates: bool | None = None
    notify_cancellations: bool | None = None
    notify_window_minutes: int | None = Field(default=None, ge=0)


class UserResponse(BaseModel):
    id: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class DiscordChannelResponse(BaseModel):
    id: str
    name: str | None
    is_default: bool
    created_at: datetime

    @classmethod
    def from_channel(cls, channel: DiscordChannel) -> DiscordChannelResponse:
        return cls(
            id=channel.id,
            name=channel.name,
            is_default=channel.is_default,
            created_at=channel.created_at,
        )


class CalendarResponse(BaseModel):
    id: str
    summary: str
    primary: bool
    access_role: str

    @classmethod
    def from_entry(cls, entry: CalendarListEntry) -> CalendarResponse:
        return cls(
            id=entry.id,
            summary=entry.summary,
            primary=entry.primary,
            access_role=entry.access_role,
        )


class SubscriptionResponse(BaseModel):
    """Assinatura sem o sync token (estado interno do motor)."""

    id: str
    calendar_id: str
    calendar_summary: str
    discord_channel_id: str
    active: bool
    notify_new_events: bool
    notify_updates: bool
    notify_cancellations: bool
    notify_window_minutes: int
    google_channel_expiration: int | None
    watching: bool
    last_sync_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_subscription(cls, subscription: CalendarSubscription) -> SubscriptionResponse:
        return cls(
            **subscription.model_dump(
                include={
                    "id",
                    "calendar_id",
                    "calendar_summary",
                    "discord_channel_id",
                    "active",
                    "notify_new_events",
                    "notify_updates",
                    "notify_cancellations",
                    "notify_window_minutes",
                    "google_channel_expiration",
                    "last_sync_at",
                    "created_at",
                    "updated_at",
                }
            ),
            watching=bool(subscription.google_channel_id),
        )
