"""Helpers internos de parsing para respostas da Google Calendar API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.calendar_event import (
    CalendarListEntry,
    EventListPage,
    GoogleCalendarEvent,
    WatchChannel,
)
from utils.errors import CalendarApiError, ReauthenticationRequiredError, SyncTokenExpiredError

if TYPE_CHECKING:
    from googleapiclient.errors import HttpError


def map_events_page(response: dict[str, Any]) -> EventListPage:
    raw_items = response.get("items") if isinstance(response, dict) else None
    items = [
        GoogleCalendarEvent.model_validate(item)
        for item in raw_items or []
        if isinstance(item, dict) and item.get("id")
    ]
    return EventListPage(
        items=items,
        next_page_token=response.get("nextPageToken"),
        next_sync_token=response.get("nextSyncToken"),
    )


def map_watch_channel(response: dict[str, Any], channel_id: str) -> WatchChannel:
    expiration = response.get("expiration")
    return WatchChannel(
        channel_id=str(response.get("id") or channel_id),
        resource_id=str(response.get("resourceId") or ""),
        # A API devolve epoch ms como string
        expiration=int(expiration) if expiration else None,
    )


def map_calendar_list(response: dict[str, Any]) -> list[CalendarListEntry]:
    return [
        CalendarListEntry(
            id=str(item["id"]),
            summary=str(item.get("summaryOverride") or item.get("summary") or ""),
            primary=bool(item.get("primary")),
            access_role=str(item.get("accessRole") or ""),
        )
        for item in response.get("items") or []
        if isinstance(item, dict) and item.get("id")
    ]


def http_status(exc: HttpError) -> int | None:
    response = getattr(exc, "resp", None)
    return int(response.status) if response and getattr(response, "status", None) else None


def is_stale_sync_token(status_code: int | None, message: str) -> bool:
    return status_code == 410 or "Sync token" in message or "410" in message


def map_http_error(exc: HttpError) -> Exception:
    """Traduz HttpError do client Google para a taxonomia do relay."""
    status_code = http_status(exc)
    message = str(getattr(exc, "reason", "") or exc)
    if is_stale_sync_token(status_code, message):
        return SyncTokenExpiredError(message, status_code=status_code)
    if status_code == 401:
        return ReauthenticationRequiredError("Google rejected credentials. User must re-authenticate.")
    return CalendarApiError(message or "google_calendar_error", status_code=status_code)
