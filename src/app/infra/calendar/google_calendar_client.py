"""Client concreto de Google Calendar (API v3) com credenciais por usuário.

Chamadas síncronas do googleapiclient rodam em thread (`asyncio.to_thread`)
e toda chamada é limitada pelo timeout configurado.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.infra.calendar.google_calendar_parsers import (
    http_status,
    map_calendar_list,
    map_events_page,
    map_http_error,
    map_watch_channel,
)
from app.observability import get_correlation_id
from app.protocols.calendar_provider import CalendarProviderProtocol
from utils.errors import CalendarApiError, UserNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from app.domain.calendar_event import CalendarListEntry, EventListPage, WatchChannel
    from app.infra.calendar.token_refresher import GoogleTokenRefresher
    from app.protocols.account_store import UserStoreProtocol
    from config.settings import GoogleCalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "google_calendar_client"


def build_calendar_service(credentials: Credentials) -> Any:
    return build("calendar", "v3", credentials=credentials, cache_discovery=False)


class GoogleCalendarClient(CalendarProviderProtocol):
    """Implementação do provider de calendário sobre a API v3 do Google."""

    __slots__ = ("_refresher", "_service_factory", "_settings", "_users")

    def __init__(
        self,
        *,
        user_store: UserStoreProtocol,
        token_refresher: GoogleTokenRefresher,
        settings: GoogleCalendarSettings,
        service_factory: Callable[[Credentials], Any] = build_calendar_service,
    ) -> None:
        self._users = user_store
        self._refresher = token_refresher
        self._settings = settings
        self._service_factory = service_factory

    async def list_calendars(self, user_id: str) -> list[CalendarListEntry]:
        """Todas as agendas do usuário, seguindo `nextPageToken` até o fim."""
        calendars: list[CalendarListEntry] = []
        page_token: str | None = None
        while True:
            params = {"pageToken": page_token} if page_token else {}
            response = await self._execute(
                user_id,
                "list_calendars",
                lambda service, params=params: service.calendarList().list(**params),
            )
            calendars.extend(map_calendar_list(response))
            next_page_token = response.get("nextPageToken")
            if not next_page_token or next_page_token == page_token:
                return calendars
            page_token = next_page_token

    async def list_events(
        self,
        user_id: str,
        calendar_id: str,
        *,
        time_min: datetime | None = None,
        time_max: datetime | None = None,
        sync_token: str | None = None,
        page_token: str | None = None,
        max_results: int | None = None,
    ) -> EventListPage:
        params: dict[str, Any] = {
            "calendarId": calendar_id,
            "maxResults": max_results or self._settings.page_size,
        }
        if sync_token:
            # Modo incremental: a API rejeita filtros de tempo e ordenação junto do token
            params["syncToken"] = sync_token
        else:
            params["singleEvents"] = True
            params["orderBy"] = "startTime"
            if time_min is not None:
                params["timeMin"] = time_min.isoformat()
            if time_max is not None:
                params["timeMax"] = time_max.isoformat()
        if page_token:
            params["pageToken"] = page_token

        response = await self._execute(
            user_id,
            "list_events",
            lambda service: service.events().list(**params),
        )
        return map_events_page(response)

    async def watch_events(
        self,
        user_id: str,
        calendar_id: str,
        *,
        channel_id: str,
        webhook_url: str,
    ) -> WatchChannel:
        body = {"id": channel_id, "type": "web_hook", "address": webhook_url}
        response = await self._execute(
            user_id,
            "watch_events",
            lambda service: service.events().watch(calendarId=calendar_id, body=body),
        )
        return map_watch_channel(response, channel_id)

    async def stop_channel(self, user_id: str, *, channel_id: str, resource_id: str) -> None:
        body = {"id": channel_id, "resourceId": resource_id}
        await self._execute(
            user_id,
            "stop_channel",
            lambda service: service.channels().stop(body=body),
        )

    async def _execute(
        self,
        user_id: str,
        action: str,
        request_builder: Callable[[Any], Any],
    ) -> dict[str, Any]:
        user = await self._users.get_user(user_id)
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        access_token = await self._refresher.ensure_access_token(user)
        credentials = Credentials(token=access_token)

        def _run() -> dict[str, Any]:
            service = self._service_factory(credentials)
            request = request_builder(service)
            return request.execute(num_retries=self._settings.max_retries) or {}

        try:
            return await asyncio.wait_for(
                asyncio.to_thread(_run),
                timeout=self._settings.request_timeout_seconds,
            )
        except HttpError as exc:
            mapped = map_http_error(exc)
            self._log_error(action=action, exc=exc, mapped=mapped)
            raise mapped from exc
        except TimeoutError as exc:
            self._log_error(action=action, result="timeout")
            raise CalendarApiError(
                f"Google Calendar API call timed out after "
                f"{self._settings.request_timeout_seconds:g} seconds"
            ) from exc

    def _log_error(
        self,
        *,
        action: str,
        result: str = "error",
        exc: HttpError | None = None,
        mapped: Exception | None = None,
    ) -> None:
        extra: dict[str, Any] = {
            "component": _COMPONENT,
            "action": action,
            "result": result,
            "correlation_id": get_correlation_id(),
        }
        if exc is not None:
            extra["status_code"] = http_status(exc)
            extra["error_type"] = type(mapped or exc).__name__
            logger.warning("google_calendar_http_error", extra=extra)
            return
        logger.warning("google_calendar_request_failed", extra=extra)
