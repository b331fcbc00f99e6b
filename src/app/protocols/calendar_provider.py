"""Contrato do provider de calendario consumido pelo motor de sync.

O provider resolve credenciais do usuario (refresh incluso) e traduz erros
da API para `utils.errors` (SyncTokenExpiredError, CalendarApiError,
ReauthenticationRequiredError).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.calendar_event import CalendarListEntry, EventListPage, WatchChannel


class CalendarProviderProtocol(ABC):
    """Operacoes de leitura e push channels da Google Calendar API."""

    @abstractmethod
    async def list_calendars(self, user_id: str) -> list[CalendarListEntry]:
        """Lista calendarios visiveis para o usuario."""

    @abstractmethod
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
        """Busca uma pagina de eventos.

        Com `sync_token` a busca e incremental (sem limites de tempo);
        sem ele, usa `time_min`/`time_max` com eventos expandidos e
        ordenados por inicio.

        Raises:
            SyncTokenExpiredError: sync token rejeitado (410).
        """

    @abstractmethod
    async def watch_events(
        self,
        user_id: str,
        calendar_id: str,
        *,
        channel_id: str,
        webhook_url: str,
    ) -> WatchChannel:
        """Registra push channel para o calendario."""

    @abstractmethod
    async def stop_channel(self, user_id: str, *, channel_id: str, resource_id: str) -> None:
        """Encerra push channel existente."""
