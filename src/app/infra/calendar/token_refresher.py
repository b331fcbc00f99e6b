"""Renovação de access tokens OAuth do Google.

Renova quando o token expira dentro do buffer configurado (5 min) e
persiste o resultado no credential store. Refresh token rejeitado vira
ReauthenticationRequiredError, que nunca é repetido automaticamente.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import get_correlation_id
from utils.errors import CalendarApiError, ReauthenticationRequiredError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.records import User
    from app.protocols.account_store import UserStoreProtocol
    from config.settings import GoogleCalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "google_token_refresher"


def _now_ms() -> int:
    return int(time.time() * 1000)


class GoogleTokenRefresher:
    """Garante access token válido para um usuário."""

    def __init__(
        self,
        *,
        user_store: UserStoreProtocol,
        settings: GoogleCalendarSettings,
        http_client: HttpClient | None = None,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._users = user_store
        self._settings = settings
        self._http = http_client or HttpClient(
            HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                max_retries=settings.max_retries,
            )
        )
        self._clock_ms = clock_ms

    def needs_refresh(self, user: User) -> bool:
        expires_at = user.access_token_expires_at
        if not user.access_token or expires_at is None:
            return True
        return expires_at < self._clock_ms() + self._settings.token_refresh_buffer_seconds * 1000

    async def ensure_access_token(self, user: User) -> str:
        """Retorna access token utilizável, renovando se necessário."""
        if not self.needs_refresh(user):
            return user.access_token
        refreshed = await self.refresh(user)
        return refreshed.access_token

    async def refresh(self, user: User) -> User:
        """Troca o refresh token por novo access token e persiste.

        Raises:
            ReauthenticationRequiredError: refresh token ausente ou rejeitado.
            CalendarApiError: token endpoint indisponível após retries.
        """
        if not user.refresh_token:
            raise ReauthenticationRequiredError(
                "Missing refresh token. User must re-authenticate."
            )

        form = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "grant_type": "refresh_token",
            "refresh_token": user.refresh_token,
        }
        try:
            response = await self._http.post(self._settings.token_uri, data=form)
        except HttpError as exc:
            self._log("token_refresh_unavailable", "error", status_code=exc.status_code)
            raise CalendarApiError("token_refresh_unavailable", status_code=exc.status_code) from exc

        if response.status_code >= 400:
            self._log("token_refresh_rejected", "reauth_required", status_code=response.status_code)
            raise ReauthenticationRequiredError(
                "Failed to refresh access token. User may need to re-authenticate."
            )

        payload = response.json()
        access_token = str(payload.get("access_token") or "")
        if not access_token:
            raise ReauthenticationRequiredError("Token endpoint returned no access token.")

        expires_at = self._clock_ms() + int(payload.get("expires_in") or 3600) * 1000
        updated = await self._users.update_tokens(
            user.id,
            access_token=access_token,
            expires_at=expires_at,
            # Google só devolve refresh_token novo quando rotaciona
            refresh_token=payload.get("refresh_token"),
        )
        self._log("token_refreshed", "ok")
        return updated

    def _log(self, message: str, result: str, *, status_code: int | None = None) -> None:
        level = logging.INFO if result == "ok" else logging.WARNING
        logger.log(
            level,
            message,
            extra={
                "component": _COMPONENT,
                "action": "refresh",
                "result": result,
                "status_code": status_code,
                "correlation_id": get_correlation_id(),
            },
        )
