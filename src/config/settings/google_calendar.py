"""Settings específicas de Google Calendar.

Credenciais OAuth do app, limites da API e caminho do webhook de push.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da Google Calendar API
GOOGLE_TOKEN_URI: str = "https://oauth2.googleapis.com/token"
GOOGLE_CALENDAR_SCOPE: str = "https://www.googleapis.com/auth/calendar"


@dataclass(frozen=True)
class GoogleCalendarSettings:
    """Configurações de acesso à Google Calendar API.

    Attributes:
        client_id: Client ID do app Google
        client_secret: Client Secret do app Google
        token_uri: Endpoint de troca de refresh token
        request_timeout_seconds: Teto para qualquer chamada externa
        max_retries: Retries da própria lib para 5xx/429
        token_refresh_buffer_seconds: Antecedência para renovar access token
        page_size: maxResults por página em events.list
        webhook_path: Caminho do endpoint de push notifications
    """

    # Credenciais OAuth
    client_id: str = ""
    client_secret: str = ""
    token_uri: str = GOOGLE_TOKEN_URI

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 2
    token_refresh_buffer_seconds: int = 300

    # Sync
    page_size: int = 2500
    webhook_path: str = "/webhook/google-calendar"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Google Calendar."""
        errors: list[str] = []
        if not self.client_id or not self.client_secret:
            errors.append("GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET não configurados")
        if self.request_timeout_seconds <= 0:
            errors.append("GOOGLE_CALENDAR_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if not 1 <= self.page_size <= 2500:
            errors.append("GOOGLE_CALENDAR_PAGE_SIZE deve estar entre 1 e 2500")
        if not self.webhook_path.startswith("/"):
            errors.append("GOOGLE_WEBHOOK_PATH deve começar com /")
        return errors


def _load_from_env() -> GoogleCalendarSettings:
    """Carrega GoogleCalendarSettings de variáveis de ambiente."""
    return GoogleCalendarSettings(
        client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
        client_secret=os.getenv("GOOGLE_CLIENT_SECRET", ""),
        token_uri=os.getenv("GOOGLE_TOKEN_URI", GOOGLE_TOKEN_URI),
        request_timeout_seconds=float(
            os.getenv("GOOGLE_CALENDAR_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("GOOGLE_CALENDAR_MAX_RETRIES", "2")),
        token_refresh_buffer_seconds=int(os.getenv("GOOGLE_TOKEN_REFRESH_BUFFER_SECONDS", "300")),
        page_size=int(os.getenv("GOOGLE_CALENDAR_PAGE_SIZE", "2500")),
        webhook_path=os.getenv("GOOGLE_WEBHOOK_PATH", "/webhook/google-calendar"),
    )


@lru_cache(maxsize=1)
def get_google_calendar_settings() -> GoogleCalendarSettings:
    """Retorna instância cacheada de GoogleCalendarSettings."""
    return _load_from_env()
