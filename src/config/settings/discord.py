"""Settings específicas de Discord.

Entrega via webhooks de canal (URL por canal, guardada criptografada).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class DiscordSettings:
    """Configurações de entrega em webhooks Discord.

    Attributes:
        request_timeout_seconds: Timeout para requisições HTTP
        max_attempts: Total de tentativas (apenas 5xx/transporte repetem)
        backoff_base_seconds: Base do backoff exponencial
        backoff_max_seconds: Teto do backoff
    """

    request_timeout_seconds: float = 30.0
    max_attempts: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 10.0

    def validate(self) -> list[str]:
        """Valida configurações de entrega."""
        errors: list[str] = []
        if self.max_attempts < 1:
            errors.append("DISCORD_MAX_ATTEMPTS deve ser >= 1")
        if self.request_timeout_seconds <= 0:
            errors.append("DISCORD_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_from_env() -> DiscordSettings:
    """Carrega DiscordSettings de variáveis de ambiente."""
    return DiscordSettings(
        request_timeout_seconds=float(os.getenv("DISCORD_REQUEST_TIMEOUT_SECONDS", "30")),
        max_attempts=int(os.getenv("DISCORD_MAX_ATTEMPTS", "3")),
        backoff_base_seconds=float(os.getenv("DISCORD_BACKOFF_BASE_SECONDS", "1")),
        backoff_max_seconds=float(os.getenv("DISCORD_BACKOFF_MAX_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_discord_settings() -> DiscordSettings:
    """Retorna instância cacheada de DiscordSettings."""
    return _load_from_env()
