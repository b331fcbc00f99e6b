"""Settings base do calendar relay.

Ambiente, nome do serviço, Redis e a URL pública que o Google usa como
callback dos push channels.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal
from urllib.parse import urlsplit

Environment = Literal["development", "staging", "production"]

_REDIS_SCHEMES = ("redis://", "rediss://", "unix://")


@dataclass(frozen=True)
class BaseSettings:
    """Configurações comuns do serviço.

    Attributes:
        environment: development|staging|production
        service_name: Nome do serviço nos logs
        redis_url: URL Redis (obrigatória com STORE_BACKEND=redis)
        public_base_url: Origem pública do serviço, sem barra final
    """

    environment: Environment = "development"
    service_name: str = "calendar-relay"
    redis_url: str = ""
    public_base_url: str = "http://localhost:8080"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.environment not in {"development", "staging", "production"}:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.redis_url and not self.redis_url.startswith(_REDIS_SCHEMES):
            errors.append("REDIS_URL deve usar redis://, rediss:// ou unix://")

        parsed = urlsplit(self.public_base_url)
        if not parsed.scheme or not parsed.netloc:
            errors.append("PUBLIC_BASE_URL deve ser uma URL absoluta")
        elif not self.is_development and parsed.scheme != "https":
            # Google só entrega push notifications para endpoints HTTPS.
            errors.append("PUBLIC_BASE_URL deve usar https fora de development")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Aceita os apelidos usuais de deploy (prod, stage)."""
    env_lower = env_str.strip().lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "calendar-relay"),
        redis_url=os.getenv("REDIS_URL", ""),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8080").rstrip("/"),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
