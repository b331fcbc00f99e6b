"""Settings de persistência (stores de usuários, assinaturas e cache).

O store em si é externo; aqui só escolhemos o backend e os TTLs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class StoreSettings:
    """Configurações de persistência.

    Attributes:
        backend: Backend dos stores (memory|redis)
        event_cache_ttl_days: TTL do snapshot de eventos por assinatura
    """

    backend: StoreBackend = "memory"
    event_cache_ttl_days: int = 30

    @property
    def event_cache_ttl_seconds(self) -> int:
        return self.event_cache_ttl_days * 24 * 60 * 60

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de persistência.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in {"memory", "redis"}:
            errors.append(f"STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("STORE_BACKEND=memory proibido em staging/production")

        if self.backend == "redis" and not base.redis_url:
            errors.append("STORE_BACKEND=redis requer REDIS_URL configurado")

        if self.event_cache_ttl_days <= 0:
            errors.append("EVENT_CACHE_TTL_DAYS deve ser > 0")

        return errors


def _load_store_from_env() -> StoreSettings:
    """Carrega StoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("STORE_BACKEND", "memory").lower()
    backend: StoreBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return StoreSettings(
        backend=backend,
        event_cache_ttl_days=int(os.getenv("EVENT_CACHE_TTL_DAYS", "30")),
    )


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """Retorna instância cacheada de StoreSettings."""
    return _load_store_from_env()
