"""Settings do motor de sincronizacao.

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pelos casos de uso de sync, renovacao e jobs.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class SyncSettings(BaseModel):
    """Configuracoes de sync incremental e renovacao de push channels."""

    model_config = ConfigDict(extra="ignore")

    calendar_timezone: str = Field(
        default="UTC",
        description="Timezone usado para interpretar eventos de dia inteiro.",
    )
    renewal_threshold_hours: int = Field(
        default=6,
        ge=1,
        description="Renova channels que expiram dentro desta janela.",
    )
    sync_lock_enabled: bool = Field(
        default=False,
        description="Habilita lease por assinatura contra syncs concorrentes.",
    )
    sync_lock_ttl_seconds: int = Field(
        default=120,
        ge=1,
        description="TTL do lease de sync por assinatura.",
    )


def _parse_bool(value: str) -> bool:
    """Converte texto de env em bool com o mesmo padrao dos outros settings."""
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_sync_from_env() -> SyncSettings:
    """Carrega SyncSettings a partir de variaveis de ambiente."""
    return SyncSettings(
        calendar_timezone=os.getenv("CALENDAR_TIMEZONE", "UTC"),
        renewal_threshold_hours=int(os.getenv("RENEWAL_THRESHOLD_HOURS", "6")),
        sync_lock_enabled=_parse_bool(os.getenv("SYNC_LOCK_ENABLED", "false")),
        sync_lock_ttl_seconds=int(os.getenv("SYNC_LOCK_TTL_SECONDS", "120")),
    )


@lru_cache(maxsize=1)
def get_sync_settings() -> SyncSettings:
    """Retorna instancia cacheada de SyncSettings."""
    return _load_sync_from_env()


__all__ = ["SyncSettings", "get_sync_settings"]
