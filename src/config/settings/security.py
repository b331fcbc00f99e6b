"""Settings de segurança: chave de criptografia e segredos de acesso.

Segredos nunca são logados; `validate()` reporta apenas ausência/formato.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

MIN_ENCRYPTION_KEY_LENGTH = 32


@dataclass(frozen=True)
class SecuritySettings:
    """Segredos do serviço.

    Attributes:
        encryption_key: Chave para criptografia de tokens em repouso
        cron_secret: Bearer exigido nos endpoints de cron
        admin_api_secret: Bearer exigido na API de gerenciamento
    """

    encryption_key: str = ""
    cron_secret: str = ""
    admin_api_secret: str = ""

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida presença e tamanho dos segredos."""
        errors: list[str] = []

        if len(self.encryption_key) < MIN_ENCRYPTION_KEY_LENGTH:
            errors.append(
                f"ENCRYPTION_KEY deve ter ao menos {MIN_ENCRYPTION_KEY_LENGTH} caracteres"
            )

        if not base.is_development:
            if not self.cron_secret:
                errors.append("CRON_SECRET obrigatório fora de development")
            if not self.admin_api_secret:
                errors.append("ADMIN_API_SECRET obrigatório fora de development")

        return errors


def _load_security_from_env() -> SecuritySettings:
    """Carrega SecuritySettings de variáveis de ambiente."""
    return SecuritySettings(
        encryption_key=os.getenv("ENCRYPTION_KEY", ""),
        cron_secret=os.getenv("CRON_SECRET", ""),
        admin_api_secret=os.getenv("ADMIN_API_SECRET", ""),
    )


@lru_cache(maxsize=1)
def get_security_settings() -> SecuritySettings:
    """Retorna instância cacheada de SecuritySettings."""
    return _load_security_from_env()
