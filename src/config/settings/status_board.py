"""Settings do quadro diario de localizacao da equipe.

O roster vem da env (por deploy), nunca de constante global no codigo.
Formato: ``STATUS_BOARD_ROSTER="AW:Andrew Williams,RM:Rhys Morgan"``.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class StatusBoardSettings(BaseModel):
    """Configuracoes do status board."""

    model_config = ConfigDict(extra="ignore")

    roster: dict[str, str] = Field(
        default_factory=dict,
        description="Iniciais -> nome de exibicao; vazio desabilita o quadro.",
    )
    timezone: str = Field(
        default="UTC",
        description="Timezone que define o 'hoje' do quadro.",
    )
    default_location: str = Field(
        default="OFFICE",
        description="Localizacao assumida sem evento no dia.",
    )

    @property
    def enabled(self) -> bool:
        return bool(self.roster)

    def validate_roster(self) -> list[str]:
        """Valida formato das iniciais."""
        return [
            f"STATUS_BOARD_ROSTER: iniciais inválidas '{initials}'"
            for initials in self.roster
            if not (2 <= len(initials) <= 3 and initials.isalpha())
        ]


def parse_roster(raw: str) -> dict[str, str]:
    """Converte ``"AW:Andrew Williams,RM:Rhys Morgan"`` em mapa iniciais -> nome."""
    roster: dict[str, str] = {}
    for chunk in raw.split(","):
        initials, sep, name = chunk.partition(":")
        initials = initials.strip().upper()
        if not sep or not initials:
            continue
        roster[initials] = name.strip() or initials
    return roster


def _load_status_board_from_env() -> StatusBoardSettings:
    """Carrega StatusBoardSettings a partir de variaveis de ambiente."""
    return StatusBoardSettings(
        roster=parse_roster(os.getenv("STATUS_BOARD_ROSTER", "")),
        timezone=os.getenv("STATUS_BOARD_TIMEZONE", "UTC"),
        default_location=os.getenv("STATUS_BOARD_DEFAULT_LOCATION", "OFFICE").upper(),
    )


@lru_cache(maxsize=1)
def get_status_board_settings() -> StatusBoardSettings:
    """Retorna instancia cacheada de StatusBoardSettings."""
    return _load_status_board_from_env()


__all__ = ["StatusBoardSettings", "get_status_board_settings", "parse_roster"]
