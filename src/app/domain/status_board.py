"""Modelos do quadro diario de localizacao da equipe."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TrackedPerson:
    """Pessoa acompanhada pelo quadro, identificada por iniciais."""

    initials: str
    name: str


@dataclass(frozen=True, slots=True)
class PersonLocation:
    initials: str
    name: str
    location: str


@dataclass(frozen=True, slots=True)
class ParsedSummary:
    """Titulo no formato ``INICIAIS - LOCAL`` ja normalizado em maiusculas."""

    initials: str
    location: str


__all__ = ["ParsedSummary", "PersonLocation", "TrackedPerson"]
