"""Exceções compartilhadas entre infraestrutura, casos de uso e rotas."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class CalendarApiError(InfrastructureError):
    """Falha na Google Calendar API sem tratamento específico."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SyncTokenExpiredError(CalendarApiError):
    """Sync token recusado pelo provider (410 Gone).

    Recuperável localmente: o motor limpa o token e refaz a busca por tempo.
    """


class ReauthenticationRequiredError(RuntimeError):
    """Credencial do usuário inválida; exige novo login, sem retry automático."""


class NotFoundError(LookupError):
    """Base para registros inexistentes (404 na borda, skip em jobs)."""


class SubscriptionNotFoundError(NotFoundError):
    """Assinatura de calendário inexistente."""


class UserNotFoundError(NotFoundError):
    """Usuário inexistente."""


class DiscordChannelNotFoundError(NotFoundError):
    """Canal Discord inexistente ou de outro usuário."""


class SubscriptionForbiddenError(PermissionError):
    """Assinatura pertence a outro usuário."""


class InvalidRequestError(ValueError):
    """Entrada rejeitada antes de tocar em infraestrutura (400 na borda)."""
