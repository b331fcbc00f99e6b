"""Validação de `Authorization: Bearer <segredo>` para rotas internas."""

from __future__ import annotations

import hmac
import logging

from fastapi import HTTPException, Request, status

from config.settings import get_base_settings, get_security_settings

logger = logging.getLogger(__name__)

_PREFIX = "Bearer "


def bearer_matches(authorization: str | None, secret: str) -> bool:
    """Compara em tempo constante o bearer recebido com o segredo."""
    if not authorization or not authorization.startswith(_PREFIX):
        return False
    received = authorization[len(_PREFIX) :].strip()
    return hmac.compare_digest(received.encode("utf-8"), secret.encode("utf-8"))


def _require(request: Request, secret: str, *, scope: str) -> None:
    if not secret:
        # Sem segredo só é aceito em development (validate() barra o resto)
        if get_base_settings().is_development:
            return
        logger.error("bearer_secret_missing", extra={"component": "auth", "scope": scope})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if not bearer_matches(request.headers.get("authorization"), secret):
        logger.warning(
            "bearer_rejected",
            extra={"component": "auth", "scope": scope, "path": request.url.path},
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def require_cron_secret(request: Request) -> None:
    """Dependency FastAPI das rotas /cron."""
    _require(request, get_security_settings().cron_secret, scope="cron")


def require_admin_secret(request: Request) -> None:
    """Dependency FastAPI da API de gerenciamento."""
    _require(request, get_security_settings().admin_api_secret, scope="admin")
