"""Agregador de rotas: registra todos os routers do serviço.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.admin.router import router as admin_router
from api.routes.cron.router import router as cron_router
from api.routes.google_calendar.router import router as google_calendar_router
from api.routes.health.router import router as health_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Push notifications do Google (caminho configurável, é o callback do watch)
    api_router.include_router(google_calendar_router, tags=["google_calendar"])

    # Jobs agendados
    api_router.include_router(cron_router, prefix="/cron", tags=["cron"])

    # Gerenciamento (usuários, canais, assinaturas)
    api_router.include_router(admin_router, prefix="/api", tags=["admin"])

    return api_router
