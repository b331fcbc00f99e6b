"""Router do Google Calendar: agrega os endpoints de push notification.

O prefixo é o caminho registrado no `events.watch`; sem barra final, porque
o Google não segue redirects.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.google_calendar.webhook import router as webhook_router
from config.settings import get_google_calendar_settings

router = APIRouter()

router.include_router(webhook_router, prefix=get_google_calendar_settings().webhook_path)
