"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, cron, admin, health)
- Validação inicial de request (headers, bearer, body)
- Delegação para use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/google_calendar/: push notifications da Google Calendar API
- routes/cron/: jobs agendados
- routes/admin/: API de gerenciamento
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
