"""API: camada de borda HTTP.

Responsabilidades:
- Receber push notifications do Google Calendar
- Expor jobs agendados e a API de gerenciamento
- Autenticar chamadas internas (bearer)
- Traduzir erros de domínio em status HTTP

Subpastas:
- routes/: endpoints HTTP (webhook, cron, admin, health)

NÃO PODE conter: regras de sync, diff ou formatação de mensagens.
"""
