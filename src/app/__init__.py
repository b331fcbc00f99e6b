"""App: sync, casos de uso e infraestrutura do relay.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de eventos, registros persistidos e mudanças
- use_cases/: sync, jobs, status board e gerenciamento
- services/: funções puras (diff, política, formatação)
- infra/: implementações concretas de IO (Google, Discord, Redis, cripto)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
