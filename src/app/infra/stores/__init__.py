"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - redis_account_store: usuários e canais Discord (segredos cifrados)
    - redis_subscription_store: assinaturas + índices reversos
    - redis_event_cache: cache de eventos com TTL
    - redis_status_board_store: mensagem do status board e lease de sync
    - memory_stores: stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryAccountStore,
    MemoryEventCache,
    MemoryStatusBoardStore,
    MemorySubscriptionStore,
    MemorySyncLock,
)
from app.infra.stores.redis_account_store import RedisAccountStore
from app.infra.stores.redis_event_cache import RedisEventCache
from app.infra.stores.redis_status_board_store import RedisStatusBoardStore, RedisSyncLock
from app.infra.stores.redis_subscription_store import RedisSubscriptionStore

__all__ = [
    # Memory (dev/test)
    "MemoryAccountStore",
    "MemoryEventCache",
    "MemoryStatusBoardStore",
    "MemorySubscriptionStore",
    "MemorySyncLock",
    # Redis
    "RedisAccountStore",
    "RedisEventCache",
    "RedisStatusBoardStore",
    "RedisSubscriptionStore",
    "RedisSyncLock",
]
