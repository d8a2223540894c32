from __future__ import annotations

import os
from functools import lru_cache

from cafepos.application.ports.storage import KeyValueStore
from cafepos.infrastructure.db.kv_store import SqlAlchemyKeyValueStore
from cafepos.infrastructure.storage.memory_store import InMemoryKeyValueStore
from cafepos.infrastructure.storage.redis_store import RedisKeyValueStore

SQL_BACKEND = "sql"
REDIS_BACKEND = "redis"
MEMORY_BACKEND = "memory"
_BACKENDS = (SQL_BACKEND, REDIS_BACKEND, MEMORY_BACKEND)


def storage_backend() -> str:
    backend = os.getenv("CAFE_STORAGE_BACKEND", SQL_BACKEND).strip().lower()
    if backend not in _BACKENDS:
        raise RuntimeError(
            f"CAFE_STORAGE_BACKEND must be one of {', '.join(_BACKENDS)}, got {backend!r}"
        )
    return backend


def get_currency() -> str:
    return os.getenv("CAFE_CURRENCY", "USD").strip().upper()


@lru_cache(maxsize=4)
def _build_store(backend: str) -> KeyValueStore:
    if backend == MEMORY_BACKEND:
        return InMemoryKeyValueStore()
    if backend == REDIS_BACKEND:
        return RedisKeyValueStore()
    return SqlAlchemyKeyValueStore()


def get_key_value_store() -> KeyValueStore:
    return _build_store(storage_backend())
