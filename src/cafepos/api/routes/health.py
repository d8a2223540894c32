from __future__ import annotations

from fastapi import APIRouter, Response, status

from cafepos.infrastructure.db.session import ping_database
from cafepos.infrastructure.storage.factory import REDIS_BACKEND, SQL_BACKEND, storage_backend
from cafepos.infrastructure.storage.redis_client import ping_redis

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    backend = storage_backend()
    if backend == SQL_BACKEND:
        storage_ready = ping_database(timeout_seconds=1.0)
    elif backend == REDIS_BACKEND:
        storage_ready = ping_redis(timeout_seconds=1.0)
    else:
        storage_ready = True

    if storage_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {backend: storage_ready},
    }
