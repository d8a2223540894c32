from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from cafepos.api.error_handling import register_exception_handlers
from cafepos.api.middleware.request_id import RequestIDMiddleware
from cafepos.api.routes.archive import router as archive_router
from cafepos.api.routes.cart import router as cart_router
from cafepos.api.routes.health import router as health_router
from cafepos.api.routes.menu import router as menu_router
from cafepos.api.routes.metrics import router as metrics_router
from cafepos.api.routes.orders import router as orders_router
from cafepos.api.routes.reports import router as reports_router
from cafepos.application.use_cases.import_archive import PendingImport
from cafepos.domain.order.cart import Cart
from cafepos.infrastructure.observability.logging_config import configure_logging
from cafepos.infrastructure.observability.otel import configure_otel
from cafepos.infrastructure.storage.factory import get_currency, storage_backend

logger = logging.getLogger("cafepos.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _cors_allow_origins() -> list[str]:
    env = os.getenv("APP_ENV", "dev").lower()

    # The till UI may be served from any origin in dev and test.
    if env in {"dev", "test"}:
        return ["*"]

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            self._observe(request, method, 500, started)
            logger.exception(
                "request_error",
                extra=self._log_fields(request, method, 500, started),
            )
            raise

        self._observe(request, method, response.status_code, started)
        logger.info(
            "request_complete",
            extra=self._log_fields(request, method, response.status_code, started),
        )
        return response

    @staticmethod
    def _route_path(request: Request) -> str:
        # Route template, not the raw path, to keep label cardinality bounded.
        route = request.scope.get("route")
        return getattr(route, "path", request.url.path)

    def _observe(self, request: Request, method: str, status_code: int, started: float) -> None:
        path = self._route_path(request)
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(time.perf_counter() - started)

    @staticmethod
    def _log_fields(
        request: Request, method: str, status_code: int, started: float
    ) -> dict[str, object]:
        return {
            "method": method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        }


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Cafe POS Backend", version="0.1.0")
    # One till per process, so one cart and one pending import.
    app.state.cart = Cart(get_currency())
    app.state.pending_import = PendingImport()
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(menu_router)
    app.include_router(cart_router)
    app.include_router(orders_router)
    app.include_router(archive_router)
    app.include_router(reports_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    logger.info("app_created", extra={"storage_backend": storage_backend()})
    return app


app = create_app()
