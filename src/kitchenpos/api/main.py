from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from kitchenpos.api.error_handling import register_exception_handlers
from kitchenpos.api.middleware.request_id import RequestIDMiddleware
from kitchenpos.api.routes.health import router as health_router
from kitchenpos.api.routes.metrics import router as metrics_router
from kitchenpos.api.routes.order_tables import router as order_tables_router
from kitchenpos.api.routes.orders import router as orders_router
from kitchenpos.infrastructure.observability.logging_config import configure_logging
from kitchenpos.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("kitchenpos.api.access")

HTTP_REQUESTS_TOTAL = Counter(
    "kitchenpos_http_requests_total",
    "Total number of HTTP requests",
    ["method", "route", "status_code"],
)
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "kitchenpos_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
)


def _cors_allow_origins() -> list[str]:
    if os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}:
        return ["*"]
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "https://pos.example.com")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_label(request: Request) -> str:
    # Path templates keep order ids out of metric labels.
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception:
            logger.exception("request_error", extra={"method": request.method, "path": request.url.path})
            raise
        finally:
            elapsed = time.perf_counter() - started
            route = _route_label(request)
            HTTP_REQUESTS_TOTAL.labels(
                method=request.method, route=route, status_code=str(status_code)
            ).inc()
            HTTP_REQUEST_DURATION_SECONDS.labels(method=request.method, route=route).observe(elapsed)
            logger.info(
                "request_complete",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round(elapsed * 1000, 2),
                },
            )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="kitchenpos", version="0.1.0")
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(orders_router)
    app.include_router(order_tables_router)

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
    return app


app = create_app()
