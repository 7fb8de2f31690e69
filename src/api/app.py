# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The lifespan hook owns the database client: it verifies connectivity, creates the schema,
# wires repository -> service onto app.state, and disposes the engine at shutdown.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint

from src.api.db_access import DatabaseClient
from src.api.error_handlers import register_error_handlers
from src.api.exceptions import StorageError
from src.api.repositories.subscription_repository import SubscriptionRepository
from src.api.routers.health import router as health_router
from src.api.routers.subscriptions import router as subscriptions_router
from src.api.services.subscription_service import SubscriptionService
from src.common.logging import configure_logging
from src.common.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


def _route_label(request: Request) -> str:
    # Templated path keeps label cardinality bounded (/subscriptions/{subscription_id}).
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def create_app(
    *,
    settings: Settings | None = None,
    db: DatabaseClient | None = None,
) -> FastAPI:
    """Create configured FastAPI application instance.

    When `db` is given the app adopts it instead of opening its own client; the client is
    still verified, schema-initialized and closed by the app lifespan.
    """

    config = settings or get_settings()
    configure_logging(config.logging.level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = db or DatabaseClient(database_url=config.database_url)
        if not client.can_connect():
            client.close()
            raise StorageError("Failed to connect to database")
        try:
            client.create_schema()
        except SQLAlchemyError as exc:
            logger.exception("Failed to create database schema")
            client.close()
            raise StorageError("Failed to create database schema") from exc
        logger.info("Successfully connected to database")

        app.state.db = client
        app.state.subscription_service = SubscriptionService(SubscriptionRepository(client))
        try:
            yield
        finally:
            app.state.subscription_service = None
            app.state.db = None
            client.close()
            logger.info("Database connection closed")

    app = FastAPI(
        title=config.project_name,
        description="API for managing users' online service subscriptions and their costs.",
        version=config.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service liveness and readiness."},
            {
                "name": "subscriptions",
                "description": "Subscription records and cost aggregation over periods.",
            },
        ],
    )

    if config.server.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(time.perf_counter() - started)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(subscriptions_router, prefix=config.server.api_version_path)

    return app
