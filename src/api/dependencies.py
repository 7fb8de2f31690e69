# This file provides dependency factories for FastAPI routes.
# Services are built once per application in the lifespan hook and stored on app.state.
# Routes read them from the request's app, so tests can swap them with dependency overrides.

from __future__ import annotations

from fastapi import Request

from src.api.db_access import DatabaseClient
from src.api.error_handlers import APIError
from src.api.services.subscription_service import SubscriptionService


def _not_ready(component: str) -> APIError:
    return APIError(
        status_code=503,
        error_code="SERVICE_UNAVAILABLE",
        message=f"{component} is not initialized.",
    )


def get_database_client(request: Request) -> DatabaseClient:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise _not_ready("Database client")
    return db


def get_subscription_service(request: Request) -> SubscriptionService:
    service = getattr(request.app.state, "subscription_service", None)
    if service is None:
        raise _not_ready("Subscription service")
    return service
