# This file provides shared helpers for API endpoint tests.
# It exists so tests run the real application against a throwaway SQLite database.
# The helpers build consistent settings objects and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_subscription_service
from src.common.settings import DatabaseSettings, LoggingSettings, ServerSettings, Settings

API = "/api/v1"
USER_A = "6f9619ff-8b86-d011-b42d-00c04fc964ff"
USER_B = "0b0e5c36-0f4c-4c1c-9d2c-3d3a1f0c9b11"


def build_test_settings(*, database_url: str) -> Settings:
    """Create deterministic settings for tests."""

    return Settings(
        project_name="Test Subscription API",
        app_version="0.0.1",
        database=DatabaseSettings(url=database_url),
        server=ServerSettings(host="127.0.0.1", port=8080, api_version_path=API),
        logging=LoggingSettings(level="INFO"),
    )


@contextmanager
def api_test_client(
    *,
    database_url: str,
    db_client: DatabaseClient | None = None,
    subscription_service: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient whose lifespan opens the given database."""

    settings = build_test_settings(database_url=database_url)
    app = create_app(settings=settings, db=db_client)
    if subscription_service is not None:
        app.dependency_overrides[get_subscription_service] = lambda: subscription_service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def subscription_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "service_name": "Spotify",
        "price": 500,
        "user_id": USER_A,
        "start_date": "2024-01-01",
    }
    payload.update(overrides)
    return {key: value for key, value in payload.items() if value is not ...}


def create_subscription(client: TestClient, **overrides: Any) -> dict[str, Any]:
    response = client.post(f"{API}/subscriptions", json=subscription_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()
