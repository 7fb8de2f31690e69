"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.api.db_access import DatabaseClient  # noqa: E402
from src.common import settings as settings_module  # noqa: E402

OVERRIDE_ENV_VARS = (
    "CONFIG_PATH",
    "DATABASE_URL",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
    "DB_SSLMODE",
    "SERVER_HOST",
    "SERVER_PORT",
    "API_VERSION_PATH",
    "API_ALLOWED_ORIGINS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop config overrides from the outer environment so tests see only what they set."""

    for key in OVERRIDE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    settings_module.get_settings.cache_clear()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+pysqlite:///{tmp_path / 'subscriptions.db'}"


@pytest.fixture
def db_client(sqlite_url: str) -> Iterator[DatabaseClient]:
    client = DatabaseClient(database_url=sqlite_url)
    client.create_schema()
    yield client
    client.close()
