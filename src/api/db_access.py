# This file wraps database access so the storage layer can run SQLAlchemy statements safely.
# It exists to keep engine ownership and transaction scoping out of repository and router code.
# One client is created at startup, shared through constructor injection, and disposed at shutdown.
# Every helper runs exactly one statement in its own transaction.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import Executable

from src.api.tables import metadata

logger = logging.getLogger(__name__)


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, database_url: str, echo: bool = False) -> None:
        connect_args: dict[str, Any] = {}
        if database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self._engine: Engine = create_engine(
            database_url,
            pool_pre_ping=True,
            echo=echo,
            connect_args=connect_args,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.warning("Database connectivity check failed", exc_info=True)
            return False

    def create_schema(self) -> None:
        """Create missing tables; existing tables are left untouched."""

        metadata.create_all(self._engine)

    def fetch_all(self, statement: Executable) -> list[dict[str, Any]]:
        with self._engine.connect() as connection:
            rows = connection.execute(statement).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, statement: Executable) -> dict[str, Any] | None:
        with self._engine.connect() as connection:
            row = connection.execute(statement).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(self, statement: Executable) -> Any:
        with self._engine.connect() as connection:
            return connection.execute(statement).scalar_one()

    def write_returning(self, statement: Executable) -> dict[str, Any]:
        """Run an INSERT/UPDATE ... RETURNING and commit; returns the single returned row."""

        with self._engine.begin() as connection:
            row = connection.execute(statement).mappings().one()
        return dict(row)

    def execute(self, statement: Executable) -> int:
        """Run a write statement and commit; returns the affected-row count."""

        with self._engine.begin() as connection:
            result: CursorResult[Any] = connection.execute(statement)
            return result.rowcount

    def close(self) -> None:
        self._engine.dispose()
