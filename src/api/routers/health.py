# This file defines liveness and readiness endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms database connectivity through the shared client.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.db_access import DatabaseClient
from src.api.dependencies import get_database_client
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse

router = APIRouter(tags=["health"])
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


@router.get("/health", response_model=HealthResponse)
def health() -> dict[str, object]:
    return {"status": "healthy"}


@router.get("/ready", response_model=ReadinessResponse)
def ready(db: DBDep) -> dict[str, object]:
    db_connected = db.can_connect()
    return {
        "ready": db_connected,
        "database": "reachable" if db_connected else "unreachable",
    }
