# This file defines response schemas for health and readiness endpoints.
# It exists to keep operational status contracts explicit for platform consumers.

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    ready: bool
    database: str
