# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so error payloads and request-body conventions stay consistent.
# Request bodies accept both snake_case and camelCase keys; responses are always snake_case.

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
)
from pydantic.alias_generators import to_camel

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _snake_or_camel(field_name: str) -> AliasChoices:
    return AliasChoices(field_name, to_camel(field_name))


def validate_iso_date(value: str) -> str:
    """Accept only fixed-width YYYY-MM-DD strings naming a real calendar date."""

    if not _ISO_DATE_RE.fullmatch(value):
        raise ValueError("must be a date in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"{value!r} is not a valid calendar date") from exc
    return value


IsoDate = Annotated[str, AfterValidator(validate_iso_date)]


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=_snake_or_camel),
        extra="ignore",
    )


class ErrorResponse(BaseModel):
    error: str
    error_code: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


class MessageResponse(BaseModel):
    message: str
