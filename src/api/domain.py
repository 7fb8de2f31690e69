# This file defines the domain records passed between routers, services, and storage.
# They are plain dataclasses so the service and repository layers stay independent of HTTP schemas.
# Partial updates carry an explicit UNSET marker per field instead of relying on None checks.

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Final
from uuid import UUID


class _Unset(enum.Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET


@dataclass(frozen=True)
class Subscription:
    id: int
    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewSubscription:
    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None = None


@dataclass(frozen=True)
class SubscriptionPatch:
    """Fields to change on an existing subscription; UNSET fields keep their stored value.

    `end_date=None` is a real value and clears the end date.
    """

    service_name: str | _Unset = UNSET
    price: int | _Unset = UNSET
    start_date: str | _Unset = UNSET
    end_date: str | None | _Unset = UNSET

    def changes(self) -> dict[str, Any]:
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True)
class CostQuery:
    """Inclusive period plus optional filters for cost aggregation."""

    start_period: str
    end_period: str
    user_id: UUID | None = None
    service_name: str | None = None

    @property
    def period_label(self) -> str:
        return f"{self.start_period} - {self.end_period}"
