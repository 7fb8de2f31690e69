# This file defines subscription endpoint schemas for create, update, read, and cost requests.
# It exists so request validation happens at the HTTP boundary before any storage call.
# Each request model converts itself into the matching domain record for the service layer.

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from src.api.domain import CostQuery, NewSubscription, SubscriptionPatch
from src.api.schemas.common import IsoDate, RequestModel
from src.api.tables import MAX_INTEGER

ServiceName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Price = Annotated[int, Field(ge=0, le=MAX_INTEGER, strict=True)]

_NON_NULLABLE_UPDATE_FIELDS = ("service_name", "price", "start_date")


class SubscriptionCreateRequest(RequestModel):
    service_name: ServiceName
    price: Price
    user_id: UUID
    start_date: IsoDate
    end_date: IsoDate | None = None

    def to_domain(self) -> NewSubscription:
        return NewSubscription(
            service_name=self.service_name,
            price=self.price,
            user_id=self.user_id,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class SubscriptionUpdateRequest(RequestModel):
    """Partial update body; only keys present in the JSON are applied."""

    service_name: ServiceName | None = None
    price: Price | None = None
    start_date: IsoDate | None = None
    end_date: IsoDate | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> SubscriptionUpdateRequest:
        for name in _NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_domain(self) -> SubscriptionPatch:
        provided = {name: getattr(self, name) for name in self.model_fields_set}
        return SubscriptionPatch(**provided)


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_name: str
    price: int
    user_id: UUID
    start_date: str
    end_date: str | None = None
    created_at: datetime
    updated_at: datetime


class CostRequest(RequestModel):
    start_period: IsoDate
    end_period: IsoDate
    user_id: UUID | None = None
    service_name: str | None = None

    @model_validator(mode="after")
    def validate_period_order(self) -> CostRequest:
        if self.start_period > self.end_period:
            raise ValueError("start_period must be less than or equal to end_period")
        return self

    def to_domain(self) -> CostQuery:
        return CostQuery(
            start_period=self.start_period,
            end_period=self.end_period,
            user_id=self.user_id,
            service_name=self.service_name,
        )


class CostResponse(BaseModel):
    total_cost: int
    period: str
    user_id: UUID | None = None
    service_name: str | None = None
