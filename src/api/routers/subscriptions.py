# This file defines subscription CRUD and cost endpoints under the versioned API path.
# It exists so request binding and status-code mapping stay separate from storage logic.
# Typed service errors propagate to the global error handlers, which pick the HTTP status.
# Responses are built from domain records through explicit response models.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_subscription_service
from src.api.schemas.common import ErrorResponse, MessageResponse
from src.api.schemas.subscription_schemas import (
    CostRequest,
    CostResponse,
    SubscriptionCreateRequest,
    SubscriptionResponse,
    SubscriptionUpdateRequest,
)
from src.api.services.subscription_service import SubscriptionService

router = APIRouter(
    prefix="/subscriptions",
    tags=["subscriptions"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
)
SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Subscription not found"}}


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
    summary="Create a new subscription",
)
def create_subscription(
    payload: SubscriptionCreateRequest,
    service: SubscriptionServiceDep,
) -> SubscriptionResponse:
    subscription = service.create_subscription(payload.to_domain())
    return SubscriptionResponse.model_validate(subscription)


@router.get(
    "",
    response_model=list[SubscriptionResponse],
    response_model_exclude_none=True,
    summary="List subscriptions, optionally for one user",
)
def list_subscriptions(
    service: SubscriptionServiceDep,
    user_id: str | None = Query(default=None, description="Owner UUID; omit to list all"),
) -> list[SubscriptionResponse]:
    if user_id is not None and user_id.strip():
        subscriptions = service.get_user_subscriptions(user_id)
    else:
        subscriptions = service.get_all_subscriptions()
    return [SubscriptionResponse.model_validate(item) for item in subscriptions]


@router.post(
    "/cost",
    response_model=CostResponse,
    response_model_exclude_none=True,
    summary="Calculate total subscription cost for a period",
)
def calculate_cost(
    payload: CostRequest,
    service: SubscriptionServiceDep,
) -> CostResponse:
    query = payload.to_domain()
    total_cost = service.calculate_cost(query)
    return CostResponse(
        total_cost=total_cost,
        period=query.period_label,
        user_id=query.user_id,
        service_name=query.service_name,
    )


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    responses=_NOT_FOUND,
    response_model_exclude_none=True,
    summary="Get subscription by ID",
)
def get_subscription(
    subscription_id: int,
    service: SubscriptionServiceDep,
) -> SubscriptionResponse:
    subscription = service.get_subscription(subscription_id)
    return SubscriptionResponse.model_validate(subscription)


@router.put(
    "/{subscription_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Partially update a subscription",
)
def update_subscription(
    subscription_id: int,
    payload: SubscriptionUpdateRequest,
    service: SubscriptionServiceDep,
) -> MessageResponse:
    service.update_subscription(subscription_id, payload.to_domain())
    return MessageResponse(message="Subscription updated successfully")


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete subscription",
)
def delete_subscription(
    subscription_id: int,
    service: SubscriptionServiceDep,
) -> Response:
    service.delete_subscription(subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
