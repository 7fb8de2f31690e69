# This file implements the domain logic layer for subscription endpoints.
# It exists so routers stay transport-focused while storage calls and input parsing live in one layer.
# The service adds no business rules: it delegates to the repository and returns results unchanged.
# The one transformation is parsing a user id string into a UUID before querying by user.

from __future__ import annotations

import logging
from uuid import UUID

from src.api.domain import CostQuery, NewSubscription, Subscription, SubscriptionPatch
from src.api.exceptions import NotFoundError, ValidationError
from src.api.repositories.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


def parse_user_id(raw_user_id: str) -> UUID:
    try:
        return UUID(raw_user_id.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid user_id: {raw_user_id!r} is not a valid UUID.") from exc


class SubscriptionService:
    """Delegation layer between HTTP routers and subscription storage."""

    def __init__(self, repository: SubscriptionRepository) -> None:
        self.repository = repository

    def create_subscription(self, new_subscription: NewSubscription) -> Subscription:
        logger.info("Creating subscription for user: %s", new_subscription.user_id)
        return self.repository.create(new_subscription)

    def get_subscription(self, subscription_id: int) -> Subscription:
        logger.info("Getting subscription with ID: %d", subscription_id)
        subscription = self.repository.get_by_id(subscription_id)
        if subscription is None:
            raise NotFoundError()
        return subscription

    def get_user_subscriptions(self, user_id: str) -> list[Subscription]:
        logger.info("Getting subscriptions for user: %s", user_id)
        return self.repository.get_by_user_id(parse_user_id(user_id))

    def get_all_subscriptions(self) -> list[Subscription]:
        logger.info("Getting all subscriptions")
        return self.repository.get_all()

    def update_subscription(self, subscription_id: int, patch: SubscriptionPatch) -> None:
        logger.info("Updating subscription with ID: %d", subscription_id)
        self.repository.update(subscription_id, patch)

    def delete_subscription(self, subscription_id: int) -> None:
        logger.info("Deleting subscription with ID: %d", subscription_id)
        self.repository.delete(subscription_id)

    def calculate_cost(self, query: CostQuery) -> int:
        logger.info(
            "Calculating cost for period: %s to %s", query.start_period, query.end_period
        )
        return self.repository.calculate_cost(query)
