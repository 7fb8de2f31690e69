# This file implements the storage layer for subscription records.
# It exists so every SQL statement touching the subscriptions table lives in one auditable place.
# Each public method maps to exactly one statement; not-found on writes comes from the affected-row count.
# SQLAlchemy failures are logged with full detail and re-raised as StorageError with a client-safe message.

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from src.api.db_access import DatabaseClient
from src.api.domain import CostQuery, NewSubscription, Subscription, SubscriptionPatch
from src.api.exceptions import NotFoundError, StorageError
from src.api.tables import MAX_INTEGER, MIN_INTEGER, subscriptions_table

logger = logging.getLogger(__name__)

_t = subscriptions_table
_ORDERING = (_t.c.created_at.desc(), _t.c.id.desc())


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _storable_id(subscription_id: int) -> bool:
    return MIN_INTEGER <= subscription_id <= MAX_INTEGER


def _to_subscription(row: dict[str, Any]) -> Subscription:
    return Subscription(
        id=int(row["id"]),
        service_name=row["service_name"],
        price=int(row["price"]),
        user_id=row["user_id"] if isinstance(row["user_id"], UUID) else UUID(str(row["user_id"])),
        start_date=row["start_date"],
        end_date=row["end_date"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SubscriptionRepository:
    """Create/read/update/delete/aggregate access to the subscriptions table."""

    def __init__(
        self,
        db: DatabaseClient,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.db = db
        self._clock = clock

    def create(self, new_subscription: NewSubscription) -> Subscription:
        now = self._clock()
        statement = (
            insert(_t)
            .values(
                service_name=new_subscription.service_name,
                price=new_subscription.price,
                user_id=new_subscription.user_id,
                start_date=new_subscription.start_date,
                end_date=new_subscription.end_date,
                created_at=now,
                updated_at=now,
            )
            .returning(*_t.c)
        )
        try:
            row = self.db.write_returning(statement)
        except SQLAlchemyError as exc:
            logger.exception("Failed to create subscription for user %s", new_subscription.user_id)
            raise StorageError("Failed to create subscription") from exc

        subscription = _to_subscription(row)
        logger.info("Created subscription with ID: %d", subscription.id)
        return subscription

    def get_by_id(self, subscription_id: int) -> Subscription | None:
        if not _storable_id(subscription_id):
            return None
        statement = select(_t).where(_t.c.id == subscription_id)
        try:
            row = self.db.fetch_one(statement)
        except SQLAlchemyError as exc:
            logger.exception("Failed to get subscription %d", subscription_id)
            raise StorageError("Failed to get subscription") from exc
        return _to_subscription(row) if row is not None else None

    def get_by_user_id(self, user_id: UUID) -> list[Subscription]:
        statement = select(_t).where(_t.c.user_id == user_id).order_by(*_ORDERING)
        try:
            rows = self.db.fetch_all(statement)
        except SQLAlchemyError as exc:
            logger.exception("Failed to get subscriptions for user %s", user_id)
            raise StorageError("Failed to get subscriptions") from exc

        logger.info("Found %d subscriptions for user %s", len(rows), user_id)
        return [_to_subscription(row) for row in rows]

    def get_all(self) -> list[Subscription]:
        statement = select(_t).order_by(*_ORDERING)
        try:
            rows = self.db.fetch_all(statement)
        except SQLAlchemyError as exc:
            logger.exception("Failed to get subscriptions")
            raise StorageError("Failed to get subscriptions") from exc

        logger.info("Found %d total subscriptions", len(rows))
        return [_to_subscription(row) for row in rows]

    def update(self, subscription_id: int, patch: SubscriptionPatch) -> None:
        if not _storable_id(subscription_id):
            raise NotFoundError()
        values = patch.changes()
        values["updated_at"] = self._clock()
        statement = update(_t).where(_t.c.id == subscription_id).values(**values)
        try:
            affected = self.db.execute(statement)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update subscription %d", subscription_id)
            raise StorageError("Failed to update subscription") from exc

        if affected == 0:
            raise NotFoundError()
        logger.info("Updated subscription with ID: %d", subscription_id)

    def delete(self, subscription_id: int) -> None:
        if not _storable_id(subscription_id):
            raise NotFoundError()
        statement = delete(_t).where(_t.c.id == subscription_id)
        try:
            affected = self.db.execute(statement)
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete subscription %d", subscription_id)
            raise StorageError("Failed to delete subscription") from exc

        if affected == 0:
            raise NotFoundError()
        logger.info("Deleted subscription with ID: %d", subscription_id)

    def calculate_cost(self, query: CostQuery) -> int:
        """Sum prices of subscriptions whose active window intersects the period.

        A subscription is active on [start_date, end_date] (end_date NULL means open-ended);
        the period [start_period, end_period] is inclusive on both ends.
        """

        conditions = [
            or_(_t.c.end_date.is_(None), _t.c.end_date >= query.start_period),
            _t.c.start_date <= query.end_period,
        ]
        if query.user_id is not None:
            conditions.append(_t.c.user_id == query.user_id)
        if query.service_name is not None:
            conditions.append(_t.c.service_name.icontains(query.service_name, autoescape=True))

        statement = select(func.coalesce(func.sum(_t.c.price), 0)).where(*conditions)
        try:
            total_cost = int(self.db.fetch_scalar(statement))
        except SQLAlchemyError as exc:
            logger.exception("Failed to calculate cost for period %s", query.period_label)
            raise StorageError("Failed to calculate cost") from exc

        logger.info("Calculated total cost: %d for period %s", total_cost, query.period_label)
        return total_cost
