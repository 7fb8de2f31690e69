# This file declares the relational table that stores subscriptions.
# The definition is shared by schema creation at startup and by every repository statement.

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
)

# Bounds of the 32-bit INTEGER columns (PostgreSQL int4); values outside cannot be stored.
MIN_INTEGER = -(2**31)
MAX_INTEGER = 2**31 - 1

metadata = MetaData()

subscriptions_table = Table(
    "subscriptions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("service_name", Text, nullable=False),
    Column("price", Integer, nullable=False),
    Column("user_id", Uuid(as_uuid=True), nullable=False),
    # YYYY-MM-DD text; lexicographic order equals calendar order for this format
    Column("start_date", String(10), nullable=False),
    Column("end_date", String(10), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("price >= 0", name="ck_subscriptions_price_non_negative"),
    Index("ix_subscriptions_user_id", "user_id"),
    sqlite_autoincrement=True,
)
