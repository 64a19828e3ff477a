"""SQLAlchemy Core metadata for stored resource documents."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# One document per collection; lookup columns are denormalised from it.
action_collection_table = Table(
    "action_collection",
    metadata,
    Column("id", String, primary_key=True),
    Column("application_id", String, nullable=True),
    Column("default_application_id", String, nullable=True),
    Column("git_sync_id", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("document", JSON, nullable=False),
    Index("ix_action_collection_application_deleted", "application_id", "deleted_at"),
    Index(
        "ix_action_collection_default_application_deleted",
        "default_application_id",
        "deleted_at",
    ),
    Index("ix_action_collection_git_sync_id", "git_sync_id"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the document metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
