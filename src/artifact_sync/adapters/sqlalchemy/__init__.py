"""SQLAlchemy adapter package for artifact-sync."""

from __future__ import annotations

from .documents import collection_from_row, collection_to_row
from .repositories import SqlAlchemyActionCollectionRepository
from .tables import UTCDateTime, action_collection_table, create_all_tables, metadata
from .unit_of_work import (
    SqlAlchemyImportUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyActionCollectionRepository",
    "SqlAlchemyImportUnitOfWork",
    "StartupError",
    "UTCDateTime",
    "action_collection_table",
    "collection_from_row",
    "collection_to_row",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
