"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from artifact_sync.config.importing import DEFAULT_STREAM_BATCH_SIZE

from .documents import collection_from_row, collection_to_row
from .tables import action_collection_table

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from artifact_sync.domain.model import ActionCollection

log = logging.getLogger(__name__)


class SqlAlchemyActionCollectionRepository:
    """Store action collections as documents; finders stream in batches."""

    def __init__(self, session: Session, *, batch_size: int = DEFAULT_STREAM_BATCH_SIZE) -> None:
        self.session = session
        self.batch_size = batch_size

    def add(self, entity: ActionCollection) -> None:
        if entity.id is None:
            raise ValueError("action collection must have an id before it is stored")
        self.session.execute(action_collection_table.insert().values(collection_to_row(entity)))

    def add_all(self, entities: Iterable[ActionCollection]) -> None:
        rows = [collection_to_row(entity) for entity in entities]
        if any(row["id"] is None for row in rows):
            raise ValueError("action collection must have an id before it is stored")
        if rows:
            self.session.execute(action_collection_table.insert(), rows)

    def update(self, entity: ActionCollection) -> None:
        if entity.id is None:
            raise ValueError("cannot update an action collection without an id")
        values = collection_to_row(entity)
        del values["id"]
        result = self.session.execute(
            action_collection_table.update()
            .where(action_collection_table.c.id == entity.id)
            .values(values)
        )
        if result.rowcount == 0:
            raise LookupError(f"action collection {entity.id} does not exist")

    def get(self, entity_id: str) -> ActionCollection | None:
        stmt = select(action_collection_table).where(action_collection_table.c.id == entity_id)
        row = self.session.execute(stmt).one_or_none()
        return collection_from_row(row) if row is not None else None

    def find_by_application_id(self, application_id: str) -> Iterator[ActionCollection]:
        stmt = select(action_collection_table).where(
            action_collection_table.c.application_id == application_id
        )
        return self._stream(stmt)

    def find_by_default_application_id(
        self,
        default_application_id: str,
    ) -> Iterator[ActionCollection]:
        stmt = select(action_collection_table).where(
            action_collection_table.c.default_application_id == default_application_id
        )
        return self._stream(stmt)

    def _stream(self, stmt: Select[tuple[object, ...]]) -> Iterator[ActionCollection]:
        stmt = (
            stmt.where(action_collection_table.c.deleted_at.is_(None))
            .order_by(action_collection_table.c.id)
            .execution_options(yield_per=self.batch_size)
        )
        result = self.session.execute(stmt)
        try:
            for row in result:
                yield collection_from_row(row)
        finally:
            result.close()
