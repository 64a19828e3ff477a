"""Ports for persisting importable resources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from artifact_sync.domain.model import ActionCollection

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent resource store."""

    def add(self, entity: TEntity) -> None: ...

    def update(self, entity: TEntity) -> None: ...

    def get(self, entity_id: str) -> TEntity | None: ...


@runtime_checkable
class ActionCollectionRepository(Repository[ActionCollection], Protocol):
    """Persistence contract for action collections.

    Finders return lazy iterators: every call re-issues the query, rows are
    streamed rather than loaded up front, and soft-deleted rows are excluded.
    """

    def find_by_application_id(self, application_id: str) -> Iterator[ActionCollection]: ...

    def find_by_default_application_id(
        self,
        default_application_id: str,
    ) -> Iterator[ActionCollection]: ...
