"""JS object collections: a named group of actions attached to a page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from .audit import AuditedResource
from .enums import EntityType

if TYPE_CHECKING:
    from datetime import datetime

    from .default_resources import DefaultResources


@dataclass(eq=False, kw_only=True)
class ActionCollectionDTO:
    """One view (edit or published) of a collection.

    ``page_id`` holds the parent page *name* inside an export manifest and the
    page's storage id once the collection has been imported.
    """

    name: str | None = None
    page_id: str | None = None
    plugin_id: str | None = None
    plugin_type: str | None = None
    body: str | None = None
    variables: list[dict[str, Any]] = field(default_factory=list[dict[str, Any]])
    context_type: str | None = None
    default_resources: DefaultResources | None = None
    deleted_at: datetime | None = None


@dataclass(eq=False, kw_only=True)
class ActionCollection(AuditedResource):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ACTION_COLLECTION

    application_id: str | None = None
    workspace_id: str | None = None
    unpublished_collection: ActionCollectionDTO | None = None
    published_collection: ActionCollectionDTO | None = None
    default_resources: DefaultResources | None = None

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def name(self) -> str | None:
        if self.unpublished_collection is None:
            return None
        return self.unpublished_collection.name

    def take_payload_from(self, incoming: ActionCollection) -> None:
        """Copy non-null payload views from ``incoming``; identity stays untouched."""

        if incoming.unpublished_collection is not None:
            self.unpublished_collection = incoming.unpublished_collection
        if incoming.published_collection is not None:
            self.published_collection = incoming.published_collection
        if incoming.workspace_id is not None:
            self.workspace_id = incoming.workspace_id
