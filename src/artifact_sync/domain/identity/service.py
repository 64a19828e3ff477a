"""Transplant canonical identity from one branch copy of a resource to another."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from artifact_sync.domain.model import (
    CANONICAL_ID_FIELDS,
    ActionCollection,
    ActionCollectionDTO,
    DefaultResources,
)

if TYPE_CHECKING:
    from collections.abc import Callable


class HasDefaultResources(Protocol):
    default_resources: DefaultResources | None


@dataclass(frozen=True)
class DefaultResourcesService[TResource: HasDefaultResources]:
    """Per-kind identity rules.

    ``inherited_fields`` name the canonical ids of the owning chain;
    ``own_field`` is the kind's own canonical id (``None`` for views such as
    DTOs that have no identity of their own). ``storage_id`` reads the storage
    id used when the sibling never established ``own_field``.
    """

    inherited_fields: tuple[str, ...]
    own_field: str | None = None
    storage_id: Callable[[TResource], str | None] | None = None

    def __post_init__(self) -> None:
        unknown = [
            name
            for name in (*self.inherited_fields, self.own_field)
            if name is not None and name not in CANONICAL_ID_FIELDS
        ]
        if unknown:
            raise ValueError(f"unknown canonical id fields: {', '.join(unknown)}")

    def set_from_other_branch(
        self,
        target: TResource,
        source: TResource,
        branch_name: str | None,
    ) -> TResource:
        """Give ``target`` the canonical ids ``source`` holds on its branch.

        Ancestor ids are copied verbatim. The own canonical id is inherited too;
        only when ``source`` never established one does ``target``'s storage id
        become the canonical id.
        """

        source_defaults = source.default_resources or DefaultResources()
        defaults = DefaultResources(branch_name=branch_name)
        for name in self.inherited_fields:
            setattr(defaults, name, getattr(source_defaults, name))
        if self.own_field is not None:
            inherited_own = getattr(source_defaults, self.own_field)
            if inherited_own is None and self.storage_id is not None:
                inherited_own = self.storage_id(target)
            setattr(defaults, self.own_field, inherited_own)
        target.default_resources = defaults
        return target


def _collection_storage_id(collection: ActionCollection) -> str | None:
    return collection.id


ACTION_COLLECTION_DEFAULTS: DefaultResourcesService[ActionCollection] = DefaultResourcesService(
    inherited_fields=("application_id",),
    own_field="collection_id",
    storage_id=_collection_storage_id,
)

ACTION_COLLECTION_DTO_DEFAULTS: DefaultResourcesService[ActionCollectionDTO] = (
    DefaultResourcesService(inherited_fields=("page_id",))
)
