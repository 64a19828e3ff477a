"""Fill default ids from storage ids without overriding manifest-supplied ones."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifact_sync.domain.model import DefaultResources

if TYPE_CHECKING:
    from artifact_sync.domain.model import ActionCollection, ActionCollectionDTO


def merge_given_default_ids(
    computed: DefaultResources,
    given: DefaultResources | None,
    *,
    branch_name: str | None,
) -> DefaultResources:
    """Manifest-supplied (``given``) values win; computed values only fill gaps."""

    merged = computed.overlay(given)
    merged.branch_name = branch_name
    return merged


def fill_collection_dto_default_ids(
    collection_dto: ActionCollectionDTO,
    branch_name: str | None,
) -> None:
    computed = DefaultResources(page_id=collection_dto.page_id)
    collection_dto.default_resources = merge_given_default_ids(
        computed,
        collection_dto.default_resources,
        branch_name=branch_name,
    )


def fill_collection_default_ids(collection: ActionCollection, branch_name: str | None) -> None:
    """Complete ``collection``'s default ids (and its views') from storage ids."""

    computed = DefaultResources(
        application_id=collection.application_id,
        collection_id=collection.id,
    )
    collection.default_resources = merge_given_default_ids(
        computed,
        collection.default_resources,
        branch_name=branch_name,
    )
    if collection.unpublished_collection is not None:
        fill_collection_dto_default_ids(collection.unpublished_collection, branch_name)
    if collection.published_collection is not None:
        fill_collection_dto_default_ids(collection.published_collection, branch_name)
