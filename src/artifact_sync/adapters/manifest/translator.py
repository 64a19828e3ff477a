"""Translate between manifest payloads and domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from artifact_sync.domain.model import (
    ActionCollection,
    ActionCollectionDTO,
    AuditRecord,
    DefaultResources,
)

from .schema import (
    ActionCollectionDTOPayload,
    ActionCollectionPayload,
    ArtifactManifest,
    DefaultResourcesPayload,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


def parse_manifest(raw: Mapping[str, Any] | str | bytes) -> ArtifactManifest:
    if isinstance(raw, Mapping):
        return ArtifactManifest.model_validate(raw)
    return ArtifactManifest.model_validate_json(raw)


def translate_default_resources(
    payload: DefaultResourcesPayload | None,
) -> DefaultResources | None:
    if payload is None:
        return None
    return DefaultResources(
        application_id=payload.application_id,
        page_id=payload.page_id,
        collection_id=payload.collection_id,
        action_id=payload.action_id,
        branch_name=payload.branch_name,
    )


def translate_collection_dto(payload: ActionCollectionDTOPayload) -> ActionCollectionDTO:
    return ActionCollectionDTO(
        name=payload.name,
        page_id=payload.page_id,
        plugin_id=payload.plugin_id,
        plugin_type=payload.plugin_type,
        body=payload.body,
        variables=[dict(variable) for variable in payload.variables],
        context_type=payload.context_type,
        default_resources=translate_default_resources(payload.default_resources),
        deleted_at=payload.deleted_at,
    )


def translate_action_collection(
    payload: ActionCollectionPayload,
    *,
    pristine: bool = True,
) -> ActionCollection:
    """Build a domain collection from a manifest entry.

    Storage ids in a manifest belong to the exporting instance; with
    ``pristine`` (the default) the collection is reset to be saved as new.
    """

    collection = ActionCollection(
        application_id=payload.application_id,
        workspace_id=payload.workspace_id,
        unpublished_collection=(
            translate_collection_dto(payload.unpublished_collection)
            if payload.unpublished_collection is not None
            else None
        ),
        published_collection=(
            translate_collection_dto(payload.published_collection)
            if payload.published_collection is not None
            else None
        ),
        default_resources=translate_default_resources(payload.default_resources),
        audit=AuditRecord(
            id=payload.id,
            git_sync_id=payload.git_sync_id,
            deleted_at=payload.deleted_at,
        ),
    )
    if pristine:
        collection.audit.make_pristine()
    return collection


def iter_action_collections(manifest: ArtifactManifest) -> Iterator[ActionCollection]:
    """Yield the manifest's collections in published order."""

    for payload in manifest.action_collection_list:
        yield translate_action_collection(payload)


def default_resources_payload(
    default_resources: DefaultResources | None,
) -> DefaultResourcesPayload | None:
    if default_resources is None:
        return None
    return DefaultResourcesPayload(
        application_id=default_resources.application_id,
        page_id=default_resources.page_id,
        collection_id=default_resources.collection_id,
        action_id=default_resources.action_id,
        branch_name=default_resources.branch_name,
    )


def collection_dto_payload(
    collection_dto: ActionCollectionDTO | None,
) -> ActionCollectionDTOPayload | None:
    if collection_dto is None:
        return None
    return ActionCollectionDTOPayload(
        name=collection_dto.name,
        page_id=collection_dto.page_id,
        plugin_id=collection_dto.plugin_id,
        plugin_type=collection_dto.plugin_type,
        body=collection_dto.body,
        variables=[dict(variable) for variable in collection_dto.variables],
        context_type=collection_dto.context_type,
        default_resources=default_resources_payload(collection_dto.default_resources),
        deleted_at=collection_dto.deleted_at,
    )
