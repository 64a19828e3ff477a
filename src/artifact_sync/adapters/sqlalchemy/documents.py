"""Convert action collections to and from stored documents.

Unlike manifest entries, stored documents keep internal audit data
(authors and policies); timestamps and lookup ids live in table columns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from artifact_sync.adapters.manifest import (
    ActionCollectionDTOPayload,
    DefaultResourcesPayload,
    collection_dto_payload,
    default_resources_payload,
    translate_collection_dto,
    translate_default_resources,
)
from artifact_sync.domain.model import ActionCollection, AuditRecord, Policy

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pydantic import BaseModel
    from sqlalchemy import Row


def _dump(model: BaseModel | None) -> dict[str, Any] | None:
    if model is None:
        return None
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _dump_policies(policies: Iterable[Policy] | None) -> list[dict[str, Any]]:
    dumped = [
        {"permission": policy.permission, "groups": sorted(policy.permission_groups)}
        for policy in policies or ()
    ]
    return sorted(dumped, key=lambda item: item["permission"])


def _load_policies(raw: object) -> set[Policy]:
    if not isinstance(raw, list):
        return set()
    policies: set[Policy] = set()
    for item in cast("list[Mapping[str, Any]]", raw):
        policies.add(
            Policy(
                permission=str(item["permission"]),
                permission_groups=frozenset(str(group) for group in item.get("groups", ())),
            )
        )
    return policies


def collection_to_row(collection: ActionCollection) -> dict[str, Any]:
    audit = collection.audit
    defaults = collection.default_resources
    document: dict[str, Any] = {
        "workspaceId": collection.workspace_id,
        "gitSyncId": audit.git_sync_id,
        "createdBy": audit.created_by,
        "modifiedBy": audit.modified_by,
        "policies": _dump_policies(audit.policies),
        "unpublishedCollection": _dump(collection_dto_payload(collection.unpublished_collection)),
        "publishedCollection": _dump(collection_dto_payload(collection.published_collection)),
        "defaultResources": _dump(default_resources_payload(defaults)),
    }
    return {
        "id": audit.id,
        "application_id": collection.application_id,
        "default_application_id": defaults.application_id if defaults is not None else None,
        "git_sync_id": audit.git_sync_id,
        "created_at": audit.created_at,
        "updated_at": audit.updated_at,
        "deleted_at": audit.deleted_at,
        "document": document,
    }


def collection_from_row(row: Row[Any]) -> ActionCollection:
    document = cast("dict[str, Any]", row.document)
    unpublished = document.get("unpublishedCollection")
    published = document.get("publishedCollection")
    defaults = document.get("defaultResources")
    return ActionCollection(
        application_id=row.application_id,
        workspace_id=document.get("workspaceId"),
        unpublished_collection=(
            translate_collection_dto(ActionCollectionDTOPayload.model_validate(unpublished))
            if unpublished is not None
            else None
        ),
        published_collection=(
            translate_collection_dto(ActionCollectionDTOPayload.model_validate(published))
            if published is not None
            else None
        ),
        default_resources=(
            translate_default_resources(DefaultResourcesPayload.model_validate(defaults))
            if defaults is not None
            else None
        ),
        audit=AuditRecord(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            created_by=document.get("createdBy"),
            modified_by=document.get("modifiedBy"),
            deleted_at=row.deleted_at,
            policies=_load_policies(document.get("policies")),
            git_sync_id=row.git_sync_id,
        ),
    )
