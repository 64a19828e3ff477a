"""Pydantic models describing the artifact export manifest.

Field aliases are the persisted export layout and must stay stable so that
previously exported artifacts keep importing.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 # pydantic resolves annotations at runtime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DefaultResourcesPayload(ManifestBaseModel):
    application_id: str | None = Field(default=None, alias="applicationId")
    page_id: str | None = Field(default=None, alias="pageId")
    collection_id: str | None = Field(default=None, alias="collectionId")
    action_id: str | None = Field(default=None, alias="actionId")
    branch_name: str | None = Field(default=None, alias="branchName")

    _normalize_ids = field_validator(
        "application_id",
        "page_id",
        "collection_id",
        "action_id",
        "branch_name",
        mode="before",
    )(_blank_to_none)


class ActionCollectionDTOPayload(ManifestBaseModel):
    name: str | None = None
    page_id: str | None = Field(default=None, alias="pageId")
    plugin_id: str | None = Field(default=None, alias="pluginId")
    plugin_type: str | None = Field(default=None, alias="pluginType")
    body: str | None = None
    variables: list[dict[str, Any]] = Field(default_factory=list[dict[str, Any]])
    context_type: str | None = Field(default=None, alias="contextType")
    default_resources: DefaultResourcesPayload | None = Field(
        default=None, alias="defaultResources"
    )
    deleted_at: datetime | None = Field(default=None, alias="deletedAt")

    _normalize_page_id = field_validator("page_id", mode="before")(_blank_to_none)


class ActionCollectionPayload(ManifestBaseModel):
    id: str | None = None
    git_sync_id: str | None = Field(default=None, alias="gitSyncId")
    application_id: str | None = Field(default=None, alias="applicationId")
    workspace_id: str | None = Field(default=None, alias="workspaceId")
    unpublished_collection: ActionCollectionDTOPayload | None = Field(
        default=None, alias="unpublishedCollection"
    )
    published_collection: ActionCollectionDTOPayload | None = Field(
        default=None, alias="publishedCollection"
    )
    default_resources: DefaultResourcesPayload | None = Field(
        default=None, alias="defaultResources"
    )
    deleted_at: datetime | None = Field(default=None, alias="deletedAt")


class ArtifactManifest(ManifestBaseModel):
    """Top-level export document; sections for other resource kinds are ignored."""

    client_schema_version: int | None = Field(default=None, alias="clientSchemaVersion")
    server_schema_version: int | None = Field(default=None, alias="serverSchemaVersion")
    action_collection_list: list[ActionCollectionPayload] = Field(
        default_factory=list[ActionCollectionPayload], alias="actionCollectionList"
    )
