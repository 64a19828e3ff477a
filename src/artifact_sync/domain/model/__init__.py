"""Public domain model surface."""

from __future__ import annotations

from artifact_sync.domain.model.action_collection import ActionCollection, ActionCollectionDTO
from artifact_sync.domain.model.artifact import (
    Application,
    Artifact,
    GitArtifactMetadata,
    Package,
)
from artifact_sync.domain.model.audit import (
    Auditable,
    AuditedResource,
    AuditRecord,
    public_field_names,
)
from artifact_sync.domain.model.context import Context, Module, Page
from artifact_sync.domain.model.default_resources import (
    CANONICAL_ID_FIELDS,
    MANIFEST_FIELD_NAMES,
    DefaultResources,
)
from artifact_sync.domain.model.enums import CreatorContextType, EntityType, Visibility
from artifact_sync.domain.model.ids import new_git_sync_id, new_object_id
from artifact_sync.domain.model.policy import (
    PAGE_TO_ACTION_PERMISSIONS,
    Permission,
    Policy,
    groups_granted,
    inherit_policies,
)

__all__ = [  # noqa: RUF022
    # audit
    "AuditRecord",
    "Auditable",
    "AuditedResource",
    "public_field_names",
    # identity
    "CANONICAL_ID_FIELDS",
    "MANIFEST_FIELD_NAMES",
    "DefaultResources",
    "new_git_sync_id",
    "new_object_id",
    # policies
    "PAGE_TO_ACTION_PERMISSIONS",
    "Permission",
    "Policy",
    "groups_granted",
    "inherit_policies",
    # contexts
    "Context",
    "Module",
    "Page",
    # artifacts
    "Application",
    "Artifact",
    "GitArtifactMetadata",
    "Package",
    # resources
    "ActionCollection",
    "ActionCollectionDTO",
    # enums
    "CreatorContextType",
    "EntityType",
    "Visibility",
]
