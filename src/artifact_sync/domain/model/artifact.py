"""Version-controllable containers that own importable resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .audit import AuditedResource
from .enums import EntityType


@dataclass(frozen=True, slots=True)
class GitArtifactMetadata:
    """Branch metadata of a git-connected artifact.

    ``default_artifact_id`` is the id of the artifact every branch was forked
    from; it equals the artifact's own id on that origin branch.
    """

    default_artifact_id: str
    branch_name: str | None = None


@dataclass(eq=False, kw_only=True)
class _GitArtifact(AuditedResource):
    name: str
    workspace_id: str | None = None
    git_metadata: GitArtifactMetadata | None = None

    @property
    def canonical_id(self) -> str | None:
        if self.git_metadata is None:
            return self.id
        return self.git_metadata.default_artifact_id

    @property
    def fallback_context_ref(self) -> str | None:
        return None


@dataclass(eq=False, kw_only=True)
class Application(_GitArtifact):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.APPLICATION

    default_page_name: str | None = None

    @property
    def fallback_context_ref(self) -> str | None:
        return self.default_page_name


@dataclass(eq=False, kw_only=True)
class Package(_GitArtifact):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PACKAGE


type Artifact = Application | Package
