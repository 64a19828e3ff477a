"""Contract every resource-kind importer implements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from artifact_sync.domain.model import (
        Auditable,
        Context,
        EntityType,
        GitArtifactMetadata,
    )

    from .context import ImportContext, MappedImportableResources


class VersionedArtifact(Protocol):
    """What importers need to know about the artifact being imported into."""

    @property
    def id(self) -> str | None: ...

    @property
    def git_metadata(self) -> GitArtifactMetadata | None: ...

    @property
    def canonical_id(self) -> str | None: ...

    @property
    def fallback_context_ref(self) -> str | None: ...


class ArtifactImportStrategy[
    TResource: Auditable,
    TDto,
    TArtifact: VersionedArtifact,
](Protocol):
    """Reconciles one resource kind of an import manifest with stored state.

    The orchestrator calls these operations; ``ResourceReconciler`` sequences
    them per resource.
    """

    @property
    def resource_type(self) -> EntityType: ...

    def check_artifact(self, artifact: object) -> TArtifact:
        """Narrow ``artifact`` to the kind this importer handles or raise."""
        ...

    def get_imported_context_names(self, resource_maps: MappedImportableResources) -> list[str]:
        """Names of the distinct contexts already resolved for this artifact."""
        ...

    def rename_context_in_importable_resources(
        self,
        resources: Sequence[TResource],
        old_name: str,
        new_name: str,
    ) -> None: ...

    def get_existing_resources_in_current_artifact(
        self,
        artifact_id: str,
    ) -> Iterator[TResource]: ...

    def get_existing_resources_in_other_branches(
        self,
        default_artifact_id: str,
        current_artifact_id: str,
    ) -> Iterator[TResource]: ...

    def get_resource_dtos(self, resource: TResource) -> tuple[TDto, ...]:
        """Views carrying a parent reference; the first one decides skipping."""
        ...

    def update_context_in_resource(
        self,
        resource_dto: TDto,
        context_map: Mapping[str, Context],
        fallback_context_id: str | None,
    ) -> Context | None:
        """Point ``resource_dto`` at its resolved parent, or return ``None`` untouched."""
        ...

    def populate_default_resources(
        self,
        import_ctx: ImportContext,
        resource_maps: MappedImportableResources,
        artifact: TArtifact,
        sibling_branch_resource: TResource | None,
        resource: TResource,
    ) -> None: ...

    def create_new_resource(
        self,
        import_ctx: ImportContext,
        resource: TResource,
        resolved_context: Context,
    ) -> None: ...

    def update_existing_resource(
        self,
        import_ctx: ImportContext,
        existing: TResource,
        incoming: TResource,
    ) -> TResource: ...
