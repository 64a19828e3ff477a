"""Import reconciliation for action collections of an application."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from artifact_sync.domain.identity import (
    ACTION_COLLECTION_DEFAULTS,
    ACTION_COLLECTION_DTO_DEFAULTS,
    DefaultResourcesService,
    fill_collection_default_ids,
    fill_collection_dto_default_ids,
    merge_given_default_ids,
)
from artifact_sync.domain.model import (
    ActionCollection,
    ActionCollectionDTO,
    Application,
    CreatorContextType,
    DefaultResources,
    EntityType,
    Page,
    inherit_policies,
    new_git_sync_id,
)

from .errors import AccessDeniedError, MalformedReferenceError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from artifact_sync.domain.model import Context
    from artifact_sync.domain.ports import ActionCollectionRepository

    from .context import ImportContext, MappedImportableResources

log = getLogger(__name__)


def _require_page(context: object) -> Page:
    if not isinstance(context, Page):
        raise MalformedReferenceError(EntityType.PAGE, context)
    return context


def _require_application(artifact: object) -> Application:
    if not isinstance(artifact, Application):
        raise MalformedReferenceError(EntityType.APPLICATION, artifact)
    return artifact


@dataclass(slots=True)
class ActionCollectionImportStrategy:
    """Matches imported action collections against stored ones and links them to pages."""

    repository: ActionCollectionRepository
    defaults_service: DefaultResourcesService[ActionCollection] = ACTION_COLLECTION_DEFAULTS
    dto_defaults_service: DefaultResourcesService[ActionCollectionDTO] = (
        ACTION_COLLECTION_DTO_DEFAULTS
    )

    @property
    def resource_type(self) -> EntityType:
        return EntityType.ACTION_COLLECTION

    def check_artifact(self, artifact: object) -> Application:
        return _require_application(artifact)

    def get_imported_context_names(self, resource_maps: MappedImportableResources) -> list[str]:
        names: list[str] = []
        seen: set[int] = set()
        for context in resource_maps.context_map.values():
            # several references may point at the same page
            if id(context) in seen:
                continue
            seen.add(id(context))
            names.append(_require_page(context).name)
        return names

    def rename_context_in_importable_resources(
        self,
        resources: Sequence[ActionCollection],
        old_name: str,
        new_name: str,
    ) -> None:
        for collection in resources:
            for view in (collection.unpublished_collection, collection.published_collection):
                if view is not None and view.page_id == old_name:
                    view.page_id = new_name

    def get_existing_resources_in_current_artifact(
        self,
        artifact_id: str,
    ) -> Iterator[ActionCollection]:
        return self.repository.find_by_application_id(artifact_id)

    def get_existing_resources_in_other_branches(
        self,
        default_artifact_id: str,
        current_artifact_id: str,
    ) -> Iterator[ActionCollection]:
        for collection in self.repository.find_by_default_application_id(default_artifact_id):
            if collection.application_id != current_artifact_id:
                yield collection

    def get_resource_dtos(self, resource: ActionCollection) -> tuple[ActionCollectionDTO, ...]:
        views: list[ActionCollectionDTO] = []
        if resource.unpublished_collection is not None:
            views.append(resource.unpublished_collection)
        published = resource.published_collection
        if published is not None and published.name is not None:
            views.append(published)
        return tuple(views)

    def update_context_in_resource(
        self,
        resource_dto: ActionCollectionDTO,
        context_map: Mapping[str, Context],
        fallback_context_id: str | None,
    ) -> Page | None:
        reference = resource_dto.page_id or fallback_context_id
        if not reference:
            return None
        context = context_map.get(reference)
        if context is None:
            log.debug("No page resolved for reference %r of %r", reference, resource_dto.name)
            return None
        page = _require_page(context)

        resource_dto.page_id = page.id
        resource_dto.default_resources = DefaultResources(page_id=page.canonical_id)
        return page

    def populate_default_resources(
        self,
        import_ctx: ImportContext,
        resource_maps: MappedImportableResources,
        artifact: Application,
        sibling_branch_resource: ActionCollection | None,
        resource: ActionCollection,
    ) -> None:
        _ = resource_maps
        application = _require_application(artifact)
        given = resource.default_resources
        resource.application_id = application.id

        git_metadata = application.git_metadata
        if git_metadata is None:
            # not version controlled: the resource is the origin of its own identity
            computed = DefaultResources(application_id=application.id, collection_id=resource.id)
            branch_name = None
        elif sibling_branch_resource is not None:
            self.defaults_service.set_from_other_branch(
                resource, sibling_branch_resource, import_ctx.branch_name
            )
            self._transplant_views(resource, sibling_branch_resource, import_ctx.branch_name)
            computed = resource.default_resources or DefaultResources()
            branch_name = import_ctx.branch_name
        else:
            # first collection persisted with this git_sync_id on any branch here
            computed = DefaultResources(
                application_id=git_metadata.default_artifact_id,
                collection_id=resource.id,
            )
            branch_name = import_ctx.branch_name

        resource.default_resources = merge_given_default_ids(
            computed, given, branch_name=branch_name
        )

    def _transplant_views(
        self,
        resource: ActionCollection,
        sibling: ActionCollection,
        branch_name: str | None,
    ) -> None:
        pairs = (
            (resource.unpublished_collection, sibling.unpublished_collection),
            (resource.published_collection, sibling.published_collection),
        )
        for target_view, source_view in pairs:
            if target_view is None or source_view is None:
                continue
            self.dto_defaults_service.set_from_other_branch(target_view, source_view, branch_name)

    def create_new_resource(
        self,
        import_ctx: ImportContext,
        resource: ActionCollection,
        resolved_context: Context,
    ) -> None:
        page = _require_page(resolved_context)
        if not import_ctx.permission_provider.can_create_action(page):
            raise AccessDeniedError(page.entity_type, page.id)

        audit = resource.audit
        audit.update_for_bulk_write_operation()
        if audit.created_by is None and import_ctx.acting_user is not None:
            audit.created_by = import_ctx.acting_user
        if import_ctx.acting_user is not None:
            audit.modified_by = import_ctx.acting_user
        audit.policies = inherit_policies(page.audit.policies)

        # the target artifact owns the resource and prefixes its sync id
        resource.application_id = import_ctx.artifact_id
        for view in self.get_resource_dtos(resource):
            if view.context_type is None:
                view.context_type = CreatorContextType.PAGE
            fill_collection_dto_default_ids(view, import_ctx.branch_name)

        if resource.git_sync_id is None:
            audit.assign_git_sync_id(new_git_sync_id(resource.application_id))

    def update_existing_resource(
        self,
        import_ctx: ImportContext,
        existing: ActionCollection,
        incoming: ActionCollection,
    ) -> ActionCollection:
        if not import_ctx.permission_provider.has_edit_permission(existing):
            raise AccessDeniedError(existing.entity_type, existing.id)

        existing.take_payload_from(incoming)
        existing.audit.update_for_bulk_write_operation()
        if import_ctx.acting_user is not None:
            existing.audit.modified_by = import_ctx.acting_user
        fill_collection_default_ids(existing, import_ctx.branch_name)
        return existing


if TYPE_CHECKING:
    from typing import cast

    from .strategy import ArtifactImportStrategy

    _strategy_check: ArtifactImportStrategy[ActionCollection, ActionCollectionDTO, Application] = (
        ActionCollectionImportStrategy(cast("ActionCollectionRepository", object()))
    )
