"""Per-kind driver of the import reconciliation state machine.

Every incoming resource ends in exactly one state:

- ``SKIPPED``: its parent context did not resolve; nothing was changed
- ``DENIED``: the permission gate rejected it; no identity was assigned
- ``UPDATED``: a resource with the same ``git_sync_id`` already lives in the
  target artifact and took over the incoming payload
- ``CREATED``: it received storage id, policies, ``git_sync_id`` and its
  branch-aware default resources

Resources are processed in manifest order. Persistence is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from artifact_sync.config import DenialPolicy, ImportConfig

from .context import cancellable
from .errors import AccessDeniedError
from .locks import DEFAULT_IMPORT_LOCKS, ArtifactImportLocks
from .renames import rename_contexts

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence

    from artifact_sync.domain.model import Auditable, Context

    from .context import CancellationToken, ImportContext, MappedImportableResources
    from .strategy import ArtifactImportStrategy, VersionedArtifact

log = getLogger(__name__)


class ResourceStatus(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    DENIED = "denied"


@dataclass(kw_only=True)
class ResourceOutcome[TResource]:
    resource: TResource
    status: ResourceStatus
    context: Context | None = None
    reason: str | None = None


@dataclass
class ReconciliationResult[TResource]:
    """Outcomes of one pass, in manifest order."""

    outcomes: list[ResourceOutcome[TResource]] = field(
        default_factory=list["ResourceOutcome[TResource]"]
    )

    def with_status(self, status: ResourceStatus) -> tuple[TResource, ...]:
        return tuple(outcome.resource for outcome in self.outcomes if outcome.status is status)

    @property
    def to_insert(self) -> tuple[TResource, ...]:
        return self.with_status(ResourceStatus.CREATED)

    @property
    def to_update(self) -> tuple[TResource, ...]:
        return self.with_status(ResourceStatus.UPDATED)

    @property
    def skipped(self) -> tuple[TResource, ...]:
        return self.with_status(ResourceStatus.SKIPPED)

    @property
    def denied(self) -> tuple[TResource, ...]:
        return self.with_status(ResourceStatus.DENIED)

    def counts(self) -> dict[ResourceStatus, int]:
        totals = dict.fromkeys(ResourceStatus, 0)
        for outcome in self.outcomes:
            totals[outcome.status] += 1
        return totals


def index_by_git_sync_id[TResource: Auditable](
    resources: Iterable[TResource],
    wanted: Collection[str],
) -> dict[str, TResource]:
    """Keep only resources whose ``git_sync_id`` is in ``wanted``.

    Stops consuming ``resources`` once every wanted id was found; the first
    match per id wins.
    """

    found: dict[str, TResource] = {}
    if not wanted:
        return found
    iterator = iter(resources)
    try:
        for resource in iterator:
            git_sync_id = resource.audit.git_sync_id
            if git_sync_id is None or git_sync_id not in wanted or git_sync_id in found:
                continue
            found[git_sync_id] = resource
            if len(found) == len(wanted):
                break
    finally:
        close = getattr(iterator, "close", None)
        if close is not None:
            close()
    return found


@dataclass
class ResourceReconciler[TResource: Auditable, TDto, TArtifact: VersionedArtifact]:
    """Run the reconciliation state machine for one resource kind."""

    strategy: ArtifactImportStrategy[TResource, TDto, TArtifact]
    config: ImportConfig = field(default_factory=ImportConfig)
    locks: ArtifactImportLocks = field(default_factory=lambda: DEFAULT_IMPORT_LOCKS)

    def reconcile(
        self,
        resources: Sequence[TResource],
        *,
        artifact: object,
        import_ctx: ImportContext,
        resource_maps: MappedImportableResources,
    ) -> ReconciliationResult[TResource]:
        target = self.strategy.check_artifact(artifact)
        artifact_id = target.id
        if artifact_id is None:
            raise ValueError("artifact must be persisted before resources are imported into it")

        result: ReconciliationResult[TResource] = ReconciliationResult()
        with self.locks.hold(artifact_id):
            rename_contexts(self.strategy, resources, resource_maps.context_renames)
            existing, siblings = self._index_existing(
                resources, target, artifact_id, import_ctx.cancellation
            )
            fallback = target.fallback_context_ref
            for resource in resources:
                import_ctx.cancellation.raise_if_cancelled()
                outcome = self._reconcile_one(
                    resource,
                    artifact=target,
                    import_ctx=import_ctx,
                    resource_maps=resource_maps,
                    existing=existing,
                    siblings=siblings,
                    fallback=fallback,
                )
                result.outcomes.append(outcome)

        counts = result.counts()
        log.info(
            "Reconciled %d %s resources into %s: %d created, %d updated, %d skipped, %d denied",
            len(result.outcomes),
            self.strategy.resource_type,
            artifact_id,
            counts[ResourceStatus.CREATED],
            counts[ResourceStatus.UPDATED],
            counts[ResourceStatus.SKIPPED],
            counts[ResourceStatus.DENIED],
        )
        return result

    def _index_existing(
        self,
        resources: Sequence[TResource],
        artifact: TArtifact,
        artifact_id: str,
        token: CancellationToken,
    ) -> tuple[dict[str, TResource], dict[str, TResource]]:
        wanted = {
            git_sync_id
            for resource in resources
            if (git_sync_id := resource.audit.git_sync_id) is not None
        }
        current_resources = self.strategy.get_existing_resources_in_current_artifact(artifact_id)
        existing = index_by_git_sync_id(cancellable(current_resources, token), wanted)
        default_artifact_id = artifact.canonical_id
        if artifact.git_metadata is None or default_artifact_id is None:
            return existing, {}
        siblings = index_by_git_sync_id(
            cancellable(
                self.strategy.get_existing_resources_in_other_branches(
                    default_artifact_id, artifact_id
                ),
                token,
            ),
            wanted - existing.keys(),
        )
        return existing, siblings

    def _reconcile_one(
        self,
        resource: TResource,
        *,
        artifact: TArtifact,
        import_ctx: ImportContext,
        resource_maps: MappedImportableResources,
        existing: dict[str, TResource],
        siblings: dict[str, TResource],
        fallback: str | None,
    ) -> ResourceOutcome[TResource]:
        views = self.strategy.get_resource_dtos(resource)
        if not views:
            return ResourceOutcome(
                resource=resource, status=ResourceStatus.SKIPPED, reason="no_views"
            )
        context = self.strategy.update_context_in_resource(
            views[0], resource_maps.context_map, fallback
        )
        if context is None:
            log.debug(
                "Skipping %s %s: parent context not resolved",
                self.strategy.resource_type,
                resource.audit.git_sync_id,
            )
            return ResourceOutcome(
                resource=resource, status=ResourceStatus.SKIPPED, reason="unresolved_context"
            )
        for view in views[1:]:
            self.strategy.update_context_in_resource(view, resource_maps.context_map, fallback)

        git_sync_id = resource.audit.git_sync_id
        try:
            current = existing.get(git_sync_id) if git_sync_id is not None else None
            if current is not None:
                updated = self.strategy.update_existing_resource(import_ctx, current, resource)
                return ResourceOutcome(
                    resource=updated, status=ResourceStatus.UPDATED, context=context
                )
            sibling = siblings.get(git_sync_id) if git_sync_id is not None else None
            self.strategy.create_new_resource(import_ctx, resource, context)
            self.strategy.populate_default_resources(
                import_ctx, resource_maps, artifact, sibling, resource
            )
        except AccessDeniedError as exc:
            if self.config.denial_policy is DenialPolicy.ABORT_IMPORT:
                raise
            log.warning("Rejected %s: %s", self.strategy.resource_type, exc)
            return ResourceOutcome(
                resource=resource, status=ResourceStatus.DENIED, context=context, reason=str(exc)
            )
        return ResourceOutcome(resource=resource, status=ResourceStatus.CREATED, context=context)
