"""Import reconciliation: match manifest resources with stored ones across branches."""

from __future__ import annotations

from .action_collections import ActionCollectionImportStrategy
from .context import (
    CancellationToken,
    ImportContext,
    MappedImportableResources,
    cancellable,
)
from .errors import (
    AccessDeniedError,
    ArtifactImportError,
    ConcurrentImportError,
    ImportCancelledError,
    MalformedReferenceError,
)
from .locks import DEFAULT_IMPORT_LOCKS, ArtifactImportLocks
from .reconciler import (
    ReconciliationResult,
    ResourceOutcome,
    ResourceReconciler,
    ResourceStatus,
    index_by_git_sync_id,
)
from .renames import next_available_name, plan_context_renames, rename_contexts
from .strategy import ArtifactImportStrategy, VersionedArtifact

__all__ = [
    "DEFAULT_IMPORT_LOCKS",
    "AccessDeniedError",
    "ActionCollectionImportStrategy",
    "ArtifactImportError",
    "ArtifactImportLocks",
    "ArtifactImportStrategy",
    "CancellationToken",
    "ConcurrentImportError",
    "ImportCancelledError",
    "ImportContext",
    "MalformedReferenceError",
    "MappedImportableResources",
    "ReconciliationResult",
    "ResourceOutcome",
    "ResourceReconciler",
    "ResourceStatus",
    "VersionedArtifact",
    "cancellable",
    "index_by_git_sync_id",
    "next_available_name",
    "plan_context_renames",
    "rename_contexts",
]
