"""Failures surfaced by import reconciliation.

An unresolvable parent context is not an error: importers signal it by
returning ``None`` and the resource is skipped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from artifact_sync.domain.model import EntityType


class ArtifactImportError(RuntimeError):
    """Base class for import reconciliation failures."""


class AccessDeniedError(ArtifactImportError):
    """The acting principal may not create or edit a resource under this parent."""

    def __init__(self, entity_type: EntityType | str, entity_id: str | None) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"Unable to find {entity_type} {entity_id}")


class MalformedReferenceError(ArtifactImportError, TypeError):
    """A reference resolved to a context or artifact of the wrong kind."""

    def __init__(self, expected: EntityType | str, actual: object) -> None:
        self.expected = expected
        self.actual = actual
        actual_kind = getattr(actual, "entity_type", type(actual).__name__)
        super().__init__(f"Expected a {expected} reference, got {actual_kind}")


class ImportCancelledError(ArtifactImportError):
    """Cancellation was requested while the import pass was running."""


class ConcurrentImportError(ArtifactImportError):
    """Another import into the same artifact is already running."""

    def __init__(self, artifact_id: str) -> None:
        self.artifact_id = artifact_id
        super().__init__(f"An import into artifact {artifact_id} is already in progress")
