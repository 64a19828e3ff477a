"""Audit and identity record embedded in every importable resource.

Resources do not inherit audit state; they carry an ``AuditRecord`` (see
``AuditedResource``) and expose the ``Auditable`` capability. Each record field
is tagged with a ``Visibility`` so exporters can tell which values may cross an
instance boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Final, Protocol, runtime_checkable

from .enums import Visibility
from .ids import new_object_id

if TYPE_CHECKING:
    from .policy import Policy

VISIBILITY: Final[str] = "visibility"


def _public(**kwargs: Any) -> Any:
    return field(metadata={VISIBILITY: Visibility.PUBLIC}, **kwargs)


def _internal(**kwargs: Any) -> Any:
    return field(metadata={VISIBILITY: Visibility.INTERNAL}, **kwargs)


@dataclass(eq=False, kw_only=True)
class AuditRecord:
    id: str | None = _public(default=None)

    created_at: datetime | None = _internal(default=None)
    updated_at: datetime | None = _internal(default=None)
    created_by: str | None = _internal(default=None)
    modified_by: str | None = _internal(default=None)

    # the only soft-delete signal
    deleted_at: datetime | None = _public(default=None)

    policies: set[Policy] | None = _internal(default_factory=set["Policy"])
    # transient, computed per request and never persisted
    user_permissions: set[str] | None = _internal(default_factory=set[str])

    git_sync_id: str | None = _public(default=None)

    def is_new(self) -> bool:
        return self.id is None

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def deleted(self) -> bool:
        """Legacy boolean view for reflection-based tooling; derived from ``deleted_at``."""
        return self.is_deleted()

    def mark_deleted(self, *, now: datetime | None = None) -> None:
        if self.deleted_at is None:
            self.deleted_at = now or datetime.now(tz=UTC)

    def assign_git_sync_id(self, git_sync_id: str) -> None:
        if self.git_sync_id == git_sync_id:
            return
        if self.git_sync_id is not None and self.id is not None:
            raise ValueError("git_sync_id cannot change once the entity has an id")
        self.git_sync_id = git_sync_id

    def sanitise_to_export_db_object(self) -> None:
        """Drop audit and permission data that must not leave this instance."""

        self.created_at = None
        self.updated_at = None
        self.user_permissions = None
        self.policies = None
        self.created_by = None
        self.modified_by = None

    def make_pristine(self) -> None:
        """Prepare the record to be saved as a brand-new document.

        Policies are cleared in place; the container itself is kept.
        """

        self.id = None
        self.updated_at = None
        if self.policies is not None:
            self.policies.clear()

    def update_for_bulk_write_operation(self, *, now: datetime | None = None) -> None:
        """Backfill what a bulk insert will not generate: ``id`` and timestamps."""

        timestamp = now or datetime.now(tz=UTC)
        if self.id is None:
            self.id = new_object_id()
        if self.created_at is None:
            self.created_at = timestamp
        self.updated_at = timestamp


def field_names_with_visibility(visibility: Visibility) -> tuple[str, ...]:
    return tuple(
        record_field.name
        for record_field in fields(AuditRecord)
        if record_field.metadata.get(VISIBILITY) is visibility
    )


def public_field_names() -> tuple[str, ...]:
    return field_names_with_visibility(Visibility.PUBLIC)


@runtime_checkable
class Auditable(Protocol):
    """Capability: has an identity and lifecycle metadata."""

    @property
    def audit(self) -> AuditRecord: ...

    @property
    def id(self) -> str | None: ...

    def is_new(self) -> bool: ...

    def is_deleted(self) -> bool: ...


@dataclass(eq=False, kw_only=True)
class AuditedResource:
    """Capability: carries an embedded ``AuditRecord`` and delegates identity to it."""

    audit: AuditRecord = field(default_factory=AuditRecord, repr=False)

    @property
    def id(self) -> str | None:
        return self.audit.id

    @id.setter
    def id(self, value: str | None) -> None:
        self.audit.id = value

    @property
    def git_sync_id(self) -> str | None:
        return self.audit.git_sync_id

    def is_new(self) -> bool:
        return self.audit.is_new()

    def is_deleted(self) -> bool:
        return self.audit.is_deleted()
