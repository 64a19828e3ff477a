"""State shared between the import orchestrator and resource importers."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artifact_sync.domain.ports import AllowAllPermissionProvider

from .errors import ImportCancelledError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from artifact_sync.domain.model import Context
    from artifact_sync.domain.ports import PermissionProvider


@dataclass(slots=True)
class CancellationToken:
    """Cooperative cancellation flag, safe to set from another thread."""

    _event: threading.Event = field(default_factory=threading.Event, repr=False)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ImportCancelledError("Import was cancelled")


def cancellable[T](items: Iterable[T], token: CancellationToken | None) -> Iterator[T]:
    """Yield from ``items`` until ``token`` is cancelled, then close the source."""

    iterator = iter(items)
    try:
        while True:
            if token is not None:
                token.raise_if_cancelled()
            try:
                item = next(iterator)
            except StopIteration:
                return
            yield item
    finally:
        close = getattr(iterator, "close", None)
        if close is not None:
            close()


@dataclass(slots=True, kw_only=True)
class ImportContext:
    """Per-pass settings provided by the orchestrator."""

    artifact_id: str
    branch_name: str | None = None
    permission_provider: PermissionProvider = field(default_factory=AllowAllPermissionProvider)
    cancellation: CancellationToken = field(default_factory=CancellationToken)
    acting_user: str | None = None


@dataclass(slots=True)
class MappedImportableResources:
    """Contexts already resolved for this pass.

    ``context_map`` is keyed by the reference resources carry in the manifest
    (the context's name). ``context_renames`` lists ``(old, new)`` name changes
    made while importing contexts, in manifest order.
    """

    context_map: dict[str, Context] = field(default_factory=dict[str, "Context"])
    context_renames: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])

    def record_rename(self, old_name: str, new_name: str) -> None:
        self.context_renames.append((old_name, new_name))
