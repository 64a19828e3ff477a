"""Serialization of import passes per artifact."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import ConcurrentImportError

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)


@dataclass(slots=True)
class ArtifactImportLocks:
    """Process-local registry of artifacts with an import in flight.

    A second pass into a busy artifact fails immediately instead of waiting.
    """

    _guard: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _active: set[str] = field(default_factory=set[str])

    def is_importing(self, artifact_id: str) -> bool:
        with self._guard:
            return artifact_id in self._active

    @contextmanager
    def hold(self, artifact_id: str) -> Iterator[None]:
        with self._guard:
            if artifact_id in self._active:
                log.warning("Rejected concurrent import into artifact %s", artifact_id)
                raise ConcurrentImportError(artifact_id)
            self._active.add(artifact_id)
        try:
            yield
        finally:
            with self._guard:
                self._active.discard(artifact_id)


DEFAULT_IMPORT_LOCKS = ArtifactImportLocks()
