from __future__ import annotations

import pytest

from artifact_sync.domain.importing import ArtifactImportLocks, ConcurrentImportError


def test_lock_is_held_only_inside_the_block() -> None:
    locks = ArtifactImportLocks()

    with locks.hold("app-1"):
        assert locks.is_importing("app-1")
        assert not locks.is_importing("app-2")

    assert not locks.is_importing("app-1")


def test_second_import_into_busy_artifact_fails() -> None:
    locks = ArtifactImportLocks()

    with locks.hold("app-1"):
        with pytest.raises(ConcurrentImportError) as exc:
            with locks.hold("app-1"):
                pass
        assert exc.value.artifact_id == "app-1"
        with locks.hold("app-2"):
            assert locks.is_importing("app-2")


def test_lock_is_released_after_errors() -> None:
    locks = ArtifactImportLocks()

    with pytest.raises(RuntimeError), locks.hold("app-1"):
        raise RuntimeError("boom")

    assert not locks.is_importing("app-1")
