"""Identifier generation."""

from __future__ import annotations

from uuid import uuid4


def new_object_id() -> str:
    """Return a fresh storage id (unique, not secret)."""

    return uuid4().hex


def new_git_sync_id(owner_id: str | None) -> str:
    """Build a sync id in the ``<ownerId>_<freshUniqueId>`` shape."""

    return f"{owner_id}_{new_object_id()}"
