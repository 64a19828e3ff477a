"""Domain port definitions for adapters."""

from __future__ import annotations

from .permissions import (
    AllowAllPermissionProvider,
    PermissionProvider,
    PolicyPermissionProvider,
)
from .persistence import ActionCollectionRepository, Repository
from .unit_of_work import (
    ImportRepositories,
    ImportUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ActionCollectionRepository",
    "AllowAllPermissionProvider",
    "ImportRepositories",
    "ImportUnitOfWork",
    "PermissionProvider",
    "PolicyPermissionProvider",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
