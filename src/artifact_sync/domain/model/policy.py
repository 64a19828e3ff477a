"""Access-control policies attached to resources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class Permission(StrEnum):
    MANAGE_PAGES = "manage:pages"
    READ_PAGES = "read:pages"
    DELETE_PAGES = "delete:pages"
    PAGE_CREATE_PAGE_ACTIONS = "create:pageActions"

    MANAGE_ACTIONS = "manage:actions"
    READ_ACTIONS = "read:actions"
    EXECUTE_ACTIONS = "execute:actions"
    DELETE_ACTIONS = "delete:actions"


@dataclass(frozen=True, slots=True)
class Policy:
    """Grants ``permission`` to every member of ``permission_groups``."""

    permission: str
    permission_groups: frozenset[str] = frozenset()


PAGE_TO_ACTION_PERMISSIONS: Final[Mapping[str, tuple[Permission, ...]]] = {
    Permission.MANAGE_PAGES: (Permission.MANAGE_ACTIONS,),
    Permission.READ_PAGES: (Permission.READ_ACTIONS, Permission.EXECUTE_ACTIONS),
    Permission.DELETE_PAGES: (Permission.DELETE_ACTIONS,),
}


def inherit_policies(
    parent_policies: Iterable[Policy] | None,
    mapping: Mapping[str, tuple[Permission, ...]] = PAGE_TO_ACTION_PERMISSIONS,
) -> set[Policy]:
    """Derive child policies from the parent's, merging groups per child permission."""

    groups_by_permission: dict[str, set[str]] = {}
    for policy in parent_policies or ():
        for child_permission in mapping.get(policy.permission, ()):
            bucket = groups_by_permission.setdefault(str(child_permission), set())
            bucket.update(policy.permission_groups)
    return {
        Policy(permission=permission, permission_groups=frozenset(groups))
        for permission, groups in groups_by_permission.items()
    }


def groups_granted(policies: Iterable[Policy] | None, permission: str) -> frozenset[str]:
    granted: set[str] = set()
    for policy in policies or ():
        if policy.permission == permission:
            granted.update(policy.permission_groups)
    return frozenset(granted)
