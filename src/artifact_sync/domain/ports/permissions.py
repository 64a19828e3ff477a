"""Permission gate consumed by importers.

Policy evaluation lives outside this package; importers only rely on the
pass/fail answers below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from artifact_sync.domain.model import Permission, groups_granted

if TYPE_CHECKING:
    from artifact_sync.domain.model import Auditable, Page


@runtime_checkable
class PermissionProvider(Protocol):
    def can_create_action(self, page: Page) -> bool: ...

    def has_edit_permission(self, resource: Auditable) -> bool: ...


class AllowAllPermissionProvider:
    """Grants everything; used for system-initiated imports."""

    def can_create_action(self, page: Page) -> bool:
        _ = page
        return True

    def has_edit_permission(self, resource: Auditable) -> bool:
        _ = resource
        return True


@dataclass(slots=True)
class PolicyPermissionProvider:
    """Answers from the policies on the resource and the principal's groups."""

    permission_groups: frozenset[str] = field(default_factory=frozenset[str])
    create_action_permission: str = Permission.PAGE_CREATE_PAGE_ACTIONS
    edit_permission: str = Permission.MANAGE_ACTIONS

    def can_create_action(self, page: Page) -> bool:
        granted = groups_granted(page.audit.policies, self.create_action_permission)
        return not granted.isdisjoint(self.permission_groups)

    def has_edit_permission(self, resource: Auditable) -> bool:
        granted = groups_granted(resource.audit.policies, self.edit_permission)
        return not granted.isdisjoint(self.permission_groups)


if TYPE_CHECKING:
    _allow_all_check: PermissionProvider = AllowAllPermissionProvider()
    _policy_check: PermissionProvider = PolicyPermissionProvider()
