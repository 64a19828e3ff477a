"""Branch-independent identity of a resource and its owning chain."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Final

CANONICAL_ID_FIELDS: Final[tuple[str, ...]] = (
    "application_id",
    "page_id",
    "collection_id",
    "action_id",
)

# Export layout; must stay stable for previously exported artifacts.
MANIFEST_FIELD_NAMES: Final[dict[str, str]] = {
    "application_id": "applicationId",
    "page_id": "pageId",
    "collection_id": "collectionId",
    "action_id": "actionId",
    "branch_name": "branchName",
}


@dataclass(slots=True, kw_only=True)
class DefaultResources:
    """Canonical ids shared by every branch copy of the same logical resource.

    Storage ids differ per branch; these do not. The origin branch defines them
    and every other branch inherits them verbatim.
    """

    application_id: str | None = None
    page_id: str | None = None
    collection_id: str | None = None
    action_id: str | None = None
    branch_name: str | None = None

    def copy(self) -> DefaultResources:
        return replace(self)

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in CANONICAL_ID_FIELDS)

    def overlay(self, given: DefaultResources | None) -> DefaultResources:
        """Return a copy where every non-empty canonical id of ``given`` wins."""

        merged = self.copy()
        if given is None:
            return merged
        for name in CANONICAL_ID_FIELDS:
            value = getattr(given, name)
            if value:
                setattr(merged, name, value)
        return merged

    def as_manifest(self) -> dict[str, str]:
        return {
            MANIFEST_FIELD_NAMES[item.name]: value
            for item in fields(self)
            if (value := getattr(self, item.name)) is not None
        }
