"""Branch-independent identity for importable resources."""

from __future__ import annotations

from .defaults import (
    fill_collection_default_ids,
    fill_collection_dto_default_ids,
    merge_given_default_ids,
)
from .service import (
    ACTION_COLLECTION_DEFAULTS,
    ACTION_COLLECTION_DTO_DEFAULTS,
    DefaultResourcesService,
    HasDefaultResources,
)

__all__ = [
    "ACTION_COLLECTION_DEFAULTS",
    "ACTION_COLLECTION_DTO_DEFAULTS",
    "DefaultResourcesService",
    "HasDefaultResources",
    "fill_collection_default_ids",
    "fill_collection_dto_default_ids",
    "merge_given_default_ids",
]
