"""Artifact export manifest adapter."""

from __future__ import annotations

from .export import export_action_collection, export_manifest
from .schema import (
    ActionCollectionDTOPayload,
    ActionCollectionPayload,
    ArtifactManifest,
    DefaultResourcesPayload,
)
from .translator import (
    collection_dto_payload,
    default_resources_payload,
    iter_action_collections,
    parse_manifest,
    translate_action_collection,
    translate_collection_dto,
    translate_default_resources,
)

__all__ = [
    "ActionCollectionDTOPayload",
    "ActionCollectionPayload",
    "ArtifactManifest",
    "DefaultResourcesPayload",
    "collection_dto_payload",
    "default_resources_payload",
    "export_action_collection",
    "export_manifest",
    "iter_action_collections",
    "parse_manifest",
    "translate_action_collection",
    "translate_collection_dto",
    "translate_default_resources",
]
