"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Typed-reference discriminator, also used as the kind name in error messages."""

    APPLICATION = "application"
    PACKAGE = "package"

    # Contexts:
    PAGE = "page"
    MODULE = "module"

    # Importable resources:
    ACTION_COLLECTION = "actionCollection"
    ACTION = "action"


class Visibility(StrEnum):
    """Serialization view a field belongs to."""

    PUBLIC = "public"
    INTERNAL = "internal"


class CreatorContextType(StrEnum):
    PAGE = "PAGE"
    MODULE = "MODULE"
