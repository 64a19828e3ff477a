"""Parent containers a resource can be attached to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .audit import AuditedResource
from .default_resources import DefaultResources
from .enums import EntityType


@dataclass(eq=False, kw_only=True)
class Page(AuditedResource):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PAGE

    name: str
    application_id: str | None = None
    default_resources: DefaultResources = field(default_factory=DefaultResources)

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def canonical_id(self) -> str | None:
        return self.default_resources.page_id or self.id


@dataclass(eq=False, kw_only=True)
class Module(AuditedResource):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.MODULE

    name: str
    package_id: str | None = None
    origin_module_id: str | None = None

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def canonical_id(self) -> str | None:
        return self.origin_module_id or self.id


# Closed set; strategies narrow to the variant they own.
type Context = Page | Module
