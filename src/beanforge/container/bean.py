# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Bean records: declarative descriptions of the objects to inflate."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from beanforge.container.types import CollectionKind, PropertyKind, Scope


@dataclass(eq=False)
class CollectionSpec:
    """Items and element types of a collection property.

    For ``MAP`` collections each item's ``name`` is the map key; for the other
    kinds the name is only a positional tag.
    """

    kind: CollectionKind = CollectionKind.UNDEFINED
    merge: bool = False
    key_type: str | None = None
    value_type: str | None = None
    items: list[PropertyRecord] = field(default_factory=list)


@dataclass(eq=False)
class PropertyRecord:
    """One named value of a bean, or one item of a collection."""

    name: str | None = None
    kind: PropertyKind = PropertyKind.UNDEFINED
    value: Any = None

    @classmethod
    def simple(cls, name: str | None, value: Any) -> PropertyRecord:
        return cls(name=name, kind=PropertyKind.SIMPLE, value=value)

    @classmethod
    def reference(cls, name: str | None, bean_id: str) -> PropertyRecord:
        return cls(name=name, kind=PropertyKind.REFERENCE, value=bean_id)

    @classmethod
    def bean(cls, name: str | None, record: BeanRecord) -> PropertyRecord:
        return cls(name=name, kind=PropertyKind.BEAN, value=record)

    @classmethod
    def collection(cls, name: str | None, spec: CollectionSpec) -> PropertyRecord:
        return cls(name=name, kind=PropertyKind.COLLECTION, value=spec)


@dataclass(eq=False)
class BeanRecord:
    """Declarative description of one object to construct.

    ``singleton_instance`` is populated at most once, under ``lock``, when a
    singleton-scoped record is first inflated successfully.
    """

    id: str | None = None
    parent_id: str | None = None
    is_abstract: bool = False
    class_name: str | None = None
    scope: Scope = Scope.SINGLETON
    properties: list[PropertyRecord] = field(default_factory=list)
    factory: PropertyRecord | None = None
    assign: Any = None
    singleton_instance: Any = field(default=None, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def info_tag(self) -> str | None:
        """Label used in error messages: the id, else the class name."""
        return self.id if self.id and self.id.strip() else self.class_name

    def get_property(self, name: str) -> PropertyRecord | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None
