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
"""Property value resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from beanforge.container.bean import BeanRecord, CollectionSpec, PropertyRecord
from beanforge.container.collection_builder import build_collection, effective_items
from beanforge.container.exceptions import (
    CollectionSpecInvalidError,
    CollectionTypeMissingError,
    MapKeyMissingError,
    UndefinedPropertyKindError,
    UnknownBeanReferenceError,
)
from beanforge.container.types import CollectionKind, PropertyKind

if TYPE_CHECKING:
    from beanforge.container.engine import InflationEngine


class PropertyResolver:
    """Computes the concrete value of a property record.

    References and nested beans recurse into the engine; collections gather
    their (possibly merged) items and are materialized by the collection
    builder.
    """

    def __init__(self, engine: InflationEngine) -> None:
        self._engine = engine

    def resolve(self, record: BeanRecord, prop: PropertyRecord, *, inherited: bool = True) -> Any:
        """Resolve *prop* in the context of its owning *record*.

        ``inherited`` is false for collection items, whose nested collections
        never merge with an ancestor.
        """
        tag = record.info_tag
        if prop.kind is PropertyKind.SIMPLE:
            return prop.value

        if prop.kind is PropertyKind.REFERENCE:
            target = prop.value
            if target is None or not str(target).strip():
                raise UnknownBeanReferenceError("", required_by=tag, prop=prop.name)
            return self._engine.inflate(str(target), required_by=tag, prop=prop.name)

        if prop.kind is PropertyKind.BEAN:
            if not isinstance(prop.value, BeanRecord):
                raise UndefinedPropertyKindError(tag, prop.name, "missing nested bean")
            return self._engine.inflate_record(prop.value)

        if prop.kind is PropertyKind.COLLECTION:
            return self._resolve_collection(record, prop, inherited)

        raise UndefinedPropertyKindError(tag, prop.name)

    def _resolve_collection(self, record: BeanRecord, prop: PropertyRecord, inherited: bool) -> Any:
        tag = record.info_tag
        spec = prop.value
        if not isinstance(spec, CollectionSpec) or spec.kind is CollectionKind.UNDEFINED:
            raise CollectionSpecInvalidError(tag, prop.name)

        items: list[PropertyRecord] | None = None
        if inherited and prop.name is not None and record.get_property(prop.name) is prop:
            items = effective_items(record, prop.name, self._engine.parent_of)
        if items is None:
            items = list(spec.items)

        lookup = self._engine.lookup
        key_type = lookup.find(spec.key_type)
        value_type = lookup.find(spec.value_type)
        if key_type is None and spec.kind is CollectionKind.MAP:
            raise MapKeyMissingError(tag, prop.name)
        if value_type is None:
            raise CollectionTypeMissingError(tag, prop.name)

        return build_collection(
            spec,
            items,
            key_type,
            value_type,
            lambda item: self.resolve(record, item, inherited=False),
            tag=tag,
            prop=prop.name,
        )
