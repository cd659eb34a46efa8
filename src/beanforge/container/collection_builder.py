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
"""Collection materialization and inheritance-aware item merging."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from beanforge.container.bean import BeanRecord, CollectionSpec, PropertyRecord
from beanforge.container.exceptions import (
    CollectionSpecInvalidError,
    ConversionError,
    CyclicInheritanceError,
    MapKeyMissingError,
)
from beanforge.container.types import CollectionKind, PropertyKind
from beanforge.conversion.coercion import convert, is_instance, type_name

ValueResolver = Callable[[PropertyRecord], Any]
ParentLookup = Callable[[BeanRecord], BeanRecord | None]


def effective_items(record: BeanRecord, name: str, parent_of: ParentLookup) -> list[PropertyRecord] | None:
    """Items of collection property *name* on *record*, merged with ancestors.

    Merging only happens when the record's own spec opts in and the record
    has a parent. Maps keep the child's items first and append parent items
    whose key the child does not declare; lists, arrays and sets put the
    parent's items first.

    Returns ``None`` when *record* has no collection property called *name*.
    """
    chain: list[CollectionSpec] = []
    seen: list[BeanRecord] = []
    current: BeanRecord | None = record
    while current is not None:
        if any(current is r for r in seen):
            raise CyclicInheritanceError([str(r.info_tag) for r in seen] + [str(current.info_tag)])
        seen.append(current)
        prop = current.get_property(name)
        if prop is None or prop.kind is not PropertyKind.COLLECTION or not isinstance(prop.value, CollectionSpec):
            break
        chain.append(prop.value)
        if not prop.value.merge or not current.parent_id:
            break
        current = parent_of(current)

    if not chain:
        return None

    # fold from the furthest ancestor that contributed back down to the record
    items = list(chain[-1].items)
    for spec in reversed(chain[:-1]):
        own = list(spec.items)
        if spec.kind is CollectionKind.MAP:
            keys = {item.name for item in own}
            items = own + [item for item in items if item.name and item.name.strip() and item.name not in keys]
        else:
            items = items + own
    return items


def _coerce(handle: Any, value: Any) -> Any:
    converted = convert(handle, value)
    if converted is not None and not is_instance(handle, converted):
        raise ConversionError(type_name(handle), value, "not an instance of the collection type")
    return converted


def build_collection(
    spec: CollectionSpec,
    items: Sequence[PropertyRecord],
    key_type: Any,
    value_type: Any,
    resolve: ValueResolver,
    *,
    tag: str | None = None,
    prop: str | None = None,
) -> Any:
    """Materialize *items* as the container named by ``spec.kind``.

    ``MAP`` → ``dict``, ``LIST`` → ``list``, ``SET`` → ``set`` and ``ARRAY``
    → ``tuple``. Values are resolved with *resolve* and converted to
    *value_type*; map keys are the item names converted to *key_type*.

    Map keys are compared after conversion and the first item wins, so a
    child item (always listed before inherited ones) overrides a parent
    item whose key text differs but converts equal (``"1"`` and ``"01"``).
    """
    if spec.kind is CollectionKind.MAP:
        mapping: dict[Any, Any] = {}
        for item in items:
            if item.name is None or not str(item.name).strip():
                raise MapKeyMissingError(tag, prop, "map item missing a key")
            key = _coerce(key_type, item.name)
            if key in mapping:
                continue
            mapping[key] = _coerce(value_type, resolve(item))
        return mapping

    values = [_coerce(value_type, resolve(item)) for item in items]
    if spec.kind is CollectionKind.SET:
        try:
            return set(values)
        except TypeError as exc:
            raise CollectionSpecInvalidError(tag, prop, f"set items are not hashable: {exc}") from exc
    if spec.kind is CollectionKind.ARRAY:
        return tuple(values)
    return values
