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
"""Mapping of structured documents (JSON, YAML) onto bean records.

Document shape::

    beans:
      - import: other.yaml                # or a list of paths / {path, optional}
      - id: pool
        class: app.pool.Pool
        parent: base_pool                 # also: abstract, scope, assign, id_merge
        factory: {static: create, params: [8, {value-ref: clock}]}
        properties:
          size: 4                         # plain scalar or null
          clock: {value-ref: clock}
          codec: {value-bean: {class: app.codec.Codec}}
          tags: {value-list: [a, b], merge: true, value-class-value: string}
          limits: {value-map: {low: 1}, value-class-key: string, value-class-value: int}

Scalars are kept as literal text (``true``, ``4``, ``0.5``) so every
notation hands the engine the same values.
"""

from __future__ import annotations

from typing import Any

from beanforge.container.bean import BeanRecord, CollectionSpec, PropertyRecord
from beanforge.container.exceptions import BeanDefinitionError
from beanforge.container.types import CollectionKind, PropertyKind
from beanforge.loaders.base import (
    FileContextLoader,
    LoadSession,
    assign_id,
    merge_target,
    new_record,
    parse_flag,
    parse_scope,
    scalar_text,
)

TAG_IMPORT = "import"
TAG_BEANS = "beans"
TAG_ID = "id"
TAG_ID_MERGE = "id_merge"
TAG_CLASS = "class"
TAG_FACTORY = "factory"
TAG_ASSIGN = "assign"
TAG_PARENT = "parent"
TAG_ABSTRACT = "abstract"
TAG_SCOPE = "scope"
TAG_PROPERTIES = "properties"
TAG_FACTORY_STATIC = "static"
TAG_FACTORY_PARAMS = "params"
TAG_IMPORT_PATH = "path"
TAG_IMPORT_OPTIONAL = "optional"
TAG_VALUE = "value"
TAG_VALUE_REF = "value-ref"
TAG_VALUE_BEAN = "value-bean"
TAG_MERGE = "merge"
TAG_CLASS_KEY = "value-class-key"
TAG_CLASS_VALUE = "value-class-value"

_COLLECTION_TAGS = {
    "value-list": CollectionKind.LIST,
    "value-array": CollectionKind.ARRAY,
    "value-set": CollectionKind.SET,
    "value-map": CollectionKind.MAP,
}


class StructuredContextLoader(FileContextLoader):
    """Loader for documents made of mappings, sequences and scalars."""

    def _merge_document(self, document: Any, session: LoadSession) -> None:
        source = self._source(session)
        if document is None:
            return
        if not isinstance(document, dict):
            raise BeanDefinitionError("Document root must be an object", source=source)

        beans = document.get(TAG_BEANS)
        if beans is None:
            return
        if not isinstance(beans, list):
            raise BeanDefinitionError(f"'{TAG_BEANS}' must be a list", source=source)

        for entry in beans:
            if not isinstance(entry, dict):
                continue
            if TAG_IMPORT in entry:
                for path, optional in self._import_targets(entry[TAG_IMPORT], source):
                    self._import(path, optional, session)
                continue
            record = self._target_record(entry, session)
            self._merge_bean(entry, record, session)

    def _import_targets(self, raw: Any, source: str | None) -> list[tuple[str, bool]]:
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            raise BeanDefinitionError(f"'{TAG_IMPORT}' must be a path or a list of paths", source=source)

        targets: list[tuple[str, bool]] = []
        for item in raw:
            if item is None:
                continue
            if isinstance(item, str):
                path, optional = item, False
            elif isinstance(item, dict) and isinstance(item.get(TAG_IMPORT_PATH), str):
                path = item[TAG_IMPORT_PATH]
                flag = item.get(TAG_IMPORT_OPTIONAL)
                optional = flag is not None and parse_flag(flag, TAG_IMPORT_OPTIONAL, source)
            else:
                raise BeanDefinitionError(f"Import entry {item!r} has no '{TAG_IMPORT_PATH}'", source=source)
            if path.strip():
                targets.append((path, optional))
        return targets

    @staticmethod
    def _target_record(entry: dict[str, Any], session: LoadSession) -> BeanRecord:
        if TAG_ID_MERGE in entry:
            return merge_target(session.context, entry[TAG_ID_MERGE], FileContextLoader._source(session))
        return new_record(session.context)

    def _merge_bean(self, entry: dict[str, Any], record: BeanRecord, session: LoadSession) -> None:
        context = session.context
        source = self._source(session)
        for key, value in entry.items():
            if key == TAG_ID and value is not None:
                assign_id(context, record, value)
            elif key == TAG_CLASS and value is not None and str(value).strip():
                record.class_name = str(value).strip()
            elif key == TAG_PARENT and value is not None and str(value).strip():
                record.parent_id = str(value).strip()
            elif key == TAG_ABSTRACT and value is not None:
                record.is_abstract = parse_flag(value, TAG_ABSTRACT, source)
            elif key == TAG_SCOPE and value is not None:
                record.scope = parse_scope(value, source)
            elif key == TAG_ASSIGN:
                record.assign = scalar_text(value)
            elif key == TAG_PROPERTIES and value is not None:
                if not isinstance(value, dict):
                    raise BeanDefinitionError(f"'{TAG_PROPERTIES}' must be an object", source=source)
                for name, raw in value.items():
                    prop = PropertyRecord(name=str(name))
                    context.add_or_replace_property(record, prop)
                    self._read_value(raw, prop, session)
            elif key == TAG_FACTORY and value is not None:
                context.set_factory(record, self._read_factory(value, session))

    def _read_factory(self, raw: Any, session: LoadSession) -> PropertyRecord:
        source = self._source(session)
        if not isinstance(raw, dict):
            raise BeanDefinitionError(f"'{TAG_FACTORY}' must be an object", source=source)
        name = raw.get(TAG_FACTORY_STATIC)
        spec = CollectionSpec(kind=CollectionKind.LIST)
        params = raw.get(TAG_FACTORY_PARAMS)
        if params is not None:
            if not isinstance(params, list):
                raise BeanDefinitionError(f"Factory '{TAG_FACTORY_PARAMS}' must be a list", source=source)
            self._read_items(dict(enumerate(params)), spec, session)
        return PropertyRecord(
            name=str(name).strip() if name is not None and str(name).strip() else None,
            kind=PropertyKind.COLLECTION,
            value=spec,
        )

    def _read_value(self, raw: Any, prop: PropertyRecord, session: LoadSession) -> None:
        if not isinstance(raw, (dict, list)):
            prop.kind = PropertyKind.SIMPLE
            prop.value = scalar_text(raw)
            return

        source = self._source(session)
        if isinstance(raw, list):
            raise BeanDefinitionError(
                f"Property '{prop.name}' value is a bare list, wrap it in 'value-list'", source=source
            )

        if TAG_VALUE_REF in raw:
            prop.kind = PropertyKind.REFERENCE
            prop.value = scalar_text(raw[TAG_VALUE_REF])
        elif TAG_VALUE in raw:
            prop.kind = PropertyKind.SIMPLE
            prop.value = scalar_text(raw[TAG_VALUE])
        elif TAG_VALUE_BEAN in raw:
            nested = raw[TAG_VALUE_BEAN]
            if not isinstance(nested, dict):
                raise BeanDefinitionError(f"Property '{prop.name}' '{TAG_VALUE_BEAN}' must be an object", source=source)
            record = self._target_record(nested, session)
            prop.kind = PropertyKind.BEAN
            prop.value = record
            self._merge_bean(nested, record, session)
        else:
            tag = next((t for t in _COLLECTION_TAGS if t in raw), None)
            if tag is None:
                # left undefined; inflating the bean reports it
                return
            self._read_collection(tag, raw, prop, session)

    def _read_collection(self, tag: str, raw: dict[str, Any], prop: PropertyRecord, session: LoadSession) -> None:
        source = self._source(session)
        kind = _COLLECTION_TAGS[tag]
        spec = CollectionSpec(kind=kind)
        if raw.get(TAG_MERGE) is not None:
            spec.merge = parse_flag(raw[TAG_MERGE], TAG_MERGE, source)
        if raw.get(TAG_CLASS_KEY) is not None:
            spec.key_type = str(raw[TAG_CLASS_KEY])
        if raw.get(TAG_CLASS_VALUE) is not None:
            spec.value_type = str(raw[TAG_CLASS_VALUE])
        prop.kind = PropertyKind.COLLECTION
        prop.value = spec

        values = raw[tag]
        if values is None:
            return
        if kind is CollectionKind.MAP:
            if not isinstance(values, dict):
                raise BeanDefinitionError(f"Property '{prop.name}' '{tag}' must be an object", source=source)
            if any(key is None or not str(key).strip() for key in values):
                raise BeanDefinitionError(f"Property '{prop.name}' map value missing a key", source=source)
            self._read_items(values, spec, session)
        else:
            if not isinstance(values, list):
                raise BeanDefinitionError(f"Property '{prop.name}' '{tag}' must be a list", source=source)
            self._read_items(dict(enumerate(values)), spec, session)

    def _read_items(self, values: dict[Any, Any], spec: CollectionSpec, session: LoadSession) -> None:
        for key, raw in values.items():
            item = PropertyRecord(name=scalar_text(key))
            spec.items.append(item)
            self._read_value(raw, item, session)
