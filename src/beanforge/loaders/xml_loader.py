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
"""XML bean definition loader.

Uses Python's stdlib ``xml.etree.ElementTree``. Document shape::

    <beans>
      <import path="common.xml" optional="true"/>
      <bean id="pool" class="app.pool.Pool" parent="base" scope="prototype">
        <factory name="create">
          <param value="8"/>
          <param value-ref="clock"/>
        </factory>
        <property name="size" value="4"/>
        <property name="codec"><bean class="app.codec.Codec"/></property>
        <property name="tags">
          <list merge="true" class-value="string">
            <item value="a"/>
          </list>
        </property>
        <property name="limits">
          <map class-key="string" class-value="int"><item key="low" value="1"/></map>
        </property>
        <property name="owner"><null/></property>
      </bean>
    </beans>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
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
)

TAG_BEANS = "beans"
TAG_IMPORT = "import"
TAG_BEAN = "bean"
TAG_FACTORY = "factory"
TAG_PROPERTY = "property"
TAG_NULL = "null"
TAG_ITEM = "item"
TAG_PARAM = "param"

ATTR_PATH = "path"
ATTR_OPTIONAL = "optional"
ATTR_ID = "id"
ATTR_ID_MERGE = "id-merge"
ATTR_CLASS = "class"
ATTR_PARENT = "parent"
ATTR_ABSTRACT = "abstract"
ATTR_SCOPE = "scope"
ATTR_ASSIGN = "assign"
ATTR_NAME = "name"
ATTR_VALUE = "value"
ATTR_VALUE_REF = "value-ref"
ATTR_MERGE = "merge"
ATTR_CLASS_KEY = "class-key"
ATTR_CLASS_VALUE = "class-value"
ATTR_KEY = "key"

_COLLECTION_TAGS = {
    "list": CollectionKind.LIST,
    "array": CollectionKind.ARRAY,
    "set": CollectionKind.SET,
    "map": CollectionKind.MAP,
}


def _attr(element: ET.Element, name: str) -> str | None:
    """Attribute value, or ``None`` when absent or blank."""
    value = element.get(name)
    if value is None or not value.strip():
        return None
    return value


class XmlContextLoader(FileContextLoader):
    """Reads bean definitions from ``.xml`` files."""

    format_name = "xml"

    def _parse(self, text: str, source: str) -> Any:
        try:
            return ET.fromstring(text)
        except ET.ParseError as exc:
            raise BeanDefinitionError(f"Parsing XML failed: {exc}", source=source) from exc

    def _merge_document(self, document: Any, session: LoadSession) -> None:
        root: ET.Element = document
        if root.tag == TAG_BEANS:
            self._merge_beans(root, session)
        for child in root:
            if child.tag == TAG_BEANS:
                self._merge_beans(child, session)

    def _merge_beans(self, beans: ET.Element, session: LoadSession) -> None:
        source = self._source(session)
        for element in beans:
            if element.tag == TAG_IMPORT:
                path = _attr(element, ATTR_PATH)
                if path is None:
                    raise BeanDefinitionError(
                        f"Import element: invalid or missing '{ATTR_PATH}' attribute", source=source
                    )
                optional = element.get(ATTR_OPTIONAL)
                self._import(path, optional is not None and parse_flag(optional, ATTR_OPTIONAL, source), session)
            elif element.tag == TAG_BEAN:
                record = self._target_record(element, session)
                self._merge_bean(element, record, session)

    @staticmethod
    def _target_record(element: ET.Element, session: LoadSession) -> BeanRecord:
        merge_id = element.get(ATTR_ID_MERGE)
        if merge_id is not None:
            return merge_target(session.context, merge_id, FileContextLoader._source(session))
        return new_record(session.context)

    def _merge_bean(self, element: ET.Element, record: BeanRecord, session: LoadSession) -> None:
        context = session.context
        source = self._source(session)

        bean_id = _attr(element, ATTR_ID)
        if bean_id is not None:
            assign_id(context, record, bean_id)
        class_name = _attr(element, ATTR_CLASS)
        if class_name is not None:
            record.class_name = class_name.strip()
        parent = _attr(element, ATTR_PARENT)
        if parent is not None:
            record.parent_id = parent.strip()
        abstract = _attr(element, ATTR_ABSTRACT)
        if abstract is not None:
            record.is_abstract = parse_flag(abstract, ATTR_ABSTRACT, source)
        scope = _attr(element, ATTR_SCOPE)
        if scope is not None:
            record.scope = parse_scope(scope, source)
        if ATTR_ASSIGN in element.attrib:
            record.assign = element.get(ATTR_ASSIGN)

        for child in element:
            if child.tag == TAG_PROPERTY:
                prop = PropertyRecord()
                self._read_value(child, prop, session)
                prop.name = _attr(child, ATTR_NAME)
                context.add_or_replace_property(record, prop)
            elif child.tag == TAG_FACTORY:
                spec = CollectionSpec(kind=CollectionKind.LIST)
                self._read_items(child, spec, session)
                factory_name = _attr(child, ATTR_NAME)
                context.set_factory(
                    record,
                    PropertyRecord(
                        name=factory_name.strip() if factory_name else None,
                        kind=PropertyKind.COLLECTION,
                        value=spec,
                    ),
                )

    def _read_value(self, element: ET.Element, prop: PropertyRecord, session: LoadSession) -> None:
        if ATTR_VALUE in element.attrib:
            prop.kind = PropertyKind.SIMPLE
            prop.value = element.get(ATTR_VALUE)
            return
        reference = _attr(element, ATTR_VALUE_REF)
        if reference is not None:
            prop.kind = PropertyKind.REFERENCE
            prop.value = reference.strip()
            return

        children = list(element)
        if len(children) != 1:
            # left undefined; inflating the bean reports it
            return
        child = children[0]
        if child.tag == TAG_NULL:
            prop.kind = PropertyKind.SIMPLE
            prop.value = None
        elif child.tag == TAG_BEAN:
            record = self._target_record(child, session)
            prop.kind = PropertyKind.BEAN
            prop.value = record
            self._merge_bean(child, record, session)
        elif child.tag in _COLLECTION_TAGS:
            self._read_collection(child, prop, session)

    def _read_collection(self, element: ET.Element, prop: PropertyRecord, session: LoadSession) -> None:
        source = self._source(session)
        spec = CollectionSpec(kind=_COLLECTION_TAGS[element.tag])
        merge = _attr(element, ATTR_MERGE)
        if merge is not None:
            spec.merge = parse_flag(merge, ATTR_MERGE, source)
        spec.key_type = _attr(element, ATTR_CLASS_KEY)
        spec.value_type = _attr(element, ATTR_CLASS_VALUE)
        prop.kind = PropertyKind.COLLECTION
        prop.value = spec
        self._read_items(element, spec, session)

    def _read_items(self, element: ET.Element, spec: CollectionSpec, session: LoadSession) -> None:
        source = self._source(session)
        position = 0
        for child in element:
            if child.tag not in (TAG_ITEM, TAG_PARAM):
                continue
            if spec.kind is CollectionKind.MAP:
                key = _attr(child, ATTR_KEY)
                if key is None:
                    raise BeanDefinitionError("Map property value missing a key", source=source)
            else:
                key = str(position)
                position += 1
            item = PropertyRecord(name=key)
            spec.items.append(item)
            self._read_value(child, item, session)
