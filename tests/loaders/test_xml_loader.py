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
"""Tests for the XML bean definition loader."""

import textwrap
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import pytest

from beanforge.container import BeanDefinitionError, CollectionKind, PropertyKind, UndefinedPropertyKindError
from beanforge.loaders import XmlContextLoader


class Channel:
    def __init__(self, host: str, port: int = 80) -> None:
        self.host = host
        self.port = port

    @classmethod
    def local(cls, port: int) -> "Channel":
        return cls("localhost", port)


class Router:
    label: str = ""
    primary: Any = None
    backup: Any = None
    routes: Any = None
    weights: Any = None
    note: Any = "unset"


CHANNEL = f"{__name__}.Channel"
ROUTER = f"{__name__}.Router"


def _write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text).strip())
    return path


@pytest.fixture
def loader() -> XmlContextLoader:
    return XmlContextLoader()


class TestXmlBeans:
    def test_full_document(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f"""
            <beans>
              <bean id="primary" class="{CHANNEL}">
                <factory name="local"><param value="8080"/></factory>
              </bean>
              <bean id="router" class="{ROUTER}">
                <property name="label" value="edge"/>
                <property name="primary" value-ref="primary"/>
                <property name="backup">
                  <bean class="{CHANNEL}">
                    <factory><item value="backup.local"/><item value="9090"/></factory>
                  </bean>
                </property>
                <property name="routes">
                  <list class-value="string"><item value="/a"/><item value="/b"/></list>
                </property>
                <property name="weights">
                  <map class-key="string" class-value="int">
                    <item key="a" value="1"/>
                    <item key="b" value="2"/>
                  </map>
                </property>
                <property name="note"><null/></property>
              </bean>
            </beans>
            """,
        )
        context = loader.load_context(path)
        router = context.inflate("router")

        assert router.label == "edge"
        assert router.primary is context.inflate("primary")
        assert (router.primary.host, router.primary.port) == ("localhost", 8080)
        assert (router.backup.host, router.backup.port) == ("backup.local", 9090)
        assert router.routes == ["/a", "/b"]
        assert router.weights == {"a": 1, "b": 2}
        assert router.note is None

    def test_empty_value_attribute_is_an_empty_string(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f'<beans><bean id="r" class="{ROUTER}"><property name="label" value=""/></bean></beans>',
        )
        prop = loader.load_context(path).get_bean("r").get_property("label")
        assert (prop.kind, prop.value) == (PropertyKind.SIMPLE, "")

    def test_property_without_value_is_reported_on_inflation(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f'<beans><bean id="r" class="{ROUTER}"><property name="label"/></bean></beans>',
        )
        context = loader.load_context(path)
        assert context.get_bean("r").get_property("label").kind is PropertyKind.UNDEFINED
        with pytest.raises(UndefinedPropertyKindError):
            context.inflate("r")

    def test_collection_attributes(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f"""
            <beans>
              <bean id="r" class="{ROUTER}">
                <property name="routes"><set merge="true" class-value="string"/></property>
              </bean>
            </beans>
            """,
        )
        spec = loader.load_context(path).get_bean("r").get_property("routes").value
        assert (spec.kind, spec.merge, spec.value_type, spec.items) == (CollectionKind.SET, True, "string", [])

    def test_record_attributes(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f"""
            <beans>
              <bean id="base" class="{ROUTER}" abstract="true" scope="prototype"/>
              <bean id="child" parent="base"/>
              <bean id="answer" class="int" assign="7"/>
            </beans>
            """,
        )
        context = loader.load_context(path)
        assert context.get_bean("base").is_abstract
        assert context.get_bean("child").parent_id == "base"
        assert context.inflate("answer") == 7
        assert context.get_bean("base").scope.value == "prototype"

    def test_nested_beans_sections(self, tmp_path, loader):
        path = _write(
            tmp_path / "context.xml",
            f"""
            <context>
              <beans><bean id="one" class="{ROUTER}"/></beans>
              <beans><bean id="two" class="{ROUTER}"/></beans>
            </context>
            """,
        )
        assert loader.load_context(path).bean_ids == ["one", "two"]

    def test_id_merge(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f"""
            <beans>
              <bean id="r" class="{ROUTER}"><property name="label" value="old"/></bean>
              <bean id-merge="r"><property name="label" value="new"/></bean>
            </beans>
            """,
        )
        context = loader.load_context(path)
        assert context.bean_ids == ["r"]
        assert context.inflate("r").label == "new"


class TestXmlImports:
    def test_imports(self, tmp_path, loader):
        (tmp_path / "conf").mkdir()
        _write(tmp_path / "conf" / "channels.xml", f'<beans><bean id="c" class="{CHANNEL}"/></beans>')
        main = _write(
            tmp_path / "main.xml",
            """
            <beans>
              <import path="conf/channels.xml"/>
              <import path="conf/missing.xml" optional="true"/>
              <import path="main.xml"/>
            </beans>
            """,
        )
        assert loader.load_context(main).bean_ids == ["c"]

    def test_import_without_path(self, tmp_path, loader):
        path = _write(tmp_path / "beans.xml", '<beans><import optional="true"/></beans>')
        with pytest.raises(BeanDefinitionError, match="missing 'path'"):
            loader.load_context(path)


class TestXmlErrors:
    def test_malformed_xml(self, tmp_path, loader):
        path = _write(tmp_path / "beans.xml", "<beans><bean></beans>")
        with pytest.raises(BeanDefinitionError, match="Parsing XML failed") as exc_info:
            loader.load_context(path)
        assert isinstance(exc_info.value.__cause__, ET.ParseError)

    def test_map_item_without_key(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.xml",
            f"""
            <beans>
              <bean id="r" class="{ROUTER}">
                <property name="weights">
                  <map class-key="string" class-value="int"><item value="1"/></map>
                </property>
              </bean>
            </beans>
            """,
        )
        with pytest.raises(BeanDefinitionError, match="missing a key"):
            loader.load_context(path)

    def test_invalid_flag(self, tmp_path, loader):
        path = _write(tmp_path / "beans.xml", f'<beans><bean id="r" class="{ROUTER}" abstract="yes"/></beans>')
        with pytest.raises(BeanDefinitionError, match="Flag 'abstract'"):
            loader.load_context(path)

    def test_invalid_scope(self, tmp_path, loader):
        path = _write(tmp_path / "beans.xml", f'<beans><bean id="r" class="{ROUTER}" scope="thread"/></beans>')
        with pytest.raises(BeanDefinitionError, match="scope value 'thread' invalid"):
            loader.load_context(path)
