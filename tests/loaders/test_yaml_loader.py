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
"""Tests for the YAML bean definition loader."""

import textwrap
from pathlib import Path

import pytest
import yaml

from beanforge.container import BeanDefinitionError, PropertyKind
from beanforge.loaders import YamlContextLoader


class Pool:
    def __init__(self, size: int = 1) -> None:
        self.size = size
        self.name = ""
        self.tags: list = []

    def set_name(self, name: str) -> None:
        self.name = name


POOL = f"{__name__}.Pool"


def _write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text))
    return path


@pytest.fixture
def loader() -> YamlContextLoader:
    return YamlContextLoader()


class TestYamlDocuments:
    def test_block_style_document(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.yaml",
            f"""
            beans:
              - id: pool
                class: {POOL}
                factory:
                  params: [8]
                properties:
                  name: primary
                  tags:
                    value-list: [red, green]
                    value-class-value: string
            """,
        )
        pool = loader.load_context(path).inflate("pool")
        assert (pool.size, pool.name, pool.tags) == (8, "primary", ["red", "green"])

    def test_yaml_scalars_become_text(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.yaml",
            f"""
            beans:
              - id: pool
                class: {POOL}
                properties:
                  a: yes
                  b: 1.5
                  c: ~
            """,
        )
        record = loader.load_context(path).get_bean("pool")
        assert [(p.kind, p.value) for p in record.properties] == [
            (PropertyKind.SIMPLE, "true"),
            (PropertyKind.SIMPLE, "1.5"),
            (PropertyKind.SIMPLE, None),
        ]

    def test_anchors_share_definitions(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.yaml",
            f"""
            beans:
              - id: first
                class: {POOL}
                properties: &common
                  name: shared
              - id: second
                class: {POOL}
                properties: *common
            """,
        )
        context = loader.load_context(path)
        assert context.inflate("first").name == context.inflate("second").name == "shared"

    def test_empty_document_loads_nothing(self, tmp_path, loader):
        path = _write(tmp_path / "beans.yaml", "")
        assert len(loader.load_context(path)) == 0

    def test_document_without_beans_key(self, tmp_path, loader):
        path = _write(tmp_path / "beans.yaml", "settings: {}\n")
        assert len(loader.load_context(path)) == 0

    def test_yml_import_from_yaml(self, tmp_path, loader):
        _write(
            tmp_path / "pools.yml",
            f"""
            beans:
              - id: pool
                class: {POOL}
            """,
        )
        main = _write(
            tmp_path / "main.yaml",
            """
            beans:
              - import:
                  - path: pools.yml
                  - path: absent.yml
                    optional: "true"
            """,
        )
        assert loader.load_context(main).bean_ids == ["pool"]


class TestYamlErrors:
    def test_malformed_yaml(self, tmp_path, loader):
        path = _write(tmp_path / "beans.yaml", "beans: [unclosed\n")
        with pytest.raises(BeanDefinitionError, match="Parsing YAML failed") as exc_info:
            loader.load_context(path)
        assert isinstance(exc_info.value.__cause__, yaml.YAMLError)

    def test_root_must_be_mapping(self, tmp_path, loader):
        path = _write(tmp_path / "beans.yaml", "- id: pool\n")
        with pytest.raises(BeanDefinitionError, match="root must be an object"):
            loader.load_context(path)

    def test_map_item_without_key(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.yaml",
            f"""
            beans:
              - id: pool
                class: {POOL}
                properties:
                  limits:
                    value-map:
                      ~: 1
                    value-class-key: string
                    value-class-value: int
            """,
        )
        with pytest.raises(BeanDefinitionError, match="missing a key"):
            loader.load_context(path)

    def test_import_entry_without_path(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.yaml",
            """
            beans:
              - import:
                  - optional: true
            """,
        )
        with pytest.raises(BeanDefinitionError, match="has no 'path'"):
            loader.load_context(path)

    def test_error_names_the_source_file(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.yaml",
            f"""
            beans:
              - id: pool
                class: {POOL}
                scope: session
            """,
        )
        with pytest.raises(BeanDefinitionError) as exc_info:
            loader.load_context(path)
        assert exc_info.value.source == str(path)
        assert str(path) in str(exc_info.value)
