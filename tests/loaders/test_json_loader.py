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
"""Tests for the JSON bean definition loader."""

import json
from pathlib import Path
from typing import Any

import pytest
from structlog.testing import capture_logs

from beanforge.config.properties import ContextProperties, LoaderProperties
from beanforge.container import BeanDefinitionError, CollectionKind, DuplicateBeanIdError, PropertyKind, Scope
from beanforge.context import BeanContext
from beanforge.loaders import ContextLoader, JsonContextLoader


class Endpoint:
    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port

    @staticmethod
    def parse(url: str) -> "Endpoint":
        host, _, port = url.partition(":")
        return Endpoint(host, int(port))


class Service:
    name: str = ""
    retries: int = 0
    enabled: bool = False
    endpoint: Any = None
    fallback: Any = None
    tags: Any = None
    limits: Any = None
    owner: Any = "nobody"


SERVICE = f"{__name__}.Service"
ENDPOINT = f"{__name__}.Endpoint"


def _write(path: Path, *beans: dict) -> Path:
    path.write_text(json.dumps({"beans": list(beans)}))
    return path


@pytest.fixture
def loader() -> JsonContextLoader:
    return JsonContextLoader()


class TestBeans:
    def test_loader_satisfies_port(self, loader):
        assert isinstance(loader, ContextLoader)

    def test_full_bean(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.json",
            {"id": "endpoint", "class": ENDPOINT, "factory": {"static": "parse", "params": ["db:5432"]}},
            {
                "id": "service",
                "class": SERVICE,
                "properties": {
                    "name": "orders",
                    "retries": 3,
                    "enabled": True,
                    "endpoint": {"value-ref": "endpoint"},
                    "fallback": {"value-bean": {"class": ENDPOINT, "factory": {"params": ["cache", 6379]}}},
                    "tags": {"value-list": ["a", "b"], "value-class-value": "string"},
                    "limits": {
                        "value-map": {"low": 1, "high": 9},
                        "value-class-key": "string",
                        "value-class-value": "int",
                    },
                    "owner": None,
                },
            },
        )
        context = loader.load_context(path)
        service = context.inflate("service")

        assert service.name == "orders"
        assert service.retries == 3
        assert service.enabled is True
        assert service.endpoint is context.inflate("endpoint")
        assert (service.endpoint.host, service.endpoint.port) == ("db", 5432)
        assert (service.fallback.host, service.fallback.port) == ("cache", 6379)
        assert service.tags == ["a", "b"]
        assert service.limits == {"low": 1, "high": 9}
        assert service.owner is None

    def test_scalars_are_kept_as_text(self, tmp_path, loader):
        properties = {"retries": 3, "enabled": False, "ratio": 0.5}
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE, "properties": properties})
        record = loader.load_context(path).get_bean("s")
        assert [p.value for p in record.properties] == ["3", "false", "0.5"]

    def test_record_attributes(self, tmp_path, loader):
        path = _write(
            tmp_path / "beans.json",
            {"id": "base", "class": SERVICE, "abstract": "true", "scope": "prototype"},
            {"id": "child", "parent": "base", "abstract": False},
            {"id": "answer", "class": "int", "assign": 42},
        )
        context = loader.load_context(path)
        base, child = context.get_bean("base"), context.get_bean("child")
        assert base.is_abstract and base.scope is Scope.PROTOTYPE
        assert child.parent_id == "base" and not child.is_abstract
        assert context.inflate("answer") == 42

    def test_factory_params_are_positional_items(self, tmp_path, loader):
        factory = {"params": ["h", {"value-ref": "p"}]}
        path = _write(tmp_path / "beans.json", {"id": "e", "class": ENDPOINT, "factory": factory})
        record = loader.load_context(path).get_bean("e")
        assert record.factory.name is None
        assert record.factory.value.kind is CollectionKind.LIST
        assert [(item.name, item.kind) for item in record.factory.value.items] == [
            ("0", PropertyKind.SIMPLE),
            ("1", PropertyKind.REFERENCE),
        ]

    def test_collection_merge_flag(self, tmp_path, loader):
        properties = {"tags": {"value-set": ["x"], "merge": "true"}}
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE, "properties": properties})
        spec = loader.load_context(path).get_bean("s").get_property("tags").value
        assert spec.kind is CollectionKind.SET
        assert spec.merge is True

    def test_unrecognised_property_object_stays_undefined(self, tmp_path, loader):
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE, "properties": {"name": {"unknown": 1}}})
        assert loader.load_context(path).get_bean("s").get_property("name").kind is PropertyKind.UNDEFINED

    def test_default_scope_comes_from_context(self, tmp_path):
        properties = ContextProperties(default_scope="prototype")
        loader = JsonContextLoader(context_factory=lambda: BeanContext(properties=properties))
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE})
        assert loader.load_context(path).get_bean("s").scope is Scope.PROTOTYPE


class TestMerging:
    def test_id_merge_updates_in_place(self, tmp_path, loader):
        base = _write(tmp_path / "base.json", {"id": "s", "class": SERVICE, "properties": {"name": "a", "retries": 1}})
        overlay = _write(tmp_path / "overlay.json", {"id_merge": "s", "properties": {"name": "b"}})
        context = loader.load_context(base)
        record = context.get_bean("s")
        loader.merge_context(context, overlay)

        assert context.get_bean("s") is record
        assert context.bean_ids == ["s"]
        service = context.inflate("s")
        assert (service.name, service.retries) == ("b", 1)

    def test_id_merge_unknown_bean(self, tmp_path, loader):
        path = _write(tmp_path / "beans.json", {"id_merge": "ghost"})
        with pytest.raises(BeanDefinitionError, match="ghost"):
            loader.load_context(path)


class TestImports:
    def test_relative_import(self, tmp_path, loader):
        (tmp_path / "shared").mkdir()
        endpoint = {"id": "endpoint", "class": ENDPOINT, "factory": {"params": ["h", 1]}}
        _write(tmp_path / "shared" / "endpoint.json", endpoint)
        main = _write(tmp_path / "main.json", {"import": "shared/endpoint.json"}, {"id": "s", "class": SERVICE})
        context = loader.load_context(main)
        assert context.bean_ids == ["endpoint", "s"]

    def test_import_cycle_loads_each_file_once(self, tmp_path, loader):
        _write(tmp_path / "a.json", {"import": ["b.json"]}, {"id": "a", "class": SERVICE})
        _write(tmp_path / "b.json", {"import": "a.json"}, {"id": "b", "class": SERVICE})
        context = loader.load_context(tmp_path / "a.json")
        assert sorted(context.bean_ids) == ["a", "b"]

    def test_optional_missing_import_is_skipped(self, tmp_path, loader):
        main = _write(
            tmp_path / "main.json",
            {"import": [{"path": "missing.json", "optional": True}]},
            {"id": "s", "class": SERVICE},
        )
        with capture_logs() as logs:
            context = loader.load_context(main)
        assert context.bean_ids == ["s"]
        assert any(entry["event"] == "optional_import_skipped" for entry in logs)

    def test_required_missing_import_fails(self, tmp_path, loader):
        main = _write(tmp_path / "main.json", {"import": "missing.json"})
        with pytest.raises(BeanDefinitionError, match="Cannot read json file"):
            loader.load_context(main)

    def test_imports_can_be_disabled(self, tmp_path):
        loader = JsonContextLoader(LoaderProperties(follow_imports=False))
        _write(tmp_path / "other.json", {"id": "other", "class": SERVICE})
        main = _write(tmp_path / "main.json", {"import": "other.json"})
        assert loader.load_context(main).bean_ids == []


class TestInvalidDocuments:
    def test_malformed_json(self, tmp_path, loader):
        path = tmp_path / "beans.json"
        path.write_text("{not json")
        with pytest.raises(BeanDefinitionError, match="Parsing JSON failed") as exc_info:
            loader.load_context(path)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_invalid_scope(self, tmp_path, loader):
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE, "scope": "request"})
        with pytest.raises(BeanDefinitionError, match="scope value 'request' invalid"):
            loader.load_context(path)

    def test_invalid_flag(self, tmp_path, loader):
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE, "abstract": "maybe"})
        with pytest.raises(BeanDefinitionError, match="Flag 'abstract'"):
            loader.load_context(path)

    def test_bare_list_property(self, tmp_path, loader):
        path = _write(tmp_path / "beans.json", {"id": "s", "class": SERVICE, "properties": {"tags": ["a"]}})
        with pytest.raises(BeanDefinitionError, match="value-list"):
            loader.load_context(path)

    def test_beans_must_be_a_list(self, tmp_path, loader):
        path = tmp_path / "beans.json"
        path.write_text(json.dumps({"beans": {"id": "s"}}))
        with pytest.raises(BeanDefinitionError, match="must be a list"):
            loader.load_context(path)

    def test_duplicate_ids_across_files(self, tmp_path, loader):
        _write(tmp_path / "other.json", {"id": "s", "class": SERVICE})
        main = _write(tmp_path / "main.json", {"id": "s", "class": SERVICE}, {"import": "other.json"})
        with pytest.raises(DuplicateBeanIdError):
            loader.load_context(main)

    def test_empty_path(self, loader):
        with pytest.raises(BeanDefinitionError, match="empty"):
            loader.load_context("")
