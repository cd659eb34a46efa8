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
"""Tests for Config loading, env overrides, placeholders and binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from beanforge.config.properties import ContextProperties, LoaderProperties
from beanforge.core.config import Config, config_properties, env_key


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"beanforge": {"context": {"default-scope": "prototype"}}})
        assert config.get("beanforge.context.default-scope") == "prototype"

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "fallback") == "fallback"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "beanforge.yaml"
        config_file.write_text("app:\n  name: inventory\n")
        config = Config.from_file(config_file)
        assert config.get("app.name") == "inventory"

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "beanforge.toml"
        config_file.write_text('[app]\nname = "inventory"\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("app.name") == "inventory"

    def test_packaged_defaults_are_loaded_first(self, tmp_path: Path):
        config_file = tmp_path / "beanforge.yaml"
        config_file.write_text("beanforge:\n  logging:\n    format: json\n")
        config = Config.from_file(config_file)
        assert config.get("beanforge.logging.format") == "json"
        assert config.get("beanforge.context.default-scope") == "singleton"

    def test_missing_file_leaves_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("beanforge.loaders.encoding") == "utf-8"
        assert Config.from_file(tmp_path / "absent.yaml", load_defaults=False).get_section("beanforge") == {}

    def test_env_key(self):
        assert env_key("beanforge.context.default-scope") == "BEANFORGE_CONTEXT_DEFAULT_SCOPE"
        assert env_key("pool.size") == "BEANFORGE_POOL_SIZE"

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BEANFORGE_CONTEXT_DEFAULT_SCOPE", "prototype")
        config = Config({"beanforge": {"context": {"default-scope": "singleton"}}})
        assert config.get("beanforge.context.default-scope") == "prototype"

    def test_get_section(self):
        config = Config({"beanforge": {"loaders": {"encoding": "latin-1"}}})
        assert config.get_section("beanforge.loaders") == {"encoding": "latin-1"}
        assert config.get_section("beanforge.missing") == {}


class TestPlaceholders:
    def test_config_reference(self):
        config = Config({"paths": {"root": "/etc/app", "beans": "${paths.root}/beans.xml"}})
        assert config.get("paths.beans") == "/etc/app/beans.xml"

    def test_env_reference(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BEANS_HOME", "/srv")
        config = Config({"paths": {"beans": "${BEANS_HOME}/beans.json"}})
        assert config.get("paths.beans") == "/srv/beans.json"

    def test_default_value(self):
        config = Config({"paths": {"beans": "${missing.key:beans.yaml}"}})
        assert config.get("paths.beans") == "beans.yaml"

    def test_unresolvable_raises(self):
        config = Config({"paths": {"beans": "${nowhere.at.all}"}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("paths.beans")


class TestBind:
    def test_bind_dataclass(self):
        @config_properties(prefix="pool")
        @dataclass
        class PoolConfig:
            size: int = 4
            name: str = "default"

        config = Config({"pool": {"size": "16"}})
        bound = config.bind(PoolConfig)
        assert bound.size == 16
        assert bound.name == "default"

    def test_bind_undecorated_raises(self):
        @dataclass
        class Plain:
            size: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_bind_context_properties_from_defaults(self):
        properties = Config.defaults().bind(ContextProperties)
        assert properties.default_scope == "singleton"
        assert properties.type_aliases == {}

    def test_bind_context_properties_dashed_keys(self):
        config = Config(
            {"beanforge": {"context": {"default-scope": "prototype", "type-aliases": {"Pool": "app.pool.Pool"}}}}
        )
        properties = config.bind(ContextProperties)
        assert properties.default_scope == "prototype"
        assert properties.type_aliases == {"Pool": "app.pool.Pool"}

    def test_bind_context_properties_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BEANFORGE_CONTEXT_DEFAULT_SCOPE", "prototype")
        assert Config({}).bind(ContextProperties).default_scope == "prototype"

    def test_bind_context_properties_rejects_unknown_scope(self):
        config = Config({"beanforge": {"context": {"default-scope": "request"}}})
        with pytest.raises(ValueError, match="Configuration validation failed"):
            config.bind(ContextProperties)

    def test_bind_loader_properties(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BEANFORGE_LOADERS_FOLLOW_IMPORTS", "false")
        config = Config({"beanforge": {"loaders": {"encoding": "latin-1"}}})
        properties = config.bind(LoaderProperties)
        assert properties.encoding == "latin-1"
        assert properties.follow_imports is False
