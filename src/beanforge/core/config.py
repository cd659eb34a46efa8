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
"""beanforge configuration: YAML/TOML files, packaged defaults and env overrides.

Keys are dot paths into nested mappings (``beanforge.context.default-scope``).
Every key can be overridden from the environment: the ``beanforge.`` prefix
is dropped, the rest upper-cased, and dots and dashes become underscores
(``BEANFORGE_CONTEXT_DEFAULT_SCOPE``).
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

DEFAULTS_RESOURCE = "beanforge-defaults.yaml"

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_CONFIG_PROPERTIES_ATTR = "__beanforge_config_prefix__"
_MAX_PLACEHOLDER_DEPTH = 10
_MISSING = object()


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass or pydantic model as bindable to *prefix*.

    Usage:
        @config_properties(prefix="beanforge.loaders")
        @dataclass
        class LoaderProperties:
            encoding: str = "utf-8"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable that overrides the dot-path *key*."""
    return "BEANFORGE_" + key.removeprefix("beanforge.").upper().replace(".", "_").replace("-", "_")


def _walk(data: Any, key: str) -> Any:
    current = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or current.get(part) is None:
            return _MISSING
        current = current[part]
    return current


def _merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, Mapping):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _text_to(expected: Any, value: Any) -> Any:
    """Convert an environment/text value for a dataclass field."""
    if not isinstance(value, str):
        return value
    if expected is bool:
        return value.strip().lower() in ("true", "1", "yes")
    if expected in (int, float):
        return expected(value)
    return value


class Config:
    """Nested configuration mapping with dot-path access.

    Priority (highest wins): environment variables, the values given to the
    constructor or read from a file, packaged defaults, then the defaults
    declared on the bound properties class.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def defaults(cls) -> Config:
        """Configuration holding only the packaged ``beanforge-defaults.yaml``."""
        resource = importlib.resources.files("beanforge.resources").joinpath(DEFAULTS_RESOURCE)
        return cls(yaml.safe_load(resource.read_text(encoding="utf-8")) or {})

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        """Read a YAML or TOML file (by suffix) layered over the packaged defaults.

        A missing file contributes nothing.
        """
        path = Path(path)
        data = cls.defaults()._data if load_defaults else {}
        if path.exists():
            data = _merge(data, _read(path))
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dot-path *key*, with environment override and placeholders.

        String values may embed ``${ENV_VAR}``, ``${other.key}`` or
        ``${key:fallback}``.
        """
        override = os.environ.get(env_key(key))
        if override is not None:
            return override
        value = _walk(self._data, key)
        if value is _MISSING:
            return default
        if isinstance(value, str) and "${" in value:
            return self._expand(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """The mapping under *prefix*, or an empty dict."""
        section = _walk(self._data, prefix)
        return dict(section) if isinstance(section, Mapping) else {}

    def _expand(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for circular references")

        def replace(match: re.Match[str]) -> str:
            ref, _, fallback = match.group(1).partition(":")
            from_env = os.environ.get(ref)
            if from_env is not None:
                return from_env
            found = _walk(self._data, ref)
            if found is not _MISSING:
                text = str(found)
                return self._expand(text, depth + 1) if "${" in text else text
            if ":" in match.group(1):
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(replace, value)

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` class from its section.

        Dashed keys bind to underscored fields (``default-scope`` →
        ``default_scope``); environment overrides apply per field.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = {str(k).replace("-", "_"): v for k, v in self.get_section(prefix).items()}
        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            return self._bind_model(config_cls, prefix, section)  # type: ignore[return-value]
        return self._bind_dataclass(config_cls, prefix, section)

    def _bind_model(self, model: type[BaseModel], prefix: str, section: dict[str, Any]) -> BaseModel:
        for name in model.model_fields:
            override = os.environ.get(env_key(f"{prefix}.{name}"))
            if override is not None:
                section[name] = override
        try:
            return model.model_validate(section)
        except ValidationError as exc:
            raise ValueError(
                f"Configuration validation failed for '{model.__name__}' (prefix='{prefix}'):\n{exc}"
            ) from exc

    def _bind_dataclass(self, config_cls: type[T], prefix: str, section: dict[str, Any]) -> T:
        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}", section.get(field.name))
            if value is not None:
                kwargs[field.name] = _text_to(hints.get(field.name), value)
        return config_cls(**kwargs)
