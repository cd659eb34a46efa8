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
"""Property application: push a resolved value into an instance.

Three tiers are tried in order and the first that accepts the value wins:

1. a one-argument setter method (``set_max_size``, ``setMaxSize``, ...);
2. a writable ``property`` whose name matches case-insensitively;
3. a public field with exactly that name (instance attribute, class
   annotation or ``__slots__`` entry).
"""

from __future__ import annotations

import inspect
import re
import typing
from collections.abc import Callable, Iterator
from typing import Any

from beanforge.container.exceptions import ConversionError, PropertyApplicationError
from beanforge.conversion.coercion import coerce_to, is_assignable

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_ABSENT = object()
_SCALAR_DEFAULTS = (bool, int, float, str)


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def setter_names(name: str) -> list[str]:
    """Setter method names tried for property *name*, in priority order."""
    capitalized = name[:1].upper() + name[1:]
    names = [f"set_{snake_case(name)}", f"set_{name}", f"set{capitalized}", f"Set{capitalized}"]
    return list(dict.fromkeys(names))


def _class_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception:
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _setter_targets(instance: Any, name: str) -> Iterator[tuple[Callable[[Any], Any], Any]]:
    for method_name in setter_names(name):
        method = getattr(instance, method_name, None)
        if method is None or not callable(method):
            continue
        try:
            sig = inspect.signature(method)
        except (TypeError, ValueError):
            continue
        params = [
            p
            for p in sig.parameters.values()
            if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ]
        required = [p for p in params if p.default is inspect.Parameter.empty]
        if len(required) > 1 or not params:
            continue
        try:
            hints = typing.get_type_hints(method)
        except Exception:
            hints = {}
        yield method, hints.get(params[0].name, params[0].annotation)


def _property_targets(instance: Any, name: str) -> Iterator[tuple[Callable[[Any], Any], Any]]:
    lowered = name.lower()
    seen: set[str] = set()
    for klass in type(instance).__mro__:
        for attr, value in vars(klass).items():
            if attr in seen or attr.lower() != lowered:
                continue
            seen.add(attr)
            if not isinstance(value, property) or value.fset is None:
                continue
            annotation: Any = inspect.Parameter.empty
            try:
                fset_hints = typing.get_type_hints(value.fset)
                params = list(inspect.signature(value.fset).parameters)
                annotation = fset_hints.get(params[1], inspect.Parameter.empty) if len(params) > 1 else annotation
                if annotation is inspect.Parameter.empty and value.fget is not None:
                    annotation = typing.get_type_hints(value.fget).get("return", annotation)
            except Exception:
                annotation = inspect.Parameter.empty
            yield (lambda v, _attr=attr: setattr(instance, _attr, v)), annotation


def _plain_class_attribute(static: Any) -> bool:
    if static is _ABSENT or callable(static):
        return False
    return not any(hasattr(type(static), hook) for hook in ("__get__", "__set__", "__delete__"))


def _field_targets(instance: Any, name: str) -> Iterator[tuple[Callable[[Any], Any], Any]]:
    if name.startswith("_"):
        return
    cls = type(instance)
    static = inspect.getattr_static(cls, name, _ABSENT)
    if isinstance(static, property) or inspect.isfunction(static) or isinstance(static, (staticmethod, classmethod)):
        return
    hints = _class_hints(cls)
    slots = {slot for klass in cls.__mro__ for slot in getattr(klass, "__slots__", ())}
    in_dict = name in getattr(instance, "__dict__", {})
    plain = _plain_class_attribute(static)
    if not (in_dict or plain or name in hints or name in slots):
        return
    annotation = hints.get(name, inspect.Parameter.empty)
    # an unannotated class default of a scalar type stands in for the annotation
    if annotation is inspect.Parameter.empty and plain and type(static) in _SCALAR_DEFAULTS:
        annotation = type(static)
    yield (lambda v: setattr(instance, name, v)), annotation


def apply_property(instance: Any, name: str, value: Any, *, tag: str | None = None) -> None:
    """Apply *value* to *instance* under property *name*.

    Raises:
        PropertyApplicationError: No setter, property or field accepts the
            value, or the accepting member raised.
    """
    last_error: ConversionError | None = None
    for tier in (_setter_targets, _property_targets, _field_targets):
        for assign, annotation in tier(instance, name):
            if is_assignable(annotation, value):
                converted = value
            else:
                try:
                    converted = coerce_to(annotation, value)
                except ConversionError as exc:
                    last_error = exc
                    continue
            try:
                assign(converted)
            except Exception as exc:
                raise PropertyApplicationError(tag, name, f"setter raised {type(exc).__name__}: {exc}") from exc
            return

    error = PropertyApplicationError(tag, name)
    if last_error is not None:
        raise error from last_error
    raise error
