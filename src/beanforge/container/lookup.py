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
"""Type descriptor resolution."""

from __future__ import annotations

import builtins
import importlib
from typing import Any

import structlog

from beanforge.conversion.scalars import ScalarKind

logger = structlog.get_logger("beanforge.container.lookup")

_ALIASES: dict[str, Any] = {kind.value: kind for kind in ScalarKind}
_ALIASES["object"] = object


class TypeLookup:
    """Resolves type descriptor strings to type handles.

    A handle is either a Python class or a :class:`ScalarKind`. Lookup order:

    1. explicit registrations (:meth:`register`);
    2. the builtin scalar alias table (``int``, ``ulong``, ``string``, ...);
    3. configured aliases, which map a descriptor onto another descriptor;
    4. ``package.module:Outer.Inner`` descriptors;
    5. dotted ``package.module.Class`` descriptors, reinterpreting trailing
       segments as nested classes from the rightmost segment inward;
    6. builtins for undotted names (``dict``, ``list``, ...).
    """

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self._registered: dict[str, Any] = {}
        self._aliases: dict[str, str] = dict(aliases or {})
        self._cache: dict[str, Any] = {}

    def register(self, descriptor: str, handle: Any) -> None:
        """Bind *descriptor* to a class or scalar kind explicitly."""
        self._registered[descriptor] = handle
        self._cache.pop(descriptor, None)

    def alias(self, descriptor: str, target: str) -> None:
        """Make *descriptor* resolve like the *target* descriptor."""
        self._aliases[descriptor] = target
        self._cache.pop(descriptor, None)

    def find(self, descriptor: str | None) -> Any | None:
        """Return the type handle for *descriptor*, or ``None``."""
        if descriptor is None or not descriptor.strip():
            return None
        descriptor = descriptor.strip()
        if descriptor in self._cache:
            return self._cache[descriptor]

        handle = self._resolve(descriptor, seen=set())
        if handle is not None:
            self._cache[descriptor] = handle
        else:
            logger.debug("type_unresolved", descriptor=descriptor)
        return handle

    def _resolve(self, descriptor: str, seen: set[str]) -> Any | None:
        if descriptor in self._registered:
            return self._registered[descriptor]
        if descriptor in _ALIASES:
            return _ALIASES[descriptor]
        if descriptor in self._aliases and descriptor not in seen:
            seen.add(descriptor)
            return self._resolve(self._aliases[descriptor], seen)

        # 'Namespace.Class, Assembly' style suffixes carry no meaning here
        name = descriptor.split(",", 1)[0].strip()

        if ":" in name:
            module_name, _, qualname = name.partition(":")
            return self._from_module(module_name, qualname.split("."))

        segments = name.split(".")
        if len(segments) == 1:
            candidate = getattr(builtins, name, None)
            return candidate if isinstance(candidate, type) else None

        for split in range(len(segments) - 1, 0, -1):
            handle = self._from_module(".".join(segments[:split]), segments[split:])
            if handle is not None:
                return handle
        return None

    @staticmethod
    def _from_module(module_name: str, attrs: list[str]) -> type | None:
        # relative (".pkg") and gapped ("a..b") names never denote an absolute module
        if not all(part.strip() for part in module_name.split(".")) or not all(a.strip() for a in attrs):
            return None
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError:
            return None
        except Exception as exc:
            logger.warning("type_module_import_failed", module=module_name, error=repr(exc))
            return None
        for attr in attrs:
            target = getattr(target, attr, None)
            if target is None:
                return None
        return target if isinstance(target, type) else None
