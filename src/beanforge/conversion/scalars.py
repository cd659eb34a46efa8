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
"""Scalar kinds: the fixed set of primitive targets that coercion understands.

A :class:`ScalarKind` member doubles as a type handle: type lookup returns it
for the builtin aliases (``"int"``, ``"ulong"``, ...) and the engine checks
produced values against it with :meth:`ScalarKind.accepts`.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

FLOAT32_MAX = 3.4028234663852886e38


class ScalarKind(Enum):
    """Primitive kinds, valued by their descriptor alias."""

    BOOL = "bool"
    BYTE = "byte"
    CHAR = "char"
    INT16 = "short"
    INT32 = "int"
    INT64 = "long"
    UINT16 = "ushort"
    UINT32 = "uint"
    UINT64 = "ulong"
    FLOAT32 = "float"
    FLOAT64 = "double"
    STRING = "string"

    @property
    def python_type(self) -> type:
        """The Python type values of this kind are represented with."""
        if self is ScalarKind.BOOL:
            return bool
        if self in (ScalarKind.CHAR, ScalarKind.STRING):
            return str
        if self.is_float:
            return float
        return int

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_BOUNDS

    @property
    def is_float(self) -> bool:
        return self in (ScalarKind.FLOAT32, ScalarKind.FLOAT64)

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Inclusive integer range, or ``None`` for non-integer kinds."""
        return _INTEGER_BOUNDS.get(self)

    def in_range(self, value: Any) -> bool:
        bounds = self.bounds
        if bounds is not None:
            return bounds[0] <= value <= bounds[1]
        if self is ScalarKind.FLOAT32 and math.isfinite(value):
            return -FLOAT32_MAX <= value <= FLOAT32_MAX
        return True

    def accepts(self, value: Any) -> bool:
        """Whether *value* is already a valid instance of this kind."""
        if self is ScalarKind.BOOL:
            return isinstance(value, bool)
        if self is ScalarKind.STRING:
            return isinstance(value, str)
        if self is ScalarKind.CHAR:
            return isinstance(value, str) and len(value) == 1
        if self.is_integer:
            return isinstance(value, int) and not isinstance(value, bool) and self.in_range(value)
        return isinstance(value, float) and self.in_range(value)

    def default(self) -> Any:
        """Value produced by default construction of this kind."""
        if self is ScalarKind.CHAR:
            return "\0"
        return self.python_type()


_INTEGER_BOUNDS: dict[ScalarKind, tuple[int, int]] = {
    ScalarKind.BYTE: (0, 2**8 - 1),
    ScalarKind.INT16: (-(2**15), 2**15 - 1),
    ScalarKind.INT32: (-(2**31), 2**31 - 1),
    ScalarKind.INT64: (-(2**63), 2**63 - 1),
    ScalarKind.UINT16: (0, 2**16 - 1),
    ScalarKind.UINT32: (0, 2**32 - 1),
    ScalarKind.UINT64: (0, 2**64 - 1),
}

_PYTHON_TYPES: dict[type, ScalarKind] = {
    bool: ScalarKind.BOOL,
    int: ScalarKind.INT64,
    float: ScalarKind.FLOAT64,
    str: ScalarKind.STRING,
}


def scalar_kind_for(target: Any) -> ScalarKind | None:
    """Map a type handle (scalar kind or Python builtin) to its scalar kind."""
    if isinstance(target, ScalarKind):
        return target
    if isinstance(target, type):
        return _PYTHON_TYPES.get(target)
    return None
