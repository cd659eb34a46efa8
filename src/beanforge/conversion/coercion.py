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
"""Scalar type coercion and annotation-based assignability checks.

:func:`convert` turns raw declarative values (usually strings) into one of
the :class:`~beanforge.conversion.scalars.ScalarKind` targets. Any target
outside the scalar surface receives the raw value unchanged.

:func:`is_assignable` and :func:`coerce_to` apply the same rules to type
annotations, which is how constructor overloads, setters and fields decide
whether a value fits directly or only after conversion.
"""

from __future__ import annotations

import inspect
import math
import re
import types
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from beanforge.container.exceptions import ConversionError
from beanforge.conversion.scalars import ScalarKind, scalar_kind_for

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
_FLOAT_SPECIALS = {
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
    "nan": math.nan,
}


def render(value: Any) -> str:
    """Render *value* as culture-invariant text.

    Integral floats drop the fractional part (``3.0`` renders as ``"3"``) so
    they still convert to integer kinds; other floats go through ``repr`` so
    the text round-trips exactly.
    """
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    return str(value)


def convert(target: Any, value: Any) -> Any:
    """Convert *value* to the scalar kind designated by *target*.

    Raises:
        ConversionError: The text is malformed or out of range for the kind.
    """
    kind = scalar_kind_for(target)
    if kind is None or value is None:
        return value

    text = render(value)
    if kind is ScalarKind.STRING:
        return text
    if kind is ScalarKind.BOOL:
        lowered = text.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ConversionError(kind.value, value, "expected 'true' or 'false'")
    if kind is ScalarKind.CHAR:
        if len(text) != 1:
            raise ConversionError(kind.value, value, "expected exactly one character")
        return text
    if kind.is_integer:
        if not _INTEGER_RE.match(text):
            raise ConversionError(kind.value, value, "not an integer")
        number = int(text)
        if not kind.in_range(number):
            low, high = kind.bounds  # type: ignore[misc]
            raise ConversionError(kind.value, value, f"outside [{low}, {high}]")
        return number

    stripped = text.strip()
    special = _FLOAT_SPECIALS.get(stripped.lower())
    if special is not None:
        return special
    if not _FLOAT_RE.match(text):
        raise ConversionError(kind.value, value, "not a number")
    number = float(stripped)
    if not math.isfinite(number) or not kind.in_range(number):
        raise ConversionError(kind.value, value, "out of range")
    return number


def type_name(handle: Any) -> str:
    """Human-readable name of a type handle or annotation."""
    if isinstance(handle, ScalarKind):
        return handle.value
    if isinstance(handle, type):
        return f"{handle.__module__}.{handle.__qualname__}"
    return repr(handle)


def is_instance(handle: Any, value: Any) -> bool:
    """Whether *value* is an instance of the resolved type *handle*."""
    if isinstance(handle, ScalarKind):
        return handle.accepts(value)
    if handle is object:
        return True
    if isinstance(handle, type):
        return isinstance(value, handle)
    return True


def is_assignable(annotation: Any, value: Any) -> bool:
    """Whether *value* can be passed where *annotation* is declared.

    ``None`` is assignable everywhere; unannotated and unresolvable (string)
    annotations accept anything. ``bool`` values are not accepted for
    ``int`` annotations.
    """
    if value is None:
        return True
    if annotation is inspect.Parameter.empty or annotation is Any or annotation is object:
        return True
    if isinstance(annotation, str):
        return True
    if isinstance(annotation, ScalarKind):
        return annotation.accepts(value)

    origin = get_origin(annotation)
    if origin is Annotated:
        return is_assignable(get_args(annotation)[0], value)
    if origin is Union or isinstance(annotation, types.UnionType):
        return any(is_assignable(arm, value) for arm in get_args(annotation))
    if origin is Literal:
        return value in get_args(annotation)
    if origin is not None:
        return not isinstance(origin, type) or isinstance(value, origin)

    if annotation is int and isinstance(value, bool):
        return False
    if isinstance(annotation, type):
        return isinstance(value, annotation)
    return True


def coerce_to(annotation: Any, value: Any) -> Any:
    """Convert *value* so it satisfies *annotation*.

    Optional and union annotations try each scalar arm in declaration order.

    Raises:
        ConversionError: No conversion yields an assignable value.
    """
    if is_assignable(annotation, value):
        return value

    origin = get_origin(annotation)
    if origin is Annotated:
        return coerce_to(get_args(annotation)[0], value)

    arms = (
        [arm for arm in get_args(annotation) if arm is not type(None)]
        if origin is Union or isinstance(annotation, types.UnionType)
        else [annotation]
    )
    error: ConversionError | None = None
    for arm in arms:
        if scalar_kind_for(arm) is None:
            continue
        try:
            converted = convert(arm, value)
        except ConversionError as exc:
            error = exc
            continue
        if is_assignable(arm, converted):
            return converted
    if error is not None:
        raise error
    raise ConversionError(type_name(annotation), value, "incompatible type")
