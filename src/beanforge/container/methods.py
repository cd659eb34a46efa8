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
"""Constructor and factory overload resolution.

Python has a single implementation per callable, so "overloads" are the
``typing.overload`` declarations of a constructor or static factory, read
back with :func:`typing.get_overloads` in declaration order. Callables with
no declared overloads contribute their own signature as the only candidate.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from beanforge.container.exceptions import ConversionError
from beanforge.conversion.coercion import coerce_to, is_assignable

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class Candidate:
    """One invocable signature.

    ``target`` is what gets called; ``parameters`` are the positional
    parameters after ``self``/``cls`` have been dropped.
    """

    name: str
    target: Callable[..., Any]
    parameters: tuple[inspect.Parameter, ...]
    annotations: dict[str, Any]
    variadic: inspect.Parameter | None = None

    def accepts_arity(self, count: int) -> bool:
        required = sum(1 for p in self.parameters if p.default is inspect.Parameter.empty)
        if count < required:
            return False
        return count <= len(self.parameters) or self.variadic is not None

    def annotation_at(self, index: int) -> Any:
        param = self.parameters[index] if index < len(self.parameters) else self.variadic
        if param is None:
            return inspect.Parameter.empty
        return self.annotations.get(param.name, param.annotation)


@dataclass(frozen=True)
class Resolution:
    """The chosen candidate and the (possibly converted) arguments to call it with."""

    candidate: Candidate
    args: tuple[Any, ...]
    perfect: bool

    def invoke(self) -> Any:
        return self.candidate.target(*self.args)


def _type_hints(func: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception:
        # unresolvable forward references: fall back to the raw strings
        return dict(getattr(func, "__annotations__", {}))


def _candidate(name: str, target: Callable[..., Any], func: Callable[..., Any], skip_first: bool) -> Candidate | None:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    params = list(sig.parameters.values())
    if skip_first and params:
        params = params[1:]
    if any(
        p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty for p in params
    ):
        return None
    positional = tuple(p for p in params if p.kind in _POSITIONAL)
    variadic = next((p for p in params if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
    return Candidate(
        name=name,
        target=target,
        parameters=positional,
        annotations=_type_hints(func),
        variadic=variadic,
    )


def _expand(func: Callable[..., Any]) -> list[Callable[..., Any]]:
    # overloads of static/class methods are registered as the descriptor objects
    overloads = [getattr(o, "__func__", o) for o in typing.get_overloads(func)]
    return overloads or [func]


def constructor_candidates(cls: type) -> list[Candidate]:
    """Candidates for building *cls* through its constructor."""
    init = inspect.getattr_static(cls, "__init__", None)
    if init is None or init is object.__init__ or not inspect.isfunction(init):
        found = _candidate(cls.__qualname__, cls, cls, skip_first=False)
        if found is None:
            # builtins without an introspectable signature take anything
            found = Candidate(
                name=cls.__qualname__,
                target=cls,
                parameters=(),
                annotations={},
                variadic=inspect.Parameter("args", inspect.Parameter.VAR_POSITIONAL),
            )
        return [found]

    candidates = []
    for func in _expand(init):
        found = _candidate(cls.__qualname__, cls, func, skip_first=True)
        if found is not None:
            candidates.append(found)
    return candidates


def factory_candidates(cls: type, name: str) -> list[Candidate]:
    """Candidates for the static or class method *name* on *cls*.

    Instance methods are not factories and yield no candidates.
    """
    try:
        raw = inspect.getattr_static(cls, name)
    except AttributeError:
        return []
    if isinstance(raw, staticmethod):
        func, skip_first = raw.__func__, False
    elif isinstance(raw, classmethod):
        func, skip_first = raw.__func__, True
    else:
        return []

    target = getattr(cls, name)
    candidates = []
    for overload in _expand(func):
        found = _candidate(f"{cls.__qualname__}.{name}", target, overload, skip_first=skip_first)
        if found is not None:
            candidates.append(found)
    return candidates


def _match(candidate: Candidate, values: Sequence[Any]) -> tuple[tuple[Any, ...], bool] | None:
    converted: list[Any] = []
    perfect = True
    for index, value in enumerate(values):
        annotation = candidate.annotation_at(index)
        if is_assignable(annotation, value):
            converted.append(value)
            continue
        try:
            converted.append(coerce_to(annotation, value))
        except ConversionError:
            return None
        perfect = False
    return tuple(converted), perfect


def resolve(candidates: Sequence[Candidate], values: Sequence[Any]) -> Resolution | None:
    """Pick the candidate to invoke with *values*.

    Scans in order, remembering the first candidate whose parameters all
    accept their values unchanged (perfect) and the first that accepts them
    with some conversion (ok). Scanning stops once both are known; the
    perfect candidate wins.
    """
    first_perfect: Resolution | None = None
    first_ok: Resolution | None = None
    for candidate in candidates:
        if first_perfect is not None and first_ok is not None:
            break
        if not candidate.accepts_arity(len(values)):
            continue
        matched = _match(candidate, values)
        if matched is None:
            continue
        args, perfect = matched
        resolution = Resolution(candidate=candidate, args=args, perfect=perfect)
        if first_ok is None:
            first_ok = resolution
        if perfect and first_perfect is None:
            first_perfect = resolution
    return first_perfect or first_ok
