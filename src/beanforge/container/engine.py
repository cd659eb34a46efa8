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
"""Bean inflation engine: turns bean records into live instances."""

from __future__ import annotations

import threading
from typing import Any

import structlog

from beanforge.container.bean import BeanRecord, CollectionSpec
from beanforge.container.exceptions import (
    AbstractBeanInflationError,
    BeanContextError,
    CircularReferenceError,
    ClassMissingError,
    ClassUnresolvableError,
    CyclicInheritanceError,
    InstantiationError,
    ParentMissingError,
    TypeMismatchError,
    UnknownBeanReferenceError,
    UnnamedPropertyError,
)
from beanforge.container.lookup import TypeLookup
from beanforge.container.methods import constructor_candidates, factory_candidates, resolve
from beanforge.container.properties import PropertyResolver
from beanforge.container.registry import BeanRegistry
from beanforge.container.setters import apply_property
from beanforge.container.types import Scope
from beanforge.conversion.coercion import convert, is_instance, type_name
from beanforge.conversion.scalars import ScalarKind

logger = structlog.get_logger("beanforge.container.engine")


class InflationEngine:
    """Resolves bean records, and their ancestor chains, into instances.

    Handles singleton caching (at most one construction per record, also
    under concurrent first use), class and factory inheritance,
    constructor/factory overload selection, and property application where
    a child's property always wins over a same-named inherited one.
    Parent-chain loops and reference loops are reported instead of
    recursing without bound.
    """

    def __init__(self, registry: BeanRegistry, lookup: TypeLookup | None = None) -> None:
        self._registry = registry
        self._lookup = lookup or TypeLookup()
        self._resolver = PropertyResolver(self)
        self._local = threading.local()

    @property
    def registry(self) -> BeanRegistry:
        return self._registry

    @property
    def lookup(self) -> TypeLookup:
        return self._lookup

    def parent_of(self, record: BeanRecord) -> BeanRecord | None:
        if not record.parent_id or not record.parent_id.strip():
            return None
        return self._registry.get(record.parent_id)

    def find_class(self, descriptor: str) -> Any | None:
        return self._lookup.find(descriptor)

    def inflate(self, bean_id: str, *, required_by: str | None = None, prop: str | None = None) -> Any:
        """Inflate the bean registered under *bean_id*."""
        record = self._registry.get(bean_id)
        if record is None:
            raise UnknownBeanReferenceError(
                bean_id,
                required_by=required_by,
                prop=prop,
                suggestions=self._registry.similar_ids(bean_id),
            )
        return self.inflate_record(record)

    def inflate_record(self, record: BeanRecord) -> Any:
        """Inflate *record*, which may be anonymous."""
        if record.scope is Scope.SINGLETON and record.singleton_instance is not None:
            return record.singleton_instance

        stack = self._in_creation()
        if any(record is entered for entered in stack):
            raise CircularReferenceError([str(r.info_tag) for r in stack] + [str(record.info_tag)])
        stack.append(record)
        try:
            if record.scope is not Scope.SINGLETON:
                return self._create(record)
            with record.lock:
                # Second check after acquiring the record lock
                if record.singleton_instance is not None:
                    return record.singleton_instance
                instance = self._create(record)
                record.singleton_instance = instance
                return instance
        except BeanContextError as exc:
            if len(stack) == 1:
                logger.warning("bean_inflation_failed", bean=record.info_tag, code=exc.code)
            raise
        finally:
            stack.pop()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _in_creation(self) -> list[BeanRecord]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def _ancestry(self, record: BeanRecord) -> list[BeanRecord]:
        """The record followed by its ancestors, nearest first."""
        chain = [record]
        current = record
        while current.parent_id and current.parent_id.strip():
            parent = self._registry.get(current.parent_id)
            if parent is None:
                raise ParentMissingError(current.info_tag, current.parent_id)
            if any(parent is seen for seen in chain):
                raise CyclicInheritanceError([str(r.info_tag) for r in chain] + [str(parent.info_tag)])
            chain.append(parent)
            current = parent
        return chain

    def _create(self, record: BeanRecord) -> Any:
        tag = record.info_tag
        if record.is_abstract:
            raise AbstractBeanInflationError(tag)

        ancestry = self._ancestry(record)
        class_name = next((r.class_name for r in ancestry if r.class_name and r.class_name.strip()), None)
        if class_name is None:
            raise ClassMissingError(tag)

        try:
            handle = self._lookup.find(class_name)
        except Exception as exc:
            raise ClassUnresolvableError(class_name, tag) from exc
        if handle is None:
            raise ClassUnresolvableError(class_name, tag)

        if record.assign is not None:
            instance = convert(handle, record.assign)
            self._check_instance(tag, handle, instance)
            logger.debug("bean_assigned", bean=tag, type=type_name(handle))
            return instance

        factory_owner = next((r for r in ancestry if r.factory is not None), None)
        instance = self._instantiate(record, handle, factory_owner)
        self._check_instance(tag, handle, instance)
        self._apply_properties(ancestry, instance)
        logger.debug("bean_inflated", bean=tag, type=type_name(type(instance)), scope=record.scope.value)
        return instance

    @staticmethod
    def _check_instance(tag: str | None, handle: Any, instance: Any) -> None:
        if instance is None:
            raise InstantiationError(tag, "no instance produced")
        if not is_instance(handle, instance):
            raise TypeMismatchError(tag, type_name(handle), type_name(type(instance)))

    def _instantiate(self, record: BeanRecord, handle: Any, factory_owner: BeanRecord | None) -> Any:
        tag = record.info_tag
        if isinstance(handle, ScalarKind):
            if factory_owner is None:
                return handle.default()
            cls = handle.python_type
        else:
            cls = handle

        factory = factory_owner.factory if factory_owner is not None else None
        target = cls.__qualname__
        values: list[Any] = []
        if factory is None:
            candidates = constructor_candidates(cls)
        else:
            params = factory.value.items if isinstance(factory.value, CollectionSpec) else []
            values = [self._resolver.resolve(record, item, inherited=False) for item in params]
            if factory.name and factory.name.strip():
                target = f"{cls.__qualname__}.{factory.name}"
                candidates = factory_candidates(cls, factory.name)
            else:
                candidates = constructor_candidates(cls)

        resolution = resolve(candidates, values)
        if resolution is None:
            raise InstantiationError(tag, f"no overload of '{target}' accepts {len(values)} argument(s)")

        logger.debug(
            "bean_instantiating",
            bean=tag,
            candidate=resolution.candidate.name,
            perfect=resolution.perfect,
        )
        try:
            return resolution.invoke()
        except BeanContextError:
            raise
        except Exception as exc:
            raise InstantiationError(
                tag, f"'{resolution.candidate.name}' raised {type(exc).__name__}: {exc}"
            ) from exc

    def _apply_properties(self, ancestry: list[BeanRecord], instance: Any) -> None:
        """Apply own properties, then inherited ones that were not overridden."""
        applied: set[str] = set()
        for owner in ancestry:
            for prop in owner.properties:
                if prop.name is None or not prop.name.strip():
                    raise UnnamedPropertyError(owner.info_tag)
                if prop.name in applied:
                    continue
                applied.add(prop.name)
                value = self._resolver.resolve(owner, prop)
                apply_property(instance, prop.name, value, tag=owner.info_tag)
