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
"""BeanContext: the facade loaders populate and callers inflate from."""

from __future__ import annotations

from typing import Any

import structlog

from beanforge.config.properties import ContextProperties
from beanforge.container.bean import BeanRecord, PropertyRecord
from beanforge.container.engine import InflationEngine
from beanforge.container.lookup import TypeLookup
from beanforge.container.registry import BeanRegistry
from beanforge.container.types import Scope
from beanforge.core.config import Config

logger = structlog.get_logger("beanforge.context")


class BeanContext:
    """A registry of bean records plus the engine that inflates them.

    Loaders talk to the ingestion side (:meth:`add_bean`,
    :meth:`register_with_id`, :meth:`add_or_replace_property`,
    :meth:`set_factory`, :meth:`get_bean`); application code calls
    :meth:`inflate`.
    """

    def __init__(
        self,
        registry: BeanRegistry | None = None,
        lookup: TypeLookup | None = None,
        properties: ContextProperties | None = None,
    ) -> None:
        self._properties = properties or ContextProperties()
        self._registry = registry or BeanRegistry()
        self._lookup = lookup or TypeLookup(self._properties.type_aliases)
        if lookup is not None:
            for descriptor, target in self._properties.type_aliases.items():
                self._lookup.alias(descriptor, target)
        self._engine = InflationEngine(self._registry, self._lookup)

    @classmethod
    def from_config(cls, config: Config) -> BeanContext:
        """Build a context whose defaults come from ``beanforge.context.*``."""
        properties = config.bind(ContextProperties)
        logger.debug(
            "bean_context_configured",
            default_scope=properties.default_scope,
            type_aliases=len(properties.type_aliases),
        )
        return cls(properties=properties)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def properties(self) -> ContextProperties:
        return self._properties

    @property
    def default_scope(self) -> Scope:
        """Scope given to records whose definition does not name one."""
        return Scope(self._properties.default_scope)

    @property
    def registry(self) -> BeanRegistry:
        return self._registry

    @property
    def lookup(self) -> TypeLookup:
        return self._lookup

    @property
    def engine(self) -> InflationEngine:
        return self._engine

    @property
    def bean_ids(self) -> list[str]:
        """Registered bean ids in registration order."""
        return self._registry.ids()

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add_bean(self, record: BeanRecord) -> None:
        self._registry.add(record)

    def register_with_id(self, record: BeanRecord) -> None:
        self._registry.register(record)

    def add_or_replace_property(self, record: BeanRecord, prop: PropertyRecord) -> None:
        self._registry.add_or_replace_property(record, prop)

    def set_factory(self, record: BeanRecord, prop: PropertyRecord | None) -> None:
        self._registry.set_factory(record, prop)

    def get_bean(self, bean_id: str) -> BeanRecord | None:
        """The record registered under *bean_id*, without inflating it."""
        return self._registry.get(bean_id)

    # ------------------------------------------------------------------
    # Inflation
    # ------------------------------------------------------------------

    def inflate(self, bean_id: str) -> Any:
        """Inflate the bean registered under *bean_id*.

        Raises:
            UnknownBeanReferenceError: Nothing is registered under the id.
            BeanContextError: Any other failure while building the bean.
        """
        return self._engine.inflate(bean_id)

    def find_class(self, descriptor: str) -> Any | None:
        return self._engine.find_class(descriptor)

    def contains_bean(self, bean_id: str) -> bool:
        return self._registry.contains(bean_id)

    def __len__(self) -> int:
        return len(self._registry)
