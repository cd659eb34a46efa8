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
"""beanforge container: bean records, registry and the inflation engine."""

from beanforge.container.exceptions import (
    AbstractBeanInflationError,
    BeanContextError,
    BeanDefinitionError,
    CircularReferenceError,
    ClassMissingError,
    ClassUnresolvableError,
    CollectionSpecInvalidError,
    CollectionTypeMissingError,
    ConversionError,
    CyclicInheritanceError,
    DuplicateBeanIdError,
    ErrorKind,
    InstantiationError,
    MapKeyMissingError,
    ParentMissingError,
    PropertyApplicationError,
    TypeMismatchError,
    UndefinedPropertyKindError,
    UnknownBeanReferenceError,
    UnnamedPropertyError,
)
from beanforge.container.types import CollectionKind, PropertyKind, Scope
from beanforge.container.bean import BeanRecord, CollectionSpec, PropertyRecord
from beanforge.container.registry import BeanRegistry
from beanforge.container.lookup import TypeLookup
from beanforge.container.engine import InflationEngine

__all__ = [
    "AbstractBeanInflationError",
    "BeanContextError",
    "BeanDefinitionError",
    "BeanRecord",
    "BeanRegistry",
    "CircularReferenceError",
    "ClassMissingError",
    "ClassUnresolvableError",
    "CollectionKind",
    "CollectionSpec",
    "CollectionSpecInvalidError",
    "CollectionTypeMissingError",
    "ConversionError",
    "CyclicInheritanceError",
    "DuplicateBeanIdError",
    "ErrorKind",
    "InflationEngine",
    "InstantiationError",
    "MapKeyMissingError",
    "ParentMissingError",
    "PropertyApplicationError",
    "PropertyKind",
    "PropertyRecord",
    "Scope",
    "TypeLookup",
    "TypeMismatchError",
    "UndefinedPropertyKindError",
    "UnknownBeanReferenceError",
    "UnnamedPropertyError",
]
