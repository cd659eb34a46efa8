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
"""Container exceptions: every failure raised while registering or inflating beans.

Each exception class carries an :class:`ErrorKind`; the kind's value doubles
as the machine-readable ``code`` of the underlying
:class:`~beanforge.kernel.exceptions.BeanForgeException`. Wrapped causes are
chained with ``raise ... from``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from beanforge.kernel.exceptions import ConfigurationException


class ErrorKind(Enum):
    """Classifies a bean context failure."""

    DUPLICATE_BEAN_ID = "DUPLICATE_BEAN_ID"
    UNKNOWN_BEAN_REFERENCE = "UNKNOWN_BEAN_REFERENCE"
    ABSTRACT_BEAN_INFLATION = "ABSTRACT_BEAN_INFLATION"
    PARENT_MISSING = "PARENT_MISSING"
    CLASS_MISSING = "CLASS_MISSING"
    CLASS_UNRESOLVABLE = "CLASS_UNRESOLVABLE"
    INSTANTIATION_FAILURE = "INSTANTIATION_FAILURE"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    PROPERTY_APPLICATION_FAILURE = "PROPERTY_APPLICATION_FAILURE"
    UNNAMED_PROPERTY = "UNNAMED_PROPERTY"
    UNDEFINED_PROPERTY_KIND = "UNDEFINED_PROPERTY_KIND"
    COLLECTION_SPEC_INVALID = "COLLECTION_SPEC_INVALID"
    COLLECTION_TYPE_MISSING = "COLLECTION_TYPE_MISSING"
    MAP_KEY_MISSING = "MAP_KEY_MISSING"
    CONVERSION_FAILURE = "CONVERSION_FAILURE"
    CYCLIC_INHERITANCE = "CYCLIC_INHERITANCE"
    CIRCULAR_REFERENCE = "CIRCULAR_REFERENCE"
    BEAN_DEFINITION_INVALID = "BEAN_DEFINITION_INVALID"


class BeanContextError(ConfigurationException):
    """Base class for bean registration and inflation failures."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(
            message=message,
            code=self.kind.value,
            context={k: v for k, v in context.items() if v is not None},
        )


class DuplicateBeanIdError(BeanContextError):
    """A bean with the same id is already registered."""

    kind = ErrorKind.DUPLICATE_BEAN_ID

    def __init__(self, bean_id: str) -> None:
        self.bean_id = bean_id
        super().__init__(f"Bean with id '{bean_id}' already registered", bean_id=bean_id)


class UnknownBeanReferenceError(BeanContextError):
    """No bean is registered under the requested id."""

    kind = ErrorKind.UNKNOWN_BEAN_REFERENCE

    def __init__(
        self,
        bean_id: str,
        *,
        required_by: str | None = None,
        prop: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.bean_id = bean_id
        self.required_by = required_by
        self.suggestions = suggestions or []

        if bean_id and bean_id.strip():
            headline = f"No such bean registered: '{bean_id}'"
        else:
            headline = "Bean reference value is empty"

        lines = [headline]
        if required_by or prop:
            lines.append("")
            if required_by:
                lines.append(f"  Required by: {required_by}")
            if prop:
                lines.append(f"    Property: {prop}")
        if self.suggestions:
            lines.append("")
            lines.append(f"  Similar registered ids: {', '.join(self.suggestions)}")

        super().__init__("\n".join(lines), bean_id=bean_id, required_by=required_by, property=prop)


class AbstractBeanInflationError(BeanContextError):
    """The bean is declared abstract and may only serve as a parent."""

    kind = ErrorKind.ABSTRACT_BEAN_INFLATION

    def __init__(self, tag: str | None) -> None:
        super().__init__(f"Bean '{tag}' is defined as abstract and can't be inflated", bean=tag)


class ParentMissingError(BeanContextError):
    """A bean's parent id does not resolve to a registered bean."""

    kind = ErrorKind.PARENT_MISSING

    def __init__(self, tag: str | None, parent_id: str) -> None:
        self.parent_id = parent_id
        super().__init__(
            f"Bean '{tag}' parent '{parent_id}' is not registered",
            bean=tag,
            parent_id=parent_id,
        )


class ClassMissingError(BeanContextError):
    """Neither the bean nor any of its ancestors names a class."""

    kind = ErrorKind.CLASS_MISSING

    def __init__(self, tag: str | None) -> None:
        super().__init__(f"Bean '{tag}' class undefined", bean=tag)


class ClassUnresolvableError(BeanContextError):
    """A type descriptor does not resolve to an importable class."""

    kind = ErrorKind.CLASS_UNRESOLVABLE

    def __init__(self, descriptor: str, tag: str | None = None) -> None:
        self.descriptor = descriptor
        super().__init__(
            f"Bean '{tag or descriptor}' class '{descriptor}' unresolvable "
            f"(use 'package.module.Class', 'package.module.Outer.Inner' or 'package.module:Class')",
            bean=tag,
            descriptor=descriptor,
        )


class InstantiationError(BeanContextError):
    """No constructor or factory produced an instance."""

    kind = ErrorKind.INSTANTIATION_FAILURE

    def __init__(self, tag: str | None, reason: str) -> None:
        super().__init__(f"Bean '{tag}' instantiating failed: {reason}", bean=tag)


class TypeMismatchError(BeanContextError):
    """The produced instance is not assignable to the bean's class."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, tag: str | None, expected: str, actual: str) -> None:
        super().__init__(
            f"Bean '{tag}' instantiating failed, expected '{expected}' but got '{actual}'",
            bean=tag,
            expected=expected,
            actual=actual,
        )


class PropertyApplicationError(BeanContextError):
    """A resolved property value could not be applied to the instance."""

    kind = ErrorKind.PROPERTY_APPLICATION_FAILURE

    def __init__(self, tag: str | None, prop: str, reason: str = "could not be applied") -> None:
        self.prop = prop
        super().__init__(f"Bean '{tag}' property '{prop}' {reason}", bean=tag, property=prop)


class UnnamedPropertyError(BeanContextError):
    """A bean declares a property without a name."""

    kind = ErrorKind.UNNAMED_PROPERTY

    def __init__(self, tag: str | None) -> None:
        super().__init__(f"Bean '{tag}' has unnamed property", bean=tag)


class UndefinedPropertyKindError(BeanContextError):
    """A property record's kind or value shape is not resolvable."""

    kind = ErrorKind.UNDEFINED_PROPERTY_KIND

    def __init__(self, tag: str | None, prop: str | None, reason: str = "type unresolved") -> None:
        super().__init__(f"Bean '{tag}' property '{prop}' {reason}", bean=tag, property=prop)


class CollectionSpecInvalidError(BeanContextError):
    """A collection property carries no usable collection spec, or its items cannot form one."""

    kind = ErrorKind.COLLECTION_SPEC_INVALID

    def __init__(self, tag: str | None, prop: str | None, reason: str = "collection value invalid") -> None:
        super().__init__(f"Bean '{tag}' property '{prop}' {reason}", bean=tag, property=prop)


class CollectionTypeMissingError(BeanContextError):
    """A collection's value type is absent or unresolvable."""

    kind = ErrorKind.COLLECTION_TYPE_MISSING

    def __init__(self, tag: str | None, prop: str | None) -> None:
        super().__init__(
            f"Bean '{tag}' property '{prop}' collection missing value type definition",
            bean=tag,
            property=prop,
        )


class MapKeyMissingError(BeanContextError):
    """A map collection lacks a key type, or one of its items lacks a key."""

    kind = ErrorKind.MAP_KEY_MISSING

    def __init__(
        self, tag: str | None, prop: str | None, reason: str = "collection missing key type definition"
    ) -> None:
        super().__init__(f"Bean '{tag}' property '{prop}' {reason}", bean=tag, property=prop)


class ConversionError(BeanContextError):
    """A raw value cannot be converted to the requested scalar kind."""

    kind = ErrorKind.CONVERSION_FAILURE

    def __init__(self, target: str, value: Any, reason: str = "") -> None:
        self.target = target
        self.value = value
        message = f"Cannot convert {value!r} to '{target}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, target=target)


class CyclicInheritanceError(BeanContextError):
    """A bean's parent chain loops back onto itself."""

    kind = ErrorKind.CYCLIC_INHERITANCE

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(f"Cyclic bean inheritance: {' -> '.join(chain)}", chain=chain)


class CircularReferenceError(BeanContextError):
    """A bean (transitively) references itself while being inflated.

    The ``chain`` attribute lists the beans under construction in the order
    they were entered, ending with the bean that closed the loop.
    """

    kind = ErrorKind.CIRCULAR_REFERENCE

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        lines = [f"Circular bean reference: {' -> '.join(chain)}"]
        lines.append("")
        lines.append("  Suggestion: Remove one of the value-ref properties or factory params on the chain")
        super().__init__("\n".join(lines), chain=chain)


class BeanDefinitionError(BeanContextError):
    """A declarative source cannot be translated into bean records."""

    kind = ErrorKind.BEAN_DEFINITION_INVALID

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        super().__init__(message if source is None else f"{message} ({source})", source=source)
