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
"""Tests for the beanforge exception hierarchy."""

import pytest

from beanforge.container.exceptions import (
    BeanContextError,
    CircularReferenceError,
    ConversionError,
    DuplicateBeanIdError,
    ErrorKind,
    PropertyApplicationError,
    UnknownBeanReferenceError,
)
from beanforge.kernel.exceptions import BeanForgeException, ConfigurationException


class TestBeanForgeException:
    def test_basic_creation(self):
        exc = BeanForgeException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.message == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code_and_context(self):
        exc = BeanForgeException("bad bean", code="BAD", context={"bean": "pool"})
        assert exc.code == "BAD"
        assert exc.context["bean"] == "pool"

    def test_context_defaults_to_empty_dict(self):
        exc = BeanForgeException("test")
        exc.context["key"] = "value"
        exc2 = BeanForgeException("test2")
        assert exc2.context == {}


class TestExceptionHierarchy:
    def test_configuration_is_beanforge(self):
        assert issubclass(ConfigurationException, BeanForgeException)

    def test_bean_context_error_is_configuration(self):
        assert issubclass(BeanContextError, ConfigurationException)

    def test_catch_all_with_base(self):
        errors = [
            DuplicateBeanIdError("pool"),
            UnknownBeanReferenceError("pool"),
            ConversionError("int", "abc"),
        ]
        for error in errors:
            with pytest.raises(BeanForgeException):
                raise error


class TestErrorKinds:
    def test_code_is_kind_value(self):
        exc = DuplicateBeanIdError("pool")
        assert exc.kind is ErrorKind.DUPLICATE_BEAN_ID
        assert exc.code == "DUPLICATE_BEAN_ID"
        assert exc.context == {"bean_id": "pool"}

    def test_none_context_values_are_dropped(self):
        exc = UnknownBeanReferenceError("pool")
        assert "required_by" not in exc.context
        assert "property" not in exc.context

    def test_every_subclass_declares_its_own_kind(self):
        kinds = {cls.kind for cls in BeanContextError.__subclasses__()}
        assert kinds == set(ErrorKind)


class TestMessages:
    def test_unknown_reference_lists_requirer_and_suggestions(self):
        exc = UnknownBeanReferenceError("poool", required_by="service", prop="pool", suggestions=["pool"])
        message = str(exc)
        assert "No such bean registered: 'poool'" in message
        assert "Required by: service" in message
        assert "Property: pool" in message
        assert "Similar registered ids: pool" in message

    def test_blank_reference_message(self):
        exc = UnknownBeanReferenceError("", required_by="service")
        assert str(exc).startswith("Bean reference value is empty")

    def test_property_application_keeps_property_name(self):
        exc = PropertyApplicationError("service", "size")
        assert exc.prop == "size"
        assert "Bean 'service' property 'size' could not be applied" == str(exc)

    def test_conversion_error_reason(self):
        exc = ConversionError("int", "abc", "not an integer")
        assert exc.target == "int"
        assert exc.value == "abc"
        assert str(exc) == "Cannot convert 'abc' to 'int': not an integer"

    def test_circular_reference_shows_chain(self):
        exc = CircularReferenceError(["a", "b", "a"])
        assert exc.chain == ["a", "b", "a"]
        assert "a -> b -> a" in str(exc)
