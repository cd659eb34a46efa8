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
"""beanforge conversion: scalar kinds and value coercion."""

from beanforge.conversion.coercion import coerce_to, convert, is_assignable, is_instance, type_name
from beanforge.conversion.scalars import ScalarKind, scalar_kind_for

__all__ = [
    "ScalarKind",
    "coerce_to",
    "convert",
    "is_assignable",
    "is_instance",
    "scalar_kind_for",
    "type_name",
]
