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
"""Container types and enums."""

from enum import Enum, auto


class Scope(Enum):
    """Bean lifecycle scope."""

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"


class PropertyKind(Enum):
    """How a property record's value is interpreted."""

    UNDEFINED = auto()
    SIMPLE = auto()
    REFERENCE = auto()
    BEAN = auto()
    COLLECTION = auto()


class CollectionKind(Enum):
    """Container materialized for a collection property."""

    UNDEFINED = auto()
    ARRAY = auto()
    LIST = auto()
    SET = auto()
    MAP = auto()
