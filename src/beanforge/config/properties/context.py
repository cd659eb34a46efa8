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
"""Bean context configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from beanforge.core.config import config_properties


@config_properties(prefix="beanforge.context")
class ContextProperties(BaseModel):
    """Configuration for bean contexts (beanforge.context.*).

    ``type_aliases`` maps a descriptor used in bean definitions onto another
    descriptor, usually a dotted import path.
    """

    default_scope: Literal["singleton", "prototype"] = "singleton"
    type_aliases: dict[str, str] = Field(default_factory=dict)
