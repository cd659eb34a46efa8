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
"""JSON bean definition loader."""

from __future__ import annotations

import json
from typing import Any

from beanforge.container.exceptions import BeanDefinitionError
from beanforge.loaders.structured import StructuredContextLoader


class JsonContextLoader(StructuredContextLoader):
    """Reads bean definitions from ``.json`` files."""

    format_name = "json"

    def _parse(self, text: str, source: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise BeanDefinitionError(f"Parsing JSON failed: {exc}", source=source) from exc
