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
"""YAML bean definition loader."""

from __future__ import annotations

from typing import Any

import yaml  # type: ignore[import-untyped]

from beanforge.container.exceptions import BeanDefinitionError
from beanforge.loaders.structured import StructuredContextLoader


class YamlContextLoader(StructuredContextLoader):
    """Reads bean definitions from ``.yaml``/``.yml`` files.

    Uses the same document shape as the JSON loader; ``yaml.safe_load``
    keeps arbitrary tags out.
    """

    format_name = "yaml"

    def _parse(self, text: str, source: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise BeanDefinitionError(f"Parsing YAML failed: {exc}", source=source) from exc
