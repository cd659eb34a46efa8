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
"""Extension-keyed registry of context loaders."""

from __future__ import annotations

from pathlib import Path

import structlog

from beanforge.config.properties import ContextProperties, LoaderProperties
from beanforge.container.exceptions import BeanDefinitionError
from beanforge.context.bean_context import BeanContext
from beanforge.core.config import Config
from beanforge.loaders.base import ContextFactory
from beanforge.loaders.json_loader import JsonContextLoader
from beanforge.loaders.port import ContextLoader
from beanforge.loaders.xml_loader import XmlContextLoader
from beanforge.loaders.yaml_loader import YamlContextLoader

logger = structlog.get_logger("beanforge.loaders")


class LoaderRegistry:
    """Maps lower-case file extensions (``"json"``, ``"xml"``) to loaders."""

    def __init__(self) -> None:
        self._loaders: dict[str, ContextLoader] = {}

    @classmethod
    def default(
        cls,
        properties: LoaderProperties | None = None,
        context_factory: ContextFactory | None = None,
    ) -> LoaderRegistry:
        """Registry with the JSON, YAML and XML loaders installed."""
        registry = cls()
        yaml_loader = YamlContextLoader(properties, context_factory)
        registry.set_loader("json", JsonContextLoader(properties, context_factory))
        registry.set_loader("yaml", yaml_loader)
        registry.set_loader("yml", yaml_loader)
        registry.set_loader("xml", XmlContextLoader(properties, context_factory))
        return registry

    @classmethod
    def from_config(cls, config: Config) -> LoaderRegistry:
        """Default registry whose loaders and contexts follow *config*."""
        loader_properties = config.bind(LoaderProperties)
        context_properties = config.bind(ContextProperties)
        return cls.default(loader_properties, lambda: BeanContext(properties=context_properties))

    @property
    def extensions(self) -> list[str]:
        return sorted(self._loaders)

    def set_loader(self, extension: str, loader: ContextLoader | None) -> None:
        """Install *loader* for *extension*; ``None`` removes the extension."""
        extension = extension.strip().lstrip(".").lower()
        if not extension:
            return
        if loader is None:
            self._loaders.pop(extension, None)
        else:
            self._loaders[extension] = loader

    def get_loader(self, path: str | Path) -> ContextLoader | None:
        """Loader for *path*, matched on the longest registered extension."""
        name = str(path).lower()
        matches = [ext for ext in self._loaders if name.endswith("." + ext)]
        if not matches:
            return None
        return self._loaders[max(matches, key=len)]

    def load_context(self, path: str | Path) -> BeanContext:
        """Load a fresh context from *path* with the matching loader."""
        context = self._require(path).load_context(path)
        logger.info("context_loaded", path=str(path), beans=len(context))
        return context

    def merge_context(self, context: BeanContext, path: str | Path) -> BeanContext:
        """Merge the definitions in *path* into an existing *context*."""
        self._require(path).merge_context(context, path)
        logger.info("context_merged", path=str(path), beans=len(context))
        return context

    def _require(self, path: str | Path) -> ContextLoader:
        loader = self.get_loader(path)
        if loader is None:
            raise BeanDefinitionError(
                f"No loader registered for '{path}' (known extensions: {', '.join(self.extensions) or 'none'})"
            )
        return loader
