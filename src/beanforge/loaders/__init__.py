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
"""beanforge loaders: JSON, YAML and XML front-ends that populate a BeanContext."""

from beanforge.loaders.base import FileContextLoader
from beanforge.loaders.json_loader import JsonContextLoader
from beanforge.loaders.port import ContextLoader
from beanforge.loaders.registry import LoaderRegistry
from beanforge.loaders.structured import StructuredContextLoader
from beanforge.loaders.xml_loader import XmlContextLoader
from beanforge.loaders.yaml_loader import YamlContextLoader

__all__ = [
    "ContextLoader",
    "FileContextLoader",
    "JsonContextLoader",
    "LoaderRegistry",
    "StructuredContextLoader",
    "XmlContextLoader",
    "YamlContextLoader",
]
