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
"""beanforge: declarative bean definitions inflated into live Python objects.

Bean records (loaded from JSON, YAML or XML, or built in code) describe the
class, scope, parent and properties of each object; the inflation engine
turns them into instances on demand.
"""

from beanforge.context import BeanContext
from beanforge.container import (
    BeanContextError,
    BeanRecord,
    BeanRegistry,
    CollectionKind,
    CollectionSpec,
    ErrorKind,
    InflationEngine,
    PropertyKind,
    PropertyRecord,
    Scope,
    TypeLookup,
)
from beanforge.conversion import ScalarKind
from beanforge.core.config import Config, config_properties
from beanforge.kernel.exceptions import BeanForgeException, ConfigurationException
from beanforge.loaders import LoaderRegistry

__version__ = "0.1.0"

__all__ = [
    "BeanContext",
    "BeanContextError",
    "BeanForgeException",
    "BeanRecord",
    "BeanRegistry",
    "CollectionKind",
    "CollectionSpec",
    "Config",
    "ConfigurationException",
    "ErrorKind",
    "InflationEngine",
    "LoaderRegistry",
    "PropertyKind",
    "PropertyRecord",
    "ScalarKind",
    "Scope",
    "TypeLookup",
    "config_properties",
]
