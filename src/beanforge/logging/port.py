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
"""Logging port: how beanforge's ``beanforge.<area>`` loggers are set up."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from beanforge.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Backend that owns the ``beanforge.*`` loggers.

    ``configure`` reads ``beanforge.logging.format`` and the
    ``beanforge.logging.level`` tree (``root`` plus per-area entries such
    as ``beanforge.loaders``).
    """

    def configure(self, config: Config) -> None:
        """Apply the format and levels found in *config*."""
        ...

    def get_logger(self, name: str) -> Any:
        """Logger for an area, e.g. ``beanforge.container``."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Change one logger's level (``DEBUG``, ``INFO``, ...) at runtime."""
        ...
