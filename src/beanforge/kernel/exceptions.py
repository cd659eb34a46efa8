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
"""Unified exception hierarchy for beanforge.

All library exceptions inherit from BeanForgeException, enabling unified
error handling: catch BeanForgeException to handle every failure raised by
the engine or the loaders, or catch specific subclasses for targeted
handling.

Categories:
- ConfigurationException: bean definitions that cannot be loaded, wired or
  inflated
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class BeanForgeException(Exception):
    """Base exception for all beanforge errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "DUPLICATE_BEAN_ID").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(BeanForgeException):
    """Bean definitions that are malformed, inconsistent or not inflatable."""
