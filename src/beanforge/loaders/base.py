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
"""Shared machinery for file-based loaders: reading, imports and field parsing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from beanforge.config.properties import LoaderProperties
from beanforge.container.bean import BeanRecord
from beanforge.container.exceptions import BeanDefinitionError
from beanforge.container.types import Scope
from beanforge.context.bean_context import BeanContext
from beanforge.conversion.coercion import render

logger = structlog.get_logger("beanforge.loaders")

ContextFactory = Callable[[], BeanContext]


@dataclass
class LoadSession:
    """State of one load call: which files were read and which one is current."""

    context: BeanContext
    loaded: set[Path] = field(default_factory=set)
    current: Path | None = None


def parse_flag(value: Any, name: str, source: str | None = None) -> bool:
    """Parse a boolean flag given as a bool or as ``"true"``/``"false"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise BeanDefinitionError(f"Flag '{name}' value {value!r} invalid, expected true or false", source=source)


def parse_scope(value: Any, source: str | None = None) -> Scope:
    try:
        return Scope(str(value).strip())
    except ValueError:
        raise BeanDefinitionError(
            f"Bean scope value '{value}' invalid, expected 'singleton' or 'prototype'", source=source
        ) from None


def scalar_text(value: Any) -> str | None:
    """Literal text of a parsed scalar, matching what an XML attribute would hold."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return render(value)


def merge_target(context: BeanContext, bean_id: Any, source: str | None = None) -> BeanRecord:
    """The already-registered record that a merge-by-id definition updates."""
    record = context.get_bean(str(bean_id)) if bean_id is not None else None
    if record is None:
        raise BeanDefinitionError(f"Cannot merge into bean '{bean_id}': no such bean registered", source=source)
    return record


def new_record(context: BeanContext) -> BeanRecord:
    record = BeanRecord(scope=context.default_scope)
    context.add_bean(record)
    return record


def assign_id(context: BeanContext, record: BeanRecord, bean_id: Any) -> None:
    """Give *record* the id and index it, unless it already carries that id."""
    bean_id = str(bean_id).strip()
    if not bean_id or record.id == bean_id:
        return
    record.id = bean_id
    context.register_with_id(record)


class FileContextLoader(ABC):
    """Base class for loaders that read one document per file.

    Subclasses parse the text (:meth:`_parse`) and translate the document
    into records (:meth:`_merge_document`), calling :meth:`_import` for every
    import directive they meet. Relative import paths resolve against the
    importing file's directory, and a file is read at most once per load.
    """

    format_name: str = "definition"

    def __init__(
        self,
        properties: LoaderProperties | None = None,
        context_factory: ContextFactory | None = None,
    ) -> None:
        self._properties = properties or LoaderProperties()
        self._context_factory = context_factory or BeanContext

    @property
    def properties(self) -> LoaderProperties:
        return self._properties

    def load_context(self, path: str | Path) -> BeanContext:
        """Create a fresh context and populate it from *path*."""
        return self.merge_context(self._context_factory(), path)

    def merge_context(self, context: BeanContext, path: str | Path) -> BeanContext:
        """Populate an existing *context* from *path*."""
        if not str(path).strip():
            raise BeanDefinitionError("Definition path is empty")
        self._load_file(Path(path), LoadSession(context=context))
        return context

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _parse(self, text: str, source: str) -> Any:
        """Parse *text* into the format's document object."""

    @abstractmethod
    def _merge_document(self, document: Any, session: LoadSession) -> None:
        """Translate a parsed document into records of ``session.context``."""

    # ------------------------------------------------------------------
    # Files and imports
    # ------------------------------------------------------------------

    def _load_file(self, path: Path, session: LoadSession) -> None:
        resolved = path.resolve()
        source = str(path)
        logger.debug("loading_definitions", path=source, format=self.format_name)
        try:
            text = resolved.read_text(encoding=self._properties.encoding)
        except OSError as exc:
            raise BeanDefinitionError(f"Cannot read {self.format_name} file: {exc}", source=source) from exc

        document = self._parse(text, source)
        session.loaded.add(resolved)
        previous, session.current = session.current, path
        try:
            self._merge_document(document, session)
        finally:
            session.current = previous

    def _import(self, raw_path: str, optional: bool, session: LoadSession) -> None:
        path = Path(raw_path)
        if not path.is_absolute() and session.current is not None:
            path = session.current.parent / path

        if not self._properties.follow_imports:
            logger.info("import_skipped", path=str(path), reason="imports disabled")
            return
        if path.resolve() in session.loaded:
            logger.debug("import_already_loaded", path=str(path))
            return
        if optional and not path.exists():
            logger.info("optional_import_skipped", path=str(path))
            return
        self._load_file(path, session)

    @staticmethod
    def _source(session: LoadSession) -> str | None:
        return str(session.current) if session.current is not None else None
