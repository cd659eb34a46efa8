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
"""Bean record registry."""

from __future__ import annotations

import difflib

from beanforge.container.bean import BeanRecord, PropertyRecord
from beanforge.container.exceptions import DuplicateBeanIdError


class BeanRegistry:
    """Owns every bean record: identified ones by id, anonymous ones in order."""

    def __init__(self) -> None:
        self._records: dict[str, BeanRecord] = {}
        self._anonymous: list[BeanRecord] = []

    def add(self, record: BeanRecord) -> None:
        """Store *record*, indexing it by id when it has one."""
        if record.id and record.id.strip():
            self.register(record)
        else:
            self._anonymous.append(record)

    def register(self, record: BeanRecord) -> None:
        """Index *record* by its id.

        Raises:
            DuplicateBeanIdError: The id is already taken; the existing
                record stays registered.
        """
        if not record.id or not record.id.strip():
            return
        if record.id in self._records:
            raise DuplicateBeanIdError(record.id)
        self._records[record.id] = record

    def get(self, bean_id: str | None) -> BeanRecord | None:
        if bean_id is None:
            return None
        return self._records.get(bean_id)

    def contains(self, bean_id: str) -> bool:
        return bean_id in self._records

    def ids(self) -> list[str]:
        """Registered ids in registration order."""
        return list(self._records)

    @property
    def anonymous(self) -> list[BeanRecord]:
        return list(self._anonymous)

    def __len__(self) -> int:
        return len(self._records) + len(self._anonymous)

    @staticmethod
    def add_or_replace_property(record: BeanRecord, prop: PropertyRecord) -> None:
        """Append *prop*, dropping earlier properties of the same name."""
        record.properties = [p for p in record.properties if p.name != prop.name]
        record.properties.append(prop)

    @staticmethod
    def set_factory(record: BeanRecord, prop: PropertyRecord | None) -> None:
        record.factory = prop

    def similar_ids(self, bean_id: str) -> list[str]:
        """Return registered ids similar to *bean_id* using fuzzy matching."""
        if not bean_id:
            return []
        return difflib.get_close_matches(bean_id, list(self._records), n=5, cutoff=0.6)
