# -------------------------------------------------------------------------------------------------
#  Copyright (C) 2015-2025 Nautech Systems Pty Ltd. All rights reserved.
#  https://nautechsystems.io
#
#  Licensed under the GNU Lesser General Public License Version 3.0 (the "License");
#  You may not use this file except in compliance with the License.
#  You may obtain a copy of the License at https://www.gnu.org/licenses/lgpl-3.0.en.html
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# -------------------------------------------------------------------------------------------------
"""
Per-class lifecycle metadata, kept outside of the classes themselves.
"""

import weakref
from dataclasses import dataclass, field
from typing import List, Optional, Type


@dataclass
class InjectableMetadata:
    """Lifecycle flags of one injectable class."""

    singleton: bool = False
    discardable: bool = False
    eagers: List[str] = field(default_factory=list)
    initializer: Optional[str] = None


class MetadataTable:
    """
    Side table from injectable classes to their metadata.

    Entries are keyed weakly by the class object, so the table never keeps a
    class alive and never writes attributes onto it. Metadata is not inherited:
    a subclass starts with empty metadata.
    """

    def __init__(self) -> None:
        self._entries: "weakref.WeakKeyDictionary[Type, InjectableMetadata]" = weakref.WeakKeyDictionary()

    def get(self, injectable: Type) -> InjectableMetadata:
        """Get the metadata of an injectable, empty when nothing was recorded."""
        return self._entries.get(injectable) or InjectableMetadata()

    def _entry(self, injectable: Type) -> InjectableMetadata:
        entry = self._entries.get(injectable)
        if entry is None:
            entry = InjectableMetadata()
            self._entries[injectable] = entry
        return entry

    def is_singleton(self, injectable: Type) -> bool:
        return self.get(injectable).singleton

    def set_singleton(self, injectable: Type, singleton: bool = True) -> None:
        self._entry(injectable).singleton = singleton

    def is_discardable(self, injectable: Type) -> bool:
        return self.get(injectable).discardable

    def set_discardable(self, injectable: Type, discardable: bool = True) -> None:
        self._entry(injectable).discardable = discardable

    def get_eagers(self, injectable: Type) -> List[str]:
        """Get a copy of the eager field names, in declaration order."""
        return list(self.get(injectable).eagers)

    def set_eager(self, injectable: Type, name: str) -> None:
        eagers = self._entry(injectable).eagers
        if name not in eagers:
            eagers.append(name)

    def get_initializer(self, injectable: Type) -> Optional[str]:
        return self.get(injectable).initializer

    def has_initializer(self, injectable: Type) -> bool:
        return bool(self.get_initializer(injectable))

    def set_initializer(self, injectable: Type, name: Optional[str]) -> None:
        self._entry(injectable).initializer = name

    def clear(self, injectable: Type) -> None:
        """Forget everything recorded for an injectable."""
        self._entries.pop(injectable, None)


# Global metadata table
_metadata_table: Optional[MetadataTable] = None


def get_metadata_table() -> MetadataTable:
    """Get the process-wide default metadata table."""
    global _metadata_table
    if _metadata_table is None:
        _metadata_table = MetadataTable()
    return _metadata_table
