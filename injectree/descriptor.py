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
Registration record of an injectable class.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Type

from injectree.config import Configuration
from injectree.validators import is_contentful_string, validate_name


@dataclass(frozen=True)
class Descriptor:
    """
    Describes a registered injectable.

    ``name`` derives from the class name and ``identifier`` is an optional custom
    alias taken from the ``name`` option. Both are normalized. ``options`` holds
    the remaining registration options, or None when there are none.
    """

    name: str
    injectable: Type
    identifier: Optional[str] = None
    options: Optional[Mapping[str, Any]] = None

    @classmethod
    def create(
        cls,
        injectable: Type,
        options: Optional[Mapping[str, Any]],
        configuration: Configuration,
    ) -> "Descriptor":
        """
        Build a descriptor for an injectable class.

        Parameters
        ----------
        injectable : Type
            The injectable class
        options : Mapping, optional
            Registration options; ``name`` becomes the custom identifier
        configuration : Configuration
            Configuration used to normalize the name and identifier
        """
        if not isinstance(injectable, type):
            raise TypeError(f"The injectable must be a class, got {injectable!r}")

        name = injectable.__name__
        identifier = None
        rest = None

        if options:
            rest = dict(options)
            custom_name = rest.pop("name", None)

            if custom_name is not None:
                validate_name(custom_name)

            if is_contentful_string(custom_name) and custom_name != name:
                identifier = custom_name

            rest = MappingProxyType(rest) if rest else None

        return cls(
            name=configuration.normalize(name),
            injectable=injectable,
            identifier=configuration.normalize(identifier),
            options=rest,
        )

    def keys(self) -> tuple:
        """Keys this descriptor is reachable by, identifier first."""
        return tuple(key for key in (self.identifier, self.name) if key)
