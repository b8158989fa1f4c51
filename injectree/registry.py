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
Flat registry of injectable descriptors.
"""

from typing import Any, Dict, List, Mapping, Optional, Type

from nautilus_trader.common.component import Logger
from injectree.config import Configuration, get_configuration
from injectree.descriptor import Descriptor
from injectree.exceptions import RegistrationConflict


class Registry:
    """
    Collision-checked map from names and identifiers to descriptors.

    Within one registry no two descriptors share a normalized name or identifier,
    and no name collides with another descriptor's identifier.
    """

    def __init__(self, configuration: Optional[Configuration] = None) -> None:
        """
        Initialize registry.

        Parameters
        ----------
        configuration : Configuration, optional
            Configuration used to normalize keys. Uses the global one if not provided.
        """
        self._configuration = configuration or get_configuration()
        self._by_identifier: Dict[str, Descriptor] = {}
        self._by_name: Dict[str, Descriptor] = {}
        self._by_injectable: Dict[Type, Descriptor] = {}
        self._logger = Logger(self.__class__.__name__)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def register(self, injectable: Type, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Register an injectable class.

        Parameters
        ----------
        injectable : Type
            The injectable class
        options : Mapping, optional
            Registration options; ``name`` defines a custom identifier

        Returns
        -------
        str
            The normalized name of the injectable

        Raises
        ------
        RegistrationConflict
            If the name or identifier is already registered
        """
        self.validate_registration(injectable, options)

        descriptor = self.describe(injectable, options)

        if descriptor.identifier:
            self._by_identifier[descriptor.identifier] = descriptor

        self._by_injectable[injectable] = descriptor
        self._by_name[descriptor.name] = descriptor

        self._logger.debug(f"Registered '{descriptor.name}'")
        return descriptor.name

    def deregister(self, injectable: Type) -> bool:
        """
        Deregister an injectable class.

        Returns
        -------
        bool
            Whether the injectable was registered
        """
        descriptor = self._by_injectable.pop(injectable, None)

        if descriptor is None:
            return False

        if descriptor.identifier:
            self._by_identifier.pop(descriptor.identifier, None)

        self._by_name.pop(descriptor.name, None)

        self._logger.debug(f"Deregistered '{descriptor.name}'")
        return True

    def has(self, key: Optional[str]) -> bool:
        """Check if a name or identifier is registered."""
        key = self._configuration.normalize(key)

        if key:
            return key in self._by_identifier or key in self._by_name
        return False

    def get(self, key: Optional[str]) -> Optional[Descriptor]:
        """Get the descriptor for a name or identifier, identifiers first."""
        key = self._configuration.normalize(key)

        if key:
            return self._by_identifier.get(key) or self._by_name.get(key)
        return None

    def describe(self, injectable: Type, options: Optional[Mapping[str, Any]] = None) -> Descriptor:
        """Build the descriptor a registration would store, without storing it."""
        return Descriptor.create(injectable, options, self._configuration)

    def validate_registration(self, injectable: Type, options: Optional[Mapping[str, Any]] = None) -> None:
        """
        Check that a registration would not collide, without mutating anything.

        The identifier is checked before the name, each against identifiers first
        and names second. The first collision found is reported.

        Raises
        ------
        RegistrationConflict
            If the name or identifier is already registered
        """
        descriptor = self.describe(injectable, options)

        for key in descriptor.keys():
            if self.has(key):
                raise RegistrationConflict(
                    f"There already is an injectable '{key}' registered.",
                    key=key,
                    injectable=injectable,
                )

    def descriptors(self) -> List[Descriptor]:
        return list(self._by_injectable.values())

    def __len__(self) -> int:
        return len(self._by_injectable)
