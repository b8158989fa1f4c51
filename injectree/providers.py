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
Custom providers for values not managed by any bundle.
"""

from typing import Dict, List, Optional

from nautilus_trader.common.component import Logger
from injectree.config import Configuration, get_configuration
from injectree.exceptions import RegistrationConflict
from injectree.resolvers import ValueResolver


class CustomProvider:
    """
    Fallback registry of resolvers.

    A container asks its provider for any key its bundle does not know. The
    resolvers returned here are handed out as-is and are never cached by the
    container.
    """

    def __init__(self, configuration: Optional[Configuration] = None) -> None:
        self._configuration = configuration or get_configuration()
        self._resolvers: Dict[str, ValueResolver] = {}
        self._logger = Logger(self.__class__.__name__)

    def register(self, key: str, resolver: ValueResolver) -> str:
        """
        Register a custom resolver.

        Parameters
        ----------
        key : str
            Name or identifier the resolver answers to
        resolver : ValueResolver
            The resolver

        Returns
        -------
        str
            The normalized key

        Raises
        ------
        RegistrationConflict
            If the key is already registered
        TypeError
            If the resolver is not a ValueResolver
        """
        key = self._configuration.normalize(key)

        if self.has(key):
            raise RegistrationConflict(
                f"The name or identifier '{key}' is already registered.",
                key=key,
            )

        if not isinstance(resolver, ValueResolver):
            raise TypeError(f"The resolver '{key}' must be or extend ValueResolver.")

        self._resolvers[key] = resolver
        self._logger.debug(f"Registered custom resolver '{key}'")

        return key

    def deregister(self, key: str) -> bool:
        """Remove a custom resolver, returning whether one existed."""
        key = self._configuration.normalize(key)
        return self._resolvers.pop(key, None) is not None

    def has(self, key: Optional[str]) -> bool:
        key = self._configuration.normalize(key)

        if key:
            return key in self._resolvers
        return False

    def resolve(self, key: Optional[str]) -> Optional[ValueResolver]:
        """Get the resolver registered for a key, if any."""
        key = self._configuration.normalize(key)

        if key:
            return self._resolvers.get(key)
        return None

    def keys(self) -> List[str]:
        return list(self._resolvers)
