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
Hierarchical bundles of registries.

A bundle sees everything its ancestors register, while ancestors never see what
their descendants register. Names cannot be shadowed: a key taken anywhere in the
ancestor chain cannot be registered again further down.
"""

from typing import Any, Dict, List, Mapping, Optional, Type

from nautilus_trader.common.component import Logger
from injectree.config import Configuration, get_configuration
from injectree.descriptor import Descriptor
from injectree.registry import Registry
from injectree.validators import validate_domain


class Bundle:
    """
    Tree node owning one registry plus parent and children links.
    """

    def __init__(
        self,
        domain: str,
        parent: Optional["Bundle"] = None,
        configuration: Optional[Configuration] = None,
    ) -> None:
        """
        Initialize bundle.

        Parameters
        ----------
        domain : str
            Single-chunk domain of this bundle
        parent : Bundle, optional
            Parent bundle whose registrations are visible here
        configuration : Configuration, optional
            Configuration used to normalize keys. Inherited from the parent, or the
            global one if neither is provided.

        Raises
        ------
        ValidationError
            If the domain is invalid or hierarchical
        TypeError
            If the parent is not a Bundle
        """
        validate_domain(domain, allow_hierarchy=False)

        if parent is not None and not isinstance(parent, Bundle):
            raise TypeError("The parent must be or extend Bundle.")

        if configuration is None:
            configuration = parent.configuration if parent else get_configuration()

        self._configuration = configuration
        self._domain = configuration.normalize(domain)
        self._parent = parent
        self._children: Dict[str, Bundle] = {}
        self._registry = Registry(configuration)
        self._logger = Logger(self.__class__.__name__)

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def parent(self) -> Optional["Bundle"]:
        return self._parent

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def path(self) -> str:
        """Domains from the root down to this bundle, joined by ``/``."""
        if self._parent:
            return f"{self._parent.path}/{self._domain}"
        return self._domain

    def register(self, injectable: Type, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Register an injectable class in this bundle.

        The registration is validated against every ancestor before anything is
        mutated.

        Returns
        -------
        str
            The normalized name of the injectable

        Raises
        ------
        RegistrationConflict
            If the name or identifier is visible from this bundle already
        """
        self.validate_registration(injectable, options)
        name = self._registry.register(injectable, options)
        self._logger.info(f"Registered '{name}' in bundle '{self.path}'")
        return name

    def deregister(self, injectable: Type) -> bool:
        """Deregister an injectable class from this bundle only."""
        removed = self._registry.deregister(injectable)
        if removed:
            self._logger.info(f"Deregistered '{injectable.__name__}' from bundle '{self.path}'")
        return removed

    def has(self, key: Optional[str]) -> bool:
        """Check this bundle, then its ancestors, for a name or identifier."""
        if self._registry.has(key):
            return True
        return self._parent.has(key) if self._parent else False

    def get(self, key: Optional[str]) -> Optional[Descriptor]:
        """Get a descriptor from this bundle, then from its ancestors."""
        descriptor = self._registry.get(key)
        if descriptor is None and self._parent:
            return self._parent.get(key)
        return descriptor

    def validate_registration(self, injectable: Type, options: Optional[Mapping[str, Any]] = None) -> None:
        """Validate a registration against this bundle and every ancestor."""
        self._registry.validate_registration(injectable, options)
        if self._parent:
            self._parent.validate_registration(injectable, options)

    def instantiate(self, descriptor: Descriptor) -> Any:
        """
        Create a new instance of a descriptor's injectable.

        The options, without the custom name, are passed as a single dictionary
        argument. Without options the class is called with no arguments.
        """
        if descriptor.options:
            return descriptor.injectable(dict(descriptor.options))
        return descriptor.injectable()

    def child(self, domain: str) -> "Bundle":
        """
        Get or create a child bundle.

        Raises
        ------
        ValidationError
            If the domain is invalid or hierarchical
        """
        validate_domain(domain)

        domain = self._configuration.normalize(domain)

        bundle = self._children.get(domain)
        if bundle is None:
            bundle = Bundle(domain, self, self._configuration)
            self._children[domain] = bundle
            self._logger.debug(f"Created bundle '{bundle.path}'")

        return bundle

    def has_child(self, domain: Optional[str]) -> bool:
        domain = self._configuration.normalize(domain)

        if domain:
            return domain in self._children
        return False

    def children(self) -> List["Bundle"]:
        return list(self._children.values())

    def descriptors(self) -> List[Descriptor]:
        """Descriptors registered in this bundle only."""
        return self._registry.descriptors()

    def __repr__(self) -> str:
        return f"Bundle('{self.path}')"
