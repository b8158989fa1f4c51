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
Dependency injection container implementation.
"""

from typing import Any, Dict, Optional

from nautilus_trader.common.component import Logger
from injectree.bundle import Bundle
from injectree.descriptor import Descriptor
from injectree.injection import stash_container
from injectree.metadata import MetadataTable, get_metadata_table
from injectree.providers import CustomProvider
from injectree.resolvers import FinalValueResolver, ValueResolver


class Container:
    """
    Manages the lifecycle of injectable instances for one unit of work.

    This container provides:
    - Transient injectables, built anew on every provide
    - Singletons, cached until the container is dropped
    - Discardable singletons, whose cached instance can be evicted and is rebuilt
      on the next get of the same resolver
    - Fallback to a custom provider for keys the bundle does not know

    Containers are never shared or reused implicitly; create one per unit of work.
    """

    def __init__(
        self,
        bundle: Bundle,
        provider: Optional[CustomProvider] = None,
        metadata: Optional[MetadataTable] = None,
    ) -> None:
        """
        Initialize container.

        Parameters
        ----------
        bundle : Bundle
            Bundle where injectables are looked up
        provider : CustomProvider, optional
            Provider of resolvers for keys the bundle does not know
        metadata : MetadataTable, optional
            Lifecycle metadata of the injectables. Uses the global table if not provided.

        Raises
        ------
        TypeError
            If the bundle or the provider has the wrong type
        """
        if not isinstance(bundle, Bundle):
            raise TypeError("The bundle must be or extend Bundle.")

        if provider is not None and not isinstance(provider, CustomProvider):
            raise TypeError("The provider must be or extend CustomProvider.")

        self._bundle = bundle
        self._provider = provider if provider is not None else CustomProvider(bundle.configuration)
        self._metadata = metadata if metadata is not None else get_metadata_table()
        self._instances: Dict[str, Any] = {}
        self._resolvers: Dict[str, ValueResolver] = {}
        self._logger = Logger(self.__class__.__name__)

    @property
    def bundle(self) -> Bundle:
        return self._bundle

    @property
    def provider(self) -> CustomProvider:
        return self._provider

    @property
    def metadata(self) -> MetadataTable:
        return self._metadata

    def has(self, key: Optional[str]) -> bool:
        """
        Check if an instance is currently cached for a name or identifier.

        Registered but never materialized (or discarded) injectables return False.
        """
        descriptor = self._bundle.get(key)

        if descriptor:
            return descriptor.name in self._instances
        return False

    def get(self, key: Optional[str]) -> Optional[ValueResolver]:
        """Get the cached resolver for a name or identifier, if any."""
        descriptor = self._bundle.get(key)

        if descriptor:
            return self._resolvers.get(descriptor.name)
        return None

    def provide(self, key: str, resolve: bool = False) -> Any:
        """
        Provide a resolver, or the resolved value, for a name or identifier.

        Singletons are reused until discarded. Keys unknown to the bundle are
        delegated to the custom provider, whose resolvers are not cached.

        Parameters
        ----------
        key : str
            Name or identifier
        resolve : bool
            Whether to return the resolved value instead of the resolver

        Returns
        -------
        ValueResolver or Any or None
            The resolver, the value when ``resolve`` is True, or None when nothing
            answers to the key
        """
        if self.has(key):
            resolver = self.get(key)
            return resolver.get() if resolve and resolver else resolver

        descriptor = self._bundle.get(key)
        if descriptor:
            resolver = self.resolve(descriptor)
        else:
            resolver = self._provider.resolve(key)

        if resolver and resolve:
            return resolver.get()
        return resolver

    def discard(self, key: str) -> None:
        """
        Discard the cached instance of a discardable injectable.

        The cached resolver is kept, so its next get builds a fresh instance.
        Non-discardable and unknown keys are ignored.
        """
        descriptor = self._bundle.get(key)

        if descriptor and self._metadata.is_discardable(descriptor.injectable):
            if self._instances.pop(descriptor.name, None) is not None:
                self._logger.debug(f"Discarded instance of '{descriptor.name}'")

    def resolve(self, descriptor: Descriptor) -> ValueResolver:
        """
        Build an instance of a descriptor's injectable and wrap it in a resolver.

        Parameters
        ----------
        descriptor : Descriptor
            Descriptor of the injectable

        Returns
        -------
        ValueResolver
            A FinalValueResolver around the instance, or a ValueResolver that rebuilds
            discarded instances for discardable singletons
        """
        injectable = descriptor.injectable
        name = descriptor.name
        singleton = self._metadata.is_singleton(injectable)
        discardable = self._metadata.is_discardable(injectable)

        instance = self._bundle.instantiate(descriptor)

        resolver = self._resolvers.get(name)
        if resolver is None:
            if singleton and discardable:
                resolver = ValueResolver(lambda: self._current_instance(descriptor))
            else:
                resolver = FinalValueResolver(lambda: instance)

        if singleton:
            self._instances[name] = instance
            self._resolvers[name] = resolver

        self._logger.debug(f"Resolved '{name}' (singleton={singleton}, discardable={discardable})")

        stash_container(instance, self)

        self._invoke_eagers(injectable, instance)
        self._invoke_initializer(injectable, instance)

        return resolver

    def _current_instance(self, descriptor: Descriptor) -> Any:
        if descriptor.name not in self._instances:
            self.resolve(descriptor)
        return self._instances.get(descriptor.name)

    def _invoke_eagers(self, injectable: type, instance: Any) -> None:
        for eager in self._metadata.get_eagers(injectable):
            self._logger.debug(f"Invoking eager '{eager}' of '{injectable.__name__}'")
            getattr(instance, eager)

    def _invoke_initializer(self, injectable: type, instance: Any) -> None:
        initializer = self._metadata.get_initializer(injectable)

        if initializer:
            method = getattr(instance, initializer, None)
            if callable(method):
                self._logger.debug(f"Invoking initializer '{initializer}' of '{injectable.__name__}'")
                method()

    def __repr__(self) -> str:
        return f"Container({self._bundle!r}, instances={len(self._instances)})"
