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
Root of the bundle hierarchy.
"""

from typing import Any, Iterable, Optional, Type

from nautilus_trader.common.component import Logger
from injectree.bundle import Bundle
from injectree.config import Configuration, get_configuration
from injectree.container import Container
from injectree.exceptions import ConfigurationError, LookupFailure
from injectree.injection import find_eager_fields
from injectree.metadata import MetadataTable, get_metadata_table
from injectree.providers import CustomProvider
from injectree.validators import validate_domain, validate_name


ROOT_DOMAIN = "root"


class Injector:
    """
    Owns the root bundle and the configuration and metadata shared below it.

    Provides:
    - Bundle lookup and creation by ``/``-delimited domain paths
    - Detached containers for a domain
    - Explicit registration with lifecycle options
    """

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        metadata: Optional[MetadataTable] = None,
        domain: str = ROOT_DOMAIN,
    ) -> None:
        """
        Initialize injector.

        Parameters
        ----------
        configuration : Configuration, optional
            Configuration shared by every bundle. Uses the global one if not provided.
        metadata : MetadataTable, optional
            Lifecycle metadata shared by every container. Uses the global table if
            not provided.
        domain : str
            Domain of the root bundle
        """
        self._configuration = configuration or get_configuration()
        self._metadata = metadata if metadata is not None else get_metadata_table()
        self._root = Bundle(domain, configuration=self._configuration)
        self._logger = Logger(self.__class__.__name__)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def metadata(self) -> MetadataTable:
        return self._metadata

    @property
    def root(self) -> Bundle:
        return self._root

    def configure(self, strict: bool) -> "Injector":
        """Apply the one-time configuration. See :meth:`Configuration.configure`."""
        self._configuration.configure(strict)
        return self

    def bundle(self, domain: Optional[str] = None, create: bool = True) -> Optional[Bundle]:
        """
        Find or create the bundle for a domain path.

        Parameters
        ----------
        domain : str, optional
            ``/``-delimited path below the root. The root itself if not provided.
        create : bool
            Whether to create missing bundles along the path

        Returns
        -------
        Bundle or None
            The bundle, or None when it does not exist and ``create`` is False

        Raises
        ------
        ValidationError
            If the domain path is invalid
        """
        bundle = self._root

        if domain:
            validate_domain(domain)

            for chunk in self._configuration.normalize(domain).split("/"):
                if not create and not bundle.has_child(chunk):
                    return None
                bundle = bundle.child(chunk)

        return bundle

    def container(
        self,
        domain: Optional[str] = None,
        provider: Optional[CustomProvider] = None,
    ) -> Container:
        """
        Create a new container for an existing domain.

        The container is detached: it is never reused or tracked by the injector.

        Raises
        ------
        LookupFailure
            If no bundle exists for the domain
        """
        bundle = self.bundle(domain, create=False)

        if bundle is None:
            raise LookupFailure(f"No bundle found for domain '{domain}'.", domain=domain)

        return Container(bundle, provider, self._metadata)

    def register(
        self,
        injectable: Type,
        domain: Optional[str] = None,
        name: Optional[str] = None,
        singleton: bool = False,
        discardable: bool = False,
        eager: Iterable[str] = (),
        initializer: Optional[str] = None,
        **options: Any,
    ) -> str:
        """
        Register an injectable with its lifecycle options.

        Conflicts are checked before any metadata is recorded.

        Parameters
        ----------
        injectable : Type
            The injectable class
        domain : str, optional
            Domain path of the bundle to register in; created if missing
        name : str, optional
            Custom identifier
        singleton : bool
            Cache one instance per container
        discardable : bool
            Allow the cached singleton instance to be discarded
        eager : Iterable[str]
            Extra injected fields to resolve right after construction. Fields
            declared with ``inject(eager=True)``, inherited ones included, are
            always recorded.
        initializer : str, optional
            Method called once after construction
        **options
            Passed to the injectable constructor as a single dictionary

        Returns
        -------
        str
            The normalized name

        Raises
        ------
        RegistrationConflict
            If the name or identifier is already visible from the bundle
        ConfigurationError
            If the injectable already has a different initializer
        """
        if name is not None:
            validate_name(name)

        registration = dict(options)
        if name is not None:
            registration["name"] = name

        bundle = self.bundle(domain)
        bundle.validate_registration(injectable, registration)

        existing = self._metadata.get_initializer(injectable)
        if initializer and existing and existing != initializer:
            raise ConfigurationError(
                f"The injectable '{injectable.__name__}' already has an initializer named '{existing}'.",
                suggestion="Declare a single initializer per injectable",
            )

        if singleton:
            self._metadata.set_singleton(injectable)
        if discardable:
            self._metadata.set_discardable(injectable)
        for field_name in [*find_eager_fields(injectable), *eager]:
            self._metadata.set_eager(injectable, field_name)
        if initializer:
            self._metadata.set_initializer(injectable, initializer)

        return bundle.register(injectable, registration or None)

    def deregister(self, injectable: Type, domain: Optional[str] = None) -> bool:
        """Deregister an injectable from the bundle of a domain path."""
        bundle = self.bundle(domain, create=False)

        if bundle is None:
            return False
        return bundle.deregister(injectable)


# Global injector instance
_injector: Optional[Injector] = None


def get_injector() -> Injector:
    """Get the process-wide default injector."""
    global _injector
    if _injector is None:
        _injector = Injector()
    return _injector
