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
Hierarchical dependency injection runtime.

Features:
- Registries with global name uniqueness across a tree of bundles
- Transient, singleton and discardable singleton lifecycles per container
- Lazily injected fields that resolve circular singletons without recursion
- Custom providers for values not managed by any bundle
"""

from injectree.bootstrap import Bootstrap
from injectree.bundle import Bundle
from injectree.config import Configuration, get_configuration
from injectree.container import Container
from injectree.decorators import initializer, injectable, singleton
from injectree.descriptor import Descriptor
from injectree.exceptions import (
    ConfigurationError,
    DIError,
    LookupFailure,
    MissingContainer,
    RegistrationConflict,
    ValidationError,
)
from injectree.injection import InjectedField, get_container, inject, stash_container
from injectree.injector import Injector, get_injector
from injectree.metadata import InjectableMetadata, MetadataTable, get_metadata_table
from injectree.providers import CustomProvider
from injectree.registry import Registry
from injectree.resolvers import FinalValueResolver, ValueResolver


__all__ = [
    # Core
    "Bundle",
    "Container",
    "Descriptor",
    "Injector",
    "Registry",
    "get_injector",
    # Configuration
    "Configuration",
    "get_configuration",
    # Metadata
    "InjectableMetadata",
    "MetadataTable",
    "get_metadata_table",
    # Resolvers and providers
    "CustomProvider",
    "FinalValueResolver",
    "ValueResolver",
    # Injection
    "InjectedField",
    "get_container",
    "inject",
    "initializer",
    "injectable",
    "singleton",
    "stash_container",
    # Bootstrap
    "Bootstrap",
    # Exceptions
    "ConfigurationError",
    "DIError",
    "LookupFailure",
    "MissingContainer",
    "RegistrationConflict",
    "ValidationError",
]
