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
Bootstrap registration from configuration assemblies.
"""

import importlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from nautilus_trader.common.component import Logger
from injectree.config import load_mapping
from injectree.exceptions import ConfigurationError, ValidationError
from injectree.injector import Injector, get_injector
from injectree.validators import validate_options


ASSEMBLY_KEYS = ["strict", "injectables"]
ENTRY_KEYS = ["class", "domain", "name", "singleton", "discardable", "eager", "initializer", "options"]


class Bootstrap:
    """
    Registers injectables described by a configuration assembly.

    Example
    -------
    assembly = {
        "strict": False,
        "injectables": [
            {
                "class": "trading.feeds.QuoteFeed",
                "domain": "trading/feeds",
                "singleton": True,
                "eager": ["clock"],
                "initializer": "start",
            },
            {
                "class": "trading.orders.OrderBook",
                "name": "book",
                "options": {"depth": 10},
            },
        ],
    }
    """

    def __init__(self, injector: Optional[Injector] = None) -> None:
        """
        Initialize bootstrap.

        Parameters
        ----------
        injector : Injector, optional
            Injector to register in (uses global if not provided)
        """
        self._injector = injector or get_injector()
        self._logger = Logger(self.__class__.__name__)

    @property
    def injector(self) -> Injector:
        return self._injector

    def load_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Register the assembly stored in a YAML or JSON file.

        Returns
        -------
        List[str]
            Registered names, in file order
        """
        assembly = load_mapping(config_path)
        self._logger.info(f"Loaded assembly from {config_path}")
        return self.register_assembly(assembly)

    def register_assembly(self, assembly: Dict[str, Any]) -> List[str]:
        """
        Register every injectable of an assembly.

        A ``strict`` key applies the one-time configuration before anything is
        registered.

        Returns
        -------
        List[str]
            Registered names, in assembly order

        Raises
        ------
        ConfigurationError
            If the assembly or one of its entries is malformed, or a class path
            cannot be resolved
        RegistrationConflict
            If a name or identifier is already taken
        """
        try:
            validate_options(assembly, known=ASSEMBLY_KEYS)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid assembly: {e}",
                suggestion=f"Use only the keys: {', '.join(ASSEMBLY_KEYS)}",
            ) from e

        if assembly.get("strict") is not None:
            self._injector.configure(bool(assembly["strict"]))

        entries = assembly.get("injectables") or []
        if not isinstance(entries, list):
            raise ConfigurationError(
                "The 'injectables' entry must be a list",
                suggestion="List one mapping per injectable",
            )

        names = [self._register_entry(entry) for entry in entries]
        self._logger.info(f"Registered {len(names)} injectables")
        return names

    def _register_entry(self, entry: Dict[str, Any]) -> str:
        """Register one assembly entry."""
        try:
            validate_options(entry, known=ENTRY_KEYS, required=["class"])
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid injectable entry {entry!r}: {e}",
                suggestion=f"Use only the keys: {', '.join(ENTRY_KEYS)}",
            ) from e

        injectable = self._resolve_type(entry["class"])
        options = entry.get("options") or {}

        if not isinstance(options, dict):
            raise ConfigurationError(
                f"The options of '{entry['class']}' must be a mapping",
                suggestion="Pass constructor options as key/value pairs",
            )

        eager = entry.get("eager") or []
        if isinstance(eager, str):
            eager = [eager]

        name = self._injector.register(
            injectable,
            domain=entry.get("domain"),
            name=entry.get("name"),
            singleton=bool(entry.get("singleton", False)),
            discardable=bool(entry.get("discardable", False)),
            eager=eager,
            initializer=entry.get("initializer"),
            **options,
        )

        self._logger.debug(f"Registered {injectable.__name__} as '{name}'")
        return name

    def _resolve_type(self, type_path: str) -> Type:
        """Resolve a class from its ``module.Class`` or ``module:Class`` path."""
        module_name, separator, class_name = type_path.replace(":", ".").rpartition(".")

        if not separator or not module_name:
            raise ConfigurationError(
                f"Invalid class path '{type_path}'",
                suggestion="Use a fully qualified path such as 'package.module.Class'",
            )

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigurationError(
                f"Failed to import module '{module_name}' for '{type_path}'",
                suggestion="Check that the module exists and has no import errors",
            ) from e

        injectable = getattr(module, class_name, None)

        if not isinstance(injectable, type):
            raise ConfigurationError(
                f"'{type_path}' does not name a class",
                suggestion="Point the 'class' entry at a class definition",
            )

        return injectable
