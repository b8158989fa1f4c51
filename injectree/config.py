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
Configuration flags shared by registries, bundles and containers.
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar, Union

import yaml

from nautilus_trader.common.component import Logger
from injectree.exceptions import ConfigurationError
from injectree.validators import is_contentful_string


T = TypeVar("T")

ENV_PREFIX = "INJECTREE_"
TRUTHY = ("true", "1", "yes", "on")

_logger = Logger("Configuration")


@dataclass
class Configuration:
    """
    Process-wide flag store.

    ``strict`` makes name, identifier and domain comparisons case-sensitive.
    ``initialized`` guards the one-time setup done by :meth:`configure`.
    """

    strict: bool = False
    initialized: bool = False

    def is_strict(self) -> bool:
        """Whether strict mode is enabled."""
        return self.strict

    def set_strict(self, strict: bool) -> None:
        self.strict = bool(strict)

    def is_initialized(self) -> bool:
        """Whether the one-time setup already ran."""
        return self.initialized

    def set_initialized(self, initialized: bool) -> None:
        self.initialized = bool(initialized)

    def configure(self, strict: bool) -> "Configuration":
        """
        Apply the one-time setup.

        Parameters
        ----------
        strict : bool
            Whether names are case-sensitive

        Returns
        -------
        Configuration
            Self for chaining

        Raises
        ------
        ConfigurationError
            If this configuration was already initialized
        """
        if self.initialized:
            raise ConfigurationError(
                "The configuration can only be initialized once.",
                suggestion="Configure strict mode once, before registering any injectable",
            )

        self.strict = bool(strict)
        self.initialized = True
        _logger.debug(f"Configured strict={self.strict}")
        return self

    def normalize(self, value: T) -> T:
        """
        Normalize a name, identifier or domain.

        Lower-cases contentful strings unless strict mode is enabled. Anything else
        is returned as-is.
        """
        if is_contentful_string(value) and not self.strict:
            return value.lower()
        return value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """
        Create an initialized configuration from a dictionary.

        Parameters
        ----------
        data : Dict[str, Any]
            Configuration data, e.g. ``{"strict": True}``

        Returns
        -------
        Configuration
            Configuration instance
        """
        unknown = set(data) - {"strict"}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                suggestion="Only 'strict' can be configured",
            )

        return cls().configure(bool(data.get("strict", False)))

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "Configuration":
        """
        Load configuration from file.

        Parameters
        ----------
        config_path : str or Path
            Path to configuration file (JSON or YAML)

        Returns
        -------
        Configuration
            Loaded configuration

        Raises
        ------
        ConfigurationError
            If file cannot be loaded or parsed
        """
        data = load_mapping(config_path)
        return cls.from_dict(data)

    @classmethod
    def from_environment(cls, prefix: str = ENV_PREFIX) -> "Configuration":
        """
        Create configuration from environment variables.

        Parameters
        ----------
        prefix : str
            Environment variable prefix

        Returns
        -------
        Configuration
            Configuration built from ``<prefix>STRICT``
        """
        value = os.environ.get(f"{prefix}STRICT")
        strict = value is not None and value.strip().lower() in TRUTHY
        return cls().configure(strict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_file(self, config_path: Union[str, Path], format: str = "yaml") -> None:
        """
        Save configuration to file.

        Parameters
        ----------
        config_path : str or Path
            Output file path
        format : str
            Output format: 'json' or 'yaml'
        """
        path = Path(config_path)
        data = {"strict": self.strict}

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            if format.lower() == "json":
                json.dump(data, f, indent=2)
            elif format.lower() in ["yml", "yaml"]:
                yaml.safe_dump(data, f, default_flow_style=False)
            else:
                raise ValueError(f"Unsupported format: {format}")


def load_mapping(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON or YAML file holding a mapping.

    Raises
    ------
    ConfigurationError
        If the file is missing, has an unsupported suffix, cannot be parsed or
        does not hold a mapping
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            suggestion="Check the file path and ensure the file exists",
        )

    suffix = path.suffix.lower()
    if suffix not in [".json", ".yml", ".yaml"]:
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}",
            suggestion="Use .json, .yml, or .yaml files",
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to parse configuration file '{config_path}': {e}",
            suggestion="Check file syntax and format",
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file '{config_path}' must hold a mapping",
            suggestion="Use key/value pairs at the top level",
        )

    return data


# Global configuration
_configuration: Optional[Configuration] = None


def get_configuration() -> Configuration:
    """Get the process-wide default configuration."""
    global _configuration
    if _configuration is None:
        _configuration = Configuration()
    return _configuration
