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
Validation of domains, names and option mappings.

All functions here are pure: they either return or raise ``ValidationError``.
"""

from collections.abc import Mapping
from typing import Any, Iterable

from injectree.exceptions import ValidationError


def is_contentful_string(value: Any) -> bool:
    """Check if value is a string with at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""


def validate_domain(domain: Any, allow_hierarchy: bool = True) -> None:
    """
    Validate a bundle domain.

    Parameters
    ----------
    domain : str
        Domain to validate, optionally ``/``-delimited
    allow_hierarchy : bool
        Whether the domain may denote hierarchy with ``/``

    Raises
    ------
    ValidationError
        If the domain is not a contentful string, has chunks where hierarchy is
        not allowed, or has a blank chunk or a chunk with spaces
    """
    if not is_contentful_string(domain):
        raise ValidationError("Invalid domain. It should be a contentful string.", value=domain)

    if not allow_hierarchy and "/" in domain:
        raise ValidationError(
            f"Invalid domain '{domain}'. It cannot have multiple chunks here.",
            value=domain,
        )

    for chunk in domain.split("/"):
        if " " in chunk:
            raise ValidationError(
                f"Invalid domain '{domain}'. It cannot have empty spaces in '{chunk}'.",
                value=domain,
            )

        if not is_contentful_string(chunk):
            raise ValidationError(
                f"Invalid domain '{domain}'. It cannot have empty chunks.",
                value=domain,
            )


def validate_name(name: Any) -> None:
    """
    Validate a name or identifier.

    Raises
    ------
    ValidationError
        If the name is not a contentful string, or has spaces or chunks
    """
    if not is_contentful_string(name):
        raise ValidationError("Invalid name or identifier. It should be a contentful string.", value=name)

    if " " in name:
        raise ValidationError(
            f"Invalid name or identifier '{name}'. It cannot have empty spaces.",
            value=name,
        )

    if "/" in name:
        raise ValidationError(
            f"Invalid name or identifier '{name}'. It cannot have chunks.",
            value=name,
        )


def validate_options(
    options: Any,
    known: Iterable[str],
    required: Iterable[str] = (),
    allow_unknown: bool = False,
) -> None:
    """
    Validate an option mapping against known and required keys.

    Parameters
    ----------
    options : Mapping
        Options to validate
    known : Iterable[str]
        Keys that are understood; ``domain`` and ``name`` values are validated too
    required : Iterable[str]
        Keys that must be present with a non-None value
    allow_unknown : bool
        Whether keys outside ``known`` are accepted

    Raises
    ------
    ValidationError
        If any rule is broken
    """
    if not isinstance(options, Mapping):
        raise ValidationError("Invalid options. It must be a mapping.", value=options)

    known = list(known)

    try:
        if "domain" in known and options.get("domain"):
            validate_domain(options["domain"])

        if "name" in known and options.get("name"):
            validate_name(options["name"])
    except ValidationError as e:
        raise ValidationError(f"Invalid options. {e}", value=options) from e

    for key in required:
        if options.get(key) is None:
            raise ValidationError(f"Invalid options. The option '{key}' is required.", value=options)

    if allow_unknown:
        return

    unknown = [key for key in options if key not in known]
    if unknown:
        raise ValidationError(
            f"Invalid options. The unknown options are not allowed: {', '.join(unknown)}.",
            value=options,
        )
