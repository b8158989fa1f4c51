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
Dependency injection exceptions.
"""

from typing import Any, Optional, Type


SCOPE = "injectree"


def create_message(*parts: Any) -> str:
    """
    Join message parts into a single scope-prefixed line.

    Whitespace runs inside each part collapse into single spaces, and an existing
    scope prefix is not repeated.
    """
    prefix = f"[{SCOPE}]:"
    cleaned = [" ".join(str(part).replace(prefix, "").split()) for part in parts]
    return " ".join([prefix, *cleaned])


class DIError(Exception):
    """
    Base exception for all dependency injection errors.

    This is the root exception type for all injectree failures. Messages are
    prefixed with the library scope.
    """

    def __init__(self, message: str) -> None:
        super().__init__(create_message(message))


class ConfigurationError(DIError):
    """
    Exception raised when configuration is invalid or applied twice.

    This includes:
    - Re-initializing a configuration after first use
    - Unreadable or malformed configuration files
    - Malformed bootstrap assemblies
    - Conflicting lifecycle markers on an injectable
    """

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.suggestion = suggestion

    def __str__(self) -> str:
        parts = [super().__str__()]

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class RegistrationConflict(DIError):
    """
    Exception raised when a name or identifier is already taken.

    The conflict is checked against the whole visible chain of bundles, so the
    taken key may belong to an ancestor.
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        injectable: Optional[Type] = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.injectable = injectable

    def __str__(self) -> str:
        parts = [super().__str__()]

        if self.injectable is not None:
            parts.append(f"Injectable: {self.injectable.__name__}")

        return "\n".join(parts)


class LookupFailure(DIError):
    """
    Exception raised when no bundle exists for a requested domain.
    """

    def __init__(self, message: str, domain: Optional[str] = None) -> None:
        super().__init__(message)
        self.domain = domain


class MissingContainer(DIError):
    """
    Exception raised when an injected field is read on an instance that was not
    created by a container.

    Optional injected fields never raise this; they fall back to their default.
    """

    def __init__(
        self,
        message: str,
        injectable: Optional[Type] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.injectable = injectable
        self.field = field

    def __str__(self) -> str:
        parts = [super().__str__()]

        if self.field:
            parts.append(f"Field: {self.field}")

        return "\n".join(parts)


class ValidationError(DIError):
    """
    Exception raised when a domain, name or option set is malformed.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value
