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
Class and method decorators over :class:`Injector` registration.
"""

import inspect
import weakref
from typing import Any, Callable, List, Optional, Type

from injectree.exceptions import ConfigurationError
from injectree.injector import Injector, get_injector


_initializers: "weakref.WeakSet[Callable]" = weakref.WeakSet()


def initializer(method: Callable) -> Callable:
    """
    Mark a method to be called once, right after the container builds an instance
    and resolves its eager fields.
    """
    if not callable(method):
        raise TypeError(f"The initializer must be a method, got {method!r}")
    _initializers.add(method)
    return method


def find_initializers(cls: Type) -> List[str]:
    """Names of the methods of a class marked with :func:`initializer`."""
    return [name for name, value in vars(cls).items() if inspect.isfunction(value) and value in _initializers]


def injectable(
    cls: Optional[Type] = None,
    *,
    domain: Optional[str] = None,
    name: Optional[str] = None,
    singleton: bool = False,
    discardable: bool = False,
    injector: Optional[Injector] = None,
    **options: Any,
) -> Any:
    """
    Register a class as injectable.

    Can be used bare or with options. The class is returned unchanged.

    Example
    -------
    @injectable(domain="trading/feeds", singleton=True)
    class QuoteFeed:
        clock = inject("Clock")

        @initializer
        def start(self):
            ...

    Raises
    ------
    ConfigurationError
        If the class marks more than one initializer
    RegistrationConflict
        If the name or identifier is already visible from the bundle
    """

    def decorate(target: Type) -> Type:
        if not isinstance(target, type):
            raise TypeError(f"@injectable can only decorate a class, got {target!r}")

        initializers = find_initializers(target)
        if len(initializers) > 1:
            raise ConfigurationError(
                f"The injectable '{target.__name__}' cannot define more than one initializer.",
                suggestion=f"Keep one of: {', '.join(initializers)}",
            )

        (injector or get_injector()).register(
            target,
            domain=domain,
            name=name,
            singleton=singleton,
            discardable=discardable,
            initializer=initializers[0] if initializers else None,
            **options,
        )
        return target

    if cls is not None:
        return decorate(cls)
    return decorate


def singleton(cls: Optional[Type] = None, **kwargs: Any) -> Any:
    """Shorthand for ``injectable(singleton=True, ...)``."""
    return injectable(cls, singleton=True, **kwargs)
