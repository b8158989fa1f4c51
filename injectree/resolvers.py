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
Value resolvers wrapping zero-argument producers.
"""

from typing import Any, Callable, Generic, TypeVar


T = TypeVar("T")


class ValueResolver(Generic[T]):
    """
    Resolver that calls its producer on every get.
    """

    def __init__(self, producer: Callable[[], T]) -> None:
        if not callable(producer):
            raise TypeError(f"The producer must be callable, got {producer!r}")
        self._producer = producer

    def get(self) -> T:
        """Produce a value."""
        return self._producer()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._producer!r})"


class FinalValueResolver(ValueResolver[T]):
    """
    Resolver that calls its producer once and memoizes the result.

    A produced None is memoized like any other value.
    """

    def __init__(self, producer: Callable[[], T]) -> None:
        super().__init__(producer)
        self._computed = False
        self._value: Any = None

    @property
    def computed(self) -> bool:
        return self._computed

    def get(self) -> T:
        """Get the memoized value, producing it on first call."""
        if not self._computed:
            self._value = super().get()
            self._computed = True
        return self._value
