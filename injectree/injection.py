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
Lazily injected fields.

Injected fields are not constructor parameters. Each one is a descriptor that,
on first read, asks the container stashed on the owning instance for its target.
Deferring resolution to the first read is what lets two singletons depend on each
other: both finish constructing before either field is read.
"""

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type

from injectree.exceptions import MissingContainer
from injectree.resolvers import FinalValueResolver, ValueResolver
from injectree.validators import validate_name

if TYPE_CHECKING:
    from injectree.container import Container


CONTAINER_ATTRIBUTE = "__injectree_container__"
CELLS_ATTRIBUTE = "__injectree_cells__"


def stash_container(instance: Any, container: Optional["Container"]) -> None:
    """
    Keep a back-reference from an instance to the container that built it.

    Passing None removes the reference. Instances without a ``__dict__`` are left
    untouched.
    """
    state = getattr(instance, "__dict__", None)
    if state is None:
        return

    if container is None:
        state.pop(CONTAINER_ATTRIBUTE, None)
    else:
        state[CONTAINER_ATTRIBUTE] = container


def get_container(instance: Any) -> Optional["Container"]:
    """Get the container stashed on an instance, if any."""
    return getattr(instance, "__dict__", {}).get(CONTAINER_ATTRIBUTE)


@dataclass
class InjectionCell:
    """
    Resolution state of one injected field on one instance.

    Unresolved cells are resolved on first read. A resolved cell either holds the
    value itself or a resolver every read forwards to. Resolved is terminal.
    """

    resolved: bool = False
    value: Any = None
    resolver: Optional[ValueResolver] = None

    def read(self) -> Any:
        if self.resolver is not None:
            return self.resolver.get()
        return self.value


class InjectedField:
    """
    Data descriptor resolving its value through the owning instance's container.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        eager: bool = False,
        optional: bool = False,
        default: Any = None,
    ) -> None:
        if name is not None:
            validate_name(name)

        self._key = name
        self._eager = eager
        self._optional = optional
        self._default = default
        self._attribute: Optional[str] = None

    @property
    def key(self) -> Optional[str]:
        """Name or identifier this field resolves."""
        return self._key

    @property
    def eager(self) -> bool:
        return self._eager

    @property
    def optional(self) -> bool:
        return self._optional

    def __set_name__(self, owner: Type, attribute: str) -> None:
        self._attribute = attribute

        if self._key is None:
            self._key = attribute

    def __get__(self, instance: Any, owner: Optional[Type] = None) -> Any:
        if instance is None:
            return self

        cell = self._cell(instance)

        if cell.resolved:
            return cell.read()
        return self._resolve(instance, cell)

    def __set__(self, instance: Any, value: Any) -> None:
        cell = self._cell(instance)
        cell.resolved = True
        cell.value = value
        cell.resolver = None

    def __delete__(self, instance: Any) -> None:
        self._cells(instance).pop(self._attribute, None)

    def _cells(self, instance: Any) -> Dict[str, InjectionCell]:
        return vars(instance).setdefault(CELLS_ATTRIBUTE, {})

    def _cell(self, instance: Any) -> InjectionCell:
        cells = self._cells(instance)
        cell = cells.get(self._attribute)
        if cell is None:
            cell = InjectionCell()
            cells[self._attribute] = cell
        return cell

    def _resolve(self, instance: Any, cell: InjectionCell) -> Any:
        container = get_container(instance)

        if container is not None:
            resolver = container.provide(self._key)

            if resolver is None:
                # Stays unresolved, the next read asks the container again
                return None

            if isinstance(resolver, FinalValueResolver):
                cell.value = resolver.get()
            else:
                cell.resolver = resolver

            cell.resolved = True
            return cell.read()

        if self._optional:
            cell.value = self._default
            cell.resolved = True
            return cell.value

        raise MissingContainer(
            f"There is no container at '{type(instance).__name__}'.",
            injectable=type(instance),
            field=self._attribute,
        )

    def __repr__(self) -> str:
        return f"InjectedField('{self._key}', eager={self._eager}, optional={self._optional})"


def find_eager_fields(cls: Type) -> List[str]:
    """
    Names of the eager injected fields of a class, inherited ones included.

    The most derived definition of an attribute wins, so a subclass can turn an
    inherited eager field back into a lazy one.
    """
    seen = set()
    eagers = []

    for klass in inspect.getmro(cls):
        for attribute, value in vars(klass).items():
            if attribute in seen:
                continue
            seen.add(attribute)

            if isinstance(value, InjectedField) and value.eager:
                eagers.append(attribute)

    return eagers


def inject(
    name: Optional[str] = None,
    eager: bool = False,
    optional: bool = False,
    default: Any = None,
) -> Any:
    """
    Declare a lazily injected field.

    Example
    -------
    class Engine:
        clock = inject("Clock")
        feed = inject(eager=True)           # resolves "feed" right after construction
        audit = inject(optional=True)       # None when built outside a container

    Parameters
    ----------
    name : str, optional
        Name or identifier to resolve. Defaults to the attribute name.
    eager : bool
        Resolve right after the instance is built instead of on first read
    optional : bool
        Fall back to ``default`` instead of raising MissingContainer when the
        instance has no container
    default : Any
        Value of an optional field read outside of a container
    """
    return InjectedField(name, eager, optional, default)
