"""
Scopes of the reducer.

A :class:`Namespace` is an immutable name-to-value mapping; setting a name
copies it. :class:`Bindings` chains namespaces into scopes, with the
standard library at the bottom and user scopes on top. Parent scopes are
never modified, so a closure keeps exactly the names visible where it was
created.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from squiggle_core.value.values import Value, VDict, v_dict


class Namespace(Mapping[str, Value]):
    """Read-only mapping with copy-on-write updates."""

    __slots__ = ("_data",)

    def __init__(self, items: Mapping[str, Value] | Iterable[tuple[str, Value]] = ()) -> None:
        self._data = MappingProxyType(dict(items))

    def __getitem__(self, name: str) -> Value:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Namespace({list(self._data)!r})"

    def set(self, name: str, value: Value) -> Namespace:
        data = dict(self._data)
        data[name] = value
        return Namespace(data)

    def merge(self, other: Mapping[str, Value]) -> Namespace:
        """Copy with the entries of ``other`` added; ``other`` wins on conflicts."""
        data = dict(self._data)
        data.update(other)
        return Namespace(data)

    def to_dict_value(self) -> VDict:
        return v_dict(self._data)


EMPTY_NAMESPACE = Namespace()


class Bindings:
    """
    Chain of scopes.

    Parameters
    ----------
    namespace : Namespace
        Names of the innermost scope.
    parent : Bindings, optional
        Enclosing scope.
    """

    __slots__ = ("namespace", "parent")

    def __init__(self, namespace: Namespace = EMPTY_NAMESPACE, parent: Bindings | None = None):
        self.namespace = namespace
        self.parent = parent

    @classmethod
    def from_namespace(cls, namespace: Mapping[str, Value]) -> Bindings:
        if not isinstance(namespace, Namespace):
            namespace = Namespace(namespace)
        return cls(namespace)

    def get(self, name: str) -> Value | None:
        scope: Bindings | None = self
        while scope is not None:
            value = scope.namespace.get(name)
            if value is not None:
                return value
            scope = scope.parent
        return None

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def set(self, name: str, value: Value) -> Bindings:
        """New bindings with ``name`` set in the innermost scope."""
        return Bindings(self.namespace.set(name, value), self.parent)

    def extend(self) -> Bindings:
        """New empty scope on top of this one."""
        return Bindings(EMPTY_NAMESPACE, self)

    def local(self) -> Namespace:
        return self.namespace

    def depth(self) -> int:
        count, scope = 0, self.parent
        while scope is not None:
            count, scope = count + 1, scope.parent
        return count


__all__ = ["Namespace", "EMPTY_NAMESPACE", "Bindings"]
