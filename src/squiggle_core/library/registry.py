"""
Function registry.

Collects the :class:`FRFunction` objects of all library modules and turns
them into the namespace a program is evaluated against.

Resolution order
----------------
1. Qualified names (``List.map``) always resolve to their namespace.
2. Functions sharing one qualified name (``add`` for numbers, dates and
   distributions) are merged; their definitions are tried in registration
   order.
3. An unqualified name is bound only when every function exposing it
   without a namespace lives in the same namespace; otherwise it is
   ambiguous and calling it raises :class:`CompileError`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from squiggle_core.errors import BindingError, CompileError
from squiggle_core.library.fn_definition import FnDefinition, FRFunction
from squiggle_core.reducer.bindings import Namespace
from squiggle_core.reducer.lambdas import BuiltinLambda
from squiggle_core.value.values import Value, v_lambda

if TYPE_CHECKING:
    from squiggle_core.reducer.reducer import Reducer

logger = logging.getLogger(__name__)


class Registry:
    """
    Library functions and constants, indexed by name.

    Parameters
    ----------
    functions : iterable of FRFunction
        Functions in registration order.
    constants : mapping, optional
        Qualified names bound to plain values, such as ``Math.pi``.
    """

    def __init__(
        self, functions: Iterable[FRFunction], constants: Mapping[str, Value] | None = None
    ) -> None:
        self._functions: list[FRFunction] = []
        self._definitions: dict[str, list[FnDefinition]] = {}
        self._unqualified: dict[str, dict[str, list[FnDefinition]]] = {}
        self._constants: dict[str, Value] = dict(constants or {})
        self._namespace: Namespace | None = None
        for fn in functions:
            self.register(fn)

    def register(self, fn: FRFunction) -> None:
        """
        Add ``fn``; merges with functions of the same qualified name.

        Registering the very same function twice warns and is ignored.
        """
        if fn in self._functions:
            warnings.warn(
                f"Function '{fn.qualified_name}' is already registered; ignoring it",
                UserWarning,
                stacklevel=2,
            )
            return
        self._functions.append(fn)
        self._definitions.setdefault(fn.qualified_name, []).extend(fn.definitions)
        if fn.namespace and not fn.requires_namespace:
            by_namespace = self._unqualified.setdefault(fn.name, {})
            by_namespace.setdefault(fn.namespace, []).extend(fn.definitions)
        self._namespace = None

    def functions(self) -> list[FRFunction]:
        return list(self._functions)

    def _candidates(self, name: str) -> dict[str, list[FnDefinition]]:
        candidates = dict(self._unqualified.get(name, {}))
        if name in self._definitions and "." not in name:
            candidates.setdefault("", self._definitions[name])
        return candidates

    def is_ambiguous(self, name: str) -> bool:
        return len(self._candidates(name)) > 1

    def ambiguity_message(self, name: str) -> str:
        options = sorted(f"{ns}.{name}" if ns else name for ns in self._candidates(name))
        return f"Ambiguous function name {name}: use one of {', '.join(options)}"

    def definitions(self, name: str) -> Sequence[FnDefinition]:
        """
        Definitions bound to ``name``.

        Raises
        ------
        CompileError
            If ``name`` is ambiguous.
        BindingError
            If no function has that name.
        """
        if "." in name:
            if name not in self._definitions:
                raise BindingError(name)
            return self._definitions[name]
        candidates = self._candidates(name)
        if len(candidates) > 1:
            raise CompileError(self.ambiguity_message(name))
        if not candidates:
            raise BindingError(name)
        return next(iter(candidates.values()))

    def make_lambda(self, name: str) -> BuiltinLambda:
        return BuiltinLambda(name, self.definitions(name))

    def call(self, name: str, args: Sequence[Value], reducer: Reducer) -> Value:
        """Call the library function ``name`` with ``args`` inside ``reducer``."""
        return reducer.call_lambda(self.make_lambda(name), args)

    def signatures(self, name: str) -> list[str]:
        return [
            f"{name}{definition}"
            for definition in self.definitions(name)
            if not definition.is_assert
        ]

    def all_names(self) -> list[str]:
        """Every name bound in :meth:`namespace`, sorted."""
        return sorted(self.namespace())

    def namespace(self) -> Namespace:
        """Names of all functions and constants, built once per registry."""
        if self._namespace is None:
            items: dict[str, Value] = dict(self._constants)
            for name, definitions in self._definitions.items():
                items[name] = v_lambda(BuiltinLambda(name, definitions))
            for name, by_namespace in self._unqualified.items():
                if self.is_ambiguous(name):
                    logger.debug("Not binding ambiguous name %s", name)
                    items.pop(name, None)
                    continue
                (definitions,) = by_namespace.values()
                items[name] = v_lambda(BuiltinLambda(name, definitions))
            self._namespace = Namespace(items)
        return self._namespace


__all__ = ["Registry"]
