"""
Typed definitions of library functions.

A library function is an :class:`FRFunction`: a name, a namespace and an
ordered list of :class:`FnDefinition` objects. A call runs the first
definition whose input types match the arguments.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from squiggle_core.errors import ArgumentError, InternalError
from squiggle_core.library.frtypes import NO_MATCH, FRType, fr_any

if TYPE_CHECKING:
    from squiggle_core.reducer.reducer import Reducer
    from squiggle_core.value.values import Value


@dataclass(frozen=True, slots=True)
class FnDefinition:
    """
    One signature of a library function.

    Parameters
    ----------
    inputs : tuple of FRType
        Parameter types; optional ones may only trail.
    output : FRType
        Type packing the implementation's return value.
    run : callable
        Implementation, called with the unpacked arguments. When
        ``uses_reducer`` is set it also receives the running reducer as the
        ``reducer`` keyword argument.
    uses_reducer : bool, default False
        Whether ``run`` needs the reducer (to call functions, read the
        environment or draw random numbers).
    is_assert : bool, default False
        Whether the definition only exists to raise a descriptive error.
    """

    inputs: tuple[FRType, ...]
    output: FRType
    run: Callable[..., Any]
    uses_reducer: bool = False
    is_assert: bool = False

    def min_arity(self) -> int:
        count = len(self.inputs)
        while count > 0 and self.inputs[count - 1].optional:
            count -= 1
        return count

    def max_arity(self) -> int:
        return len(self.inputs)

    def try_unpack(self, args: Sequence[Value]) -> list[Any] | None:
        """Unpacked arguments, or ``None`` if ``args`` do not match the inputs."""
        if not self.min_arity() <= len(args) <= self.max_arity():
            return None
        unpacked: list[Any] = []
        for index, input_type in enumerate(self.inputs):
            if index >= len(args):
                unpacked.append(None)
                continue
            value = input_type.unpack(args[index])
            if value is NO_MATCH:
                return None
            unpacked.append(value)
        return unpacked

    def try_call(self, args: Sequence[Value], reducer: Reducer) -> Value | None:
        """Result of the call, or ``None`` if the definition does not match."""
        unpacked = self.try_unpack(args)
        if unpacked is None:
            return None
        if self.uses_reducer:
            result = self.run(*unpacked, reducer=reducer)
        else:
            result = self.run(*unpacked)
        return self.output.pack(result)

    def __str__(self) -> str:
        inputs = ", ".join(t.name for t in self.inputs)
        return f"({inputs}) => {self.output.name}"


def make_definition(
    inputs: Sequence[FRType],
    output: FRType,
    run: Callable[..., Any],
    *,
    uses_reducer: bool = False,
) -> FnDefinition:
    """
    Build a definition, checking that optional inputs only trail.

    Raises
    ------
    InternalError
        If a required input follows an optional one.
    """
    seen_optional = False
    for input_type in inputs:
        if input_type.optional:
            seen_optional = True
        elif seen_optional:
            raise InternalError("Optional parameters must come after required ones")
    return FnDefinition(tuple(inputs), output, run, uses_reducer)


def make_assert_definition(inputs: Sequence[FRType], message: str) -> FnDefinition:
    """Definition that matches ``inputs`` and always fails with ``message``."""

    def fail(*_: Any) -> Any:
        raise ArgumentError(message)

    return FnDefinition(tuple(inputs), fr_any(), fail, is_assert=True)


@dataclass(frozen=True, slots=True)
class FRFunction:
    """
    Library function as registered.

    Parameters
    ----------
    name : str
        Unqualified name.
    namespace : str
        Namespace, empty for operators and other global functions.
    requires_namespace : bool
        Whether only the qualified name is bound.
    definitions : tuple of FnDefinition
        Signatures in dispatch order.
    description : str, optional
        One-line documentation.
    examples : tuple of str
        Source snippets showing the function in use.
    """

    name: str
    namespace: str
    requires_namespace: bool
    definitions: tuple[FnDefinition, ...]
    description: str | None = None
    examples: tuple[str, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def signatures(self) -> list[str]:
        """Callable signatures; definitions that only raise are left out."""
        return [
            f"{self.qualified_name}{definition}"
            for definition in self.definitions
            if not definition.is_assert
        ]


__all__ = ["FnDefinition", "make_definition", "make_assert_definition", "FRFunction"]
