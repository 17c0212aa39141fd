"""
Callable values of the language.

Two kinds of functions exist:

- :class:`UserDefinedLambda`: a lambda or ``f(x) = ...`` definition with
  the bindings it closed over;
- :class:`BuiltinLambda`: a standard library function dispatching over its
  typed definitions.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from squiggle_core.errors import ArgumentError, OtherError, SquiggleError

if TYPE_CHECKING:
    from squiggle_core.ast.nodes import Expression
    from squiggle_core.library.fn_definition import FnDefinition
    from squiggle_core.reducer.bindings import Bindings
    from squiggle_core.reducer.reducer import Reducer
    from squiggle_core.types import Location
    from squiggle_core.value.values import Value


class Lambda(ABC):
    """Base class of all functions."""

    name: str | None

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else "<anonymous>"

    @abstractmethod
    def parameter_counts(self) -> list[int]:
        """Numbers of arguments the function accepts."""

    @abstractmethod
    def call(self, args: Sequence[Value], reducer: Reducer) -> Value:
        """
        Apply the function.

        Frames are managed by :meth:`Reducer.call_lambda`; call that instead
        of this method from library code.
        """

    @abstractmethod
    def to_string(self) -> str: ...

    def accepts(self, arity: int) -> bool:
        return arity in self.parameter_counts()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.display_name!r})"


class UserDefinedLambda(Lambda):
    """
    Function written in the language.

    Parameters
    ----------
    name : str or None
        Name of the defining statement, if any.
    parameters : tuple of str
        Parameter names.
    body : Expression
        Body evaluated on every call.
    captured : Bindings
        Scope in which the function was defined.
    location : Location, optional
        Location of the definition.
    """

    __slots__ = ("name", "parameters", "body", "captured", "location")

    def __init__(
        self,
        name: str | None,
        parameters: tuple[str, ...],
        body: Expression,
        captured: Bindings,
        location: Location | None = None,
    ) -> None:
        self.name = name
        self.parameters = parameters
        self.body = body
        self.captured = captured
        self.location = location

    def parameter_counts(self) -> list[int]:
        return [len(self.parameters)]

    def call(self, args: Sequence[Value], reducer: Reducer) -> Value:
        if len(args) != len(self.parameters):
            raise ArgumentError(
                f"{len(self.parameters)} arguments expected. "
                f"Instead {len(args)} argument(s) were passed."
            )
        scope = self.captured.extend()
        for parameter, value in zip(self.parameters, args, strict=True):
            scope = scope.set(parameter, value)
        return reducer.evaluate(self.body, scope)

    def to_string(self) -> str:
        return f"({','.join(self.parameters)}) => internal code"


class BuiltinLambda(Lambda):
    """
    Standard library function.

    Definitions are tried in order; the first one whose input types match
    the arguments is run.
    """

    __slots__ = ("name", "definitions")

    def __init__(self, name: str, definitions: Sequence[FnDefinition]) -> None:
        self.name = name
        self.definitions = tuple(definitions)

    def parameter_counts(self) -> list[int]:
        counts: set[int] = set()
        for definition in self.definitions:
            counts.update(range(definition.min_arity(), definition.max_arity() + 1))
        return sorted(counts)

    def signatures(self) -> list[str]:
        return [
            f"{self.name}{definition}"
            for definition in self.definitions
            if not definition.is_assert
        ]

    def call(self, args: Sequence[Value], reducer: Reducer) -> Value:
        """
        Raises
        ------
        ArgumentError
            If no definition matches; the message lists the given argument
            types and every signature.
        OtherError
            If the implementation fails with a plain Python exception.
        """
        try:
            for definition in self.definitions:
                result = definition.try_call(args, reducer)
                if result is not None:
                    return result
        except (SquiggleError, RecursionError):
            raise
        except Exception as exc:
            raise OtherError(f"{self.name}: {type(exc).__name__}: {exc}") from exc

        given = ", ".join(arg.public_name for arg in args)
        signatures = "\n".join(f"  {signature}" for signature in self.signatures())
        raise ArgumentError(
            f"There are function matches for {self.name}(), but with different arguments:\n"
            f"{signatures}\nWas given arguments: ({given})"
        )

    def to_string(self) -> str:
        return f"Builtin function {self.name}"


__all__ = ["Lambda", "UserDefinedLambda", "BuiltinLambda"]
