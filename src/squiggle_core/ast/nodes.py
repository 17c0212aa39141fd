"""
Syntax Tree
===========

Immutable nodes produced by :mod:`squiggle_core.ast.parser`.

Every node carries the :class:`~squiggle_core.types.Location` of the source
text it was parsed from; error messages, frame stacks and editor lookups
are all built from these locations.

Notes
-----
- Nodes are frozen; a parsed program is never modified afterwards.
- Infix and unary operators are kept as their source symbols; the reducer
  resolves them to standard library functions through
  :data:`INFIX_FUNCTIONS` and :data:`UNARY_FUNCTIONS`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from enum import StrEnum

from squiggle_core.types import Location

INFIX_FUNCTIONS: dict[str, str] = {
    "+": "add",
    "-": "subtract",
    "*": "multiply",
    "/": "divide",
    "^": "pow",
    ".+": "dotAdd",
    ".-": "dotSubtract",
    ".*": "dotMultiply",
    "./": "dotDivide",
    ".^": "dotPow",
    "==": "equal",
    "!=": "unequal",
    "<": "smaller",
    "<=": "smallerEq",
    ">": "larger",
    ">=": "largerEq",
    "&&": "and",
    "||": "or",
    "to": "to",
}
"""Standard library function called for each infix operator."""

UNARY_FUNCTIONS: dict[str, str] = {
    "-": "unaryMinus",
    "!": "not",
    ".-": "unaryDotMinus",
}
"""Standard library function called for each prefix operator."""

UNIT_SUFFIXES: tuple[str, ...] = ("n", "m", "%", "k", "M", "B", "G", "T", "P")
"""Suffixes accepted right after a number literal (``5k``, ``10%``)."""


@dataclass(frozen=True, slots=True)
class Node:
    """Base class of all nodes."""

    location: Location = field(kw_only=True, compare=False)


@dataclass(frozen=True, slots=True)
class Float(Node):
    value: float


@dataclass(frozen=True, slots=True)
class Integer(Node):
    value: int


@dataclass(frozen=True, slots=True)
class Boolean(Node):
    value: bool


@dataclass(frozen=True, slots=True)
class String(Node):
    value: str


@dataclass(frozen=True, slots=True)
class Void(Node):
    pass


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    """
    Variable reference.

    Qualified library names (``List.map``) are a single identifier whose
    ``value`` contains the dot.
    """

    value: str


@dataclass(frozen=True, slots=True)
class UnitValue(Node):
    """Number literal with a unit suffix, e.g. ``5k``."""

    value: Float | Integer
    unit: str


@dataclass(frozen=True, slots=True)
class Array(Node):
    elements: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class KeyValue(Node):
    key: Expression
    value: Expression


@dataclass(frozen=True, slots=True)
class Dict(Node):
    """
    Record literal.

    An :class:`Identifier` element is shorthand for ``{x: x}``.
    """

    elements: tuple[KeyValue | Identifier, ...]


@dataclass(frozen=True, slots=True)
class Lambda(Node):
    parameters: tuple[Identifier, ...]
    body: Expression
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Call(Node):
    fn: Expression
    args: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class InfixCall(Node):
    op: str
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class UnaryCall(Node):
    op: str
    arg: Expression


@dataclass(frozen=True, slots=True)
class Pipe(Node):
    """``left -> fn(args...)``, a call of ``fn`` with ``left`` prepended."""

    left: Expression
    fn: Expression
    args: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class DotLookup(Node):
    arg: Expression
    key: str


@dataclass(frozen=True, slots=True)
class BracketLookup(Node):
    arg: Expression
    key: Expression


class TernarySyntax(StrEnum):
    C = "C"
    IF_THEN_ELSE = "IfThenElse"


@dataclass(frozen=True, slots=True)
class Ternary(Node):
    condition: Expression
    true_expression: Expression
    false_expression: Expression
    syntax: TernarySyntax = TernarySyntax.C


@dataclass(frozen=True, slots=True)
class Block(Node):
    statements: tuple[Statement, ...]
    result: Expression


@dataclass(frozen=True, slots=True)
class LetStatement(Node):
    variable: Identifier
    value: Expression
    exported: bool = False


@dataclass(frozen=True, slots=True)
class DefunStatement(Node):
    variable: Identifier
    value: Lambda
    exported: bool = False


@dataclass(frozen=True, slots=True)
class Decorator(Node):
    name: Identifier
    args: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class DecoratedStatement(Node):
    """Statement preceded by ``@name(args)``; applied as ``Tag.name(value, args)``."""

    decorator: Decorator
    statement: Statement


@dataclass(frozen=True, slots=True)
class Import(Node):
    path: String
    variable: Identifier


@dataclass(frozen=True, slots=True)
class Program(Node):
    """
    Parsed source.

    ``result`` is ``None`` when the source ends with a statement; such a
    program evaluates to void.
    """

    imports: tuple[Import, ...]
    statements: tuple[Statement, ...]
    result: Expression | None


type Expression = (
    Float
    | Integer
    | Boolean
    | String
    | Void
    | Identifier
    | UnitValue
    | Array
    | Dict
    | Lambda
    | Call
    | InfixCall
    | UnaryCall
    | Pipe
    | DotLookup
    | BracketLookup
    | Ternary
    | Block
)

type Statement = LetStatement | DefunStatement | DecoratedStatement


def statement_variable(statement: Statement) -> Identifier:
    """Variable bound by ``statement``, looking through decorators."""
    while isinstance(statement, DecoratedStatement):
        statement = statement.statement
    return statement.variable


def is_exported(statement: Statement) -> bool:
    while isinstance(statement, DecoratedStatement):
        statement = statement.statement
    return statement.exported


__all__ = [
    "INFIX_FUNCTIONS",
    "UNARY_FUNCTIONS",
    "UNIT_SUFFIXES",
    "Node",
    "Float",
    "Integer",
    "Boolean",
    "String",
    "Void",
    "Identifier",
    "UnitValue",
    "Array",
    "KeyValue",
    "Dict",
    "Lambda",
    "Call",
    "InfixCall",
    "UnaryCall",
    "Pipe",
    "DotLookup",
    "BracketLookup",
    "TernarySyntax",
    "Ternary",
    "Block",
    "LetStatement",
    "DefunStatement",
    "Decorator",
    "DecoratedStatement",
    "Import",
    "Program",
    "Expression",
    "Statement",
    "statement_variable",
    "is_exported",
]
