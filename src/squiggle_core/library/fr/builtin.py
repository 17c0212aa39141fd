"""
Operators on numbers, strings and booleans.

Every infix operator of the language is a call of one of these functions
(``1 + 2`` is ``add(1, 2)``). Dates, durations and distributions add their
own definitions under the same names in their modules.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import FRFunction, make_definition
from squiggle_core.library.frtypes import FRType, fr_bool, fr_number, fr_string

maker = FnFactory(namespace="", requires_namespace=False)


def divide(a: float, b: float) -> float:
    """IEEE division: ``1 / 0`` is infinity and ``0 / 0`` is NaN."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def power(a: float, b: float) -> float:
    """``a ** b`` with NaN for complex results and infinity on overflow."""
    if a < 0 and not float(b).is_integer():
        return math.nan
    if a == 0 and b < 0:
        return math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.inf


def _comparisons(types: tuple[FRType, ...]) -> list[FRFunction]:
    functions = []
    for name, fn in (
        ("smaller", lambda a, b: a < b),
        ("smallerEq", lambda a, b: a <= b),
        ("larger", lambda a, b: a > b),
        ("largerEq", lambda a, b: a >= b),
    ):
        functions.append(
            maker.make(name, [make_definition([t, t], fr_bool, fn) for t in types])
        )
    return functions


library = [
    maker.make(
        "add",
        [
            make_definition([fr_number, fr_number], fr_number, lambda a, b: a + b),
            make_definition([fr_string, fr_string], fr_string, lambda a, b: a + b),
        ],
    ),
    maker.make_two_numbers_to_number("subtract", lambda a, b: a - b),
    maker.make_two_numbers_to_number("multiply", lambda a, b: a * b),
    maker.make_two_numbers_to_number("divide", divide),
    maker.make_two_numbers_to_number("pow", power),
    maker.make_two_numbers_to_number("dotAdd", lambda a, b: a + b),
    maker.make_two_numbers_to_number("dotSubtract", lambda a, b: a - b),
    maker.make_two_numbers_to_number("dotMultiply", lambda a, b: a * b),
    maker.make_two_numbers_to_number("dotDivide", divide),
    maker.make_two_numbers_to_number("dotPow", power),
    maker.make_number_to_number("unaryMinus", lambda a: -a),
    maker.make_number_to_number("unaryDotMinus", lambda a: -a),
    maker.make("not", [make_definition([fr_bool], fr_bool, lambda a: not a)]),
    maker.make_two_bools_to_bool("and", lambda a, b: a and b),
    maker.make_two_bools_to_bool("or", lambda a, b: a or b),
    *_comparisons((fr_number, fr_string)),
]

__all__ = ["library", "divide", "power"]
