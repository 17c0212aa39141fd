"""
Date and Duration namespaces, plus date arithmetic under the operator names.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.errors import DomainError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import FRFunction, make_definition
from squiggle_core.library.fr.builtin import divide
from squiggle_core.library.frtypes import (
    fr_bool,
    fr_date,
    fr_duration,
    fr_named,
    fr_number,
    fr_string,
)
from squiggle_core.value.sdate import DURATION_UNITS, SDate, SDuration

date_maker = FnFactory(namespace="Date", requires_namespace=True)
duration_maker = FnFactory(namespace="Duration", requires_namespace=True)
operator_maker = FnFactory(namespace="", requires_namespace=False)


def _make_from_parts(year: float, month: float, day: float) -> SDate:
    if not all(float(part).is_integer() for part in (year, month, day)):
        raise DomainError("Year, month and day must be integers")
    return SDate.from_year_month_day(int(year), int(month), int(day))


def _duration_functions() -> list[FRFunction]:
    functions = []
    for unit in DURATION_UNITS:
        plural = f"{unit}s"

        def from_unit(amount: float, unit: str = unit) -> SDuration:
            return SDuration.from_unit(amount, unit)

        def to_unit(duration: SDuration, unit: str = unit) -> float:
            return duration.to_unit(unit)

        functions.append(
            duration_maker.make(
                f"from{plural}",
                [make_definition([fr_number], fr_duration, from_unit)],
                description=f"Duration of the given number of {plural.lower()}.",
            )
        )
        functions.append(
            duration_maker.make(
                f"to{plural}",
                [make_definition([fr_duration], fr_number, to_unit)],
            )
        )
    return functions


def _comparisons() -> list[FRFunction]:
    functions = []
    for name, fn in (
        ("smaller", lambda a, b: a < b),
        ("smallerEq", lambda a, b: a <= b),
        ("larger", lambda a, b: a > b),
        ("largerEq", lambda a, b: a >= b),
    ):
        functions.append(
            operator_maker.make(
                name,
                [
                    make_definition([fr_date, fr_date], fr_bool, fn),
                    make_definition([fr_duration, fr_duration], fr_bool, fn),
                ],
            )
        )
    return functions


library = [
    date_maker.make(
        "make",
        [
            make_definition([fr_string], fr_date, SDate.from_string),
            make_definition(
                [
                    fr_named("year", fr_number),
                    fr_named("month", fr_number),
                    fr_named("day", fr_number),
                ],
                fr_date,
                _make_from_parts,
            ),
            make_definition([fr_named("year", fr_number)], fr_date, SDate.from_year),
        ],
        description="Date from an ISO string, from year, month and day, or from a year.",
        examples=['Date.make("2020-05-12")', "Date.make(2020, 5, 10)", "Date.make(2023)"],
    ),
    date_maker.make(
        "fromUnixTime",
        [make_definition([fr_number], fr_date, SDate.from_unix_s)],
        description="Date from seconds since the Unix epoch.",
    ),
    date_maker.make(
        "toUnixTime",
        [make_definition([fr_date], fr_number, lambda date: date.to_unix_s())],
    ),
    *_duration_functions(),
    operator_maker.make(
        "add",
        [
            make_definition([fr_date, fr_duration], fr_date, lambda d, t: d.add_duration(t)),
            make_definition([fr_duration, fr_date], fr_date, lambda t, d: d.add_duration(t)),
            make_definition([fr_duration, fr_duration], fr_duration, lambda a, b: a + b),
        ],
    ),
    operator_maker.make(
        "subtract",
        [
            make_definition([fr_date, fr_date], fr_duration, lambda a, b: a.subtract(b)),
            make_definition([fr_date, fr_duration], fr_date, lambda d, t: d.subtract_duration(t)),
            make_definition([fr_duration, fr_duration], fr_duration, lambda a, b: a - b),
        ],
    ),
    operator_maker.make(
        "multiply",
        [
            make_definition([fr_duration, fr_number], fr_duration, lambda t, x: t.multiply(x)),
            make_definition([fr_number, fr_duration], fr_duration, lambda x, t: t.multiply(x)),
        ],
    ),
    operator_maker.make(
        "divide",
        [
            make_definition([fr_duration, fr_number], fr_duration, lambda t, x: t.divide(x)),
            make_definition([fr_duration, fr_duration], fr_number, lambda a, b: divide(a.ms, b.ms)),
        ],
    ),
    operator_maker.make(
        "unaryMinus",
        [make_definition([fr_duration], fr_duration, lambda t: t.multiply(-1))],
    ),
    *_comparisons(),
]

__all__ = ["library"]
