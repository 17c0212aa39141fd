"""
Number and Math namespaces.

Scalar functions (``floor``, ``exp``, ...) are reachable without a
namespace; list statistics need it (``Number.sum([1, 2])``).
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable

import numpy as np

from squiggle_core.errors import ArgumentError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import FRFunction, make_definition
from squiggle_core.library.frtypes import fr_array, fr_number
from squiggle_core.value.values import Value, v_number

maker = FnFactory(namespace="Number", requires_namespace=False)
math_maker = FnFactory(namespace="Math", requires_namespace=True)


def _non_empty(fn: Callable[[list[float]], float]) -> Callable[[list[float]], float]:
    def wrapper(values: list[float]) -> float:
        if not values:
            raise ArgumentError("List must not be empty")
        return fn(values)

    return wrapper


def _safe_log(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapper(x: float) -> float:
        if x < 0 or math.isnan(x):
            return math.nan
        if x == 0:
            return -math.inf
        return fn(x)

    return wrapper


def _list_fn(name: str, fn: Callable[[list[float]], float], description: str) -> FRFunction:
    return maker.make(
        name,
        [make_definition([fr_array(fr_number)], fr_number, _non_empty(fn))],
        description=description,
        requires_namespace=True,
    )


def _list_to_list(name: str, fn: Callable[[list[float]], list[float]]) -> FRFunction:
    return maker.make(
        name,
        [make_definition([fr_array(fr_number)], fr_array(fr_number), fn)],
        requires_namespace=True,
    )


def _quantile(values: list[float], p: float) -> float:
    if not values:
        raise ArgumentError("List must not be empty")
    if not 0 <= p <= 1:
        raise ArgumentError(f"Quantile must be between 0 and 1, got {p}")
    return float(np.quantile(values, p))


library = [
    maker.make_number_to_number("floor", lambda x: float(np.floor(x))),
    maker.make_number_to_number("ceil", lambda x: float(np.ceil(x))),
    maker.make_number_to_number("abs", abs),
    maker.make_number_to_number("round", lambda x: float(np.floor(x + 0.5))),
    maker.make_number_to_number("exp", lambda x: math.exp(x) if x < 709.78 else math.inf),
    maker.make_number_to_number("log", _safe_log(math.log)),
    maker.make_number_to_number("log10", _safe_log(math.log10)),
    maker.make_number_to_number("log2", _safe_log(math.log2)),
    _list_fn("sum", math.fsum, "Sum of a list."),
    _list_fn("product", math.prod, "Product of a list."),
    _list_fn("min", min, "Smallest element."),
    _list_fn("max", max, "Largest element."),
    _list_fn("mean", lambda xs: math.fsum(xs) / len(xs), "Arithmetic mean."),
    _list_fn("geomean", lambda xs: float(np.exp(np.mean(np.log(xs)))), "Geometric mean."),
    _list_fn("stdev", lambda xs: float(np.std(xs)), "Population standard deviation."),
    _list_fn("variance", lambda xs: float(np.var(xs)), "Population variance."),
    maker.make(
        "quantile",
        [make_definition([fr_array(fr_number), fr_number], fr_number, _quantile)],
        requires_namespace=True,
    ),
    _list_to_list("sort", sorted),
    _list_to_list("cumsum", lambda xs: np.cumsum(xs).tolist()),
    _list_to_list("cumprod", lambda xs: np.cumprod(xs).tolist()),
    _list_to_list("diff", lambda xs: np.diff(xs).tolist()),
    maker.make(
        "min",
        [make_definition([fr_number, fr_number], fr_number, min)],
        requires_namespace=True,
    ),
    maker.make(
        "max",
        [make_definition([fr_number, fr_number], fr_number, max)],
        requires_namespace=True,
    ),
    math_maker.make_number_to_number("sqrt", lambda x: math.sqrt(x) if x >= 0 else math.nan),
    math_maker.make_number_to_number("sin", math.sin),
    math_maker.make_number_to_number("cos", math.cos),
    math_maker.make_number_to_number("tan", math.tan),
    math_maker.make_number_to_number("asin", lambda x: math.asin(x) if -1 <= x <= 1 else math.nan),
    math_maker.make_number_to_number("acos", lambda x: math.acos(x) if -1 <= x <= 1 else math.nan),
    math_maker.make_number_to_number("atan", math.atan),
]

constants: dict[str, Value] = {
    "Math.pi": v_number(math.pi),
    "Math.e": v_number(math.e),
    "Math.ln2": v_number(math.log(2)),
    "Math.ln10": v_number(math.log(10)),
    "Math.phi": v_number((1 + math.sqrt(5)) / 2),
    "Math.tau": v_number(math.tau),
}

__all__ = ["library", "constants"]
