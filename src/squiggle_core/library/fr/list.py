"""
List namespace.

Functions taking a callback call it through the reducer, so callbacks get
their own frame and errors inside them carry the full stack. Callbacks of
``map``, ``reduce`` and similar functions may accept the element index as
an extra argument.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from typing import TYPE_CHECKING

from squiggle_core.errors import ArgumentError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import make_assert_definition, make_definition
from squiggle_core.library.frtypes import (
    fr_any,
    fr_array,
    fr_bool,
    fr_lambda_ambiguous,
    fr_lambda_nand,
    fr_lambda_with_arity,
    fr_named,
    fr_number,
    fr_optional,
    fr_string,
    fr_tuple,
)
from squiggle_core.value.values import (
    BaseValue,
    Value,
    VArray,
    VBool,
    VNumber,
    uniq,
    uniq_by,
    v_number,
)

if TYPE_CHECKING:
    from squiggle_core.library.fn_definition import FnDefinition
    from squiggle_core.library.frtypes import FRType
    from squiggle_core.reducer.lambdas import Lambda
    from squiggle_core.reducer.reducer import Reducer

maker = FnFactory(namespace="List", requires_namespace=False)

_list = fr_array(fr_any())


def _to_index(value: float, what: str) -> int:
    if not float(value).is_integer():
        raise ArgumentError(f"{what} must be an integer, got {value}")
    return int(value)


def _non_empty(values: list[Value], name: str) -> None:
    if not values:
        raise ArgumentError(f"List.{name}: list must not be empty")


def _apply(reducer: Reducer, fn: Lambda, args: list[Value], index: int) -> Value:
    """Call ``fn`` with ``args``, appending the index if ``fn`` wants it."""
    if fn.accepts(len(args)):
        return reducer.call_lambda(fn, args)
    return reducer.call_lambda(fn, [*args, v_number(index)])


def _predicate(reducer: Reducer, fn: Lambda, value: Value, index: int) -> bool:
    result = _apply(reducer, fn, [value], index)
    if not isinstance(result, VBool):
        raise ArgumentError(f"Expected the function to return a Boolean, got {result.public_name}")
    return result.value


def _number_key(reducer: Reducer, fn: Lambda, value: Value) -> float:
    result = reducer.call_lambda(fn, [value])
    if not isinstance(result, VNumber):
        raise ArgumentError(f"Expected the function to return a Number, got {result.public_name}")
    return result.value


# Construction


def _make(count: float, fill: Value | Lambda, *, reducer: Reducer) -> list[Value]:
    size = _to_index(count, "Number of elements")
    if size < 0:
        raise ArgumentError(f"Number of elements must be non-negative, got {size}")
    if isinstance(fill, BaseValue):
        return [fill] * size
    if fill.accepts(0):
        return [reducer.call_lambda(fill, []) for _ in range(size)]
    return [reducer.call_lambda(fill, [v_number(i)]) for i in range(size)]


def _up_to(low: float, high: float) -> list[float]:
    start = _to_index(low, "Low")
    stop = _to_index(high, "High")
    return [float(i) for i in range(start, stop + 1)]


# Access


def _first(values: list[Value]) -> Value:
    _non_empty(values, "first")
    return values[0]


def _last(values: list[Value]) -> Value:
    _non_empty(values, "last")
    return values[-1]


def _slice(values: list[Value], start: float, end: float | None) -> list[Value]:
    begin = _to_index(start, "Start")
    if end is None:
        return values[begin:]
    return values[begin : _to_index(end, "End")]


def _flatten(values: list[Value]) -> list[Value]:
    result: list[Value] = []
    for item in values:
        if isinstance(item, VArray):
            result.extend(item.value)
        else:
            result.append(item)
    return result


def _zip(first: list[Value], second: list[Value]) -> list[tuple[Value, Value]]:
    if len(first) != len(second):
        raise ArgumentError("List.zip: lists must have the same length")
    return list(zip(first, second, strict=True))


def _unzip(pairs: list[tuple[Value, Value]]) -> tuple[list[Value], list[Value]]:
    return [a for a, _ in pairs], [b for _, b in pairs]


def _shuffle(values: list[Value], *, reducer: Reducer) -> list[Value]:
    order = reducer.rng.permutation(len(values))
    return [values[i] for i in order]


# Higher-order


def _map(values: list[Value], fn: Lambda, *, reducer: Reducer) -> list[Value]:
    return [_apply(reducer, fn, [value], i) for i, value in enumerate(values)]


def _reduce(
    values: list[Value], initial: Value, fn: Lambda, *, reducer: Reducer
) -> Value:
    accumulator = initial
    for i, value in enumerate(values):
        accumulator = _apply(reducer, fn, [accumulator, value], i)
    return accumulator


def _reduce_reverse(
    values: list[Value], initial: Value, fn: Lambda, *, reducer: Reducer
) -> Value:
    accumulator = initial
    for value in reversed(values):
        accumulator = reducer.call_lambda(fn, [accumulator, value])
    return accumulator


def _reduce_while(
    values: list[Value], initial: Value, fn: Lambda, condition: Lambda, *, reducer: Reducer
) -> Value:
    """Reduce until the next accumulator fails ``condition``; return the last one that held."""
    accumulator = initial
    for value in values:
        candidate = reducer.call_lambda(fn, [accumulator, value])
        check = reducer.call_lambda(condition, [candidate])
        if not isinstance(check, VBool):
            raise ArgumentError(
                f"Expected the condition to return a Boolean, got {check.public_name}"
            )
        if not check.value:
            break
        accumulator = candidate
    return accumulator


def _filter(values: list[Value], fn: Lambda, *, reducer: Reducer) -> list[Value]:
    return [value for i, value in enumerate(values) if _predicate(reducer, fn, value, i)]


def _every(values: list[Value], fn: Lambda, *, reducer: Reducer) -> bool:
    return all(_predicate(reducer, fn, value, i) for i, value in enumerate(values))


def _some(values: list[Value], fn: Lambda, *, reducer: Reducer) -> bool:
    return any(_predicate(reducer, fn, value, i) for i, value in enumerate(values))


def _find_index(values: list[Value], fn: Lambda, *, reducer: Reducer) -> int:
    for i, value in enumerate(values):
        if _predicate(reducer, fn, value, i):
            return i
    return -1


def _find(values: list[Value], fn: Lambda, *, reducer: Reducer) -> Value:
    index = _find_index(values, fn, reducer=reducer)
    if index < 0:
        raise ArgumentError("List.find: no element found")
    return values[index]


def _uniq_by(values: list[Value], fn: Lambda, *, reducer: Reducer) -> list[Value]:
    keys = {id(value): reducer.call_lambda(fn, [value]) for value in values}
    return uniq_by(values, lambda value: keys[id(value)])


def _sort_by(values: list[Value], fn: Lambda, *, reducer: Reducer) -> list[Value]:
    keyed = [(_number_key(reducer, fn, value), i) for i, value in enumerate(values)]
    return [values[i] for _, i in sorted(keyed)]


def _extreme_by(pick: Callable[..., tuple[float, int]], name: str):
    def run(values: list[Value], fn: Lambda, *, reducer: Reducer) -> Value:
        _non_empty(values, name)
        _, index = pick((_number_key(reducer, fn, value), i) for i, value in enumerate(values))
        return values[index]

    return run


def _join(values: list[str], separator: str | None) -> str:
    return ("," if separator is None else separator).join(values)


_callback = fr_lambda_nand([1, 2])
_reducer_callback = fr_lambda_nand([2, 3])


def _ambiguous_callback(inputs: list[FRType], arities: tuple[int, int]) -> FnDefinition:
    first, second = arities
    return make_assert_definition(
        [*inputs, fr_lambda_ambiguous(arities)],
        f"Call with either {first} or {second} arguments, not both.",
    )


library = [
    maker.make(
        "make",
        [
            _ambiguous_callback([fr_number], (0, 1)),
            make_definition(
                [fr_named("count", fr_number), fr_lambda_nand([0, 1])],
                _list,
                _make,
                uses_reducer=True,
            ),
            make_definition(
                [fr_named("count", fr_number), fr_any()], _list, _make, uses_reducer=True
            ),
        ],
        description="List of ``count`` copies of a value, or of results of calling a function.",
        examples=["List.make(2, 3) // [3,3]", "List.make(3, {|i| i * 2}) // [0,2,4]"],
    ),
    maker.make(
        "upTo",
        [make_definition([fr_number, fr_number], fr_array(fr_number), _up_to)],
        examples=["List.upTo(1, 4) // [1,2,3,4]"],
    ),
    maker.make("length", [make_definition([_list], fr_number, len)]),
    maker.make("first", [make_definition([_list], fr_any(), _first)]),
    maker.make("last", [make_definition([_list], fr_any(), _last)]),
    maker.make("reverse", [make_definition([_list], _list, lambda values: values[::-1])]),
    maker.make("concat", [make_definition([_list, _list], _list, lambda a, b: a + b)]),
    maker.make(
        "append", [make_definition([_list, fr_any()], _list, lambda values, v: [*values, v])]
    ),
    maker.make(
        "slice",
        [make_definition([_list, fr_number, fr_optional(fr_number)], _list, _slice)],
        description="Elements from ``start`` up to ``end``, exclusive; negatives count back.",
    ),
    maker.make("uniq", [make_definition([_list], _list, uniq)]),
    maker.make(
        "uniqBy",
        [make_definition([_list, fr_lambda_with_arity(1)], _list, _uniq_by, uses_reducer=True)],
    ),
    maker.make(
        "map",
        [
            _ambiguous_callback([_list], (1, 2)),
            make_definition([_list, _callback], _list, _map, uses_reducer=True),
        ],
        examples=["List.map([1, 2], {|x| x + 1}) // [2,3]"],
    ),
    maker.make(
        "reduce",
        [
            _ambiguous_callback([_list, fr_any()], (2, 3)),
            make_definition(
                [_list, fr_named("initial", fr_any()), _reducer_callback],
                fr_any(),
                _reduce,
                uses_reducer=True,
            ),
        ],
        examples=["List.reduce([1, 2, 3], 0, {|acc, x| acc + x}) // 6"],
    ),
    maker.make(
        "reduceReverse",
        [
            make_definition(
                [_list, fr_any(), fr_lambda_with_arity(2)],
                fr_any(),
                _reduce_reverse,
                uses_reducer=True,
            )
        ],
    ),
    maker.make(
        "reduceWhile",
        [
            make_definition(
                [_list, fr_any(), fr_lambda_with_arity(2), fr_lambda_with_arity(1)],
                fr_any(),
                _reduce_while,
                uses_reducer=True,
            )
        ],
    ),
    maker.make("filter", [make_definition([_list, _callback], _list, _filter, uses_reducer=True)]),
    maker.make("every", [make_definition([_list, _callback], fr_bool, _every, uses_reducer=True)]),
    maker.make("some", [make_definition([_list, _callback], fr_bool, _some, uses_reducer=True)]),
    maker.make("find", [make_definition([_list, _callback], fr_any(), _find, uses_reducer=True)]),
    maker.make(
        "findIndex",
        [make_definition([_list, _callback], fr_number, _find_index, uses_reducer=True)],
    ),
    maker.make(
        "join",
        [make_definition([fr_array(fr_string), fr_optional(fr_string)], fr_string, _join)],
    ),
    maker.make("flatten", [make_definition([_list], _list, _flatten)]),
    maker.make("shuffle", [make_definition([_list], _list, _shuffle, uses_reducer=True)]),
    maker.make(
        "zip", [make_definition([_list, _list], fr_array(fr_tuple(fr_any(), fr_any())), _zip)]
    ),
    maker.make(
        "unzip",
        [make_definition([fr_array(fr_tuple(fr_any(), fr_any()))], fr_tuple(_list, _list), _unzip)],
    ),
    maker.make(
        "sortBy",
        [make_definition([_list, fr_lambda_with_arity(1)], _list, _sort_by, uses_reducer=True)],
    ),
    maker.make(
        "minBy",
        [
            make_definition(
                [_list, fr_lambda_with_arity(1)],
                fr_any(),
                _extreme_by(min, "minBy"),
                uses_reducer=True,
            )
        ],
    ),
    maker.make(
        "maxBy",
        [
            make_definition(
                [_list, fr_lambda_with_arity(1)],
                fr_any(),
                _extreme_by(max, "maxBy"),
                uses_reducer=True,
            )
        ],
    ),
]

__all__ = ["library"]
