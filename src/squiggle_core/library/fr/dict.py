"""
Dict namespace: records with string keys.

Records keep insertion order; functions producing a record with a key that
already exists replace its value in place.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from squiggle_core.errors import ArgumentError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import make_definition
from squiggle_core.library.frtypes import (
    fr_any,
    fr_array,
    fr_bool,
    fr_dict_with_arbitrary_keys,
    fr_lambda_with_arity,
    fr_number,
    fr_optional,
    fr_string,
    fr_tuple,
)
from squiggle_core.value.values import Value, VString, v_string

if TYPE_CHECKING:
    from squiggle_core.reducer.lambdas import Lambda
    from squiggle_core.reducer.reducer import Reducer

maker = FnFactory(namespace="Dict", requires_namespace=True)

_record = fr_dict_with_arbitrary_keys(fr_any())


def _set(record: dict[str, Value], key: str, value: Value) -> dict[str, Value]:
    return {**record, key: value}


def _delete(record: dict[str, Value], key: str) -> dict[str, Value]:
    return {k: v for k, v in record.items() if k != key}


def _get(record: dict[str, Value], key: str, default: Value | None) -> Value:
    if key in record:
        return record[key]
    if default is not None:
        return default
    raise ArgumentError(f"Dict property not found: {key}")


def _merge_many(records: list[dict[str, Value]]) -> dict[str, Value]:
    merged: dict[str, Value] = {}
    for record in records:
        merged.update(record)
    return merged


def _from_list(pairs: list[tuple[str, Value]]) -> dict[str, Value]:
    return dict(pairs)


def _map(record: dict[str, Value], fn: Lambda, *, reducer: Reducer) -> dict[str, Value]:
    return {key: reducer.call_lambda(fn, [value]) for key, value in record.items()}


def _map_keys(record: dict[str, Value], fn: Lambda, *, reducer: Reducer) -> dict[str, Value]:
    result: dict[str, Value] = {}
    for key, value in record.items():
        new_key = reducer.call_lambda(fn, [v_string(key)])
        if not isinstance(new_key, VString):
            raise ArgumentError(
                f"Dict.mapKeys: function must return a String, got {new_key.public_name}"
            )
        result[new_key.value] = value
    return result


def _pick(record: dict[str, Value], keys: list[str]) -> dict[str, Value]:
    return {key: record[key] for key in keys if key in record}


def _omit(record: dict[str, Value], keys: list[str]) -> dict[str, Value]:
    dropped = set(keys)
    return {key: value for key, value in record.items() if key not in dropped}


library = [
    maker.make(
        "set",
        [make_definition([_record, fr_string, fr_any()], _record, _set)],
        description="Copy of the record with ``key`` set to ``value``.",
    ),
    maker.make("has", [make_definition([_record, fr_string], fr_bool, lambda r, k: k in r)]),
    maker.make("size", [make_definition([_record], fr_number, len)]),
    maker.make("delete", [make_definition([_record, fr_string], _record, _delete)]),
    maker.make(
        "get",
        [make_definition([_record, fr_string, fr_optional(fr_any())], fr_any(), _get)],
        description="Value at ``key``, or the default when the key is missing.",
    ),
    maker.make(
        "merge",
        [make_definition([_record, _record], _record, lambda a, b: {**a, **b})],
        description="Union of two records; keys of the second win.",
        examples=["Dict.merge({a: 1, b: 2}, {b: 3}) // {a: 1, b: 3}"],
    ),
    maker.make("mergeMany", [make_definition([fr_array(_record)], _record, _merge_many)]),
    maker.make("keys", [make_definition([_record], fr_array(fr_string), list)]),
    maker.make(
        "values", [make_definition([_record], fr_array(fr_any()), lambda r: list(r.values()))]
    ),
    maker.make(
        "toList",
        [
            make_definition(
                [_record], fr_array(fr_tuple(fr_string, fr_any())), lambda r: list(r.items())
            )
        ],
    ),
    maker.make(
        "fromList",
        [make_definition([fr_array(fr_tuple(fr_string, fr_any()))], _record, _from_list)],
    ),
    maker.make(
        "map",
        [make_definition([_record, fr_lambda_with_arity(1)], _record, _map, uses_reducer=True)],
    ),
    maker.make(
        "mapKeys",
        [
            make_definition(
                [_record, fr_lambda_with_arity(1)], _record, _map_keys, uses_reducer=True
            )
        ],
    ),
    maker.make("pick", [make_definition([_record, fr_array(fr_string)], _record, _pick)]),
    maker.make("omit", [make_definition([_record, fr_array(fr_string)], _record, _omit)]),
]

__all__ = ["library"]
