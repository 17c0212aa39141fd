"""
Tag namespace: attach display metadata to values.

Every setter returns a copy of its first argument carrying the new tag;
tags never change what a value computes. Getters return ``()`` when the
tag is not set.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable

from squiggle_core.errors import ArgumentError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import FRFunction, make_definition
from squiggle_core.library.frtypes import (
    NO_MATCH,
    FRType,
    fr_any,
    fr_array,
    fr_bool,
    fr_dict_with_arbitrary_keys,
    fr_optional,
    fr_string,
)
from squiggle_core.value.tags import ValueTags
from squiggle_core.value.values import (
    Value,
    VArray,
    VDate,
    VDict,
    VDist,
    VDuration,
    VLambda,
    VNumber,
    v_bool,
    v_string,
    v_void,
)

maker = FnFactory(namespace="Tag", requires_namespace=True)

_value = fr_any("any")
_list_value = FRType(
    "List(any)", lambda v: v if isinstance(v, VArray) else NO_MATCH, fr_any().pack
)


def _with(value: Value, **tags: Value) -> Value:
    return value.merge_tags(ValueTags(**tags))  # type: ignore[return-value]


def _getter(name: str, attr: str) -> FRFunction:
    def get(value: Value) -> Value:
        tag = getattr(value.get_tags(), attr)
        return v_void() if tag is None else tag

    return maker.make(name, [make_definition([_value], fr_any(), get)])


def _string_setter(name: str, attr: str, description: str) -> FRFunction:
    def set_(value: Value, text: str) -> Value:
        return _with(value, **{attr: v_string(text)})

    return maker.make(
        name, [make_definition([_value, fr_string], fr_any(), set_)], description=description
    )


def _flag_setter(name: str, attr: str, description: str, target: FRType = _value) -> FRFunction:
    def set_(value: Value, flag: bool | None) -> Value:
        return _with(value, **{attr: v_bool(True if flag is None else flag)})

    return maker.make(
        name,
        [make_definition([target, fr_optional(fr_bool)], fr_any(), set_)],
        description=description,
    )


def _show_as(value: Value, shown: Value) -> Value:
    """
    Raises
    ------
    ArgumentError
        If the display value is not something a viewer can plot or list.
    """
    if not isinstance(shown, (VDist, VNumber, VArray, VDict, VLambda)):
        raise ArgumentError(f"Cannot show a value as {shown.public_name}")
    return _with(value, show_as=shown)


def _format(value: Value, fmt: str) -> Value:
    if isinstance(value, (VDate, VDuration)):
        return _with(value, date_format=v_string(fmt))
    return _with(value, number_format=v_string(fmt))


def _get_format(value: Value) -> Value:
    tags = value.get_tags()
    tag = tags.date_format if isinstance(value, (VDate, VDuration)) else tags.number_format
    return v_void() if tag is None else tag


def _omit(value: Value, keys: list[str]) -> Value:
    try:
        tags = value.get_tags().omit_using_string_keys(keys)
    except TypeError as exc:
        raise ArgumentError(str(exc)) from exc
    return value.with_tags(tags)  # type: ignore[return-value]


def _start_state(state: str) -> Callable[[Value], Value]:
    def set_(value: Value) -> Value:
        return _with(value, start_open_state=v_string(state))

    return set_


library = [
    _string_setter("name", "name", "Set the display name of a value."),
    _getter("getName", "name"),
    _string_setter("doc", "doc", "Attach documentation to a value."),
    _getter("getDoc", "doc"),
    _flag_setter("hide", "hidden", "Hide the value from the viewer."),
    maker.make(
        "getHide",
        [make_definition([_value], fr_bool, lambda value: value.get_tags().is_hidden())],
    ),
    maker.make(
        "showAs",
        [make_definition([_value, fr_any()], fr_any(), _show_as)],
        description="Display a value as another value, usually a plot.",
    ),
    _getter("getShowAs", "show_as"),
    maker.make(
        "format",
        [make_definition([_value, fr_string], fr_any(), _format)],
        description="Set a d3-style number format, or a date format for dates and durations.",
    ),
    maker.make("getFormat", [make_definition([_value], fr_any(), _get_format)]),
    _flag_setter("notebook", "notebook", "Show a list as a notebook.", _list_value),
    maker.make("startOpen", [make_definition([_value], fr_any(), _start_state("open"))]),
    maker.make("startClosed", [make_definition([_value], fr_any(), _start_state("closed"))]),
    maker.make(
        "getAll",
        [
            make_definition(
                [_value],
                fr_dict_with_arbitrary_keys(fr_any()),
                lambda value: value.get_tags().to_dict(),
            )
        ],
        description="All tags of a value as a record.",
    ),
    maker.make(
        "omit",
        [make_definition([_value, fr_array(fr_string)], fr_any(), _omit)],
        description="Remove the named tags.",
    ),
    maker.make(
        "clear",
        [make_definition([_value], fr_any(), lambda value: value.with_tags(ValueTags()))],
        description="Remove all tags.",
    ),
]

__all__ = ["library"]
