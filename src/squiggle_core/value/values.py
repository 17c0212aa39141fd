"""
Language Values
===============

Tagged variants of every value the reducer produces:

- :class:`VNumber`, :class:`VString`, :class:`VBool`: scalars;
- :class:`VArray`, :class:`VDict`: containers;
- :class:`VLambda`: user-defined or built-in functions;
- :class:`VDist`: distributions in any representation;
- :class:`VDate`, :class:`VDuration`, :class:`VScale`, :class:`VVoid`.

Notes
-----
- Values are frozen; every operation builds a new value.
- ``tags`` is excluded from equality, so tagging never changes what a value
  computes.
- Construct values through the ``v_*`` functions, which validate their
  inputs.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import json
import math
import numbers
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar

from squiggle_core.errors import ArgumentError, InternalError
from squiggle_core.value.tags import EMPTY_TAGS, ValueTags

if TYPE_CHECKING:
    from squiggle_core.dists.distribution import BaseDist
    from squiggle_core.reducer.lambdas import Lambda
    from squiggle_core.value.scale import Scale
    from squiggle_core.value.sdate import SDate, SDuration


def format_number(value: float) -> str:
    """Render a number the way the language prints it (``5``, ``0.5``, ``1e+21``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value).replace("e+0", "e+").replace("e-0", "e-")


@dataclass(frozen=True, slots=True)
class BaseValue:
    """Common behaviour of all value variants."""

    type_name: ClassVar[str] = "Value"
    public_name: ClassVar[str] = "Value"
    comparable: ClassVar[bool] = True

    tags: ValueTags | None = field(default=None, compare=False, repr=False, kw_only=True)

    def get_tags(self) -> ValueTags:
        return EMPTY_TAGS if self.tags is None else self.tags

    def with_tags(self, tags: ValueTags) -> BaseValue:
        """Copy of the value carrying ``tags`` instead of its current tags."""
        return replace(self, tags=tags)

    def merge_tags(self, tags: ValueTags) -> BaseValue:
        return replace(self, tags=self.get_tags().merge(tags))

    def is_equal(self, other: Value) -> bool:
        """
        Structural equality of the language.

        Raises
        ------
        ArgumentError
            If either value is not comparable (distributions, lambdas).
        """
        if not self.comparable:
            raise ArgumentError(f"Cannot compare values of type {self.public_name}")
        if not other.comparable:
            raise ArgumentError(f"Cannot compare values of type {other.public_name}")
        return self == other


@dataclass(frozen=True, slots=True)
class VNumber(BaseValue):
    type_name: ClassVar[str] = "Number"
    public_name: ClassVar[str] = "Number"

    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, slots=True)
class VString(BaseValue):
    type_name: ClassVar[str] = "String"
    public_name: ClassVar[str] = "String"

    value: str

    def __str__(self) -> str:
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class VBool(BaseValue):
    type_name: ClassVar[str] = "Bool"
    public_name: ClassVar[str] = "Boolean"

    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class VArray(BaseValue):
    type_name: ClassVar[str] = "Array"
    public_name: ClassVar[str] = "List"

    value: tuple[Value, ...]

    def __str__(self) -> str:
        return "[" + ",".join(str(item) for item in self.value) + "]"

    def is_equal(self, other: Value) -> bool:
        if not isinstance(other, VArray):
            return BaseValue.is_equal(self, other)
        if len(self.value) != len(other.value):
            return False
        return all(a.is_equal(b) for a, b in zip(self.value, other.value, strict=True))


@dataclass(frozen=True, slots=True)
class VDict(BaseValue):
    type_name: ClassVar[str] = "Dict"
    public_name: ClassVar[str] = "Dict"

    value: Mapping[str, Value]

    def get(self, key: str) -> Value | None:
        return self.value.get(key)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{key}: {item}" for key, item in self.value.items()) + "}"

    def is_equal(self, other: Value) -> bool:
        if not isinstance(other, VDict):
            return BaseValue.is_equal(self, other)
        if self.value.keys() != other.value.keys():
            return False
        return all(item.is_equal(other.value[key]) for key, item in self.value.items())


@dataclass(frozen=True, slots=True)
class VLambda(BaseValue):
    type_name: ClassVar[str] = "Lambda"
    public_name: ClassVar[str] = "Function"
    comparable: ClassVar[bool] = False

    value: Lambda

    def __str__(self) -> str:
        return self.value.to_string()


@dataclass(frozen=True, slots=True)
class VDist(BaseValue):
    type_name: ClassVar[str] = "Dist"
    public_name: ClassVar[str] = "Distribution"
    comparable: ClassVar[bool] = False

    value: BaseDist

    def __str__(self) -> str:
        return self.value.to_string()


@dataclass(frozen=True, slots=True)
class VDate(BaseValue):
    type_name: ClassVar[str] = "Date"
    public_name: ClassVar[str] = "Date"

    value: SDate

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VDuration(BaseValue):
    type_name: ClassVar[str] = "Duration"
    public_name: ClassVar[str] = "Duration"

    value: SDuration

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VScale(BaseValue):
    type_name: ClassVar[str] = "Scale"
    public_name: ClassVar[str] = "Scale"

    value: Scale

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VVoid(BaseValue):
    type_name: ClassVar[str] = "Void"
    public_name: ClassVar[str] = "Void"

    def __str__(self) -> str:
        return "()"


type Value = (
    VNumber
    | VString
    | VBool
    | VArray
    | VDict
    | VLambda
    | VDist
    | VDate
    | VDuration
    | VScale
    | VVoid
)


def v_number(value: float) -> VNumber:
    """
    Raises
    ------
    InternalError
        If ``value`` is not a real number.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InternalError(f"Expected a number, got {type(value).__name__}")
    return VNumber(float(value))


def v_string(value: str) -> VString:
    return VString(str(value))


def v_bool(value: bool) -> VBool:
    return VBool(bool(value))


def v_array(items: Iterable[Value]) -> VArray:
    return VArray(tuple(items))


def v_dict(items: Mapping[str, Value] | Iterable[tuple[str, Value]]) -> VDict:
    """
    Build a record; insertion order is kept for display.

    Raises
    ------
    InternalError
        If a key is not a string or is repeated in a pair sequence.
    """
    pairs = list(items.items()) if isinstance(items, Mapping) else list(items)
    data: dict[str, Value] = {}
    for key, item in pairs:
        if not isinstance(key, str):
            raise InternalError(f"Dict keys must be strings, got {type(key).__name__}")
        if key in data:
            raise InternalError(f"Duplicate dict key: {key}")
        data[key] = item
    return VDict(MappingProxyType(data))


def v_lambda(value: Lambda) -> VLambda:
    return VLambda(value)


def v_dist(value: BaseDist) -> VDist:
    return VDist(value)


def v_date(value: SDate) -> VDate:
    return VDate(value)


def v_duration(value: SDuration) -> VDuration:
    return VDuration(value)


def v_scale(value: Scale) -> VScale:
    return VScale(value)


def v_void() -> VVoid:
    return VVoid()


def uniq(values: Sequence[Value]) -> list[Value]:
    """Values in order of first occurrence, duplicates removed with :meth:`is_equal`."""
    return uniq_by(values, lambda v: v)


def uniq_by(values: Sequence[Value], key: Callable[[Value], Value]) -> list[Value]:
    """Like :func:`uniq`, comparing ``key(value)`` instead of the values."""
    seen: list[Value] = []
    result: list[Value] = []
    for item in values:
        marker = key(item)
        if any(marker.is_equal(other) for other in seen):
            continue
        seen.append(marker)
        result.append(item)
    return result


__all__ = [
    "format_number",
    "BaseValue",
    "VNumber",
    "VString",
    "VBool",
    "VArray",
    "VDict",
    "VLambda",
    "VDist",
    "VDate",
    "VDuration",
    "VScale",
    "VVoid",
    "Value",
    "v_number",
    "v_string",
    "v_bool",
    "v_array",
    "v_dict",
    "v_lambda",
    "v_dist",
    "v_date",
    "v_duration",
    "v_scale",
    "v_void",
    "uniq",
    "uniq_by",
]
