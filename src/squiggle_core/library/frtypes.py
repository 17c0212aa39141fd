"""
Function Registry Types
=======================

Patterns describing the inputs and the output of library functions.

An :class:`FRType` knows how to *unpack* a language value into the Python
object an implementation works with, and how to *pack* a Python result back
into a value. Unpacking returns :data:`NO_MATCH` when the value does not
fit, which is how dispatch picks a definition.

Notes
-----
- ``fr_optional`` marks a trailing parameter that may be omitted; the
  implementation then receives ``None``.
- ``fr_or`` and ``fr_any`` are input patterns; ``fr_any`` is also the output
  type of functions that build values themselves.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Final

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.point_set import PointSetDist
from squiggle_core.dists.sample_set import SampleSetDist
from squiggle_core.dists.symbolic import SymbolicDist
from squiggle_core.errors import InternalError
from squiggle_core.value.values import (
    BaseValue,
    Value,
    VArray,
    VBool,
    VDate,
    VDict,
    VDist,
    VDuration,
    VLambda,
    VNumber,
    VScale,
    VString,
    VVoid,
    v_array,
    v_bool,
    v_date,
    v_dict,
    v_dist,
    v_duration,
    v_lambda,
    v_number,
    v_scale,
    v_string,
    v_void,
)


class _NoMatch:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH: Final = _NoMatch()
"""Returned by :attr:`FRType.unpack` when a value does not fit the type."""


def _no_pack(value: Any) -> Value:
    raise InternalError(f"Type cannot be used as an output: {value!r}")


@dataclass(frozen=True, slots=True)
class FRType:
    """
    Input or output pattern of a library function.

    Parameters
    ----------
    name : str
        Display name used in signatures.
    unpack : callable
        ``Value -> object``, returning :data:`NO_MATCH` on mismatch.
    pack : callable
        ``object -> Value``.
    optional : bool, default False
        Whether a trailing argument of this type may be omitted.
    """

    name: str
    unpack: Callable[[Value], Any]
    pack: Callable[[Any], Value] = _no_pack
    optional: bool = False

    def __str__(self) -> str:
        return self.name


def _unpack_instance(cls: type[BaseValue]) -> Callable[[Value], Any]:
    def unpack(value: Value) -> Any:
        return value.value if isinstance(value, cls) else NO_MATCH  # type: ignore[attr-defined]

    return unpack


def _unpack_dist(cls: type[BaseDist]) -> Callable[[Value], Any]:
    def unpack(value: Value) -> Any:
        if isinstance(value, VDist) and isinstance(value.value, cls):
            return value.value
        return NO_MATCH

    return unpack


fr_number = FRType("Number", _unpack_instance(VNumber), v_number)
fr_string = FRType("String", _unpack_instance(VString), v_string)
fr_bool = FRType("Bool", _unpack_instance(VBool), v_bool)
fr_date = FRType("Date", _unpack_instance(VDate), v_date)
fr_duration = FRType("Duration", _unpack_instance(VDuration), v_duration)
fr_scale = FRType("Scale", _unpack_instance(VScale), v_scale)
fr_lambda = FRType("Function", _unpack_instance(VLambda), v_lambda)
fr_dist = FRType("Dist", _unpack_dist(BaseDist), v_dist)
fr_sample_set_dist = FRType("SampleSetDist", _unpack_dist(SampleSetDist), v_dist)
fr_point_set_dist = FRType("PointSetDist", _unpack_dist(PointSetDist), v_dist)
fr_symbolic_dist = FRType("SymbolicDist", _unpack_dist(SymbolicDist), v_dist)
fr_void = FRType("Void", lambda v: None if isinstance(v, VVoid) else NO_MATCH, lambda _: v_void())


def _unpack_dist_or_number(value: Value) -> Any:
    if isinstance(value, VNumber):
        return value.value
    if isinstance(value, VDist):
        return value.value
    return NO_MATCH


def _pack_dist_or_number(value: float | BaseDist) -> Value:
    if isinstance(value, BaseDist):
        return v_dist(value)
    return v_number(value)


fr_dist_or_number = FRType("Dist|Number", _unpack_dist_or_number, _pack_dist_or_number)


def _pack_any(value: Any) -> Value:
    if not isinstance(value, BaseValue):
        raise InternalError(f"Expected a value, got {type(value).__name__}")
    return value  # type: ignore[return-value]


def fr_any(name: str = "any") -> FRType:
    """Any value, passed through unchanged."""
    return FRType(name, lambda value: value, _pack_any)


def fr_array(item: FRType) -> FRType:
    """List whose every element matches ``item``; unpacks to a Python list."""

    def unpack(value: Value) -> Any:
        if not isinstance(value, VArray):
            return NO_MATCH
        items = []
        for element in value.value:
            unpacked = item.unpack(element)
            if unpacked is NO_MATCH:
                return NO_MATCH
            items.append(unpacked)
        return items

    def pack(items: Sequence[Any]) -> Value:
        return v_array(item.pack(element) for element in items)

    return FRType(f"List({item.name})", unpack, pack)


def fr_tuple(*items: FRType) -> FRType:
    """List of exactly ``len(items)`` elements; unpacks to a Python tuple."""

    def unpack(value: Value) -> Any:
        if not isinstance(value, VArray) or len(value.value) != len(items):
            return NO_MATCH
        unpacked = tuple(t.unpack(v) for t, v in zip(items, value.value, strict=True))
        return NO_MATCH if any(u is NO_MATCH for u in unpacked) else unpacked

    def pack(values: Sequence[Any]) -> Value:
        return v_array(t.pack(v) for t, v in zip(items, values, strict=True))

    return FRType(f"[{', '.join(t.name for t in items)}]", unpack, pack)


def fr_dict(*entries: tuple[str, FRType]) -> FRType:
    """
    Record with the given keys.

    Optional entries may be missing and unpack to ``None``; any key outside
    ``entries`` makes the record not match.
    """
    keys = {key for key, _ in entries}

    def unpack(value: Value) -> Any:
        if not isinstance(value, VDict) or not set(value.value) <= keys:
            return NO_MATCH
        result: dict[str, Any] = {}
        for key, item in entries:
            element = value.get(key)
            if element is None:
                if not item.optional:
                    return NO_MATCH
                result[key] = None
                continue
            unpacked = item.unpack(element)
            if unpacked is NO_MATCH:
                return NO_MATCH
            result[key] = unpacked
        return result

    def pack(values: Mapping[str, Any]) -> Value:
        return v_dict(
            (key, item.pack(values[key]))
            for key, item in entries
            if values.get(key) is not None
        )

    fields = ", ".join(f"{key}{'?' if item.optional else ''}: {item.name}" for key, item in entries)
    return FRType(f"{{{fields}}}", unpack, pack)


def fr_dict_with_arbitrary_keys(item: FRType) -> FRType:
    """Record with any keys whose values all match ``item``."""

    def unpack(value: Value) -> Any:
        if not isinstance(value, VDict):
            return NO_MATCH
        result: dict[str, Any] = {}
        for key, element in value.value.items():
            unpacked = item.unpack(element)
            if unpacked is NO_MATCH:
                return NO_MATCH
            result[key] = unpacked
        return result

    def pack(values: Mapping[str, Any]) -> Value:
        return v_dict((key, item.pack(element)) for key, element in values.items())

    return FRType(f"Dict({item.name})", unpack, pack)


def fr_optional(item: FRType) -> FRType:
    return replace(item, name=f"{item.name}?", optional=True)


def fr_named(name: str, item: FRType) -> FRType:
    return replace(item, name=f"{name}: {item.name}")


def fr_or(first: FRType, second: FRType) -> FRType:
    """Value matching ``first`` or, failing that, ``second``."""

    def unpack(value: Value) -> Any:
        unpacked = first.unpack(value)
        return second.unpack(value) if unpacked is NO_MATCH else unpacked

    return FRType(f"{first.name}|{second.name}", unpack)


def fr_lambda_nand(arities: Sequence[int]) -> FRType:
    """Function accepting at least one of ``arities`` arguments."""

    def unpack(value: Value) -> Any:
        if isinstance(value, VLambda) and any(value.value.accepts(n) for n in arities):
            return value.value
        return NO_MATCH

    return FRType(f"Function({'|'.join(str(n) for n in arities)})", unpack, v_lambda)


def fr_lambda_ambiguous(arities: Sequence[int]) -> FRType:
    """Function accepting every one of ``arities`` arguments, so the call cannot pick one."""

    def unpack(value: Value) -> Any:
        if isinstance(value, VLambda) and all(value.value.accepts(n) for n in arities):
            return value.value
        return NO_MATCH

    return FRType(f"Function({'&'.join(str(n) for n in arities)})", unpack, v_lambda)


def fr_lambda_with_arity(arity: int) -> FRType:
    return fr_lambda_nand([arity])


__all__ = [
    "NO_MATCH",
    "FRType",
    "fr_number",
    "fr_string",
    "fr_bool",
    "fr_date",
    "fr_duration",
    "fr_scale",
    "fr_lambda",
    "fr_dist",
    "fr_sample_set_dist",
    "fr_point_set_dist",
    "fr_symbolic_dist",
    "fr_void",
    "fr_dist_or_number",
    "fr_any",
    "fr_array",
    "fr_tuple",
    "fr_dict",
    "fr_dict_with_arbitrary_keys",
    "fr_optional",
    "fr_named",
    "fr_or",
    "fr_lambda_nand",
    "fr_lambda_ambiguous",
    "fr_lambda_with_arity",
]
