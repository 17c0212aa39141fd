"""
XY shapes: ordered ``(x, y)`` pairs backing every point-set shape.

The helpers here are representation-agnostic array routines; continuous,
discrete and mixed shapes build their semantics on top of them.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
from scipy import integrate as _sp_integrate

from squiggle_core.errors import InternalError
from squiggle_core.types import FloatArray, Interpolation


@dataclass(frozen=True, slots=True)
class XYShape:
    """
    Immutable pair of equally long float arrays with sorted ``xs``.

    Parameters
    ----------
    xs : FloatArray
        Non-decreasing, finite x coordinates.
    ys : FloatArray
        Finite y values, one per x.

    Raises
    ------
    InternalError
        If the arrays differ in length, ``xs`` is not sorted or any value is
        not finite.
    """

    xs: FloatArray
    ys: FloatArray

    def __post_init__(self) -> None:
        xs = np.asarray(self.xs, dtype=np.float64)
        ys = np.asarray(self.ys, dtype=np.float64)
        if xs.ndim != 1 or ys.ndim != 1 or xs.shape != ys.shape:
            raise InternalError(
                f"XYShape expects two 1D arrays of equal length, got {xs.shape} and {ys.shape}"
            )
        if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
            raise InternalError("XYShape values must be finite")
        if xs.size > 1 and np.any(np.diff(xs) < 0):
            raise InternalError("XYShape xs must be sorted")
        xs.setflags(write=False)
        ys.setflags(write=False)
        object.__setattr__(self, "xs", xs)
        object.__setattr__(self, "ys", ys)

    @classmethod
    def empty(cls) -> XYShape:
        return cls(np.empty(0), np.empty(0))

    @classmethod
    def from_points(cls, points: Sequence[tuple[float, float]]) -> XYShape:
        """Build a shape from unsorted ``(x, y)`` points."""
        if not points:
            return cls.empty()
        arr = np.asarray(sorted(points), dtype=np.float64)
        return cls(arr[:, 0], arr[:, 1])

    def __len__(self) -> int:
        return int(self.xs.size)

    @property
    def is_empty(self) -> bool:
        return self.xs.size == 0

    def min_x(self) -> float:
        return float(self.xs[0])

    def max_x(self) -> float:
        return float(self.xs[-1])

    def map_y(self, fn: Callable[[FloatArray], FloatArray]) -> XYShape:
        return XYShape(self.xs, fn(self.ys))

    def scale_y(self, factor: float) -> XYShape:
        return XYShape(self.xs, self.ys * factor)

    def zip(self) -> list[tuple[float, float]]:
        return [(float(x), float(y)) for x, y in zip(self.xs, self.ys, strict=True)]


def interpolate(
    shape: XYShape, x: float | FloatArray, interpolation: Interpolation = Interpolation.LINEAR
) -> FloatArray:
    """
    Evaluate ``shape`` at ``x``; zero outside ``[min_x, max_x]``.

    Parameters
    ----------
    shape : XYShape
        Shape to evaluate.
    x : float or FloatArray
        Query point(s).
    interpolation : Interpolation
        Linear or stepwise (left-continuous steps) interpolation.
    """
    xq = np.asarray(x, dtype=np.float64)
    if shape.is_empty:
        return np.zeros_like(xq)
    if interpolation is Interpolation.STEPWISE:
        idx = np.searchsorted(shape.xs, xq, side="right") - 1
        out = np.where(idx >= 0, shape.ys[np.clip(idx, 0, len(shape) - 1)], 0.0)
    else:
        out = np.interp(xq, shape.xs, shape.ys, left=0.0, right=0.0)
    outside = (xq < shape.xs[0]) | (xq > shape.xs[-1])
    return np.where(outside, 0.0, out)


def cumulative_integral(shape: XYShape, interpolation: Interpolation) -> XYShape:
    """
    Cumulative integral of a density given by ``shape``.

    Linear shapes integrate with the trapezoidal rule; stepwise shapes hold
    each y until the next x.
    """
    if shape.is_empty:
        return XYShape.empty()
    if interpolation is Interpolation.STEPWISE:
        widths = np.diff(shape.xs)
        acc = np.concatenate(([0.0], np.cumsum(shape.ys[:-1] * widths)))
        return XYShape(shape.xs, acc)
    acc = _sp_integrate.cumulative_trapezoid(shape.ys, shape.xs, initial=0.0)
    return XYShape(shape.xs, acc)


def first_moment(shape: XYShape) -> float:
    """Integral of ``x * y`` over a linear shape."""
    if len(shape) < 2:
        return 0.0
    return float(_sp_integrate.trapezoid(shape.xs * shape.ys, shape.xs))


def second_moment(shape: XYShape) -> float:
    """Integral of ``x ** 2 * y`` over a linear shape."""
    if len(shape) < 2:
        return 0.0
    return float(_sp_integrate.trapezoid(shape.xs**2 * shape.ys, shape.xs))


def union_xs(*shapes: XYShape) -> FloatArray:
    """Sorted union of the x coordinates of ``shapes``."""
    parts = [s.xs for s in shapes if not s.is_empty]
    if not parts:
        return np.empty(0)
    return np.unique(np.concatenate(parts))


def combine_pointwise(
    fn: Callable[[FloatArray, FloatArray], FloatArray],
    s1: XYShape,
    s2: XYShape,
    interpolation: Interpolation = Interpolation.LINEAR,
) -> XYShape:
    """
    Combine the y values of two shapes over the union of their xs.

    Each shape is interpolated at every x of the union; values outside a
    shape's domain are zero.
    """
    xs = union_xs(s1, s2)
    if xs.size == 0:
        return XYShape.empty()
    y1 = interpolate(s1, xs, interpolation)
    y2 = interpolate(s2, xs, interpolation)
    return XYShape(xs, fn(y1, y2))


def merge_duplicate_xs(xs: FloatArray, ys: FloatArray) -> XYShape:
    """Sort ``xs`` and sum the ``ys`` of equal xs (discrete masses)."""
    if xs.size == 0:
        return XYShape.empty()
    order = np.argsort(xs, kind="stable")
    xs_sorted = xs[order]
    ys_sorted = ys[order]
    unique_xs, start = np.unique(xs_sorted, return_index=True)
    sums = np.add.reduceat(ys_sorted, start)
    return XYShape(unique_xs, sums)


def inverse_interpolate(cumulative: XYShape, p: float | FloatArray) -> FloatArray:
    """
    Invert a non-decreasing cumulative shape.

    Flat stretches keep only their right-most point, so queries above a
    plateau interpolate from where the mass starts growing again. The
    result is monotonic non-decreasing in ``p``.
    """
    if cumulative.is_empty:
        raise InternalError("Cannot invert an empty shape")
    n = len(cumulative)
    ys, rev_index = np.unique(cumulative.ys[::-1], return_index=True)
    xs = cumulative.xs[n - 1 - rev_index]
    return np.interp(np.asarray(p, dtype=np.float64), ys, xs, left=xs[0], right=xs[-1])


__all__ = [
    "XYShape",
    "interpolate",
    "cumulative_integral",
    "first_moment",
    "second_moment",
    "union_xs",
    "combine_pointwise",
    "merge_duplicate_xs",
    "inverse_interpolate",
]
