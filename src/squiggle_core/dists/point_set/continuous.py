"""
Continuous point-set shape: a density sampled on an x grid.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from squiggle_core.dists.point_set.xyshape import (
    XYShape,
    combine_pointwise,
    cumulative_integral,
    first_moment,
    interpolate,
    inverse_interpolate,
    second_moment,
)
from squiggle_core.errors import DomainError
from squiggle_core.types import FloatArray, Interpolation, Kind


@dataclass(frozen=True, slots=True)
class ContinuousShape:
    """
    Density curve with cached cumulative integral.

    Parameters
    ----------
    xy : XYShape
        Density values ``ys`` at ``xs``. The shape need not be normalized.
    interpolation : Interpolation, default LINEAR
        How the density behaves between grid points.
    """

    kind: ClassVar[Kind] = Kind.CONTINUOUS

    xy: XYShape
    interpolation: Interpolation = Interpolation.LINEAR
    _integral: XYShape = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if np.any(self.xy.ys < 0):
            raise DomainError("Continuous shape densities must be non-negative")
        object.__setattr__(self, "_integral", cumulative_integral(self.xy, self.interpolation))

    @classmethod
    def make(
        cls,
        xs: FloatArray | list[float],
        ys: FloatArray | list[float],
        interpolation: Interpolation = Interpolation.LINEAR,
    ) -> ContinuousShape:
        return cls(XYShape(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)),
                   interpolation)

    @classmethod
    def empty(cls) -> ContinuousShape:
        return cls(XYShape.empty())

    @property
    def is_empty(self) -> bool:
        return len(self.xy) == 0

    def integral(self) -> XYShape:
        """Cumulative integral of the density."""
        return self._integral

    def integral_sum(self) -> float:
        if self._integral.is_empty:
            return 0.0
        return float(self._integral.ys[-1])

    def normalize(self) -> ContinuousShape:
        total = self.integral_sum()
        if total <= 0 or math.isclose(total, 1.0):
            return self
        return ContinuousShape(self.xy.scale_y(1.0 / total), self.interpolation)

    def scale_y(self, factor: float) -> ContinuousShape:
        return ContinuousShape(self.xy.scale_y(factor), self.interpolation)

    def pdf(self, x: float) -> float:
        return float(interpolate(self.xy, x, self.interpolation))

    def cdf(self, x: float) -> float:
        if self.is_empty:
            return 0.0
        integral = self._integral
        return float(
            np.interp(x, integral.xs, integral.ys, left=0.0, right=self.integral_sum())
        )

    def inv_array(self, ps: FloatArray) -> FloatArray:
        """Quantiles of the normalized density for an array of probabilities."""
        return inverse_interpolate(self._integral, np.asarray(ps) * self.integral_sum())

    def inv(self, p: float) -> float:
        return float(self.inv_array(np.asarray([p]))[0])

    def mean(self) -> float:
        total = self.integral_sum()
        if total <= 0:
            raise DomainError("Cannot compute the mean of a shape with zero mass")
        return first_moment(self.xy) / total

    def second_moment(self) -> float:
        total = self.integral_sum()
        if total <= 0:
            raise DomainError("Cannot compute moments of a shape with zero mass")
        return second_moment(self.xy) / total

    def variance(self) -> float:
        return max(self.second_moment() - self.mean() ** 2, 0.0)

    def mode(self) -> float:
        return float(self.xy.xs[int(np.argmax(self.xy.ys))])

    def min_x(self) -> float:
        return self.xy.min_x()

    def max_x(self) -> float:
        return self.xy.max_x()

    def point_masses(self) -> XYShape:
        """
        Discretize the density into point masses located at the grid points.

        Each point receives the mass of the half-segments around it, so the
        masses add up to the trapezoidal integral.
        """
        xs = self.xy.xs
        if xs.size < 2:
            return XYShape(xs, np.zeros_like(xs))
        widths = np.diff(xs)
        left = np.concatenate(([0.0], widths)) / 2
        right = np.concatenate((widths, [0.0])) / 2
        return XYShape(xs, self.xy.ys * (left + right))

    def map_x(
        self, fn: Callable[[FloatArray], FloatArray], derivative: Callable[[FloatArray], FloatArray]
    ) -> ContinuousShape:
        """
        Push the density through a monotonic transform ``fn``.

        Densities are divided by ``|fn'(x)|`` so that the mass of every
        segment is kept; the result is renormalized to the original total.
        """
        if self.is_empty:
            return self
        with np.errstate(all="ignore"):
            new_xs = fn(self.xy.xs)
            slope = np.abs(derivative(self.xy.xs))
        if not (np.all(np.isfinite(new_xs)) and np.all(np.isfinite(slope))):
            raise DomainError("Operation is undefined for some x values of the distribution")
        with np.errstate(divide="ignore"):
            new_ys = np.where(slope > 0, self.xy.ys / slope, 0.0)
        order = np.argsort(new_xs, kind="stable")
        shape = ContinuousShape(XYShape(new_xs[order], new_ys[order]), self.interpolation)
        new_total = shape.integral_sum()
        if new_total <= 0:
            return shape
        return shape.scale_y(self.integral_sum() / new_total)

    def truncate(self, left: float | None, right: float | None) -> ContinuousShape:
        """Keep the density inside ``[left, right]``, adding interpolated end points."""
        if self.is_empty:
            return self
        lo = -math.inf if left is None else left
        hi = math.inf if right is None else right
        xs = self.xy.xs
        keep = (xs >= lo) & (xs <= hi)
        new_xs = [xs[keep]]
        if math.isfinite(lo) and self.min_x() < lo < self.max_x():
            new_xs.append(np.asarray([lo]))
        if math.isfinite(hi) and self.min_x() < hi < self.max_x():
            new_xs.append(np.asarray([hi]))
        merged = np.unique(np.concatenate(new_xs))
        return ContinuousShape(
            XYShape(merged, interpolate(self.xy, merged, self.interpolation)), self.interpolation
        )

    def combine_pointwise(
        self, fn: Callable[[FloatArray, FloatArray], FloatArray], other: ContinuousShape
    ) -> ContinuousShape:
        return ContinuousShape(
            combine_pointwise(fn, self.xy, other.xy, self.interpolation), self.interpolation
        )


__all__ = ["ContinuousShape"]
