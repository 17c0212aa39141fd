"""
Discrete point-set shape: point masses at sorted, distinct xs.
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

from squiggle_core.dists.point_set.xyshape import XYShape, merge_duplicate_xs, union_xs
from squiggle_core.errors import DomainError
from squiggle_core.types import FloatArray, Kind


@dataclass(frozen=True, slots=True)
class DiscreteShape:
    """
    Point masses ``ys`` located at ``xs``.

    Duplicate xs are merged on construction by summing their masses.
    """

    kind: ClassVar[Kind] = Kind.DISCRETE

    xy: XYShape
    _cumulative: FloatArray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if np.any(self.xy.ys < 0):
            raise DomainError("Discrete shape masses must be non-negative")
        if len(self.xy) > 1 and np.any(np.diff(self.xy.xs) == 0):
            object.__setattr__(self, "xy", merge_duplicate_xs(self.xy.xs, self.xy.ys))
        object.__setattr__(self, "_cumulative", np.cumsum(self.xy.ys))

    @classmethod
    def make(cls, xs: FloatArray | list[float], ys: FloatArray | list[float]) -> DiscreteShape:
        return cls(merge_duplicate_xs(np.asarray(xs, dtype=np.float64),
                                      np.asarray(ys, dtype=np.float64)))

    @classmethod
    def empty(cls) -> DiscreteShape:
        return cls(XYShape.empty())

    @property
    def is_empty(self) -> bool:
        return len(self.xy) == 0

    def integral_sum(self) -> float:
        return float(self._cumulative[-1]) if self._cumulative.size else 0.0

    def normalize(self) -> DiscreteShape:
        total = self.integral_sum()
        if total <= 0 or math.isclose(total, 1.0):
            return self
        return DiscreteShape(self.xy.scale_y(1.0 / total))

    def scale_y(self, factor: float) -> DiscreteShape:
        return DiscreteShape(self.xy.scale_y(factor))

    def pdf(self, x: float) -> float:
        """Mass located exactly at ``x``."""
        idx = np.searchsorted(self.xy.xs, x)
        if idx < len(self.xy) and self.xy.xs[idx] == x:
            return float(self.xy.ys[idx])
        return 0.0

    def cdf(self, x: float) -> float:
        idx = int(np.searchsorted(self.xy.xs, x, side="right"))
        return float(self._cumulative[idx - 1]) if idx > 0 else 0.0

    def inv_array(self, ps: FloatArray) -> FloatArray:
        """Smallest mass location whose cumulative mass reaches ``p``."""
        if self.is_empty:
            raise DomainError("Cannot invert an empty discrete shape")
        targets = np.asarray(ps) * self.integral_sum()
        idx = np.searchsorted(self._cumulative, targets - 1e-12, side="left")
        return self.xy.xs[np.clip(idx, 0, len(self.xy) - 1)]

    def inv(self, p: float) -> float:
        return float(self.inv_array(np.asarray([p]))[0])

    def mean(self) -> float:
        total = self.integral_sum()
        if total <= 0:
            raise DomainError("Cannot compute the mean of a shape with zero mass")
        return float(np.dot(self.xy.xs, self.xy.ys) / total)

    def second_moment(self) -> float:
        total = self.integral_sum()
        if total <= 0:
            raise DomainError("Cannot compute moments of a shape with zero mass")
        return float(np.dot(self.xy.xs**2, self.xy.ys) / total)

    def variance(self) -> float:
        return max(self.second_moment() - self.mean() ** 2, 0.0)

    def mode(self) -> float:
        return float(self.xy.xs[int(np.argmax(self.xy.ys))])

    def min_x(self) -> float:
        return self.xy.min_x()

    def max_x(self) -> float:
        return self.xy.max_x()

    def map_x(self, fn: Callable[[FloatArray], FloatArray]) -> DiscreteShape:
        with np.errstate(all="ignore"):
            new_xs = fn(self.xy.xs)
        if not np.all(np.isfinite(new_xs)):
            raise DomainError("Operation is undefined for some x values of the distribution")
        return DiscreteShape(merge_duplicate_xs(new_xs, np.array(self.xy.ys)))

    def truncate(self, left: float | None, right: float | None) -> DiscreteShape:
        lo = -math.inf if left is None else left
        hi = math.inf if right is None else right
        keep = (self.xy.xs >= lo) & (self.xy.xs <= hi)
        return DiscreteShape(XYShape(self.xy.xs[keep], self.xy.ys[keep]))

    def combine_pointwise(
        self, fn: Callable[[FloatArray, FloatArray], FloatArray], other: DiscreteShape
    ) -> DiscreteShape:
        xs = union_xs(self.xy, other.xy)
        y1 = np.array([self.pdf(float(x)) for x in xs])
        y2 = np.array([other.pdf(float(x)) for x in xs])
        return DiscreteShape(XYShape(xs, fn(y1, y2)))


__all__ = ["DiscreteShape"]
