"""
Mixed point-set shape: a continuous density plus point masses.

Both parts are stored normalized; ``discrete_probability_mass_fraction``
says how much of the total probability sits in the point masses. Mixed
shapes are produced by :mod:`squiggle_core.dists.point_set.builder` and
always integrate to one.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from squiggle_core.dists.point_set.continuous import ContinuousShape
from squiggle_core.dists.point_set.discrete import DiscreteShape
from squiggle_core.errors import DomainError, InternalError
from squiggle_core.types import FloatArray, Kind


@dataclass(frozen=True, slots=True)
class MixedShape:
    """
    Parameters
    ----------
    continuous : ContinuousShape
        Continuous part, integrating to one.
    discrete : DiscreteShape
        Discrete part, masses adding to one.
    discrete_probability_mass_fraction : float
        Share of the total probability carried by ``discrete``; in ``[0, 1]``.
    """

    kind: ClassVar[Kind] = Kind.MIXED

    continuous: ContinuousShape
    discrete: DiscreteShape
    discrete_probability_mass_fraction: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.discrete_probability_mass_fraction <= 1.0:
            raise InternalError(
                "Discrete probability mass fraction must be within [0, 1], "
                f"got {self.discrete_probability_mass_fraction}"
            )

    @property
    def continuous_weight(self) -> float:
        return 1.0 - self.discrete_probability_mass_fraction

    @property
    def discrete_weight(self) -> float:
        return self.discrete_probability_mass_fraction

    def weighted_continuous(self) -> ContinuousShape:
        """Continuous part scaled to the mass it carries."""
        return self.continuous.normalize().scale_y(self.continuous_weight)

    def weighted_discrete(self) -> DiscreteShape:
        """Discrete part scaled to the mass it carries."""
        return self.discrete.normalize().scale_y(self.discrete_weight)

    @property
    def is_empty(self) -> bool:
        return self.continuous.is_empty and self.discrete.is_empty

    def integral_sum(self) -> float:
        return (
            self.weighted_continuous().integral_sum() + self.weighted_discrete().integral_sum()
        )

    def normalize(self) -> MixedShape:
        return self

    def pdf(self, x: float) -> float:
        return self.weighted_continuous().pdf(x) + self.weighted_discrete().pdf(x)

    def cdf(self, x: float) -> float:
        return self.weighted_continuous().cdf(x) + self.weighted_discrete().cdf(x)

    def inv_array(self, ps: FloatArray) -> FloatArray:
        """
        Quantiles of the combined distribution.

        The combined cumulative function is tabulated on the union of both
        grids; a discrete jump at ``x`` is returned as ``x`` itself,
        continuous stretches are interpolated linearly.
        """
        cont = self.weighted_continuous()
        disc = self.weighted_discrete()
        grid = np.unique(np.concatenate((cont.xy.xs, disc.xy.xs)))
        if grid.size == 0:
            raise DomainError("Cannot invert an empty mixed shape")
        cdfs = np.array([cont.cdf(float(x)) + disc.cdf(float(x)) for x in grid])
        jumps = np.array([disc.pdf(float(x)) for x in grid])
        total = cdfs[-1]
        out = np.empty(len(ps))
        for k, p in enumerate(np.asarray(ps) * total):
            idx = int(np.searchsorted(cdfs, p - 1e-12, side="left"))
            if idx <= 0:
                out[k] = grid[0]
                continue
            if idx >= grid.size:
                out[k] = grid[-1]
                continue
            before_jump = cdfs[idx] - jumps[idx]
            if p >= before_jump:
                out[k] = grid[idx]
                continue
            span = before_jump - cdfs[idx - 1]
            frac = 0.0 if span <= 0 else (p - cdfs[idx - 1]) / span
            out[k] = grid[idx - 1] + frac * (grid[idx] - grid[idx - 1])
        return out

    def inv(self, p: float) -> float:
        return float(self.inv_array(np.asarray([p]))[0])

    def _parts(self) -> list[tuple[float, ContinuousShape | DiscreteShape]]:
        parts: list[tuple[float, ContinuousShape | DiscreteShape]] = []
        if self.continuous_weight > 0 and not self.continuous.is_empty:
            parts.append((self.continuous_weight, self.continuous))
        if self.discrete_weight > 0 and not self.discrete.is_empty:
            parts.append((self.discrete_weight, self.discrete))
        return parts

    def mean(self) -> float:
        parts = self._parts()
        total = sum(w for w, _ in parts)
        return sum(w * part.mean() for w, part in parts) / total

    def second_moment(self) -> float:
        parts = self._parts()
        total = sum(w for w, _ in parts)
        return sum(w * part.second_moment() for w, part in parts) / total

    def variance(self) -> float:
        return max(self.second_moment() - self.mean() ** 2, 0.0)

    def mode(self) -> float:
        """
        Location of the heaviest point mass, or of the density peak if heavier.

        The point masses and the density peak are compared after scaling by
        the share of probability each part carries.
        """
        candidates: list[tuple[float, float]] = []
        if not self.discrete.is_empty and self.discrete_weight > 0:
            disc = self.weighted_discrete()
            idx = int(np.argmax(disc.xy.ys))
            candidates.append((float(disc.xy.ys[idx]), float(disc.xy.xs[idx])))
        if not self.continuous.is_empty and self.continuous_weight > 0:
            cont = self.weighted_continuous()
            idx = int(np.argmax(cont.xy.ys))
            candidates.append((float(cont.xy.ys[idx]), float(cont.xy.xs[idx])))
        if not candidates:
            raise DomainError("Cannot compute the mode of an empty mixed shape")
        return max(candidates, key=lambda c: c[0])[1]

    def min_x(self) -> float:
        return min(part.min_x() for _, part in self._parts())

    def max_x(self) -> float:
        return max(part.max_x() for _, part in self._parts())

    def map_x(
        self, fn: Callable[[FloatArray], FloatArray], derivative: Callable[[FloatArray], FloatArray]
    ) -> MixedShape:
        return MixedShape(
            self.continuous.map_x(fn, derivative),
            self.discrete.map_x(fn),
            self.discrete_probability_mass_fraction,
        )


__all__ = ["MixedShape"]
