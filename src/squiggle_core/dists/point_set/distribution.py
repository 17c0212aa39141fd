"""
Point-set distribution: a generic distribution backed by a discretized shape.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.environment import default_environment
from squiggle_core.dists.point_set.builder import Shape, build_simple_shape
from squiggle_core.dists.point_set.continuous import ContinuousShape
from squiggle_core.dists.point_set.discrete import DiscreteShape
from squiggle_core.dists.point_set.mixed import MixedShape
from squiggle_core.dists.sampling import default_sampler
from squiggle_core.errors import DomainError
from squiggle_core.types import DistributionTag, FloatArray, Kind

if TYPE_CHECKING:
    from squiggle_core.dists.environment import Environment
    from squiggle_core.dists.sample_set import SampleSetDist


def shape_parts(shape: Shape) -> tuple[ContinuousShape, DiscreteShape]:
    """Split any shape into a continuous and a discrete part carrying their real mass."""
    if isinstance(shape, MixedShape):
        return shape.weighted_continuous(), shape.weighted_discrete()
    if isinstance(shape, ContinuousShape):
        return shape, DiscreteShape.empty()
    return ContinuousShape.empty(), shape


class PointSetDist(BaseDist):
    """
    Distribution represented by a continuous, discrete or mixed shape.

    Parameters
    ----------
    shape : ContinuousShape or DiscreteShape or MixedShape
        Backing shape. It is not required to be normalized.

    Raises
    ------
    DomainError
        If the shape is empty.
    """

    tag: ClassVar[DistributionTag] = DistributionTag.POINT_SET

    __slots__ = ("shape",)

    def __init__(self, shape: Shape) -> None:
        if shape.is_empty:
            raise DomainError("Point set distribution must not be empty")
        self.shape = shape

    @classmethod
    def from_parts(cls, continuous: ContinuousShape, discrete: DiscreteShape) -> PointSetDist:
        """
        Build a distribution from parts whose raw masses are their probabilities.

        Raises
        ------
        DomainError
            If both parts are empty.
        """
        shape = build_simple_shape(continuous, discrete)
        if shape is None:
            raise DomainError("Cannot build a point set distribution from empty parts")
        return cls(shape)

    @property
    def kind(self) -> Kind:
        return self.shape.kind

    def parts(self) -> tuple[ContinuousShape, DiscreteShape]:
        return shape_parts(self.shape)

    def mean(self) -> float:
        return self.shape.mean()

    def variance(self) -> float:
        return self.shape.variance()

    def mode(self, env: Environment = default_environment) -> float:
        return self.shape.mode()

    def min(self) -> float:
        return self.shape.min_x()

    def max(self) -> float:
        return self.shape.max_x()

    def cdf(self, x: float) -> float:
        total = self.integral_sum()
        return self.shape.cdf(x) / total if total > 0 else 0.0

    def pdf(self, x: float, env: Environment = default_environment) -> float:
        return self.shape.pdf(x)

    def _inv(self, p: float) -> float:
        return self.shape.inv(p)

    def inv_array(self, ps: FloatArray) -> FloatArray:
        return self.shape.inv_array(ps)

    def sample_n(self, n: int, rng: np.random.Generator) -> FloatArray:
        return default_sampler.sample(n, self.shape.inv_array, rng)

    def integral_sum(self) -> float:
        return self.shape.integral_sum()

    def normalize(self) -> PointSetDist:
        normalized = self.shape.normalize()
        return self if normalized is self.shape else PointSetDist(normalized)

    def to_point_set(self, env: Environment) -> PointSetDist:
        return self

    def to_sample_set(
        self, env: Environment, rng: np.random.Generator | None = None
    ) -> SampleSetDist:
        from squiggle_core.dists.sample_set import SampleSetDist

        rng = env.make_rng() if rng is None else rng
        return SampleSetDist(self.sample_n(env.sample_count, rng))

    def map_x(
        self,
        fn: Callable[[FloatArray], FloatArray],
        derivative: Callable[[FloatArray], FloatArray],
    ) -> PointSetDist:
        """Push every x through ``fn``; densities are corrected with ``derivative``."""
        shape = self.shape
        if isinstance(shape, DiscreteShape):
            return PointSetDist(shape.map_x(fn))
        return PointSetDist(shape.map_x(fn, derivative))

    def truncate(self, left: float | None, right: float | None) -> PointSetDist:
        """
        Restrict the distribution to ``[left, right]`` and renormalize.

        Raises
        ------
        DomainError
            If no probability mass is left.
        """
        continuous, discrete = self.parts()
        shape = build_simple_shape(
            continuous.truncate(left, right), discrete.truncate(left, right)
        )
        if shape is None or shape.integral_sum() <= 0:
            raise DomainError("Truncation leaves no probability mass")
        return PointSetDist(shape.normalize())

    def to_string(self) -> str:
        return "Point Set Distribution"

    def __repr__(self) -> str:
        return f"PointSetDist({self.shape!r})"


__all__ = ["PointSetDist", "shape_parts"]
