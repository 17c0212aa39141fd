"""
Discrete symbolic families: a single point mass and the Bernoulli distribution.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, ClassVar

import numpy as np
from scipy import stats

from squiggle_core.dists.environment import default_environment
from squiggle_core.dists.point_set import DiscreteShape, PointSetDist
from squiggle_core.dists.symbolic.base import SymbolicDist, constraint, symbolic_family
from squiggle_core.errors import InternalError
from squiggle_core.types import FloatArray, Kind

if TYPE_CHECKING:
    from scipy.stats._distn_infrastructure import rv_discrete_frozen

    from squiggle_core.dists.environment import Environment


@symbolic_family(name="PointMass")
class PointMass(SymbolicDist):
    """All probability at ``value``."""

    kind: ClassVar[Kind] = Kind.DISCRETE

    value: float

    def frozen(self) -> rv_discrete_frozen:
        raise InternalError("PointMass has no scipy counterpart")

    def mean(self) -> float:
        return self.value

    def variance(self) -> float:
        return 0.0

    def mode(self, env: Environment = default_environment) -> float:
        return self.value

    def min(self) -> float:
        return self.value

    def max(self) -> float:
        return self.value

    def cdf(self, x: float) -> float:
        return 1.0 if x >= self.value else 0.0

    def pdf(self, x: float, env: Environment = default_environment) -> float:
        return 1.0 if x == self.value else 0.0

    def _inv(self, p: float) -> float:
        return self.value

    def sample_n(self, n: int, rng: np.random.Generator) -> FloatArray:
        return np.full(n, self.value, dtype=np.float64)

    def to_point_set(self, env: Environment) -> PointSetDist:
        return PointSetDist(DiscreteShape.make([self.value], [1.0]))


@symbolic_family(name="Bernoulli")
class Bernoulli(SymbolicDist):
    """One with probability ``p``, zero otherwise."""

    kind: ClassVar[Kind] = Kind.DISCRETE

    p: float

    @constraint(description="0 <= p <= 1")
    def check_probability(self) -> bool:
        return 0.0 <= self.p <= 1.0

    def frozen(self) -> rv_discrete_frozen:
        return stats.bernoulli(self.p)

    def mean(self) -> float:
        return self.p

    def variance(self) -> float:
        return self.p * (1 - self.p)

    def mode(self, env: Environment = default_environment) -> float:
        return 1.0 if self.p > 0.5 else 0.0

    def min(self) -> float:
        return 0.0

    def max(self) -> float:
        return 1.0

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return 1.0 - self.p if x < 1 else 1.0

    def pdf(self, x: float, env: Environment = default_environment) -> float:
        if x == 0:
            return 1.0 - self.p
        return self.p if x == 1 else 0.0

    def _inv(self, p: float) -> float:
        return 0.0 if p <= 1.0 - self.p else 1.0

    def sample_n(self, n: int, rng: np.random.Generator) -> FloatArray:
        return (rng.random(n) < self.p).astype(np.float64)

    def to_point_set(self, env: Environment) -> PointSetDist:
        return PointSetDist(DiscreteShape.make([0.0, 1.0], [1.0 - self.p, self.p]))


__all__ = ["PointMass", "Bernoulli"]
