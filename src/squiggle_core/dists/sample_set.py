"""
Sample-set distribution: a generic distribution represented by raw draws.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.environment import default_environment
from squiggle_core.dists.kde import samples_to_point_set
from squiggle_core.errors import DomainError
from squiggle_core.types import DistributionTag, FloatArray

if TYPE_CHECKING:
    from squiggle_core.dists.environment import Environment
    from squiggle_core.dists.point_set import PointSetDist


class SampleSetDist(BaseDist):
    """
    Distribution given by an array of samples.

    Parameters
    ----------
    samples : array-like of float
        Draws; copied into a read-only float array.

    Raises
    ------
    DomainError
        If there are no samples or some are not finite.
    """

    tag: ClassVar[DistributionTag] = DistributionTag.SAMPLE_SET

    __slots__ = ("samples", "_sorted")

    def __init__(self, samples: FloatArray | Sequence[float]) -> None:
        arr = np.array(samples, dtype=np.float64).ravel()
        if arr.size == 0:
            raise DomainError("Too few samples: a sample set needs at least one sample")
        if not np.all(np.isfinite(arr)):
            raise DomainError("Sample set contains non-finite values")
        arr.setflags(write=False)
        self.samples = arr
        self._sorted: FloatArray | None = None

    def __len__(self) -> int:
        return int(self.samples.size)

    def sorted_samples(self) -> FloatArray:
        if self._sorted is None:
            self._sorted = np.sort(self.samples)
        return self._sorted

    def mean(self) -> float:
        return float(np.mean(self.samples))

    def variance(self) -> float:
        return float(np.var(self.samples))

    def mode(self, env: Environment = default_environment) -> float:
        return self.to_point_set(env).mode()

    def min(self) -> float:
        return float(self.sorted_samples()[0])

    def max(self) -> float:
        return float(self.sorted_samples()[-1])

    def cdf(self, x: float) -> float:
        """Empirical share of samples at or below ``x``."""
        return float(np.searchsorted(self.sorted_samples(), x, side="right")) / len(self)

    def pdf(self, x: float, env: Environment = default_environment) -> float:
        return self.to_point_set(env).pdf(x)

    def _inv(self, p: float) -> float:
        return float(np.quantile(self.sorted_samples(), p))

    def sample_n(self, n: int, rng: np.random.Generator) -> FloatArray:
        return rng.choice(self.samples, size=n, replace=True)

    def to_point_set(self, env: Environment) -> PointSetDist:
        return samples_to_point_set(self.samples, env.xy_point_length)

    def to_sample_set(
        self, env: Environment, rng: np.random.Generator | None = None
    ) -> SampleSetDist:
        return self

    def map(self, fn: Callable[[FloatArray], FloatArray]) -> SampleSetDist:
        """Apply ``fn`` to every sample."""
        return SampleSetDist(fn(self.samples))

    def truncate(self, left: float | None, right: float | None) -> SampleSetDist:
        """
        Raises
        ------
        DomainError
            If no sample falls within the bounds.
        """
        keep = np.ones(len(self), dtype=bool)
        if left is not None:
            keep &= self.samples >= left
        if right is not None:
            keep &= self.samples <= right
        if not keep.any():
            raise DomainError("Truncation leaves no samples")
        return SampleSetDist(self.samples[keep])

    def to_string(self) -> str:
        return "Sample Set Distribution"

    def __repr__(self) -> str:
        return f"SampleSetDist(n={len(self)}, mean={self.mean():.4g})"


__all__ = ["SampleSetDist"]
