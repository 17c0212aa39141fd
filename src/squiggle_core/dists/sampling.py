"""
Sampling Strategies
===================

Strategies drawing raw samples from a distribution.

- :class:`SamplingStrategy`: protocol of samplers.
- :class:`InverseTransformSampler`: applies a vectorized quantile function
  to i.i.d. uniform variates ``U ~ U(0, 1)``.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from typing import Protocol

import numpy as np

from squiggle_core.errors import DomainError
from squiggle_core.types import FloatArray

type QuantileFunction = Callable[[FloatArray], FloatArray]


class SamplingStrategy(Protocol):
    """Protocol for strategies returning a 1D array of ``n`` draws."""

    def sample(self, n: int, ppf: QuantileFunction, rng: np.random.Generator) -> FloatArray: ...


class InverseTransformSampler(SamplingStrategy):
    """
    Inverse transform sampling.

    The quantile function is called once with the whole array of uniforms,
    so it must be vectorized.

    Raises
    ------
    DomainError
        If ``n`` is negative.
    """

    def sample(self, n: int, ppf: QuantileFunction, rng: np.random.Generator) -> FloatArray:
        if n < 0:
            raise DomainError(f"Number of samples must be non-negative, got {n}")
        u = rng.random(n)
        return np.asarray(ppf(u), dtype=np.float64)


default_sampler = InverseTransformSampler()


__all__ = ["QuantileFunction", "SamplingStrategy", "InverseTransformSampler", "default_sampler"]
