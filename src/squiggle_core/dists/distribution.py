"""
Distribution Interface
======================

Common interface of the three distribution representations:

- :class:`~squiggle_core.dists.symbolic.SymbolicDist`: closed-form family
  with parameters;
- :class:`~squiggle_core.dists.sample_set.SampleSetDist`: array of draws;
- :class:`~squiggle_core.dists.point_set.PointSetDist`: discretized
  density/mass curve.

Notes
-----
- Every representation converts to the other two through
  :meth:`BaseDist.to_point_set` and :meth:`BaseDist.to_sample_set`.
- ``inv`` validates its probability argument here; subclasses implement
  :meth:`BaseDist._inv` only.
- Statistics that need a conversion (e.g. ``pdf`` of a sample set) accept
  an ``env`` keyword argument.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from squiggle_core.dists.environment import default_environment
from squiggle_core.errors import DomainError

if TYPE_CHECKING:
    import numpy as np

    from squiggle_core.dists.environment import Environment
    from squiggle_core.dists.point_set import PointSetDist
    from squiggle_core.dists.sample_set import SampleSetDist
    from squiggle_core.types import DistributionTag, FloatArray


class BaseDist(ABC):
    """Abstract probability distribution over the real line."""

    tag: ClassVar[DistributionTag]

    @abstractmethod
    def mean(self) -> float: ...

    @abstractmethod
    def variance(self) -> float: ...

    def stdev(self) -> float:
        """Standard deviation, the square root of :meth:`variance`."""
        return math.sqrt(self.variance())

    @abstractmethod
    def mode(self, env: Environment = default_environment) -> float: ...

    @abstractmethod
    def min(self) -> float: ...

    @abstractmethod
    def max(self) -> float: ...

    @abstractmethod
    def cdf(self, x: float) -> float: ...

    @abstractmethod
    def pdf(self, x: float, env: Environment = default_environment) -> float: ...

    @abstractmethod
    def _inv(self, p: float) -> float: ...

    def inv(self, p: float) -> float:
        """
        Inverse cumulative distribution function.

        Parameters
        ----------
        p : float
            Probability in ``[0, 1]``.

        Returns
        -------
        float
            Smallest ``x`` such that ``cdf(x) >= p`` (up to interpolation).

        Raises
        ------
        DomainError
            If ``p`` lies outside ``[0, 1]``.
        """
        if not 0.0 <= p <= 1.0:
            raise DomainError(f"Probability must be between 0 and 1, got {p}")
        return self._inv(p)

    @abstractmethod
    def sample_n(self, n: int, rng: np.random.Generator) -> FloatArray: ...

    def sample(self, rng: np.random.Generator) -> float:
        """Draw a single value."""
        return float(self.sample_n(1, rng)[0])

    def integral_sum(self) -> float:
        """Total probability mass carried by the representation."""
        return 1.0

    def is_normalized(self) -> bool:
        return abs(self.integral_sum() - 1.0) < 1e-7

    def normalize(self) -> BaseDist:
        return self

    @abstractmethod
    def to_point_set(self, env: Environment) -> PointSetDist: ...

    @abstractmethod
    def to_sample_set(
        self, env: Environment, rng: np.random.Generator | None = None
    ) -> SampleSetDist: ...

    @abstractmethod
    def to_string(self) -> str: ...

    def __str__(self) -> str:
        return self.to_string()


__all__ = ["BaseDist"]
