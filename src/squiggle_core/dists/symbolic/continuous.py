"""
Continuous symbolic families.

Each family maps its parameters onto a frozen ``scipy.stats`` distribution
and overrides the statistics that have simple closed forms.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from scipy import stats

from squiggle_core.dists.environment import default_environment
from squiggle_core.dists.symbolic.base import SymbolicDist, constraint, symbolic_family
from squiggle_core.errors import DomainError

if TYPE_CHECKING:
    from scipy.stats._distn_infrastructure import rv_continuous_frozen

    from squiggle_core.dists.environment import Environment

# z-score of the 95th percentile; ``a to b`` is a 90% credible interval
_Z_90 = 1.6448536269514722


@symbolic_family(name="Normal")
class Normal(SymbolicDist):
    """
    Normal (Gaussian) distribution.

    Parameters
    ----------
    mu : float
        Mean, the location of the bell curve.
    sigma : float
        Standard deviation, strictly positive.
    """

    mu: float
    sigma: float

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        return self.sigma > 0

    @classmethod
    def from_credible_interval(cls, low: float, high: float) -> Normal:
        """Normal whose 5th and 95th percentiles are ``low`` and ``high``."""
        if not low < high:
            raise DomainError("Low value must be less than high value")
        return cls.make((low + high) / 2, (high - low) / (2 * _Z_90))

    def frozen(self) -> rv_continuous_frozen:
        return stats.norm(loc=self.mu, scale=self.sigma)

    def mean(self) -> float:
        return self.mu

    def variance(self) -> float:
        return self.sigma**2

    def mode(self, env: Environment = default_environment) -> float:
        return self.mu


@symbolic_family(name="Lognormal")
class LogNormal(SymbolicDist):
    """
    Log-normal distribution: ``exp(Normal(mu, sigma))``.

    Parameters
    ----------
    mu : float
        Mean of the underlying normal.
    sigma : float
        Standard deviation of the underlying normal, strictly positive.
    """

    mu: float
    sigma: float

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        return self.sigma > 0

    @classmethod
    def from_mean_stdev(cls, mean: float, stdev: float) -> LogNormal:
        """
        Log-normal with the given mean and standard deviation.

        Raises
        ------
        DomainError
            If ``mean`` or ``stdev`` is not positive.
        """
        if mean <= 0 or stdev <= 0:
            raise DomainError("Lognormal mean and stdev must be positive")
        ratio = 1 + (stdev / mean) ** 2
        return cls.make(math.log(mean) - 0.5 * math.log(ratio), math.sqrt(math.log(ratio)))

    @classmethod
    def from_credible_interval(cls, low: float, high: float) -> LogNormal:
        """Log-normal whose 5th and 95th percentiles are ``low`` and ``high``."""
        if low <= 0:
            raise DomainError("Low value must be above 0 for a lognormal credible interval")
        if not low < high:
            raise DomainError("Low value must be less than high value")
        log_low, log_high = math.log(low), math.log(high)
        return cls.make((log_low + log_high) / 2, (log_high - log_low) / (2 * _Z_90))

    def frozen(self) -> rv_continuous_frozen:
        return stats.lognorm(s=self.sigma, scale=math.exp(self.mu))

    def mean(self) -> float:
        return math.exp(self.mu + self.sigma**2 / 2)

    def variance(self) -> float:
        return (math.exp(self.sigma**2) - 1) * math.exp(2 * self.mu + self.sigma**2)

    def mode(self, env: Environment = default_environment) -> float:
        return math.exp(self.mu - self.sigma**2)


@symbolic_family(name="Uniform")
class Uniform(SymbolicDist):
    """Uniform distribution on ``[low, high]``."""

    low: float
    high: float

    @constraint(description="high > low")
    def check_bounds(self) -> bool:
        return self.high > self.low

    def frozen(self) -> rv_continuous_frozen:
        return stats.uniform(loc=self.low, scale=self.high - self.low)

    def mean(self) -> float:
        return (self.low + self.high) / 2

    def variance(self) -> float:
        return (self.high - self.low) ** 2 / 12

    def mode(self, env: Environment = default_environment) -> float:
        return self.mean()

    def min(self) -> float:
        return self.low

    def max(self) -> float:
        return self.high


@symbolic_family(name="Beta")
class Beta(SymbolicDist):
    """Beta distribution on ``[0, 1]``."""

    alpha: float
    beta: float

    @constraint(description="alpha > 0")
    def check_alpha_positive(self) -> bool:
        return self.alpha > 0

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0

    @classmethod
    def from_mean_stdev(cls, mean: float, stdev: float) -> Beta:
        if not 0 < mean < 1:
            raise DomainError("Beta mean must be in (0, 1)")
        variance = stdev**2
        if variance <= 0 or variance >= mean * (1 - mean):
            raise DomainError("Beta stdev is incompatible with its mean")
        sample_size = mean * (1 - mean) / variance - 1
        return cls.make(mean * sample_size, (1 - mean) * sample_size)

    def frozen(self) -> rv_continuous_frozen:
        return stats.beta(self.alpha, self.beta)

    def mean(self) -> float:
        return self.alpha / (self.alpha + self.beta)

    def mode(self, env: Environment = default_environment) -> float:
        if self.alpha > 1 and self.beta > 1:
            return (self.alpha - 1) / (self.alpha + self.beta - 2)
        return SymbolicDist.mode(self, env)


@symbolic_family(name="Exponential")
class Exponential(SymbolicDist):
    """Exponential distribution with the given ``rate``."""

    rate: float

    @constraint(description="rate > 0")
    def check_rate_positive(self) -> bool:
        return self.rate > 0

    def frozen(self) -> rv_continuous_frozen:
        return stats.expon(scale=1 / self.rate)

    def mean(self) -> float:
        return 1 / self.rate

    def variance(self) -> float:
        return 1 / self.rate**2

    def mode(self, env: Environment = default_environment) -> float:
        return 0.0

    def min(self) -> float:
        return 0.0


@symbolic_family(name="Cauchy")
class Cauchy(SymbolicDist):
    """
    Cauchy distribution.

    Its mean and variance are undefined, so :meth:`mean`, :meth:`variance`
    and :meth:`stdev` raise :class:`~squiggle_core.errors.DomainError`
    instead of returning NaN.
    """

    local: float
    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def frozen(self) -> rv_continuous_frozen:
        return stats.cauchy(loc=self.local, scale=self.scale)

    def mean(self) -> float:
        raise DomainError("Cauchy distributions have no mean value.")

    def variance(self) -> float:
        raise DomainError("Cauchy distributions have no variance.")

    def stdev(self) -> float:
        raise DomainError("Cauchy distributions have no standard deviation.")

    def mode(self, env: Environment = default_environment) -> float:
        return self.local


@symbolic_family(name="Triangular")
class Triangular(SymbolicDist):
    """Triangular distribution with peak at ``medium``."""

    low: float
    medium: float
    high: float

    @constraint(description="low < medium < high")
    def check_ordering(self) -> bool:
        return self.low < self.medium < self.high

    def frozen(self) -> rv_continuous_frozen:
        width = self.high - self.low
        return stats.triang(c=(self.medium - self.low) / width, loc=self.low, scale=width)

    def mean(self) -> float:
        return (self.low + self.medium + self.high) / 3

    def mode(self, env: Environment = default_environment) -> float:
        return self.medium

    def min(self) -> float:
        return self.low

    def max(self) -> float:
        return self.high


@symbolic_family(name="Gamma")
class Gamma(SymbolicDist):
    """Gamma distribution in shape/scale parametrization."""

    shape: float
    scale: float

    @constraint(description="shape > 0")
    def check_shape_positive(self) -> bool:
        return self.shape > 0

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def frozen(self) -> rv_continuous_frozen:
        return stats.gamma(a=self.shape, scale=self.scale)

    def mean(self) -> float:
        return self.shape * self.scale

    def variance(self) -> float:
        return self.shape * self.scale**2


@symbolic_family(name="Logistic")
class Logistic(SymbolicDist):
    """Logistic distribution."""

    location: float
    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def frozen(self) -> rv_continuous_frozen:
        return stats.logistic(loc=self.location, scale=self.scale)

    def mean(self) -> float:
        return self.location

    def mode(self, env: Environment = default_environment) -> float:
        return self.location


__all__ = [
    "Normal",
    "LogNormal",
    "Uniform",
    "Beta",
    "Exponential",
    "Cauchy",
    "Triangular",
    "Gamma",
    "Logistic",
]
