"""
Generic Distribution Operations
===============================

Representation-independent entry points of the distribution engine:
algebraic and scale operations, pointwise combination, mixtures,
conversions and truncation.

All functions are pure in their inputs and the environment. Functions
drawing random numbers take an optional ``rng``; without one a generator is
built from ``env``.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from squiggle_core.dists.arithmetic import apply_scale, scale_functions
from squiggle_core.dists.environment import default_environment
from squiggle_core.dists.point_set import (
    ContinuousShape,
    DiscreteShape,
    PointSetDist,
)
from squiggle_core.dists.point_set.algebra import combine_pointwise
from squiggle_core.dists.sample_set import SampleSetDist
from squiggle_core.dists.strategies import default_combination_strategy
from squiggle_core.dists.symbolic import PointMass, SymbolicDist, try_analytic_combination
from squiggle_core.errors import DomainError
from squiggle_core.types import AlgebraicOperation, CombinationStrategy, ScaleOperation

if TYPE_CHECKING:
    from squiggle_core.dists.distribution import BaseDist
    from squiggle_core.dists.environment import Environment


def algebraic_combination(
    op: AlgebraicOperation,
    d1: BaseDist,
    d2: BaseDist,
    env: Environment = default_environment,
    strategy: CombinationStrategy = CombinationStrategy.AUTO,
    rng: np.random.Generator | None = None,
) -> BaseDist:
    """
    Distribution of ``d1 op d2`` for independent operands.

    Parameters
    ----------
    op : AlgebraicOperation
        Operation to apply.
    d1, d2 : BaseDist
        Operands.
    env : Environment
        Sample count and grid resolution of numeric strategies.
    strategy : CombinationStrategy, default AUTO
        Strategy override; see :class:`DefaultCombinationStrategy`.
    rng : numpy.random.Generator, optional
        Random generator for Monte Carlo combinations.
    """
    rng = env.make_rng() if rng is None else rng
    return default_combination_strategy.combine(op, d1, d2, env, rng, strategy)


def scale_operation(
    dist: BaseDist,
    op: ScaleOperation,
    scalar: float,
    env: Environment = default_environment,
    threshold: float | None = None,
) -> BaseDist:
    """
    Apply ``x -> op(x, scalar)`` to every value of ``dist``.

    Sample sets transform their samples; other representations transform
    their point set, correcting densities by the derivative of the map.
    Multiplying a symbolic distribution keeps the closed form when one
    exists.
    """
    if isinstance(dist, SampleSetDist):
        return SampleSetDist(apply_scale(op, dist.samples, scalar, threshold))
    if op is ScaleOperation.MULTIPLY and isinstance(dist, SymbolicDist):
        analytic = try_analytic_combination(
            AlgebraicOperation.MULTIPLY, dist, PointMass.make(scalar)
        )
        if analytic is not None:
            return analytic
    fn, derivative = scale_functions(op, scalar, threshold)
    return dist.to_point_set(env).map_x(fn, derivative)


def scale_multiply(
    dist: BaseDist, scalar: float, env: Environment = default_environment
) -> BaseDist:
    return scale_operation(dist, ScaleOperation.MULTIPLY, scalar, env)


def scale_power(dist: BaseDist, scalar: float, env: Environment = default_environment) -> BaseDist:
    return scale_operation(dist, ScaleOperation.POWER, scalar, env)


def scale_log(dist: BaseDist, base: float, env: Environment = default_environment) -> BaseDist:
    return scale_operation(dist, ScaleOperation.LOGARITHM, base, env)


def scale_log_with_threshold(
    dist: BaseDist, base: float, threshold: float, env: Environment = default_environment
) -> BaseDist:
    return scale_operation(dist, ScaleOperation.LOGARITHM_WITH_THRESHOLD, base, env, threshold)


def pointwise_add(
    d1: BaseDist, d2: BaseDist, env: Environment = default_environment
) -> PointSetDist:
    """Sum of the densities of ``d1`` and ``d2``; the result is not normalized."""
    return combine_pointwise(np.add, d1.to_point_set(env), d2.to_point_set(env))


def pointwise_multiply(
    d1: BaseDist, d2: BaseDist, env: Environment = default_environment
) -> PointSetDist:
    """Product of the densities of ``d1`` and ``d2``; the result is not normalized."""
    return combine_pointwise(np.multiply, d1.to_point_set(env), d2.to_point_set(env))


def normalize_weights(weights: Sequence[float]) -> list[float]:
    """
    Scale mixture weights to sum to one.

    Raises
    ------
    DomainError
        If a weight is negative or not finite, or the weights sum to zero.
    """
    for w in weights:
        if not math.isfinite(w) or w < 0:
            raise DomainError(f"Mixture weights must be non-negative, got {w}")
    total = math.fsum(weights)
    if total <= 0:
        raise DomainError("Mixture weights must sum to a positive number")
    return [w / total for w in weights]


def mixture(
    pairs: Sequence[tuple[BaseDist, float]],
    env: Environment = default_environment,
    rng: np.random.Generator | None = None,
) -> BaseDist:
    """
    Weighted mixture of distributions.

    If any component is a sample set the result is a sample set of
    ``env.sample_count`` draws, each component contributing a multinomial
    share of them. Otherwise the point sets of the components are summed
    with their weights over the union of their grids.

    Raises
    ------
    DomainError
        If ``pairs`` is empty or the weights are invalid.
    """
    if not pairs:
        raise DomainError("Mixture requires at least one distribution")
    weights = normalize_weights([w for _, w in pairs])
    dists = [d for d, _ in pairs]

    if any(isinstance(d, SampleSetDist) for d in dists):
        rng = env.make_rng() if rng is None else rng
        counts = rng.multinomial(env.sample_count, weights)
        chunks = [d.sample_n(int(c), rng) for d, c in zip(dists, counts, strict=True) if c > 0]
        samples = np.concatenate(chunks)
        rng.shuffle(samples)
        return SampleSetDist(samples)

    continuous = ContinuousShape.empty()
    discrete = DiscreteShape.empty()
    for dist, weight in zip(dists, weights, strict=True):
        point_set = dist.to_point_set(env).normalize()
        cont, disc = point_set.parts()
        continuous = continuous.combine_pointwise(np.add, cont.scale_y(weight))
        discrete = discrete.combine_pointwise(np.add, disc.scale_y(weight))
    return PointSetDist.from_parts(continuous, discrete)


def to_point_set(dist: BaseDist, env: Environment = default_environment) -> PointSetDist:
    return dist.to_point_set(env)


def to_sample_set(
    dist: BaseDist, env: Environment = default_environment, rng: np.random.Generator | None = None
) -> SampleSetDist:
    return dist.to_sample_set(env, rng)


def truncate(
    dist: BaseDist,
    left: float | None,
    right: float | None,
    env: Environment = default_environment,
) -> BaseDist:
    """
    Restrict ``dist`` to ``[left, right]`` and renormalize.

    Raises
    ------
    DomainError
        If ``left >= right`` or no mass is left.
    """
    if left is None and right is None:
        return dist
    if left is not None and right is not None and left >= right:
        raise DomainError("Left truncation bound must be smaller than the right bound")
    if isinstance(dist, SampleSetDist):
        return dist.truncate(left, right)
    return dist.to_point_set(env).truncate(left, right)


__all__ = [
    "algebraic_combination",
    "scale_operation",
    "scale_multiply",
    "scale_power",
    "scale_log",
    "scale_log_with_threshold",
    "pointwise_add",
    "pointwise_multiply",
    "normalize_weights",
    "mixture",
    "to_point_set",
    "to_sample_set",
    "truncate",
]
