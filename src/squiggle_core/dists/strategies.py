"""
Combination Strategies
======================

Pluggable strategies computing ``d1 op d2`` for two distributions:

- :class:`SymbolicStrategy`: closed-form results for symbolic operands.
- :class:`ConvolutionStrategy`: numeric convolution of point sets.
- :class:`MonteCarloStrategy`: elementwise combination of sample sets.
- :class:`DefaultCombinationStrategy`: picks one of the above.

Notes
-----
A strategy returns ``None`` when it does not apply to the operands; only
the default strategy turns that into an error.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING, Protocol

import numpy as np

from squiggle_core.dists.arithmetic import ALGEBRAIC_FUNCTIONS, apply_algebraic
from squiggle_core.dists.point_set.algebra import convolve
from squiggle_core.dists.sample_set import SampleSetDist
from squiggle_core.dists.symbolic import SymbolicDist, try_analytic_combination
from squiggle_core.errors import DomainError
from squiggle_core.types import AlgebraicOperation, CombinationStrategy

if TYPE_CHECKING:
    from squiggle_core.dists.distribution import BaseDist
    from squiggle_core.dists.environment import Environment

logger = logging.getLogger(__name__)

CONVOLUTION_OPERATIONS = frozenset(
    {AlgebraicOperation.ADD, AlgebraicOperation.SUBTRACT, AlgebraicOperation.MULTIPLY}
)


class AlgebraicStrategy(Protocol):
    """Protocol for algebraic combination strategies."""

    name: str

    def combine(
        self,
        op: AlgebraicOperation,
        d1: BaseDist,
        d2: BaseDist,
        env: Environment,
        rng: np.random.Generator,
    ) -> BaseDist | None: ...


class SymbolicStrategy:
    """Closed-form combination of two symbolic distributions."""

    name = "symbolic"

    def combine(
        self,
        op: AlgebraicOperation,
        d1: BaseDist,
        d2: BaseDist,
        env: Environment,
        rng: np.random.Generator,
    ) -> BaseDist | None:
        if isinstance(d1, SymbolicDist) and isinstance(d2, SymbolicDist):
            return try_analytic_combination(op, d1, d2)
        return None


class ConvolutionStrategy:
    """
    Numeric convolution over point sets.

    Only defined for addition, subtraction and multiplication.
    """

    name = "convolution"

    def combine(
        self,
        op: AlgebraicOperation,
        d1: BaseDist,
        d2: BaseDist,
        env: Environment,
        rng: np.random.Generator,
    ) -> BaseDist | None:
        if op not in CONVOLUTION_OPERATIONS:
            return None
        return convolve(
            ALGEBRAIC_FUNCTIONS[op],
            d1.to_point_set(env),
            d2.to_point_set(env),
            env.xy_point_length,
        )


class MonteCarloStrategy:
    """
    Elementwise combination of samples.

    Two sample sets are paired index by index, which keeps correlations
    between values derived from the same samples. Other operands are drawn
    afresh and independently.
    """

    name = "monte_carlo"

    def combine(
        self,
        op: AlgebraicOperation,
        d1: BaseDist,
        d2: BaseDist,
        env: Environment,
        rng: np.random.Generator,
    ) -> SampleSetDist:
        s1 = d1.samples if isinstance(d1, SampleSetDist) else None
        s2 = d2.samples if isinstance(d2, SampleSetDist) else None
        if s1 is not None and s2 is not None:
            n = min(s1.size, s2.size)
            s1, s2 = s1[:n], s2[:n]
        else:
            n = s1.size if s1 is not None else s2.size if s2 is not None else env.sample_count
            if s1 is None:
                s1 = d1.sample_n(n, rng)
            if s2 is None:
                s2 = d2.sample_n(n, rng)
        return SampleSetDist(apply_algebraic(op, s1, s2))


class DefaultCombinationStrategy:
    """
    Default resolver of algebraic combinations.

    Resolution order
    ----------------
    1. Unless Monte Carlo or convolution is requested, try the closed form.
    2. If convolution is requested, convolve point sets.
    3. Otherwise combine sample sets by Monte Carlo.

    Raises
    ------
    DomainError
        If a symbolic result is requested but no closed form exists, or
        convolution is requested for an unsupported operation.
    """

    def __init__(self) -> None:
        self.symbolic = SymbolicStrategy()
        self.convolution = ConvolutionStrategy()
        self.monte_carlo = MonteCarloStrategy()

    def combine(
        self,
        op: AlgebraicOperation,
        d1: BaseDist,
        d2: BaseDist,
        env: Environment,
        rng: np.random.Generator,
        strategy: CombinationStrategy = CombinationStrategy.AUTO,
    ) -> BaseDist:
        if strategy in (CombinationStrategy.AUTO, CombinationStrategy.SYMBOLIC):
            result = self.symbolic.combine(op, d1, d2, env, rng)
            if result is not None:
                logger.debug("Combined %s with the symbolic strategy", op)
                return result
            if strategy is CombinationStrategy.SYMBOLIC:
                raise DomainError(f"No closed-form solution for {op} of {d1} and {d2}")

        if strategy is CombinationStrategy.CONVOLUTION:
            result = self.convolution.combine(op, d1, d2, env, rng)
            if result is None:
                raise DomainError(f"Convolution is not defined for {op}")
            logger.debug("Combined %s with the convolution strategy", op)
            return result

        logger.debug("Combined %s with the Monte Carlo strategy", op)
        return self.monte_carlo.combine(op, d1, d2, env, rng)


default_combination_strategy = DefaultCombinationStrategy()


__all__ = [
    "CONVOLUTION_OPERATIONS",
    "AlgebraicStrategy",
    "SymbolicStrategy",
    "ConvolutionStrategy",
    "MonteCarloStrategy",
    "DefaultCombinationStrategy",
    "default_combination_strategy",
]
