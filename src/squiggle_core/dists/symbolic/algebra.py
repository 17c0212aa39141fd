"""
Closed-form combinations of symbolic distributions.

:func:`try_analytic_combination` returns ``None`` whenever the pair of
families has no closed form for the operation; callers then fall back to a
numeric strategy.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from squiggle_core.dists.arithmetic import apply_algebraic
from squiggle_core.dists.symbolic.base import SymbolicDist
from squiggle_core.dists.symbolic.continuous import LogNormal, Normal, Uniform
from squiggle_core.dists.symbolic.discrete import PointMass
from squiggle_core.types import AlgebraicOperation

Op = AlgebraicOperation


def _normal_pair(op: Op, d1: Normal, d2: Normal) -> SymbolicDist | None:
    if op not in (Op.ADD, Op.SUBTRACT):
        return None
    mu = d1.mu + d2.mu if op is Op.ADD else d1.mu - d2.mu
    return Normal.make(mu, math.hypot(d1.sigma, d2.sigma))


def _lognormal_pair(op: Op, d1: LogNormal, d2: LogNormal) -> SymbolicDist | None:
    if op not in (Op.MULTIPLY, Op.DIVIDE):
        return None
    mu = d1.mu + d2.mu if op is Op.MULTIPLY else d1.mu - d2.mu
    return LogNormal.make(mu, math.hypot(d1.sigma, d2.sigma))


def _shift_or_scale(op: Op, dist: SymbolicDist, k: float, dist_first: bool) -> SymbolicDist | None:
    """``dist op k`` (or ``k op dist``) for a location-scale family and a constant."""
    if isinstance(dist, Normal):
        if op is Op.ADD:
            return Normal.make(dist.mu + k, dist.sigma)
        if op is Op.SUBTRACT:
            mu = dist.mu - k if dist_first else k - dist.mu
            return Normal.make(mu, dist.sigma)
        if op is Op.MULTIPLY and k != 0:
            return Normal.make(dist.mu * k, dist.sigma * abs(k))
        if op is Op.DIVIDE and dist_first and k != 0:
            return Normal.make(dist.mu / k, dist.sigma / abs(k))
        return None
    if isinstance(dist, LogNormal):
        if op is Op.MULTIPLY and k > 0:
            return LogNormal.make(dist.mu + math.log(k), dist.sigma)
        if op is Op.DIVIDE and dist_first and k > 0:
            return LogNormal.make(dist.mu - math.log(k), dist.sigma)
        return None
    if isinstance(dist, Uniform):
        if op is Op.ADD:
            return Uniform.make(dist.low + k, dist.high + k)
        if op is Op.SUBTRACT:
            if dist_first:
                return Uniform.make(dist.low - k, dist.high - k)
            return Uniform.make(k - dist.high, k - dist.low)
        if op is Op.MULTIPLY and k != 0:
            ends = sorted((dist.low * k, dist.high * k))
            return Uniform.make(*ends)
        if op is Op.DIVIDE and dist_first and k != 0:
            ends = sorted((dist.low / k, dist.high / k))
            return Uniform.make(*ends)
    return None


def try_analytic_combination(
    op: AlgebraicOperation, d1: SymbolicDist, d2: SymbolicDist
) -> SymbolicDist | None:
    """
    Closed-form result of ``d1 op d2`` for independent operands.

    Supported pairs: Normal ± Normal, LogNormal × or ÷ LogNormal,
    PointMass with PointMass (any operation), and Normal, LogNormal or
    Uniform shifted or scaled by a PointMass.

    Returns
    -------
    SymbolicDist or None
        ``None`` when no closed form is known.
    """
    if isinstance(d1, PointMass) and isinstance(d2, PointMass):
        return PointMass.make(float(apply_algebraic(op, d1.value, d2.value)))
    if isinstance(d1, Normal) and isinstance(d2, Normal):
        return _normal_pair(op, d1, d2)
    if isinstance(d1, LogNormal) and isinstance(d2, LogNormal):
        return _lognormal_pair(op, d1, d2)
    if isinstance(d2, PointMass):
        return _shift_or_scale(op, d1, d2.value, dist_first=True)
    if isinstance(d1, PointMass):
        return _shift_or_scale(op, d2, d1.value, dist_first=False)
    return None


__all__ = ["try_analytic_combination"]
