"""
Symbolic (closed-form) distribution families.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.dists.symbolic.algebra import try_analytic_combination
from squiggle_core.dists.symbolic.base import (
    MAX_QUANTILE,
    MIN_QUANTILE,
    SymbolicConstraint,
    SymbolicDist,
    constraint,
    symbolic_family,
)
from squiggle_core.dists.symbolic.continuous import (
    Beta,
    Cauchy,
    Exponential,
    Gamma,
    Logistic,
    LogNormal,
    Normal,
    Triangular,
    Uniform,
)
from squiggle_core.dists.symbolic.discrete import Bernoulli, PointMass
from squiggle_core.dists.symbolic.registry import (
    SymbolicFamilyRegister,
    reset_symbolic_families,
    symbolic_families,
)

__all__ = [
    "MIN_QUANTILE",
    "MAX_QUANTILE",
    "SymbolicConstraint",
    "SymbolicDist",
    "constraint",
    "symbolic_family",
    "Normal",
    "LogNormal",
    "Uniform",
    "Beta",
    "Exponential",
    "Cauchy",
    "Triangular",
    "Gamma",
    "Logistic",
    "PointMass",
    "Bernoulli",
    "try_analytic_combination",
    "SymbolicFamilyRegister",
    "symbolic_families",
    "reset_symbolic_families",
]
