"""
Distributions
=============

Symbolic, sample-set and point-set representations of probability
distributions, the mixed shape builder and the generic operation engine.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.environment import (
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_XY_POINT_LENGTH,
    Environment,
    default_environment,
)
from squiggle_core.dists.kde import MIN_DISCRETE_WEIGHT, MIN_SAMPLES_FOR_KDE
from squiggle_core.dists.operations import (
    algebraic_combination,
    mixture,
    normalize_weights,
    pointwise_add,
    pointwise_multiply,
    scale_log,
    scale_log_with_threshold,
    scale_multiply,
    scale_operation,
    scale_power,
    to_point_set,
    to_sample_set,
    truncate,
)
from squiggle_core.dists.point_set import (
    ContinuousShape,
    DiscreteShape,
    MixedShape,
    PointSetDist,
    XYShape,
    build_mixed_shape,
    build_simple_shape,
)
from squiggle_core.dists.sample_set import SampleSetDist
from squiggle_core.dists.symbolic import (
    Bernoulli,
    Beta,
    Cauchy,
    Exponential,
    Gamma,
    Logistic,
    LogNormal,
    Normal,
    PointMass,
    SymbolicDist,
    Triangular,
    Uniform,
)

__all__ = [
    "BaseDist",
    "DEFAULT_SAMPLE_COUNT",
    "DEFAULT_XY_POINT_LENGTH",
    "Environment",
    "default_environment",
    "MIN_DISCRETE_WEIGHT",
    "MIN_SAMPLES_FOR_KDE",
    "algebraic_combination",
    "mixture",
    "normalize_weights",
    "pointwise_add",
    "pointwise_multiply",
    "scale_log",
    "scale_log_with_threshold",
    "scale_multiply",
    "scale_operation",
    "scale_power",
    "to_point_set",
    "to_sample_set",
    "truncate",
    "XYShape",
    "ContinuousShape",
    "DiscreteShape",
    "MixedShape",
    "PointSetDist",
    "build_mixed_shape",
    "build_simple_shape",
    "SampleSetDist",
    "SymbolicDist",
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
]
