"""
Kernel density estimation for sample set → point set conversion.

Values repeated at least :data:`MIN_DISCRETE_WEIGHT` times become point
masses; the remaining samples are smoothed with a Gaussian kernel
(``scipy.stats.gaussian_kde`` with Silverman's bandwidth) evaluated on an
evenly spaced grid.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging

import numpy as np
from scipy import stats

from squiggle_core.dists.point_set import (
    ContinuousShape,
    DiscreteShape,
    PointSetDist,
    build_mixed_shape,
)
from squiggle_core.errors import DomainError
from squiggle_core.types import FloatArray, MixedAssumption

logger = logging.getLogger(__name__)

MIN_SAMPLES_FOR_KDE: int = 5
"""Minimum number of distinct continuous samples a KDE is built from."""

MIN_DISCRETE_WEIGHT: int = 10
"""Number of repetitions after which a sample value becomes a point mass."""

KDE_PADDING: float = 3.0
"""Grid extension beyond the sample range, in kernel standard deviations."""


def split_continuous_and_discrete(
    samples: FloatArray, min_discrete_weight: int = MIN_DISCRETE_WEIGHT
) -> tuple[FloatArray, DiscreteShape]:
    """
    Separate frequently repeated values from the rest of the samples.

    Returns
    -------
    tuple[FloatArray, DiscreteShape]
        Samples left for the continuous part, and point masses whose raw
        masses are the share of samples they absorbed.
    """
    values, counts = np.unique(samples, return_counts=True)
    heavy = counts >= min_discrete_weight
    discrete = DiscreteShape.make(values[heavy], counts[heavy] / samples.size)
    continuous = samples[~np.isin(samples, values[heavy])]
    return continuous, discrete


def kde_shape(samples: FloatArray, xy_point_length: int) -> ContinuousShape:
    """Gaussian KDE of ``samples`` on ``xy_point_length`` points, integrating to one."""
    kde = stats.gaussian_kde(samples, bw_method="silverman")
    kernel_sd = float(np.sqrt(kde.covariance[0, 0]))
    lo = float(samples.min()) - KDE_PADDING * kernel_sd
    hi = float(samples.max()) + KDE_PADDING * kernel_sd
    xs = np.linspace(lo, hi, max(xy_point_length, 2))
    return ContinuousShape.make(xs, kde(xs)).normalize()


def samples_to_point_set(samples: FloatArray, xy_point_length: int) -> PointSetDist:
    """
    Convert raw samples into a point-set distribution.

    Raises
    ------
    DomainError
        If no value is repeated often enough to be a point mass and there
        are fewer than :data:`MIN_SAMPLES_FOR_KDE` distinct samples.
    """
    continuous_samples, discrete = split_continuous_and_discrete(samples)
    distinct = np.unique(continuous_samples)

    if distinct.size < MIN_SAMPLES_FOR_KDE:
        if discrete.is_empty:
            raise DomainError("Too few samples when constructing point set")
        if continuous_samples.size:
            values, counts = np.unique(continuous_samples, return_counts=True)
            leftovers = DiscreteShape.make(values, counts / samples.size)
            discrete = DiscreteShape.make(
                np.concatenate((discrete.xy.xs, leftovers.xy.xs)),
                np.concatenate((discrete.xy.ys, leftovers.xy.ys)),
            )
        logger.debug("Sample set converted to %d point masses", len(discrete.xy))
        return PointSetDist(discrete.normalize())

    continuous = kde_shape(continuous_samples, xy_point_length)
    if discrete.is_empty:
        return PointSetDist(continuous)

    shape = build_mixed_shape(
        continuous,
        discrete,
        MixedAssumption.ADDS_TO_1,
        MixedAssumption.ADDS_TO_CORRECT_PROBABILITY,
    )
    if shape is None:
        raise DomainError("Cannot combine sample set parts into a point set")
    return PointSetDist(shape)


__all__ = [
    "MIN_SAMPLES_FOR_KDE",
    "MIN_DISCRETE_WEIGHT",
    "KDE_PADDING",
    "split_continuous_and_discrete",
    "kde_shape",
    "samples_to_point_set",
]
