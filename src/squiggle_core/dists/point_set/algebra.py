"""
Point-set algebra: pointwise combination and numeric convolution.

Convolution discretizes every continuous part into point masses, combines
all pairs of masses and histograms the pairs that involve a continuous mass
back into a density on ``xy_point_length`` bins. Pairs of two discrete
masses stay point masses.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections.abc import Callable

import numpy as np

from squiggle_core.dists.point_set.continuous import ContinuousShape
from squiggle_core.dists.point_set.discrete import DiscreteShape
from squiggle_core.dists.point_set.distribution import PointSetDist
from squiggle_core.dists.point_set.xyshape import XYShape, merge_duplicate_xs
from squiggle_core.errors import DomainError
from squiggle_core.types import FloatArray

logger = logging.getLogger(__name__)

type BinaryArrayFn = Callable[[FloatArray, FloatArray], FloatArray]


def combine_pointwise(fn: BinaryArrayFn, d1: PointSetDist, d2: PointSetDist) -> PointSetDist:
    """
    Combine the densities and masses of two point sets value by value.

    Continuous parts are combined over the union of their grids, discrete
    parts over the union of their mass locations. The result is not
    renormalized.
    """
    c1, m1 = d1.parts()
    c2, m2 = d2.parts()
    continuous = c1.combine_pointwise(fn, c2) if not (c1.is_empty and c2.is_empty) else c1
    discrete = m1.combine_pointwise(fn, m2) if not (m1.is_empty and m2.is_empty) else m1
    return PointSetDist.from_parts(continuous, discrete)


def _masses(dist: PointSetDist) -> tuple[XYShape, XYShape]:
    continuous, discrete = dist.parts()
    return continuous.point_masses(), discrete.xy


def _outer(fn: BinaryArrayFn, a: XYShape, b: XYShape) -> tuple[FloatArray, FloatArray]:
    if a.is_empty or b.is_empty:
        return np.empty(0), np.empty(0)
    with np.errstate(all="ignore"):
        xs = fn(a.xs[:, None], b.xs[None, :]).ravel()
    ws = (a.ys[:, None] * b.ys[None, :]).ravel()
    if not np.all(np.isfinite(xs)):
        raise DomainError("Convolution produced non-finite values")
    return xs, ws


def convolve(fn: BinaryArrayFn, d1: PointSetDist, d2: PointSetDist, bins: int) -> PointSetDist:
    """
    Distribution of ``fn(X, Y)`` for independent ``X ~ d1`` and ``Y ~ d2``.

    Parameters
    ----------
    fn : BinaryArrayFn
        Broadcasting binary operation, e.g. ``np.add``.
    d1, d2 : PointSetDist
        Operands.
    bins : int
        Number of histogram bins of the continuous part of the result.
    """
    cont1, disc1 = _masses(d1)
    cont2, disc2 = _masses(d2)

    disc_xs, disc_ws = _outer(fn, disc1, disc2)
    cont_pairs = [_outer(fn, cont1, cont2), _outer(fn, cont1, disc2), _outer(fn, disc1, cont2)]
    cont_xs = np.concatenate([xs for xs, _ in cont_pairs])
    cont_ws = np.concatenate([ws for _, ws in cont_pairs])
    logger.debug("Convolving %d continuous and %d discrete pairs", cont_xs.size, disc_xs.size)

    discrete = DiscreteShape(merge_duplicate_xs(disc_xs, disc_ws))
    continuous = ContinuousShape.empty()
    if cont_xs.size and cont_ws.sum() > 0:
        counts, edges = np.histogram(cont_xs, bins=bins, weights=cont_ws)
        widths = np.diff(edges)
        centers = (edges[:-1] + edges[1:]) / 2
        continuous = ContinuousShape.make(centers, counts / widths)
        total = continuous.integral_sum()
        if total > 0:
            continuous = continuous.scale_y(float(cont_ws.sum()) / total)
    return PointSetDist.from_parts(continuous, discrete)


__all__ = ["combine_pointwise", "convolve"]
