"""
Mixed Shape Builder
===================

Combines a continuous shape and a discrete shape into one point-set shape.

Each part comes with a :class:`~squiggle_core.types.MixedAssumption` telling
whether it integrates to one on its own (``ADDS_TO_1``) or already carries
the probability it has in the combined distribution
(``ADDS_TO_CORRECT_PROBABILITY``). The builder is a pure function: when the
assumptions do not determine the discrete mass fraction it returns ``None``
instead of guessing.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging

from squiggle_core.dists.point_set.continuous import ContinuousShape
from squiggle_core.dists.point_set.discrete import DiscreteShape
from squiggle_core.dists.point_set.mixed import MixedShape
from squiggle_core.types import MixedAssumption

logger = logging.getLogger(__name__)

type Shape = ContinuousShape | DiscreteShape | MixedShape

_ONE = MixedAssumption.ADDS_TO_1
_CORRECT = MixedAssumption.ADDS_TO_CORRECT_PROBABILITY


def build_mixed_shape(
    continuous: ContinuousShape,
    discrete: DiscreteShape,
    continuous_assumption: MixedAssumption,
    discrete_assumption: MixedAssumption,
    discrete_probability_mass_fraction: float | None = None,
) -> MixedShape | None:
    """
    Build a mixed shape with an explicit discrete probability mass fraction.

    Parameters
    ----------
    continuous : ContinuousShape
        Continuous part.
    discrete : DiscreteShape
        Discrete part.
    continuous_assumption, discrete_assumption : MixedAssumption
        Normalization policy of each part.
    discrete_probability_mass_fraction : float, optional
        Externally known share of probability held by the discrete part.

    Returns
    -------
    MixedShape or None
        ``None`` when the inputs cannot be combined.

    Notes
    -----
    ========================  ========================  =======  ==============================
    continuous                discrete                  mass     result
    ========================  ========================  =======  ==============================
    CORRECT                   CORRECT                   r        parts normalized, weighted 1-r, r
    ADDS_TO_1                 ADDS_TO_1                 r        fraction ``r``
    ADDS_TO_1                 ADDS_TO_1                 None     ``None``
    CORRECT                   ADDS_TO_1                 None     ``None``
    ADDS_TO_1                 CORRECT                   None     fraction = raw discrete sum
    any other                                                    ``None``
    ========================  ========================  =======  ==============================

    With both parts already carrying their correct probabilities the
    fraction ``r`` is authoritative: each part is normalized on its own and
    then weighted by ``1 - r`` and ``r``, so the result integrates to one
    whatever the raw masses were.
    """
    r = discrete_probability_mass_fraction
    if r is not None and not 0.0 <= r <= 1.0:
        logger.debug("Rejecting mixed shape with discrete mass fraction %s", r)
        return None

    pair = (continuous_assumption, discrete_assumption)
    if r is not None and pair in ((_CORRECT, _CORRECT), (_ONE, _ONE)):
        return MixedShape(continuous.normalize(), discrete.normalize(), r)

    if r is None and pair == (_ONE, _CORRECT):
        raw_sum = discrete.integral_sum()
        if raw_sum > 1.0:
            return None
        return MixedShape(continuous.normalize(), discrete.normalize(), raw_sum)

    return None


def build_simple_shape(continuous: ContinuousShape, discrete: DiscreteShape) -> Shape | None:
    """
    Combine two parts whose raw masses are the probabilities they carry.

    A continuous part with at most one point cannot hold a density and is
    dropped; an empty discrete part leaves the continuous shape alone.
    Otherwise the discrete part's raw total becomes the mass fraction.

    Returns
    -------
    ContinuousShape or DiscreteShape or MixedShape or None
        ``None`` when both parts are empty.
    """
    degenerate_continuous = len(continuous.xy) <= 1
    if degenerate_continuous and discrete.is_empty:
        return None
    if degenerate_continuous:
        return discrete
    if discrete.is_empty:
        return continuous

    discrete_sum = discrete.integral_sum()
    continuous_sum = continuous.integral_sum()
    total = discrete_sum + continuous_sum
    if total <= 0:
        return None
    return MixedShape(continuous.normalize(), discrete.normalize(), discrete_sum / total)


__all__ = ["Shape", "build_mixed_shape", "build_simple_shape"]
