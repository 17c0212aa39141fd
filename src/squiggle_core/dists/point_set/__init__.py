"""
Point-set distributions: XY shapes, the mixed builder and their algebra.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.dists.point_set.builder import Shape, build_mixed_shape, build_simple_shape
from squiggle_core.dists.point_set.continuous import ContinuousShape
from squiggle_core.dists.point_set.discrete import DiscreteShape
from squiggle_core.dists.point_set.distribution import PointSetDist, shape_parts
from squiggle_core.dists.point_set.mixed import MixedShape
from squiggle_core.dists.point_set.xyshape import XYShape

__all__ = [
    "XYShape",
    "ContinuousShape",
    "DiscreteShape",
    "MixedShape",
    "Shape",
    "build_mixed_shape",
    "build_simple_shape",
    "PointSetDist",
    "shape_parts",
]
