"""
Core Type Definitions
=====================

Fundamental enums and type aliases shared by the distribution engine, the
value model and the reducer.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of support kinds.

    Attributes
    ----------
    DISCRETE : str
        Point masses only.
    CONTINUOUS : str
        Density over the real line.
    MIXED : str
        Both a continuous density and point masses.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"
    MIXED = "mixed"


class DistributionTag(StrEnum):
    """Representation tags of a generic distribution."""

    SYMBOLIC = "Symbolic"
    SAMPLE_SET = "SampleSet"
    POINT_SET = "PointSet"


class MixedAssumption(StrEnum):
    """
    Normalization policy of one part handed to the mixed shape builder.

    Attributes
    ----------
    ADDS_TO_1 : str
        The part integrates to one on its own.
    ADDS_TO_CORRECT_PROBABILITY : str
        The part already integrates to the probability mass it carries in
        the combined distribution.
    """

    ADDS_TO_1 = "ADDS_TO_1"
    ADDS_TO_CORRECT_PROBABILITY = "ADDS_TO_CORRECT_PROBABILITY"


class AlgebraicOperation(StrEnum):
    """Binary operations of the distribution algebra."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "pow"
    LOGARITHM = "log"


class ScaleOperation(StrEnum):
    """Operations applied to every x of a distribution with a fixed scalar."""

    MULTIPLY = "multiply"
    POWER = "pow"
    LOGARITHM = "log"
    LOGARITHM_WITH_THRESHOLD = "logWithThreshold"


class CombinationStrategy(StrEnum):
    """Strategy override for algebraic combination of two distributions."""

    AUTO = "auto"
    SYMBOLIC = "symbolic"
    MONTE_CARLO = "monte_carlo"
    CONVOLUTION = "convolution"


class Interpolation(StrEnum):
    """Interpolation between consecutive points of a continuous shape."""

    LINEAR = "Linear"
    STEPWISE = "Stepwise"


NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

FloatArray = NDArray[np.float64]
"""Type alias for float arrays used by shapes and sample sets."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""

type SourceId = str
"""Identifier of a source inside a project."""


@dataclass(frozen=True, slots=True)
class Position:
    """
    Point in source text.

    Parameters
    ----------
    offset : int
        Zero-based character offset.
    line : int
        One-based line number.
    column : int
        One-based column number.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Location:
    """
    Half-open range ``[start, end)`` of source text owned by an AST node.

    Parameters
    ----------
    source : SourceId
        Source the range belongs to.
    start : Position
        First character of the range.
    end : Position
        Position right after the last character.
    """

    source: SourceId
    start: Position
    end: Position

    def contains(self, offset: int) -> bool:
        """Check whether ``offset`` falls into the range (both ends inclusive)."""
        return self.start.offset <= offset <= self.end.offset

    def __str__(self) -> str:
        return f"line {self.start.line}, column {self.start.column}, file {self.source}"


__all__ = [
    "Kind",
    "DistributionTag",
    "MixedAssumption",
    "AlgebraicOperation",
    "ScaleOperation",
    "CombinationStrategy",
    "Interpolation",
    "NumPyNumber",
    "Number",
    "FloatArray",
    "BoolArray",
    "ScalarFunc",
    "SourceId",
    "Position",
    "Location",
]
