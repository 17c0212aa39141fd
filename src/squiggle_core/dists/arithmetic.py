"""
Elementwise implementations of the algebraic and scale operations.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable

import numpy as np

from squiggle_core.errors import DomainError
from squiggle_core.types import AlgebraicOperation, FloatArray, ScaleOperation

type ArrayFn = Callable[[FloatArray, FloatArray], FloatArray]


def _log_base(a: FloatArray, b: FloatArray) -> FloatArray:
    return np.log(a) / np.log(b)


ALGEBRAIC_FUNCTIONS: dict[AlgebraicOperation, ArrayFn] = {
    AlgebraicOperation.ADD: np.add,
    AlgebraicOperation.SUBTRACT: np.subtract,
    AlgebraicOperation.MULTIPLY: np.multiply,
    AlgebraicOperation.DIVIDE: np.divide,
    AlgebraicOperation.POWER: np.power,
    AlgebraicOperation.LOGARITHM: _log_base,
}


def apply_algebraic(
    op: AlgebraicOperation, a: FloatArray | float, b: FloatArray | float
) -> FloatArray:
    """
    Apply ``op`` elementwise.

    Raises
    ------
    DomainError
        If any result is not finite (e.g. division by zero, log of a
        negative number).
    """
    with np.errstate(all="ignore"):
        fn = ALGEBRAIC_FUNCTIONS[op]
        out = np.asarray(
            fn(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)), dtype=np.float64
        )
    if not np.all(np.isfinite(out)):
        raise DomainError(f"Operation {op} returned non-finite values")
    return out


def scale_functions(
    op: ScaleOperation, scalar: float, threshold: float | None = None
) -> tuple[Callable[[FloatArray], FloatArray], Callable[[FloatArray], FloatArray]]:
    """
    Transform of x and its derivative for a scale operation.

    ``LOGARITHM_WITH_THRESHOLD`` maps values below ``threshold`` onto
    ``log(threshold)``.

    Raises
    ------
    DomainError
        For a logarithm base that is not positive or equals one, or a
        missing or non-positive threshold.
    """
    if op is ScaleOperation.MULTIPLY:
        return (lambda x: x * scalar), (lambda x: np.full_like(x, scalar))
    if op is ScaleOperation.POWER:
        return (lambda x: np.power(x, scalar)), (lambda x: scalar * np.power(x, scalar - 1))
    if scalar <= 0 or scalar == 1:
        raise DomainError(f"Logarithm base must be positive and not 1, got {scalar}")
    log_b = float(np.log(scalar))
    if op is ScaleOperation.LOGARITHM:
        return (lambda x: np.log(x) / log_b), (lambda x: 1 / (x * log_b))
    if threshold is None or threshold <= 0:
        raise DomainError("Logarithm threshold must be positive")
    eps = threshold

    def log_with_threshold(x: FloatArray) -> FloatArray:
        return np.log(np.maximum(x, eps)) / log_b

    def derivative(x: FloatArray) -> FloatArray:
        return np.where(x < eps, 0.0, 1 / (np.maximum(x, eps) * log_b))

    return log_with_threshold, derivative


def apply_scale(
    op: ScaleOperation, values: FloatArray, scalar: float, threshold: float | None = None
) -> FloatArray:
    """Apply a scale operation to raw values (samples or point masses)."""
    fn, _ = scale_functions(op, scalar, threshold)
    with np.errstate(all="ignore"):
        out = np.asarray(fn(values), dtype=np.float64)
    if not np.all(np.isfinite(out)):
        raise DomainError(f"Scale operation {op} returned non-finite values")
    return out


__all__ = ["ALGEBRAIC_FUNCTIONS", "apply_algebraic", "scale_functions", "apply_scale"]
