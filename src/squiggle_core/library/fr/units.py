"""
Unit suffixes of number literals: ``5k`` evaluates ``fromUnit_k(5)``.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.library.factory import FnFactory

maker = FnFactory(namespace="", requires_namespace=False)

UNIT_MULTIPLIERS: dict[str, float] = {
    "n": 1e-9,
    "m": 1e-3,
    "%": 1e-2,
    "k": 1e3,
    "M": 1e6,
    "B": 1e9,
    "G": 1e9,
    "T": 1e12,
    "P": 1e15,
}


def _scaled(multiplier: float):
    return lambda x: x * multiplier


library = [
    maker.make_number_to_number(
        f"fromUnit_{unit}", _scaled(multiplier), f"Multiply by {multiplier:g}."
    )
    for unit, multiplier in UNIT_MULTIPLIERS.items()
]

__all__ = ["UNIT_MULTIPLIERS", "library"]
