"""
Numeric approximation settings shared by every distribution conversion.

An :class:`Environment` is supplied by the caller for each evaluation and is
never mutated; sub-evaluations that need other settings receive a new one
built with :meth:`Environment.merge`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import hashlib
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

DEFAULT_SAMPLE_COUNT: int = 1000
"""Number of draws in a sample set built from another representation."""

DEFAULT_XY_POINT_LENGTH: int = 1000
"""Number of x points in a point set built from another representation."""


@dataclass(frozen=True, slots=True)
class Environment:
    """
    Run-wide numeric approximation settings.

    Parameters
    ----------
    sample_count : int, default 1000
        Size of sample sets produced by conversions and Monte Carlo
        combinations.
    xy_point_length : int, default 1000
        Grid resolution of point sets produced by conversions.
    seed : str or int or None, default None
        Seed of the random generator. ``None`` draws fresh OS entropy.

    Raises
    ------
    ValueError
        If ``sample_count`` or ``xy_point_length`` is not a positive integer.
    """

    sample_count: int = DEFAULT_SAMPLE_COUNT
    xy_point_length: int = DEFAULT_XY_POINT_LENGTH
    seed: str | int | None = None

    def __post_init__(self) -> None:
        for name in ("sample_count", "xy_point_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def merge(self, **changes: Any) -> Environment:
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    def make_rng(self) -> np.random.Generator:
        """
        Build a random generator for one evaluation.

        String seeds are hashed so that equal strings give equal streams.
        """
        if self.seed is None:
            return np.random.default_rng()
        if isinstance(self.seed, str):
            digest = hashlib.sha256(self.seed.encode("utf-8")).digest()
            return np.random.default_rng(int.from_bytes(digest[:8], "little"))
        return np.random.default_rng(self.seed)


default_environment = Environment()
"""Environment used when the caller does not supply one."""


__all__ = [
    "DEFAULT_SAMPLE_COUNT",
    "DEFAULT_XY_POINT_LENGTH",
    "Environment",
    "default_environment",
]
