"""
Registry of symbolic families, keyed by their display name.

The registry is built lazily on first access; tests reset it with
:func:`reset_symbolic_families`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from functools import lru_cache

from squiggle_core.dists.symbolic.base import SymbolicDist
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


class SymbolicFamilyRegister:
    """Mapping from family name to family class."""

    def __init__(self) -> None:
        self._families: dict[str, type[SymbolicDist]] = {}

    def register(self, family: type[SymbolicDist]) -> None:
        """
        Register ``family`` under its ``family_name``.

        Re-registering a name replaces the previous family and warns.
        """
        name = family.family_name
        if name in self._families and self._families[name] is not family:
            warnings.warn(
                f"Symbolic family '{name}' is already registered; replacing it",
                UserWarning,
                stacklevel=2,
            )
        self._families[name] = family

    def get(self, name: str) -> type[SymbolicDist]:
        """
        Raises
        ------
        KeyError
            If no family with the given name exists.
        """
        try:
            return self._families[name]
        except KeyError:
            raise KeyError(f"No symbolic family '{name}' found in register") from None

    def contains(self, name: str) -> bool:
        return name in self._families

    def names(self) -> list[str]:
        return sorted(self._families)


@lru_cache(maxsize=1)
def symbolic_families() -> SymbolicFamilyRegister:
    """Register of all built-in symbolic families."""
    register = SymbolicFamilyRegister()
    for family in (
        Normal,
        LogNormal,
        Uniform,
        Beta,
        Exponential,
        Cauchy,
        Triangular,
        Gamma,
        Logistic,
        PointMass,
        Bernoulli,
    ):
        register.register(family)
    return register


def reset_symbolic_families() -> None:
    """Reset the cached register (test helper)."""
    symbolic_families.cache_clear()


__all__ = ["SymbolicFamilyRegister", "symbolic_families", "reset_symbolic_families"]
