"""
Plot scales: how a host should map numbers onto an axis.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from enum import StrEnum

from squiggle_core.errors import DomainError


class ScaleType(StrEnum):
    LINEAR = "linear"
    LOG = "log"
    SYMLOG = "symlog"
    POWER = "power"


@dataclass(frozen=True, slots=True)
class Scale:
    """
    Axis scale with optional bounds.

    Parameters
    ----------
    type : ScaleType
        Mapping kind.
    min, max : float, optional
        Axis bounds; when both are given ``min < max``.
    tick_format : str, optional
        d3-style tick format string.
    exponent : float, optional
        Exponent of a power scale.
    """

    type: ScaleType
    min: float | None = None
    max: float | None = None
    tick_format: str | None = None
    exponent: float | None = None

    @classmethod
    def make(
        cls,
        type: ScaleType,
        min: float | None = None,
        max: float | None = None,
        tick_format: str | None = None,
        exponent: float | None = None,
    ) -> Scale:
        """
        Validate the bounds and build a scale.

        Raises
        ------
        DomainError
            If a log scale has ``min <= 0``, ``max <= min``, or a power
            scale has no exponent.
        """
        if type is ScaleType.LOG and min is not None and min <= 0:
            raise DomainError(f"Min must be over 0 for log scale, got: {min}")
        if min is not None and max is not None and max <= min:
            raise DomainError(f"Max must be greater than min, got: min={min}, max={max}")
        if type is ScaleType.POWER and exponent is None:
            raise DomainError("Power scale requires an exponent")
        return cls(type, min, max, tick_format, exponent)

    def params(self) -> dict[str, float | str]:
        """Set options keyed by their language names."""
        items = {
            "min": self.min,
            "max": self.max,
            "tickFormat": self.tick_format,
            "exponent": self.exponent,
        }
        return {key: value for key, value in items.items() if value is not None}

    def __str__(self) -> str:
        label = f"{self.type.value.capitalize()} scale"
        params = self.params()
        if not params:
            return label
        inner = ", ".join(f"{key}: {value}" for key, value in params.items())
        return f"{label} ({inner})"


__all__ = ["ScaleType", "Scale"]
