"""
Scale namespace: plot scales attached to values with ``Tag.scale``-style
hints or returned directly.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import FRFunction, make_definition
from squiggle_core.library.frtypes import fr_dict, fr_number, fr_optional, fr_scale, fr_string
from squiggle_core.value.scale import Scale, ScaleType

maker = FnFactory(namespace="Scale", requires_namespace=True)

_BOUNDS = (
    ("min", fr_optional(fr_number)),
    ("max", fr_optional(fr_number)),
    ("tickFormat", fr_optional(fr_string)),
)


def _scale(scale_type: ScaleType, options: dict[str, Any] | None) -> Scale:
    options = options or {}
    return Scale.make(
        scale_type,
        min=options.get("min"),
        max=options.get("max"),
        tick_format=options.get("tickFormat"),
        exponent=options.get("exponent"),
    )


def _make_scale(scale_type: ScaleType, description: str) -> FRFunction:
    return maker.make(
        scale_type.value,
        [
            make_definition(
                [fr_optional(fr_dict(*_BOUNDS))],
                fr_scale,
                lambda options: _scale(scale_type, options),
            )
        ],
        description=description,
    )


library = [
    _make_scale(ScaleType.LINEAR, "Linear scale."),
    _make_scale(ScaleType.LOG, "Logarithmic scale; min must be positive."),
    _make_scale(ScaleType.SYMLOG, "Symmetric log scale."),
    maker.make(
        "power",
        [
            make_definition(
                [fr_dict(*_BOUNDS, ("exponent", fr_number))],
                fr_scale,
                lambda options: _scale(ScaleType.POWER, options),
            )
        ],
        description="Power scale with a required exponent.",
    ),
]

__all__ = ["library"]
