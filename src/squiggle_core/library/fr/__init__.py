"""
Standard library modules.

Each module exposes ``library``, the list of its functions, and optionally
``constants``, plain values bound by qualified name.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.library.fr import (
    builtin,
    common,
    date,
    dict,
    dist,
    list,
    number,
    scale,
    string,
    system,
    tag,
    units,
)

MODULES = (builtin, common, number, list, dict, string, dist, date, scale, tag, units, system)
"""Library modules in registration order; operators come first."""

__all__ = ["MODULES"]
