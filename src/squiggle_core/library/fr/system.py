"""
System namespace: facts about the running engine.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import make_definition
from squiggle_core.library.frtypes import fr_number, fr_string

if TYPE_CHECKING:
    from squiggle_core.reducer.reducer import Reducer

maker = FnFactory(namespace="System", requires_namespace=True)


def _version() -> str:
    from squiggle_core import __version__

    return __version__


def _sample_count(*, reducer: Reducer) -> int:
    return reducer.environment.sample_count


library = [
    maker.make(
        "version",
        [make_definition([], fr_string, _version)],
        description="Version of the engine.",
    ),
    maker.make(
        "sampleCount",
        [make_definition([], fr_number, _sample_count, uses_reducer=True)],
        description="Number of samples drawn by sample-based operations.",
    ),
]

__all__ = ["library"]
