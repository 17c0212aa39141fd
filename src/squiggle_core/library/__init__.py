"""
Function registry and standard library.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import (
    FnDefinition,
    FRFunction,
    make_assert_definition,
    make_definition,
)
from squiggle_core.library.registry import Registry
from squiggle_core.library.stdlib import make_registry, registry, reset_std_lib, std_lib

__all__ = [
    "FnFactory",
    "FnDefinition",
    "FRFunction",
    "make_definition",
    "make_assert_definition",
    "Registry",
    "make_registry",
    "registry",
    "reset_std_lib",
    "std_lib",
]
