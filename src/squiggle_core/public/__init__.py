"""
Public wrappers around engine values and errors.

Wrapped values remember where they came from (source id, path and parsed
program), so that hosts can map any nested value back to its location.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.public.context import SqValueContext
from squiggle_core.public.error import SqError
from squiggle_core.public.values import *
from squiggle_core.public.values import __all__ as _values_all

__all__ = ["SqValueContext", "SqError", *_values_all]

del _values_all
