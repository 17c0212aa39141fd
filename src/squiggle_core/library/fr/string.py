"""
String namespace.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import make_definition
from squiggle_core.library.fr.common import to_string
from squiggle_core.library.frtypes import fr_any, fr_array, fr_number, fr_string

maker = FnFactory(namespace="String", requires_namespace=True)


def _split(text: str, separator: str) -> list[str]:
    if not separator:
        return list(text)
    return text.split(separator)


library = [
    maker.make(
        "make",
        [make_definition([fr_any()], fr_string, to_string)],
        description="Convert any value to a string.",
    ),
    maker.make(
        "concat",
        [
            make_definition([fr_string, fr_string], fr_string, lambda a, b: a + b),
            make_definition([fr_string, fr_any()], fr_string, lambda a, b: a + to_string(b)),
        ],
    ),
    maker.make(
        "split",
        [make_definition([fr_string, fr_string], fr_array(fr_string), _split)],
    ),
    maker.make("length", [make_definition([fr_string], fr_number, len)]),
    maker.make_string_to_string("toUpperCase", str.upper),
    maker.make_string_to_string("toLowerCase", str.lower),
]

__all__ = ["library"]
