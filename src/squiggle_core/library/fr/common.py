"""
Functions available everywhere: type inspection, equality and failures.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging

from squiggle_core.errors import UserError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import make_definition
from squiggle_core.library.frtypes import fr_any, fr_bool, fr_optional, fr_string, fr_void
from squiggle_core.value.values import Value, VString

logger = logging.getLogger(__name__)

maker = FnFactory(namespace="Common", requires_namespace=False)


def to_string(value: Value) -> str:
    """Display text of a value; strings are not quoted."""
    if isinstance(value, VString):
        return value.value
    return str(value)


def _inspect(value: Value, label: str | None) -> Value:
    if label is None:
        logger.info("inspect: %s", value)
    else:
        logger.info("inspect %s: %s", label, value)
    return value


def _throw(message: str | None) -> Value:
    raise UserError(message if message is not None else "Error")


def _assert(condition: bool, message: str | None) -> None:
    if not condition:
        raise UserError(message if message is not None else "Assertion failed")


library = [
    maker.make(
        "typeOf",
        [make_definition([fr_any()], fr_string, lambda value: value.public_name)],
        description="Name of the type of a value.",
        examples=["typeOf(5) // Number"],
    ),
    maker.make(
        "toString",
        [make_definition([fr_any()], fr_string, to_string)],
    ),
    maker.make(
        "inspect",
        [make_definition([fr_any(), fr_optional(fr_string)], fr_any(), _inspect)],
        description="Log a value and return it unchanged.",
    ),
    maker.make(
        "throw",
        [make_definition([fr_optional(fr_string)], fr_any(), _throw)],
        description="Fail with a user error.",
        examples=['throw("Not implemented")'],
    ),
    maker.make(
        "assert",
        [make_definition([fr_bool, fr_optional(fr_string)], fr_void, _assert)],
        description="Fail with a user error unless the condition holds.",
    ),
    maker.make(
        "equal",
        [make_definition([fr_any(), fr_any()], fr_bool, lambda a, b: a.is_equal(b))],
    ),
    maker.make(
        "unequal",
        [make_definition([fr_any(), fr_any()], fr_bool, lambda a, b: not a.is_equal(b))],
    ),
]

__all__ = ["library", "to_string"]
