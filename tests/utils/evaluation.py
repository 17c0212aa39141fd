"""
Helpers for running small programs in tests.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

from squiggle_core import SqError, SqValue, evaluate
from squiggle_core.result import Err, Ok


def run(source: str) -> SqValue:
    """Result of ``source``; fails the test if the evaluation fails."""
    result, _ = evaluate(source)
    if isinstance(result, Err):
        raise AssertionError(f"Evaluation failed: {result.value.to_string()}")
    return result.value


def run_js(source: str) -> Any:
    return run(source).as_js()


def run_error(source: str) -> SqError:
    """Error of ``source``; fails the test if the evaluation succeeds."""
    result, _ = evaluate(source)
    if isinstance(result, Ok):
        raise AssertionError(f"Expected an error, got {result.value}")
    return result.value
