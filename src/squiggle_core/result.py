"""
Result values returned across the project boundary.

Inside the engine failures are exceptions; a project stores the outcome of
each source run as ``Ok(value)`` or ``Err(error)`` so that callers never have
to catch anything to inspect a run.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome."""

    value: T
    ok: Literal[True] = True

    def map[U](self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome."""

    value: E
    ok: Literal[False] = False

    def map(self, fn: Callable[[object], object]) -> Err[E]:
        return self

    def unwrap(self) -> object:
        if isinstance(self.value, BaseException):
            raise self.value
        raise ValueError(f"Called unwrap() on Err({self.value!r})")


type Result[T, E] = Ok[T] | Err[E]


__all__ = ["Ok", "Err", "Result"]
