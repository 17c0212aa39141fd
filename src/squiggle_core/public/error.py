"""
Errors as seen by hosts.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.errors import ErrorWithStack, OtherError, ParseError, SquiggleError
from squiggle_core.reducer.frame_stack import Frame
from squiggle_core.types import Location


class SqError:
    """
    Failure of a parse, link or run, stored in project results.

    Parameters
    ----------
    error : SquiggleError
        Underlying engine error, usually an :class:`ErrorWithStack`.
    """

    __slots__ = ("error",)

    def __init__(self, error: SquiggleError) -> None:
        self.error = error

    @classmethod
    def create_other_error(cls, message: str) -> SqError:
        return cls(OtherError(message))

    @property
    def inner(self) -> SquiggleError:
        """Engine error without its stack."""
        if isinstance(self.error, ErrorWithStack):
            return self.error.error
        return self.error

    @property
    def kind(self) -> str:
        return self.inner.kind

    @property
    def message(self) -> str:
        return self.inner.message

    @property
    def location(self) -> Location | None:
        if isinstance(self.error, (ErrorWithStack, ParseError)):
            return self.error.location
        return None

    def frames(self) -> list[Frame]:
        """Frames active at the failure, innermost first."""
        if isinstance(self.error, ErrorWithStack):
            return list(reversed(self.error.frame_stack.frames))
        return []

    def to_string(self) -> str:
        return str(self.inner)

    def to_string_with_stack_trace(self) -> str:
        if isinstance(self.error, ErrorWithStack):
            return self.error.to_string_with_stack_trace()
        return str(self.error)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"SqError({self.kind}: {self.message!r})"


__all__ = ["SqError"]
