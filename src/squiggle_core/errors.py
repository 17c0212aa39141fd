"""
Error Taxonomy
==============

Every failure the engine can report is a subclass of :class:`SquiggleError`.
The reducer and the distribution engine raise them; the project layer catches
them at the per-source boundary and stores them as ``Err`` results.

- :class:`ParseError`: malformed syntax, carries a location.
- :class:`CompileError`: import cycles, missing dependencies, ambiguous calls.
- :class:`ArgumentError`: built-in called with mismatching arguments.
- :class:`BindingError`: unbound identifier.
- :class:`UserError`: explicit ``throw`` or failed assertion.
- :class:`DomainError`: out-of-domain input to a distribution operation.
- :class:`InternalError`: broken invariant, signals an implementation bug.
- :class:`ErrorWithStack`: any of the above paired with the call stack.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from squiggle_core.reducer.frame_stack import FrameStack
    from squiggle_core.types import Location


class SquiggleError(Exception):
    """
    Base class of all engine errors.

    Parameters
    ----------
    message : str
        Human-readable description.
    """

    kind: ClassVar[str] = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(SquiggleError):
    """Raised by the tokenizer and the parser."""

    kind = "ParseError"

    def __init__(self, message: str, location: Location) -> None:
        super().__init__(message)
        self.location = location

    def __str__(self) -> str:
        return f"{self.message} ({self.location})"


class CompileError(SquiggleError):
    """Raised for project-level linking failures and ambiguous names."""

    kind = "CompileError"


class ArgumentError(SquiggleError):
    """Raised when a call does not match any signature of the callee."""

    kind = "ArgumentError"


class BindingError(SquiggleError):
    """Raised when an identifier is not bound in the current scope."""

    kind = "BindingError"

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is not defined")
        self.name = name


class UserError(SquiggleError):
    """Raised by ``throw`` and failed ``assert`` calls in user code."""

    kind = "UserError"


class DomainError(SquiggleError):
    """Raised when a distribution or scale operation gets an out-of-domain input."""

    kind = "DomainError"


class InternalError(SquiggleError):
    """Raised when an engine invariant does not hold."""

    kind = "InternalError"


class NeedToRunError(SquiggleError):
    """Raised when a result is requested for a source that has not been run."""

    kind = "NeedToRunError"

    def __init__(self) -> None:
        super().__init__("Need to run")


class StackDepthError(SquiggleError):
    """Raised when the call stack grows past the configured depth."""

    kind = "StackDepthError"

    def __init__(self, depth: int) -> None:
        super().__init__(f"Stack depth exceeded ({depth} frames)")
        self.depth = depth


class OtherError(SquiggleError):
    """Catch-all for failures without a more specific class."""

    kind = "OtherError"


class ErrorWithStack(SquiggleError):
    """
    Engine error annotated with the frame stack active when it was raised.

    Parameters
    ----------
    error : SquiggleError
        Original error.
    frame_stack : FrameStack
        Snapshot of the call stack.
    location : Location, optional
        Location of the expression that failed; defaults to the location of
        the innermost frame.
    """

    kind = "RuntimeError"

    def __init__(
        self, error: SquiggleError, frame_stack: FrameStack, location: Location | None = None
    ) -> None:
        super().__init__(error.message)
        self.error = error
        self.frame_stack = frame_stack
        self._location = location

    @property
    def location(self) -> Location | None:
        if self._location is not None:
            return self._location
        return self.frame_stack.top_location()

    def to_string_with_stack_trace(self) -> str:
        """Render the message followed by one ``Stack trace`` line per frame."""
        trace = self.frame_stack.to_string()
        if not trace:
            return str(self.error)
        return f"{self.error}\nStack trace:\n{trace}"

    def __str__(self) -> str:
        return str(self.error)


def wrap_with_stack(
    exc: BaseException, frame_stack: FrameStack, location: Location | None = None
) -> ErrorWithStack:
    """
    Attach ``frame_stack`` to ``exc`` unless it already carries a stack.

    Python exceptions that are not :class:`SquiggleError` become
    :class:`OtherError` so that a broken built-in never crashes a project run.
    """
    if isinstance(exc, ErrorWithStack):
        return exc
    if not isinstance(exc, SquiggleError):
        exc = OtherError(f"{type(exc).__name__}: {exc}")
    return ErrorWithStack(exc, frame_stack, location)


__all__ = [
    "SquiggleError",
    "ParseError",
    "CompileError",
    "ArgumentError",
    "BindingError",
    "UserError",
    "DomainError",
    "InternalError",
    "NeedToRunError",
    "StackDepthError",
    "OtherError",
    "ErrorWithStack",
    "wrap_with_stack",
]
