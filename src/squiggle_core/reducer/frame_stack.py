"""
Call frames recorded while the reducer runs user and built-in functions.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass

from squiggle_core.types import Location

MAX_STACK_DEPTH = 1000
"""Number of nested calls after which evaluation fails with a stack depth error."""

TOP_FRAME_NAME = "<top>"
"""Name of the frame of calls made outside any function."""


@dataclass(frozen=True, slots=True)
class Frame:
    """
    One active call.

    Parameters
    ----------
    name : str
        Name of the calling function, :data:`TOP_FRAME_NAME` for calls made
        outside any function.
    location : Location, optional
        Call site, ``None`` for calls made by built-ins.
    """

    name: str
    location: Location | None = None

    def to_string(self) -> str:
        if self.location is None:
            return self.name
        return f"{self.name} at {self.location}"


class FrameStack:
    """Stack of active frames; :meth:`snapshot` freezes it for error reports."""

    __slots__ = ("_frames",)

    def __init__(self, frames: tuple[Frame, ...] | list[Frame] = ()) -> None:
        self._frames: list[Frame] = list(frames)

    def __len__(self) -> int:
        return len(self._frames)

    def is_empty(self) -> bool:
        return not self._frames

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def pop(self) -> Frame:
        return self._frames.pop()

    @property
    def frames(self) -> tuple[Frame, ...]:
        """Frames from outermost to innermost."""
        return tuple(self._frames)

    def snapshot(self) -> FrameStack:
        return FrameStack(self._frames)

    def top_location(self) -> Location | None:
        """Location of the innermost frame that has one."""
        for frame in reversed(self._frames):
            if frame.location is not None:
                return frame.location
        return None

    def to_string(self) -> str:
        """One line per frame, innermost first."""
        return "\n".join(frame.to_string() for frame in reversed(self._frames))

    def __repr__(self) -> str:
        return f"FrameStack({self._frames!r})"


__all__ = ["MAX_STACK_DEPTH", "TOP_FRAME_NAME", "Frame", "FrameStack"]
