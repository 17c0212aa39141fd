"""
Where a wrapped value lives: its source, its path and its syntax node.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field, replace

from squiggle_core.ast.nodes import Program
from squiggle_core.ast.utils import find_node_by_path
from squiggle_core.types import Location
from squiggle_core.value.path import PathItem, ValuePath


@dataclass(frozen=True, slots=True)
class SqValueContext:
    """
    Parameters
    ----------
    source_id : str
        Source the value was computed from.
    path : ValuePath
        Path of the value inside the results of that source.
    program : Program, optional
        Parsed source, used to locate the value in the text.
    """

    source_id: str
    path: ValuePath
    program: Program | None = field(default=None, compare=False, repr=False)

    def extend(self, item: PathItem) -> SqValueContext:
        return replace(self, path=self.path.extend(item))

    @property
    def location(self) -> Location | None:
        """Location of the literal defining the value, when there is one."""
        if self.program is None:
            return None
        node = find_node_by_path(self.program, self.path)
        return None if node is None else node.location


__all__ = ["SqValueContext"]
