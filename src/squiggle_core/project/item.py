"""
Per-source state of a project.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from squiggle_core.ast.nodes import Program
from squiggle_core.ast.parser import parse
from squiggle_core.dists.environment import Environment
from squiggle_core.errors import CompileError, SquiggleError
from squiggle_core.library.registry import Registry
from squiggle_core.project.resolver import Resolver
from squiggle_core.public.error import SqError
from squiggle_core.reducer.bindings import Namespace
from squiggle_core.reducer.reducer import RunOutput, evaluate_program
from squiggle_core.result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImportBinding:
    """Resolved ``import "specifier" as variable``."""

    source_id: str
    variable: str


class ProjectItem:
    """
    One source with its cached parse, imports and run output.

    Caches are cleared, never recomputed, by the mutators; the project
    decides when to parse and run.

    Parameters
    ----------
    source_id : str
        Id of the source inside the project.
    source : str
        Source text.
    """

    def __init__(self, source_id: str, source: str) -> None:
        self.source_id = source_id
        self.source = source
        self.continues: tuple[str, ...] = ()
        self.ast: Result[Program, SqError] | None = None
        self.imports: Result[list[ImportBinding], SqError] | None = None
        self.output: Result[RunOutput, SqError] | None = None

    def set_source(self, source: str) -> None:
        self.source = source
        self.ast = None
        self.imports = None
        self.clean()

    def touch_source(self) -> None:
        self.clean()

    def set_continues(self, continues: Sequence[str]) -> None:
        self.continues = tuple(continues)
        self.clean()

    def clean(self) -> None:
        """Drop the run output; the parse stays cached."""
        self.output = None

    def parse(self) -> Result[Program, SqError]:
        if self.ast is None:
            try:
                self.ast = Ok(parse(self.source, self.source_id))
            except SquiggleError as exc:
                logger.debug("Failed to parse %s: %s", self.source_id, exc)
                self.ast = Err(SqError(exc))
        return self.ast

    def parse_imports(self, resolver: Resolver | None) -> Result[list[ImportBinding], SqError]:
        """
        Resolve the imports of the source.

        Without a resolver any import is a :class:`CompileError`.
        """
        if self.imports is not None:
            return self.imports
        ast = self.parse()
        if isinstance(ast, Err):
            self.imports = ast
            return ast
        bindings: list[ImportBinding] = []
        try:
            for node in ast.value.imports:
                if resolver is None:
                    raise CompileError("Imports are not supported without a resolver")
                source_id = resolver.resolve(node.path.value, self.source_id)
                bindings.append(ImportBinding(source_id, node.variable.value))
        except SquiggleError as exc:
            self.imports = Err(SqError(exc))
        else:
            self.imports = Ok(bindings)
        return self.imports

    def get_import_ids(self) -> list[str]:
        if isinstance(self.imports, Ok):
            return [binding.source_id for binding in self.imports.value]
        return []

    def get_dependencies(self) -> list[str]:
        """Continued sources first, then imported ones."""
        return list(dict.fromkeys([*self.continues, *self.get_import_ids()]))

    def fail_run(self, error: SqError) -> None:
        self.output = Err(error)

    def run(
        self, namespace: Namespace, environment: Environment, registry: Registry | None
    ) -> None:
        """Evaluate the source on top of ``namespace`` and cache the output."""
        ast = self.parse()
        if isinstance(ast, Err):
            self.output = ast
            return
        try:
            self.output = Ok(evaluate_program(ast.value, namespace, environment, registry))
        except SquiggleError as exc:
            logger.debug("Run of %s failed: %s", self.source_id, exc)
            self.output = Err(SqError(exc))


__all__ = ["ImportBinding", "ProjectItem"]
