"""
Projects: sets of interdependent sources.

A source may *continue* other sources, seeing all their bindings, and may
*import* sources through a resolver, seeing their bindings as a record
bound to the import variable. The project runs sources in dependency order
and caches every outcome until an edit invalidates it.

Notes
-----
- ``run``, ``run_all`` and ``run_with_imports`` are coroutines that yield
  to the event loop between sources, never inside one.
- Outcomes are stored as :class:`~squiggle_core.result.Ok` or
  :class:`~squiggle_core.result.Err`; a failed source makes every source
  depending on it fail with the same error without being run.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from squiggle_core.ast.utils import find_path_by_offset
from squiggle_core.dists.environment import Environment, default_environment
from squiggle_core.errors import CompileError, NeedToRunError
from squiggle_core.library.registry import Registry
from squiggle_core.library.stdlib import registry as std_registry
from squiggle_core.project import topology
from squiggle_core.project.item import ProjectItem
from squiggle_core.project.resolver import Resolver
from squiggle_core.public.context import SqValueContext
from squiggle_core.public.error import SqError
from squiggle_core.public.values import SqDict, SqValue, wrap_value
from squiggle_core.reducer.bindings import Namespace
from squiggle_core.reducer.reducer import RunOutput
from squiggle_core.result import Err, Ok, Result
from squiggle_core.value.path import PathRoot, ValuePath
from squiggle_core.value.values import VDict, v_dict

logger = logging.getLogger(__name__)

type SourceLoader = Callable[[str], Awaitable[str]]


def _need_to_run() -> SqError:
    return SqError(NeedToRunError())


def _missing_dependency(source_id: str) -> SqError:
    return SqError(CompileError(f"Dependency {source_id} is missing"))


class Project:
    """
    Sources, their dependency graph and cached run outcomes.

    Parameters
    ----------
    resolver : Resolver, optional
        Import resolver; without one every import fails.
    environment : Environment, optional
        Settings of distribution conversions for all runs.
    registry : Registry, optional
        Function registry; the shared standard library by default.
    """

    def __init__(
        self,
        resolver: Resolver | None = None,
        environment: Environment = default_environment,
        registry: Registry | None = None,
    ) -> None:
        self._items: dict[str, ProjectItem] = {}
        self._resolver = resolver
        self._environment = environment
        self._registry = std_registry() if registry is None else registry
        self._std_lib: Namespace = self._registry.namespace()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_environment(self) -> Environment:
        return self._environment

    def set_environment(self, environment: Environment) -> None:
        """Use ``environment`` for later runs; cached outcomes are kept."""
        self._environment = environment

    def get_std_lib(self) -> Namespace:
        return self._std_lib

    def set_std_lib(self, namespace: Namespace) -> None:
        self._std_lib = namespace

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def _get_item(self, source_id: str) -> ProjectItem:
        try:
            return self._items[source_id]
        except KeyError:
            raise KeyError(f"Source {source_id} not found") from None

    def get_source_ids(self) -> list[str]:
        return list(self._items)

    def get_source(self, source_id: str) -> str | None:
        item = self._items.get(source_id)
        return None if item is None else item.source

    def set_source(self, source_id: str, source: str) -> None:
        """Add or replace a source; it and its dependents must run again."""
        if source_id in self._items:
            self._items[source_id].set_source(source)
        else:
            self._items[source_id] = ProjectItem(source_id, source)
        self._clean_dependents(source_id)

    def remove_source(self, source_id: str) -> None:
        self._clean_dependents(source_id)
        self._items.pop(source_id, None)

    def touch_source(self, source_id: str) -> None:
        """Force a source and its dependents to run again."""
        self._get_item(source_id).touch_source()
        self._clean_dependents(source_id)

    def get_continues(self, source_id: str) -> list[str]:
        return list(self._get_item(source_id).continues)

    def set_continues(self, source_id: str, continues: Sequence[str]) -> None:
        self._get_item(source_id).set_continues(continues)
        self._clean_dependents(source_id)

    def clean(self, source_id: str) -> None:
        self._get_item(source_id).clean()

    def clean_all(self) -> None:
        for item in self._items.values():
            item.clean()

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def get_dependencies(self, source_id: str) -> list[str]:
        """Sources that ``source_id`` continues or imports."""
        item = self._items.get(source_id)
        if item is None:
            return []
        item.parse_imports(self._resolver)
        return item.get_dependencies()

    def get_dependents(self, source_id: str) -> list[str]:
        """Sources depending on ``source_id``, directly or transitively."""
        return topology.dependents(self._items, self.get_dependencies, source_id)

    def get_import_ids(self, source_id: str) -> Result[list[str], SqError]:
        imports = self._get_item(source_id).parse_imports(self._resolver)
        return imports.map(lambda bindings: [binding.source_id for binding in bindings])

    def get_run_order(self) -> list[str]:
        """
        Raises
        ------
        CompileError
            If the sources import or continue each other in a cycle.
        """
        return topology.run_order(self._items, self.get_dependencies)

    def get_run_order_for(self, source_id: str) -> list[str]:
        """Run order of ``source_id`` and everything it depends on."""
        return topology.run_order([source_id], self.get_dependencies)

    def _clean_dependents(self, source_id: str) -> None:
        for dependent in self.get_dependents(source_id):
            self._items[dependent].clean()

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def _upstream_bindings(self, source_id: str) -> Result[VDict, SqError]:
        item = self._items.get(source_id)
        if item is None:
            return Err(_missing_dependency(source_id))
        if item.output is None:
            return Err(_need_to_run())
        return item.output.map(lambda output: output.bindings)

    def _link(self, item: ProjectItem) -> Result[Namespace, SqError]:
        """Standard library, then continued bindings, then imports as records."""
        namespace = self._std_lib
        for continue_id in item.continues:
            bindings = self._upstream_bindings(continue_id)
            if isinstance(bindings, Err):
                return bindings
            namespace = namespace.merge(bindings.value.value)

        imports = item.parse_imports(self._resolver)
        if isinstance(imports, Err):
            return imports
        for binding in imports.value:
            bindings = self._upstream_bindings(binding.source_id)
            if isinstance(bindings, Err):
                return bindings
            namespace = namespace.set(binding.variable, bindings.value)
        return Ok(namespace)

    def _link_and_run(self, item: ProjectItem) -> None:
        namespace = self._link(item)
        if isinstance(namespace, Err):
            item.fail_run(namespace.value)
            return
        logger.debug("Running %s", item.source_id)
        item.run(namespace.value, self._environment, self._registry)

    async def _run_ids(self, source_ids: Sequence[str]) -> None:
        for source_id in source_ids:
            item = self._items.get(source_id)
            if item is None:
                continue
            if item.output is not None:
                logger.debug("Skipping %s: already ran", source_id)
                continue
            self._link_and_run(item)
            await asyncio.sleep(0)

    async def run_all(self) -> None:
        await self._run_ids(self.get_run_order())

    async def run(self, source_id: str) -> None:
        """Run ``source_id`` after everything it depends on."""
        await self._run_ids(self.get_run_order_for(source_id))

    async def _load_imports(
        self, source_id: str, load_source: SourceLoader, active: list[str]
    ) -> None:
        if source_id in active:
            cycle = " -> ".join([*active[active.index(source_id) :], source_id])
            raise CompileError(f"Cyclic import {cycle}")
        active.append(source_id)
        imports = self._get_item(source_id).parse_imports(self._resolver)
        if isinstance(imports, Err):
            raise imports.value.error
        for binding in imports.value:
            if binding.source_id not in self._items:
                self.set_source(binding.source_id, await load_source(binding.source_id))
            await self._load_imports(binding.source_id, load_source, active)
        active.pop()

    async def run_with_imports(self, source_id: str, load_source: SourceLoader) -> None:
        """
        Load every source ``source_id`` imports, recursively, then run it.

        Parameters
        ----------
        source_id : str
            Source to run; it must already be in the project.
        load_source : callable
            Coroutine function returning the text of a source id.

        Raises
        ------
        CompileError
            If imports form a cycle.
        SquiggleError
            If a source cannot be parsed or an import cannot be resolved.
        """
        await self._load_imports(source_id, load_source, [])
        await self.run(source_id)

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    def get_output(self, source_id: str) -> Result[RunOutput, SqError]:
        output = self._get_item(source_id).output
        return Err(_need_to_run()) if output is None else output

    def _context(self, source_id: str, root: PathRoot) -> SqValueContext:
        ast = self._get_item(source_id).ast
        program = ast.value if isinstance(ast, Ok) else None
        return SqValueContext(source_id, ValuePath(root), program)

    def get_result(self, source_id: str) -> Result[SqValue, SqError]:
        context = self._context(source_id, PathRoot.RESULT)
        return self.get_output(source_id).map(lambda output: wrap_value(output.result, context))

    def _record(self, source_id: str, root: PathRoot, pick: Callable[[RunOutput], VDict]) -> SqDict:
        output = self._get_item(source_id).output
        record = pick(output.value) if isinstance(output, Ok) else v_dict({})
        return SqDict(record, self._context(source_id, root))

    def get_bindings(self, source_id: str) -> SqDict:
        """Names defined by the source; empty unless it ran successfully."""
        return self._record(source_id, PathRoot.BINDINGS, lambda output: output.bindings)

    def get_exports(self, source_id: str) -> SqDict:
        return self._record(source_id, PathRoot.EXPORTS, lambda output: output.exports)

    def find_value_location_by_offset(
        self, source_id: str, offset: int
    ) -> Result[SqValueContext, SqError]:
        """Context of the value whose definition contains ``offset``."""
        ast = self._get_item(source_id).parse()
        if isinstance(ast, Err):
            return ast
        found = find_path_by_offset(ast.value, offset)
        if found is None:
            return Err(SqError.create_other_error("Not found"))
        path, _ = found
        return Ok(SqValueContext(source_id, path, ast.value))


def evaluate(source: str) -> tuple[Result[SqValue, SqError], SqDict]:
    """
    Run ``source`` in a fresh project.

    Must not be called from a running event loop.

    Returns
    -------
    tuple
        The result and the bindings of the source.
    """
    project = Project()
    project.set_source("main", source)
    asyncio.run(project.run_all())
    return project.get_result("main"), project.get_bindings("main")


__all__ = ["Project", "SourceLoader", "evaluate"]
