"""
Dependency graph of a project.

Edges run from a source to the sources it continues or imports. Run order
is a depth-first topological sort; a cycle is a :class:`CompileError`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Iterable

from squiggle_core.errors import CompileError

type DependencyFn = Callable[[str], Iterable[str]]


def _visit(
    source_id: str,
    dependencies: DependencyFn,
    order: list[str],
    done: set[str],
    active: list[str],
) -> None:
    if source_id in done:
        return
    if source_id in active:
        cycle = " -> ".join([*active[active.index(source_id) :], source_id])
        raise CompileError(f"Cyclic import {cycle}")
    active.append(source_id)
    for dependency in dependencies(source_id):
        _visit(dependency, dependencies, order, done, active)
    active.pop()
    done.add(source_id)
    order.append(source_id)


def run_order(source_ids: Iterable[str], dependencies: DependencyFn) -> list[str]:
    """
    Sources in an order where every source follows its dependencies.

    Raises
    ------
    CompileError
        If the dependency graph has a cycle.
    """
    order: list[str] = []
    done: set[str] = set()
    for source_id in source_ids:
        _visit(source_id, dependencies, order, done, [])
    return order


def dependents(
    source_ids: Iterable[str], dependencies: DependencyFn, target: str
) -> list[str]:
    """Sources depending on ``target``, directly or transitively."""
    reverse: dict[str, list[str]] = {}
    for source_id in source_ids:
        for dependency in dependencies(source_id):
            reverse.setdefault(dependency, []).append(source_id)
    found: list[str] = []
    pending = list(reverse.get(target, []))
    while pending:
        source_id = pending.pop()
        if source_id in found or source_id == target:
            continue
        found.append(source_id)
        pending.extend(reverse.get(source_id, []))
    return found


__all__ = ["run_order", "dependents"]
