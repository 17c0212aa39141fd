"""
Helpers answering editor questions about a parsed program.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.ast.nodes import (
    Array,
    DecoratedStatement,
    Dict,
    Expression,
    Identifier,
    KeyValue,
    Node,
    Program,
    String,
    statement_variable,
)
from squiggle_core.value.path import PathItem, PathRoot, ValuePath


def _statement_value(statement: Node) -> Node:
    while isinstance(statement, DecoratedStatement):
        statement = statement.statement
    return statement.value  # type: ignore[attr-defined]


def _dict_entry(node: Dict, key: object) -> Node | None:
    for element in node.elements:
        if isinstance(element, Identifier) and element.value == key:
            return element
        if isinstance(element, KeyValue) and isinstance(element.key, String):
            if element.key.value == key:
                return element.value
    return None


def _descend(node: Node, path: ValuePath, offset: int) -> tuple[ValuePath, Node]:
    if isinstance(node, Dict):
        for element in node.elements:
            if not element.location.contains(offset):
                continue
            if isinstance(element, Identifier):
                return path.extend(PathItem.from_string(element.value)), element
            if isinstance(element, KeyValue) and isinstance(element.key, String):
                return _descend(
                    element.value, path.extend(PathItem.from_string(element.key.value)), offset
                )
    if isinstance(node, Array):
        for index, item in enumerate(node.elements):
            if item.location.contains(offset):
                return _descend(item, path.extend(PathItem.from_number(index)), offset)
    return path, node


def find_path_by_offset(program: Program, offset: int) -> tuple[ValuePath, Node] | None:
    """
    Path of the value defined at ``offset`` together with its node.

    Top-level statements map to ``bindings.<name>`` and the final
    expression to ``result``; record and list literals are descended into
    as long as one of their entries contains the offset.
    """
    for statement in program.statements:
        if statement.location.contains(offset):
            name = statement_variable(statement).value
            path = ValuePath(PathRoot.BINDINGS, (PathItem.from_string(name),))
            return _descend(_statement_value(statement), path, offset)
    result: Expression | None = program.result
    if result is not None and result.location.contains(offset):
        return _descend(result, ValuePath(PathRoot.RESULT), offset)
    return None


def find_node_by_path(program: Program, path: ValuePath) -> Node | None:
    """Literal node that defines the value at ``path``, if the path is static."""
    node: Node | None = None
    items = list(path.items)
    if path.root is PathRoot.RESULT:
        node = program.result
    elif path.root in (PathRoot.BINDINGS, PathRoot.EXPORTS) and items:
        name = items.pop(0).value
        for statement in program.statements:
            if statement_variable(statement).value == name:
                node = _statement_value(statement)
    while node is not None and items:
        item = items.pop(0)
        if isinstance(node, Dict):
            node = _dict_entry(node, item.value)
        elif isinstance(node, Array) and isinstance(item.value, int):
            node = node.elements[item.value] if 0 <= item.value < len(node.elements) else None
        else:
            node = None
    return node


__all__ = ["find_path_by_offset", "find_node_by_path"]
