"""
Value paths: addresses of nested values inside a run output.

A path starts at a root (the result, the bindings, the imports or the
exports of a source) and descends through dict keys, array indices and
host-specific items (calculators, table cells).
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from squiggle_core.value.values import Value, VArray, VDict, VLambda


class PathRoot(StrEnum):
    RESULT = "result"
    BINDINGS = "bindings"
    IMPORTS = "imports"
    EXPORTS = "exports"


class PathItemType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    CALCULATOR = "calculator"
    CELL_ADDRESS = "cellAddress"


@dataclass(frozen=True, slots=True)
class PathItem:
    """
    One step of a :class:`ValuePath`.

    ``value`` is the key for string items, the index for number items, a
    ``(row, column)`` pair for cell addresses and ``None`` for calculators.
    """

    type: PathItemType
    value: str | int | tuple[int, int] | None = None

    @classmethod
    def from_string(cls, key: str) -> PathItem:
        return cls(PathItemType.STRING, key)

    @classmethod
    def from_number(cls, index: int) -> PathItem:
        return cls(PathItemType.NUMBER, index)

    @classmethod
    def from_calculator(cls) -> PathItem:
        return cls(PathItemType.CALCULATOR)

    @classmethod
    def from_cell_address(cls, row: int, column: int) -> PathItem:
        return cls(PathItemType.CELL_ADDRESS, (row, column))

    def to_json(self) -> dict[str, Any]:
        if self.type is PathItemType.CALCULATOR:
            return {"type": self.type.value}
        if self.type is PathItemType.CELL_ADDRESS:
            assert isinstance(self.value, tuple)
            row, column = self.value
            return {"type": self.type.value, "value": {"row": row, "column": column}}
        return {"type": self.type.value, "value": self.value}

    @classmethod
    def from_json(cls, data: Any) -> PathItem:
        """
        Raises
        ------
        ValueError
            If ``data`` does not describe a path item.
        """
        if not isinstance(data, dict) or "type" not in data:
            raise ValueError(f"Invalid path item: {data!r}")
        item_type = PathItemType(data["type"])
        if item_type is PathItemType.CALCULATOR:
            return cls.from_calculator()
        value = data.get("value")
        if item_type is PathItemType.CELL_ADDRESS:
            if not isinstance(value, dict):
                raise ValueError(f"Invalid cell address: {value!r}")
            return cls.from_cell_address(int(value["row"]), int(value["column"]))
        if item_type is PathItemType.NUMBER and isinstance(value, int):
            return cls.from_number(value)
        if item_type is PathItemType.STRING and isinstance(value, str):
            return cls.from_string(value)
        raise ValueError(f"Invalid {item_type} path item value: {value!r}")

    def __str__(self) -> str:
        if self.type is PathItemType.STRING:
            return f".{self.value}"
        if self.type is PathItemType.NUMBER:
            return f"[{self.value}]"
        if self.type is PathItemType.CALCULATOR:
            return "(calculator)"
        return f"(cell {self.value})"


@dataclass(frozen=True, slots=True)
class ValuePath:
    """Root plus the items leading to a nested value."""

    root: PathRoot
    items: tuple[PathItem, ...] = ()

    def extend(self, item: PathItem) -> ValuePath:
        return ValuePath(self.root, (*self.items, item))

    def is_root(self) -> bool:
        return not self.items

    def is_equal(self, other: ValuePath) -> bool:
        return self == other

    def contains(self, other: ValuePath) -> bool:
        """Whether ``other`` is this path or one of its prefixes."""
        if self.root is not other.root or len(other.items) > len(self.items):
            return False
        return self.items[: len(other.items)] == other.items

    def serialize_to_string(self) -> str:
        return json.dumps({"root": self.root.value, "items": [i.to_json() for i in self.items]})

    @classmethod
    def deserialize(cls, text: str) -> ValuePath:
        """
        Raises
        ------
        ValueError
            If ``text`` is not a serialized path.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid serialized path: {text!r}") from exc
        if not isinstance(data, dict) or "root" not in data:
            raise ValueError(f"Invalid serialized path: {text!r}")
        items = data.get("items", [])
        if not isinstance(items, list):
            raise ValueError(f"Invalid serialized path items: {items!r}")
        return cls(PathRoot(data["root"]), tuple(PathItem.from_json(i) for i in items))

    def __str__(self) -> str:
        return self.root.value + "".join(str(item) for item in self.items)


def lookup_item(value: Value, item: PathItem) -> Value | None:
    """
    Child of ``value`` addressed by ``item``, or ``None``.

    Calculator items address the function itself.
    """
    if item.type is PathItemType.STRING and isinstance(value, VDict):
        assert isinstance(item.value, str)
        return value.get(item.value)
    if item.type is PathItemType.NUMBER and isinstance(value, VArray):
        assert isinstance(item.value, int)
        if 0 <= item.value < len(value.value):
            return value.value[item.value]
        return None
    if item.type is PathItemType.CALCULATOR and isinstance(value, VLambda):
        return value
    return None


__all__ = ["PathRoot", "PathItemType", "PathItem", "ValuePath", "lookup_item"]
