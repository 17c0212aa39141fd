"""
Display and export metadata attached to values.

Tags never change what a value computes: a tagged value compares equal to
the untagged one. They only affect how hosts display or export it.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from squiggle_core.value.values import Value

TAG_KEYS: dict[str, str] = {
    "name": "name",
    "doc": "doc",
    "showAs": "show_as",
    "numberFormat": "number_format",
    "dateFormat": "date_format",
    "hidden": "hidden",
    "notebook": "notebook",
    "exportData": "export_data",
    "startOpenState": "start_open_state",
}
"""Language-level tag names mapped onto :class:`ValueTags` attributes."""


def _attribute_for(key: str) -> str:
    try:
        return TAG_KEYS[key]
    except KeyError:
        raise TypeError(
            f"Invalid ValueTagsTypeName: {key}. Must be one of {','.join(TAG_KEYS)}"
        ) from None


@dataclass(frozen=True, slots=True)
class ValueTags:
    """
    Optional metadata of a value.

    Every attribute holds a language value or ``None``; string-like tags
    hold a ``VString``, flags a ``VBool``, ``export_data`` a ``VDict``.
    """

    name: Value | None = None
    doc: Value | None = None
    show_as: Value | None = None
    number_format: Value | None = None
    date_format: Value | None = None
    hidden: Value | None = None
    notebook: Value | None = None
    export_data: Value | None = None
    start_open_state: Value | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Value]) -> ValueTags:
        """
        Build tags from language-level keys such as ``showAs``.

        Raises
        ------
        TypeError
            If a key is not a known tag name.
        """
        return cls(**{_attribute_for(key): value for key, value in mapping.items()})

    def to_list(self) -> list[tuple[str, Value]]:
        """Set tags as ``(key, value)`` pairs; empty names and docs are skipped."""
        result: list[tuple[str, Value]] = []
        for key, attr in TAG_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if attr in ("name", "doc") and not getattr(value, "value", None):
                continue
            if attr in ("hidden", "notebook") and not getattr(value, "value", False):
                continue
            result.append((key, value))
        return result

    def to_dict(self) -> dict[str, Value]:
        return dict(self.to_list())

    def is_empty(self) -> bool:
        return not self.to_list()

    def merge(self, other: ValueTags) -> ValueTags:
        """Shallow override: tags set in ``other`` replace those of ``self``."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)

    def omit(self, keys: Iterable[str]) -> ValueTags:
        """Drop the tags named by language-level ``keys``."""
        return replace(self, **{_attribute_for(key): None for key in keys})

    def omit_using_string_keys(self, keys: Iterable[str]) -> ValueTags:
        """
        Like :meth:`omit`, validating every key before dropping any.

        Raises
        ------
        TypeError
            If a key is not a known tag name.
        """
        attrs = [_attribute_for(key) for key in keys]
        return replace(self, **dict.fromkeys(attrs))

    def _text(self, attr: str) -> str | None:
        value = getattr(self, attr)
        return None if value is None else value.value

    def get_name(self) -> str | None:
        return self._text("name")

    def get_doc(self) -> str | None:
        return self._text("doc")

    def get_number_format(self) -> str | None:
        return self._text("number_format")

    def get_date_format(self) -> str | None:
        return self._text("date_format")

    def is_hidden(self) -> bool:
        return bool(self.hidden is not None and self.hidden.value)

    def is_notebook(self) -> bool:
        return bool(self.notebook is not None and self.notebook.value)

    def get_start_open_state(self) -> str | None:
        """``"open"`` or ``"closed"``; other strings are ignored."""
        state = self._text("start_open_state")
        return state if state in ("open", "closed") else None

    def __str__(self) -> str:
        return ", ".join(f"{key}: {value}" for key, value in self.to_list())


EMPTY_TAGS = ValueTags()


__all__ = ["TAG_KEYS", "ValueTags", "EMPTY_TAGS"]
