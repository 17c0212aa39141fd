"""
Shortcuts for declaring the functions of one library namespace.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence

from squiggle_core.library.fn_definition import FnDefinition, FRFunction, make_definition
from squiggle_core.library.frtypes import fr_array, fr_bool, fr_number, fr_string


class FnFactory:
    """
    Builds :class:`FRFunction` objects sharing a namespace.

    Parameters
    ----------
    namespace : str
        Namespace of every function made by the factory.
    requires_namespace : bool
        Default for whether functions are only reachable by qualified name.
    """

    def __init__(self, namespace: str, requires_namespace: bool) -> None:
        self.namespace = namespace
        self.requires_namespace = requires_namespace

    def make(
        self,
        name: str,
        definitions: Sequence[FnDefinition],
        *,
        description: str | None = None,
        examples: Sequence[str] = (),
        requires_namespace: bool | None = None,
    ) -> FRFunction:
        return FRFunction(
            name=name,
            namespace=self.namespace,
            requires_namespace=(
                self.requires_namespace if requires_namespace is None else requires_namespace
            ),
            definitions=tuple(definitions),
            description=description,
            examples=tuple(examples),
        )

    def make_number_to_number(
        self, name: str, fn: Callable[[float], float], description: str | None = None
    ) -> FRFunction:
        return self.make(
            name, [make_definition([fr_number], fr_number, fn)], description=description
        )

    def make_two_numbers_to_number(
        self, name: str, fn: Callable[[float, float], float], description: str | None = None
    ) -> FRFunction:
        return self.make(
            name, [make_definition([fr_number, fr_number], fr_number, fn)], description=description
        )

    def make_numbers_to_number(
        self, name: str, fn: Callable[[list[float]], float], description: str | None = None
    ) -> FRFunction:
        return self.make(
            name, [make_definition([fr_array(fr_number)], fr_number, fn)], description=description
        )

    def make_number_to_bool(
        self, name: str, fn: Callable[[float], bool], description: str | None = None
    ) -> FRFunction:
        return self.make(name, [make_definition([fr_number], fr_bool, fn)], description=description)

    def make_two_numbers_to_bool(
        self, name: str, fn: Callable[[float, float], bool], description: str | None = None
    ) -> FRFunction:
        return self.make(
            name, [make_definition([fr_number, fr_number], fr_bool, fn)], description=description
        )

    def make_two_bools_to_bool(
        self, name: str, fn: Callable[[bool, bool], bool], description: str | None = None
    ) -> FRFunction:
        return self.make(
            name, [make_definition([fr_bool, fr_bool], fr_bool, fn)], description=description
        )

    def make_string_to_string(
        self, name: str, fn: Callable[[str], str], description: str | None = None
    ) -> FRFunction:
        definition = make_definition([fr_string], fr_string, fn)
        return self.make(name, [definition], description=description)


__all__ = ["FnFactory"]
