"""
Import resolution.

A project without a resolver rejects every import.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from squiggle_core.errors import CompileError


@runtime_checkable
class Resolver(Protocol):
    """Maps an import specifier to the id of the source it names."""

    def resolve(self, specifier: str, from_id: str) -> str:
        """
        Parameters
        ----------
        specifier : str
            String literal of the ``import`` statement.
        from_id : str
            Id of the importing source.

        Raises
        ------
        CompileError
            If the specifier cannot be resolved.
        """
        ...


class IdentityResolver:
    """Specifiers are source ids."""

    def resolve(self, specifier: str, from_id: str) -> str:
        return specifier


class MappingResolver:
    """
    Resolves specifiers through a fixed table.

    Parameters
    ----------
    table : mapping
        Specifier to source id.
    """

    def __init__(self, table: Mapping[str, str]) -> None:
        self._table = dict(table)

    def resolve(self, specifier: str, from_id: str) -> str:
        try:
            return self._table[specifier]
        except KeyError:
            raise CompileError(f"Cannot resolve import {specifier!r} from {from_id}") from None


__all__ = ["Resolver", "IdentityResolver", "MappingResolver"]
