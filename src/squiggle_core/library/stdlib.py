"""
The standard library.

The registry is built lazily on first access and shared by every project
that does not set its own; tests reset it with :func:`reset_std_lib`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache

from squiggle_core.library.fn_definition import FRFunction
from squiggle_core.library.fr import MODULES
from squiggle_core.library.registry import Registry
from squiggle_core.reducer.bindings import Namespace
from squiggle_core.value.values import Value

logger = logging.getLogger(__name__)


def all_functions() -> list[FRFunction]:
    """Functions of every library module, in registration order."""
    functions: list[FRFunction] = []
    for module in MODULES:
        functions.extend(module.library)
    return functions


def all_constants() -> dict[str, Value]:
    constants: dict[str, Value] = {}
    for module in MODULES:
        constants.update(getattr(module, "constants", {}))
    return constants


def make_registry(
    extra_functions: Iterable[FRFunction] = (),
    extra_constants: Mapping[str, Value] | None = None,
) -> Registry:
    """
    Build a fresh registry of the standard library.

    Parameters
    ----------
    extra_functions : iterable of FRFunction
        Functions registered after the standard ones; a function sharing a
        qualified name with a standard one adds its definitions to it.
    extra_constants : mapping, optional
        Additional constants.
    """
    constants = all_constants()
    constants.update(extra_constants or {})
    registry = Registry(all_functions(), constants)
    for fn in extra_functions:
        registry.register(fn)
    logger.debug("Built registry with %d names", len(registry.namespace()))
    return registry


@lru_cache(maxsize=1)
def registry() -> Registry:
    """Shared registry of the standard library."""
    return make_registry()


def std_lib() -> Namespace:
    """Namespace of the shared registry, the scope every program starts in."""
    return registry().namespace()


def reset_std_lib() -> None:
    """Drop the shared registry; the next access rebuilds it."""
    registry.cache_clear()


__all__ = [
    "all_functions",
    "all_constants",
    "make_registry",
    "registry",
    "std_lib",
    "reset_std_lib",
]
