"""
Symbolic Distributions
======================

Closed-form distribution families with analytic statistics.

A family is a frozen dataclass deriving from :class:`SymbolicDist` and
decorated with :func:`symbolic_family`. Parameter constraints are instance
predicates marked with :func:`constraint`; :meth:`SymbolicDist.make`
constructs an instance and validates every constraint.

Continuous families delegate densities, quantiles and sampling to a frozen
``scipy.stats`` distribution returned by :meth:`SymbolicDist.frozen`.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, Any, ClassVar, ParamSpec, Self

import numpy as np

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.environment import default_environment
from squiggle_core.dists.point_set import ContinuousShape, PointSetDist
from squiggle_core.errors import DomainError
from squiggle_core.types import DistributionTag, FloatArray, Kind

if TYPE_CHECKING:
    from scipy.stats._distn_infrastructure import rv_continuous_frozen

    from squiggle_core.dists.environment import Environment
    from squiggle_core.dists.sample_set import SampleSetDist

MIN_QUANTILE = 0.0001
"""Lower quantile bounding the grid of a converted symbolic distribution."""

MAX_QUANTILE = 0.9999
"""Upper quantile bounding the grid of a converted symbolic distribution."""


@dataclass(slots=True, frozen=True)
class SymbolicConstraint:
    """
    Constraint on the parameters of a family.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Predicate returning ``True`` when the constraint holds.
    """

    description: str
    check: Callable[[Any], bool]


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Mark an instance method of a family as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description used in the error message.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type) -> list[SymbolicConstraint]:
    found: list[SymbolicConstraint] = []
    for name, attr in cls.__dict__.items():
        if isinstance(attr, staticmethod | classmethod):
            if getattr(attr.__func__, "__is_constraint", False):
                raise TypeError(f"@constraint '{name}' must be an instance method")
            continue
        if isfunction(attr) and getattr(attr, "__is_constraint", False):
            desc = getattr(attr, "__constraint_description", attr.__name__)
            found.append(SymbolicConstraint(description=desc, check=attr))
    return found


def symbolic_family[D: SymbolicDist](*, name: str) -> Callable[[type[D]], type[D]]:
    """
    Class decorator turning a :class:`SymbolicDist` subclass into a family.

    The class becomes a frozen slotted dataclass, receives its display
    ``name`` and the list of its :func:`constraint` methods.
    """

    def decorator(cls: type[D]) -> type[D]:
        constraints = _collect_constraints(cls)
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)
        cls.family_name = name
        cls._constraints = constraints
        return cls

    return decorator


def format_parameter(value: float) -> str:
    """Compact rendering of a parameter, ``5`` rather than ``5.0``."""
    return f"{value:g}" if math.isfinite(value) else str(value)


class SymbolicDist(BaseDist):
    """Base class of closed-form families."""

    tag: ClassVar[DistributionTag] = DistributionTag.SYMBOLIC
    kind: ClassVar[Kind] = Kind.CONTINUOUS
    family_name: ClassVar[str] = "Symbolic"
    _constraints: ClassVar[list[SymbolicConstraint]] = []

    __slots__ = ()

    @classmethod
    def make(cls, *args: float) -> Self:
        """
        Construct and validate a family instance.

        Raises
        ------
        DomainError
            If a parameter is not finite or a constraint does not hold.
        """
        for value in args:
            if not math.isfinite(value):
                raise DomainError(f"{cls.family_name}: parameters must be finite, got {value}")
        dist = cls(*args)
        dist.validate()
        return dist

    @property
    def parameters(self) -> dict[str, float]:
        """Parameters as a dictionary, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    def validate(self) -> None:
        for item in self._constraints:
            if not item.check(self):
                raise DomainError(
                    f'{self.family_name}: constraint "{item.description}" does not hold'
                )

    @abstractmethod
    def frozen(self) -> rv_continuous_frozen:
        """Equivalent frozen ``scipy.stats`` distribution."""

    def mean(self) -> float:
        return float(self.frozen().mean())

    def variance(self) -> float:
        return float(self.frozen().var())

    def mode(self, env: Environment = default_environment) -> float:
        return self.to_point_set(env).mode()

    def min(self) -> float:
        return float(self.frozen().ppf(MIN_QUANTILE))

    def max(self) -> float:
        return float(self.frozen().ppf(MAX_QUANTILE))

    def cdf(self, x: float) -> float:
        return float(self.frozen().cdf(x))

    def pdf(self, x: float, env: Environment = default_environment) -> float:
        return float(self.frozen().pdf(x))

    def _inv(self, p: float) -> float:
        return float(self.frozen().ppf(p))

    def sample_n(self, n: int, rng: np.random.Generator) -> FloatArray:
        return np.asarray(self.frozen().rvs(size=n, random_state=rng), dtype=np.float64)

    def x_grid(self, n: int) -> FloatArray:
        """
        Grid of ``n`` points between :meth:`min` and :meth:`max`.

        Half of the points are spread evenly, the other half are quantiles,
        so both the body and the tails of the density are resolved.
        """
        lo, hi = self.min(), self.max()
        n_linear = max(n // 2, 2)
        n_quantile = max(n - n_linear, 2)
        linear = np.linspace(lo, hi, n_linear)
        quantiles = self.frozen().ppf(np.linspace(MIN_QUANTILE, MAX_QUANTILE, n_quantile))
        grid = np.unique(np.concatenate((linear, quantiles)))
        return grid[np.isfinite(grid)]

    def to_point_set(self, env: Environment) -> PointSetDist:
        xs = self.x_grid(env.xy_point_length)
        ys = np.asarray(self.frozen().pdf(xs), dtype=np.float64)
        ys = np.where(np.isfinite(ys), ys, 0.0)
        return PointSetDist(ContinuousShape.make(xs, ys))

    def to_sample_set(
        self, env: Environment, rng: np.random.Generator | None = None
    ) -> SampleSetDist:
        from squiggle_core.dists.sample_set import SampleSetDist

        rng = env.make_rng() if rng is None else rng
        return SampleSetDist(self.sample_n(env.sample_count, rng))

    def to_string(self) -> str:
        params = ",".join(format_parameter(v) for v in self.parameters.values())
        return f"{self.family_name}({params})"


__all__ = [
    "MIN_QUANTILE",
    "MAX_QUANTILE",
    "SymbolicConstraint",
    "constraint",
    "symbolic_family",
    "format_parameter",
    "SymbolicDist",
]
