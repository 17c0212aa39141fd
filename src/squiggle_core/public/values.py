"""
Host-facing wrappers of language values.

:func:`wrap_value` picks the wrapper class for a value. Wrappers of nested
values carry a :class:`SqValueContext` whose path extends their parent's,
so a host can map any displayed value back to its source.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Sequence
from datetime import timedelta
from typing import Any, ClassVar

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.environment import Environment, default_environment
from squiggle_core.dists.point_set import PointSetDist
from squiggle_core.dists.sample_set import SampleSetDist
from squiggle_core.dists.symbolic import SymbolicDist
from squiggle_core.errors import SquiggleError, StackDepthError
from squiggle_core.library.stdlib import registry
from squiggle_core.public.context import SqValueContext
from squiggle_core.public.error import SqError
from squiggle_core.reducer.frame_stack import MAX_STACK_DEPTH
from squiggle_core.reducer.reducer import Reducer
from squiggle_core.result import Err, Ok, Result
from squiggle_core.value.path import PathItem, ValuePath, lookup_item
from squiggle_core.value.tags import ValueTags
from squiggle_core.value.values import (
    Value,
    VArray,
    VBool,
    VDate,
    VDict,
    VDist,
    VDuration,
    VLambda,
    VNumber,
    VScale,
    VString,
    VVoid,
    v_lambda,
)


class SqValue:
    """
    Base wrapper.

    Parameters
    ----------
    value : Value
        Wrapped language value.
    context : SqValueContext, optional
        Origin of the value; ``None`` for values built outside a project.
    """

    tag: ClassVar[str] = "Value"

    __slots__ = ("_value", "context")

    def __init__(self, value: Value, context: SqValueContext | None = None) -> None:
        self._value = value
        self.context = context

    @property
    def value(self) -> Value:
        return self._value

    @property
    def tags(self) -> ValueTags:
        return self._value.get_tags()

    @property
    def title(self) -> str | None:
        """Display name from the ``name`` tag."""
        return self.tags.get_name()

    def as_js(self) -> Any:
        """Plain Python representation for hosts."""
        raise NotImplementedError

    def _child(self, item: PathItem, value: Value) -> SqValue:
        context = None if self.context is None else self.context.extend(item)
        return wrap_value(value, context)

    def get_subvalue_by_path(self, path: ValuePath) -> SqValue | None:
        """
        Nested value addressed by an absolute ``path``.

        Returns ``None`` when ``path`` does not start with the path of this
        value or does not lead to a value.
        """
        items = path.items
        if self.context is not None:
            if not path.contains(self.context.path):
                return None
            items = items[len(self.context.path.items) :]
        current: SqValue = self
        for item in items:
            child = lookup_item(current.value, item)
            if child is None:
                return None
            current = current._child(item, child)
        return current

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


class SqNumber(SqValue):
    tag = "Number"

    def as_js(self) -> float:
        return self._value.value  # type: ignore[union-attr]


class SqString(SqValue):
    tag = "String"

    def as_js(self) -> str:
        return self._value.value  # type: ignore[union-attr]


class SqBool(SqValue):
    tag = "Bool"

    def as_js(self) -> bool:
        return self._value.value  # type: ignore[union-attr]


class SqVoid(SqValue):
    tag = "Void"

    def as_js(self) -> None:
        return None


class SqArray(SqValue):
    tag = "Array"

    def get_values(self) -> list[SqValue]:
        return [
            self._child(PathItem.from_number(index), item)
            for index, item in enumerate(self._value.value)  # type: ignore[union-attr]
        ]

    def as_js(self) -> list[Any]:
        return [item.as_js() for item in self.get_values()]


class SqDict(SqValue):
    tag = "Dict"

    def get(self, key: str) -> SqValue | None:
        item = self._value.get(key)  # type: ignore[union-attr]
        if item is None:
            return None
        return self._child(PathItem.from_string(key), item)

    def keys(self) -> list[str]:
        return list(self._value.value)  # type: ignore[union-attr]

    def entries(self) -> list[tuple[str, SqValue]]:
        return [
            (key, self._child(PathItem.from_string(key), item))
            for key, item in self._value.value.items()  # type: ignore[union-attr]
        ]

    def as_js(self) -> dict[str, Any]:
        return {key: item.as_js() for key, item in self.entries()}


class SqDate(SqValue):
    tag = "Date"

    def as_js(self) -> Any:
        return self._value.value  # type: ignore[union-attr]


class SqDuration(SqValue):
    tag = "Duration"

    def as_js(self) -> timedelta:
        return timedelta(milliseconds=self._value.value.ms)  # type: ignore[union-attr]


class SqScale(SqValue):
    tag = "Scale"

    def as_js(self) -> dict[str, Any]:
        scale = self._value.value  # type: ignore[union-attr]
        return {"type": scale.type.value, **scale.params()}


class SqDistribution(SqValue):
    """Wrapped distribution; statistics are computed on demand."""

    tag = "Dist"

    @property
    def dist(self) -> BaseDist:
        return self._value.value  # type: ignore[union-attr]

    def mean(self) -> float:
        return self.dist.mean()

    def stdev(self) -> float:
        return self.dist.stdev()

    def cdf(self, x: float) -> float:
        return self.dist.cdf(x)

    def pdf(self, x: float, environment: Environment = default_environment) -> float:
        return self.dist.pdf(x, environment)

    def inv(self, p: float) -> float:
        return self.dist.inv(p)

    def integral_sum(self) -> float:
        return self.dist.integral_sum()

    def as_js(self) -> SqDistribution:
        return self


class SqSymbolicDistribution(SqDistribution):
    @property
    def parameters(self) -> dict[str, float]:
        return self.dist.parameters  # type: ignore[attr-defined]


class SqSampleSetDistribution(SqDistribution):
    def get_samples(self) -> list[float]:
        return self.dist.samples.tolist()  # type: ignore[attr-defined]


class SqPointSetDistribution(SqDistribution):
    def get_points(self) -> dict[str, list[tuple[float, float]]]:
        """Continuous and discrete parts as ``(x, y)`` pairs."""
        continuous, discrete = self.dist.parts()  # type: ignore[attr-defined]
        return {"continuous": continuous.xy.zip(), "discrete": discrete.xy.zip()}


class SqLambda(SqValue):
    """Wrapped function that hosts can call."""

    tag = "Lambda"

    @classmethod
    def create_from_stdlib_name(cls, name: str) -> SqLambda:
        """
        Raises
        ------
        BindingError
            If the standard library has no function called ``name``.
        CompileError
            If ``name`` is ambiguous.
        """
        return cls(v_lambda(registry().make_lambda(name)))

    def parameter_counts(self) -> list[int]:
        return self._value.value.parameter_counts()  # type: ignore[union-attr]

    def call(
        self, args: Sequence[SqValue | Value], environment: Environment | None = None
    ) -> Result[SqValue, SqError]:
        """Call the function with a fresh reducer; failures become ``Err``."""
        reducer = Reducer(environment or default_environment, registry())
        values = [arg.value if isinstance(arg, SqValue) else arg for arg in args]
        try:
            result = reducer.call_lambda(self._value.value, values)  # type: ignore[union-attr]
        except SquiggleError as exc:
            return Err(SqError(exc))
        except RecursionError:
            return Err(SqError(StackDepthError(MAX_STACK_DEPTH)))
        return Ok(wrap_value(result))

    def as_js(self) -> SqLambda:
        return self

    def __str__(self) -> str:
        return self._value.value.to_string()  # type: ignore[union-attr]


_WRAPPERS: dict[type, type[SqValue]] = {
    VNumber: SqNumber,
    VString: SqString,
    VBool: SqBool,
    VVoid: SqVoid,
    VArray: SqArray,
    VDict: SqDict,
    VDate: SqDate,
    VDuration: SqDuration,
    VScale: SqScale,
    VLambda: SqLambda,
}

_DIST_WRAPPERS: dict[type, type[SqDistribution]] = {
    SymbolicDist: SqSymbolicDistribution,
    SampleSetDist: SqSampleSetDistribution,
    PointSetDist: SqPointSetDistribution,
}


def wrap_value(value: Value, context: SqValueContext | None = None) -> SqValue:
    """Wrapper of the right class for ``value``."""
    if isinstance(value, VDist):
        for dist_type, wrapper in _DIST_WRAPPERS.items():
            if isinstance(value.value, dist_type):
                return wrapper(value, context)
        return SqDistribution(value, context)
    return _WRAPPERS[type(value)](value, context)


__all__ = [
    "SqValue",
    "SqNumber",
    "SqString",
    "SqBool",
    "SqVoid",
    "SqArray",
    "SqDict",
    "SqDate",
    "SqDuration",
    "SqScale",
    "SqDistribution",
    "SqSymbolicDistribution",
    "SqSampleSetDistribution",
    "SqPointSetDistribution",
    "SqLambda",
    "wrap_value",
]
