"""
Distribution functions.

Constructors of the symbolic families, mixtures, statistics, conversions
and the distribution overloads of the arithmetic operators.

Notes
-----
- Numbers passed where a distribution is expected become point masses.
- Operators on two distributions go through
  :func:`~squiggle_core.dists.operations.algebraic_combination` with the
  environment and random generator of the running reducer, so results are
  reproducible for a seeded environment.
- The ``SampleSet`` and ``PointSet`` namespaces convert between
  representations explicitly.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from scipy import stats

from squiggle_core.dists.distribution import BaseDist
from squiggle_core.dists.operations import (
    algebraic_combination,
    mixture,
    pointwise_add,
    pointwise_multiply,
    scale_log,
    scale_log_with_threshold,
    scale_multiply,
    scale_power,
    truncate,
)
from squiggle_core.dists.point_set import ContinuousShape, DiscreteShape, PointSetDist, XYShape
from squiggle_core.dists.sample_set import SampleSetDist
from squiggle_core.dists.symbolic import (
    Beta,
    LogNormal,
    Normal,
    PointMass,
    SymbolicDist,
    symbolic_families,
)
from squiggle_core.errors import ArgumentError, DomainError
from squiggle_core.library.factory import FnFactory
from squiggle_core.library.fn_definition import FnDefinition, FRFunction, make_definition
from squiggle_core.library.frtypes import (
    fr_array,
    fr_bool,
    fr_dict,
    fr_dict_with_arbitrary_keys,
    fr_dist,
    fr_dist_or_number,
    fr_lambda_nand,
    fr_lambda_with_arity,
    fr_named,
    fr_number,
    fr_optional,
    fr_sample_set_dist,
    fr_symbolic_dist,
)
from squiggle_core.types import AlgebraicOperation
from squiggle_core.value.values import Value, VNumber

if TYPE_CHECKING:
    from squiggle_core.reducer.lambdas import Lambda
    from squiggle_core.reducer.reducer import Reducer

logger = logging.getLogger(__name__)

maker = FnFactory(namespace="Dist", requires_namespace=False)
operator_maker = FnFactory(namespace="", requires_namespace=False)
sample_set_maker = FnFactory(namespace="SampleSet", requires_namespace=True)
point_set_maker = FnFactory(namespace="PointSet", requires_namespace=True)

MAX_MIXTURE_ARGUMENTS = 5


def to_dist(value: float | BaseDist) -> BaseDist:
    """Distribution for a ``Dist|Number`` argument."""
    if isinstance(value, BaseDist):
        return value
    return PointMass.make(value)


# Constructors


def _normal_from_percentiles(low: float, high: float, p: float) -> Normal:
    """Normal whose ``p`` and ``1 - p`` quantiles are ``low`` and ``high``."""
    if not low < high:
        raise DomainError("Low value must be less than high value")
    z = float(stats.norm.ppf(1 - p))
    return Normal.make((low + high) / 2, (high - low) / (2 * z))


def _lognormal_from_percentiles(low: float, high: float, p: float) -> LogNormal:
    if low <= 0:
        raise DomainError("Low value must be above 0 for a lognormal")
    if not low < high:
        raise DomainError("Low value must be less than high value")
    z = float(stats.norm.ppf(1 - p))
    log_low, log_high = math.log(low), math.log(high)
    return LogNormal.make((log_low + log_high) / 2, (log_high - log_low) / (2 * z))


def credible_interval(low: float, high: float) -> SymbolicDist:
    """
    90% credible interval: lognormal when both ends are positive, normal
    otherwise.

    Raises
    ------
    DomainError
        If ``low >= high``.
    """
    if not low < high:
        raise DomainError("Low value must be less than high value")
    if low > 0:
        return LogNormal.from_credible_interval(low, high)
    return Normal.from_credible_interval(low, high)


def _percentile_definitions(
    build: Callable[[float, float, float], BaseDist], pairs: Sequence[tuple[str, str, float]]
) -> list[FnDefinition]:
    definitions = []
    for low_key, high_key, p in pairs:

        def run(
            params: dict[str, float], low_key: str = low_key, high_key: str = high_key, p: float = p
        ) -> BaseDist:
            return build(params[low_key], params[high_key], p)

        definitions.append(
            make_definition(
                [fr_dict((low_key, fr_number), (high_key, fr_number))], fr_dist, run
            )
        )
    return definitions


def _mean_stdev(build: Callable[[float, float], BaseDist]) -> FnDefinition:
    return make_definition(
        [fr_dict(("mean", fr_number), ("stdev", fr_number))],
        fr_dist,
        lambda params: build(params["mean"], params["stdev"]),
    )


def _family(family_name: str, *params: str) -> list[FnDefinition]:
    """Positional definition building the registered family ``family_name``."""
    family = symbolic_families().get(family_name)
    inputs = [fr_named(param, fr_number) for param in params]
    return [make_definition(inputs, fr_dist, family.make)]


_PERCENTILES = (("p5", "p95", 0.05), ("p10", "p90", 0.10), ("p25", "p75", 0.25))

_constructors = [
    maker.make(
        "normal",
        [
            *_family("Normal", "mean", "stdev"),
            _mean_stdev(Normal.make),
            *_percentile_definitions(_normal_from_percentiles, _PERCENTILES),
        ],
        description="Normal distribution.",
        examples=["normal(5, 1)", "normal({p5: 4, p95: 10})", "normal({mean: 5, stdev: 2})"],
    ),
    maker.make(
        "lognormal",
        [
            *_family("Lognormal", "mu", "sigma"),
            _mean_stdev(LogNormal.from_mean_stdev),
            *_percentile_definitions(_lognormal_from_percentiles, _PERCENTILES),
        ],
        description="Lognormal distribution, given the parameters of the underlying normal.",
        examples=["lognormal(0.5, 0.8)", "lognormal({p5: 4, p95: 10})"],
    ),
    maker.make("uniform", _family("Uniform", "low", "high")),
    maker.make(
        "beta",
        [*_family("Beta", "alpha", "beta"), _mean_stdev(Beta.from_mean_stdev)],
        examples=["beta(20, 25)", "beta({mean: 0.39, stdev: 0.1})"],
    ),
    maker.make("exponential", _family("Exponential", "rate")),
    maker.make("cauchy", _family("Cauchy", "location", "scale")),
    maker.make("triangular", _family("Triangular", "min", "mode", "max")),
    maker.make("gamma", _family("Gamma", "shape", "scale")),
    maker.make("logistic", _family("Logistic", "location", "scale")),
    maker.make("bernoulli", _family("Bernoulli", "p")),
    maker.make("pointMass", _family("PointMass", "value")),
    maker.make(
        "to",
        [make_definition([fr_number, fr_number], fr_dist, credible_interval)],
        description="90% credible interval; lognormal when low > 0, normal otherwise.",
        examples=["5 to 10", "-5 to 5"],
    ),
    maker.make(
        "credibleInterval",
        [make_definition([fr_number, fr_number], fr_dist, credible_interval)],
    ),
]


# Mixtures


def _mixture(
    values: Sequence[float | BaseDist], weights: list[float] | None, *, reducer: Reducer
) -> BaseDist:
    """
    Raises
    ------
    ArgumentError
        If the weights do not match the number of distributions.
    """
    if weights is None:
        weights = [1.0] * len(values)
    elif len(weights) != len(values):
        raise ArgumentError(
            f"Mixture: got {len(values)} distributions but {len(weights)} weights"
        )
    pairs = [(to_dist(value), weight) for value, weight in zip(values, weights, strict=True)]
    return mixture(pairs, reducer.environment, reducer.rng)


def _mixture_of(count: int) -> Callable[..., BaseDist]:
    def run(*args, reducer: Reducer) -> BaseDist:
        return _mixture(args[:count], args[count], reducer=reducer)

    return run


def _mixture_definitions() -> list[FnDefinition]:
    weights = fr_optional(fr_named("weights", fr_array(fr_number)))
    definitions = [
        make_definition(
            [fr_array(fr_dist_or_number), weights], fr_dist, _mixture, uses_reducer=True
        )
    ]
    for count in range(1, MAX_MIXTURE_ARGUMENTS + 1):
        definitions.append(
            make_definition(
                [fr_dist_or_number] * count + [weights],
                fr_dist,
                _mixture_of(count),
                uses_reducer=True,
            )
        )
    return definitions


_mixtures = [
    maker.make(
        name,
        _mixture_definitions(),
        description="Weighted mixture of distributions; weights default to equal.",
        examples=["mx(normal(0, 1), normal(5, 1), [0.3, 0.7])", "mx([1, 2, 3])"],
    )
    for name in ("mx", "mixture")
]


# Statistics


def _with_env(fn: Callable[..., float]) -> Callable[..., float]:
    def run(dist: BaseDist, *args, reducer: Reducer) -> float:
        return fn(dist, *args, reducer.environment)

    return run


def _sample(dist: BaseDist, *, reducer: Reducer) -> float:
    return dist.sample(reducer.rng)


def _sample_n(dist: BaseDist, n: float, *, reducer: Reducer) -> list[float]:
    if n < 0 or not float(n).is_integer():
        raise ArgumentError(f"Number of samples must be a non-negative integer, got {n}")
    return dist.sample_n(int(n), reducer.rng).tolist()


def _truncate(
    dist: BaseDist, left: float | None, right: float | None, *, reducer: Reducer
) -> BaseDist:
    return truncate(dist, left, right, reducer.environment)


def _stat(name: str, fn: Callable[[BaseDist], float], description: str | None = None):
    return maker.make(name, [make_definition([fr_dist], fr_number, fn)], description=description)


_statistics = [
    _stat("mean", lambda d: d.mean()),
    _stat("stdev", lambda d: d.stdev()),
    _stat("variance", lambda d: d.variance()),
    maker.make(
        "mode",
        [
            make_definition(
                [fr_dist], fr_number, _with_env(lambda d, env: d.mode(env)), uses_reducer=True
            )
        ],
    ),
    _stat("min", lambda d: d.min(), "Lowest value of the support."),
    _stat("max", lambda d: d.max(), "Highest value of the support."),
    maker.make(
        "sample", [make_definition([fr_dist], fr_number, _sample, uses_reducer=True)]
    ),
    maker.make(
        "sampleN",
        [
            make_definition(
                [fr_dist, fr_named("n", fr_number)],
                fr_array(fr_number),
                _sample_n,
                uses_reducer=True,
            )
        ],
    ),
    maker.make(
        "cdf", [make_definition([fr_dist, fr_number], fr_number, lambda d, x: d.cdf(x))]
    ),
    maker.make(
        "pdf",
        [
            make_definition(
                [fr_dist, fr_number],
                fr_number,
                _with_env(lambda d, x, env: d.pdf(x, env)),
                uses_reducer=True,
            )
        ],
    ),
    maker.make(
        "inv",
        [make_definition([fr_dist, fr_named("p", fr_number)], fr_number, lambda d, p: d.inv(p))],
        description="Inverse cumulative distribution function.",
    ),
    maker.make(
        "quantile",
        [make_definition([fr_dist, fr_named("p", fr_number)], fr_number, lambda d, p: d.inv(p))],
    ),
    _stat("integralSum", lambda d: d.integral_sum()),
    maker.make("normalize", [make_definition([fr_dist], fr_dist, lambda d: d.normalize())]),
    maker.make("isNormalized", [make_definition([fr_dist], fr_bool, lambda d: d.is_normalized())]),
    maker.make(
        "truncate",
        [
            make_definition(
                [fr_dist, fr_named("left", fr_number), fr_named("right", fr_number)],
                fr_dist,
                _truncate,
                uses_reducer=True,
            )
        ],
        examples=["normal(5, 2) -> truncate(3, 8)"],
    ),
    maker.make(
        "truncateLeft",
        [
            make_definition(
                [fr_dist, fr_number],
                fr_dist,
                lambda d, left, *, reducer: _truncate(d, left, None, reducer=reducer),
                uses_reducer=True,
            )
        ],
    ),
    maker.make(
        "truncateRight",
        [
            make_definition(
                [fr_dist, fr_number],
                fr_dist,
                lambda d, right, *, reducer: _truncate(d, None, right, reducer=reducer),
                uses_reducer=True,
            )
        ],
    ),
    maker.make(
        "parameters",
        [
            make_definition(
                [fr_symbolic_dist], fr_dict_with_arbitrary_keys(fr_number), lambda d: d.parameters
            )
        ],
        requires_namespace=True,
        description="Parameters of a symbolic distribution.",
    ),
]


# Scale operations


def _scale(op: Callable[..., BaseDist]) -> Callable[..., BaseDist]:
    def run(dist: BaseDist, *args: float, reducer: Reducer) -> BaseDist:
        return op(dist, *args, reducer.environment)

    return run


def _scale_log_base(base: float) -> Callable[..., BaseDist]:
    def run(dist: BaseDist, *, reducer: Reducer) -> BaseDist:
        return scale_log(dist, base, reducer.environment)

    return run


_scales = [
    maker.make(
        "scaleMultiply",
        [make_definition([fr_dist, fr_number], fr_dist, _scale(scale_multiply), uses_reducer=True)],
    ),
    maker.make(
        "scalePow",
        [make_definition([fr_dist, fr_number], fr_dist, _scale(scale_power), uses_reducer=True)],
    ),
    maker.make(
        "scaleLog",
        [
            make_definition([fr_dist], fr_dist, _scale_log_base(math.e), uses_reducer=True),
            make_definition(
                [fr_dist, fr_named("base", fr_number)],
                fr_dist,
                _scale(scale_log),
                uses_reducer=True,
            ),
        ],
    ),
    maker.make(
        "scaleLog10",
        [make_definition([fr_dist], fr_dist, _scale_log_base(10.0), uses_reducer=True)],
    ),
    maker.make(
        "scaleLogWithThreshold",
        [
            make_definition(
                [fr_dist, fr_named("base", fr_number), fr_named("eps", fr_number)],
                fr_dist,
                _scale(scale_log_with_threshold),
                uses_reducer=True,
            )
        ],
    ),
]


# Operators


def _algebraic(op: AlgebraicOperation) -> Callable[..., BaseDist]:
    def run(a: float | BaseDist, b: float | BaseDist, *, reducer: Reducer) -> BaseDist:
        logger.debug("Combining distributions with %s", op)
        return algebraic_combination(
            op, to_dist(a), to_dist(b), reducer.environment, rng=reducer.rng
        )

    return run


def _operator(name: str, op: AlgebraicOperation) -> FRFunction:
    run = _algebraic(op)
    return operator_maker.make(
        name,
        [
            make_definition([fr_dist, fr_dist], fr_dist, run, uses_reducer=True),
            make_definition([fr_dist, fr_number], fr_dist, run, uses_reducer=True),
            make_definition([fr_number, fr_dist], fr_dist, run, uses_reducer=True),
        ],
    )


def _dot_divide(dist: BaseDist, divisor: float, *, reducer: Reducer) -> BaseDist:
    if divisor == 0:
        raise DomainError("Cannot divide a distribution by zero")
    return scale_multiply(dist, 1 / divisor, reducer.environment)


def _pointwise(fn: Callable[..., PointSetDist]) -> Callable[..., BaseDist]:
    def run(a: BaseDist, b: BaseDist, *, reducer: Reducer) -> BaseDist:
        return fn(a, b, reducer.environment)

    return run


_operators = [
    _operator("add", AlgebraicOperation.ADD),
    _operator("subtract", AlgebraicOperation.SUBTRACT),
    _operator("multiply", AlgebraicOperation.MULTIPLY),
    _operator("divide", AlgebraicOperation.DIVIDE),
    _operator("pow", AlgebraicOperation.POWER),
    maker.make(
        "log",
        [
            make_definition(
                [fr_dist, fr_named("base", fr_dist_or_number)],
                fr_dist,
                _algebraic(AlgebraicOperation.LOGARITHM),
                uses_reducer=True,
            )
        ],
        requires_namespace=True,
        description="Logarithm of a distribution in the base of another one.",
    ),
    operator_maker.make(
        "unaryMinus",
        [
            make_definition(
                [fr_dist],
                fr_dist,
                lambda d, *, reducer: scale_multiply(d, -1.0, reducer.environment),
                uses_reducer=True,
            )
        ],
    ),
    operator_maker.make(
        "dotAdd",
        [
            make_definition(
                [fr_dist, fr_dist], fr_dist, _pointwise(pointwise_add), uses_reducer=True
            )
        ],
    ),
    operator_maker.make(
        "dotMultiply",
        [
            make_definition(
                [fr_dist, fr_dist], fr_dist, _pointwise(pointwise_multiply), uses_reducer=True
            ),
            make_definition(
                [fr_dist, fr_number], fr_dist, _scale(scale_multiply), uses_reducer=True
            ),
        ],
    ),
    operator_maker.make(
        "dotDivide",
        [make_definition([fr_dist, fr_number], fr_dist, _dot_divide, uses_reducer=True)],
    ),
    operator_maker.make(
        "dotPow",
        [make_definition([fr_dist, fr_number], fr_dist, _scale(scale_power), uses_reducer=True)],
    ),
]


# SampleSet and PointSet namespaces


def _sample_set_from_dist(dist: BaseDist, *, reducer: Reducer) -> SampleSetDist:
    return dist.to_sample_set(reducer.environment, reducer.rng)


def _sample_set_from_fn(fn: Lambda, *, reducer: Reducer) -> SampleSetDist:
    """Sample set of ``sample_count`` results of ``fn``, passing the index if it takes one."""
    samples = []
    for i in range(reducer.environment.sample_count):
        args = [VNumber(float(i))] if fn.accepts(1) else []
        samples.append(_number_result(reducer.call_lambda(fn, args)))
    return SampleSetDist(samples)


def _number_result(value: Value) -> float:
    if not isinstance(value, VNumber):
        raise ArgumentError(f"Expected the function to return a Number, got {value.public_name}")
    return value.value


def _sample_set_map(dist: SampleSetDist, fn: Lambda, *, reducer: Reducer) -> SampleSetDist:
    return SampleSetDist(
        [_number_result(reducer.call_lambda(fn, [VNumber(float(x))])) for x in dist.samples]
    )


def _check_points(points: list[dict[str, float]]) -> list[tuple[float, float]]:
    pairs = [(point["x"], point["y"]) for point in points]
    for x, y in pairs:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise DomainError("Point set coordinates must be finite")
    return pairs


def _make_continuous(points: list[dict[str, float]]) -> PointSetDist:
    return PointSetDist(ContinuousShape(XYShape.from_points(_check_points(points))))


def _make_discrete(points: list[dict[str, float]]) -> PointSetDist:
    return PointSetDist(DiscreteShape(XYShape.from_points(_check_points(points))))


_points = fr_array(fr_dict(("x", fr_number), ("y", fr_number)))

_conversions = [
    sample_set_maker.make(
        "fromDist",
        [make_definition([fr_dist], fr_sample_set_dist, _sample_set_from_dist, uses_reducer=True)],
    ),
    sample_set_maker.make(
        "fromList",
        [make_definition([fr_array(fr_number)], fr_sample_set_dist, SampleSetDist)],
    ),
    sample_set_maker.make(
        "fromFn",
        [
            make_definition(
                [fr_lambda_nand([0, 1])], fr_sample_set_dist, _sample_set_from_fn, uses_reducer=True
            )
        ],
    ),
    sample_set_maker.make(
        "toList",
        [make_definition([fr_sample_set_dist], fr_array(fr_number), lambda d: d.samples.tolist())],
    ),
    sample_set_maker.make(
        "map",
        [
            make_definition(
                [fr_sample_set_dist, fr_lambda_with_arity(1)],
                fr_sample_set_dist,
                _sample_set_map,
                uses_reducer=True,
            )
        ],
    ),
    point_set_maker.make(
        "fromDist",
        [
            make_definition(
                [fr_dist],
                fr_dist,
                lambda d, *, reducer: d.to_point_set(reducer.environment),
                uses_reducer=True,
            )
        ],
    ),
    point_set_maker.make(
        "makeContinuous",
        [make_definition([_points], fr_dist, _make_continuous)],
        examples=["PointSet.makeContinuous([{x: 0, y: 0.2}, {x: 1, y: 0.7}])"],
    ),
    point_set_maker.make(
        "makeDiscrete",
        [make_definition([_points], fr_dist, _make_discrete)],
    ),
]

library: list[FRFunction] = [
    *_constructors,
    *_mixtures,
    *_statistics,
    *_scales,
    *_operators,
    *_conversions,
]

__all__ = ["library", "credible_interval", "to_dist"]
