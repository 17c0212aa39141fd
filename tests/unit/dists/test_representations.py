from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from squiggle_core.dists import (
    ContinuousShape,
    DiscreteShape,
    Environment,
    LogNormal,
    MixedShape,
    Normal,
    PointSetDist,
    SampleSetDist,
    Triangular,
    XYShape,
    build_mixed_shape,
    build_simple_shape,
)
from squiggle_core.dists.kde import samples_to_point_set
from squiggle_core.dists.symbolic import symbolic_families
from squiggle_core.errors import DomainError, InternalError
from squiggle_core.types import Kind, MixedAssumption


class TestEnvironment:
    @pytest.mark.parametrize("field", ["sample_count", "xy_point_length"])
    @pytest.mark.parametrize("value", [0, -5, 2.5, True])
    def test_rejects_non_positive_integers(self, field: str, value: object) -> None:
        with pytest.raises(ValueError, match=field):
            Environment(**{field: value})

    def test_merge_returns_new_environment(self) -> None:
        env = Environment()
        merged = env.merge(sample_count=10)
        assert merged.sample_count == 10
        assert env.sample_count == 1000

    def test_string_seed_is_deterministic(self) -> None:
        first = Environment(seed="abc").make_rng().random(3)
        second = Environment(seed="abc").make_rng().random(3)
        assert first.tolist() == second.tolist()


class TestSymbolicDists:
    def test_constraint_violation(self) -> None:
        with pytest.raises(DomainError, match="sigma > 0"):
            Normal.make(0, -1)

    def test_non_finite_parameter(self) -> None:
        with pytest.raises(DomainError, match="finite"):
            Normal.make(float("inf"), 1)

    def test_triangular_ordering(self) -> None:
        with pytest.raises(DomainError):
            Triangular.make(2, 1, 3)

    def test_lognormal_from_mean_stdev(self) -> None:
        dist = LogNormal.from_mean_stdev(10, 2)
        assert dist.mean() == pytest.approx(10)
        assert dist.stdev() == pytest.approx(2)

    def test_parameters_in_declaration_order(self) -> None:
        assert list(Triangular.make(0, 1, 2).parameters) == ["low", "medium", "high"]

    def test_inv_and_cdf_are_inverse(self) -> None:
        dist = Normal.make(3, 2)
        assert dist.cdf(dist.inv(0.3)) == pytest.approx(0.3)

    def test_to_point_set_preserves_mean(self) -> None:
        point_set = Normal.make(5, 1).to_point_set(Environment())
        assert point_set.integral_sum() == pytest.approx(1, rel=0.01)
        assert point_set.mean() == pytest.approx(5, rel=0.05)

    def test_families_are_registered(self) -> None:
        register = symbolic_families()
        assert register.contains("Normal")
        assert register.get("Normal") is Normal


class TestSampleSetDist:
    def test_empty(self) -> None:
        with pytest.raises(DomainError, match="Too few samples"):
            SampleSetDist([])

    def test_non_finite(self) -> None:
        with pytest.raises(DomainError):
            SampleSetDist([1.0, float("nan")])

    def test_statistics(self) -> None:
        dist = SampleSetDist([1.0, 2.0, 3.0, 4.0])
        assert dist.mean() == pytest.approx(2.5)
        assert dist.min() == 1.0
        assert dist.max() == 4.0
        assert dist.cdf(2.0) == pytest.approx(0.5)

    def test_samples_are_read_only(self) -> None:
        dist = SampleSetDist([1.0, 2.0])
        with pytest.raises(ValueError):
            dist.samples[0] = 5.0

    def test_to_sample_set_is_identity(self) -> None:
        dist = SampleSetDist([1.0, 2.0])
        assert dist.to_sample_set(Environment()) is dist


class TestSamplesToPointSet:
    def test_continuous_samples_use_kde(self) -> None:
        samples = np.random.default_rng(0).normal(0, 1, 500)
        point_set = samples_to_point_set(samples, 200)
        assert point_set.kind is Kind.CONTINUOUS
        assert point_set.integral_sum() == pytest.approx(1)
        assert point_set.mean() == pytest.approx(0, abs=0.15)

    def test_repeated_values_become_point_masses(self) -> None:
        samples = np.array([1.0] * 20 + [2.0] * 20)
        point_set = samples_to_point_set(samples, 200)
        assert point_set.kind is Kind.DISCRETE
        assert point_set.mean() == pytest.approx(1.5)

    def test_mixed_samples(self) -> None:
        rng = np.random.default_rng(1)
        samples = np.concatenate([np.zeros(100), rng.normal(10, 1, 100)])
        point_set = samples_to_point_set(samples, 200)
        assert point_set.kind is Kind.MIXED
        assert point_set.cdf(0.0) == pytest.approx(0.5, abs=0.05)

    def test_too_few_samples(self) -> None:
        with pytest.raises(DomainError, match="Too few samples"):
            samples_to_point_set(np.array([1.0, 2.0]), 100)


class TestShapes:
    def test_xy_shape_requires_sorted_xs(self) -> None:
        with pytest.raises(InternalError):
            XYShape(np.array([2.0, 1.0]), np.array([0.0, 0.0]))

    def test_discrete_shape_merges_duplicates(self) -> None:
        shape = DiscreteShape.make([2.0, 1.0, 2.0], [0.25, 0.5, 0.25])
        assert shape.xy.zip() == [(1.0, 0.5), (2.0, 0.5)]

    def test_continuous_shape_rejects_negative_density(self) -> None:
        with pytest.raises(DomainError):
            ContinuousShape.make([0.0, 1.0], [1.0, -1.0])

    def test_point_set_requires_non_empty_shape(self) -> None:
        with pytest.raises(DomainError):
            PointSetDist(ContinuousShape.empty())

    def test_truncate_renormalizes(self) -> None:
        dist = PointSetDist(ContinuousShape.make([0.0, 4.0], [0.25, 0.25]))
        truncated = dist.truncate(1.0, 3.0)
        assert truncated.integral_sum() == pytest.approx(1)
        assert truncated.mean() == pytest.approx(2)

    @pytest.mark.parametrize("fraction, expected", [(0.2, 1.0), (0.9, 5.0)])
    def test_mixed_mode_weighs_density_peak_against_point_masses(
        self, fraction: float, expected: float
    ) -> None:
        shape = MixedShape(
            ContinuousShape.make([0.0, 1.0, 2.0], [0.0, 1.0, 0.0]),
            DiscreteShape.make([5.0], [1.0]),
            fraction,
        )
        assert shape.mode() == pytest.approx(expected)


class TestShapeBuilders:
    @pytest.fixture
    def parts(self) -> tuple[ContinuousShape, DiscreteShape]:
        return (
            ContinuousShape.make([0.0, 2.0], [0.5, 0.5]),
            DiscreteShape.make([5.0], [2.0]),
        )

    def test_explicit_fraction(self, parts: tuple[ContinuousShape, DiscreteShape]) -> None:
        continuous, discrete = parts
        shape = build_mixed_shape(
            continuous,
            discrete,
            MixedAssumption.ADDS_TO_CORRECT_PROBABILITY,
            MixedAssumption.ADDS_TO_CORRECT_PROBABILITY,
            0.25,
        )
        assert isinstance(shape, MixedShape)
        assert shape.integral_sum() == pytest.approx(1)

    def test_fraction_out_of_range(self, parts: tuple[ContinuousShape, DiscreteShape]) -> None:
        continuous, discrete = parts
        shape = build_mixed_shape(
            continuous, discrete, MixedAssumption.ADDS_TO_1, MixedAssumption.ADDS_TO_1, 1.5
        )
        assert shape is None

    def test_missing_fraction_with_normalized_parts(
        self, parts: tuple[ContinuousShape, DiscreteShape]
    ) -> None:
        continuous, discrete = parts
        shape = build_mixed_shape(
            continuous, discrete, MixedAssumption.ADDS_TO_1, MixedAssumption.ADDS_TO_1
        )
        assert shape is None

    def test_discrete_raw_sum_above_one(
        self, parts: tuple[ContinuousShape, DiscreteShape]
    ) -> None:
        continuous, discrete = parts
        shape = build_mixed_shape(
            continuous,
            discrete,
            MixedAssumption.ADDS_TO_1,
            MixedAssumption.ADDS_TO_CORRECT_PROBABILITY,
        )
        assert shape is None

    def test_raw_discrete_sum_becomes_fraction(self) -> None:
        shape = build_mixed_shape(
            ContinuousShape.make([0.0, 2.0], [0.5, 0.5]),
            DiscreteShape.make([5.0], [0.3]),
            MixedAssumption.ADDS_TO_1,
            MixedAssumption.ADDS_TO_CORRECT_PROBABILITY,
        )
        assert isinstance(shape, MixedShape)
        assert shape.discrete_probability_mass_fraction == pytest.approx(0.3)
        assert shape.discrete.integral_sum() == pytest.approx(1.0)
        assert shape.integral_sum() == pytest.approx(1.0)

    def test_correct_continuous_with_normalized_discrete_needs_fraction(
        self, parts: tuple[ContinuousShape, DiscreteShape]
    ) -> None:
        continuous, discrete = parts
        shape = build_mixed_shape(
            continuous,
            discrete,
            MixedAssumption.ADDS_TO_CORRECT_PROBABILITY,
            MixedAssumption.ADDS_TO_1,
        )
        assert shape is None

    def test_simple_shape_of_empty_parts(self) -> None:
        assert build_simple_shape(ContinuousShape.empty(), DiscreteShape.empty()) is None

    def test_simple_shape_drops_degenerate_continuous_part(self) -> None:
        shape = build_simple_shape(
            ContinuousShape.empty(), DiscreteShape.make([3.0], [1.0])
        )
        assert isinstance(shape, DiscreteShape)
