from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from squiggle_core import (
    SqPointSetDistribution,
    SqSampleSetDistribution,
    SqSymbolicDistribution,
)
from squiggle_core.dists import LogNormal, Normal, PointMass
from squiggle_core.dists.symbolic import symbolic_families
from tests.utils.evaluation import run, run_error, run_js


class TestConstructors:
    def test_normal_is_symbolic(self) -> None:
        value = run("normal(5, 2)")
        assert isinstance(value, SqSymbolicDistribution)
        assert value.parameters == {"mu": 5.0, "sigma": 2.0}
        assert str(value) == "Normal(5,2)"

    def test_normal_from_mean_and_stdev(self) -> None:
        assert run("normal({mean: 3, stdev: 1})").dist == Normal.make(3, 1)

    def test_normal_from_percentiles(self) -> None:
        dist = run("normal({p5: 4, p95: 10})").dist
        assert dist.mean() == pytest.approx(7)
        assert dist.inv(0.05) == pytest.approx(4, rel=1e-6)
        assert dist.inv(0.95) == pytest.approx(10, rel=1e-6)

    def test_lognormal_from_percentiles_rejects_non_positive_low(self) -> None:
        error = run_error("lognormal({p5: -1, p95: 10})")
        assert error.kind == "DomainError"

    def test_to_with_positive_bounds_is_lognormal(self) -> None:
        dist = run("1 to 10").dist
        assert isinstance(dist, LogNormal)
        assert dist.inv(0.05) == pytest.approx(1, rel=1e-6)
        assert dist.inv(0.95) == pytest.approx(10, rel=1e-6)

    def test_to_with_negative_bound_is_normal(self) -> None:
        dist = run("-5 to 5").dist
        assert isinstance(dist, Normal)
        assert dist.mean() == pytest.approx(0)

    def test_to_requires_ordered_bounds(self) -> None:
        assert run_error("10 to 1").kind == "DomainError"

    def test_invalid_parameters(self) -> None:
        error = run_error("normal(0, -1)")
        assert error.kind == "DomainError"
        assert "sigma > 0" in error.message

    @pytest.mark.parametrize(
        "source, expected_mean",
        [
            ("uniform(0, 10)", 5.0),
            ("exponential(2)", 0.5),
            ("triangular(0, 1, 2)", 1.0),
            ("gamma(2, 3)", 6.0),
            ("beta(1, 1)", 0.5),
            ("pointMass(4)", 4.0),
            ("bernoulli(0.3)", 0.3),
        ],
    )
    def test_family_means(self, source: str, expected_mean: float) -> None:
        assert run_js(f"mean({source})") == pytest.approx(expected_mean)

    @pytest.mark.parametrize(
        "source, family_name",
        [
            ("normal(0, 1)", "Normal"),
            ("lognormal(0, 1)", "Lognormal"),
            ("Dist.cauchy(0, 1)", "Cauchy"),
            ("logistic(0, 1)", "Logistic"),
            ("bernoulli(0.5)", "Bernoulli"),
        ],
    )
    def test_constructors_build_registered_families(self, source: str, family_name: str) -> None:
        dist = run(source).dist
        assert type(dist) is symbolic_families().get(family_name)
        assert dist.family_name == family_name


class TestArithmetic:
    def test_sum_of_normals_stays_symbolic(self) -> None:
        value = run("normal(5, 2) + normal(5, 2)")
        assert isinstance(value, SqSymbolicDistribution)
        assert value.mean() == pytest.approx(10)
        assert value.stdev() == pytest.approx(2 * 2**0.5)

    def test_shift_by_number(self) -> None:
        assert run("normal(5, 2) + 3").dist == Normal.make(8, 2)
        assert run("3 - normal(5, 2)").dist == Normal.make(-2, 2)

    def test_point_masses_combine_exactly(self) -> None:
        assert run("pointMass(2) * pointMass(3)").dist == PointMass.make(6)

    def test_without_closed_form_uses_sample_sets(self) -> None:
        value = run("uniform(0, 1) * beta(2, 2)")
        assert isinstance(value, SqSampleSetDistribution)
        assert value.mean() == pytest.approx(0.25, abs=0.05)

    def test_unary_minus(self) -> None:
        assert run("-normal(5, 2)").dist == Normal.make(-5, 2)

    def test_scale_multiply_keeps_closed_form(self) -> None:
        assert run("scaleMultiply(normal(5, 2), 2)").dist == Normal.make(10, 4)

    def test_dot_divide_by_zero(self) -> None:
        assert run_error("normal(5, 2) ./ 0").kind == "DomainError"

    def test_dist_log_is_namespaced(self) -> None:
        assert run_error("log(normal(5, 2), 2)").kind == "ArgumentError"
        assert run("Dist.log(lognormal(2, 0.5), 10)").mean() > 0


class TestStatistics:
    def test_cdf_and_inv(self) -> None:
        assert run_js("cdf(normal(0, 1), 0)") == pytest.approx(0.5)
        assert run_js("inv(normal(0, 1), 0.5)") == pytest.approx(0)
        assert run_js("quantile(normal(0, 1), 0.5)") == pytest.approx(0)

    def test_inv_rejects_probability_outside_unit_interval(self) -> None:
        assert run_error("inv(normal(0, 1), 1.5)").kind == "DomainError"

    def test_pdf(self) -> None:
        assert run_js("pdf(uniform(0, 2), 1)") == pytest.approx(0.5)

    def test_stdev_and_variance(self) -> None:
        assert run_js("stdev(normal(0, 3))") == pytest.approx(3)
        assert run_js("variance(normal(0, 3))") == pytest.approx(9)

    @pytest.mark.parametrize(
        "source, message",
        [
            ("mean(Dist.cauchy(0, 1))", "Cauchy distributions have no mean value."),
            ("mean(cauchy(0, 1))", "Cauchy distributions have no mean value."),
            ("variance(cauchy(0, 1))", "Cauchy distributions have no variance."),
            ("stdev(cauchy(0, 1))", "Cauchy distributions have no standard deviation."),
        ],
    )
    def test_cauchy_has_no_moments(self, source: str, message: str) -> None:
        error = run_error(source)
        assert error.kind == "DomainError"
        assert error.message == message

    def test_cauchy_quantiles_are_defined(self) -> None:
        assert run_js("inv(cauchy(3, 1), 0.5)") == pytest.approx(3)

    def test_min_and_max_of_bounded_support(self) -> None:
        assert run_js("min(uniform(2, 4))") == pytest.approx(2)
        assert run_js("max(uniform(2, 4))") == pytest.approx(4)

    def test_sample_n(self) -> None:
        samples = run_js("sampleN(uniform(0, 1), 20)")
        assert len(samples) == 20
        assert all(0 <= x <= 1 for x in samples)

    def test_sample_n_rejects_fractional_count(self) -> None:
        assert run_error("sampleN(normal(0, 1), 2.5)").kind == "ArgumentError"

    def test_parameters(self) -> None:
        assert run_js("Dist.parameters(uniform(1, 3))") == {"low": 1.0, "high": 3.0}

    def test_is_normalized(self) -> None:
        assert run_js("isNormalized(normal(0, 1))") is True


class TestMixtures:
    def test_equal_weights(self) -> None:
        assert run_js("mean(mx(pointMass(0), pointMass(10)))") == pytest.approx(5)

    def test_explicit_weights(self) -> None:
        mean = run_js("mean(mixture(pointMass(0), pointMass(10), [0.2, 0.8]))")
        assert mean == pytest.approx(8)

    def test_list_form_accepts_numbers(self) -> None:
        assert run_js("mean(mx([1, 2, 3]))") == pytest.approx(2)

    def test_weights_length_mismatch(self) -> None:
        error = run_error("mx(normal(0, 1), normal(5, 1), [1])")
        assert error.kind == "ArgumentError"

    def test_negative_weight(self) -> None:
        assert run_error("mx(normal(0, 1), normal(5, 1), [1, -1])").kind == "DomainError"


class TestTruncation:
    def test_truncate_restricts_support(self) -> None:
        value = run("truncate(uniform(0, 10), 2, 4)")
        assert value.cdf(2) == pytest.approx(0, abs=1e-3)
        assert value.cdf(4) == pytest.approx(1, abs=1e-3)
        assert value.integral_sum() == pytest.approx(1)

    def test_truncate_left(self) -> None:
        assert run_js("cdf(truncateLeft(uniform(0, 10), 5), 5)") == pytest.approx(0, abs=1e-3)

    def test_truncate_requires_ordered_bounds(self) -> None:
        assert run_error("truncate(normal(0, 1), 3, 1)").kind == "DomainError"


class TestSampleSets:
    def test_from_list_and_back(self) -> None:
        assert run_js("SampleSet.toList(SampleSet.fromList([3, 1, 2]))") == [3.0, 1.0, 2.0]

    def test_from_list_rejects_empty_list(self) -> None:
        assert run_error("SampleSet.fromList([])").kind == "DomainError"

    def test_map(self) -> None:
        source = "SampleSet.fromList([1, 2, 3]) -> SampleSet.map({|x| x * 10}) -> SampleSet.toList"
        assert run_js(source) == [10.0, 20.0, 30.0]

    def test_from_fn_uses_sample_count(self) -> None:
        assert run_js("SampleSet.fromFn({|| 1}) -> SampleSet.toList -> length") == 1000

    def test_from_dist(self) -> None:
        value = run("SampleSet.fromDist(normal(0, 1))")
        assert isinstance(value, SqSampleSetDistribution)
        assert len(value.get_samples()) == 1000

    def test_sample_sets_pair_by_index(self) -> None:
        source = "s = SampleSet.fromList([1, 2, 3])\nSampleSet.toList(s - s)"
        assert run_js(source) == [0.0, 0.0, 0.0]


class TestPointSets:
    def test_make_continuous(self) -> None:
        value = run("PointSet.makeContinuous([{x: 0, y: 0.5}, {x: 2, y: 0.5}])")
        assert isinstance(value, SqPointSetDistribution)
        assert value.integral_sum() == pytest.approx(1)
        assert value.mean() == pytest.approx(1)
        assert value.get_points()["discrete"] == []

    def test_make_discrete(self) -> None:
        value = run("PointSet.makeDiscrete([{x: 1, y: 0.25}, {x: 3, y: 0.75}])")
        assert value.mean() == pytest.approx(2.5)
        assert value.get_points()["discrete"] == [(1.0, 0.25), (3.0, 0.75)]

    def test_from_dist_preserves_mean(self) -> None:
        assert run("PointSet.fromDist(normal(5, 1))").mean() == pytest.approx(5, rel=0.05)
