from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from squiggle_core.dists import (
    Environment,
    LogNormal,
    Normal,
    PointMass,
    PointSetDist,
    SampleSetDist,
    Uniform,
    algebraic_combination,
    mixture,
    normalize_weights,
    scale_log,
    scale_multiply,
    truncate,
)
from squiggle_core.dists.symbolic import try_analytic_combination
from squiggle_core.errors import DomainError
from squiggle_core.types import AlgebraicOperation, CombinationStrategy

Op = AlgebraicOperation


@pytest.fixture
def env() -> Environment:
    return Environment(sample_count=2000, xy_point_length=400, seed="operations")


class TestAnalyticCombination:
    def test_normal_sum(self) -> None:
        result = try_analytic_combination(Op.ADD, Normal.make(1, 3), Normal.make(2, 4))
        assert result == Normal.make(3, 5)

    def test_normal_difference(self) -> None:
        result = try_analytic_combination(Op.SUBTRACT, Normal.make(1, 3), Normal.make(2, 4))
        assert result == Normal.make(-1, 5)

    def test_lognormal_product(self) -> None:
        result = try_analytic_combination(Op.MULTIPLY, LogNormal.make(1, 3), LogNormal.make(2, 4))
        assert result == LogNormal.make(3, 5)

    def test_uniform_scaled_by_negative_constant(self) -> None:
        result = try_analytic_combination(Op.MULTIPLY, Uniform.make(1, 2), PointMass.make(-2))
        assert result == Uniform.make(-4, -2)

    def test_constant_divided_by_dist_has_no_closed_form(self) -> None:
        assert try_analytic_combination(Op.DIVIDE, PointMass.make(1), Normal.make(0, 1)) is None

    def test_normal_product_has_no_closed_form(self) -> None:
        assert try_analytic_combination(Op.MULTIPLY, Normal.make(0, 1), Normal.make(0, 1)) is None


class TestAlgebraicCombination:
    def test_auto_prefers_closed_form(self, env: Environment) -> None:
        result = algebraic_combination(Op.ADD, Normal.make(5, 2), Normal.make(5, 2), env)
        assert isinstance(result, Normal)

    def test_symbolic_strategy_without_closed_form(self, env: Environment) -> None:
        with pytest.raises(DomainError, match="No closed-form solution"):
            algebraic_combination(
                Op.MULTIPLY,
                Normal.make(0, 1),
                Normal.make(0, 1),
                env,
                strategy=CombinationStrategy.SYMBOLIC,
            )

    def test_monte_carlo_draws_sample_count(self, env: Environment) -> None:
        result = algebraic_combination(
            Op.ADD,
            Normal.make(5, 2),
            Normal.make(5, 2),
            env,
            strategy=CombinationStrategy.MONTE_CARLO,
        )
        assert isinstance(result, SampleSetDist)
        assert len(result) == env.sample_count
        assert result.mean() == pytest.approx(10, abs=0.3)

    def test_monte_carlo_keeps_sample_set_size(self, env: Environment) -> None:
        samples = SampleSetDist(np.arange(1.0, 11.0))
        result = algebraic_combination(Op.MULTIPLY, samples, Normal.make(0, 1), env)
        assert len(result) == 10

    def test_sample_sets_are_paired_index_by_index(self, env: Environment) -> None:
        samples = SampleSetDist([1.0, 2.0, 3.0])
        result = algebraic_combination(Op.SUBTRACT, samples, samples, env)
        assert result.samples.tolist() == [0.0, 0.0, 0.0]

    def test_convolution(self, env: Environment) -> None:
        result = algebraic_combination(
            Op.ADD,
            Uniform.make(0, 1),
            Uniform.make(0, 1),
            env,
            strategy=CombinationStrategy.CONVOLUTION,
        )
        assert isinstance(result, PointSetDist)
        assert result.mean() == pytest.approx(1, rel=0.05)

    def test_convolution_rejects_power(self, env: Environment) -> None:
        with pytest.raises(DomainError, match="Convolution is not defined"):
            algebraic_combination(
                Op.POWER,
                Uniform.make(1, 2),
                Uniform.make(1, 2),
                env,
                strategy=CombinationStrategy.CONVOLUTION,
            )

    def test_division_by_zero_samples(self, env: Environment) -> None:
        with pytest.raises(DomainError):
            algebraic_combination(Op.DIVIDE, Normal.make(1, 1), PointMass.make(0), env)

    def test_seeded_environment_is_reproducible(self, env: Environment) -> None:
        first = algebraic_combination(Op.MULTIPLY, Normal.make(0, 1), Uniform.make(0, 1), env)
        second = algebraic_combination(Op.MULTIPLY, Normal.make(0, 1), Uniform.make(0, 1), env)
        assert first.samples.tolist() == second.samples.tolist()


class TestScaleOperations:
    def test_multiply_symbolic(self, env: Environment) -> None:
        assert scale_multiply(LogNormal.make(0, 1), 2, env) == LogNormal.make(math.log(2), 1)

    def test_multiply_sample_set(self, env: Environment) -> None:
        result = scale_multiply(SampleSetDist([1.0, 2.0]), 3, env)
        assert result.samples.tolist() == [3.0, 6.0]

    def test_log_of_point_set_keeps_mass(self, env: Environment) -> None:
        result = scale_log(Uniform.make(1, 100), 10, env)
        assert isinstance(result, PointSetDist)
        assert result.integral_sum() == pytest.approx(1, rel=0.02)
        assert result.min() == pytest.approx(0, abs=0.01)

    def test_log_rejects_base_one(self, env: Environment) -> None:
        with pytest.raises(DomainError):
            scale_log(SampleSetDist([1.0, 2.0]), 1, env)


class TestMixture:
    def test_normalize_weights(self) -> None:
        assert normalize_weights([1, 3]) == [0.25, 0.75]

    @pytest.mark.parametrize("weights", [[1, -1], [0, 0], [float("nan"), 1]])
    def test_invalid_weights(self, weights: list[float]) -> None:
        with pytest.raises(DomainError):
            normalize_weights(weights)

    def test_empty_mixture(self, env: Environment) -> None:
        with pytest.raises(DomainError):
            mixture([], env)

    def test_point_set_mixture(self, env: Environment) -> None:
        result = mixture([(PointMass.make(0), 1), (Uniform.make(9, 11), 1)], env)
        assert isinstance(result, PointSetDist)
        assert result.integral_sum() == pytest.approx(1)
        assert result.mean() == pytest.approx(5, rel=0.02)

    def test_sample_set_component_gives_sample_set(self, env: Environment) -> None:
        samples = SampleSetDist(np.zeros(10))
        result = mixture([(samples, 1), (PointMass.make(1), 1)], env)
        assert isinstance(result, SampleSetDist)
        assert len(result) == env.sample_count
        assert set(result.samples.tolist()) <= {0.0, 1.0}


class TestTruncate:
    def test_no_bounds_returns_input(self, env: Environment) -> None:
        dist = Normal.make(0, 1)
        assert truncate(dist, None, None, env) is dist

    def test_sample_set(self, env: Environment) -> None:
        result = truncate(SampleSetDist([1.0, 2.0, 3.0, 4.0]), 2, 3, env)
        assert result.samples.tolist() == [2.0, 3.0]

    def test_no_mass_left(self, env: Environment) -> None:
        with pytest.raises(DomainError):
            truncate(SampleSetDist([1.0, 2.0]), 5, 6, env)


class TestConversionsAndMixtureQuantiles:
    @pytest.mark.parametrize(
        "mu1, sigma1, mu2, sigma2", [(0, 1, 0, 1), (-3, 0.5, 7, 2), (1e3, 10, 2, 1)]
    )
    def test_normal_sum_mean(self, mu1: float, sigma1: float, mu2: float, sigma2: float) -> None:
        total = algebraic_combination(
            Op.ADD, Normal.make(mu1, sigma1), Normal.make(mu2, sigma2), Environment()
        )
        assert total.mean() == pytest.approx(mu1 + mu2)

    def test_symbolic_to_sample_set_to_point_set(self, env: Environment) -> None:
        point_set = Normal.make(10, 1).to_sample_set(env).to_point_set(env)
        assert isinstance(point_set, PointSetDist)
        assert point_set.mean() == pytest.approx(10, rel=0.05)

    def test_median_follows_the_heavier_component(self, env: Environment) -> None:
        low, high = Normal.make(0, 1), Normal.make(10, 1)
        assert mixture([(low, 0.8), (high, 0.2)], env).inv(0.5) < 5
        assert mixture([(low, 0.2), (high, 0.8)], env).inv(0.5) > 5
