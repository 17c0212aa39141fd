from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from tests.utils.evaluation import run_error, run_js


class TestNumber:
    def test_scalar_functions_are_unqualified(self):
        assert run_js("floor(2.7)") == 2
        assert run_js("ceil(2.1)") == 3
        assert run_js("abs(-3)") == 3
        assert run_js("round(2.5)") == 3
        assert run_js("log(1)") == 0

    def test_log_edge_cases(self):
        assert run_js("log(0)") == -math.inf
        assert math.isnan(run_js("log(-1)"))

    def test_list_statistics_need_the_namespace(self):
        assert run_js("Number.sum([1, 2, 3])") == 6
        assert run_js("Number.mean([1, 2, 3])") == 2
        assert run_js("Number.max([1, 5, 3])") == 5
        assert run_js("Number.min(4, 2)") == 2
        assert run_js("Number.quantile([1, 2, 3, 4, 5], 0.5)") == 3
        assert run_js("Number.cumsum([1, 2, 3])") == [1, 3, 6]
        assert run_js("Number.diff([1, 4, 9])") == [3, 5]
        assert run_js("Number.sort([3, 1, 2])") == [1, 2, 3]

    def test_empty_list(self):
        assert run_error("Number.sum([])").kind == "ArgumentError"

    def test_math(self):
        assert run_js("Math.sqrt(16)") == 4
        assert run_js("Math.pi") == pytest.approx(math.pi)
        assert run_error("sqrt(4)").kind == "BindingError"

    def test_system(self):
        assert run_js("System.sampleCount()") == 1000
        assert isinstance(run_js("System.version()"), str)
