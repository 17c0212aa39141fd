from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from tests.utils.evaluation import run_error, run_js


class TestScale:
    def test_linear(self):
        assert run_js("Scale.linear()") == {"type": "linear"}
        assert run_js("Scale.linear({min: 0, max: 10})") == {"type": "linear", "min": 0, "max": 10}

    def test_log_needs_positive_min(self):
        assert run_js("Scale.log({min: 1})") == {"type": "log", "min": 1}
        error = run_error("Scale.log({min: 0})")
        assert error.kind == "DomainError"
        assert error.message == "Min must be over 0 for log scale, got: 0.0"

    def test_max_must_exceed_min(self):
        assert run_error("Scale.linear({min: 5, max: 1})").kind == "DomainError"

    def test_power_and_symlog(self):
        assert run_js("Scale.power({exponent: 2})") == {"type": "power", "exponent": 2}
        assert run_js('Scale.symlog({tickFormat: ".1"})') == {"type": "symlog", "tickFormat": ".1"}

    def test_power_needs_exponent(self):
        assert run_error("Scale.power({})").kind == "ArgumentError"
