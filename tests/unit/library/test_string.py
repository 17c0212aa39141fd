from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from tests.utils.evaluation import run_js


class TestString:
    def test_make_and_concat(self):
        assert run_js("String.make(5)") == "5"
        assert run_js('String.concat("a", "b")') == "ab"
        assert run_js('String.concat("n = ", 2.5)') == "n = 2.5"

    def test_split(self):
        assert run_js('String.split("a,b", ",")') == ["a", "b"]
        assert run_js('String.split("ab", "")') == ["a", "b"]

    def test_case_and_length(self):
        assert run_js('String.toUpperCase("ab")') == "AB"
        assert run_js('String.toLowerCase("AB")') == "ab"
        assert run_js('String.length("abc")') == 3

    def test_common_functions(self):
        assert run_js("typeOf(1)") == "Number"
        assert run_js("typeOf([])") == "List"
        assert run_js('toString("x")') == "x"
        assert run_js("toString([1, true])") == "[1,true]"
