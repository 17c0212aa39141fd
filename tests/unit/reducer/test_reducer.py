from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from squiggle_core.ast.parser import parse
from squiggle_core.errors import BindingError, ErrorWithStack
from squiggle_core.library.stdlib import registry, std_lib
from squiggle_core.reducer.frame_stack import TOP_FRAME_NAME
from squiggle_core.reducer.reducer import evaluate_program
from squiggle_core.value.values import VNumber
from tests.utils.evaluation import run_error, run_js


class TestEvaluation:
    def test_arithmetic(self):
        assert run_js("1 + 2 * 3") == 7
        assert run_js("2 ^ 10") == 1024
        assert run_js("(1 + 2) * 3") == 9

    def test_ieee_division(self):
        assert run_js("1 / 0") == math.inf
        assert math.isnan(run_js("0 / 0"))

    def test_string_concatenation(self):
        assert run_js('"a" + "b"') == "ab"

    def test_comparisons_and_booleans(self):
        assert run_js("1 < 2 && 3 >= 3") is True
        assert run_js("!(1 == 1) || false") is False
        assert run_js("1 != 2") is True

    def test_boolean_operators_short_circuit(self):
        assert run_js('false && throw("never")') is False
        assert run_js('true || throw("never")') is True

    def test_ternaries(self):
        assert run_js("x = 5\nx > 3 ? 1 : 2") == 1
        assert run_js("if 1 > 3 then 1 else 2") == 2

    def test_ternary_needs_a_boolean(self):
        error = run_error("1 ? 2 : 3")
        assert error.kind == "ArgumentError"

    def test_blocks_do_not_leak(self):
        assert run_js("x = 1\ny = {x = 10; x + 1}\n[x, y]") == [1, 11]

    def test_shadowing(self):
        assert run_js("x = 1\nx = x + 1\nx") == 2

    def test_dict_literals_and_lookups(self):
        assert run_js('a = 1\nd = {a, "b c": 2}\n[d.a, d["b c"]]') == [1, 2]

    def test_last_duplicate_key_wins(self):
        assert run_js("{a: 1, a: 2}") == {"a": 2}

    def test_array_index(self):
        assert run_js("[10, 20, 30][1]") == 20
        assert run_error("[1][3]").kind == "ArgumentError"
        assert run_error("[1][0.5]").kind == "ArgumentError"

    def test_missing_key(self):
        error = run_error("{a: 1}.b")
        assert error.message == "Dict property not found: b"

    def test_unbound_name(self):
        error = run_error("foo + 1")
        assert error.kind == "BindingError"
        assert error.message == "foo is not defined"

    def test_calling_a_non_function(self):
        assert run_error("x = 1\nx(2)").kind == "ArgumentError"

    def test_void(self):
        assert run_js("()") is None
        assert run_js("x = 1") is None

    def test_units(self):
        assert run_js("5k") == 5000
        assert run_js("10%") == pytest.approx(0.1)
        assert run_js("2M") == 2_000_000


class TestFunctions:
    def test_closures_capture_definition_scope(self):
        source = "make(a) = {|x| x + a}\nadd5 = make(5)\na = 100\nadd5(2)"
        assert run_js(source) == 7

    def test_recursive_definition(self):
        source = "fact(n) = if n <= 1 then 1 else n * fact(n - 1)\nfact(5)"
        assert run_js(source) == 120

    def test_pipes(self):
        assert run_js("f(a, b) = a - b\n10 -> f(3)") == 7
        assert run_js("[1, 2] -> List.length") == 2

    def test_wrong_arity(self):
        error = run_error("f(x) = x\nf(1, 2)")
        assert error.kind == "ArgumentError"
        assert "1 arguments expected" in error.message

    def test_builtin_dispatch_error_lists_signatures(self):
        error = run_error('Math.sqrt("a")')
        assert error.kind == "ArgumentError"
        assert "Math.sqrt(Number) => Number" in error.message

    def test_stack_depth(self):
        error = run_error("f(n) = f(n + 1)\nf(0)")
        assert error.kind == "StackDepthError"

    def test_error_carries_frames(self):
        error = run_error('inner() = throw("boom")\nouter() = inner()\nouter()')
        assert error.kind == "UserError"
        assert error.message == "boom"
        names = [frame.name for frame in error.frames()]
        assert names == ["inner", "outer", TOP_FRAME_NAME]
        assert error.frames()[0].location.start.line == 1
        assert "Stack trace" in error.to_string_with_stack_trace()

    def test_top_level_call_is_in_top_frame(self):
        error = run_error('x = 1\nthrow("top")')
        assert [frame.name for frame in error.frames()] == [TOP_FRAME_NAME]
        assert error.frames()[0].location.start.line == 2

    def test_error_location(self):
        error = run_error("x = 1\ny = x + z")
        assert error.location is not None
        assert error.location.start.line == 2


class TestDecorators:
    def test_name_decorator_sets_tag(self):
        assert run_js('@name("Price")\nx = 5\nTag.getName(x)') == "Price"

    def test_unknown_decorator(self):
        assert run_error("@nosuch\nx = 5\nx").kind == "BindingError"


class TestEvaluateProgram:
    def test_bindings_and_exports(self):
        program = parse("export a = 1\nb = 2\na + b")
        output = evaluate_program(program, std_lib(), registry=registry())
        assert output.result == VNumber(3.0)
        assert list(output.bindings.value) == ["a", "b"]
        assert list(output.exports.value) == ["a"]

    def test_errors_carry_a_stack(self):
        program = parse("x = y")
        with pytest.raises(ErrorWithStack) as info:
            evaluate_program(program, std_lib())
        assert isinstance(info.value.error, BindingError)
