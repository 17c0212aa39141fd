from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import asyncio
from datetime import timedelta

import pytest

from squiggle_core import (
    BindingError,
    Project,
    SqArray,
    SqDict,
    SqDistribution,
    SqError,
    SqLambda,
    SqNumber,
    SqPointSetDistribution,
    SqSampleSetDistribution,
    SqScale,
    SqSymbolicDistribution,
)
from squiggle_core.result import Err, Ok
from squiggle_core.value import PathItem, PathRoot, SDate, ValuePath, v_number, v_string
from tests.utils.evaluation import run, run_error


class TestWrappers:
    @pytest.mark.parametrize(
        "source, wrapper",
        [
            ("1", SqNumber),
            ("[1, 2]", SqArray),
            ("{a: 1}", SqDict),
            ("Scale.linear()", SqScale),
            ("{|x| x}", SqLambda),
            ("normal(0, 1)", SqSymbolicDistribution),
            ("SampleSet.fromList([1, 2, 3])", SqSampleSetDistribution),
            ("PointSet.fromDist(uniform(0, 1))", SqPointSetDistribution),
        ],
    )
    def test_wrapper_class(self, source: str, wrapper: type) -> None:
        assert isinstance(run(source), wrapper)

    def test_distribution_wrappers_share_a_base(self) -> None:
        assert isinstance(run("normal(0, 1)"), SqDistribution)
        assert isinstance(run("normal(0, 1)").as_js(), SqDistribution)

    def test_nested_as_js(self) -> None:
        assert run('{a: [1, "x", true], b: ()}').as_js() == {"a": [1, "x", True], "b": None}

    def test_date_and_duration(self) -> None:
        assert run("Date.make(2020, 1, 1)").as_js() == SDate.from_year_month_day(2020, 1, 1)
        assert run("2 * Duration.fromHours(1)").as_js() == timedelta(hours=2)

    def test_scale_as_js(self) -> None:
        assert run("Scale.log({min: 1, max: 10})").as_js() == {"type": "log", "min": 1, "max": 10}

    def test_dict_access(self) -> None:
        value = run("{a: 1, b: 2}")
        assert value.keys() == ["a", "b"]
        assert value.get("b").as_js() == 2
        assert value.get("c") is None

    def test_record_with_nested_distribution(self) -> None:
        value = run('{ x: 5, y: [3, "foo", {dist: normal(5,2)}] }')
        assert value.get("x").as_js() == 5
        items = value.get("y").get_values()
        assert [items[0].as_js(), items[1].as_js()] == [3, "foo"]
        assert isinstance(items[2].get("dist"), SqSymbolicDistribution)

    def test_log_scale_with_negative_min(self) -> None:
        assert run_error("Scale.log({min: -5})").kind == "DomainError"

    def test_title_comes_from_name_tag(self) -> None:
        assert run('Tag.name(5, "Five")').title == "Five"
        assert run("5").title is None


class TestLambda:
    def test_call_user_function(self) -> None:
        fn = run("f(x, y) = x * y\nf")
        assert fn.parameter_counts() == [2]
        result = fn.call([v_number(3), v_number(4)])
        assert isinstance(result, Ok)
        assert result.value.as_js() == 12

    def test_call_failure_is_an_err(self) -> None:
        result = run("{|x| x + 1}").call([v_string("a")])
        assert isinstance(result, Err)
        assert result.value.kind == "ArgumentError"

    def test_stdlib_function(self) -> None:
        fn = SqLambda.create_from_stdlib_name("List.upTo")
        result = fn.call([v_number(1), v_number(5)])
        assert isinstance(result, Ok)
        assert result.value.as_js() == [1, 2, 3, 4, 5]

    def test_stdlib_function_accepts_wrapped_arguments(self) -> None:
        fn = SqLambda.create_from_stdlib_name("Number.floor")
        assert fn.call([run("2.7")]).value.as_js() == 2

    def test_unknown_stdlib_function(self) -> None:
        with pytest.raises(BindingError):
            SqLambda.create_from_stdlib_name("List.nope")


class TestErrors:
    def test_kind_and_message(self) -> None:
        error = run_error("x = 1\nx + y")
        assert error.kind == "BindingError"
        assert error.message == "y is not defined"
        assert error.location is not None
        assert error.location.start.line == 2

    def test_frames_innermost_first(self) -> None:
        error = run_error('inner() = throw("boom")\nouter() = inner()\nouter()')
        names = [frame.name for frame in error.frames()]
        assert names.index("inner") < names.index("outer")
        assert names[-1] == "<top>"
        assert "Stack trace" in error.to_string_with_stack_trace()

    def test_parse_error_has_location_but_no_frames(self) -> None:
        error = run_error("x = ")
        assert error.kind == "ParseError"
        assert error.location is not None
        assert error.frames() == []

    def test_other_error(self) -> None:
        error = SqError.create_other_error("Not found")
        assert error.kind == "OtherError"
        assert error.to_string() == "Not found"
        assert error.location is None
        assert repr(error) == "SqError(OtherError: 'Not found')"


class TestContexts:
    def setup_method(self) -> None:
        self.project = Project()
        self.project.set_source("main", "x = {a: [1, 2], b: 3}\nx.a")
        asyncio.run(self.project.run_all())

    def test_children_extend_the_path(self) -> None:
        first = self.project.get_bindings("main").get("x").get("a").get_values()[0]
        assert str(first.context.path) == "bindings.x.a[0]"
        assert first.context.source_id == "main"

    def test_subvalue_by_path(self) -> None:
        bindings = self.project.get_bindings("main")
        path = ValuePath(
            PathRoot.BINDINGS,
            (PathItem.from_string("x"), PathItem.from_string("a"), PathItem.from_number(1)),
        )
        assert bindings.get_subvalue_by_path(path).as_js() == 2

    def test_subvalue_outside_the_value(self) -> None:
        bindings = self.project.get_bindings("main")
        path = ValuePath(PathRoot.RESULT, (PathItem.from_number(0),))
        assert bindings.get_subvalue_by_path(path) is None
        missing = ValuePath(PathRoot.BINDINGS, (PathItem.from_string("nope"),))
        assert bindings.get_subvalue_by_path(missing) is None

    def test_context_location(self) -> None:
        value = self.project.get_bindings("main").get("x").get("b")
        location = value.context.location
        assert location is not None
        assert location.start.line == 1
