from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import asyncio

import pytest

from squiggle_core import (
    CompileError,
    Environment,
    IdentityResolver,
    MappingResolver,
    Project,
    evaluate,
)
from squiggle_core.library.fn_definition import FRFunction, make_definition
from squiggle_core.library.frtypes import fr_number
from squiggle_core.library.stdlib import make_registry
from squiggle_core.result import Err, Ok
from squiggle_core.value.path import PathItem, PathRoot, ValuePath


def run_all(project: Project) -> None:
    asyncio.run(project.run_all())


def result_of(project: Project, source_id: str) -> object:
    result = project.get_result(source_id)
    assert isinstance(result, Ok), result.value
    return result.value.as_js()


def error_of(project: Project, source_id: str):
    result = project.get_result(source_id)
    assert isinstance(result, Err), result.value
    return result.value


class Counter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return float(self.calls)


@pytest.fixture
def counter() -> Counter:
    return Counter()


@pytest.fixture
def counting_project(counter: Counter) -> Project:
    count = FRFunction(
        name="count",
        namespace="Test",
        requires_namespace=True,
        definitions=(make_definition([], fr_number, counter),),
    )
    return Project(registry=make_registry(extra_functions=[count]))


class TestSources:
    def test_set_and_get_source(self) -> None:
        project = Project()
        project.set_source("a", "1 + 1")
        assert project.get_source_ids() == ["a"]
        assert project.get_source("a") == "1 + 1"
        assert project.get_source("missing") is None

    def test_remove_source(self) -> None:
        project = Project()
        project.set_source("a", "1")
        project.remove_source("a")
        assert project.get_source_ids() == []

    def test_unknown_source(self) -> None:
        with pytest.raises(KeyError, match="Source x not found"):
            Project().touch_source("x")

    def test_result_before_run(self) -> None:
        project = Project()
        project.set_source("a", "1")
        assert error_of(project, "a").kind == "NeedToRunError"

    def test_run_single_source(self) -> None:
        project = Project()
        project.set_source("a", "x = 2\nx * 3")
        asyncio.run(project.run("a"))
        assert result_of(project, "a") == 6
        assert project.get_bindings("a").as_js() == {"x": 2}

    def test_exports(self) -> None:
        project = Project()
        project.set_source("a", "export x = 1\ny = 2")
        run_all(project)
        assert project.get_exports("a").as_js() == {"x": 1}
        assert project.get_bindings("a").keys() == ["x", "y"]

    def test_parse_error_is_stored(self) -> None:
        project = Project()
        project.set_source("a", "x = ")
        run_all(project)
        assert error_of(project, "a").kind == "ParseError"
        assert project.get_bindings("a").as_js() == {}

    def test_environment(self) -> None:
        project = Project(environment=Environment(sample_count=7))
        project.set_source("a", "SampleSet.fromDist(normal(0, 1)) -> SampleSet.toList -> length")
        run_all(project)
        assert result_of(project, "a") == 7
        project.set_environment(Environment(sample_count=3))
        assert project.get_environment().sample_count == 3


class TestCaching:
    def test_outputs_are_cached(self, counting_project: Project, counter: Counter) -> None:
        counting_project.set_source("a", "Test.count()")
        run_all(counting_project)
        run_all(counting_project)
        assert counter.calls == 1
        assert result_of(counting_project, "a") == 1

    def test_touch_source_reruns(self, counting_project: Project, counter: Counter) -> None:
        counting_project.set_source("a", "Test.count()")
        run_all(counting_project)
        counting_project.touch_source("a")
        run_all(counting_project)
        assert counter.calls == 2
        assert result_of(counting_project, "a") == 2

    def test_editing_a_dependency_reruns_dependents(
        self, counting_project: Project, counter: Counter
    ) -> None:
        counting_project.set_source("a", "x = 1")
        counting_project.set_source("b", "x + Test.count()")
        counting_project.set_continues("b", ["a"])
        run_all(counting_project)
        counting_project.set_source("a", "x = 10")
        run_all(counting_project)
        assert counter.calls == 2
        assert result_of(counting_project, "b") == 12

    def test_unrelated_sources_keep_their_output(
        self, counting_project: Project, counter: Counter
    ) -> None:
        counting_project.set_source("a", "Test.count()")
        counting_project.set_source("b", "1")
        run_all(counting_project)
        counting_project.set_source("b", "2")
        run_all(counting_project)
        assert counter.calls == 1

    def test_clean_all(self, counting_project: Project, counter: Counter) -> None:
        counting_project.set_source("a", "Test.count()")
        run_all(counting_project)
        counting_project.clean_all()
        assert error_of(counting_project, "a").kind == "NeedToRunError"
        run_all(counting_project)
        assert counter.calls == 2


class TestContinues:
    def test_continued_bindings_are_visible(self) -> None:
        project = Project()
        project.set_source("a", "x = 2")
        project.set_source("b", "y = 3")
        project.set_source("c", "x * y")
        project.set_continues("c", ["a", "b"])
        run_all(project)
        assert project.get_continues("c") == ["a", "b"]
        assert result_of(project, "c") == 6

    def test_own_bindings_shadow_continued_ones(self) -> None:
        project = Project()
        project.set_source("a", "x = 2")
        project.set_source("b", "x = 5\nx")
        project.set_continues("b", ["a"])
        run_all(project)
        assert result_of(project, "b") == 5

    def test_failure_propagates_to_dependents_only(self) -> None:
        project = Project()
        project.set_source("a", "x = 1 + true")
        project.set_source("b", "x")
        project.set_source("c", "5")
        project.set_continues("b", ["a"])
        run_all(project)
        assert error_of(project, "a").kind == "ArgumentError"
        assert error_of(project, "b").message == error_of(project, "a").message
        assert result_of(project, "c") == 5

    def test_missing_dependency(self) -> None:
        project = Project()
        project.set_source("b", "1")
        project.set_continues("b", ["nowhere"])
        run_all(project)
        error = error_of(project, "b")
        assert error.kind == "CompileError"
        assert "nowhere" in error.message

    def test_cycle(self) -> None:
        project = Project()
        project.set_source("a", "1")
        project.set_source("b", "2")
        project.set_continues("a", ["b"])
        project.set_continues("b", ["a"])
        with pytest.raises(CompileError, match="Cyclic import"):
            project.get_run_order()


class TestImports:
    def test_import_binds_record(self) -> None:
        project = Project(resolver=MappingResolver({"./lib": "lib"}))
        project.set_source("lib", "export double(x) = x * 2\nhidden = 1")
        project.set_source("main", 'import "./lib" as lib\nlib.double(4) + lib.hidden')
        run_all(project)
        assert result_of(project, "main") == 9
        assert project.get_import_ids("main") == Ok(["lib"])
        assert project.get_dependencies("main") == ["lib"]
        assert project.get_dependents("lib") == ["main"]

    def test_run_order(self) -> None:
        project = Project(resolver=IdentityResolver())
        project.set_source("main", 'import "lib" as l\nl.x')
        project.set_source("lib", "x = 1")
        assert project.get_run_order() == ["lib", "main"]
        assert project.get_run_order_for("lib") == ["lib"]

    def test_imports_need_a_resolver(self) -> None:
        project = Project()
        project.set_source("main", 'import "lib" as l\n1')
        run_all(project)
        error = error_of(project, "main")
        assert error.kind == "CompileError"
        assert isinstance(project.get_import_ids("main"), Err)

    def test_unresolvable_import(self) -> None:
        project = Project(resolver=MappingResolver({}))
        project.set_source("main", 'import "lib" as l\n1')
        run_all(project)
        assert "Cannot resolve import" in error_of(project, "main").message

    def test_run_with_imports_loads_sources(self) -> None:
        sources = {"lib": 'import "base" as b\nexport y = b.x + 1', "base": "x = 1"}
        loaded: list[str] = []

        async def load(source_id: str) -> str:
            loaded.append(source_id)
            return sources[source_id]

        project = Project(resolver=IdentityResolver())
        project.set_source("main", 'import "lib" as lib\nlib.y * 10')
        asyncio.run(project.run_with_imports("main", load))
        assert loaded == ["lib", "base"]
        assert result_of(project, "main") == 20

    def test_run_with_imports_detects_cycles(self) -> None:
        sources = {"a": 'import "main" as m\n1'}

        async def load(source_id: str) -> str:
            return sources[source_id]

        project = Project(resolver=IdentityResolver())
        project.set_source("main", 'import "a" as a\n1')
        with pytest.raises(CompileError, match="Cyclic import main -> a -> main"):
            asyncio.run(project.run_with_imports("main", load))


class TestRegistry:
    def test_ambiguous_name(self) -> None:
        extra = FRFunction(
            name="floor",
            namespace="Extra",
            requires_namespace=False,
            definitions=(make_definition([fr_number], fr_number, lambda x: x),),
        )
        project = Project(registry=make_registry(extra_functions=[extra]))
        project.set_source("a", "floor(2.5)")
        project.set_source("b", "Number.floor(2.5)")
        project.set_source("c", "Extra.floor(2.5)")
        run_all(project)
        error = error_of(project, "a")
        assert error.kind == "CompileError"
        assert "Extra.floor" in error.message
        assert result_of(project, "b") == 2
        assert result_of(project, "c") == 2.5


class TestValueLocations:
    def test_find_binding(self) -> None:
        project = Project()
        project.set_source("a", "x = 1\ny = {a: 2, b: 3}")
        found = project.find_value_location_by_offset("a", 20)
        assert isinstance(found, Ok)
        expected = ValuePath(
            PathRoot.BINDINGS, (PathItem.from_string("y"), PathItem.from_string("b"))
        )
        assert found.value.path == expected

    def test_nothing_at_offset(self) -> None:
        project = Project()
        project.set_source("a", "x = 1\n\n\n")
        assert isinstance(project.find_value_location_by_offset("a", 7), Err)

    def test_result_context_locates_value(self) -> None:
        project = Project()
        project.set_source("main", "x = 1\n[10, 20]")
        run_all(project)
        result = project.get_result("main")
        assert isinstance(result, Ok)
        item = result.value.get_subvalue_by_path(
            ValuePath(PathRoot.RESULT, (PathItem.from_number(1),))
        )
        assert item is not None
        assert item.as_js() == 20
        location = item.context.location
        assert location is not None
        assert (location.start.line, location.start.column) == (2, 6)


class TestEvaluate:
    def test_evaluate(self) -> None:
        result, bindings = evaluate("a = 1\na + 1")
        assert isinstance(result, Ok)
        assert result.value.as_js() == 2
        assert bindings.as_js() == {"a": 1}

    def test_evaluate_error(self) -> None:
        result, bindings = evaluate("a = 1\nb")
        assert isinstance(result, Err)
        assert result.value.kind == "BindingError"
        assert bindings.as_js() == {}
