from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from tests.utils.evaluation import run_error, run_js


class TestDict:
    def test_set_has_size_delete(self):
        assert run_js('Dict.set({a: 1}, "b", 2)') == {"a": 1, "b": 2}
        assert run_js('Dict.has({a: 1}, "a")') is True
        assert run_js("Dict.size({a: 1, b: 2})") == 2
        assert run_js('Dict.delete({a: 1, b: 2}, "a")') == {"b": 2}

    def test_get(self):
        assert run_js('Dict.get({a: 1}, "a")') == 1
        assert run_js('Dict.get({a: 1}, "b", 0)') == 0
        assert run_error('Dict.get({a: 1}, "b")').message == "Dict property not found: b"

    def test_merge_second_wins(self):
        assert run_js("Dict.merge({a: 1, b: 2}, {b: 3})") == {"a": 1, "b": 3}
        assert run_js("Dict.mergeMany([{a: 1}, {a: 2}, {c: 3}])") == {"a": 2, "c": 3}

    def test_keys_values_lists(self):
        assert run_js("Dict.keys({a: 1, b: 2})") == ["a", "b"]
        assert run_js("Dict.values({a: 1, b: 2})") == [1, 2]
        assert run_js("Dict.toList({a: 1})") == [["a", 1]]
        assert run_js('Dict.fromList([["a", 1], ["b", 2]])') == {"a": 1, "b": 2}

    def test_map_and_map_keys(self):
        assert run_js("Dict.map({a: 1}, {|v| v + 1})") == {"a": 2}
        assert run_js('Dict.mapKeys({a: 1}, {|k| k + "!"})') == {"a!": 1}
        assert run_error("Dict.mapKeys({a: 1}, {|k| 1})").kind == "ArgumentError"

    def test_pick_and_omit(self):
        assert run_js('Dict.pick({a: 1, b: 2}, ["a", "z"])') == {"a": 1}
        assert run_js('Dict.omit({a: 1, b: 2}, ["a"])') == {"b": 2}

    def test_namespace_is_required(self):
        assert run_error("merge({a: 1}, {b: 2})").kind == "BindingError"
