from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from tests.utils.evaluation import run, run_error, run_js


class TestTag:
    def test_name_and_doc(self):
        assert run_js('x = Tag.name(5, "Five")\nTag.getName(x)') == "Five"
        assert run_js('x = 5 -> Tag.doc("About five")\nTag.getDoc(x)') == "About five"

    def test_getters_of_untagged_values_are_void(self):
        assert run_js("Tag.getName(5)") is None
        assert run_js("Tag.getFormat(5)") is None

    def test_tags_do_not_change_the_value(self):
        assert run_js('Tag.name(5, "Five") + 1') == 6

    def test_title_of_wrapped_value(self):
        assert run('Tag.name(5, "Five")').title == "Five"

    def test_hide_defaults_to_true(self):
        assert run_js("Tag.getHide(Tag.hide(5))") is True
        assert run_js("Tag.getHide(Tag.hide(5, false))") is False
        assert run_js("Tag.getHide(5)") is False

    def test_format_depends_on_type(self):
        assert run_js('Tag.getFormat(Tag.format(5, ".2f"))') == ".2f"
        source = 'd = Tag.format(Date.make(2020, 1, 1), "%Y")\nTag.getAll(d)'
        assert run_js(source) == {"dateFormat": "%Y"}

    def test_show_as(self):
        assert run_js("Tag.getShowAs(Tag.showAs(5, [1, 2]))") == [1, 2]
        assert run_error('Tag.showAs(5, "text")').kind == "ArgumentError"

    def test_notebook_only_for_lists(self):
        assert run_js("Tag.getAll(Tag.notebook([1]))") == {"notebook": True}
        assert run_error("Tag.notebook(1)").kind == "ArgumentError"

    def test_get_all_omit_clear(self):
        source = 'x = 5 -> Tag.name("n") -> Tag.doc("d")'
        assert run_js(source + "\nTag.getAll(x)") == {"name": "n", "doc": "d"}
        assert run_js(source + '\nTag.getAll(Tag.omit(x, ["doc"]))') == {"name": "n"}
        assert run_js(source + "\nTag.getAll(Tag.clear(x))") == {}

    def test_omit_unknown_tag(self):
        error = run_error('Tag.omit(5, ["color"])')
        assert error.kind == "ArgumentError"
        assert "Invalid ValueTagsTypeName" in error.message

    def test_start_open_state(self):
        assert run_js("Tag.getAll(Tag.startOpen(1))") == {"startOpenState": "open"}
        assert run_js("Tag.getAll(Tag.startClosed(1))") == {"startOpenState": "closed"}

    def test_decorators_apply_tags(self):
        source = '@name("Price")\n@doc("In dollars")\nprice = 5\nTag.getAll(price)'
        assert run_js(source) == {"name": "Price", "doc": "In dollars"}
