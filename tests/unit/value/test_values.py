from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from squiggle_core.dists import Normal
from squiggle_core.errors import ArgumentError, DomainError, InternalError
from squiggle_core.value import (
    EMPTY_TAGS,
    PathItem,
    PathRoot,
    Scale,
    ScaleType,
    SDate,
    SDuration,
    ValuePath,
    ValueTags,
    format_number,
    lookup_item,
    uniq,
    v_array,
    v_bool,
    v_dict,
    v_dist,
    v_number,
    v_string,
)


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (5.0, "5"),
            (2.5, "2.5"),
            (-3.0, "-3"),
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (1e21, "1e+21"),
        ],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_nested_string(self) -> None:
        value = v_dict({"a": v_array([v_number(1), v_string("x")]), "b": v_bool(True)})
        assert str(value) == '{a: [1,"x"], b: true}'


class TestConstruction:
    def test_v_number_rejects_booleans(self) -> None:
        with pytest.raises(InternalError):
            v_number(True)

    def test_v_dict_rejects_duplicate_pairs(self) -> None:
        with pytest.raises(InternalError, match="Duplicate"):
            v_dict([("a", v_number(1)), ("a", v_number(2))])

    def test_v_dict_is_read_only(self) -> None:
        value = v_dict({"a": v_number(1)})
        with pytest.raises(TypeError):
            value.value["b"] = v_number(2)  # type: ignore[index]


class TestEquality:
    def test_structural_equality(self) -> None:
        a = v_dict({"x": v_array([v_number(1), v_number(2)])})
        b = v_dict({"x": v_array([v_number(1), v_number(2)])})
        assert a.is_equal(b)
        assert not a.is_equal(v_dict({"x": v_array([v_number(1)])}))

    def test_tags_do_not_affect_equality(self) -> None:
        tagged = v_number(1).with_tags(ValueTags(name=v_string("one")))
        assert tagged.is_equal(v_number(1))

    def test_distributions_are_not_comparable(self) -> None:
        with pytest.raises(ArgumentError, match="Distribution"):
            v_dist(Normal.make(0, 1)).is_equal(v_number(1))

    def test_uniq(self) -> None:
        values = [v_number(1), v_number(2), v_number(1), v_string("1")]
        assert [str(v) for v in uniq(values)] == ["1", "2", '"1"']


class TestValueTags:
    def test_from_mapping_uses_language_keys(self) -> None:
        tags = ValueTags.from_mapping({"showAs": v_string("plot"), "hidden": v_bool(True)})
        assert tags.show_as == v_string("plot")
        assert tags.is_hidden()

    def test_unknown_key(self) -> None:
        with pytest.raises(TypeError, match="Invalid ValueTagsTypeName"):
            ValueTags.from_mapping({"colour": v_string("red")})

    def test_merge_overrides(self) -> None:
        base = ValueTags(name=v_string("a"), doc=v_string("doc"))
        merged = base.merge(ValueTags(name=v_string("b")))
        assert merged.get_name() == "b"
        assert merged.get_doc() == "doc"

    def test_to_list_skips_empty_and_false_tags(self) -> None:
        tags = ValueTags(name=v_string(""), hidden=v_bool(False), doc=v_string("d"))
        assert tags.to_list() == [("doc", v_string("d"))]
        assert EMPTY_TAGS.is_empty()

    def test_omit(self) -> None:
        tags = ValueTags(name=v_string("a"), doc=v_string("d")).omit(["name"])
        assert tags.get_name() is None
        assert tags.get_doc() == "d"

    def test_omit_using_string_keys_validates_all_keys_first(self) -> None:
        tags = ValueTags(name=v_string("a"))
        with pytest.raises(TypeError):
            tags.omit_using_string_keys(["name", "bogus"])

    def test_start_open_state(self) -> None:
        assert ValueTags(start_open_state=v_string("open")).get_start_open_state() == "open"
        assert ValueTags(start_open_state=v_string("ajar")).get_start_open_state() is None


class TestValuePath:
    def test_string_form(self) -> None:
        path = ValuePath(
            PathRoot.BINDINGS, (PathItem.from_string("x"), PathItem.from_number(2))
        )
        assert str(path) == "bindings.x[2]"

    def test_contains(self) -> None:
        parent = ValuePath(PathRoot.RESULT, (PathItem.from_string("a"),))
        child = parent.extend(PathItem.from_number(0))
        assert child.contains(parent)
        assert not parent.contains(child)
        assert not child.contains(ValuePath(PathRoot.BINDINGS))

    def test_serialize(self) -> None:
        path = ValuePath(
            PathRoot.EXPORTS,
            (
                PathItem.from_string("f"),
                PathItem.from_calculator(),
                PathItem.from_cell_address(1, 2),
            ),
        )
        assert ValuePath.deserialize(path.serialize_to_string()) == path

    @pytest.mark.parametrize(
        "text",
        ["not json", "[]", '{"root": "result", "items": [{"type": "number", "value": "x"}]}'],
    )
    def test_deserialize_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            ValuePath.deserialize(text)

    def test_lookup_item(self) -> None:
        record = v_dict({"xs": v_array([v_number(10), v_number(20)])})
        xs = lookup_item(record, PathItem.from_string("xs"))
        assert xs is not None
        assert lookup_item(xs, PathItem.from_number(1)) == v_number(20)
        assert lookup_item(xs, PathItem.from_number(5)) is None
        assert lookup_item(record, PathItem.from_number(0)) is None


class TestDates:
    def test_from_string(self) -> None:
        date = SDate.from_string("2024-03-01")
        assert str(date) == "Fri Mar 01 2024"

    def test_invalid_string(self) -> None:
        with pytest.raises(DomainError):
            SDate.from_string("yesterday")

    def test_year_bounds(self) -> None:
        with pytest.raises(DomainError, match="over 100"):
            SDate.from_year(99)

    def test_subtract(self) -> None:
        early = SDate.from_year_month_day(2024, 1, 1)
        late = SDate.from_year_month_day(2024, 1, 3)
        assert late.subtract(early) == SDuration.from_unit(2, "Day")
        with pytest.raises(DomainError):
            early.subtract(late)

    def test_invalid_day(self) -> None:
        with pytest.raises(DomainError):
            SDate.from_year_month_day(2023, 2, 30)

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (SDuration.from_unit(2, "Hour"), "2 hours"),
            (SDuration.from_unit(1, "Day"), "1 day"),
            (SDuration.from_unit(1.5, "Minute"), "1.5 minutes"),
            (SDuration(250), "250 ms"),
        ],
    )
    def test_duration_string(self, duration: SDuration, expected: str) -> None:
        assert str(duration) == expected

    def test_duration_divide_by_zero(self) -> None:
        with pytest.raises(DomainError):
            SDuration(10).divide(0)


class TestScale:
    def test_log_scale_requires_positive_min(self) -> None:
        with pytest.raises(DomainError, match="over 0"):
            Scale.make(ScaleType.LOG, min=0)

    def test_bounds_must_be_ordered(self) -> None:
        with pytest.raises(DomainError):
            Scale.make(ScaleType.LINEAR, min=3, max=1)

    def test_power_scale_requires_exponent(self) -> None:
        with pytest.raises(DomainError):
            Scale.make(ScaleType.POWER)

    def test_string(self) -> None:
        assert str(Scale.make(ScaleType.LINEAR)) == "Linear scale"
        assert str(Scale.make(ScaleType.LOG, min=1, max=10)) == "Log scale (min: 1, max: 10)"
