from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from datetime import timedelta

import pytest

from squiggle_core.value.sdate import SDate
from tests.utils.evaluation import run_error, run_js


class TestDate:
    def test_make_forms(self):
        assert run_js('Date.make("2020-01-01")') == SDate.from_year_month_day(2020, 1, 1)
        assert run_js("Date.make(2020, 1, 1)") == SDate.from_year_month_day(2020, 1, 1)
        assert run_js("Date.make(2020)") == SDate.from_year_month_day(2020, 1, 1)

    def test_invalid_dates(self):
        assert run_error('Date.make("not a date")').kind == "DomainError"
        assert run_error("Date.make(2020, 13, 1)").kind == "DomainError"
        assert run_error("Date.make(2020.5, 1, 1)").kind == "DomainError"
        assert run_error("Date.make(50)").kind == "DomainError"

    def test_unix_time(self):
        assert run_js("Date.toUnixTime(Date.fromUnixTime(86400))") == 86400
        assert run_js('Date.toUnixTime(Date.make("1970-01-02"))') == 86400

    def test_difference_of_dates_is_a_duration(self):
        source = 'Date.make("2020-01-02") - Date.make("2020-01-01")'
        assert run_js(source) == timedelta(days=1)
        assert run_js(f"Duration.toHours({source})") == 24

    def test_subtracting_a_later_date(self):
        error = run_error('Date.make("2020-01-01") - Date.make("2020-01-02")')
        assert error.kind == "DomainError"

    def test_date_plus_duration(self):
        source = 'Date.make("2020-01-01") + Duration.fromDays(31)'
        assert run_js(source) == SDate.from_year_month_day(2020, 2, 1)
        source = 'Duration.fromDays(1) + Date.make("2020-01-01")'
        assert run_js(source) == SDate.from_year_month_day(2020, 1, 2)

    def test_duration_arithmetic(self):
        assert run_js("Duration.toMinutes(Duration.fromHours(1) * 2)") == 120
        assert run_js("Duration.toMinutes(2 * Duration.fromHours(1))") == 120
        assert run_js("Duration.fromDays(1) / Duration.fromHours(6)") == 4
        assert run_js("Duration.toSeconds(-Duration.fromMinutes(1))") == -60
        assert run_js("Duration.toYears(Duration.fromDays(365.25))") == pytest.approx(1.0)

    def test_dividing_a_duration_by_zero(self):
        assert run_error("Duration.fromDays(1) / 0").kind == "DomainError"

    def test_comparisons(self):
        assert run_js('Date.make("2020-01-01") < Date.make("2021-01-01")') is True
        assert run_js("Duration.fromHours(1) >= Duration.fromMinutes(60)") is True

    def test_display(self):
        assert run_js('toString(Date.make("2020-03-01"))') == "Sun Mar 01 2020"
        assert run_js("toString(Duration.fromHours(2))") == "2 hours"
