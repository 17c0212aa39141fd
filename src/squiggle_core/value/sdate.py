"""
Dates and durations of the language.

Both are stored as milliseconds (dates since the Unix epoch, UTC) so that
date arithmetic stays exact and years far outside the range of
:mod:`datetime` remain representable.
"""

from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from squiggle_core.errors import DomainError

MS_PER_SECOND = 1000.0
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
MS_PER_YEAR = 365.25 * MS_PER_DAY

DURATION_UNITS: dict[str, float] = {
    "Second": MS_PER_SECOND,
    "Minute": MS_PER_MINUTE,
    "Hour": MS_PER_HOUR,
    "Day": MS_PER_DAY,
    "Year": MS_PER_YEAR,
}

MIN_YEAR = 100
MAX_YEAR = 200000

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _format_amount(value: float) -> str:
    rounded = round(value, 2)
    return str(int(rounded)) if rounded == int(rounded) else f"{rounded:g}"


@dataclass(frozen=True, slots=True, order=True)
class SDuration:
    """Signed time span in milliseconds."""

    ms: float

    @classmethod
    def from_unit(cls, amount: float, unit: str) -> SDuration:
        return cls(amount * DURATION_UNITS[unit])

    def to_unit(self, unit: str) -> float:
        return self.ms / DURATION_UNITS[unit]

    def __add__(self, other: SDuration) -> SDuration:
        return SDuration(self.ms + other.ms)

    def __sub__(self, other: SDuration) -> SDuration:
        return SDuration(self.ms - other.ms)

    def multiply(self, factor: float) -> SDuration:
        return SDuration(self.ms * factor)

    def divide(self, divisor: float) -> SDuration:
        if divisor == 0:
            raise DomainError("Cannot divide a duration by zero")
        return SDuration(self.ms / divisor)

    def __str__(self) -> str:
        size = abs(self.ms)
        for unit in ("Year", "Day", "Hour", "Minute", "Second"):
            per_unit = DURATION_UNITS[unit]
            if size >= per_unit:
                amount = self.ms / per_unit
                label = unit.lower() if math.isclose(abs(amount), 1) else f"{unit.lower()}s"
                return f"{_format_amount(amount)} {label}"
        return f"{_format_amount(self.ms)} ms"


@dataclass(frozen=True, slots=True, order=True)
class SDate:
    """Point in time, milliseconds since the Unix epoch."""

    ms: float

    @classmethod
    def from_string(cls, text: str) -> SDate:
        """
        Parse an ISO 8601 date or date-time.

        Raises
        ------
        DomainError
            If ``text`` is not a valid date.
        """
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise DomainError("Invalid date string") from None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return cls((parsed - _EPOCH) / timedelta(milliseconds=1))

    @classmethod
    def from_year(cls, year: float) -> SDate:
        """
        Start of ``year`` plus the fractional part of a year.

        Raises
        ------
        DomainError
            If the year is below 100 or above 200000.
        """
        whole = math.floor(year)
        if whole < MIN_YEAR:
            raise DomainError(f"Year must be over {MIN_YEAR}")
        if whole > MAX_YEAR:
            raise DomainError(f"Year must be less than {MAX_YEAR}")
        if whole <= datetime.max.year:
            start = (datetime(whole, 1, 1, tzinfo=UTC) - _EPOCH) / timedelta(milliseconds=1)
        else:
            start = (whole - 1970) * MS_PER_YEAR
        return cls(start + (year - whole) * MS_PER_YEAR)

    @classmethod
    def from_year_month_day(cls, year: int, month: int, day: int) -> SDate:
        """
        Raises
        ------
        DomainError
            If the month or the day is out of range.
        """
        if not 1 <= month <= 12:
            raise DomainError(f"Month must be between 1 and 12, got {month}")
        if not 1 <= day <= 31:
            raise DomainError(f"Day must be between 1 and 31, got {day}")
        try:
            moment = datetime(year, month, day, tzinfo=UTC)
        except ValueError as exc:
            raise DomainError(str(exc)) from exc
        return cls((moment - _EPOCH) / timedelta(milliseconds=1))

    @classmethod
    def from_unix_s(cls, seconds: float) -> SDate:
        return cls(seconds * MS_PER_SECOND)

    def to_unix_s(self) -> float:
        return self.ms / MS_PER_SECOND

    def to_datetime(self) -> datetime | None:
        """Equivalent aware datetime, or ``None`` outside the range of :mod:`datetime`."""
        try:
            return _EPOCH + timedelta(milliseconds=self.ms)
        except OverflowError:
            return None

    def subtract(self, other: SDate) -> SDuration:
        """
        Raises
        ------
        DomainError
            If ``other`` lies after ``self``.
        """
        diff = self.ms - other.ms
        if diff < 0:
            raise DomainError("Cannot subtract a date by one that is in its future")
        return SDuration(diff)

    def add_duration(self, duration: SDuration) -> SDate:
        return SDate(self.ms + duration.ms)

    def subtract_duration(self, duration: SDuration) -> SDate:
        return SDate(self.ms - duration.ms)

    def __str__(self) -> str:
        moment = self.to_datetime()
        if moment is None:
            return f"{self.ms / MS_PER_YEAR + 1970:.2f}"
        return moment.strftime("%a %b %d %Y")


__all__ = [
    "DURATION_UNITS",
    "MIN_YEAR",
    "MAX_YEAR",
    "SDuration",
    "SDate",
]
