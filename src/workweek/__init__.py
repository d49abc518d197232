"""
workweek
~~~~~~~~

Working-day arithmetic over calendar dates: is a date a working day, how many
working days lie in an interval, and which date is N working days away.  No
operation walks the calendar day by day; weekly patterns are closed form and
holiday queries are binary searches.

Basic usage::

    from datetime import date
    from workweek import MONDAY_FRIDAY, CalendarAdjuster, HolidaySnapshot

    cal = CalendarAdjuster(MONDAY_FRIDAY, HolidaySnapshot([date(2024, 1, 5)]))
    cal.shift_forward(date(2024, 1, 1), 5)   # → 2024-01-09

Sub-packages
------------
workweek.pattern    WeeklyPattern and the canonical patterns.
workweek.holidays   HolidaySnapshot and the loader interface.
workweek.calendar   CalendarAdjuster.
workweek.config     WorkweekSettings (pydantic).
"""

from __future__ import annotations

from workweek._exceptions import (
    DateRangeError,
    InvalidArgumentError,
    UnsupportedDateError,
    WorkweekError,
)
from workweek.calendar import CalendarAdjuster, shift_backward, shift_forward, workdays_between
from workweek.holidays import NO_HOLIDAYS, HolidayLoader, HolidaySnapshot, load_snapshot
from workweek.pattern import (
    MONDAY_FRIDAY,
    MONDAY_SATURDAY,
    PATTERNS,
    SATURDAY_THURSDAY,
    SUNDAY_FRIDAY,
    SUNDAY_THURSDAY,
    WeeklyPattern,
    get_pattern,
)

__all__ = [
    "WeeklyPattern",
    "MONDAY_FRIDAY",
    "MONDAY_SATURDAY",
    "SUNDAY_THURSDAY",
    "SATURDAY_THURSDAY",
    "SUNDAY_FRIDAY",
    "PATTERNS",
    "get_pattern",
    "HolidaySnapshot",
    "NO_HOLIDAYS",
    "HolidayLoader",
    "load_snapshot",
    "CalendarAdjuster",
    "shift_forward",
    "shift_backward",
    "workdays_between",
    "WorkweekError",
    "InvalidArgumentError",
    "UnsupportedDateError",
    "DateRangeError",
]
