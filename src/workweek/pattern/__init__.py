"""
workweek.pattern
~~~~~~~~~~~~~~~~

Weekly work/rest patterns with closed-form working-day arithmetic.  A
WeeklyPattern is a contiguous span of working days repeating every 7 days;
counting and shifting never walk the calendar day by day.

Basic usage::

    from datetime import date
    from workweek.pattern import MONDAY_FRIDAY

    MONDAY_FRIDAY.is_working_day(date(2024, 1, 6))                  # → False
    MONDAY_FRIDAY.workdays_between(date(2024, 1, 1), date(2024, 1, 8))  # → 5
    MONDAY_FRIDAY.adjust_forward(date(2024, 1, 1), 5)               # → 2024-01-08

Custom patterns are plain data::

    from workweek.pattern import WeeklyPattern

    four_day = WeeklyPattern.starting_on("monday", 4)   # Mon–Thu

NumPy ``datetime64`` arrays are accepted everywhere a date is.

Public API
----------
WeeklyPattern      The pattern type.
MONDAY_FRIDAY, MONDAY_SATURDAY, SUNDAY_THURSDAY, SATURDAY_THURSDAY,
SUNDAY_FRIDAY      Canonical patterns.
PATTERNS           Canonical patterns by name.
get_pattern        Registry lookup by name.
"""

from __future__ import annotations

from workweek.pattern.pattern import (
    MONDAY_FRIDAY,
    MONDAY_SATURDAY,
    PATTERNS,
    SATURDAY_THURSDAY,
    SUNDAY_FRIDAY,
    SUNDAY_THURSDAY,
    WEEKDAY_NAMES,
    WeeklyPattern,
    get_pattern,
    weekday_number,
)

__all__ = [
    "WeeklyPattern",
    "MONDAY_FRIDAY",
    "MONDAY_SATURDAY",
    "SUNDAY_THURSDAY",
    "SATURDAY_THURSDAY",
    "SUNDAY_FRIDAY",
    "PATTERNS",
    "WEEKDAY_NAMES",
    "get_pattern",
    "weekday_number",
]
