"""
workweek.calendar
~~~~~~~~~~~~~~~~~

Holiday-aware working-day arithmetic.  A CalendarAdjuster combines a
WeeklyPattern with an optional HolidaySnapshot: the pattern shifts in closed
form, holidays inside the shifted window are then skipped one by one.

Basic usage::

    from datetime import date
    from workweek.calendar import CalendarAdjuster
    from workweek.holidays import HolidaySnapshot
    from workweek.pattern import MONDAY_FRIDAY

    cal = CalendarAdjuster(MONDAY_FRIDAY, HolidaySnapshot([date(2024, 1, 5)]))
    cal.shift_forward(date(2024, 1, 1), 5)                  # → 2024-01-09
    cal.workdays_between(date(2024, 1, 1), date(2024, 1, 8))  # → 4

Without a snapshot the adjuster behaves exactly like the pattern::

    CalendarAdjuster(MONDAY_FRIDAY).shift_forward(date(2024, 1, 1), 5)  # → 2024-01-08

Refreshing holidays never touches an adjuster in use::

    cal = cal.with_holidays(new_snapshot)

Public API
----------
CalendarAdjuster   The main class.
shift_forward, shift_backward, workdays_between
                   One-shot functions taking (date, n, pattern, holidays).
"""

from __future__ import annotations

from workweek.calendar.adjuster import (
    CalendarAdjuster,
    shift_backward,
    shift_forward,
    workdays_between,
)

__all__ = [
    "CalendarAdjuster",
    "shift_forward",
    "shift_backward",
    "workdays_between",
]
