from __future__ import annotations

from numbers import Integral
from typing import Any, Mapping, Optional, Union

import numpy as np

from .._coerce import (
    ARRAY,
    DAYS_PER_WEEK,
    EPOCH_WEEKDAY,
    DatesLike,
    as_count,
    from_epoch_days,
    result_kind,
    to_epoch_days,
)
from .._exceptions import InvalidArgumentError

WEEKDAY_NAMES: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

Weekday = Union[int, str]


def weekday_number(day: Weekday) -> int:
    """Weekday number (Monday == 0) from a number or a (possibly abbreviated) name."""
    if isinstance(day, str):
        key = day.strip().lower()
        for i, name in enumerate(WEEKDAY_NAMES):
            if len(key) >= 3 and name.startswith(key):
                return i
        raise InvalidArgumentError(f"Unknown weekday name {day!r}.")
    if isinstance(day, bool) or not isinstance(day, Integral) or not 0 <= day < DAYS_PER_WEEK:
        raise InvalidArgumentError(f"Weekday must be in 0..6; got {day!r}.")
    return int(day)


class WeeklyPattern:
    """
    Contiguous span of working days repeating every 7 days.

    A pattern is fully described by `week_start_offset`, the amount added to a
    weekday number (Monday == 0) so that the first working day lands on
    position 0, and `work_length`, the number of working days per week.
    Position ``(weekday + week_start_offset) % 7`` is a working day iff it is
    below `work_length`.

    Every operation is closed form: cost does not depend on the length of the
    interval or on the number of days shifted.  Date arguments may be
    `datetime.date`, `numpy.datetime64`, ISO strings or arrays of those.
    """

    __slots__ = ("_offset", "_work", "_rest", "_name", "_mask")

    def __init__(
        self,
        week_start_offset: int,
        work_length: int,
        name: Optional[str] = None,
    ) -> None:
        if isinstance(week_start_offset, bool) or not isinstance(week_start_offset, Integral):
            raise InvalidArgumentError(
                f"Week start offset must be an integer; got {week_start_offset!r}."
            )
        if isinstance(work_length, bool) or not isinstance(work_length, Integral):
            raise InvalidArgumentError(
                f"Work length must be an integer; got {work_length!r}."
            )
        if not 0 < work_length < DAYS_PER_WEEK:
            raise InvalidArgumentError(
                f"Work length must be in 1..6; got {work_length}."
            )

        self._offset: int = int(week_start_offset) % DAYS_PER_WEEK
        self._work: int = int(work_length)
        self._rest: int = DAYS_PER_WEEK - self._work
        self._name: Optional[str] = name

        mask = (np.arange(DAYS_PER_WEEK) + self._offset) % DAYS_PER_WEEK < self._work
        mask.flags.writeable = False
        self._mask: np.ndarray = mask

    @classmethod
    def starting_on(cls, first_day: Weekday, work_length: int, name: Optional[str] = None) -> WeeklyPattern:
        """Pattern whose working span begins on `first_day` (number or name)."""
        first = weekday_number(first_day)
        return cls((DAYS_PER_WEEK - first) % DAYS_PER_WEEK, work_length, name)

    # ── epoch-day kernels ────────────────────────────────────────────────
    # Shared with CalendarAdjuster; all accept int64 scalars or arrays.

    def _positions(self, days: np.ndarray) -> np.ndarray:
        return (days + EPOCH_WEEKDAY + self._offset) % DAYS_PER_WEEK

    def _cumulative(self, t: np.ndarray) -> np.ndarray:
        # Working positions in [0, t) on the absolute position line.
        return (t // DAYS_PER_WEEK) * self._work + np.minimum(t % DAYS_PER_WEEK, self._work)

    def _count_days(self, start: np.ndarray, end: np.ndarray) -> np.ndarray:
        base = EPOCH_WEEKDAY + self._offset
        count = self._cumulative(end + base) - self._cumulative(start + base)
        return np.where(end > start, count, 0)

    def _forward_days(self, days: np.ndarray, n: np.ndarray) -> np.ndarray:
        position = self._positions(days)
        resting = position >= self._work
        # A rest day is absorbed first: jump to the start of the next span.
        skip = np.where(resting, DAYS_PER_WEEK - position, 0)
        position = np.where(resting, 0, position)
        weeks = (position + n) // self._work
        return days + skip + n + self._rest * weeks

    def _backward_days(self, days: np.ndarray, n: np.ndarray) -> np.ndarray:
        position = self._positions(days)
        resting = position >= self._work
        # Fall back to the last working day of the current span.
        skip = np.where(resting, position - self._work + 1, 0)
        to_span_end = np.where(resting, 0, self._work - 1 - position)
        weeks = (to_span_end + n) // self._work
        return days - (skip + n + self._rest * weeks)

    # ── public operations ────────────────────────────────────────────────

    def is_working_day(self, date: DatesLike) -> Union[bool, np.ndarray]:
        days, kind = to_epoch_days(date)
        working = self._positions(days) < self._work
        return working if result_kind(kind) == ARRAY else bool(working)

    def workdays_between(self, start: DatesLike, end: DatesLike) -> Union[int, np.ndarray]:
        """
        Number of working days in ``[start, end)``.

        Empty and reversed intervals count 0.
        """
        s, s_kind = to_epoch_days(start)
        e, e_kind = to_epoch_days(end)
        count = self._count_days(s, e)
        if result_kind(s_kind, e) == ARRAY:
            return count.astype(np.int64)
        return int(count)

    def adjust_forward(self, date: DatesLike, n: Any = 0) -> Any:
        """
        Date `n` working days after `date`, ignoring holidays.

        With ``n == 0`` a working day is returned unchanged and a rest day is
        moved to the next working day.  The result is the ``(n + 1)``-th
        working day on or after `date`.
        """
        days, kind = to_epoch_days(date)
        count = as_count(n)
        return from_epoch_days(self._forward_days(days, count), result_kind(kind, count))

    def adjust_backward(self, date: DatesLike, n: Any = 0) -> Any:
        """
        Date `n` working days before `date`, ignoring holidays.

        Mirror image of :meth:`adjust_forward`: the result is the
        ``(n + 1)``-th working day on or before `date`.
        """
        days, kind = to_epoch_days(date)
        count = as_count(n)
        return from_epoch_days(self._backward_days(days, count), result_kind(kind, count))

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def week_start_offset(self) -> int:
        return self._offset

    @property
    def work_length(self) -> int:
        return self._work

    @property
    def rest_length(self) -> int:
        return self._rest

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def first_day(self) -> int:
        """Weekday number of the first working day."""
        return (DAYS_PER_WEEK - self._offset) % DAYS_PER_WEEK

    @property
    def working_day_mask(self) -> np.ndarray:
        """Read-only boolean array indexed by weekday number."""
        return self._mask

    @property
    def working_days(self) -> frozenset[int]:
        return frozenset(int(d) for d in np.flatnonzero(self._mask))

    @property
    def rest_days(self) -> frozenset[int]:
        return frozenset(int(d) for d in np.flatnonzero(~self._mask))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeeklyPattern):
            return NotImplemented
        return (self._offset, self._work) == (other._offset, other._work)

    def __hash__(self) -> int:
        return hash((WeeklyPattern, self._offset, self._work))

    def __repr__(self) -> str:
        if self._name is not None:
            return f"WeeklyPattern.{self._name}"
        first = WEEKDAY_NAMES[self.first_day]
        last = WEEKDAY_NAMES[(self.first_day + self._work - 1) % DAYS_PER_WEEK]
        return (
            f"WeeklyPattern(week_start_offset={self._offset}, "
            f"work_length={self._work}, "
            f"days={first[:3].title()}-{last[:3].title()})"
        )


MONDAY_FRIDAY = WeeklyPattern(0, 5, "MONDAY_FRIDAY")
MONDAY_SATURDAY = WeeklyPattern(0, 6, "MONDAY_SATURDAY")
SUNDAY_THURSDAY = WeeklyPattern(1, 5, "SUNDAY_THURSDAY")
SATURDAY_THURSDAY = WeeklyPattern(2, 6, "SATURDAY_THURSDAY")
SUNDAY_FRIDAY = WeeklyPattern(1, 6, "SUNDAY_FRIDAY")

PATTERNS: Mapping[str, WeeklyPattern] = {
    p.name: p
    for p in (MONDAY_FRIDAY, MONDAY_SATURDAY, SUNDAY_THURSDAY, SATURDAY_THURSDAY, SUNDAY_FRIDAY)
}


def get_pattern(name: str) -> WeeklyPattern:
    """
    Canonical pattern by name, e.g. ``"monday-friday"`` or ``"SUNDAY_THURSDAY"``.
    """
    if not isinstance(name, str):
        raise InvalidArgumentError(f"Pattern name must be a string; got {name!r}.")
    key = "_".join(name.replace("-", " ").replace("_", " ").upper().split())
    try:
        return PATTERNS[key]
    except KeyError:
        known = ", ".join(sorted(PATTERNS))
        raise InvalidArgumentError(
            f"Unknown weekly pattern {name!r}; expected one of {known}."
        ) from None
