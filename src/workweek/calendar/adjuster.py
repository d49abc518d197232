from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

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
    weekday,
)
from .._exceptions import InvalidArgumentError
from ..holidays import NO_HOLIDAYS, HolidaySnapshot
from ..pattern import WeeklyPattern

logger = logging.getLogger(__name__)

HolidaysLike = Union[HolidaySnapshot, Iterable[DatesLike]]


class CalendarAdjuster:
    """
    Working-day arithmetic for a weekly pattern plus a holiday snapshot.

    The pattern does the closed-form part of a shift; holidays found inside
    the resulting window are then paid back one working day at a time.  Only
    holidays that fall on working days of the pattern count, a holiday on a
    rest day costs nothing.

    Cost of a shift is O(log |H|) for the range count plus one short walk per
    holiday inside the window.  Without holidays it is the pattern's O(1).
    """

    __slots__ = ("_pattern", "_holidays")

    def __init__(
        self,
        pattern: WeeklyPattern,
        holidays: Optional[HolidaysLike] = None,
    ) -> None:
        if pattern is None:
            raise InvalidArgumentError("Weekly pattern is required.")
        if not isinstance(pattern, WeeklyPattern):
            raise InvalidArgumentError(
                f"Expected a WeeklyPattern; got {type(pattern).__name__}."
            )
        if holidays is None:
            holidays = NO_HOLIDAYS
        elif not isinstance(holidays, HolidaySnapshot):
            holidays = HolidaySnapshot.from_dates(holidays)

        self._pattern: WeeklyPattern = pattern
        self._holidays: HolidaySnapshot = holidays

    def with_holidays(self, holidays: Optional[HolidaysLike]) -> CalendarAdjuster:
        """Same pattern, different holiday snapshot."""
        return CalendarAdjuster(self._pattern, holidays)

    # ── holiday correction ───────────────────────────────────────────────

    def _is_valid_day(self, day: int) -> bool:
        mask = self._pattern.working_day_mask
        return bool(mask[(day + EPOCH_WEEKDAY) % DAYS_PER_WEEK]) and not self._holidays._contains_day(day)

    def _walk(self, candidate: np.ndarray, extra: np.ndarray, step: int) -> np.ndarray:
        # Each unit of `extra` moves the candidate onto the next valid day in
        # the direction of `step`, so the loop runs exactly `extra` times per
        # element and never revisits a counted holiday.
        shape = np.shape(candidate)
        pending = np.broadcast_to(extra, shape).ravel()
        if not pending.any():
            return candidate

        flat = np.array(candidate, dtype=np.int64).ravel()
        stepped = 0
        for i in np.flatnonzero(pending):
            day = origin = int(flat[i])
            for _ in range(int(pending[i])):
                day += step
                while not self._is_valid_day(day):
                    day += step
            flat[i] = day
            stepped += abs(day - origin)

        logger.debug(
            "Holiday correction: %d working day(s) over %d date(s), %d calendar day(s) stepped",
            int(pending.sum()), int(np.count_nonzero(pending)), stepped,
        )
        return flat.reshape(shape)

    def _shift_forward_days(self, days: np.ndarray, n: np.ndarray) -> np.ndarray:
        candidate = self._pattern._forward_days(days, n)
        if not self._holidays:
            return candidate
        # Holidays on working days in [days, candidate), plus the candidate itself.
        extra = (
            self._holidays._count_days(days, candidate, self._pattern.working_day_mask)
            + self._holidays._contains_days(candidate)
        )
        return self._walk(candidate, extra, 1)

    def _shift_backward_days(self, days: np.ndarray, n: np.ndarray) -> np.ndarray:
        candidate = self._pattern._backward_days(days, n)
        if not self._holidays:
            return candidate
        # Holidays on working days in (candidate, days], plus the candidate itself.
        extra = (
            self._holidays._count_days(candidate + 1, days + 1, self._pattern.working_day_mask)
            + self._holidays._contains_days(candidate)
        )
        return self._walk(candidate, extra, -1)

    # ── public operations ────────────────────────────────────────────────

    def is_working_day(self, date: DatesLike) -> Union[bool, np.ndarray]:
        """True on pattern working days that are not holidays."""
        days, kind = to_epoch_days(date)
        valid = self._pattern.working_day_mask[weekday(days)] & ~self._holidays._contains_days(days)
        return valid if result_kind(kind) == ARRAY else bool(valid)

    def workdays_between(self, start: DatesLike, end: DatesLike) -> Union[int, np.ndarray]:
        """
        Working days in ``[start, end)`` that are not holidays.

        Empty and reversed intervals count 0.
        """
        s, s_kind = to_epoch_days(start)
        e, _ = to_epoch_days(end)
        count = (
            self._pattern._count_days(s, e)
            - self._holidays._count_days(s, e, self._pattern.working_day_mask)
        )
        if result_kind(s_kind, e) == ARRAY:
            return np.asarray(count, dtype=np.int64)
        return int(count)

    def shift_forward(self, date: DatesLike, n: Any = 0) -> Any:
        """
        Date `n` working days after `date`, skipping rest days and holidays.

        ``n == 0`` returns `date` itself when it is a working day, otherwise
        the next working day.
        """
        days, kind = to_epoch_days(date)
        count = as_count(n)
        return from_epoch_days(self._shift_forward_days(days, count), result_kind(kind, count))

    def shift_backward(self, date: DatesLike, n: Any = 0) -> Any:
        """
        Date `n` working days before `date`, skipping rest days and holidays.

        ``n == 0`` returns `date` itself when it is a working day, otherwise
        the previous working day.
        """
        days, kind = to_epoch_days(date)
        count = as_count(n)
        return from_epoch_days(self._shift_backward_days(days, count), result_kind(kind, count))

    def shift(self, date: DatesLike, n: Any) -> Any:
        """Signed shift: forward for ``n >= 0``, backward by ``-n`` otherwise."""
        days, kind = to_epoch_days(date)
        count = as_count(n, allow_negative=True)
        if np.ndim(count) == 0:
            if count >= 0:
                shifted = self._shift_forward_days(days, count)
            else:
                shifted = self._shift_backward_days(days, -count)
        else:
            shifted = np.where(
                count >= 0,
                self._shift_forward_days(days, np.maximum(count, 0)),
                self._shift_backward_days(days, np.maximum(-count, 0)),
            )
        return from_epoch_days(shifted, result_kind(kind, count))

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def pattern(self) -> WeeklyPattern:
        return self._pattern

    @property
    def holidays(self) -> HolidaySnapshot:
        return self._holidays

    def __repr__(self) -> str:
        return (
            f"CalendarAdjuster(pattern={self._pattern!r}, "
            f"holidays={len(self._holidays)})"
        )


# ── functional API ────────────────────────────────────────────────────────
# Same operations in the (date, n, pattern, holidays) argument shape.

def shift_forward(
    date: DatesLike,
    n: Any,
    pattern: WeeklyPattern,
    holidays: Optional[HolidaysLike] = None,
) -> Any:
    return CalendarAdjuster(pattern, holidays).shift_forward(date, n)


def shift_backward(
    date: DatesLike,
    n: Any,
    pattern: WeeklyPattern,
    holidays: Optional[HolidaysLike] = None,
) -> Any:
    return CalendarAdjuster(pattern, holidays).shift_backward(date, n)


def workdays_between(
    start: DatesLike,
    end: DatesLike,
    pattern: WeeklyPattern,
    holidays: Optional[HolidaysLike] = None,
) -> Union[int, np.ndarray]:
    return CalendarAdjuster(pattern, holidays).workdays_between(start, end)
