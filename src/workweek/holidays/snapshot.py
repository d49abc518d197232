from __future__ import annotations

import datetime as _dt
import logging
from typing import Any, Iterable, Iterator, Optional, Union

import numpy as np

from .._coerce import (
    ARRAY,
    DATE,
    DAYS_PER_WEEK,
    DatesLike,
    from_epoch_days,
    result_kind,
    to_epoch_days,
    weekday,
)
from .._exceptions import InvalidArgumentError
from ..pattern.pattern import weekday_number

logger = logging.getLogger(__name__)

WeekdaySelection = Union[np.ndarray, Iterable[int]]


def _frozen(days: np.ndarray) -> np.ndarray:
    days = np.ascontiguousarray(days, dtype=np.int64)
    days.flags.writeable = False
    return days


def _collect(dates: Any) -> np.ndarray:
    if isinstance(dates, np.ndarray) and dates.ndim == 0:
        dates = dates[()]
    if isinstance(dates, HolidaySnapshot):
        return dates._days
    if isinstance(dates, (_dt.date, np.datetime64, str)):
        dates = [dates]
    elif not isinstance(dates, (np.ndarray, list, tuple)):
        dates = list(dates)
    if len(dates) == 0:
        return np.empty(0, dtype=np.int64)
    days, _ = to_epoch_days(dates)
    return days.ravel()


def _weekday_mask(weekdays: WeekdaySelection) -> np.ndarray:
    if isinstance(weekdays, np.ndarray) and weekdays.dtype == bool:
        if weekdays.shape != (DAYS_PER_WEEK,):
            raise InvalidArgumentError(
                f"Weekday mask must have 7 entries; got shape {weekdays.shape}."
            )
        return weekdays
    entries = weekdays.ravel().tolist() if isinstance(weekdays, np.ndarray) else list(weekdays)
    mask = np.zeros(DAYS_PER_WEEK, dtype=bool)
    for day in entries:
        mask[weekday_number(day)] = True
    return mask


class HolidaySnapshot:
    """
    Frozen, sorted, duplicate-free set of holiday dates.

    Stored as a read-only int64 epoch-day array, plus one sub-array per
    weekday so that counts can be restricted to the working days of a
    pattern.  Membership and range counts are binary searches.

    A snapshot never changes after construction.  To pick up new holiday
    data build another snapshot and replace the reference.
    """

    __slots__ = ("_days", "_by_weekday")

    def __init__(self, dates: Iterable[DatesLike] = ()) -> None:
        self._set_days(np.unique(_collect(dates)))
        if len(self._days):
            logger.debug(
                "Built holiday snapshot: %d dates from %s to %s",
                len(self._days), self.first, self.last,
            )

    def _set_days(self, days: np.ndarray) -> None:
        self._days: np.ndarray = _frozen(days)
        wd = weekday(self._days)
        self._by_weekday: tuple[np.ndarray, ...] = tuple(
            _frozen(self._days[wd == w]) for w in range(DAYS_PER_WEEK)
        )

    @classmethod
    def from_dates(cls, dates: Iterable[DatesLike]) -> HolidaySnapshot:
        """Build a snapshot from any iterable of dates, in any order, with repeats."""
        return cls(dates)

    @classmethod
    def _from_sorted(cls, days: np.ndarray) -> HolidaySnapshot:
        snapshot = cls.__new__(cls)
        snapshot._set_days(days)
        return snapshot

    # ── epoch-day kernels ────────────────────────────────────────────────

    @staticmethod
    def _range_count(days: np.ndarray, start: np.ndarray, end: np.ndarray) -> np.ndarray:
        count = (
            np.searchsorted(days, end, side="left")
            - np.searchsorted(days, start, side="left")
        )
        return np.where(end > start, count, 0)

    def _count_days(
        self,
        start: np.ndarray,
        end: np.ndarray,
        mask: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        if mask is None:
            return self._range_count(self._days, start, end)
        count = np.zeros(np.broadcast(start, end).shape, dtype=np.int64)
        for w in np.flatnonzero(mask):
            count = count + self._range_count(self._by_weekday[w], start, end)
        return count

    def _contains_days(self, days: np.ndarray) -> np.ndarray:
        if not len(self._days):
            return np.zeros(np.shape(days), dtype=bool)
        idx = np.searchsorted(self._days, days, side="left")
        hit = self._days[np.minimum(idx, len(self._days) - 1)]
        return (idx < len(self._days)) & (hit == days)

    def _contains_day(self, day: int) -> bool:
        idx = int(np.searchsorted(self._days, day, side="left"))
        return idx < len(self._days) and int(self._days[idx]) == day

    # ── public queries ───────────────────────────────────────────────────

    def contains(self, date: DatesLike) -> Union[bool, np.ndarray]:
        days, kind = to_epoch_days(date)
        found = self._contains_days(days)
        return found if result_kind(kind) == ARRAY else bool(found)

    def count_between(
        self,
        start: DatesLike,
        end: DatesLike,
        weekdays: Optional[WeekdaySelection] = None,
    ) -> Union[int, np.ndarray]:
        """
        Number of holidays in ``[start, end)``; 0 when ``end <= start``.

        `weekdays` restricts the count to holidays falling on the given
        weekdays, either a 7-entry boolean ndarray indexed by weekday number
        (e.g. ``WeeklyPattern.working_day_mask``) or an iterable of weekday
        numbers or names.
        """
        s, s_kind = to_epoch_days(start)
        e, _ = to_epoch_days(end)
        mask = None if weekdays is None else _weekday_mask(weekdays)
        count = self._count_days(s, e, mask)
        if result_kind(s_kind, e) == ARRAY:
            return np.asarray(count, dtype=np.int64)
        return int(count)

    def between(self, start: DatesLike, end: DatesLike) -> HolidaySnapshot:
        """Holidays in ``[start, end)`` as a new snapshot."""
        s, _ = to_epoch_days(start)
        e, _ = to_epoch_days(end)
        if int(e) <= int(s):
            return self._from_sorted(np.empty(0, dtype=np.int64))
        lo = int(np.searchsorted(self._days, s, side="left"))
        hi = int(np.searchsorted(self._days, e, side="left"))
        return self._from_sorted(self._days[lo:hi])

    def union(self, other: Iterable[DatesLike]) -> HolidaySnapshot:
        """A new snapshot holding the holidays of both operands."""
        return self._from_sorted(np.union1d(self._days, _collect(other)))

    # ── properties / dunder ──────────────────────────────────────────────

    @property
    def epoch_days(self) -> np.ndarray:
        """Read-only sorted int64 array of days since 1970-01-01."""
        return self._days

    @property
    def first(self) -> Optional[_dt.date]:
        return from_epoch_days(self._days[0], DATE) if len(self._days) else None

    @property
    def last(self) -> Optional[_dt.date]:
        return from_epoch_days(self._days[-1], DATE) if len(self._days) else None

    def __contains__(self, date: object) -> bool:
        return bool(self.contains(date))

    def __len__(self) -> int:
        return len(self._days)

    def __bool__(self) -> bool:
        return len(self._days) > 0

    def __iter__(self) -> Iterator[_dt.date]:
        for day in self._days:
            yield from_epoch_days(day, DATE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HolidaySnapshot):
            return NotImplemented
        return bool(np.array_equal(self._days, other._days))

    def __hash__(self) -> int:
        return hash(self._days.tobytes())

    def __repr__(self) -> str:
        return (
            f"HolidaySnapshot(size={len(self._days)}, "
            f"first={self.first}, "
            f"last={self.last})"
        )


NO_HOLIDAYS = HolidaySnapshot()
