"""
Conversion between the date representations accepted by the public API and
int64 epoch days (days since 1970-01-01), plus validation of working-day
counts.

Every public operation converts its date arguments once on entry, does its
arithmetic on epoch days and converts back on exit, so the result comes in
the caller's representation:

    datetime.date / ISO string  ->  datetime.date
    numpy.datetime64 scalar     ->  numpy.datetime64[D]
    sequence / ndarray          ->  ndarray of datetime64[D]
"""

from __future__ import annotations

import datetime as _dt
from numbers import Integral
from typing import Any, Union

import numpy as np
import numpy.typing as npt

from ._exceptions import DateRangeError, InvalidArgumentError, UnsupportedDateError

DateLike = Union[_dt.date, np.datetime64, str]
DatesLike = Union[DateLike, npt.ArrayLike]

_EPOCH_ORDINAL: int = _dt.date(1970, 1, 1).toordinal()

# 1970-01-01 was a Thursday; weekday numbering follows date.weekday() (Monday == 0).
EPOCH_WEEKDAY: int = 3
DAYS_PER_WEEK: int = 7

# Result representations.
DATE = "date"
DATETIME64 = "datetime64"
ARRAY = "array"

_COARSE_UNITS = frozenset({"Y", "M", "W", "generic"})

# Bounds keeping every shift result inside int64: a count of n working days
# spans at most 7 * (n + 6) calendar days.
MAX_EPOCH_DAY: int = 2**58
MAX_COUNT: int = 2**56


def _check_unit(dtype: np.dtype) -> None:
    unit, _ = np.datetime_data(dtype)
    if unit in _COARSE_UNITS:
        raise UnsupportedDateError(
            f"Date must have day resolution; got datetime64[{unit}]."
        )


def _check_epoch_range(days: np.ndarray) -> None:
    if days.size and (days.min() < -MAX_EPOCH_DAY or days.max() > MAX_EPOCH_DAY):
        raise DateRangeError(
            f"Date is more than {MAX_EPOCH_DAY} days away from 1970-01-01."
        )


def _datetime64_days(value: np.datetime64) -> int:
    _check_unit(value.dtype)
    if np.isnat(value):
        raise UnsupportedDateError("NaT is not a calendar date.")
    days = value.astype("datetime64[D]").astype(np.int64)
    _check_epoch_range(np.asarray(days))
    return int(days)


def _scalar_days(value: Any) -> tuple[int, str]:
    if isinstance(value, _dt.datetime):
        value = value.date()
    if isinstance(value, _dt.date):
        return value.toordinal() - _EPOCH_ORDINAL, DATE
    if isinstance(value, np.datetime64):
        return _datetime64_days(value), DATETIME64
    if isinstance(value, str):
        try:
            parsed = np.datetime64(value)
        except ValueError as err:
            raise UnsupportedDateError(f"Cannot read {value!r} as an ISO date.") from err
        return _datetime64_days(parsed), DATE
    raise UnsupportedDateError(
        f"Expected a calendar date; got {type(value).__name__} {value!r}."
    )


def _array_days(values: Any) -> np.ndarray:
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(arr.shape, dtype=np.int64)

    if arr.dtype.kind == "M":
        _check_unit(arr.dtype)
        if np.isnat(arr).any():
            raise UnsupportedDateError("NaT is not a calendar date.")
        days = arr.astype("datetime64[D]").astype(np.int64)
        _check_epoch_range(days)
        return days

    if arr.dtype.kind in "OU":
        flat = [_scalar_days(v)[0] for v in arr.ravel()]
        return np.array(flat, dtype=np.int64).reshape(arr.shape)

    raise UnsupportedDateError(f"Expected calendar dates; got an array of {arr.dtype}.")


def to_epoch_days(value: Any) -> tuple[np.ndarray, str]:
    """
    Convert `value` to int64 epoch days.

    Returns ``(days, kind)`` where `days` is a 0-d array for scalar input and
    `kind` names the representation to restore on the way out.
    """
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value[()]

    if isinstance(value, (_dt.date, np.datetime64, str)):
        days, kind = _scalar_days(value)
        return np.asarray(days, dtype=np.int64), kind

    if np.ndim(value) == 0:
        raise UnsupportedDateError(
            f"Expected a calendar date; got {type(value).__name__} {value!r}."
        )
    return _array_days(value), ARRAY


def from_epoch_days(days: npt.ArrayLike, kind: str) -> Any:
    """Inverse of :func:`to_epoch_days` for the representation `kind`."""
    if kind == ARRAY:
        return np.asarray(days, dtype=np.int64).astype("datetime64[D]")

    day = int(days)
    if kind == DATETIME64:
        return np.datetime64(day, "D")
    try:
        return _dt.date.fromordinal(day + _EPOCH_ORDINAL)
    except (ValueError, OverflowError) as err:
        raise DateRangeError(
            f"Epoch day {day} is outside the supported date range."
        ) from err


def result_kind(kind: str, *others: Any) -> str:
    """Array output as soon as any participating argument is an array."""
    if kind != ARRAY and all(np.ndim(o) == 0 for o in others):
        return kind
    return ARRAY


def weekday(days: npt.ArrayLike) -> np.ndarray:
    return (np.asarray(days, dtype=np.int64) + EPOCH_WEEKDAY) % DAYS_PER_WEEK


def as_count(
    n: Any,
    name: str = "Number of working days",
    allow_negative: bool = False,
) -> np.ndarray:
    """Validate a working-day count (scalar or array) and return it as int64."""
    if isinstance(n, np.ndarray) and n.ndim == 0:
        n = n[()]

    if np.ndim(n) == 0:
        if isinstance(n, (bool, np.bool_)) or not isinstance(n, Integral):
            raise InvalidArgumentError(f"{name} must be an integer; got {n!r}.")
        if n < 0 and not allow_negative:
            raise InvalidArgumentError(f"{name} can't be negative; got {n}.")
        if not -MAX_COUNT <= int(n) <= MAX_COUNT:
            raise DateRangeError(f"{name} must be within ±{MAX_COUNT}; got {n}.")
        return np.asarray(int(n), dtype=np.int64)

    arr = np.asarray(n)
    if arr.dtype.kind not in "iu":
        raise InvalidArgumentError(f"{name} must be integers; got an array of {arr.dtype}.")
    if not allow_negative and (arr < 0).any():
        raise InvalidArgumentError(f"{name} can't be negative.")
    if arr.size and (arr.max() > MAX_COUNT or arr.min() < -MAX_COUNT):
        raise DateRangeError(f"{name} must be within ±{MAX_COUNT}.")
    return arr.astype(np.int64)
