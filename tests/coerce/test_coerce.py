"""
tests/coerce/test_coerce.py

Covers:
  - Conversion of every accepted date representation to epoch days
  - Representation restored on the way out
  - Rejection of coarse units, NaT and non-dates
  - Results beyond datetime.date's range
  - Working-day count validation
  - Count and date bounds keeping shift arithmetic inside int64
"""

from datetime import date, datetime

import numpy as np
import pytest

from workweek import DateRangeError, InvalidArgumentError, UnsupportedDateError
from workweek._coerce import (
    ARRAY,
    DATE,
    DATETIME64,
    MAX_COUNT,
    MAX_EPOCH_DAY,
    as_count,
    from_epoch_days,
    result_kind,
    to_epoch_days,
    weekday,
)
from workweek.pattern import MONDAY_FRIDAY


class TestToEpochDays:

    def test_epoch(self):
        days, kind = to_epoch_days(date(1970, 1, 1))
        assert int(days) == 0
        assert kind == DATE

    def test_before_epoch(self):
        days, _ = to_epoch_days(date(1969, 12, 31))
        assert int(days) == -1

    def test_datetime_truncated(self):
        days, kind = to_epoch_days(datetime(2024, 1, 1, 23, 59))
        assert int(days) == int(to_epoch_days(date(2024, 1, 1))[0])
        assert kind == DATE

    def test_iso_string(self):
        days, kind = to_epoch_days("2024-01-01")
        assert int(days) == 19723
        assert kind == DATE

    def test_datetime64(self):
        days, kind = to_epoch_days(np.datetime64("2024-01-01"))
        assert int(days) == 19723
        assert kind == DATETIME64

    def test_datetime64_finer_unit(self):
        days, _ = to_epoch_days(np.datetime64("2024-01-01T18:00"))
        assert int(days) == 19723

    def test_array(self):
        days, kind = to_epoch_days(np.array(["1970-01-01", "1970-01-03"], dtype="datetime64[D]"))
        assert days.tolist() == [0, 2]
        assert kind == ARRAY

    def test_list_of_dates(self):
        days, kind = to_epoch_days([date(1970, 1, 2), "1970-01-05"])
        assert days.tolist() == [1, 4]
        assert kind == ARRAY

    def test_zero_dim_array_is_scalar(self):
        _, kind = to_epoch_days(np.array(np.datetime64("2024-01-01")))
        assert kind == DATETIME64

    @pytest.mark.parametrize("value", [
        np.datetime64("2024-01"),
        np.datetime64("2024"),
        np.array(["2024-01"], dtype="datetime64[M]"),
    ])
    def test_coarse_unit_rejected(self, value):
        with pytest.raises(UnsupportedDateError):
            to_epoch_days(value)

    @pytest.mark.parametrize("value", [np.datetime64("NaT"), np.array(["NaT"], dtype="datetime64[D]")])
    def test_nat_rejected(self, value):
        with pytest.raises(UnsupportedDateError):
            to_epoch_days(value)

    @pytest.mark.parametrize("value", [None, 42, 1.5, "not a date", [1, 2]])
    def test_non_date_rejected(self, value):
        with pytest.raises(UnsupportedDateError):
            to_epoch_days(value)

    def test_unsupported_date_is_type_error(self):
        with pytest.raises(TypeError):
            to_epoch_days(None)


class TestFromEpochDays:

    def test_date(self):
        assert from_epoch_days(np.asarray(19723), DATE) == date(2024, 1, 1)

    def test_datetime64(self):
        result = from_epoch_days(19723, DATETIME64)
        assert result == np.datetime64("2024-01-01")
        assert result.dtype == np.dtype("datetime64[D]")

    def test_array(self):
        result = from_epoch_days(np.array([0, 1]), ARRAY)
        assert result.dtype == np.dtype("datetime64[D]")

    def test_out_of_range(self):
        with pytest.raises(DateRangeError):
            from_epoch_days(10**7, DATE)

    def test_shift_past_year_9999(self):
        with pytest.raises(DateRangeError):
            MONDAY_FRIDAY.adjust_forward(date(9999, 12, 31), 10)

    def test_datetime64_has_no_year_limit(self):
        result = MONDAY_FRIDAY.adjust_forward(np.datetime64("9999-12-31"), 10)
        assert result > np.datetime64("9999-12-31")

    def test_far_datetime64_rejected(self):
        with pytest.raises(DateRangeError):
            to_epoch_days(np.datetime64(MAX_EPOCH_DAY + 1, "D"))
        with pytest.raises(DateRangeError):
            to_epoch_days(np.array([0, -MAX_EPOCH_DAY - 1], dtype="datetime64[D]"))

    @pytest.mark.parametrize("n", [np.iinfo(np.int64).max, 2**70])
    def test_huge_count_does_not_wrap(self, n):
        with pytest.raises(DateRangeError):
            MONDAY_FRIDAY.adjust_forward(np.datetime64("2024-01-01"), n)
        with pytest.raises(DateRangeError):
            MONDAY_FRIDAY.adjust_backward(date(2024, 1, 1), n)

    def test_largest_count_moves_forward(self):
        start = np.datetime64("2024-01-01")
        result = MONDAY_FRIDAY.adjust_forward(start, MAX_COUNT)
        assert result > start
        assert MONDAY_FRIDAY.adjust_backward(start, MAX_COUNT) < start


class TestHelpers:

    def test_weekday(self):
        assert weekday(0) == 3
        assert weekday(-3).tolist() == 0

    def test_result_kind(self):
        assert result_kind(DATE) == DATE
        assert result_kind(DATE, np.asarray(1)) == DATE
        assert result_kind(DATE, np.array([1, 2])) == ARRAY
        assert result_kind(ARRAY) == ARRAY


class TestAsCount:

    @pytest.mark.parametrize("n", [0, 5, np.int32(7), np.array(3)])
    def test_accepts_integers(self, n):
        assert int(as_count(n)) == int(n)

    @pytest.mark.parametrize("n", [True, 1.0, "3", None])
    def test_rejects_non_integers(self, n):
        with pytest.raises(InvalidArgumentError):
            as_count(n)

    def test_rejects_negative(self):
        with pytest.raises(InvalidArgumentError):
            as_count(-1)
        with pytest.raises(InvalidArgumentError):
            as_count(np.array([1, -1]))

    def test_allow_negative(self):
        assert int(as_count(-4, allow_negative=True)) == -4

    def test_array(self):
        counts = as_count(np.array([1, 2], dtype=np.uint8))
        assert counts.dtype == np.int64

    def test_float_array_rejected(self):
        with pytest.raises(InvalidArgumentError):
            as_count(np.array([1.0, 2.0]))

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            as_count(-1)

    def test_bound(self):
        assert int(as_count(MAX_COUNT)) == MAX_COUNT
        assert int(as_count(-MAX_COUNT, allow_negative=True)) == -MAX_COUNT

    @pytest.mark.parametrize("n", [
        MAX_COUNT + 1,
        2**70,
        np.uint64(2**63),
        np.array([1, 2**62]),
        np.array([2**64 - 1], dtype=np.uint64),
    ])
    def test_beyond_bound(self, n):
        with pytest.raises(DateRangeError):
            as_count(n)

    def test_beyond_bound_negative(self):
        with pytest.raises(DateRangeError):
            as_count(-(2**70), allow_negative=True)
        with pytest.raises(DateRangeError):
            as_count(np.array([np.iinfo(np.int64).min]), allow_negative=True)
