class WorkweekError(Exception):
    """Base class for every error raised by :mod:`workweek`."""


class InvalidArgumentError(WorkweekError, ValueError):
    """A working-day count, pattern parameter or pattern name is not acceptable."""


class UnsupportedDateError(WorkweekError, TypeError):
    """A value cannot be read as a calendar date with day resolution."""


class DateRangeError(WorkweekError, OverflowError):
    """The result of an adjustment falls outside the representable date range."""
