"""
Settings model for selecting a working week and holidays from configuration.

WorkweekSettings validates plain data (a dict parsed from TOML/YAML/JSON,
environment-derived values, ...) and turns it into the objects the arithmetic
works with.  Parsing the configuration file itself is left to the caller.

Example:
    >>> settings = WorkweekSettings.model_validate({"pattern": "sunday-thursday"})
    >>> settings.pattern
    'SUNDAY_THURSDAY'
    >>> settings.weekly_pattern().work_length
    5
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from workweek.calendar import CalendarAdjuster
from workweek.holidays import HolidaySnapshot
from workweek.pattern import WeeklyPattern, get_pattern


class WorkweekSettings(BaseModel):
    """
    Working-week configuration.

    Attributes:
        pattern: Canonical pattern name, case and separator insensitive
            (default: "MONDAY_FRIDAY").
        week_start_offset: Offset of a custom pattern; requires work_length.
        work_length: Working days per week of a custom pattern (1..6);
            requires week_start_offset.  A custom pattern overrides `pattern`.
        holidays: Holiday dates, any order, repeats allowed.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str = "MONDAY_FRIDAY"
    week_start_offset: int | None = None
    work_length: int | None = Field(default=None, ge=1, le=6)
    holidays: list[date] = Field(default_factory=list)

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        """Normalise to the canonical registry name."""
        return get_pattern(value).name

    @model_validator(mode="after")
    def validate_custom_pattern(self) -> "WorkweekSettings":
        """Custom pattern parameters come in pairs."""
        if (self.week_start_offset is None) != (self.work_length is None):
            raise ValueError(
                "week_start_offset and work_length must be given together"
            )
        return self

    @property
    def is_custom(self) -> bool:
        return self.work_length is not None

    def weekly_pattern(self) -> WeeklyPattern:
        if self.week_start_offset is not None and self.work_length is not None:
            return WeeklyPattern(self.week_start_offset, self.work_length)
        return get_pattern(self.pattern)

    def holiday_snapshot(self) -> HolidaySnapshot:
        return HolidaySnapshot.from_dates(self.holidays)

    def adjuster(self) -> CalendarAdjuster:
        return CalendarAdjuster(self.weekly_pattern(), self.holiday_snapshot())
