"""
workweek.holidays
~~~~~~~~~~~~~~~~~

Immutable holiday sets with logarithmic membership and range counting.

Basic usage::

    from datetime import date
    from workweek.holidays import HolidaySnapshot

    hols = HolidaySnapshot([date(2024, 12, 25), date(2024, 1, 1), date(2024, 12, 25)])
    len(hols)                                               # → 2
    date(2024, 12, 25) in hols                              # → True
    hols.count_between(date(2024, 1, 1), date(2025, 1, 1))  # → 2

Snapshots are never modified.  Refreshing holiday data means building a new
snapshot, typically through :func:`load_snapshot`, and replacing the old
reference::

    hols = load_snapshot(my_ical_reader, "holidays.ics")

Public API
----------
HolidaySnapshot    The frozen holiday set.
NO_HOLIDAYS        Shared empty snapshot.
HolidayLoader      Protocol for external holiday sources.
load_snapshot      Run a loader and freeze its output.
"""

from __future__ import annotations

from workweek.holidays.loader import HolidayLoader, load_snapshot
from workweek.holidays.snapshot import NO_HOLIDAYS, HolidaySnapshot

__all__ = [
    "HolidaySnapshot",
    "NO_HOLIDAYS",
    "HolidayLoader",
    "load_snapshot",
]
