from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Protocol, Union, runtime_checkable

from .._coerce import DateLike
from .._exceptions import InvalidArgumentError
from .snapshot import HolidaySnapshot

logger = logging.getLogger(__name__)


@runtime_checkable
class HolidayLoader(Protocol):
    """
    Anything that can turn a source (file, URL, archive, ...) into holiday dates.

    Reading and parsing are entirely the loader's business; the dates may come
    back in any order and with repeats.
    """

    def load_holidays(self, source: Any) -> Iterable[DateLike]: ...


LoaderLike = Union[HolidayLoader, Callable[[Any], Iterable[DateLike]]]


def load_snapshot(loader: LoaderLike, source: Any) -> HolidaySnapshot:
    """
    Run `loader` on `source` and freeze the result into a HolidaySnapshot.

    `loader` is either a :class:`HolidayLoader` or a plain callable taking the
    source.  The returned snapshot is new; swapping it in for a previous one
    is up to the caller.
    """
    if isinstance(loader, HolidayLoader):
        dates = loader.load_holidays(source)
    elif callable(loader):
        dates = loader(source)
    else:
        raise InvalidArgumentError(
            f"Expected a HolidayLoader or a callable; got {type(loader).__name__}."
        )

    snapshot = HolidaySnapshot.from_dates(dates)
    logger.info("Loaded %d holidays from %r", len(snapshot), source)
    return snapshot
