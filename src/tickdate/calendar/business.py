from __future__ import annotations

from collections.abc import Iterable, Set

from ..core.constants import TICKS_PER_DAY
from ..core.dates import check_date, day_number, weekday
from ..core.ticks import add_ticks
from ..model.errors import DateError

EMPTY_HOLIDAYS: frozenset[int] = frozenset()


def holiday_set(dates: Iterable[int]) -> frozenset[int]:
    """Normalize holiday dates to the start of their (UTC) day."""
    return frozenset(day_number(check_date(d)) * TICKS_PER_DAY for d in dates)


def is_business_day(date: int, holidays: Set[int] = EMPTY_HOLIDAYS) -> bool:
    """Monday-Friday and not a holiday; holidays must come from holiday_set()."""
    return weekday(date) and day_number(date) * TICKS_PER_DAY not in holidays


def add_business_days(date: int, n: int, holidays: Set[int] = EMPTY_HOLIDAYS) -> int | DateError:
    """
    Step one day at a time in the direction of `n` until |n| business days
    have been passed. Time of day is kept; n == 0 returns `date` unchanged.
    """
    check_date(date)
    step = TICKS_PER_DAY if n > 0 else -TICKS_PER_DAY
    remaining = abs(n)
    current: int | DateError = date
    while remaining:
        current = add_ticks(current, step, "add_business_days")
        if isinstance(current, DateError):
            return current
        if is_business_day(current, holidays):
            remaining -= 1
    return current


def business_days_between(start: int, end: int, holidays: Set[int] = EMPTY_HOLIDAYS) -> int:
    """Business days in [start, end); negative when end < start."""
    check_date(start)
    check_date(end)
    if end < start:
        return -business_days_between(end, start, holidays)
    count = 0
    current = start
    while current < end:
        if is_business_day(current, holidays):
            count += 1
        current += TICKS_PER_DAY
    return count
