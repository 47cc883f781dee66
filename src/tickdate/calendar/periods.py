from __future__ import annotations

import re

from ..core.constants import TICKS_PER_DAY, TICKS_PER_WEEK
from ..core.dates import check_date
from ..core.duration import add_months_to_date
from ..core.ticks import add_ticks, multiply_ticks
from ..model.errors import DateError, malformed
from .navigation import (
    end_of_day,
    start_of_day,
    start_of_fiscal_year,
    start_of_month,
    start_of_quarter,
    start_of_week,
    start_of_year,
)

_LAST_N_DAYS = re.compile(r"^last-(\d{1,19})-days?$")
_TRAILING_N_MONTHS = re.compile(r"^trailing-(\d{1,19})-months?$")

# period -> (start-of-period function, months back for the previous period)
_PREVIOUS = {
    "last-month": (start_of_month, 1),
    "last-quarter": (start_of_quarter, 3),
    "last-year": (start_of_year, 12),
}

NAMED_PERIODS: tuple[str, ...] = (
    "today",
    "yesterday",
    "wtd",
    "mtd",
    "qtd",
    "ytd",
    "fytd",
    "last-week",
    "last-month",
    "last-quarter",
    "last-year",
    "last-N-days",
    "trailing-N-months",
)


def _pair(start: int | DateError, end: int | DateError) -> tuple[int, int] | DateError:
    if isinstance(start, DateError):
        return start
    if isinstance(end, DateError):
        return end
    return start, end


def period_to_date_range(period: str, ref: int, fiscal_start_month: int = 1) -> tuple[int, int] | DateError:
    """
    Resolve a named period relative to `ref`.

    `*td` periods run from the period start to `ref`. `last-*` and
    `trailing-N-months` are whole periods ending at the start of the current
    one, as half-open [start, end) ranges.
    """
    check_date(ref)
    key = period.strip().lower()

    if key == "ytd":
        return _pair(start_of_year(ref), ref)
    if key == "qtd":
        return _pair(start_of_quarter(ref), ref)
    if key == "mtd":
        return _pair(start_of_month(ref), ref)
    if key == "wtd":
        return _pair(start_of_week(ref), ref)
    if key == "fytd":
        return _pair(start_of_fiscal_year(ref, fiscal_start_month), ref)
    if key == "today":
        return _pair(start_of_day(ref), end_of_day(ref))

    if key == "yesterday":
        key = "last-1-days"

    if key == "last-week":
        sow = start_of_week(ref)
        if isinstance(sow, DateError):
            return sow
        return _pair(add_ticks(sow, -TICKS_PER_WEEK, "period_to_date_range"), sow)

    if key in _PREVIOUS:
        start_fn, months = _PREVIOUS[key]
        current = start_fn(ref)
        if isinstance(current, DateError):
            return current
        return _pair(add_months_to_date(current, -months), current)

    if m := _LAST_N_DAYS.match(key):
        sod = start_of_day(ref)
        if isinstance(sod, DateError):
            return sod
        span = multiply_ticks(TICKS_PER_DAY, -int(m.group(1)), "period_to_date_range")
        if isinstance(span, DateError):
            return span
        return _pair(add_ticks(sod, span, "period_to_date_range"), sod)

    if m := _TRAILING_N_MONTHS.match(key):
        som = start_of_month(ref)
        if isinstance(som, DateError):
            return som
        return _pair(add_months_to_date(som, -int(m.group(1))), som)

    return malformed("period_to_date_range", f"unknown period {period!r}; expected one of {', '.join(NAMED_PERIODS)}")
