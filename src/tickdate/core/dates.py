from __future__ import annotations

from ..model.breakdown import DATE_FIELDS, TIME_FIELDS, DateBreakdown, check_fields
from ..model.errors import DateError, invalid_calendar
from .constants import (
    DATE_2020,
    DATE_2045,
    DATE_2070,
    DAYS_OF_WEEK,
    EPOCH_YEAR,
    MAX_DATE,
    MAX_YEAR,
    MIN_DATE,
    MIN_YEAR,
    TICKS_PER_DAY,
    TICKS_PER_UNIT,
)
from .gregorian import days_between_years, days_in_month, days_in_year, days_until_month
from .ticks import ticks_to_breakdown


def check_date(date: int) -> int:
    if not MIN_DATE <= date <= MAX_DATE:
        raise ValueError(f"Date out of range: {date}")
    return date


def split_date(date: int) -> tuple[int, int, int, int]:
    """
    Return (year, month, day, ticks-into-day) for any integer tick value.

    Starts from the nearer of two anchor years so the year search stays
    short, then consumes whole years and month lengths.
    """
    anchor_year, anchor = (EPOCH_YEAR, DATE_2070) if date > DATE_2045 else (2020, DATE_2020)
    days, ticks = divmod(date - anchor, TICKS_PER_DAY)

    # never past the true year, so the day offset below is non-negative
    year = anchor_year + (days // 366 if days >= 0 else days // 365)
    day = days - days_between_years(anchor_year, year)
    while day >= days_in_year(year):
        day -= days_in_year(year)
        year += 1

    month = 1
    while day >= days_in_month(year, month):
        day -= days_in_month(year, month)
        month += 1
    return year, month, day + 1, ticks


def date_to_breakdown(date: int, fields: frozenset[str] | set[str] | None = None) -> DateBreakdown:
    """
    Break `date` into year/month/day plus the requested time fields.

    An empty `fields` set yields only year/month/day and, if non-zero, the
    ticks into the day.
    """
    return split_breakdown(check_date(date), fields)


def split_breakdown(value: int, fields: frozenset[str] | set[str] | None = None) -> DateBreakdown:
    """date_to_breakdown without the window check; used for local wall-clock ticks."""
    wanted = check_fields(fields, DATE_FIELDS) if fields is not None else frozenset(DATE_FIELDS)
    year, month, day, ticks = split_date(value)
    time_part = ticks_to_breakdown(ticks, wanted & set(TIME_FIELDS))
    return DateBreakdown(year, month, day, **time_part.as_dict())


def time_of_day_ticks(breakdown: DateBreakdown) -> int:
    return sum((getattr(breakdown, name) or 0) * TICKS_PER_UNIT[name] for name in TIME_FIELDS)


def validate_breakdown(breakdown: DateBreakdown, operation: str) -> DateError | None:
    b = breakdown
    if not MIN_YEAR <= b.year <= MAX_YEAR:
        return invalid_calendar(operation, f"year {b.year} outside [{MIN_YEAR}, {MAX_YEAR}]")
    if not 1 <= b.month <= 12:
        return invalid_calendar(operation, f"month {b.month} outside [1, 12]")
    dim = days_in_month(b.year, b.month)
    if not 1 <= b.day <= dim:
        return invalid_calendar(operation, f"day {b.day} outside [1, {dim}] for {b.year}-{b.month:02d}")
    ticks = time_of_day_ticks(b)
    if not 0 <= ticks < TICKS_PER_DAY:
        return invalid_calendar(operation, f"time of day {ticks} ticks is not within one day")
    return None


def breakdown_to_ticks_unchecked(breakdown: DateBreakdown) -> int:
    """Ticks from epoch for a calendar-valid breakdown, without the int64 window check."""
    b = breakdown
    days = (
        days_until_month(b.year, b.month)
        + days_between_years(EPOCH_YEAR, b.year)
        + (b.day - 1)
    )
    return days * TICKS_PER_DAY + time_of_day_ticks(b)


def breakdown_to_date(breakdown: DateBreakdown) -> int | DateError:
    """Ticks since 2070-01-01 UTC for `breakdown`."""
    err = validate_breakdown(breakdown, "breakdown_to_date")
    if err is not None:
        return err
    date = breakdown_to_ticks_unchecked(breakdown)
    if not MIN_DATE <= date <= MAX_DATE:
        return invalid_calendar("breakdown_to_date", "date outside the supported window")
    return date


def date_of(year: int, month: int = 1, day: int = 1, **time_fields: int) -> int | DateError:
    """Shorthand for breakdown_to_date(DateBreakdown(...))."""
    return breakdown_to_date(DateBreakdown(year, month, day, **time_fields))


# --- day-level predicates ------------------------------------------------------


def day_number(date: int) -> int:
    """Whole days since the epoch (floored)."""
    return date // TICKS_PER_DAY


def day_of_week(date: int) -> str:
    # 2070-01-01 is a Wednesday
    return DAYS_OF_WEEK[(day_number(date) + 3) % 7]


def iso_weekday(date: int) -> int:
    """1 = Monday .. 7 = Sunday."""
    return (day_number(date) + 2) % 7 + 1


def weekend(date: int) -> bool:
    return day_of_week(date) in ("saturday", "sunday")


def weekday(date: int) -> bool:
    return not weekend(date)


def first_day_of_month(date: int) -> bool:
    return split_date(check_date(date))[2] == 1


def last_day_of_month(date: int) -> bool:
    year, month, day, _ = split_date(check_date(date))
    return day == days_in_month(year, month)


def same_day(date1: int, date2: int) -> bool:
    return split_date(check_date(date1))[:3] == split_date(check_date(date2))[:3]


def date_range(value: object) -> bool:
    """True for a (start, end) pair of ints with start <= end."""
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        return False
    start, end = value
    return isinstance(start, int) and isinstance(end, int) and start <= end


def strict_date_range(value: object) -> bool:
    return date_range(value) and value[0] < value[1]  # type: ignore[index]
