from __future__ import annotations

from ..model.breakdown import DateBreakdown, Duration
from ..model.errors import DateError, invalid_calendar
from .constants import MAX_YEAR, MIN_YEAR, TICKS_PER_AVERAGE_MONTH, TICKS_PER_AVERAGE_YEAR, TICKS_PER_DAY
from .dates import breakdown_to_date, breakdown_to_ticks_unchecked, check_date, split_date
from .gregorian import days_in_month
from .ticks import add_ticks


def add_months_to_date(date: int, months: int) -> int | DateError:
    """
    Shift `date` by whole calendar months, keeping day and time of day.

    No clamping: Jan 31 + 1 month is an error, not Feb 28/29.
    """
    year, month, day, ticks = split_date(check_date(date))
    carry, month0 = divmod(month - 1 + months, 12)
    year += carry
    month = month0 + 1
    if not MIN_YEAR <= year <= MAX_YEAR:
        return invalid_calendar("add_months_to_date", f"year {year} outside [{MIN_YEAR}, {MAX_YEAR}]")
    if day > days_in_month(year, month):
        return invalid_calendar("add_months_to_date", f"day {day} does not exist in {year}-{month:02d}")
    return breakdown_to_date(DateBreakdown(year, month, day, ticks=ticks))


def add_duration_to_date(date: int, duration: Duration) -> int | DateError:
    shifted = add_months_to_date(date, duration.months)
    if isinstance(shifted, DateError):
        return shifted
    return add_ticks(shifted, duration.ticks, "add_duration_to_date")


def _month_delta(start: int, end: int) -> tuple[int, int]:
    """Naive month difference and the day/time remainder between the two dates."""
    sy, sm, sd, st = split_date(check_date(start))
    ey, em, ed, et = split_date(check_date(end))
    months = 12 * (ey - sy) + (em - sm)
    ticks = TICKS_PER_DAY * (ed - sd) + (et - st)
    return months, ticks


def _anchored(start: int, end: int, months: int) -> Duration | DateError:
    shifted = add_months_to_date(start, months)
    if isinstance(shifted, DateError):
        return shifted
    return Duration(months, end - shifted)


def date_range_to_duration_calendar(start: int, end: int) -> Duration | DateError:
    """Calendar month difference plus signed tick remainder (not normalized)."""
    months, _ = _month_delta(start, end)
    return _anchored(start, end, months)


def date_range_to_duration_floor(start: int, end: int) -> Duration | DateError:
    """Months rounded down so the tick remainder is non-negative."""
    months, ticks = _month_delta(start, end)
    if ticks < 0:
        return _anchored(start, end, months - 1)
    return Duration(months, ticks)


def date_range_to_duration_ceil(start: int, end: int) -> Duration | DateError:
    """Months rounded up so the tick remainder is non-positive."""
    months, ticks = _month_delta(start, end)
    if ticks > 0:
        return _anchored(start, end, months + 1)
    return Duration(months, ticks)


def _month_bounds(date: int) -> tuple[int, int]:
    """[start, end) of the month containing `date`, as unchecked tick values."""
    year, month, _, _ = split_date(date)
    start = breakdown_to_ticks_unchecked(DateBreakdown(year, month, 1))
    return start, start + days_in_month(year, month) * TICKS_PER_DAY


def date_range_to_prorated_months(start: int, end: int) -> float:
    """
    Continuous month count: whole months between the two dates plus the
    fraction left in the start month and the fraction elapsed in the end month.
    """
    check_date(start)
    check_date(end)
    if end < start:
        return -date_range_to_prorated_months(end, start)

    s_lo, s_hi = _month_bounds(start)
    e_lo, e_hi = _month_bounds(end)
    if s_lo == e_lo:
        return (end - start) / (s_hi - s_lo)

    sy, sm, _, _ = split_date(s_hi)
    ey, em, _, _ = split_date(e_lo)
    whole = 12 * (ey - sy) + (em - sm)
    return whole + (s_hi - start) / (s_hi - s_lo) + (end - e_lo) / (e_hi - e_lo)


# --- average (non-calendar) conversions ---------------------------------------


def ticks_to_average_years(ticks: int) -> float:
    return ticks / TICKS_PER_AVERAGE_YEAR


def average_years_to_ticks(years: float) -> int:
    return round(years * TICKS_PER_AVERAGE_YEAR)


def ticks_to_average_months(ticks: int) -> float:
    return ticks / TICKS_PER_AVERAGE_MONTH


def average_months_to_ticks(months: float) -> int:
    return round(months * TICKS_PER_AVERAGE_MONTH)


def date_range_to_average_years(start: int, end: int) -> float:
    return (end - float(start)) / TICKS_PER_AVERAGE_YEAR
