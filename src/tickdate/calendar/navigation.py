from __future__ import annotations

from collections.abc import Callable

from ..core.constants import (
    EPOCH_YEAR,
    MAX_DATE,
    MAX_YEAR,
    MIN_DATE,
    MIN_YEAR,
    TICKS_PER_DAY,
    TICKS_PER_WEEK,
)
from ..core.dates import breakdown_to_date, check_date, day_number, iso_weekday, split_date
from ..core.duration import add_months_to_date
from ..core.gregorian import days_between_years, days_in_year, days_until_month
from ..core.ticks import add_ticks
from ..model.breakdown import DateBreakdown, IsoWeekDate
from ..model.errors import DateError, invalid_calendar


def _first_of(year: int, month: int, day: int = 1) -> int | DateError:
    return breakdown_to_date(DateBreakdown(year, month, day))


def _check_start_month(start_month: int) -> None:
    if not 1 <= start_month <= 12:
        raise ValueError(f"Fiscal year start month out of range: {start_month}")


# --- period starts -----------------------------------------------------------------


def start_of_day(date: int) -> int | DateError:
    year, month, day, _ = split_date(check_date(date))
    return _first_of(year, month, day)


def start_of_week(date: int) -> int | DateError:
    """Weeks start on Sunday."""
    sod = start_of_day(date)
    if isinstance(sod, DateError):
        return sod
    days_since_sunday = (day_number(date) + 3) % 7
    return add_ticks(sod, -days_since_sunday * TICKS_PER_DAY, "start_of_week")


def start_of_month(date: int) -> int | DateError:
    year, month, _, _ = split_date(check_date(date))
    return _first_of(year, month)


def start_of_quarter(date: int) -> int | DateError:
    year, month, _, _ = split_date(check_date(date))
    return _first_of(year, 3 * ((month - 1) // 3) + 1)


def start_of_year(date: int) -> int | DateError:
    year, _, _, _ = split_date(check_date(date))
    return _first_of(year, 1)


def start_of_fiscal_year(date: int, start_month: int = 1) -> int | DateError:
    """Start of the fiscal year (beginning on `start_month`) containing `date`."""
    _check_start_month(start_month)
    year, month, _, _ = split_date(check_date(date))
    return _first_of(year if month >= start_month else year - 1, start_month)


# --- period ends (exclusive: the start of the next period) ----------------------


def _then(start: int | DateError, step: Callable[[int], int | DateError]) -> int | DateError:
    if isinstance(start, DateError):
        return start
    return step(start)


def end_of_day(date: int) -> int | DateError:
    return _then(start_of_day(date), lambda d: add_ticks(d, TICKS_PER_DAY, "end_of_day"))


def end_of_week(date: int) -> int | DateError:
    return _then(start_of_week(date), lambda d: add_ticks(d, TICKS_PER_WEEK, "end_of_week"))


def end_of_month(date: int) -> int | DateError:
    return _then(start_of_month(date), lambda d: add_months_to_date(d, 1))


def end_of_quarter(date: int) -> int | DateError:
    return _then(start_of_quarter(date), lambda d: add_months_to_date(d, 3))


def end_of_year(date: int) -> int | DateError:
    return _then(start_of_year(date), lambda d: add_months_to_date(d, 12))


def end_of_fiscal_year(date: int, start_month: int = 1) -> int | DateError:
    return _then(start_of_fiscal_year(date, start_month), lambda d: add_months_to_date(d, 12))


# --- ordinal and ISO week dates ---------------------------------------------------


def day_of_year(date: int) -> int:
    year, month, day, _ = split_date(check_date(date))
    return days_until_month(year, month) + day


def _days_to_jan1(year: int) -> int:
    return days_between_years(EPOCH_YEAR, year)


def _window_date(days: int, operation: str) -> int | DateError:
    date = days * TICKS_PER_DAY
    if not MIN_DATE <= date <= MAX_DATE:
        return invalid_calendar(operation, "date outside the supported window")
    return date


def iso_week_date(date: int) -> IsoWeekDate:
    """
    ISO-8601 week date. Week 1 is the Monday-start week containing Jan 4;
    the week belongs to the year of its Thursday.
    """
    check_date(date)
    weekday = iso_weekday(date)
    thursday = day_number(date) + (4 - weekday)
    year, month, day, _ = split_date(thursday * TICKS_PER_DAY)
    week = (days_until_month(year, month) + day - 1) // 7 + 1
    return IsoWeekDate(year, week, weekday)


def iso_weeks_in_year(year: int) -> int:
    jan1 = (_days_to_jan1(year) + 2) % 7 + 1
    if jan1 == 4 or (jan1 == 3 and days_in_year(year) == 366):
        return 53
    return 52


def iso_week_date_to_date(year: int, week: int, weekday: int) -> int | DateError:
    op = "iso_week_date_to_date"
    if not MIN_YEAR <= year <= MAX_YEAR:
        return invalid_calendar(op, f"year {year} outside [{MIN_YEAR}, {MAX_YEAR}]")
    if not 1 <= weekday <= 7:
        return invalid_calendar(op, f"weekday {weekday} outside [1, 7]")
    weeks = iso_weeks_in_year(year)
    if not 1 <= week <= weeks:
        return invalid_calendar(op, f"week {week} outside [1, {weeks}] for {year}")
    jan4 = _days_to_jan1(year) + 3
    monday = jan4 - ((jan4 + 2) % 7)
    return _window_date(monday + 7 * (week - 1) + weekday - 1, op)


def ordinal_date_to_date(year: int, day: int) -> int | DateError:
    op = "ordinal_date_to_date"
    if not MIN_YEAR <= year <= MAX_YEAR:
        return invalid_calendar(op, f"year {year} outside [{MIN_YEAR}, {MAX_YEAR}]")
    if not 1 <= day <= days_in_year(year):
        return invalid_calendar(op, f"day {day} outside [1, {days_in_year(year)}] for {year}")
    return _window_date(_days_to_jan1(year) + day - 1, op)
