from __future__ import annotations

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DAYS_UNTIL_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def leap_year(year: int) -> bool:
    """Proleptic Gregorian leap-year rule."""
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    if month == 2 and leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def days_until_month(year: int, month: int) -> int:
    """Days in `year` before `month` starts, counting this year's leap day."""
    _check_month(month)
    extra = 1 if month >= 3 and leap_year(year) else 0
    return _DAYS_UNTIL_MONTH[month - 1] + extra


def days_in_year(year: int) -> int:
    return 366 if leap_year(year) else 365


def _leap_days_since_2000(year: int, month: int) -> int:
    # Leap days between 2000-01-01 and the first of (year, month).
    y = year - 2000
    cycles_400, y = divmod(y, 400)
    cycles_100, y = divmod(y, 100)
    count = 97 * cycles_400 + 24 * cycles_100 + y // 4 + 1
    if leap_year(year) and month <= 2:
        count -= 1
    return count


def passed_leap_days(year1: int, month1: int, year2: int, month2: int) -> int:
    """Leap days crossed going from the first of (year1, month1) to the first of (year2, month2)."""
    _check_month(month1)
    _check_month(month2)
    return _leap_days_since_2000(year2, month2) - _leap_days_since_2000(year1, month1)


def days_between_years(year1: int, year2: int) -> int:
    """Days from Jan 1 of year1 to Jan 1 of year2 (negative when year2 < year1)."""
    return 365 * (year2 - year1) + passed_leap_days(year1, 1, year2, 1)
