from __future__ import annotations

import pytest

from tickdate.calendar.navigation import (
    day_of_year,
    end_of_day,
    end_of_fiscal_year,
    end_of_month,
    end_of_quarter,
    end_of_week,
    end_of_year,
    iso_week_date,
    iso_week_date_to_date,
    iso_weeks_in_year,
    ordinal_date_to_date,
    start_of_day,
    start_of_fiscal_year,
    start_of_month,
    start_of_quarter,
    start_of_week,
    start_of_year,
)
from tickdate.core.constants import DATE_2020, MAX_DATE, TICKS_PER_DAY, TICKS_PER_HOUR
from tickdate.core.dates import date_of
from tickdate.model.breakdown import IsoWeekDate
from tickdate.model.errors import DateError


def test_period_starts() -> None:
    d = DATE_2020 + 10 * TICKS_PER_HOUR
    assert start_of_day(d) == DATE_2020
    assert start_of_week(d) == DATE_2020 - 3 * TICKS_PER_DAY  # Sunday 2019-12-29
    assert start_of_month(d) == DATE_2020
    assert start_of_quarter(date_of(2020, 5, 15)) == date_of(2020, 4, 1)
    assert start_of_year(date_of(2020, 5, 15)) == DATE_2020


def test_period_ends_are_exclusive() -> None:
    d = DATE_2020 + 10 * TICKS_PER_HOUR
    assert end_of_day(d) == DATE_2020 + TICKS_PER_DAY
    assert end_of_week(d) == DATE_2020 + 4 * TICKS_PER_DAY
    assert end_of_month(d) == date_of(2020, 2, 1)
    assert end_of_quarter(date_of(2020, 5, 15)) == date_of(2020, 7, 1)
    assert end_of_year(d) == date_of(2021, 1, 1)


def test_fiscal_year() -> None:
    assert start_of_fiscal_year(date_of(2020, 3, 1), 4) == date_of(2019, 4, 1)
    assert start_of_fiscal_year(date_of(2020, 4, 1), 4) == date_of(2020, 4, 1)
    assert end_of_fiscal_year(date_of(2020, 3, 1), 4) == date_of(2020, 4, 1)
    with pytest.raises(ValueError):
        start_of_fiscal_year(DATE_2020, 13)


def test_end_past_window_is_error() -> None:
    assert isinstance(end_of_day(MAX_DATE), DateError)


def test_iso_weeks() -> None:
    assert iso_week_date(DATE_2020) == IsoWeekDate(2020, 1, 3)
    assert iso_week_date(date_of(2021, 1, 1)) == IsoWeekDate(2020, 53, 5)
    assert iso_week_date(date_of(2019, 12, 30)) == IsoWeekDate(2020, 1, 1)
    assert iso_weeks_in_year(2020) == 53
    assert iso_weeks_in_year(2015) == 53
    assert iso_weeks_in_year(2021) == 52
    assert iso_week_date_to_date(2020, 53, 5) == date_of(2021, 1, 1)
    assert iso_week_date_to_date(2020, 1, 1) == date_of(2019, 12, 30)
    assert isinstance(iso_week_date_to_date(2021, 53, 1), DateError)
    assert isinstance(iso_week_date_to_date(2021, 1, 8), DateError)


def test_ordinal_dates() -> None:
    assert day_of_year(date_of(2020, 12, 31)) == 366
    assert day_of_year(DATE_2020) == 1
    assert ordinal_date_to_date(2020, 60) == date_of(2020, 2, 29)
    assert isinstance(ordinal_date_to_date(2021, 366), DateError)
