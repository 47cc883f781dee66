from __future__ import annotations

from tickdate.calendar.business import (
    add_business_days,
    business_days_between,
    holiday_set,
    is_business_day,
)
from tickdate.core.constants import DATE_2020, MAX_DATE, TICKS_PER_DAY, TICKS_PER_HOUR
from tickdate.model.errors import DateError

DAY = TICKS_PER_DAY


def test_is_business_day() -> None:
    assert is_business_day(DATE_2020)
    assert not is_business_day(DATE_2020 + 3 * DAY)  # Saturday
    assert not is_business_day(DATE_2020, holiday_set([DATE_2020]))


def test_holiday_set_normalizes_to_day_start() -> None:
    assert holiday_set([DATE_2020 + 5 * TICKS_PER_HOUR]) == frozenset({DATE_2020})


def test_add_business_days() -> None:
    assert add_business_days(DATE_2020, 0) == DATE_2020
    assert add_business_days(DATE_2020, 3) == DATE_2020 + 5 * DAY  # Mon 2020-01-06
    assert add_business_days(DATE_2020, 3, holiday_set([DATE_2020 + DAY])) == DATE_2020 + 6 * DAY
    assert add_business_days(DATE_2020, -1) == DATE_2020 - DAY
    assert add_business_days(DATE_2020 + 7 * TICKS_PER_HOUR, 1) == DATE_2020 + DAY + 7 * TICKS_PER_HOUR


def test_add_business_days_overflow() -> None:
    assert isinstance(add_business_days(MAX_DATE - DAY, 5), DateError)


def test_business_days_between() -> None:
    assert business_days_between(DATE_2020, DATE_2020 + 7 * DAY) == 5
    assert business_days_between(DATE_2020 + 7 * DAY, DATE_2020) == -5
    assert business_days_between(DATE_2020, DATE_2020) == 0
    assert business_days_between(DATE_2020, DATE_2020 + 7 * DAY, holiday_set([DATE_2020])) == 4


def test_friday_plus_one_is_monday() -> None:
    friday = DATE_2020 + 2 * DAY
    assert add_business_days(friday, 1) == friday + 3 * DAY
