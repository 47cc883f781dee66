from __future__ import annotations

from itertools import islice

import pytest

from tickdate.calendar.sequence import date_seq
from tickdate.core.constants import DATE_2020, MAX_DATE, TICKS_PER_DAY, TICKS_PER_HOUR
from tickdate.core.dates import date_of


def test_infinite_day_sequence_is_lazy() -> None:
    assert list(islice(date_seq(DATE_2020), 3)) == [DATE_2020, DATE_2020 + TICKS_PER_DAY, DATE_2020 + 2 * TICKS_PER_DAY]


def test_end_is_exclusive() -> None:
    seq = list(date_seq(DATE_2020, "quarters", 1, end=date_of(2021, 1, 1)))
    assert seq == [date_of(2020, 1, 1), date_of(2020, 4, 1), date_of(2020, 7, 1), date_of(2020, 10, 1)]


def test_negative_steps() -> None:
    seq = list(date_seq(DATE_2020, "days", -1, end=DATE_2020 - 3 * TICKS_PER_DAY))
    assert seq == [DATE_2020, DATE_2020 - TICKS_PER_DAY, DATE_2020 - 2 * TICKS_PER_DAY]


def test_month_steps_do_not_drift() -> None:
    seq = list(islice(date_seq(date_of(2020, 1, 28), "months", 1), 3))
    assert seq == [date_of(2020, 1, 28), date_of(2020, 2, 28), date_of(2020, 3, 28)]


def test_stops_at_first_invalid_day() -> None:
    assert list(date_seq(date_of(2020, 1, 31), "months")) == [date_of(2020, 1, 31)]


def test_stops_at_overflow() -> None:
    assert list(date_seq(MAX_DATE - TICKS_PER_HOUR, "days")) == [MAX_DATE - TICKS_PER_HOUR]


def test_bad_arguments() -> None:
    with pytest.raises(ValueError):
        list(date_seq(DATE_2020, "days", 0))
    with pytest.raises(ValueError):
        list(date_seq(DATE_2020, "fortnights"))
