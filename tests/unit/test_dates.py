from __future__ import annotations

import pytest

from tickdate.core.constants import DATE_2020, MAX_DATE, MIN_DATE, TICKS_PER_DAY
from tickdate.core.dates import (
    breakdown_to_date,
    check_date,
    date_of,
    date_range,
    date_to_breakdown,
    day_of_week,
    first_day_of_month,
    iso_weekday,
    last_day_of_month,
    same_day,
    split_date,
    strict_date_range,
    weekday,
    weekend,
)
from tickdate.model.breakdown import DateBreakdown
from tickdate.model.errors import DateError, ErrorKind


def test_epoch_breakdown() -> None:
    assert date_to_breakdown(0) == DateBreakdown(2070, 1, 1, hours=0, minutes=0, seconds=0, ms=0, us=0, ticks=0)
    assert date_to_breakdown(0, set()) == DateBreakdown(2070, 1, 1)


def test_window_endpoints() -> None:
    assert date_to_breakdown(MIN_DATE, set()) == DateBreakdown(1814, 7, 8, ticks=31867145224192)
    assert date_to_breakdown(MAX_DATE, set()) == DateBreakdown(2325, 6, 28, ticks=66974454775807)
    assert breakdown_to_date(DateBreakdown(1814, 7, 8, ticks=31867145224192)) == MIN_DATE
    assert breakdown_to_date(DateBreakdown(2325, 6, 28, ticks=66974454775807)) == MAX_DATE


def test_breakdown_before_epoch() -> None:
    d = -138431984242352303
    assert date_to_breakdown(d) == DateBreakdown(2066, 3, 2, hours=10, minutes=57, seconds=0, ms=767, us=174, ticks=641)
    assert date_to_breakdown(d, set()) == DateBreakdown(2066, 3, 2, ticks=45097357647697)
    assert date_to_breakdown(d, {"seconds", "ms"}) == DateBreakdown(2066, 3, 2, seconds=39420, ms=767, ticks=199697)
    assert breakdown_to_date(date_to_breakdown(d)) == d


@pytest.mark.parametrize(
    "ymd,date",
    [
        ((2041, 1, 29), -1044162662400000000),
        ((2024, 2, 29), -1654904908800000000),
        ((2024, 3, 1), -1654806067200000000),
        ((2020, 1, 1), DATE_2020),
    ],
)
def test_calendar_dates(ymd: tuple[int, int, int], date: int) -> None:
    assert date_of(*ymd) == date
    assert split_date(date) == (*ymd, 0)


def test_invalid_breakdowns_are_values() -> None:
    for b in (
        DateBreakdown(2023, 2, 29),
        DateBreakdown(1813, 1, 1),
        DateBreakdown(2020, 13, 1),
        DateBreakdown(2020, 1, 1, ticks=TICKS_PER_DAY),
        DateBreakdown(1814, 7, 7),
    ):
        err = breakdown_to_date(b)
        assert isinstance(err, DateError)
        assert err.kind is ErrorKind.INVALID_CALENDAR_VALUE


def test_out_of_range_date_is_a_contract_violation() -> None:
    with pytest.raises(ValueError):
        check_date(MAX_DATE + 1)
    with pytest.raises(ValueError):
        date_to_breakdown(MIN_DATE - 1)


def test_day_predicates() -> None:
    assert day_of_week(0) == "wednesday"
    assert day_of_week(DATE_2020) == "wednesday"
    assert day_of_week(DATE_2020 - 1) == "tuesday"
    assert iso_weekday(DATE_2020) == 3
    saturday = DATE_2020 + 3 * TICKS_PER_DAY
    assert weekend(saturday) and not weekday(saturday)
    assert weekday(DATE_2020)
    assert first_day_of_month(DATE_2020)
    assert last_day_of_month(DATE_2020 - 1)
    assert not last_day_of_month(DATE_2020)
    assert same_day(DATE_2020, DATE_2020 + TICKS_PER_DAY - 1)
    assert not same_day(DATE_2020, DATE_2020 - 1)


def test_date_range_predicates() -> None:
    assert date_range((1, 2))
    assert date_range((1, 1))
    assert not date_range((2, 1))
    assert not date_range("ab")
    assert not strict_date_range((1, 1))
    assert strict_date_range([1, 2])


def test_breakdown_roundtrip_and_monotonicity() -> None:
    step = 7_919_876_543_210_987  # ~80 days, odd so times of day vary
    values = list(range(MIN_DATE, MAX_DATE - step, step))
    keys = []
    for d in values:
        b = date_to_breakdown(d)
        assert breakdown_to_date(b) == d
        keys.append(b.sort_key())
    assert keys == sorted(keys)
