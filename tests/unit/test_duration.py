from __future__ import annotations

import pytest

from tickdate.core.constants import DATE_2020, TICKS_PER_AVERAGE_YEAR, TICKS_PER_DAY
from tickdate.core.dates import date_of
from tickdate.core.duration import (
    add_duration_to_date,
    add_months_to_date,
    average_months_to_ticks,
    average_years_to_ticks,
    date_range_to_average_years,
    date_range_to_duration_calendar,
    date_range_to_duration_ceil,
    date_range_to_duration_floor,
    date_range_to_prorated_months,
    ticks_to_average_months,
    ticks_to_average_years,
)
from tickdate.model.breakdown import Duration
from tickdate.model.errors import DateError, ErrorKind


def test_add_months() -> None:
    assert add_months_to_date(DATE_2020, 54) == date_of(2024, 7, 1)
    assert add_months_to_date(DATE_2020, -15) == date_of(2018, 10, 1)
    assert add_months_to_date(date_of(2020, 1, 15, hours=3), 1) == date_of(2020, 2, 15, hours=3)


def test_add_months_does_not_clamp() -> None:
    err = add_months_to_date(date_of(2020, 1, 31), 1)
    assert isinstance(err, DateError)
    assert err.kind is ErrorKind.INVALID_CALENDAR_VALUE


def test_add_duration() -> None:
    assert add_duration_to_date(DATE_2020, Duration(1, TICKS_PER_DAY)) == date_of(2020, 2, 2)


def test_calendar_duration() -> None:
    assert date_range_to_duration_calendar(73847, 234242232323552353) == Duration(77, 2656363523478506)
    assert date_range_to_duration_calendar(-2473847, 2342423) == Duration(1, -3064089595183730)


def test_floor_duration() -> None:
    assert date_range_to_duration_floor(73847, 234242232323552353) == Duration(77, 2656363523478506)
    assert date_range_to_duration_floor(-2473847, 2342423) == Duration(0, 4816270)


def test_ceil_duration() -> None:
    assert date_range_to_duration_ceil(73847, 234242232323552353) == Duration(78, -308884476521494)
    assert date_range_to_duration_ceil(-2473847, 2342423) == Duration(1, -3064089595183730)


def test_durations_add_back_to_end() -> None:
    start, end = date_of(2020, 1, 15), date_of(2021, 3, 2, hours=7)
    for fn in (date_range_to_duration_calendar, date_range_to_duration_floor, date_range_to_duration_ceil):
        d = fn(start, end)
        assert add_duration_to_date(start, d) == end


def test_prorated_months() -> None:
    assert date_range_to_prorated_months(DATE_2020, date_of(2020, 2, 1)) == pytest.approx(1.0)
    half = DATE_2020 + 31 * TICKS_PER_DAY // 2
    assert date_range_to_prorated_months(DATE_2020, half) == pytest.approx(0.5)
    assert date_range_to_prorated_months(half, DATE_2020) == pytest.approx(-0.5)


def test_average_conversions() -> None:
    assert ticks_to_average_years(294823904829) == pytest.approx(8.16660631615668e-06)
    assert ticks_to_average_years(-2473847) == pytest.approx(-6.852542892382862e-11)
    assert date_range_to_average_years(294823904829, 12341242141242) == pytest.approx(3.3368513762008396e-4)
    assert average_years_to_ticks(1.0) == TICKS_PER_AVERAGE_YEAR
    assert ticks_to_average_months(TICKS_PER_AVERAGE_YEAR) == pytest.approx(12.0)
    assert average_months_to_ticks(12.0) == TICKS_PER_AVERAGE_YEAR
