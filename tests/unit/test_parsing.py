from __future__ import annotations

import pytest

from tickdate.core.constants import (
    DATE_2020,
    TICKS_PER_AVERAGE_YEAR,
    TICKS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_MINUTE,
    TICKS_PER_SECOND,
    TICKS_PER_WEEK,
)
from tickdate.core.dates import date_of
from tickdate.model.breakdown import DateBreakdown, Duration
from tickdate.model.errors import DateError, ErrorKind
from tickdate.text.formatting import format_date, format_ticks
from tickdate.text.parsing import (
    parse_date,
    parse_date_breakdown,
    parse_duration,
    parse_iso_week_date,
    parse_ordinal_date,
    parse_ticks,
    parse_time,
)


@pytest.mark.parametrize(
    "text,ticks",
    [
        ("W20D0T01:18:17.9233", 13843198424255200),
        ("W20D0T01:18:17.92328254", 13843198424235226),
        ("T0:0:0.0.2:1045", 3333),
        ("T0:48:33.752.913:861", 3333333333333),
        ("T0:0:0.0.0:333333333333333", 333333333333333),
        ("W1", TICKS_PER_WEEK),
        ("D2T01:30", 2 * TICKS_PER_DAY + TICKS_PER_HOUR + 30 * TICKS_PER_MINUTE),
    ],
)
def test_parse_ticks(text: str, ticks: int) -> None:
    assert parse_ticks(text) == ticks


def test_parse_ticks_round_trips_explicit_format() -> None:
    for ticks in (0, 13843198424235230, 333333333333333333, -1348333636369480):
        assert parse_ticks(format_ticks(ticks)) == ticks


def test_parse_decorated_and_average_years() -> None:
    assert parse_ticks("1w0d01h00m00.5s") == TICKS_PER_WEEK + TICKS_PER_HOUR + TICKS_PER_SECOND // 2
    assert parse_ticks("1.0ay") == TICKS_PER_AVERAGE_YEAR
    assert isinstance(parse_ticks("nanay"), DateError)


def test_parse_ticks_errors() -> None:
    err = parse_ticks("garbage")
    assert isinstance(err, DateError) and err.kind is ErrorKind.MALFORMED_INPUT
    err = parse_ticks("")
    assert isinstance(err, DateError) and err.kind is ErrorKind.MALFORMED_INPUT
    err = parse_ticks("W99999999999")
    assert isinstance(err, DateError) and err.kind is ErrorKind.OVERFLOW


def test_parse_time_forms() -> None:
    assert parse_time("01:30") == TICKS_PER_HOUR + 30 * TICKS_PER_MINUTE
    assert parse_time("00:00:01.5") == TICKS_PER_SECOND + TICKS_PER_SECOND // 2
    assert isinstance(parse_time("1"), DateError)
    assert isinstance(parse_time("aa:bb"), DateError)


def test_parse_date() -> None:
    assert parse_date("2031-08-28T13:30:07.6717") == -1384319842423575200
    assert parse_date("2031-08-28T13:30:07.67174823") == -1384319842423520025
    assert parse_date("2020-01-01") == DATE_2020
    assert parse_date(" 2020-01-01T00:00 ") == DATE_2020
    assert parse_date(format_date(-1384319842423520030)) == -1384319842423520030


def test_parse_date_errors() -> None:
    err = parse_date("2023-02-29")
    assert isinstance(err, DateError) and err.kind is ErrorKind.INVALID_CALENDAR_VALUE
    err = parse_date("20230229")
    assert isinstance(err, DateError) and err.kind is ErrorKind.MALFORMED_INPUT


def test_parse_date_breakdown_keeps_time_as_ticks() -> None:
    assert parse_date_breakdown("2024-03-10T02:30") == DateBreakdown(
        2024, 3, 10, ticks=2 * TICKS_PER_HOUR + 30 * TICKS_PER_MINUTE
    )


def test_parse_week_and_ordinal_dates() -> None:
    assert parse_date("2020-W01-3") == DATE_2020
    assert parse_date("2020-001") == DATE_2020
    assert parse_iso_week_date("2020-W53-5") == date_of(2021, 1, 1)
    assert parse_ordinal_date("2020-060") == date_of(2020, 2, 29)
    assert isinstance(parse_ordinal_date("2021-366"), DateError)
    assert isinstance(parse_iso_week_date("2021-W53-1"), DateError)


def test_parse_duration() -> None:
    assert parse_duration("43y7moW0D1T00:00") == Duration(523, TICKS_PER_DAY)
    assert parse_duration("0y1mo") == Duration(1, 0)
    assert isinstance(parse_duration("7mo"), DateError)


@pytest.mark.parametrize(
    "text",
    [
        "0w0d00h00m" + "9" * 60 + "s",
        "9" * 5000 + "w0d00h00m00s",
        "W" + "9" * 5000,
        "D" + "9" * 5000 + "T00:00",
    ],
)
def test_parse_ticks_oversized_fields_are_malformed(text: str) -> None:
    err = parse_ticks(text)
    assert isinstance(err, DateError)
    assert err.kind is ErrorKind.MALFORMED_INPUT


@pytest.mark.parametrize("text", ["9" * 5000 + "y0mo", "0y" + "9" * 5000 + "mo"])
def test_parse_duration_oversized_fields_are_malformed(text: str) -> None:
    err = parse_duration(text)
    assert isinstance(err, DateError)
    assert err.kind is ErrorKind.MALFORMED_INPUT


@pytest.mark.parametrize("precision", [0, 6, 9])
def test_reduced_precision_round_trip_across_midnight(precision: int) -> None:
    midnight = date_of(2020, 1, 2)
    text = format_date(midnight - 1, precision)
    assert text.startswith("2020-01-02T00:00:00")
    assert parse_date(text) == midnight
