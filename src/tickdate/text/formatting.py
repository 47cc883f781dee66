from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from ..calendar.navigation import day_of_year, iso_week_date
from ..core.constants import TICKS_PER_MINUTE, TICKS_PER_MS, TICKS_PER_SECOND, TICKS_PER_US
from ..core.dates import check_date, date_to_breakdown, split_breakdown
from ..core.duration import ticks_to_average_years
from ..core.ticks import months_to_breakdown, quot_rem, ticks_to_breakdown
from ..model.breakdown import Duration

MAX_PRECISION = 15


def check_precision(precision: int) -> int:
    if not 0 <= precision <= MAX_PRECISION:
        raise ValueError(f"Fraction precision must be within [0, {MAX_PRECISION}], got {precision}")
    return precision


def _rounded_seconds(ticks: int, precision: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 50
        value = Decimal(ticks) / Decimal(TICKS_PER_SECOND)
        return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def seconds_with_fraction(seconds: int, sub_second_ticks: int, precision: int) -> str:
    """
    Seconds plus the sub-second ticks as a zero-padded decimal with
    `precision` digits, rounded half away from zero.
    """
    check_precision(precision)
    value = _rounded_seconds(seconds * TICKS_PER_SECOND + sub_second_ticks, precision)
    width = 2 if precision == 0 else precision + 3
    return f"{value:0{width}.{precision}f}"


def _carry_minute(ticks: int, sub_minute: int, precision: int) -> int:
    # seconds that round to 60 move the value to the adjacent whole minute
    if abs(_rounded_seconds(sub_minute, check_precision(precision))) < 60:
        return ticks
    return ticks - sub_minute + (TICKS_PER_MINUTE if sub_minute > 0 else -TICKS_PER_MINUTE)


def carry_date_seconds(date: int, precision: int) -> int:
    """
    `date` moved up to the next whole minute when its seconds would print
    as 60 at `precision` digits; otherwise unchanged.
    """
    return _carry_minute(date, date % TICKS_PER_MINUTE, precision)


def _time_text(hours: int, minutes: int, seconds: int, ms: int, us: int, ticks: int, precision: int | None) -> str:
    if precision is None:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{ms:03d}.{us:03d}:{ticks:03d}"
    sub = ms * TICKS_PER_MS + us * TICKS_PER_US + ticks
    return f"{hours:02d}:{minutes:02d}:{seconds_with_fraction(seconds, sub, precision)}"


def format_ticks(ticks: int, precision: int | None = None, decorated: bool = False) -> str:
    """
    W<weeks>D<days>T<HH>:<MM>:<SS>.<ms>.<us>:<ticks>, or with `precision`
    the seconds as a decimal fraction. `decorated` gives
    <w>w<d>d<HH>h<MM>m<SS.frac>s (6 fraction digits unless `precision`).
    """
    if decorated and precision is None:
        precision = 6
    if precision is not None:
        ticks = _carry_minute(ticks, quot_rem(ticks, TICKS_PER_MINUTE)[1], precision)
    b = ticks_to_breakdown(ticks)
    weeks, days = b.weeks or 0, b.days or 0
    hours, minutes, seconds = b.hours or 0, b.minutes or 0, b.seconds or 0
    ms, us, rest = b.ms or 0, b.us or 0, b.ticks or 0
    if decorated:
        sub = ms * TICKS_PER_MS + us * TICKS_PER_US + rest
        return f"{weeks}w{days}d{hours:02d}h{minutes:02d}m{seconds_with_fraction(seconds, sub, precision)}s"
    return f"W{weeks}D{days}T" + _time_text(hours, minutes, seconds, ms, us, rest, precision)


def format_date(date: int, precision: int | None = None) -> str:
    """YYYY-MM-DDTHH:MM:SS.mmm.uuu:ttt, or fractional seconds with `precision`."""
    check_date(date)
    if precision is not None:
        date = carry_date_seconds(date, precision)
    b = split_breakdown(date)
    return f"{b.year:04d}-{b.month:02d}-{b.day:02d}T" + _time_text(
        b.hours or 0, b.minutes or 0, b.seconds or 0, b.ms or 0, b.us or 0, b.ticks or 0, precision
    )


def format_duration(duration: Duration, precision: int | None = None) -> str:
    m = months_to_breakdown(duration.months)
    return f"{m.years}y{m.months}mo" + format_ticks(duration.ticks, precision)


def format_average_years(ticks: int) -> str:
    return f"{ticks_to_average_years(ticks)!r}ay"


def format_iso_week_date(date: int) -> str:
    w = iso_week_date(date)
    return f"{w.year:04d}-W{w.week:02d}-{w.weekday}"


def format_ordinal_date(date: int) -> str:
    b = date_to_breakdown(date, set())
    return f"{b.year:04d}-{day_of_year(date):03d}"
