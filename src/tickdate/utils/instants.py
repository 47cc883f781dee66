from __future__ import annotations

from datetime import UTC, datetime, timedelta

from ..core.constants import (
    DATE_1970,
    MAX_DATE,
    MAX_INSTANT_MS,
    MIN_DATE,
    MIN_INSTANT_MS,
    TICKS_PER_MS,
    TICKS_PER_US,
)
from ..core.dates import check_date

# Unix epoch 1970-01-01 UTC, as a date in ticks
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MS_OFFSET = -DATE_1970 // TICKS_PER_MS  # 3_155_760_000_000


def date_to_instant_ms(date: int) -> int:
    """Unix milliseconds for `date`, rounding half up below the millisecond."""
    check_date(date)
    return (2 * date + TICKS_PER_MS) // (2 * TICKS_PER_MS) + _MS_OFFSET


def instant_ms_to_date(instant_ms: int) -> int:
    if not MIN_INSTANT_MS <= instant_ms <= MAX_INSTANT_MS:
        raise ValueError(f"Instant ms out of range: {instant_ms}")
    if instant_ms == MIN_INSTANT_MS:
        return MIN_DATE
    if instant_ms == MAX_INSTANT_MS:
        return MAX_DATE
    return TICKS_PER_MS * (instant_ms - _MS_OFFSET)


def date_to_datetime(date: int) -> datetime:
    """Timezone-aware UTC datetime, floored to the microsecond."""
    check_date(date)
    return _UNIX_EPOCH + timedelta(microseconds=(date - DATE_1970) // TICKS_PER_US)


def datetime_to_date(dt: datetime) -> int:
    """Ticks for `dt`. Naive datetimes are taken as UTC. Exact at microsecond resolution."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return check_date(DATE_1970 + timedelta_to_ticks(dt - _UNIX_EPOCH))


def ticks_to_timedelta(ticks: int) -> timedelta:
    """Floors to the microsecond."""
    return timedelta(microseconds=ticks // TICKS_PER_US)


def timedelta_to_ticks(delta: timedelta) -> int:
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    return micros * TICKS_PER_US


def ticks_to_nanos(ticks: int) -> int:
    """1.144 ticks per nanosecond; halves round to even."""
    return _div_half_even(ticks * 125, 143)


def nanos_to_ticks(nanos: int) -> int:
    return _div_half_even(nanos * 143, 125)


def _div_half_even(n: int, d: int) -> int:
    q, r = divmod(n, d)
    if 2 * r > d or (2 * r == d and q % 2 == 1):
        q += 1
    return q


def date_now() -> int:
    """Current wall-clock date, at millisecond resolution."""
    now = datetime.now(UTC)
    return instant_ms_to_date(int((now - _UNIX_EPOCH) // timedelta(milliseconds=1)))

