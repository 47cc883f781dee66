from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from ..calendar.navigation import iso_week_date_to_date, ordinal_date_to_date
from ..core.constants import (
    TICKS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_MINUTE,
    TICKS_PER_MS,
    TICKS_PER_SECOND,
    TICKS_PER_US,
    TICKS_PER_WEEK,
    in_long_range,
)
from ..core.dates import breakdown_to_date
from ..core.duration import average_years_to_ticks
from ..core.ticks import breakdown_to_months
from ..model.breakdown import DateBreakdown, Duration, MonthsBreakdown
from ..model.errors import DateError, malformed, overflow

_INT = r"[+-]?\d+"
_DECIMAL = r"[+-]?\d+(?:\.\d+)?"

_EXPLICIT_TICKS = re.compile(rf"^(?:W({_INT}))?(?:D({_INT}))?(?:T(.+))?$")
_DECORATED_TICKS = re.compile(rf"^({_INT})w({_INT})d({_INT})h({_INT})m({_DECIMAL})s$")
_AVERAGE_YEARS = re.compile(r"^(.+)ay$")
_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:T(.+))?$")
_ISO_WEEK = re.compile(r"^(\d{4})-W(\d{2})-(\d)$")
_ORDINAL = re.compile(r"^(\d{4})-(\d{3})$")
_DURATION = re.compile(rf"^({_INT})y({_INT})mo(.*)$")


def _seconds_to_ticks(text: str) -> int:
    """Decimal seconds to ticks, rounded half away from zero."""
    with localcontext() as ctx:
        ctx.prec = 50
        value = Decimal(text) * TICKS_PER_SECOND
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _checked(total: int, operation: str) -> int | DateError:
    if not in_long_range(total):
        return overflow(operation, f"value out of long range: {total}")
    return total


def parse_time(text: str) -> int | DateError:
    """
    Ticks from HH:MM:SS.mmm.uuu:ttt, HH:MM:SS[.fraction] or HH:MM.
    Fractional seconds round half away from zero.
    """
    op = "parse_time"
    try:
        colons = text.count(":")
        if colons == 3:
            parts = re.split(r"[:.]", text)
            if len(parts) != 6:
                return malformed(op, f"bad time string {text!r}")
            hours, minutes, seconds, ms, us, ticks = (int(p) for p in parts)
            total = (
                hours * TICKS_PER_HOUR
                + minutes * TICKS_PER_MINUTE
                + seconds * TICKS_PER_SECOND
                + ms * TICKS_PER_MS
                + us * TICKS_PER_US
                + ticks
            )
        elif colons == 2:
            h, m, s = text.split(":")
            total = int(h) * TICKS_PER_HOUR + int(m) * TICKS_PER_MINUTE + _seconds_to_ticks(s)
        elif colons == 1:
            h, m = text.split(":")
            total = int(h) * TICKS_PER_HOUR + int(m) * TICKS_PER_MINUTE
        else:
            return malformed(op, f"bad time string {text!r}")
    except (ValueError, InvalidOperation):
        return malformed(op, f"bad time string {text!r}")
    return _checked(total, op)


def parse_ticks(text: str) -> int | DateError:
    """Ticks from the explicit W/D/T form, the decorated w/d/h/m/s form, or <float>ay."""
    op = "parse_ticks"
    s = text.strip()

    if m := _AVERAGE_YEARS.match(s):
        try:
            years = float(m.group(1))
        except ValueError:
            return malformed(op, f"bad average-years string {text!r}")
        if not math.isfinite(years):
            return malformed(op, f"bad average-years string {text!r}")
        return _checked(average_years_to_ticks(years), op)

    if m := _DECORATED_TICKS.match(s):
        try:
            weeks, days, hours, minutes = (int(g) for g in m.groups()[:4])
            total = (
                weeks * TICKS_PER_WEEK
                + days * TICKS_PER_DAY
                + hours * TICKS_PER_HOUR
                + minutes * TICKS_PER_MINUTE
                + _seconds_to_ticks(m.group(5))
            )
        except (ValueError, InvalidOperation):
            return malformed(op, f"bad ticks string {text!r}")
        return _checked(total, op)

    m = _EXPLICIT_TICKS.match(s)
    if not s or m is None:
        return malformed(op, f"bad ticks string {text!r}")
    weeks_s, days_s, time_s = m.groups()
    time_ticks = parse_time(time_s) if time_s is not None else 0
    if isinstance(time_ticks, DateError):
        return time_ticks
    try:
        weeks, days = int(weeks_s or 0), int(days_s or 0)
    except ValueError:
        return malformed(op, f"bad ticks string {text!r}")
    return _checked(weeks * TICKS_PER_WEEK + days * TICKS_PER_DAY + time_ticks, op)


def parse_date(text: str) -> int | DateError:
    """
    Date from YYYY-MM-DD[THH:MM:SS...], an ISO week date YYYY-Www-D or an
    ordinal date YYYY-DDD.
    """
    op = "parse_date"
    s = text.strip()
    if _ISO_WEEK.match(s):
        return parse_iso_week_date(s)
    if _ORDINAL.match(s):
        return parse_ordinal_date(s)

    breakdown = parse_date_breakdown(s, op)
    if isinstance(breakdown, DateError):
        return breakdown
    return breakdown_to_date(breakdown)


def parse_date_breakdown(text: str, operation: str = "parse_date_breakdown") -> DateBreakdown | DateError:
    """YYYY-MM-DD[THH:MM...] as an unvalidated breakdown with the time folded into ticks."""
    m = _DATE.match(text.strip())
    if m is None:
        return malformed(operation, f"bad date string {text!r}")
    year, month, day = (int(g) for g in m.groups()[:3])
    ticks = parse_time(m.group(4)) if m.group(4) is not None else 0
    if isinstance(ticks, DateError):
        return ticks
    return DateBreakdown(year, month, day, ticks=ticks)


def parse_duration(text: str) -> Duration | DateError:
    """<years>y<months>mo followed by an optional ticks string."""
    op = "parse_duration"
    m = _DURATION.match(text.strip())
    if m is None:
        return malformed(op, f"bad duration string {text!r}")
    try:
        years, months_part = int(m.group(1)), int(m.group(2))
    except ValueError:
        return malformed(op, f"bad duration string {text!r}")
    months = breakdown_to_months(MonthsBreakdown(years=years, months=months_part))
    if isinstance(months, DateError):
        return months
    ticks = parse_ticks(m.group(3)) if m.group(3) else 0
    if isinstance(ticks, DateError):
        return ticks
    return Duration(months, ticks)


def parse_iso_week_date(text: str) -> int | DateError:
    m = _ISO_WEEK.match(text.strip())
    if m is None:
        return malformed("parse_iso_week_date", f"bad ISO week date {text!r}")
    return iso_week_date_to_date(*(int(g) for g in m.groups()))


def parse_ordinal_date(text: str) -> int | DateError:
    m = _ORDINAL.match(text.strip())
    if m is None:
        return malformed("parse_ordinal_date", f"bad ordinal date {text!r}")
    return ordinal_date_to_date(int(m.group(1)), int(m.group(2)))
