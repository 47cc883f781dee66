from __future__ import annotations

from ..model.breakdown import (
    TICKS_FIELDS,
    MonthsBreakdown,
    TicksBreakdown,
    check_fields,
)
from ..model.errors import DateError, overflow
from .constants import TICKS_PER_UNIT, in_long_range


def quot_rem(n: int, d: int) -> tuple[int, int]:
    """Truncating division; the remainder takes the sign of n."""
    q, r = divmod(abs(n), d)
    return (-q, -r) if n < 0 else (q, r)


def ticks_to_breakdown(ticks: int, fields: frozenset[str] | set[str] | None = None) -> TicksBreakdown:
    """
    Split `ticks` into weeks/days/hours/minutes/seconds/ms/us/ticks.

    With `fields`, only those units are produced; an excluded unit's amount
    folds into the next finer requested unit. The ticks field is kept unless
    it was not requested and is zero.
    """
    wanted = check_fields(fields, TICKS_FIELDS) if fields is not None else frozenset(TICKS_FIELDS)
    want_ticks = "ticks" in wanted
    wanted = wanted | {"ticks"}

    out: dict[str, int] = {}
    rest = ticks
    for name in TICKS_FIELDS:
        if name in wanted:
            out[name], rest = quot_rem(rest, TICKS_PER_UNIT[name])

    if not want_ticks and out["ticks"] == 0:
        del out["ticks"]
    return TicksBreakdown(**out)


def breakdown_to_ticks(breakdown: TicksBreakdown) -> int | DateError:
    total = sum((getattr(breakdown, name) or 0) * TICKS_PER_UNIT[name] for name in TICKS_FIELDS)
    if not in_long_range(total):
        return overflow("breakdown_to_ticks", f"ticks out of long range: {total}")
    return total


def months_to_breakdown(months: int) -> MonthsBreakdown:
    years, rest = quot_rem(months, 12)
    return MonthsBreakdown(years=years, months=rest)


def breakdown_to_months(breakdown: MonthsBreakdown) -> int | DateError:
    total = breakdown.months + 12 * breakdown.years
    if not in_long_range(total):
        return overflow("breakdown_to_months", f"months out of long range: {total}")
    return total


def add_ticks(a: int, b: int, operation: str = "add_ticks") -> int | DateError:
    """Checked int64 addition."""
    total = a + b
    if not in_long_range(total):
        return overflow(operation, f"result out of long range: {total}")
    return total


def multiply_ticks(ticks: int, factor: int, operation: str = "multiply_ticks") -> int | DateError:
    total = ticks * factor
    if not in_long_range(total):
        return overflow(operation, f"result out of long range: {total}")
    return total
