from __future__ import annotations

from collections.abc import Iterator

from ..core.constants import TICKS_PER_UNIT
from ..core.dates import check_date
from ..core.duration import add_months_to_date
from ..core.ticks import add_ticks
from ..model.errors import DateError

MONTHS_PER_UNIT: dict[str, int] = {"months": 1, "quarters": 3, "years": 12}
STEP_UNITS: tuple[str, ...] = (*TICKS_PER_UNIT, *MONTHS_PER_UNIT)


def date_seq(start: int, unit: str = "days", amount: int = 1, end: int | None = None) -> Iterator[int]:
    """
    Lazily yield start, start + amount*unit, start + 2*amount*unit, ...

    Each element is computed from `start`, so month steps never drift. The
    sequence stops before reaching `end` (exclusive, in the direction of
    travel) or at the first step that overflows or lands on a day that
    does not exist.
    """
    check_date(start)
    if amount == 0:
        raise ValueError("date_seq amount must be non-zero")
    if unit not in STEP_UNITS:
        raise ValueError(f"Unknown step unit {unit!r}; expected one of {STEP_UNITS}")

    k = 0
    while True:
        if unit in MONTHS_PER_UNIT:
            value = add_months_to_date(start, k * amount * MONTHS_PER_UNIT[unit])
        else:
            value = add_ticks(start, k * amount * TICKS_PER_UNIT[unit], "date_seq")
        if isinstance(value, DateError):
            return
        if end is not None and (value >= end if amount > 0 else value <= end):
            return
        yield value
        k += 1
