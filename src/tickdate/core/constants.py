from __future__ import annotations

# One tick is 1/1144 of a microsecond, so 400 Gregorian years
# (146,097 days = 20,871 weeks) divide evenly into every unit below.
TICKS_PER_US = 1144
TICKS_PER_MS = 1_144_000
TICKS_PER_SECOND = 1_144_000_000
TICKS_PER_MINUTE = 68_640_000_000
TICKS_PER_HOUR = 4_118_400_000_000
TICKS_PER_DAY = 98_841_600_000_000
TICKS_PER_WEEK = 691_891_200_000_000
TICKS_PER_AVERAGE_YEAR = 36_101_153_088_000_000  # 365.2425 days
TICKS_PER_AVERAGE_MONTH = 3_008_429_424_000_000  # 1/12 average year

TICKS_PER_UNIT: dict[str, int] = {
    "weeks": TICKS_PER_WEEK,
    "days": TICKS_PER_DAY,
    "hours": TICKS_PER_HOUR,
    "minutes": TICKS_PER_MINUTE,
    "seconds": TICKS_PER_SECOND,
    "ms": TICKS_PER_MS,
    "us": TICKS_PER_US,
    "ticks": 1,
}

# Dates are ticks since 2070-01-01T00:00 UTC.
EPOCH_YEAR = 2070
DATE_1970 = -3_610_189_440_000_000_000
DATE_2020 = -1_805_144_140_800_000_000
DATE_2045 = -902_522_649_600_000_000
DATE_2070 = 0

MIN_LONG = -(2**63)
MAX_LONG = 2**63 - 1
MIN_DATE = MIN_LONG  # 1814-07-08T07:44:15.896...
MAX_DATE = MAX_LONG  # 2325-06-28T16:15:44.104...
MIN_YEAR = 1814
MAX_YEAR = 2325

# Unix milliseconds covering [MIN_DATE, MAX_DATE].
MIN_INSTANT_MS = -4_906_628_144_104
MAX_INSTANT_MS = 11_218_148_144_104

DAYS_OF_WEEK: tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)


def in_long_range(value: int) -> bool:
    return MIN_LONG <= value <= MAX_LONG
