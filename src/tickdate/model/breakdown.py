from __future__ import annotations

from dataclasses import dataclass, fields

TIME_FIELDS: tuple[str, ...] = ("hours", "minutes", "seconds", "ms", "us", "ticks")
TICKS_FIELDS: tuple[str, ...] = ("weeks", "days", *TIME_FIELDS)
DATE_FIELDS: tuple[str, ...] = ("year", "month", "day", *TIME_FIELDS)


@dataclass(frozen=True)
class TicksBreakdown:
    """A tick count split into units. Missing units are None."""

    weeks: int | None = None
    days: int | None = None
    hours: int | None = None
    minutes: int | None = None
    seconds: int | None = None
    ms: int | None = None
    us: int | None = None
    ticks: int | None = None

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class DateBreakdown:
    """Calendar fields of a date; sub-day fields are optional."""

    year: int
    month: int
    day: int
    hours: int | None = None
    minutes: int | None = None
    seconds: int | None = None
    ms: int | None = None
    us: int | None = None
    ticks: int | None = None

    def time_part(self) -> TicksBreakdown:
        return TicksBreakdown(
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            ms=self.ms,
            us=self.us,
            ticks=self.ticks,
        )

    def date_only(self) -> DateBreakdown:
        return DateBreakdown(self.year, self.month, self.day)

    def sort_key(self) -> tuple[int, ...]:
        return tuple(getattr(self, name) or 0 for name in DATE_FIELDS)

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class MonthsBreakdown:
    years: int = 0
    months: int = 0


@dataclass(frozen=True)
class Duration:
    """Calendar-relative span: whole months plus a tick remainder."""

    months: int = 0
    ticks: int = 0


@dataclass(frozen=True)
class IsoWeekDate:
    year: int
    week: int
    weekday: int  # 1 = Monday .. 7 = Sunday


def check_fields(requested: frozenset[str] | set[str], allowed: tuple[str, ...]) -> frozenset[str]:
    unknown = set(requested) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown breakdown fields: {sorted(unknown)}")
    return frozenset(requested)
