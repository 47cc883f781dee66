"""
Zone-aware conversions between dates (UTC ticks) and local wall-clock times.

Every function takes an optional `provider`; the default reads the zoneinfo
database. Unknown zone ids raise zoneinfo.ZoneInfoNotFoundError.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..core.constants import MAX_DATE, MIN_DATE, TICKS_PER_DAY, TICKS_PER_US
from ..core.dates import (
    breakdown_to_ticks_unchecked,
    check_date,
    day_of_week,
    split_breakdown,
    split_date,
    time_of_day_ticks,
    validate_breakdown,
)
from ..model.breakdown import DateBreakdown
from ..model.errors import DateError, ErrorKind, invalid_calendar
from ..model.zone import (
    ConversionOptions,
    DstResolution,
    DstTransition,
    GapResolution,
    Offset,
    TransitionType,
)
from ..text.formatting import carry_date_seconds, check_precision, seconds_with_fraction
from ..text.parsing import parse_date_breakdown
from ..utils.instants import date_to_datetime, datetime_to_date, timedelta_to_ticks
from .provider import TimezoneRuleProvider, ZoneInfoProvider
from .provider import system_zone_id as _host_zone_id

_default_provider: TimezoneRuleProvider = ZoneInfoProvider()


def default_provider() -> TimezoneRuleProvider:
    return _default_provider


def _rules(provider: TimezoneRuleProvider | None) -> TimezoneRuleProvider:
    return provider if provider is not None else _default_provider


def _offset(delta: timedelta) -> Offset:
    total = int(delta.total_seconds())
    sign = -1 if total < 0 else 1
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    return Offset(sign * hours, sign * minutes, sign * seconds, timedelta_to_ticks(delta))


def _local_datetime(local: DateBreakdown) -> datetime:
    """Naive wall-clock datetime for a calendar-valid breakdown, floored to the microsecond."""
    micros = time_of_day_ticks(local) // TICKS_PER_US
    return datetime(local.year, local.month, local.day) + timedelta(microseconds=micros)


# --- zone ids ------------------------------------------------------------------


def valid_zone_id(zone_id: object, provider: TimezoneRuleProvider | None = None) -> bool:
    return isinstance(zone_id, str) and zone_id in _rules(provider).zone_ids()


def available_zone_ids(provider: TimezoneRuleProvider | None = None) -> list[str]:
    return sorted(_rules(provider).zone_ids())


def system_zone_id() -> str:
    return _host_zone_id()


# --- offsets -------------------------------------------------------------------


def zone_offset_at(zone_id: str, date: int, provider: TimezoneRuleProvider | None = None) -> Offset:
    return _offset(_rules(provider).offset_at(zone_id, date_to_datetime(date)))


def format_offset(offset: Offset) -> str:
    """+HH:MM / -HH:MM; seconds are dropped."""
    sign = "-" if offset.ticks < 0 else "+"
    return f"{sign}{abs(offset.hours):02d}:{abs(offset.minutes):02d}"


def is_dst(zone_id: str, date: int, provider: TimezoneRuleProvider | None = None) -> bool:
    return _rules(provider).is_dst(zone_id, date_to_datetime(date))


def is_ambiguous(zone_id: str, local: DateBreakdown, provider: TimezoneRuleProvider | None = None) -> bool:
    """True when the wall-clock time occurs twice (fall-back overlap)."""
    if validate_breakdown(local, "is_ambiguous") is not None:
        return False
    return len(_rules(provider).valid_offsets(zone_id, _local_datetime(local))) > 1


def is_invalid(zone_id: str, local: DateBreakdown, provider: TimezoneRuleProvider | None = None) -> bool:
    """True when the wall-clock time is skipped (spring-forward gap)."""
    if validate_breakdown(local, "is_invalid") is not None:
        return False
    return not _rules(provider).valid_offsets(zone_id, _local_datetime(local))


# --- transitions ---------------------------------------------------------------


def next_dst_transition(
    zone_id: str, date: int, provider: TimezoneRuleProvider | None = None
) -> DstTransition | None:
    """First offset change strictly after `date`, or None for fixed-offset zones."""
    found = _rules(provider).next_transition(zone_id, date_to_datetime(date))
    if found is None or found.instant > date_to_datetime(MAX_DATE):
        return None
    return DstTransition(
        date=datetime_to_date(found.instant),
        type=TransitionType.GAP if found.is_gap else TransitionType.OVERLAP,
        offset_before=_offset(found.offset_before),
        offset_after=_offset(found.offset_after),
    )


def _gap_transition(zone_id: str, local_ticks: int, provider: TimezoneRuleProvider) -> int | None:
    """Instant of the gap transition whose skipped wall-clock window holds `local_ticks`."""
    # offsets stay within a day, so a day earlier read as UTC is before the transition
    cursor = min(max(local_ticks - TICKS_PER_DAY, MIN_DATE), MAX_DATE)
    while True:
        t = next_dst_transition(zone_id, cursor, provider)
        if t is None or t.date > local_ticks + TICKS_PER_DAY:
            return None
        if t.type is TransitionType.GAP and t.date + t.offset_before.ticks <= local_ticks < t.date + t.offset_after.ticks:
            return t.date
        cursor = t.date


# --- UTC <-> local -------------------------------------------------------------


def date_to_local(
    zone_id: str,
    date: int,
    fields: frozenset[str] | set[str] | None = None,
    provider: TimezoneRuleProvider | None = None,
) -> DateBreakdown:
    """Wall-clock breakdown of `date` in `zone_id`."""
    offset = _rules(provider).offset_at(zone_id, date_to_datetime(date))
    return split_breakdown(date + timedelta_to_ticks(offset), fields)


def local_to_date(
    zone_id: str,
    local: DateBreakdown,
    options: ConversionOptions | None = None,
    provider: TimezoneRuleProvider | None = None,
) -> int | DateError:
    """
    UTC date for a wall-clock time in `zone_id`.

    Normal times have one offset. Overlap times have two and
    `dst_resolution` picks the earlier or later instant. Gap times have
    none and `gap_resolution` gives the last tick before the transition
    (pre-gap) or the transition instant itself (post-gap).
    """
    op = "local_to_date"
    err = validate_breakdown(local, op)
    if err is not None:
        return err
    opts = options or ConversionOptions()
    rules = _rules(provider)
    local_ticks = breakdown_to_ticks_unchecked(local)
    offsets = rules.valid_offsets(zone_id, _local_datetime(local))

    if len(offsets) == 1:
        date = local_ticks - timedelta_to_ticks(offsets[0])
    elif offsets:
        if opts.dst_resolution is DstResolution.ERROR:
            return DateError(ErrorKind.AMBIGUOUS_LOCAL_TIME, f"{local} is ambiguous in {zone_id}", op)
        chosen = offsets[0] if opts.dst_resolution is DstResolution.EARLIER else offsets[-1]
        date = local_ticks - timedelta_to_ticks(chosen)
    else:
        if opts.gap_resolution is GapResolution.ERROR:
            return DateError(ErrorKind.INVALID_LOCAL_TIME, f"{local} falls in a gap in {zone_id}", op)
        transition = _gap_transition(zone_id, local_ticks, rules)
        if transition is None:
            return DateError(ErrorKind.INVALID_LOCAL_TIME, f"{local} has no offset in {zone_id}", op)
        date = transition - 1 if opts.gap_resolution is GapResolution.PRE_GAP else transition

    if not MIN_DATE <= date <= MAX_DATE:
        return invalid_calendar(op, "date outside the supported window")
    return date


def date_to_local_string(
    zone_id: str, date: int, precision: int = 6, provider: TimezoneRuleProvider | None = None
) -> str:
    """YYYY-MM-DDTHH:MM:SS.ffffff local wall-clock time."""
    check_precision(precision)
    offset = _rules(provider).offset_at(zone_id, date_to_datetime(date))
    local = carry_date_seconds(date + timedelta_to_ticks(offset), precision)
    b = split_breakdown(local, {"hours", "minutes", "seconds", "ticks"})
    seconds = seconds_with_fraction(b.seconds or 0, b.ticks or 0, precision)
    return f"{b.year:04d}-{b.month:02d}-{b.day:02d}T{b.hours or 0:02d}:{b.minutes or 0:02d}:{seconds}"


def local_string_to_date(
    zone_id: str,
    text: str,
    options: ConversionOptions | None = None,
    provider: TimezoneRuleProvider | None = None,
) -> int | DateError:
    local = parse_date_breakdown(text, "local_string_to_date")
    if isinstance(local, DateError):
        return local
    return local_to_date(zone_id, local, options, provider)


def format_with_zone(
    zone_id: str, date: int, precision: int = 6, provider: TimezoneRuleProvider | None = None
) -> str:
    return f"{date_to_local_string(zone_id, date, precision, provider)} {zone_id}"


# --- local days ----------------------------------------------------------------

_AT_GAP_END = ConversionOptions(gap_resolution=GapResolution.POST_GAP, dst_resolution=DstResolution.EARLIER)


def start_of_day_in_zone(zone_id: str, date: int, provider: TimezoneRuleProvider | None = None) -> int | DateError:
    """UTC date of local midnight starting the local day that holds `date`."""
    local = date_to_local(zone_id, date, set(), provider)
    return local_to_date(zone_id, local.date_only(), _AT_GAP_END, provider)


def end_of_day_in_zone(zone_id: str, date: int, provider: TimezoneRuleProvider | None = None) -> int | DateError:
    """UTC date of the next local midnight (exclusive end of the local day)."""
    local = date_to_local(zone_id, date, set(), provider)
    year, month, day, _ = split_date(breakdown_to_ticks_unchecked(local.date_only()) + TICKS_PER_DAY)
    return local_to_date(zone_id, DateBreakdown(year, month, day), _AT_GAP_END, provider)


def local_day_of_week(zone_id: str, date: int, provider: TimezoneRuleProvider | None = None) -> str:
    check_date(date)
    offset = _rules(provider).offset_at(zone_id, date_to_datetime(date))
    return day_of_week(date + timedelta_to_ticks(offset))
