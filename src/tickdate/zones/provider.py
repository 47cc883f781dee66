from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import cache
from pathlib import Path
from typing import Protocol
from zoneinfo import ZoneInfo, available_timezones


@dataclass(frozen=True)
class ZoneTransition:
    """An instant where a zone's UTC offset changes."""

    instant: datetime  # aware, UTC
    offset_before: timedelta
    offset_after: timedelta

    @property
    def is_gap(self) -> bool:
        return self.offset_after > self.offset_before


class TimezoneRuleProvider(Protocol):
    """Source of zone rules. Instants are aware datetimes; local times are naive."""

    def zone_ids(self) -> frozenset[str]: ...

    def offset_at(self, zone_id: str, instant: datetime) -> timedelta: ...

    def is_dst(self, zone_id: str, instant: datetime) -> bool: ...

    def valid_offsets(self, zone_id: str, local: datetime) -> list[timedelta]:
        """0, 1 or 2 offsets, ordered so the earliest resulting instant comes first."""
        ...

    def next_transition(self, zone_id: str, instant: datetime) -> ZoneTransition | None: ...


@cache
def zone_ids() -> frozenset[str]:
    """IANA ids known to zoneinfo; loaded once per process."""
    return frozenset(available_timezones())


def system_zone_id() -> str:
    """Best-effort IANA id of the host zone: $TZ, /etc/timezone, /etc/localtime, else UTC."""
    known = zone_ids()
    tz = os.environ.get("TZ", "").lstrip(":")
    if tz in known:
        return tz

    etc_timezone = Path("/etc/timezone")
    if etc_timezone.is_file():
        name = etc_timezone.read_text(encoding="utf-8").strip()
        if name in known:
            return name

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        parts = localtime.resolve().parts
        if "zoneinfo" in parts:
            name = "/".join(parts[parts.index("zoneinfo") + 1 :])
            if name in known:
                return name
    return "UTC"


class ZoneInfoProvider:
    """TimezoneRuleProvider backed by the stdlib zoneinfo database."""

    def __init__(self, horizon_days: int = 1100):
        if horizon_days <= 0:
            raise ValueError("horizon_days must be positive")
        self.horizon_days = horizon_days

    def zone_ids(self) -> frozenset[str]:
        return zone_ids()

    def offset_at(self, zone_id: str, instant: datetime) -> timedelta:
        offset = instant.astimezone(ZoneInfo(zone_id)).utcoffset()
        return offset if offset is not None else timedelta(0)

    def is_dst(self, zone_id: str, instant: datetime) -> bool:
        """
        True when the offset is ahead of standard time. Zones with a negative
        save (Europe/Dublin) report winter as dst() < 0 and summer as 0, so a
        zero save is also DST when the period half a year away runs behind it.
        """
        zone = ZoneInfo(zone_id)
        local = instant.astimezone(zone)
        save = local.dst()
        if save is None or save < timedelta(0):
            return False
        if save > timedelta(0):
            return True
        for shift in (timedelta(days=-182), timedelta(days=182)):
            other = (instant + shift).astimezone(zone)
            other_save = other.dst()
            if other_save is not None and other_save < timedelta(0) and other.utcoffset() < local.utcoffset():
                return True
        return False

    def valid_offsets(self, zone_id: str, local: datetime) -> list[timedelta]:
        zone = ZoneInfo(zone_id)
        naive = local.replace(tzinfo=None, fold=0)
        found: list[timedelta] = []
        for fold in (0, 1):
            offset = naive.replace(tzinfo=zone, fold=fold).utcoffset()
            if offset is None or offset in found:
                continue
            # keep the offset only if it maps back to the same wall time
            back = (naive - offset).replace(tzinfo=UTC).astimezone(zone)
            if back.replace(tzinfo=None, fold=0) == naive:
                found.append(offset)
        return sorted(found, reverse=True)

    def next_transition(self, zone_id: str, instant: datetime) -> ZoneTransition | None:
        """
        First offset change strictly after `instant`, searched a day at a
        time up to the horizon and then bisected to the microsecond.
        """
        zone = ZoneInfo(zone_id)

        def offset(t: datetime) -> timedelta | None:
            return t.astimezone(zone).utcoffset()

        lo = instant.astimezone(UTC)
        before = offset(lo)
        limit = lo + timedelta(days=self.horizon_days)
        step = timedelta(days=1)
        one_us = timedelta(microseconds=1)
        while lo < limit:
            hi = lo + step
            after = offset(hi)
            if after != before:
                while hi - lo > one_us:
                    mid = lo + (hi - lo) / 2
                    if offset(mid) == before:
                        lo = mid
                    else:
                        hi = mid
                return ZoneTransition(hi, before or timedelta(0), offset(hi) or timedelta(0))
            lo = hi
        return None
