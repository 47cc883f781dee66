from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GapResolution(str, Enum):
    """What a local time inside a spring-forward gap resolves to."""

    PRE_GAP = "pre-gap"
    POST_GAP = "post-gap"
    ERROR = "error"


class DstResolution(str, Enum):
    """Which instant an ambiguous fall-back local time resolves to."""

    EARLIER = "earlier"
    LATER = "later"
    ERROR = "error"


class TransitionType(str, Enum):
    GAP = "gap"
    OVERLAP = "overlap"


@dataclass(frozen=True)
class Offset:
    """UTC offset. hours/minutes/seconds share the sign; ticks is the whole offset in ticks."""

    hours: int
    minutes: int
    seconds: int
    ticks: int


@dataclass(frozen=True)
class DstTransition:
    date: int
    type: TransitionType
    offset_before: Offset
    offset_after: Offset


@dataclass(frozen=True)
class ConversionOptions:
    gap_resolution: GapResolution = GapResolution.POST_GAP
    dst_resolution: DstResolution = DstResolution.EARLIER
