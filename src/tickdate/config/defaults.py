from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Defaults:
    timezone: str
    gap_resolution: str
    dst_resolution: str
    fraction_precision: int
    fiscal_year_start_month: int
    holidays_file: str | None
    logs_root: str
    transition_horizon_days: int


DEFAULTS = Defaults(
    timezone="UTC",
    gap_resolution="post-gap",
    dst_resolution="earlier",
    fraction_precision=6,
    fiscal_year_start_month=1,
    holidays_file=None,  # Optional YAML with a `holidays:` list of dates
    logs_root="./tickdate-logs",
    transition_horizon_days=1100,  # ~3 years of day steps when searching transitions
)
