from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..model.zone import ConversionOptions, DstResolution, GapResolution
from ..text.formatting import MAX_PRECISION
from .defaults import DEFAULTS

_KEYS = (
    "timezone",
    "gap_resolution",
    "dst_resolution",
    "fraction_precision",
    "fiscal_year_start_month",
    "holidays_file",
    "logs_root",
    "transition_horizon_days",
)


@dataclass(frozen=True)
class Config:
    timezone: str
    gap_resolution: GapResolution
    dst_resolution: DstResolution
    fraction_precision: int
    fiscal_year_start_month: int
    holidays_file: Path | None
    logs_root: Path
    transition_horizon_days: int

    def conversion_options(self) -> ConversionOptions:
        return ConversionOptions(gap_resolution=self.gap_resolution, dst_resolution=self.dst_resolution)


def _opt_path(base: dict[str, Any], key: str) -> Path | None:
    """Return an optional Path, or None if missing/empty."""
    val = base.get(key)
    return Path(val) if val else None


def _int_in(base: dict[str, Any], key: str, lo: int, hi: int | None = None) -> int:
    try:
        val = int(base[key])
    except (TypeError, ValueError) as e:
        raise ValueError(f"{key} must be an integer, got {base[key]!r}") from e
    if val < lo or (hi is not None and val > hi):
        bounds = f"[{lo}, {hi}]" if hi is not None else f">= {lo}"
        raise ValueError(f"{key} must be {bounds}, got {val}")
    return val


def _enum(base: dict[str, Any], key: str, kind: type[GapResolution] | type[DstResolution]) -> Any:
    try:
        return kind(str(base[key]).strip().lower())
    except ValueError as e:
        choices = ", ".join(m.value for m in kind)
        raise ValueError(f"{key} must be one of {choices}, got {base[key]!r}") from e


def _apply_yaml_overrides(base: dict[str, Any], yml: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k in _KEYS:
        if k in yml:
            out[k] = yml[k]
    return out


def _apply_env_overrides(base: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k in _KEYS:
        if v := os.getenv(f"TICKDATE_{k.upper()}"):
            out[k] = v
    return out


def load_config(yaml_path: Path | None = None) -> Config:
    # start from defaults as a dict
    base = {k: getattr(DEFAULTS, k) for k in _KEYS}

    # ENV overrides (middle precedence)
    base = _apply_env_overrides(base)

    # YAML overrides (highest precedence)
    if yaml_path:
        data = yaml.safe_load(Path(yaml_path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping at the top level.")
        base = _apply_yaml_overrides(base, data)

    return Config(
        timezone=str(base["timezone"] or DEFAULTS.timezone),
        gap_resolution=_enum(base, "gap_resolution", GapResolution),
        dst_resolution=_enum(base, "dst_resolution", DstResolution),
        fraction_precision=_int_in(base, "fraction_precision", 0, MAX_PRECISION),
        fiscal_year_start_month=_int_in(base, "fiscal_year_start_month", 1, 12),
        holidays_file=_opt_path(base, "holidays_file"),
        logs_root=Path(base.get("logs_root") or DEFAULTS.logs_root),
        transition_horizon_days=_int_in(base, "transition_horizon_days", 1),
    )
