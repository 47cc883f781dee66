from __future__ import annotations

import datetime as dt
from pathlib import Path

import yaml

from ..calendar.business import holiday_set
from ..model.errors import DateError
from ..text.parsing import parse_date


def load_holidays(path: Path) -> frozenset[int]:
    """
    Load a holidays YAML file into a normalized holiday set.

        holidays:
          - 2024-12-25
          - "2025-01-01"
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Invalid holidays YAML: expected a mapping")

    raw = data.get("holidays") or []
    if not isinstance(raw, list):
        raise ValueError("holidays must be a list of dates")

    dates: list[int] = []
    for i, item in enumerate(raw):
        # YAML turns bare YYYY-MM-DD into datetime.date
        text = item.isoformat() if isinstance(item, dt.date) else str(item)
        value = parse_date(text)
        if isinstance(value, DateError):
            raise ValueError(f"holidays[{i}]: {value}")
        dates.append(value)
    return holiday_set(dates)
