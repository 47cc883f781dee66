from __future__ import annotations

import argparse
import logging
import sys
from itertools import islice
from pathlib import Path

from . import __version__
from .calendar.business import EMPTY_HOLIDAYS, add_business_days, business_days_between
from .calendar.periods import NAMED_PERIODS, period_to_date_range
from .calendar.sequence import STEP_UNITS, date_seq
from .config.loader import Config, load_config
from .core.constants import MAX_DATE, MIN_DATE
from .core.dates import date_to_breakdown, day_of_week
from .io_adapters.holidays_loader import load_holidays
from .model.errors import DateError
from .model.zone import ConversionOptions, DstResolution, GapResolution
from .text.formatting import (
    MAX_PRECISION,
    format_average_years,
    format_date,
    format_duration,
    format_iso_week_date,
    format_ordinal_date,
    format_ticks,
)
from .text.parsing import parse_date, parse_duration, parse_ticks
from .utils.instants import date_now
from .utils.logging import get_logger
from .zones import engine
from .zones.provider import ZoneInfoProvider


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tickdate", description="Tick-precision dates, calendars and timezones")
    sub = p.add_subparsers(dest="cmd", required=False)

    def with_config(sp: argparse.ArgumentParser) -> argparse.ArgumentParser:
        sp.add_argument("--config", type=Path, default=None, help="Optional YAML settings file")
        return sp

    # version
    sub.add_parser("version", help="print version")

    # doctor
    with_config(sub.add_parser("doctor", help="print resolved config and zone database status"))

    # format
    fmt = with_config(sub.add_parser("format", help="render an integer tick value"))
    fmt.add_argument("value", type=int, help="Ticks (a date when --as is date/iso-week/ordinal)")
    fmt.add_argument(
        "--as",
        dest="kind",
        choices=["date", "ticks", "decorated", "iso-week", "ordinal", "average-years"],
        default="date",
    )
    fmt.add_argument("--precision", type=int, default=None, help="Fraction digits for the seconds (0-15)")

    # parse
    prs = with_config(sub.add_parser("parse", help="parse a date, ticks or duration string"))
    prs.add_argument("text")
    prs.add_argument("--as", dest="kind", choices=["date", "ticks", "duration"], default="date")

    # breakdown
    brk = with_config(sub.add_parser("breakdown", help="split a date into calendar fields"))
    brk.add_argument("date", help="YYYY-MM-DD[THH:MM:SS...]")
    brk.add_argument("--fields", default=None, help="Comma-separated time fields, e.g. hours,minutes,ticks")

    # local
    loc = with_config(sub.add_parser("local", help="show a UTC date as local time in a zone"))
    loc.add_argument("date", help="UTC date, YYYY-MM-DD[THH:MM:SS...]")
    loc.add_argument("--zone", default=None, help="IANA zone id (default: config timezone)")

    # resolve
    res = with_config(sub.add_parser("resolve", help="resolve a local wall-clock time in a zone to UTC"))
    res.add_argument("local", help="Local time, YYYY-MM-DD[THH:MM:SS...]")
    res.add_argument("--zone", default=None, help="IANA zone id (default: config timezone)")
    res.add_argument("--gap", choices=[g.value for g in GapResolution], default=None)
    res.add_argument("--dst", choices=[d.value for d in DstResolution], default=None)

    # bizdays
    biz = sub.add_parser("bizdays", help="business-day arithmetic (holidays from config)")
    biz_sub = biz.add_subparsers(dest="biz_cmd", required=True)
    biz_add = with_config(biz_sub.add_parser("add", help="add N business days"))
    biz_add.add_argument("date")
    biz_add.add_argument("n", type=int)
    biz_between = with_config(biz_sub.add_parser("between", help="count business days in [start, end)"))
    biz_between.add_argument("start")
    biz_between.add_argument("end")

    # period
    per = with_config(sub.add_parser("period", help="resolve a named period to a date range"))
    per.add_argument("name", help=f"One of: {', '.join(NAMED_PERIODS)}")
    per.add_argument("--ref", default=None, help="Reference date (default: now)")

    # seq
    seq = with_config(sub.add_parser("seq", help="print a stepped sequence of dates"))
    seq.add_argument("start")
    seq.add_argument("--unit", choices=STEP_UNITS, default="days")
    seq.add_argument("--amount", type=int, default=1)
    seq.add_argument("--count", type=int, default=10, help="Maximum number of dates printed")
    seq.add_argument("--end", default=None, help="Exclusive end date")

    return p


def _logger(cfg: Config) -> logging.Logger:
    return get_logger("tickdate.cli", logs_root=cfg.logs_root)


def _fail(error: DateError) -> int:
    print(f"error: {error}")
    return 1


def _holidays(cfg: Config) -> frozenset[int]:
    return load_holidays(cfg.holidays_file) if cfg.holidays_file else EMPTY_HOLIDAYS


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd == "version":
        print(__version__)
        return 0

    if args.cmd is None:
        parser.print_help()
        return 0

    cfg = load_config(args.config)
    log = _logger(cfg)
    log.info("command", extra={"cmd": args.cmd, "argv": argv, "timezone": cfg.timezone})
    provider = ZoneInfoProvider(horizon_days=cfg.transition_horizon_days)
    precision = cfg.fraction_precision

    if args.cmd == "doctor":
        print("env ok")
        print(f"config.timezone                = {cfg.timezone}")
        print(f"config.gap_resolution          = {cfg.gap_resolution.value}")
        print(f"config.dst_resolution          = {cfg.dst_resolution.value}")
        print(f"config.fraction_precision      = {cfg.fraction_precision}")
        print(f"config.fiscal_year_start_month = {cfg.fiscal_year_start_month}")
        print(f"config.logs_root               = {cfg.logs_root}")
        print(f"config.transition_horizon_days = {cfg.transition_horizon_days}")
        if cfg.holidays_file:
            print(f"config.holidays_file           = {cfg.holidays_file}")
        print(f"zones.available                = {len(engine.available_zone_ids(provider))}")
        print(f"zones.system                   = {engine.system_zone_id()}")
        print(f"zones.timezone_valid           = {engine.valid_zone_id(cfg.timezone, provider)}")

        log.info(
            "doctor_config",
            extra={
                "timezone": cfg.timezone,
                "gap_resolution": cfg.gap_resolution.value,
                "dst_resolution": cfg.dst_resolution.value,
                "fraction_precision": cfg.fraction_precision,
                "holidays_file": str(cfg.holidays_file) if cfg.holidays_file else None,
                "logs_root": str(cfg.logs_root),
            },
        )
        return 0

    if args.cmd == "format":
        p = args.precision
        if p is not None and not 0 <= p <= MAX_PRECISION:
            print(f"error: --precision must be within [0, {MAX_PRECISION}]")
            return 1
        if args.kind in ("date", "iso-week", "ordinal") and not MIN_DATE <= args.value <= MAX_DATE:
            print(f"error: date out of range: {args.value}")
            return 1
        if args.kind == "date":
            print(format_date(args.value, p))
        elif args.kind == "ticks":
            print(format_ticks(args.value, p))
        elif args.kind == "decorated":
            print(format_ticks(args.value, p, decorated=True))
        elif args.kind == "iso-week":
            print(format_iso_week_date(args.value))
        elif args.kind == "ordinal":
            print(format_ordinal_date(args.value))
        else:
            print(format_average_years(args.value))
        return 0

    if args.cmd == "parse":
        if args.kind == "duration":
            duration = parse_duration(args.text)
            if isinstance(duration, DateError):
                return _fail(duration)
            print(f"months={duration.months} ticks={duration.ticks}")
            print(format_duration(duration, precision))
            return 0
        parsed = parse_date(args.text) if args.kind == "date" else parse_ticks(args.text)
        if isinstance(parsed, DateError):
            return _fail(parsed)
        print(parsed)
        return 0

    if args.cmd == "breakdown":
        date = parse_date(args.date)
        if isinstance(date, DateError):
            return _fail(date)
        fields = None
        if args.fields is not None:
            fields = {"year", "month", "day"} | {f.strip() for f in args.fields.split(",") if f.strip()}
        try:
            breakdown = date_to_breakdown(date, fields)
        except ValueError as e:
            print(f"error: {e}")
            return 1
        for k, v in breakdown.as_dict().items():
            print(f"{k} = {v}")
        print(f"day_of_week = {day_of_week(date)}")
        return 0

    if args.cmd == "local":
        zone = args.zone or cfg.timezone
        if not engine.valid_zone_id(zone, provider):
            print(f"error: unknown timezone {zone!r}")
            return 1
        date = parse_date(args.date)
        if isinstance(date, DateError):
            return _fail(date)
        offset = engine.zone_offset_at(zone, date, provider)
        print(engine.format_with_zone(zone, date, precision, provider))
        print(f"offset = {engine.format_offset(offset)}")
        print(f"dst = {engine.is_dst(zone, date, provider)}")
        return 0

    if args.cmd == "resolve":
        zone = args.zone or cfg.timezone
        if not engine.valid_zone_id(zone, provider):
            print(f"error: unknown timezone {zone!r}")
            return 1
        defaults = cfg.conversion_options()
        options = ConversionOptions(
            gap_resolution=GapResolution(args.gap) if args.gap else defaults.gap_resolution,
            dst_resolution=DstResolution(args.dst) if args.dst else defaults.dst_resolution,
        )
        date = engine.local_string_to_date(zone, args.local, options, provider)
        if isinstance(date, DateError):
            log.info("resolve_failed", extra={"zone": zone, "local": args.local, "kind": date.kind.value})
            return _fail(date)
        print(format_date(date, precision))
        print(date)
        return 0

    if args.cmd == "bizdays":
        holidays = _holidays(cfg)
        if args.biz_cmd == "add":
            date = parse_date(args.date)
            if isinstance(date, DateError):
                return _fail(date)
            result = add_business_days(date, args.n, holidays)
            if isinstance(result, DateError):
                return _fail(result)
            print(format_date(result, precision))
            return 0
        start = parse_date(args.start)
        if isinstance(start, DateError):
            return _fail(start)
        end = parse_date(args.end)
        if isinstance(end, DateError):
            return _fail(end)
        print(business_days_between(start, end, holidays))
        return 0

    if args.cmd == "period":
        ref = parse_date(args.ref) if args.ref else date_now()
        if isinstance(ref, DateError):
            return _fail(ref)
        rng = period_to_date_range(args.name, ref, cfg.fiscal_year_start_month)
        if isinstance(rng, DateError):
            return _fail(rng)
        print(f"start = {format_date(rng[0], precision)}")
        print(f"end   = {format_date(rng[1], precision)}")
        return 0

    if args.cmd == "seq":
        start = parse_date(args.start)
        if isinstance(start, DateError):
            return _fail(start)
        end = None
        if args.end is not None:
            end = parse_date(args.end)
            if isinstance(end, DateError):
                return _fail(end)
        if args.amount == 0:
            print("error: --amount must be non-zero")
            return 1
        for value in islice(date_seq(start, args.unit, args.amount, end), max(0, args.count)):
            print(format_date(value, precision))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
