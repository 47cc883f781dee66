from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .. import __version__

# LogRecord attributes that are not caller-supplied `extra=` fields
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; `extra=` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k not in _RECORD_ATTRS:
                payload[k] = v
        return json.dumps(payload, ensure_ascii=False, default=str)


class RunContextFilter(logging.Filter):
    """Stamps the run id and tickdate version on every record."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        record.tickdate_version = __version__
        return True


def new_run_id() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def get_logger(
    name: str, logs_root: Path, run_id: str | None = None, console_level: int = logging.WARNING
) -> logging.Logger:
    """
    Logger writing JSON lines to logs_root/YYYYMMDD/<run_id>.log, plus brief
    messages at `console_level` and above to stderr. Every file record
    carries `run_id` and `tickdate_version`. Handlers are attached once per
    logger name; later calls return the configured logger unchanged.
    """
    logger = logging.getLogger(name)
    if getattr(logger, "_tickdate_configured", False):
        return logger

    run = run_id or new_run_id()
    logger.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(console)

    log_dir = Path(logs_root) / datetime.now().strftime("%Y%m%d")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{run}.log"
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(RunContextFilter(run))
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    logger._tickdate_configured = True  # type: ignore[attr-defined]
    logger.debug("logger_initialized", extra={"log_file": str(log_path)})
    return logger
