# app/core/logger.py
from __future__ import annotations

"""
Movie Watchlist — Logging (Loguru)
----------------------------------
- One console sink: colorized lines, or one JSON object per line (`LOG_JSON=1`)
- Optional rotating file sink (`LOG_TO_FILE=1`), same format as the console
- Every line carries `request_id` (bound by RequestIDMiddleware, "N/A" outside a request)
- Application modules keep using `logging.getLogger(...)`; the stdlib loggers
  listed in `INTERCEPTED_LOGGERS` are forwarded into Loguru

`configure_logging()` runs once on import and may be called again (tests,
`python -m app.main`) to rebuild the sinks with different options.

Env
---
LOG_LEVEL=INFO|DEBUG|WARNING|ERROR (default: INFO)
LOG_JSON=1          JSON lines instead of colorized text
LOG_TO_FILE=1       also write LOG_DIR/LOG_FILE (default: off)
LOG_DIR=logs
LOG_FILE=app.log
LOG_ROTATION=10 MB
APP_DEBUG=1         backtrace/diagnose on the console sink
"""

import inspect
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "fastapi", "starlette", "app", "auth", "watchlist")
_TRUTHY = {"1", "true", "yes"}


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


# ─────────────────────────────────────────────────────────────
# 🧾 Formatters
# ─────────────────────────────────────────────────────────────
def _escape_markup(value: str) -> str:
    return value.replace("<", "[").replace(">", "]")


def _fmt_pretty(record) -> str:
    record["extra"].setdefault("request_id", "N/A")
    where = f"{_escape_markup(record['name'])}:{_escape_markup(record['function'])}:{record['line']}"
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
        f"<cyan>{where}</cyan> - "
        "<level>{message}</level> | request_id={extra[request_id]}\n{exception}"
    )


def _fmt_json(record) -> str:
    doc: Dict[str, Any] = {
        "time": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "where": f"{record['function']}:{record['line']}",
        "message": record["message"],
        "request_id": record["extra"].get("request_id", "N/A"),
    }
    for key, value in record["extra"].items():
        if key != "_json":
            doc.setdefault(key, value)
    if record["exception"] is not None:
        doc["exception"] = repr(record["exception"].value)
    record["extra"]["_json"] = json.dumps(doc, ensure_ascii=False, default=str)
    return "{extra[_json]}\n"


# ─────────────────────────────────────────────────────────────
# 🔁 stdlib logging → Loguru
# ─────────────────────────────────────────────────────────────
class InterceptHandler(logging.Handler):
    """Forward a stdlib `LogRecord` to Loguru, attributed to the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


# ─────────────────────────────────────────────────────────────
# ⚙️ Setup
# ─────────────────────────────────────────────────────────────
def configure_logging(
    *,
    level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    to_file: Optional[bool] = None,
) -> None:
    """(Re)build Loguru sinks and route the intercepted stdlib loggers into them.

    Arguments left as None are read from the environment.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    json_logs = _env_flag("LOG_JSON") if json_logs is None else json_logs
    to_file = _env_flag("LOG_TO_FILE") if to_file is None else to_file
    debug = _env_flag("APP_DEBUG")
    fmt = _fmt_json if json_logs else _fmt_pretty

    logger.remove()
    logger.add(sys.stdout, level=level, format=fmt, backtrace=debug, diagnose=debug)

    if to_file:
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / os.getenv("LOG_FILE", "app.log")),
            level=level,
            format=fmt,
            rotation=os.getenv("LOG_ROTATION", "10 MB"),
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(level)
        std_logger.propagate = False


configure_logging()

__all__ = ["logger", "InterceptHandler", "configure_logging", "INTERCEPTED_LOGGERS"]
