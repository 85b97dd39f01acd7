"""Loguru setup for marketplace_auth.

Every record carries ``extra[request_id]``; the value comes from a ContextVar
set by the request middleware, so log lines emitted deep inside repositories
or use cases still point back to the HTTP request that caused them.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "req=<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<lvl>{message}</lvl>"
)

_NO_REQUEST = "-"
_request_id: ContextVar[str] = ContextVar("request_id", default=_NO_REQUEST)

_logger.configure(extra={"request_id": _NO_REQUEST})


def _default_log_file() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parents[2] / "instance" / "marketplace_auth.log"


class _StdlibBridge(logging.Handler):
    """Forwards stdlib ``logging`` records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(
            request_id=_request_id.get()
        ).log(level, record.getMessage())


class ContextualLogger:
    """Loguru proxy bound to the current request id on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(request_id=_request_id.get()), name)


def set_correlation_id(value: str | None) -> None:
    _request_id.set(value or _NO_REQUEST)


def get_correlation_id() -> str:
    return _request_id.get()


def clear_correlation_id() -> None:
    _request_id.set(_NO_REQUEST)


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    resolved = (level or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = _default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    common = {"level": resolved, "format": LOG_FORMAT, "filter": sanitize_record, "diagnose": False}
    _logger.add(sys.stderr, colorize=True, backtrace=debug_mode, **common)
    _logger.add(
        str(log_file),
        colorize=False,
        backtrace=False,
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        **common,
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for noisy, noisy_level in (("werkzeug", logging.INFO), ("sqlalchemy.engine", logging.WARNING)):
        logging.getLogger(noisy).setLevel(noisy_level)

    _logger.bind(request_id=_NO_REQUEST).debug(f"logging ready: level={resolved} file={log_file}")


logger = ContextualLogger()

__all__ = [
    "LOG_FORMAT",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
