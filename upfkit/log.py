"""Levelled logging with optional caller reporting and status values."""

from __future__ import annotations

import logging
import sys
import threading
from enum import IntEnum

__all__ = [
    "LogLevel",
    "Status",
    "UtltError",
    "set_log_level",
    "set_report_caller",
    "log_print",
    "str_status",
]

MAX_SIZE_OF_BUFFER = 32768
TRACE = 5

logging.addLevelName(TRACE, "TRACE")


class UtltError(Exception):
    """Raised where an operation of this package fails."""


class Status(IntEnum):
    ERROR = -1
    OK = 0
    EAGAIN = 1


class LogLevel(IntEnum):
    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6


class _ReportCaller(IntEnum):
    FALSE = 0
    TRUE = 1


_REPORT_CALLER_MAX = 2

_PY_LEVELS = {
    LogLevel.PANIC: logging.CRITICAL,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: TRACE,
}

_logger = logging.getLogger("upfkit")
_logger.setLevel(TRACE)
_lock = threading.Lock()
_log_level = LogLevel.INFO
_report_caller = _ReportCaller.FALSE


def set_log_level(level: str) -> None:
    """Set the threshold by name, case-insensitively."""
    global _log_level
    try:
        _log_level = LogLevel[level.upper()]
    except KeyError:
        raise UtltError(f"unknown log level: {level!r}") from None


def set_report_caller(flag: int) -> None:
    """Turn reporting of the calling file, line and function on (1) or off (0)."""
    global _report_caller
    if not 0 <= int(flag) < _REPORT_CALLER_MAX:
        _report_caller = _ReportCaller.FALSE
        raise UtltError(f"invalid report caller flag: {flag}")
    _report_caller = _ReportCaller(int(flag))


def log_print(level: int, fmt: str, *args) -> str | None:
    """Log a printf-style message; return it, or None when filtered out."""
    try:
        log_level = LogLevel(level)
    except ValueError:
        raise UtltError(f"The log level {level} is out of range.") from None
    if log_level > _log_level:
        return None

    try:
        message = fmt % args if args else fmt
    except (TypeError, ValueError) as exc:
        raise UtltError(f"cannot format log message: {exc}") from exc
    message = message[: MAX_SIZE_OF_BUFFER - 1]

    if _report_caller == _ReportCaller.TRUE:
        frame = sys._getframe(1)
        code = frame.f_code
        message += f" ({code.co_filename}:{frame.f_lineno} {code.co_name})"

    with _lock:
        _logger.log(_PY_LEVELS[log_level], message)
    return message


def str_status(status: int) -> str:
    """Return a readable name for a status value."""
    return {
        Status.OK: "status OK",
        Status.ERROR: "status error",
        Status.EAGAIN: "status eagain",
    }.get(status, "status unknown")