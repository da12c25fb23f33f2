"""Leveled terminal logging for gw.

INFO and below go to stdout, WARNING and above to stderr. The level comes
from ``--log-level`` or ``WORKON_LOG_LEVEL``; color is dropped with
``--no-color``, ``NO_COLOR`` or ``WORKON_NO_COLOR``.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)

_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_DEFAULT_LEVEL = LogLevel.INFO
_configured_level: LogLevel | None = None
_no_color: bool | None = None


def _parse_level(value: str | None) -> LogLevel:
    normalized = (value or "").strip().upper()
    if normalized == "WARN":
        normalized = "WARNING"
    return LogLevel.__members__.get(normalized, _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _parse_level(os.environ.get("WORKON_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    """Set the active log level; unknown names fall back to INFO."""
    global _configured_level
    _configured_level = _parse_level(value)


def set_no_color(value: bool) -> None:
    """Force colorless output regardless of the environment."""
    global _no_color
    _no_color = value


def _console(level: LogLevel) -> Console:
    no_color = _no_color
    if no_color is None:
        no_color = bool(os.environ.get("NO_COLOR") or os.environ.get("WORKON_NO_COLOR"))
    return Console(
        file=sys.stderr if level >= LogLevel.WARNING else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=no_color,
    )


def emit(level: LogLevel, message: str) -> None:
    if level < configured_level():
        return
    _console(level).print(Text(message, style=_STYLES.get(level, "")))


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    emit(LogLevel.INFO, message)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)
