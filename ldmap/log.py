"""Colored console logging for the command line."""

from __future__ import annotations

import logging

import colorama

_LEVEL_COLORS = {
    logging.DEBUG: colorama.Fore.CYAN,
    logging.INFO: colorama.Fore.GREEN,
    logging.WARNING: colorama.Fore.YELLOW,
    logging.ERROR: colorama.Fore.RED,
    logging.CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT,
}


def color(col: str, msg: str, reset: bool = True) -> str:
    suffix = colorama.Style.RESET_ALL if reset else ""
    return col + msg + suffix


class LdmapLogFormatter(logging.Formatter):
    def __init__(self, *, include_timestamp: bool) -> None:
        fmt = "%(asctime)s " if include_timestamp else ""
        fmt += "%(levelname)s %(message)s"
        super().__init__(fmt=fmt, style="%")

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        prefix = _LEVEL_COLORS.get(record.levelno, "")
        if not prefix:
            return formatted
        return color(prefix, formatted)


def setup_log(log_level: str | None = None, include_timestamp: bool = False) -> None:
    """Configure the root logger for console output.

    Args:
        log_level: Level name such as "DEBUG"; defaults to INFO
        include_timestamp: Prefix each line with the time
    """
    level = logging.getLevelName((log_level or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    colorama.just_fix_windows_console()

    handler = logging.StreamHandler()
    handler.setFormatter(LdmapLogFormatter(include_timestamp=include_timestamp))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
