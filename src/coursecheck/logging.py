"""Logging setup for the COURSECHECK CLI.

Console output goes through Rich on stderr so it never mixes with the result
lines printed on stdout. An optional flight recorder keeps recent records in
memory and writes them to a file once something worth a WARNING happens.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import pytest
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

    from coursecheck.matching.expectation import MatchPolicy

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "coursecheck"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


class ThirdPartyPrefixFilter(logging.Filter):
    """Set `record.prefix` to ``[pkg]`` for loggers outside coursecheck.

    Records from the test files being run, pytest or asyncio then stand out
    on the console. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.partition('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown; debug_mode forces DEBUG.
        debug_mode: Show timestamps, logger names and source paths.
        color: False disables colors (mirrors click-extra's ``--no-color``).

    Returns:
        The configured RichHandler.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(fmt=DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the in-memory flight recorder writing to `path`.

    The file is only created on the first flush, which happens when a record
    at `flush_level` arrives, when `capacity` records are buffered, or on
    close if `flush_on_close` is set.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    flight_recorder: MemoryHandler | None,
    logger_levels: dict[str, int],
    match_policy: MatchPolicy,
) -> None:
    """Log a one-line startup summary at INFO and run diagnostics at DEBUG.

    Args:
        logger: Logger used to emit startup messages.
        app_version: Version string shown in the summary.
        level: Effective console level.
        flight_recorder: The active flight recorder, or None when disabled.
        logger_levels: Per-logger level overrides from ``--logger-level``.
        match_policy: Default type matching policy for ``@expects``.
    """
    logger.info(
        "COURSECHECK %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder is not None else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("pytest: %s", pytest.__version__)
    logger.debug("CWD: %s", Path.cwd())
    if flight_recorder is not None:
        target = flight_recorder.target
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            getattr(target, "baseFilename", "<none>"),
            flight_recorder.capacity,
            flight_recorder.flushOnClose,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
    logger.debug("Match policy: %s", match_policy.value)
