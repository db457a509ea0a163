"""COURSECHECK CLI entry point.

Defines the top-level ``coursecheck`` command (via Click-Extra) and registers
its subcommands.

Currently available commands
- ``coursecheck run`` - run test files, honoring ``@expects(...)`` declarations.

Notes
- The CLI version is sourced from `coursecheck.__version__` and displayed
  automatically by Click-Extra (``--version``).
- The default exception type matching policy comes from
  ``COURSECHECK_MATCH_POLICY`` (``exact`` or ``subtype``).

Examples
    $ coursecheck --version
    $ coursecheck -v run tests/test_course_instances.py
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from coursecheck import __version__, config
from coursecheck.errors import InvalidMatchPolicyError
from coursecheck.logging import (
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .helpers.log_level_parser import parse_log_level
from .run import run as run_command

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """COURSECHECK command-line interface.

    Runs unit tests that declare the exception they expect their unit under
    test to raise, and reports each one as passed, failed (with the reason:
    no exception, wrong type, or wrong message) or errored.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("coursecheck", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="COURSECHECK_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="COURSECHECK_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "at DEBUG granularity (unaffected by -v/-q) and writes them to --log-path "
        "when a WARNING/ERROR occurs, or on exit if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Force-flush the flight recorder buffer to --log-path on program exit.",
    default=False,
    show_default=True,
    envvar="COURSECHECK_FORCE_FLUSH_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight-recorder. Repeatable (e.g. -L coursecheck.runner=INFO) "
        "or via COURSECHECK_LOGGER_LEVELS (comma/space list)."
    ),
    envvar="COURSECHECK_LOGGER_LEVELS",
    show_envvar=True,
)
@clickx.pass_context
def coursecheck(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """COURSECHECK command-line interface."""

    # 0) validate configuration read from the environment
    try:
        match_policy = config.get_match_policy()
    except InvalidMatchPolicyError as e:
        raise click.UsageError(f"{config.MATCH_POLICY_ENV}: {e}") from e

    # 1) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 2) console handler; None or True => allow color
    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]

    # 3) flight recorder
    recorder = None
    if flight_recorder:
        recorder = config_flight_recorder(
            path=log_path,
            capacity=flight_recorder_capacity,
            flush_on_close=force_flush_flight_recorder,
        )
        handlers.append(recorder)

    # 4) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        flight_recorder=recorder,
        logger_levels=logger_levels,
        match_policy=match_policy,
    )

    ctx.call_on_close(logging.shutdown)


coursecheck.add_command(run_command)
