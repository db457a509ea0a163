"""``coursecheck run``: run test files with the built-in runner."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from coursecheck.errors import TestModuleImportError
from coursecheck.runner import RunReport, TestRunner, collect, load_module

from .helpers import error, result_line, summary_line, warn

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_IMPORT_ERROR = 2


@click.command("run")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--fail-fast/--no-fail-fast",
    "-x",
    default=False,
    help="Stop after the first test that fails or errors.",
    show_default=True,
)
@click.pass_context
def run(ctx: click.Context, paths: tuple[Path, ...], fail_fast: bool) -> None:
    """Run the tests in PATHS and report one line per test.

    Collects functions named ``test*`` and methods named ``test*`` on classes
    named ``Test*``. Tests decorated with ``@expects(...)`` pass only if they
    raise the declared exception.

    Exits with 0 when every test passed, 1 when any test failed or errored,
    and 2 when a file could not be imported.
    """
    runner = TestRunner(on_result=result_line, fail_fast=fail_fast)
    report = RunReport()
    import_failed = False

    for path in paths:
        try:
            module = load_module(path)
        except TestModuleImportError as e:
            logger.debug("Import of %s failed", path, exc_info=e.cause)
            error(str(e))
            import_failed = True
            continue

        units = collect(module)
        if not units:
            warn(f"No tests found in {path}")
            continue

        file_report = runner.run(units)
        report.results.extend(file_report.results)
        if fail_fast and not file_report.ok:
            break

    summary_line(report.summary(), report.ok and not import_failed)

    if import_failed:
        ctx.exit(EXIT_IMPORT_ERROR)
    ctx.exit(EXIT_OK if report.ok else EXIT_FAILED)
