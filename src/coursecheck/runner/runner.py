"""Sequential test runner that classifies outcomes through the matcher."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from coursecheck.matching.matcher import ExpectedExceptionMatcher, exception_message
from coursecheck.matching.outcome import MatchResult

from .units import TestUnit

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class Status(str, Enum):
    """Final status of a test unit."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class UnitResult:
    """Result of running one test unit."""

    unit_name: str
    status: Status
    reason: str = ""
    match: MatchResult | None = None
    duration: float = 0.0


@dataclass(slots=True)
class RunReport:
    """Accumulated results of a run, in execution order."""

    results: list[UnitResult] = field(default_factory=list)

    def _count(self, status: Status) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def passed(self) -> int:
        """Number of passed units."""
        return self._count(Status.PASSED)

    @property
    def failed(self) -> int:
        """Number of failed units."""
        return self._count(Status.FAILED)

    @property
    def errors(self) -> int:
        """Number of units that errored."""
        return self._count(Status.ERROR)

    @property
    def ok(self) -> bool:
        """True if nothing failed or errored."""
        return self.failed == 0 and self.errors == 0

    def summary(self) -> str:
        """One-line summary, e.g. ``3 passed, 1 failed, 0 errors``."""
        return f"{self.passed} passed, {self.failed} failed, {self.errors} errors"


class TestRunner:
    """Run test units one at a time and collect a `RunReport`.

    Each unit is arranged (fresh instance and setup hook for methods), invoked
    once, and torn down before the next starts. Units with a declared
    expectation are invoked through `ExpectedExceptionMatcher`; the rest pass
    unless they raise. Anything a unit or its hooks raise, `SystemExit`
    included, becomes a result; only `KeyboardInterrupt` ends the run.

    Args:
        on_result: Optional callback invoked with each `UnitResult` as soon as
            it is available (used by the CLI for live output).
        fail_fast: Stop after the first unit that fails or errors.
    """

    __test__ = False

    def __init__(
        self,
        on_result: Callable[[UnitResult], None] | None = None,
        fail_fast: bool = False,
    ) -> None:
        self._on_result = on_result
        self._fail_fast = fail_fast

    def run(self, units: Iterable[TestUnit]) -> RunReport:
        """Run `units` sequentially and return the report."""
        report = RunReport()
        for unit in units:
            result = self.run_unit(unit)
            report.results.append(result)
            if self._on_result is not None:
                self._on_result(result)
            if self._fail_fast and result.status is not Status.PASSED:
                logger.info("Stopping after first failure (%s)", unit.name)
                break
        logger.info("Run finished: %s", report.summary())
        return report

    def run_unit(self, unit: TestUnit) -> UnitResult:
        """Arrange, invoke and classify a single unit."""
        logger.debug("Running %s", unit.name)
        start = time.perf_counter()

        try:
            call, teardown = unit.prepare()
        except KeyboardInterrupt:
            raise
        except BaseException as exc:  # pylint: disable=broad-exception-caught
            logger.debug("Setup of %s raised", unit.name, exc_info=True)
            return UnitResult(
                unit.name,
                Status.ERROR,
                f"setup failed: {type(exc).__name__}: {exception_message(exc)}",
                duration=time.perf_counter() - start,
            )

        try:
            result = self._invoke(unit, call)
        finally:
            teardown_error = self._teardown(unit, teardown) if teardown else ""

        status, reason = result.status, result.reason
        if teardown_error and status is Status.PASSED:
            status, reason = Status.ERROR, teardown_error
        result = UnitResult(
            unit.name,
            status,
            reason,
            result.match,
            duration=time.perf_counter() - start,
        )
        logger.debug("%s %s", unit.name, result.status.value.upper())
        return result

    @staticmethod
    def _invoke(unit: TestUnit, call: Callable[[], object]) -> UnitResult:
        if (expectation := unit.expectation) is not None:
            match = ExpectedExceptionMatcher(expectation).run(call)
            if match.passed:
                return UnitResult(unit.name, Status.PASSED, match=match)
            return UnitResult(unit.name, Status.FAILED, match.message, match=match)

        try:
            call()
        except AssertionError as exc:
            return UnitResult(
                unit.name, Status.FAILED, exception_message(exc) or "assertion failed"
            )
        except KeyboardInterrupt:
            raise
        except BaseException as exc:  # pylint: disable=broad-exception-caught
            return UnitResult(
                unit.name,
                Status.ERROR,
                f"unexpected {type(exc).__name__}: {exception_message(exc)}",
            )
        return UnitResult(unit.name, Status.PASSED)

    @staticmethod
    def _teardown(unit: TestUnit, teardown: Callable[[], object]) -> str:
        try:
            teardown()
        except KeyboardInterrupt:
            raise
        except BaseException as exc:  # pylint: disable=broad-exception-caught
            logger.debug("Teardown of %s raised", unit.name, exc_info=True)
            return f"teardown failed: {type(exc).__name__}: {exception_message(exc)}"
        return ""
