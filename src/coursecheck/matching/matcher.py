"""The exception matcher: invoke a unit once and classify what it raised."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .expectation import ExpectedException, MatchPolicy, type_name
from .outcome import FailureReason, MatchResult

logger = logging.getLogger(__name__)


def exception_message(exc: BaseException) -> str:
    """Return the message carried by `exc`.

    An exception built from a single string argument yields that string
    verbatim (so ``KeyError("X")`` gives ``X``, not ``'X'``). Anything else
    falls back to ``str(exc)``, or a placeholder if ``__str__`` itself raises.
    """
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    try:
        return str(exc)
    except Exception:  # pylint: disable=broad-exception-caught
        return f"<unprintable {type(exc).__name__}>"


class ExpectedExceptionMatcher:
    """Run a test unit and check that it raises the expected exception.

    The matcher converts an expected failure into a passing result while still
    failing for any other outcome. It never lets the unit's exception escape
    `run()`: every outcome is reported as a `MatchResult`.

    Args:
        expectation: The exception type, optional message, and type policy
            to check against.

    Note:
        A `KeyboardInterrupt` that is not itself the expected type is
        re-raised so an interactive run can still be aborted.
    """

    def __init__(self, expectation: ExpectedException) -> None:
        self.expectation = expectation

    @classmethod
    def for_type(
        cls,
        expected_type: type[BaseException],
        message: str | None = None,
        *,
        policy: MatchPolicy = MatchPolicy.EXACT,
    ) -> ExpectedExceptionMatcher:
        """Build a matcher straight from a type and optional message."""
        return cls(ExpectedException(expected_type, message, policy))

    def run(self, unit: Callable[[], object]) -> MatchResult:
        """Invoke `unit` exactly once and classify the outcome.

        Args:
            unit: Zero-argument callable; its return value is ignored.

        Returns:
            The classified `MatchResult`.
        """
        try:
            unit()
        except KeyboardInterrupt as exc:
            if not self.expectation.type_matches(type(exc)):
                raise
            return self.classify(exc)
        except BaseException as exc:  # pylint: disable=broad-exception-caught
            return self.classify(exc)
        return self.classify(None)

    def classify(self, exc: BaseException | None) -> MatchResult:
        """Classify an already captured exception (None if nothing was raised)."""
        result = self._classify(exc)
        logger.debug(
            "Expected %s: %s%s",
            self.expectation.describe(),
            result.outcome.value.upper(),
            f" ({result.reason.value})" if result.reason else "",
        )
        return result

    def _classify(self, exc: BaseException | None) -> MatchResult:
        expected = self.expectation
        expected_name = type_name(expected.expected_type)

        if exc is None:
            return MatchResult.failure(
                FailureReason.NO_EXCEPTION_RAISED,
                f"expected exception of type {expected_name} was not thrown",
            )

        actual_message = exception_message(exc)
        if not expected.type_matches(type(exc)):
            return MatchResult.failure(
                FailureReason.TYPE_MISMATCH,
                f"expected type {expected_name}, got type {type_name(type(exc))}"
                f" with message {actual_message!r}",
                raised=exc,
            )

        if (
            expected.expected_message is not None
            and actual_message != expected.expected_message
        ):
            return MatchResult.failure(
                FailureReason.MESSAGE_MISMATCH,
                f"expected {expected_name} with message "
                f"{expected.expected_message!r}, got message {actual_message!r}",
                raised=exc,
            )

        return MatchResult.ok(raised=exc)
