"""Function-style helpers around `ExpectedExceptionMatcher` for plain tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import cast

from .expectation import ExpectedException, MatchPolicy
from .matcher import ExpectedExceptionMatcher
from .outcome import MatchResult


class ExpectationFailed(AssertionError):
    """Raised by `assert_raises` when the unit did not raise as expected.

    Attributes:
        result: The failing `MatchResult`.
    """

    def __init__(self, result: MatchResult) -> None:
        super().__init__(result.message)
        self.result = result


def check_raises(
    unit: Callable[[], object],
    expected_type: type[BaseException],
    expected_message: str | None = None,
    *,
    policy: MatchPolicy = MatchPolicy.EXACT,
) -> MatchResult:
    """Run `unit` under an expectation and return the result without raising."""
    expectation = ExpectedException(expected_type, expected_message, policy)
    return ExpectedExceptionMatcher(expectation).run(unit)


def assert_raises(
    unit: Callable[[], object],
    expected_type: type[BaseException],
    expected_message: str | None = None,
    *,
    policy: MatchPolicy = MatchPolicy.EXACT,
) -> BaseException:
    """Assert that `unit` raises the expected exception.

    Returns:
        The exception raised by `unit`, for further assertions.

    Raises:
        ExpectationFailed: If the match fails for any reason.
    """
    result = check_raises(unit, expected_type, expected_message, policy=policy)
    if not result.passed:
        raise ExpectationFailed(result)
    return cast(BaseException, result.raised)
