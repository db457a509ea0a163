"""Declare the exception a test is expected to raise.

The `expects` decorator attaches an `ExpectedException` record to a test
function. Runners (the built-in runner and the pytest plugin) read it back with
`get_expectation` after collecting the test and route the call through the
matcher.

Example:
    ```py
    @expects(CourseInstanceNotFoundError, "INVALID_COURSEINSTANCE_ID")
    def test_get_unknown_course_instance():
        service.get_course_instance(1337)
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from coursecheck import config
from coursecheck.errors import InvalidExpectationError
from coursecheck.matching.expectation import ExpectedException, MatchPolicy

F = TypeVar("F", bound=Callable[..., object])

EXPECTATION_ATTR = "__coursecheck_expectation__"


def expects(
    expected_type: type[BaseException],
    message: str | None = None,
    *,
    policy: MatchPolicy | None = None,
) -> Callable[[F], F]:
    """Mark a test function as expected to raise `expected_type`.

    Args:
        expected_type: The exception class the test must raise.
        message: If given, the exact message the exception must carry.
        policy: Type matching policy. None uses the configured default
            (see `coursecheck.config.get_match_policy`).

    Returns:
        A decorator returning the same function with the expectation attached.

    Raises:
        InvalidExpectationError: If the arguments do not form a valid
            expectation, or the function already has one.
    """
    expectation = ExpectedException(
        expected_type,
        message,
        policy if policy is not None else config.get_match_policy(),
    )

    def decorator(func: F) -> F:
        if get_expectation(func) is not None:
            raise InvalidExpectationError(
                f"{getattr(func, '__qualname__', func)!r} already declares an expected exception"
            )
        setattr(func, EXPECTATION_ATTR, expectation)
        return func

    return decorator


def get_expectation(obj: object) -> ExpectedException | None:
    """Return the expectation attached to a test function or method.

    Bound methods, `staticmethod` and `classmethod` objects are unwrapped; the
    wrapper itself is checked too, for `expects` applied above the wrapper.
    """
    for candidate in (getattr(obj, "__func__", obj), obj):
        expectation = getattr(candidate, EXPECTATION_ATTR, None)
        if isinstance(expectation, ExpectedException):
            return expectation
    return None
