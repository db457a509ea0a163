"""pytest integration for exception expectations.

Loaded automatically through the ``pytest11`` entry point. A test carrying an
expectation, either from `coursecheck.expects` or from the
``@pytest.mark.expects(ExcType, "message", policy=...)`` marker, is called
through `ExpectedExceptionMatcher` and failed with the matcher's reason when
the expectation is not met.
"""

from __future__ import annotations

import inspect
import logging

import pytest

from coursecheck.config import get_match_policy, parse_match_policy
from coursecheck.declarations import get_expectation
from coursecheck.errors import InvalidExpectationError
from coursecheck.matching.expectation import ExpectedException
from coursecheck.matching.matcher import ExpectedExceptionMatcher
from coursecheck.matching.outcome import FailureReason

logger = logging.getLogger(__name__)

MARKER_NAME = "expects"

# pytest.skip(), pytest.xfail(), pytest.fail() and pytest.exit() signal outcomes
# to pytest itself; they are not exceptions raised by the code under test.
PYTEST_OUTCOMES: tuple[type[BaseException], ...] = (
    pytest.skip.Exception,
    pytest.xfail.Exception,
    pytest.fail.Exception,
    pytest.exit.Exception,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register the `expects` marker."""
    config.addinivalue_line(
        "markers",
        f"{MARKER_NAME}(exc_type, message=None, *, policy=None): the test must raise "
        "exc_type (exactly, unless policy='subtype'), optionally with this exact message.",
    )


def _marker_expectation(item: pytest.Function) -> ExpectedException | None:
    if (marker := item.get_closest_marker(MARKER_NAME)) is None:
        return None
    if not marker.args:
        raise InvalidExpectationError(f"{MARKER_NAME} marker needs an exception type")
    message = marker.args[1] if len(marker.args) > 1 else marker.kwargs.get("message")
    policy = marker.kwargs.get("policy")
    return ExpectedException(
        marker.args[0],
        message,
        parse_match_policy(policy) if policy else get_match_policy(),
    )


def expectation_for(item: pytest.Function) -> ExpectedException | None:
    """Return the expectation declared for a collected test, if any.

    A decorator-declared expectation takes precedence over the marker.
    """
    return get_expectation(item.obj) or _marker_expectation(item)


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Call tests that declare an expectation through the matcher.

    Returns:
        True when the call was handled here; None to let pytest call the test.
    """
    expectation = expectation_for(pyfuncitem)
    if expectation is None:
        return None
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        return None

    funcargs = pyfuncitem.funcargs
    argnames = pyfuncitem._fixtureinfo.argnames  # pylint: disable=protected-access
    testargs = {arg: funcargs[arg] for arg in argnames}

    result = ExpectedExceptionMatcher(expectation).run(
        lambda: testfunction(**testargs)
    )
    if result.reason is FailureReason.TYPE_MISMATCH and isinstance(
        result.raised, PYTEST_OUTCOMES
    ):
        raise result.raised
    if not result.passed:
        logger.debug("%s: %s", pyfuncitem.nodeid, result.message)
        pytest.fail(f"[{result.reason.value}] {result.message}", pytrace=False)
    return True
