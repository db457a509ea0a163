"""Unit tests for coursecheck.matching.assertions."""

import sys

import pytest

from coursecheck.matching import (
    ExpectationFailed,
    FailureReason,
    MatchPolicy,
    assert_raises,
    check_raises,
)
from tests.fakes import INVALID_COURSEINSTANCE_ID, CourseError, CourseInstanceNotFoundError

# pylint: disable=magic-value-comparison


def lookup_unknown() -> None:
    """Unit raising the not-found error for id 1337."""
    raise CourseInstanceNotFoundError(1337)


class TestCheckRaises:
    """check_raises returns results and never raises."""

    @staticmethod
    def test_returns_passing_result():
        """Matching type and message pass."""
        result = check_raises(
            lookup_unknown, CourseInstanceNotFoundError, INVALID_COURSEINSTANCE_ID
        )
        assert result.passed

    @staticmethod
    def test_returns_failing_result():
        """A mismatch is returned, not raised."""
        result = check_raises(lookup_unknown, KeyError)
        assert result.reason is FailureReason.TYPE_MISMATCH

    @staticmethod
    def test_forwards_policy():
        """The policy keyword reaches the matcher."""
        result = check_raises(lookup_unknown, CourseError, policy=MatchPolicy.SUBTYPE)
        assert result.passed


class TestAssertRaises:
    """assert_raises signals failures with ExpectationFailed."""

    @staticmethod
    def test_returns_the_raised_exception():
        """On success the raised exception is returned for further checks."""
        exc = assert_raises(lookup_unknown, CourseInstanceNotFoundError)
        assert isinstance(exc, CourseInstanceNotFoundError)
        assert exc.course_instance_id == 1337

    @staticmethod
    def test_returns_base_exceptions_too():
        """Expected BaseException subclasses such as SystemExit are returned."""
        exc = assert_raises(lambda: sys.exit(2), SystemExit)
        assert isinstance(exc, SystemExit)
        assert exc.code == 2

    @staticmethod
    def test_raises_expectation_failed_on_mismatch():
        """A failed match raises ExpectationFailed carrying the result."""
        with pytest.raises(ExpectationFailed) as excinfo:
            assert_raises(lookup_unknown, CourseInstanceNotFoundError, "NOT_FOUND")
        assert excinfo.value.result.reason is FailureReason.MESSAGE_MISMATCH
        assert str(excinfo.value) == excinfo.value.result.message

    @staticmethod
    def test_expectation_failed_is_an_assertion_error():
        """Test frameworks treat ExpectationFailed as a test failure."""
        with pytest.raises(AssertionError, match="was not thrown"):
            assert_raises(lambda: None, ValueError)
