"""Exception matching: expectations, the matcher, and its results."""

from .assertions import ExpectationFailed, assert_raises, check_raises
from .expectation import ExpectedException, MatchPolicy, type_name
from .matcher import ExpectedExceptionMatcher, exception_message
from .outcome import FailureReason, MatchResult, Outcome

__all__ = [
    "ExpectationFailed",
    "ExpectedException",
    "ExpectedExceptionMatcher",
    "FailureReason",
    "MatchPolicy",
    "MatchResult",
    "Outcome",
    "assert_raises",
    "check_raises",
    "exception_message",
    "type_name",
]
