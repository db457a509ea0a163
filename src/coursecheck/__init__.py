"""COURSECHECK

Exception-expectation helpers for unit tests. A test declares the exception
type (and optionally the exact message) it expects its unit under test to
raise; the matcher invokes the unit once and reports a structured pass/fail
result with a human-readable reason instead of letting the exception escape.
"""

from coursecheck.declarations import expects, get_expectation
from coursecheck.matching import (
    ExpectationFailed,
    ExpectedException,
    ExpectedExceptionMatcher,
    FailureReason,
    MatchPolicy,
    MatchResult,
    Outcome,
    assert_raises,
    check_raises,
)

__all__ = [
    "__version__",
    "ExpectationFailed",
    "ExpectedException",
    "ExpectedExceptionMatcher",
    "FailureReason",
    "MatchPolicy",
    "MatchResult",
    "Outcome",
    "assert_raises",
    "check_raises",
    "expects",
    "get_expectation",
]
__version__ = "0.1.0"
