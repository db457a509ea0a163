"""Result types produced by the exception matcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Terminal outcome of a single match."""

    PASS = "pass"
    FAIL = "fail"


class FailureReason(str, Enum):
    """Why a match failed."""

    NO_EXCEPTION_RAISED = "NoExceptionRaised"
    TYPE_MISMATCH = "TypeMismatch"
    MESSAGE_MISMATCH = "MessageMismatch"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Structured result of running a unit under an exception expectation.

    Attributes:
        outcome: PASS or FAIL.
        reason: The failure category, or None when the outcome is PASS.
        message: Human-readable reason; empty when the outcome is PASS.
        raised: The exception captured from the unit, if any.
    """

    outcome: Outcome
    reason: FailureReason | None = None
    message: str = ""
    raised: BaseException | None = None

    def __post_init__(self) -> None:
        if (self.outcome is Outcome.PASS) != (self.reason is None):
            raise ValueError("reason must be set if and only if the outcome is FAIL")

    @classmethod
    def ok(cls, raised: BaseException | None = None) -> MatchResult:
        """Build a passing result."""
        return cls(Outcome.PASS, raised=raised)

    @classmethod
    def failure(
        cls,
        reason: FailureReason,
        message: str,
        raised: BaseException | None = None,
    ) -> MatchResult:
        """Build a failing result."""
        return cls(Outcome.FAIL, reason=reason, message=message, raised=raised)

    @property
    def passed(self) -> bool:
        """True if the outcome is PASS."""
        return self.outcome is Outcome.PASS
