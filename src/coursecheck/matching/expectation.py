"""Defines the exception expectation record attached to a test."""

from __future__ import annotations

import builtins
from dataclasses import dataclass
from enum import Enum

from coursecheck.errors import InvalidExpectationError


class MatchPolicy(str, Enum):
    """How a raised exception's type is compared with the expected type.

    `EXACT` requires the runtime type to equal the expected type.
    `SUBTYPE` also accepts subclasses of the expected type.
    """

    EXACT = "exact"
    SUBTYPE = "subtype"


def type_name(tp: type) -> str:
    """Return a display name for an exception class.

    Builtins render as their bare name (``ValueError``); everything else is
    qualified with its module (``app.errors.NotFoundError``).
    """
    if tp.__module__ == builtins.__name__:
        return tp.__qualname__
    return f"{tp.__module__}.{tp.__qualname__}"


@dataclass(frozen=True, slots=True)
class ExpectedException:
    """Immutable record of the exception a test unit is expected to raise.

    Conventions:
      - `expected_type` is an exception class (any `BaseException` subclass).
      - `expected_message` is compared by exact string equality; `None` means
        only the type is checked.
      - `policy` decides whether subclasses of `expected_type` also match.
    """

    expected_type: type[BaseException]
    expected_message: str | None = None
    policy: MatchPolicy = MatchPolicy.EXACT

    def __post_init__(self) -> None:
        if not (
            isinstance(self.expected_type, type)
            and issubclass(self.expected_type, BaseException)
        ):
            raise InvalidExpectationError(
                f"expected_type must be an exception class, got {self.expected_type!r}"
            )
        if self.expected_message is not None and not isinstance(
            self.expected_message, str
        ):
            raise InvalidExpectationError(
                "expected_message must be a string or None, "
                f"got {type(self.expected_message).__name__}"
            )
        if not isinstance(self.policy, MatchPolicy):
            raise InvalidExpectationError(
                f"policy must be a MatchPolicy, got {self.policy!r}"
            )

    def type_matches(self, raised_type: type[BaseException]) -> bool:
        """Return True if `raised_type` satisfies this expectation's type check."""
        if self.policy is MatchPolicy.SUBTYPE:
            return issubclass(raised_type, self.expected_type)
        return raised_type is self.expected_type

    def describe(self) -> str:
        """Render the expectation for humans, e.g. ``KeyError('missing')``."""
        name = type_name(self.expected_type)
        if self.expected_message is None:
            return name
        return f"{name}({self.expected_message!r})"
