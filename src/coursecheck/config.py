"""Configuration utilities for COURSECHECK.

This module centralizes small helpers and constants related to configuration
read from the environment.
"""

from __future__ import annotations

import os

from coursecheck.errors import InvalidMatchPolicyError
from coursecheck.matching.expectation import MatchPolicy

MATCH_POLICY_ENV = "COURSECHECK_MATCH_POLICY"  # pragma: no mutate
DEFAULT_MATCH_POLICY = MatchPolicy.EXACT


def parse_match_policy(value: str) -> MatchPolicy:
    """Convert a policy name into a `MatchPolicy`.

    Args:
        value: Policy name, case-insensitive (`exact` or `subtype`).

    Returns:
        The matching `MatchPolicy` member.

    Raises:
        InvalidMatchPolicyError: If `value` names no known policy.
    """
    try:
        return MatchPolicy(value.strip().lower())
    except ValueError as e:
        raise InvalidMatchPolicyError(value) from e


def get_match_policy() -> MatchPolicy:
    """Get the default match policy from the environment.

    Returns:
        The policy named by `COURSECHECK_MATCH_POLICY`, or `MatchPolicy.EXACT`
        when the variable is unset or empty.

    Raises:
        InvalidMatchPolicyError: If the variable holds an unknown policy name.
    """
    if not (value := os.environ.get(MATCH_POLICY_ENV)):
        return DEFAULT_MATCH_POLICY
    return parse_match_policy(value)
