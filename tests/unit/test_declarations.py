"""Unit tests for coursecheck.declarations."""

import pytest

from coursecheck import config
from coursecheck.declarations import EXPECTATION_ATTR, expects, get_expectation
from coursecheck.errors import InvalidExpectationError
from coursecheck.matching import ExpectedException, MatchPolicy

# pylint: disable=magic-value-comparison,too-few-public-methods


def test_attaches_expectation_and_returns_same_function():
    """The decorator returns the function itself with the record attached."""

    def check():
        """A test function."""

    decorated = expects(KeyError, "missing")(check)

    assert decorated is check
    assert getattr(check, EXPECTATION_ATTR) == ExpectedException(
        KeyError, "missing", MatchPolicy.EXACT
    )


def test_get_expectation_on_plain_function():
    """Undecorated functions have no expectation."""

    def check():
        """A test function."""

    assert get_expectation(check) is None


def test_get_expectation_on_bound_method():
    """Expectations are visible through bound methods."""

    class TestSomething:
        """A test class."""

        @expects(ValueError)
        def test_it(self):
            """A test method."""

    expectation = get_expectation(TestSomething().test_it)
    assert expectation is not None
    assert expectation.expected_type is ValueError


def test_explicit_policy_wins(monkeypatch):
    """An explicit policy overrides the configured default."""
    monkeypatch.setenv(config.MATCH_POLICY_ENV, "subtype")

    @expects(ValueError, policy=MatchPolicy.EXACT)
    def check():
        """A test function."""

    assert get_expectation(check).policy is MatchPolicy.EXACT


def test_default_policy_comes_from_config(monkeypatch):
    """Without an explicit policy the environment decides."""
    monkeypatch.setenv(config.MATCH_POLICY_ENV, "subtype")

    @expects(ValueError)
    def check():
        """A test function."""

    assert get_expectation(check).policy is MatchPolicy.SUBTYPE


def test_invalid_declaration_fails_at_decoration_time():
    """A bad exception type is rejected when the decorator is built."""
    with pytest.raises(InvalidExpectationError):
        expects("ValueError")  # type: ignore[arg-type]


def test_only_one_expectation_per_test():
    """Stacking two expects decorators is rejected."""
    with pytest.raises(InvalidExpectationError, match="already declares"):

        @expects(KeyError)
        @expects(ValueError)
        def check():
            """A test function."""


def test_ignores_foreign_attribute_values():
    """Only real ExpectedException records are returned."""

    def check():
        """A test function."""

    setattr(check, EXPECTATION_ATTR, "not an expectation")
    assert get_expectation(check) is None
