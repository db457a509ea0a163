"""Unit tests for coursecheck.errors."""

from coursecheck import errors


class TestInvalidExpectationError:
    """Tests for InvalidExpectationError."""

    @staticmethod
    def test_attributes():
        """The reason is kept on the error."""
        error = errors.InvalidExpectationError("bad type")
        assert error.reason == "bad type"

    @staticmethod
    def test_error_message():
        """The message is prefixed with the error category."""
        error = errors.InvalidExpectationError("bad type")
        assert str(error) == "Invalid exception expectation: bad type"

    @staticmethod
    def test_is_a_coursecheck_error():
        """All project errors share a base class."""
        assert isinstance(errors.InvalidExpectationError("x"), errors.CoursecheckError)


class TestInvalidMatchPolicyError:
    """Tests for InvalidMatchPolicyError."""

    @staticmethod
    def test_attributes():
        """The offending value is kept on the error."""
        assert errors.InvalidMatchPolicyError("loose").value == "loose"

    @staticmethod
    def test_error_message():
        """The message lists the accepted policies."""
        error = errors.InvalidMatchPolicyError("loose")
        assert (
            str(error) == "Unknown match policy 'loose'; expected 'exact' or 'subtype'."
        )


class TestTestModuleImportError:
    """Tests for TestModuleImportError."""

    @staticmethod
    def test_attributes():
        """Path and cause are kept on the error."""
        cause = SyntaxError("invalid syntax")
        error = errors.TestModuleImportError("tests/test_x.py", cause)
        assert error.path == "tests/test_x.py"
        assert error.cause is cause

    @staticmethod
    def test_error_message():
        """The message names the file and the cause."""
        error = errors.TestModuleImportError("t.py", ImportError("no module named x"))
        assert str(error) == "Could not import test file t.py: ImportError: no module named x"
