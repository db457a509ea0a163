"""Error definitions shared across COURSECHECK."""

# ============================================================================
#                           General errors
# ============================================================================


class CoursecheckError(Exception):
    """Base class for COURSECHECK errors."""


# ============================================================================
#                   Declaration and configuration errors
# ============================================================================


class InvalidExpectationError(CoursecheckError):
    """Raised when an exception expectation is declared incorrectly."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid exception expectation: {reason}")
        self.reason = reason


class InvalidMatchPolicyError(CoursecheckError):
    """Raised when a match policy name is not recognized."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Unknown match policy '{value}'; expected 'exact' or 'subtype'."
        )
        self.value = value


# ============================================================================
#                           Runner errors
# ============================================================================


class TestModuleImportError(CoursecheckError):
    """Raised when a test file cannot be imported by the runner."""

    __test__ = False

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(
            f"Could not import test file {path}: {type(cause).__name__}: {cause}"
        )
        self.path = path
        self.cause = cause
