"""Error types raised by convtest."""

from typing import Any


class ConvtestError(Exception):
    """Base class for convtest errors."""


class ContextStateError(ConvtestError):
    """Raised when an execution context is malformed or already released."""


class ContractViolation(ConvtestError):
    """Raised when a unit breaks the test-declaration convention."""


class MalformedTestReturn(ContractViolation):
    """Raised when a test does not return an (expected, actual, comparator, extra_args) tuple."""

    def __init__(self, test_name: str, value: Any, reason: str) -> None:
        self.test_name = test_name
        self.value = value
        self.reason = reason

        message = (
            f"Test {test_name!r} returned {value!r}: {reason}.\n"
            "Tests must return (expected, actual, comparator, extra_args); "
            "use convtest.expect(expected, actual) to build it."
        )
        super().__init__(message)


class ConfigError(ConvtestError):
    """Raised when the [tool.convtest] configuration is invalid."""


class TargetLoadError(ConvtestError):
    """Raised when a module or file given to the CLI cannot be loaded."""

    def __init__(self, target: str, cause: Exception | None = None) -> None:
        self.target = target
        self.cause = cause

        message = f"Could not load test target: {target}"
        if cause:
            message += f"\nCause: {cause}"

        super().__init__(message)
