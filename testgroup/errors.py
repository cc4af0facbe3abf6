"""Errors raised while registering and running test groups."""

from typing import Any


class TestGroupError(Exception):
    """Base class for all test group errors."""

    __test__ = False


class InvalidIdError(TestGroupError, ValueError):
    """Raised when a test id is empty or not a string."""


class DuplicateIdError(TestGroupError):
    """Raised when a test id is registered twice."""

    def __init__(self, test_id: str) -> None:
        super().__init__(f'Duplicate test ID "{test_id}"')
        self.test_id = test_id


class UnknownIdError(TestGroupError, KeyError):
    """Raised when run() is asked for a test id that was never registered."""

    def __init__(self, test_id: str) -> None:
        super().__init__(f'Unknown test ID "{test_id}"')
        self.test_id = test_id

    def __str__(self) -> str:
        return str(self.args[0])


class RunInProgressError(TestGroupError):
    """Raised when run() is called while another run is in flight."""


class AssertionFailure(TestGroupError, AssertionError):
    """Raised by expect() when the actual value does not match."""

    def __init__(self, message: str, *, expected: Any, actual: Any, phase: str) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.phase = phase


class ExplicitFailure(TestGroupError):
    """Raised by fail() when it is given a plain message."""
