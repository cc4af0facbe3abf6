"""Models for test execution results."""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

type CleanupTask = Callable[[], Awaitable[None]]


@dataclass(frozen=True, kw_only=True)
class ExpectationRecord:
    """A single logged assertion."""

    description: str
    expected: Any
    got: Any
    met: bool
    phase: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the report format."""
        return {
            "description": self.description,
            "expected": self.expected,
            "got": self.got,
            "met": self.met,
            "phase": self.phase,
        }


@dataclass(kw_only=True)
class TestResult:
    """Outcome of one test case, updated in place while it runs.

    ``passed`` starts out true and flips on the first failure. ``time`` is the
    elapsed milliseconds at the moment the test passed or failed, or None when
    the test has not concluded.
    """

    __test__ = False

    id: str
    description: str
    passed: bool = True
    time: int | None = None
    error: BaseException | None = None
    expectations_met: int = 0
    expectations: list[ExpectationRecord] = field(default_factory=list)
    cleanups: list[CleanupTask] = field(
        default_factory=list, repr=False, compare=False
    )

    def reset(self) -> None:
        """Return to the unexecuted state before a new run."""
        self.passed = True
        self.time = None
        self.error = None
        self.expectations_met = 0
        self.expectations = []
        self.cleanups = []

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the report format."""
        return {
            "id": self.id,
            "description": self.description,
            "passed": self.passed,
            "time": self.time,
            "error": None if self.error is None else str(self.error),
            "expectationsMet": self.expectations_met,
            "expectations": [record.to_dict() for record in self.expectations],
        }


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """Aggregate result of a single run() call."""

    all_passed: bool
    time_taken: int
    tests: Sequence[TestResult]
    halted: bool = False

    @property
    def failed(self) -> Sequence[TestResult]:
        """Executed tests that did not pass."""
        return [test for test in self.tests if not test.passed]

    def raise_for_failure(self) -> None:
        """Re-raise the error of the first failed test, if any."""
        for test in self.failed:
            if test.error is not None:
                raise test.error

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the report format."""
        return {
            "allPassed": self.all_passed,
            "timeTaken": self.time_taken,
            "tests": [test.to_dict() for test in self.tests],
        }
