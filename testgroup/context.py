"""Per-run state and the capability objects handed to test callbacks.

A test body receives a :class:`TestContext`. Callbacks passed to
``setup()`` get a :class:`SetupContext` and callbacks passed to ``cleanup()``
get a :class:`CleanupContext`; each exposes only what that phase may do.
"""

import logging
from collections.abc import Awaitable, Callable, Collection
from dataclasses import dataclass, field
from typing import Any

from testgroup.equality import describe_value, matches, type_of
from testgroup.errors import AssertionFailure, ExplicitFailure
from testgroup.models.config import GroupConfig
from testgroup.models.result import ExpectationRecord, TestResult
from testgroup.output import ProgressReporter

log = logging.getLogger(__name__)

type SetupCallback = Callable[["SetupContext"], Awaitable[Any]]
type CleanupCallback = Callable[["CleanupContext"], Awaitable[Any]]


@dataclass(kw_only=True)
class RunState:
    """Mutable state of a single run() invocation."""

    started_at: float
    phase: str = "test"
    test_started_at: float = 0.0
    setup_name: str = ""
    executed: list[TestResult] = field(default_factory=list)
    has_failed: bool = False


def failure_message(description: str, expected: Any, actual: Any) -> str:
    """Build the message of a failed expectation."""
    prefix = f"Expect {description}. " if description else ""
    return (
        f'{prefix}Expected "{describe_value(expected)}" ({type_of(expected)}), '
        f'got "{describe_value(actual)}" ({type_of(actual)})'
    )


@dataclass(kw_only=True)
class TestScope:
    """Everything the contexts of one test act upon."""

    __test__ = False

    result: TestResult
    state: RunState
    config: GroupConfig
    clock: Callable[[], float]
    reporter: ProgressReporter | None = None
    keep_successful_logs: bool = True

    def elapsed(self) -> int:
        """Milliseconds since the current test started."""
        return round((self.clock() - self.state.test_started_at) * 1000)

    def pass_(self) -> None:
        """Mark the test passed unless a failure was already recorded."""
        if not self.result.passed:
            return
        self.result.time = self.elapsed()

    def fail(self, error: BaseException | str, *, silent: bool) -> None:
        """Record the first failure of the test and raise it unless silent."""
        if not self.result.passed:
            return

        if isinstance(error, str):
            error = ExplicitFailure(error)

        self.result.passed = False
        self.result.error = error
        self.result.time = self.elapsed()
        self.state.has_failed = True
        log.debug(
            "Test %s failed in phase %s: %s", self.result.id, self.state.phase, error
        )
        if self.reporter is not None:
            self.reporter.test_failed(
                self.result, self.state.phase, self.state.setup_name
            )

        if not silent:
            raise error

    def expect(
        self,
        description: str,
        actual: Any,
        expected: Any,
        ignore_paths: Collection[str] = (),
    ) -> None:
        """Compare actual against expected and record the outcome."""
        if matches(expected, actual, ignore_paths):
            self.result.expectations_met += 1
            if self.keep_successful_logs:
                self._record(description, expected, actual, met=True)
            return

        self._record(description, expected, actual, met=False)
        failure = AssertionFailure(
            failure_message(description, expected, actual),
            expected=expected,
            actual=actual,
            phase=self.state.phase,
        )
        self.fail(failure, silent=self.config.fail_silently)

    def _record(self, description: str, expected: Any, actual: Any, *, met: bool) -> None:
        if self.state.phase == "setup" and not self.config.setup_expectations:
            return
        self.result.expectations.append(
            ExpectationRecord(
                description=description,
                expected=expected,
                got=actual,
                met=met,
                phase=self.state.phase,
            )
        )


class CleanupContext:
    """Capabilities available inside a cleanup callback."""

    __slots__ = ("_scope",)

    def __init__(self, scope: TestScope) -> None:
        self._scope = scope

    def pass_(self) -> None:
        """Mark the test passed. Does not clear an earlier failure."""
        self._scope.pass_()

    def fail(self, error: BaseException | str, silent: bool = False) -> None:
        """Fail the test. Raises the error unless silent or already failed."""
        self._scope.fail(error, silent=silent)


class _AssertingContext(CleanupContext):
    __slots__ = ()

    def expect(
        self,
        description: str,
        actual: Any,
        expected: Any,
        ignore_paths: Collection[str] = (),
    ) -> None:
        """Assert that actual structurally matches expected.

        Args:
            description: What is being checked, used in the record and message
            actual: Value produced by the code under test
            expected: Reference value
            ignore_paths: Dotted key paths to leave out of the comparison

        """
        self._scope.expect(description, actual, expected, ignore_paths)

    def keep_successful_logs(self, keep: bool) -> None:
        """Choose whether later passing expectations are recorded."""
        self._scope.keep_successful_logs = keep


class SetupContext(_AssertingContext):
    """Capabilities available inside a setup callback."""

    __slots__ = ()


class TestContext(_AssertingContext):
    """Capabilities available to a test body."""

    __slots__ = ()
    __test__ = False

    def phase(self, name: str) -> None:
        """Label subsequent records and failures with a phase name."""
        self._scope.state.phase = name

    async def setup(self, callback: SetupCallback) -> Any:
        """Run a setup callback now, in the "setup" phase.

        Returns whatever the callback returns. Exceptions propagate to the
        test body.
        """
        state = self._scope.state
        state.phase = "setup"
        state.setup_name = getattr(callback, "__name__", "")
        value = await callback(SetupContext(self._scope))
        state.phase = "test"
        return value

    def cleanup(self, callback: CleanupCallback) -> CleanupCallback:
        """Queue a callback to run after the test body, in the "cleanup" phase."""
        scope = self._scope

        async def run_cleanup() -> None:
            scope.state.phase = "cleanup"
            await callback(CleanupContext(scope))

        scope.result.cleanups.append(run_cleanup)
        return callback
