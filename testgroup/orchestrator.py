"""Test group orchestrator: registration and sequential execution of tests."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from testgroup.context import RunState, TestContext, TestScope
from testgroup.errors import (
    DuplicateIdError,
    InvalidIdError,
    RunInProgressError,
    UnknownIdError,
)
from testgroup.models.config import GroupConfig
from testgroup.models.definition import TestBody, TestDefinition
from testgroup.models.result import RunReport, TestResult
from testgroup.output import ProgressReporter

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Passed:
    """Outcome of a test that passed."""


@dataclass(frozen=True, kw_only=True)
class Failed:
    """Outcome of a test that failed."""

    error: BaseException | None
    halt_requested: bool


type Outcome = Passed | Failed


@dataclass(kw_only=True)
class TestGroup:
    """A group of named asynchronous tests run one after another.

    Tests are registered with :meth:`register` (or the :meth:`case`
    decorator) and executed with :meth:`run`. ``clock`` returns seconds and is
    only used for elapsed time measurements.
    """

    __test__ = False

    config: GroupConfig = field(default_factory=GroupConfig)
    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)
    _definitions: dict[str, TestDefinition] = field(
        default_factory=dict, init=False, repr=False
    )
    _results: dict[str, TestResult] = field(
        default_factory=dict, init=False, repr=False
    )
    _running: bool = field(default=False, init=False, repr=False)

    @property
    def ids(self) -> Sequence[str]:
        """Registered test ids in registration order."""
        return list(self._definitions)

    def register(self, test_id: str, description: str, body: TestBody) -> None:
        """Register a test.

        Args:
            test_id: Unique, non-empty identifier
            description: Human-readable description
            body: Async callable receiving a TestContext

        Raises:
            InvalidIdError: If the id is empty or not a string
            DuplicateIdError: If the id is already registered

        """
        if not isinstance(test_id, str) or not test_id:
            raise InvalidIdError(f"Test ID must be a non-empty string, got {test_id!r}")
        if test_id in self._definitions:
            raise DuplicateIdError(test_id)

        self._definitions[test_id] = TestDefinition(
            id=test_id, description=description, body=body
        )
        self._results[test_id] = TestResult(id=test_id, description=description)

    def case(self, test_id: str, description: str) -> Callable[[TestBody], TestBody]:
        """Register the decorated function as a test."""

        def decorator(body: TestBody) -> TestBody:
            self.register(test_id, description, body)
            return body

        return decorator

    async def run(self, ids: Sequence[str] | None = None) -> RunReport:
        """Run tests sequentially and report their outcomes.

        Args:
            ids: Test ids to run in order; all registered tests when omitted

        Test failures never propagate out of this call, even when
        ``fail_silently`` is off: the run stops, the report has
        ``halted=True``, and :meth:`RunReport.raise_for_failure` re-raises
        the error of the failed test.

        Returns:
            Report over the tests that were executed

        Raises:
            UnknownIdError: When an id is reached that was never registered
            RunInProgressError: When another run of this group is in flight

        """
        if self._running:
            raise RunInProgressError("This test group is already running")

        self._running = True
        try:
            return await self._run(self.ids if ids is None else list(ids))
        finally:
            self._running = False

    async def _run(self, ids: Sequence[str]) -> RunReport:
        state = RunState(started_at=self.clock())
        reporter = (
            ProgressReporter(id_width=max(map(len, ids), default=0))
            if self.config.output
            else None
        )
        log.debug("Running %d test(s)", len(ids))

        halted = False
        for test_id in ids:
            if test_id not in self._definitions:
                raise UnknownIdError(test_id)

            outcome = await self._execute(self._definitions[test_id], state, reporter)
            if isinstance(outcome, Failed) and outcome.halt_requested:
                log.debug("Halting run after failure of %s", test_id)
                halted = True
                break

        report = RunReport(
            all_passed=not state.has_failed,
            time_taken=round((self.clock() - state.started_at) * 1000),
            tests=list(state.executed),
            halted=halted,
        )
        if reporter is not None:
            reporter.run_finished(report)
        return report

    async def _execute(
        self,
        definition: TestDefinition,
        state: RunState,
        reporter: ProgressReporter | None,
    ) -> Outcome:
        """Run one test: body, then cleanups unless the run is halting."""
        result = self._results[definition.id]
        result.reset()
        state.executed.append(result)
        state.phase = "test"
        state.setup_name = ""
        state.test_started_at = self.clock()

        scope = TestScope(
            result=result,
            state=state,
            config=self.config,
            clock=self.clock,
            reporter=reporter,
        )

        log.debug("Running test %s", definition.id)
        try:
            await definition.body(TestContext(scope))
        except Exception as error:
            scope.fail(error, silent=True)
            if not self.config.fail_silently:
                return Failed(error=result.error, halt_requested=True)
            await self._run_cleanups(scope)
            return Failed(error=result.error, halt_requested=False)

        if result.error is None:
            scope.pass_()
            if reporter is not None:
                reporter.test_passed(result)

        await self._run_cleanups(scope)

        if result.passed:
            return Passed()
        return Failed(error=result.error, halt_requested=False)

    async def _run_cleanups(self, scope: TestScope) -> None:
        """Run queued cleanups in order, logging and discarding their errors."""
        result = scope.result
        if result.cleanups:
            log.debug("Running %d cleanup(s) for %s", len(result.cleanups), result.id)

        for cleanup in result.cleanups:
            try:
                await cleanup()
            except Exception:
                log.exception("Cleanup error in test %s", result.id)
