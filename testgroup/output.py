"""Human-readable progress lines for test group runs."""

import logging
from dataclasses import dataclass, field

from testgroup.errors import TestGroupError
from testgroup.models.result import RunReport, TestResult

log = logging.getLogger(__name__)

STATUS_SYMBOLS = {
    "pass": "✓",
    "fail": "✗",
}


def format_time(time: int | None) -> str:
    """Format elapsed milliseconds into a fixed-width column."""
    return f"{'-' if time is None else time}ms".ljust(7)


def failure_reason(error: BaseException | None) -> str:
    """Describe why a test failed."""
    if error is None:
        return ""
    if isinstance(error, TestGroupError):
        return str(error)
    return f"{type(error).__name__}: {error}"


@dataclass(frozen=True, kw_only=True)
class ProgressReporter:
    """Logs one line per concluded test and a summary per run.

    ``id_width`` pads test ids so that the description column lines up.
    """

    id_width: int = 0
    logger: logging.Logger = field(default=log, repr=False)

    def test_passed(self, result: TestResult) -> None:
        """Log a passed test."""
        self.logger.info(
            "%s Pass %s %s | \"%s\"",
            STATUS_SYMBOLS["pass"],
            format_time(result.time),
            result.id.ljust(self.id_width),
            result.description,
        )

    def test_failed(self, result: TestResult, phase: str, setup_name: str = "") -> None:
        """Log a failed test along with the phase it failed in."""
        location = f'[phase "{phase}"]'
        if phase == "setup" and setup_name:
            location += f' fn(callback "{setup_name}")'

        error = result.error
        self.logger.info(
            "%s Fail %s %s | \"%s\" %s %s",
            STATUS_SYMBOLS["fail"],
            format_time(result.time),
            result.id.ljust(self.id_width),
            result.description,
            location,
            failure_reason(error),
            exc_info=None if isinstance(error, TestGroupError) else error,
        )

    def run_finished(self, report: RunReport) -> None:
        """Log the run summary."""
        self.logger.info(
            "Done in %dms - %s",
            report.time_taken,
            "All tests passed." if report.all_passed else "Some tests have failed.",
        )
        if report.halted:
            self.logger.info("Run halted after the first failure")
