"""CLI entry point for running a test group."""

import argparse
import asyncio
import importlib
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from testgroup.models.config import GroupConfig
from testgroup.models.result import RunReport
from testgroup.orchestrator import TestGroup

STATUS_SYMBOLS = {
    True: "✓",
    False: "✗",
}


class TargetError(Exception):
    """Raised when the CLI target does not name a TestGroup."""


def load_group(target: str) -> TestGroup:
    """Import a TestGroup from a "module:attribute" reference."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise TargetError(f"Target must look like 'module:attribute', got '{target}'")

    module = importlib.import_module(module_name)
    try:
        group = getattr(module, attribute)
    except AttributeError as e:
        raise TargetError(f"Module '{module_name}' has no attribute '{attribute}'") from e

    if not isinstance(group, TestGroup):
        raise TargetError(f"'{target}' is a {type(group).__name__}, not a TestGroup")
    return group


def apply_config(group: TestGroup, config_json: str) -> None:
    """Merge a JSON object of options over the group's configuration."""
    overrides = json.loads(config_json)
    group.config = GroupConfig.model_validate(
        {**group.config.model_dump(), **overrides}
    )


def parse_ids(ids: str) -> Sequence[str] | None:
    """Parse comma-separated test ids; None selects every test."""
    if not ids.strip():
        return None
    return tuple(i.strip() for i in ids.split(",") if i.strip())


def log_results_summary(log: logging.Logger, report: RunReport) -> None:
    """Log a formatted summary of a run."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for test in report.tests:
        log.info(
            "%s %s: %s (%sms, %d expectation(s) met)",
            STATUS_SYMBOLS[test.passed],
            test.id,
            "passed" if test.passed else "failed",
            test.time,
            test.expectations_met,
        )
        if test.error is not None:
            log.info("  Error: %s", test.error)

    if report.halted:
        log.info("Run halted on the first failure")


def format_output(report: RunReport) -> dict[str, Any]:
    """Format a run report for JSON output."""
    output = report.to_dict()
    output["total"] = len(report.tests)
    output["passed"] = sum(1 for t in report.tests if t.passed)
    output["failed"] = len(report.failed)
    return output


async def run(target: str, ids: Sequence[str] | None, config_json: str = "") -> int:
    """Run the target group and return the exit code."""
    log = logging.getLogger("testgroup")

    log.info("Loading test group: %s", target)
    group = load_group(target)
    if config_json:
        apply_config(group, config_json)

    report = await group.run(ids)

    log_results_summary(log, report)
    print(json.dumps(format_output(report), indent=2, default=repr))

    return 0 if report.all_passed else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run a group of async tests")
    parser.add_argument(
        "target",
        help="Test group to run, as 'module:attribute'",
    )
    parser.add_argument(
        "--ids",
        default="",
        help="Comma-separated test ids to run, in order (default: all)",
    )
    parser.add_argument(
        "--config",
        default="",
        help="JSON object of group options (output, setup_expectations, fail_silently)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    # Targets are resolved relative to the working directory
    if "" not in sys.path:
        sys.path.insert(0, "")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(args.target, parse_ids(args.ids), args.config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
