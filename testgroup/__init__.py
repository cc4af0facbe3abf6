"""Register asynchronous test cases and run them with structured reports."""

from testgroup.context import CleanupContext, SetupContext, TestContext
from testgroup.equality import UNDEFINED, matches, type_of
from testgroup.errors import (
    AssertionFailure,
    DuplicateIdError,
    ExplicitFailure,
    InvalidIdError,
    RunInProgressError,
    TestGroupError,
    UnknownIdError,
)
from testgroup.models import (
    ExpectationRecord,
    GroupConfig,
    RunReport,
    TestDefinition,
    TestResult,
)
from testgroup.orchestrator import TestGroup

__all__ = [
    "UNDEFINED",
    "AssertionFailure",
    "CleanupContext",
    "DuplicateIdError",
    "ExpectationRecord",
    "ExplicitFailure",
    "GroupConfig",
    "InvalidIdError",
    "RunInProgressError",
    "RunReport",
    "SetupContext",
    "TestContext",
    "TestDefinition",
    "TestGroup",
    "TestGroupError",
    "TestResult",
    "UnknownIdError",
    "matches",
    "type_of",
]
