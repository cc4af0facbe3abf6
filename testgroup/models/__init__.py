"""Data structures shared by the orchestrator and its collaborators."""

from testgroup.models.config import GroupConfig
from testgroup.models.definition import TestBody, TestDefinition
from testgroup.models.result import ExpectationRecord, RunReport, TestResult

__all__ = [
    "ExpectationRecord",
    "GroupConfig",
    "RunReport",
    "TestBody",
    "TestDefinition",
    "TestResult",
]
