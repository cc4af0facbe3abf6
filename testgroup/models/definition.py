"""Registered test case definitions."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from testgroup.context import TestContext

type TestBody = Callable[["TestContext"], Awaitable[Any]]


@dataclass(frozen=True, kw_only=True)
class TestDefinition:
    """A named asynchronous test case."""

    __test__ = False

    id: str
    description: str
    body: TestBody = field(repr=False)
