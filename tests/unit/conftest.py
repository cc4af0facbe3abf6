"""Shared fixtures for unit tests."""

from collections.abc import Callable

import pytest

from testgroup.models.config import GroupConfig
from testgroup.orchestrator import TestGroup


class FakeClock:
    """Clock that advances by a fixed step each time it is read."""

    def __init__(self, step: float = 0.001) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Create a clock advancing one millisecond per read."""
    return FakeClock()


@pytest.fixture
def make_group(clock: FakeClock) -> Callable[..., TestGroup]:
    """Build test groups with the fake clock and the given options."""

    def factory(**options: bool) -> TestGroup:
        return TestGroup(config=GroupConfig(**options), clock=clock)

    return factory


@pytest.fixture
def group(make_group: Callable[..., TestGroup]) -> TestGroup:
    """Create a group that halts on the first failure."""
    return make_group()


@pytest.fixture
def silent_group(make_group: Callable[..., TestGroup]) -> TestGroup:
    """Create a group that keeps running after failures."""
    return make_group(fail_silently=True)
