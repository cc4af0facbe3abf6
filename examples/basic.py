"""Small demo group.

Run with ``testgroup examples.basic:group`` from the repository root.
"""

from testgroup import GroupConfig, TestContext, TestGroup

group = TestGroup(
    config=GroupConfig(output=True, setup_expectations=True, fail_silently=True)
)


@group.case("ignored-leaf", "Objects match once the differing leaf is ignored")
async def ignored_leaf(c: TestContext) -> None:
    got = {"x": {"y": {"z": "Package"}, "b": False}}
    want = {"x": {"y": {"z": 20}, "b": False}}
    c.expect("thing to be a thing", got, want, ["x.y.z"])
    c.phase("custom phase")


@group.case("failing", "Fails on a boolean mismatch")
async def failing(c: TestContext) -> None:
    c.expect("to work hard", True, False)
