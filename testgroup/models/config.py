"""Construction options for a test group."""

from pydantic import Field

from testgroup.models.base import Model


class GroupConfig(Model):
    """Options controlling output, logging of setup assertions and halting."""

    output: bool = Field(
        default=False,
        description=(
            "Log a line per test and a run summary at INFO level on the "
            "'testgroup.output' logger; nothing is shown unless logging is "
            "configured to emit INFO records"
        ),
    )
    setup_expectations: bool = Field(
        default=False, description="Record expectations made inside setup()"
    )
    fail_silently: bool = Field(
        default=False,
        description="Keep running remaining tests after a failure instead of halting",
    )
