"""Test suite step: xcodebuild test piped into ocunit2junit."""

from __future__ import annotations

from objective_ci.config.models import CiConfig
from objective_ci.core.logging import get_logger
from objective_ci.steps.base import PipelineStep, StepContext, XcodeTarget

LOGGER = get_logger(__name__)

TEST_SUITE_KEYS = ("scheme", "workspace", "project")

# Tests will likely not run on older Xcode releases
MINIMUM_XCODE_VERSION = 5.0


class TestSuiteStep(PipelineStep):
    """Runs the scheme's tests and converts the output to JUnit XML."""

    # Keep pytest from collecting this class
    __test__ = False

    @property
    def name(self) -> str:
        return "test_suite"

    @property
    def description(self) -> str:
        return "Run tests on the simulator, writing JUnit reports"

    def run(self, config: CiConfig, context: StepContext) -> None:
        target = XcodeTarget.from_config(config)

        if not config.binary_options("xcodebuild").overridden:
            version = context.tool_version()
            if version < MINIMUM_XCODE_VERSION:
                message = (
                    f"WARNING: Xcode version {version} is less than "
                    f"{MINIMUM_XCODE_VERSION}, and tests will likely not run"
                )
                LOGGER.warning(message)
                context.stream_handler.warning("xcodebuild", message)

        xcodebuild_options = target.arguments(TEST_SUITE_KEYS) + (
            f' -destination name="{config.destination}"'
            f" -destination-timeout={config.destination_timeout}"
            " ONLY_ACTIVE_ARCH=NO test"
        )
        context.invoker.invoke(
            "xcodebuild",
            xcodebuild_options,
            ">&1 | bundle exec ocunit2junit",
            config,
        )
