"""Lint step: xcodebuild, then OCLint through its compilation database."""

from __future__ import annotations

from objective_ci.config.models import DEFAULT_CONFIGURATION, CiConfig
from objective_ci.core.exclusions import DEPENDENCY_EXCLUSION
from objective_ci.core.logging import get_logger
from objective_ci.steps.base import (
    BUILD_LOG_DESTINATION,
    LINT_DESTINATION,
    PipelineStep,
    StepContext,
    XcodeTarget,
)

LOGGER = get_logger(__name__)

LINT_KEYS = ("scheme", "workspace", "project", "configuration")


class LintStep(PipelineStep):
    """Builds the project and writes OCLint results as a PMD report."""

    @property
    def name(self) -> str:
        return "lint"

    @property
    def description(self) -> str:
        return f"Build and run OCLint, writing {LINT_DESTINATION}"

    def run(self, config: CiConfig, context: StepContext) -> None:
        target = XcodeTarget.from_config(config, default_configuration=DEFAULT_CONFIGURATION)

        xcodebuild_options = target.arguments(LINT_KEYS) + " ONLY_ACTIVE_ARCH=NO clean build"
        context.invoker.invoke(
            "xcodebuild",
            xcodebuild_options,
            f"| tee {BUILD_LOG_DESTINATION}",
            config,
        )

        # oclint-xcodebuild fails unless Pods is excluded by absolute path
        pods_dir = context.project_root / DEPENDENCY_EXCLUSION
        context.invoker.invoke("oclint-xcodebuild", f'-e "{pods_dir}"', "", config)

        ocjcd_options = (
            f"{context.exclusions.option_list('-e')} -- "
            f"-report-type=pmd -o={LINT_DESTINATION}"
        )
        context.invoker.invoke("oclint-json-compilation-database", ocjcd_options.strip(), "", config)
        LOGGER.info(f"Lint report written to {LINT_DESTINATION}")
