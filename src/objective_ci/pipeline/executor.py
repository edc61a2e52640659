"""Pipeline executor for running CI steps in sequence."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from objective_ci.config.models import CiConfig
from objective_ci.core.environment import tool_version
from objective_ci.core.exclusions import ExclusionSet, resolve_exclusions
from objective_ci.core.invoker import CommandInvoker
from objective_ci.core.logging import get_logger
from objective_ci.core.streaming import NullStreamHandler, StreamHandler
from objective_ci.steps import BUILD_ORDER, StepContext, get_step

LOGGER = get_logger(__name__)

ConfigLike = Union[CiConfig, Mapping[str, Any], None]


class PipelineExecutor:
    """Runs the CI steps for one project.

    Steps run one at a time, each blocking on its tools:
    1. lint
    2. lines_of_code
    3. test_suite
    4. duplicate_code_detection

    Each step can also be run on its own. A ``ConfigurationError`` raised by
    a step stops ``build``; tool failures do not.
    """

    def __init__(
        self,
        project_root: Path,
        stream_handler: Optional[StreamHandler] = None,
        exclusions: Optional[ExclusionSet] = None,
        extra_exclusions: Iterable[str] = (),
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        """Initialize the executor.

        Resolves the exclusion set and, for CocoaPods projects, runs
        ``pod install`` before anything else.

        Args:
            project_root: Project root; every tool runs here.
            stream_handler: Receives echoed commands and tool output.
            exclusions: Exclusion set to use instead of resolving one.
            extra_exclusions: Entries appended to the exclusion set.
            run: Process runner, ``subprocess.run`` compatible.
        """
        self._project_root = project_root
        self._stream = stream_handler or NullStreamHandler()
        self._run = run
        self._exclusions = exclusions if exclusions is not None else resolve_exclusions(project_root)
        self._exclusions.extend(extra_exclusions)
        self._invoker = CommandInvoker(project_root, self._stream, run=run)

        if self._exclusions.install_dependencies:
            self.install_dependencies()

    @property
    def exclusions(self) -> ExclusionSet:
        """The exclusion set shared by every step."""
        return self._exclusions

    @property
    def invoker(self) -> CommandInvoker:
        """The command invoker used by every step."""
        return self._invoker

    def install_dependencies(self) -> None:
        """Run ``pod install`` through the dependency runner."""
        LOGGER.info("Installing CocoaPods dependencies...")
        self._invoker.invoke("pod", "install")

    def build(self, config: ConfigLike = None) -> None:
        """Run every step in build order."""
        for step_name in BUILD_ORDER:
            self.run_step(step_name, config)

    def lint(self, config: ConfigLike = None) -> None:
        """Build the project and run OCLint."""
        self.run_step("lint", config)

    def lines_of_code(self, config: ConfigLike = None) -> None:
        """Count source lines with SLOCCount."""
        self.run_step("lines_of_code", config)

    def test_suite(self, config: ConfigLike = None) -> None:
        """Run the test suite."""
        self.run_step("test_suite", config)

    def duplicate_code_detection(self, config: ConfigLike = None) -> None:
        """Detect duplicated code and post-process the report."""
        self.run_step("duplicate_code_detection", config)

    def run_step(self, step_name: str, config: ConfigLike = None) -> None:
        """Run one step by name.

        Args:
            step_name: Step to run.
            config: CiConfig or flat option map.

        Raises:
            ValueError: If no step has that name.
            ConfigurationError: If the step's required options are missing.
        """
        step = get_step(step_name)
        if step is None:
            raise ValueError(f"Unknown pipeline step: {step_name}")

        LOGGER.info(f"Running {step.name} step...")
        step.run(self._coerce_config(config), self._context())
        LOGGER.info(f"{step.name} step finished")

    def _context(self) -> StepContext:
        return StepContext(
            project_root=self._project_root,
            invoker=self._invoker,
            exclusions=self._exclusions,
            stream_handler=self._stream,
            tool_version=lambda: tool_version(self._project_root, run=self._run),
        )

    @staticmethod
    def _coerce_config(config: ConfigLike) -> CiConfig:
        if config is None:
            return CiConfig()
        if isinstance(config, CiConfig):
            return config
        return CiConfig.from_mapping(config)
