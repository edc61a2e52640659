"""Base class for pipeline steps.

All pipeline steps inherit from PipelineStep and implement the run() method.
A step validates its configuration, builds the option strings for its tools
and hands them to the command invoker, in that order, so a misconfigured
step never starts a process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from objective_ci.config.models import CiConfig
from objective_ci.config.options import merge_options, require_all, require_at_least_one_of
from objective_ci.core.exclusions import ExclusionSet
from objective_ci.core.invoker import CommandInvoker
from objective_ci.core.streaming import StreamHandler

__all__ = ["PipelineStep", "StepContext", "XcodeTarget"]

# Fixed report locations, relative to the project root
LINT_DESTINATION = "lint.xml"
DUPLICATION_DESTINATION = "duplication.xml"
LINE_COUNT_DESTINATION = "line-count.sc"
BUILD_LOG_DESTINATION = "xcodebuild.log"


@dataclass
class StepContext:
    """Shared state handed to every step of a run."""

    project_root: Path
    invoker: CommandInvoker
    exclusions: ExclusionSet
    stream_handler: StreamHandler
    tool_version: Callable[[], float]


@dataclass(frozen=True)
class XcodeTarget:
    """Validated xcodebuild target selection.

    Constructing one through :meth:`from_config` checks that a workspace or
    a project is given and that a scheme is given.
    """

    options: Dict[str, str]

    @classmethod
    def from_config(
        cls,
        config: CiConfig,
        default_configuration: Optional[str] = None,
    ) -> "XcodeTarget":
        """Validate the config and capture its xcodebuild options.

        Args:
            config: Step configuration.
            default_configuration: Build configuration used when none is set.

        Returns:
            XcodeTarget instance.

        Raises:
            ConfigurationError: If workspace/project or scheme is missing.
        """
        options = config.as_mapping()
        require_at_least_one_of(options, "workspace", "project")
        require_all(options, "scheme")
        if default_configuration is not None:
            options.setdefault("configuration", default_configuration)
        return cls(options=options)

    def arguments(self, recognized_keys: Iterable[str]) -> str:
        """Render the recognized options as ``-key value`` flags."""
        return merge_options(self.options, recognized_keys)


class PipelineStep(ABC):
    """Abstract base class for pipeline steps."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique step identifier (e.g., 'lint', 'test_suite').

        Returns:
            Step name string.
        """

    @property
    def description(self) -> str:
        """One-line description for help output."""
        return self.name.replace("_", " ")

    @abstractmethod
    def run(self, config: CiConfig, context: StepContext) -> None:
        """Run the step.

        Args:
            config: Step configuration.
            context: Shared run state.

        Raises:
            ConfigurationError: If required options are missing.
        """
