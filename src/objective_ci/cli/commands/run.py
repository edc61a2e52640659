"""Run command implementation: ``build`` or a single pipeline step."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Callable, Optional

from objective_ci.cli.commands import Command
from objective_ci.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_REPORT_ERROR,
    EXIT_SUCCESS,
)
from objective_ci.config.models import CiConfig
from objective_ci.core.errors import ConfigurationError, ReportParseError
from objective_ci.core.logging import get_logger
from objective_ci.core.streaming import CLIStreamHandler, StreamHandler
from objective_ci.pipeline import PipelineExecutor

LOGGER = get_logger(__name__)

BUILD = "build"


class RunCommand(Command):
    """Runs the whole pipeline or one of its steps."""

    def __init__(
        self,
        executor_factory: Callable[..., PipelineExecutor] = PipelineExecutor,
        stream_handler: Optional[StreamHandler] = None,
    ):
        """Initialize RunCommand.

        Args:
            executor_factory: Builds the executor, ``PipelineExecutor`` signature.
            stream_handler: Output handler; a stdout console by default.
        """
        self._executor_factory = executor_factory
        self._stream_handler = stream_handler

    @property
    def name(self) -> str:
        """Command identifier."""
        return "run"

    def execute(self, args: Namespace, config: "CiConfig | None" = None) -> int:
        """Execute the requested step.

        Args:
            args: Parsed command-line arguments; ``args.step`` names the step.
            config: Loaded configuration.

        Returns:
            Exit code.
        """
        config = config or CiConfig()
        project_root = Path(args.path).resolve()
        stream_handler = self._stream_handler or CLIStreamHandler()

        try:
            executor = self._executor_factory(
                project_root,
                stream_handler=stream_handler,
                extra_exclusions=config.exclude,
            )
            if args.step == BUILD:
                executor.build(config)
            else:
                executor.run_step(args.step, config)
        except ConfigurationError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except ReportParseError as e:
            LOGGER.error(str(e))
            return EXIT_REPORT_ERROR

        return EXIT_SUCCESS
