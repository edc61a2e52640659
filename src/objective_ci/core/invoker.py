"""Command construction and execution for external tools.

Every external tool the pipeline drives goes through :class:`CommandInvoker`:
it applies the per-binary extension options, prefixes the dependency runner,
runs the shell command in the project root and echoes what happened.

The exit status of a command is not inspected. A failing
build, lint or test run shows up in the echoed output only, and ``build``
carries on with the next step.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from objective_ci.config.models import BinaryOptions, CiConfig
from objective_ci.core.logging import get_logger
from objective_ci.core.streaming import NullStreamHandler, StreamHandler

LOGGER = get_logger(__name__)

# The only tool that is not run through the dependency runner
PRIMARY_BUILD_TOOL = "xcodebuild"

# Gems (oclint wrappers, ocunit2junit, pmd-cpd-objc, cocoapods) come from the Gemfile
DEPENDENCY_RUNNER = "bundle exec"


def resolve_options(options: str, binary_options: BinaryOptions) -> str:
    """Apply a binary's extension record to the options built by the pipeline.

    An override replaces ``options`` entirely; otherwise extra options are
    appended after a single space.

    Args:
        options: Option string built by the caller.
        binary_options: Extension record for the binary.

    Returns:
        Final option string.
    """
    if binary_options.overridden:
        return binary_options.override_options or ""
    if binary_options.extra_options:
        if not options:
            return binary_options.extra_options
        return f"{options} {binary_options.extra_options}"
    return options


@dataclass(frozen=True)
class CommandDescriptor:
    """One command line, built fresh for each invocation."""

    binary: str
    options: str
    tail: str = ""
    binary_options: BinaryOptions = field(default_factory=BinaryOptions)
    prefix: str = ""

    @property
    def resolved_options(self) -> str:
        """Options after applying the override/append rule."""
        return resolve_options(self.options, self.binary_options)

    @property
    def command_line(self) -> str:
        """Prefix, binary, options and tail joined with single spaces."""
        parts = (self.prefix, self.binary, self.resolved_options, self.tail)
        return " ".join(part.strip() for part in parts if part and part.strip())


class CommandInvoker:
    """Builds and runs shell commands for the pipeline steps."""

    def __init__(
        self,
        project_root: Path,
        stream_handler: Optional[StreamHandler] = None,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        primary_binary: str = PRIMARY_BUILD_TOOL,
        dependency_runner: str = DEPENDENCY_RUNNER,
    ) -> None:
        """Initialize the invoker.

        Args:
            project_root: Working directory for every command.
            stream_handler: Receives echoed commands and output.
            run: Process runner, ``subprocess.run`` compatible.
            primary_binary: Binary that is run without the dependency runner.
            dependency_runner: Prefix for every other binary.
        """
        self._project_root = project_root
        self._stream = stream_handler or NullStreamHandler()
        self._run = run
        self._primary_binary = primary_binary
        self._dependency_runner = dependency_runner

    @property
    def project_root(self) -> Path:
        """Working directory for every command."""
        return self._project_root

    def describe(
        self,
        binary: str,
        options: str,
        tail: str = "",
        config: Optional[CiConfig] = None,
    ) -> CommandDescriptor:
        """Build the command descriptor without running it.

        Args:
            binary: Tool to run.
            options: Option string built by the caller.
            tail: Redirection or pipe appended after the options.
            config: Configuration holding the per-binary extension records.

        Returns:
            CommandDescriptor for the invocation.
        """
        config = config or CiConfig()
        prefix = "" if binary == self._primary_binary else self._dependency_runner
        return CommandDescriptor(
            binary=binary,
            options=options,
            tail=tail,
            binary_options=config.binary_options(binary),
            prefix=prefix,
        )

    def invoke(
        self,
        binary: str,
        options: str,
        tail: str = "",
        config: Optional[CiConfig] = None,
    ) -> str:
        """Run a tool and echo the command and its output.

        Blocks until the command finishes. stderr is merged into stdout.

        Args:
            binary: Tool to run.
            options: Option string built by the caller.
            tail: Redirection or pipe appended after the options.
            config: Configuration holding the per-binary extension records.

        Returns:
            Combined output of the command.
        """
        command_line = self.describe(binary, options, tail, config).command_line
        LOGGER.debug(f"Running: {command_line}")
        self._stream.command(binary, command_line)

        result = self._run(
            command_line,
            shell=True,
            cwd=self._project_root,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        output = result.stdout or ""
        self._stream.output(binary, output)
        return output
