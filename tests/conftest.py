"""Shared fixtures: a recording stand-in for ``subprocess.run``, step contexts and logger cleanup."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from objective_ci.core.environment import tool_version
from objective_ci.core.exclusions import ExclusionSet
from objective_ci.core.invoker import CommandInvoker
from objective_ci.core.logging import ROOT_LOGGER_NAME
from objective_ci.core.streaming import CallbackStreamHandler, StreamEvent
from objective_ci.steps import StepContext

XCODE_VERSION_OUTPUT = "Xcode 15.2\nBuild version 15C500b\n"


class RecordingRunner:
    """Records every command instead of running it.

    Shell commands (strings) get ``output`` as their stdout; the
    ``xcodebuild -version`` probe (a list) gets ``version_output``.
    ``on_command`` is called with each shell command line, so a test can
    simulate files a tool would write.
    """

    def __init__(
        self,
        output: str = "",
        version_output: str = XCODE_VERSION_OUTPUT,
        on_command: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.output = output
        self.version_output = version_output
        self.on_command = on_command
        self.calls: List[Tuple[Any, Dict[str, Any]]] = []

    def __call__(self, cmd: Any, **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append((cmd, kwargs))
        if isinstance(cmd, list):
            return subprocess.CompletedProcess(args=cmd, returncode=0, stdout=self.version_output, stderr="")
        if self.on_command is not None:
            self.on_command(cmd)
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout=self.output, stderr=None)

    @property
    def commands(self) -> List[str]:
        """Shell command lines, in the order they ran."""
        return [cmd for cmd, _ in self.calls if isinstance(cmd, str)]

    @property
    def probes(self) -> List[List[str]]:
        """Argument-list invocations (version probes)."""
        return [cmd for cmd, _ in self.calls if isinstance(cmd, list)]


@pytest.fixture
def runner() -> RecordingRunner:
    """A runner that records commands and returns empty output."""
    return RecordingRunner()


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    """Factory for runners with custom output or side effects."""
    return RecordingRunner


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging between tests so caplog sees our records."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def events() -> List[StreamEvent]:
    """Stream events recorded by contexts built with ``make_context``."""
    return []


@pytest.fixture
def make_context(events) -> Callable[..., StepContext]:
    """Build a StepContext around a recording runner."""

    def _make(
        runner: RecordingRunner,
        project_root: Path = Path("/repo"),
        exclusions: Optional[ExclusionSet] = None,
    ) -> StepContext:
        stream = CallbackStreamHandler(events.append)
        return StepContext(
            project_root=project_root,
            invoker=CommandInvoker(project_root, stream_handler=stream, run=runner),
            exclusions=exclusions if exclusions is not None else ExclusionSet(entries=["vendor", "Pods"]),
            stream_handler=stream,
            tool_version=lambda: tool_version(project_root, run=runner),
        )

    return _make
