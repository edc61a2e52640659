"""Stream handler abstraction for operator-visible output.

Every command the pipeline runs is echoed, followed by the captured output
of the tool, so that a CI log shows exactly what happened:
- CLI: print to stdout through a Rich console
- Callback: forward events to an embedding application
- Null: discard everything (tests)
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TextIO

from rich.console import Console


class StreamType(str, Enum):
    """Type of stream output."""

    COMMAND = "command"
    OUTPUT = "output"
    WARNING = "warning"


@dataclass
class StreamEvent:
    """A single piece of operator-visible output."""

    tool_name: str
    stream_type: StreamType
    content: str


class StreamHandler(ABC):
    """Abstract base class for stream handlers."""

    @abstractmethod
    def emit(self, event: StreamEvent) -> None:
        """Emit a stream event.

        Args:
            event: The stream event to emit.
        """

    def command(self, tool_name: str, command_line: str) -> None:
        """Announce a command line before it runs."""
        self.emit(StreamEvent(tool_name, StreamType.COMMAND, command_line))

    def output(self, tool_name: str, content: str) -> None:
        """Echo the captured output of a finished command."""
        self.emit(StreamEvent(tool_name, StreamType.OUTPUT, content))

    def warning(self, tool_name: str, message: str) -> None:
        """Show an advisory, non-fatal warning."""
        self.emit(StreamEvent(tool_name, StreamType.WARNING, message))


class NullStreamHandler(StreamHandler):
    """No-op handler, for tests and quiet embedding."""

    def emit(self, event: StreamEvent) -> None:
        """No-op emit."""
        pass


class CLIStreamHandler(StreamHandler):
    """Writes commands and tool output to the console.

    Tool output is printed verbatim (no Rich markup or highlighting) so that
    brackets in compiler output are not mistaken for style tags.
    """

    def __init__(self, output: Optional[TextIO] = None, color: Optional[bool] = None):
        """Initialize CLIStreamHandler.

        Args:
            output: Output stream to write to (default: stdout).
            color: Force colour on or off; ``None`` lets Rich detect the terminal.
        """
        self._console = Console(
            file=output if output is not None else sys.stdout,
            force_terminal=color,
            no_color=None if color is None else not color,
            color_system="standard" if color else "auto",
            highlight=False,
            soft_wrap=True,
        )

    def emit(self, event: StreamEvent) -> None:
        """Emit a stream event to the console.

        Args:
            event: The stream event to emit.
        """
        if event.stream_type == StreamType.WARNING:
            self._console.print(event.content, style="red", markup=False, emoji=False)
        elif event.stream_type == StreamType.COMMAND:
            self._console.print(event.content, markup=False, emoji=False)
        else:
            # Tool output already ends with its own newline
            self._console.out(event.content, end="" if event.content.endswith("\n") else "\n")


class CallbackStreamHandler(StreamHandler):
    """Handler that forwards every event to a callback."""

    def __init__(self, on_event: Callable[[StreamEvent], None]):
        self._on_event = on_event

    def emit(self, event: StreamEvent) -> None:
        """Forward the event to the callback."""
        self._on_event(event)
