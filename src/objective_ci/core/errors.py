"""Exception types raised by objective-ci."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple, Union

__all__ = ["ObjectiveCiError", "ConfigurationError", "ReportParseError"]


class ObjectiveCiError(Exception):
    """Base class for all objective-ci errors."""


class ConfigurationError(ObjectiveCiError):
    """Required options are missing or the configuration cannot be read.

    Raised before any external process is started.

    Attributes:
        keys: Option names the error is about (may be empty for file errors).
    """

    def __init__(self, message: str, keys: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.keys: Tuple[str, ...] = tuple(keys)


class ReportParseError(ObjectiveCiError):
    """A report written by an external tool is not well-formed XML."""

    def __init__(self, path: Union[str, Path], message: str) -> None:
        super().__init__(f"Failed to parse report {path}: {message}")
        self.path = Path(path)
