"""Environment probes: dependency manifest detection and Xcode version."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable, Optional

from objective_ci.core.logging import get_logger

LOGGER = get_logger(__name__)

# Both spellings are checked; case-sensitive filesystems treat them as different files
DEPENDENCY_MANIFESTS = ("Podfile", "podfile")

XCODE_VERSION_COMMAND = ["xcodebuild", "-version"]
XCODE_VERSION_PATTERN = re.compile(r"^Xcode ([0-9]+\.[0-9]+)", re.MULTILINE)


def dependency_manifest_present(project_root: Path) -> bool:
    """Check whether the project uses CocoaPods.

    Args:
        project_root: Project root directory.

    Returns:
        True if a Podfile exists in the project root.
    """
    return any((project_root / name).exists() for name in DEPENDENCY_MANIFESTS)


def parse_tool_version(output: str) -> float:
    """Extract the ``major.minor`` Xcode version from ``xcodebuild -version`` output.

    Returns:
        Version as a float, or 0.0 if the output has no version line.
    """
    match = XCODE_VERSION_PATTERN.search(output)
    return float(match.group(1)) if match else 0.0


def tool_version(
    project_root: Optional[Path] = None,
    run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> float:
    """Get the installed Xcode version.

    Never raises: a missing or failing ``xcodebuild`` yields 0.0.

    Args:
        project_root: Working directory for the probe.
        run: Process runner, ``subprocess.run`` compatible.

    Returns:
        Version as a float, 0.0 if it cannot be determined.
    """
    try:
        result = run(
            XCODE_VERSION_COMMAND,
            cwd=project_root,
            capture_output=True,
            text=True,
        )
    except (subprocess.SubprocessError, FileNotFoundError, OSError) as e:
        LOGGER.debug(f"Could not run xcodebuild -version: {e}")
        return 0.0
    version = parse_tool_version(result.stdout or "")
    LOGGER.debug(f"Detected Xcode version {version}")
    return version
