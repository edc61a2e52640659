"""Exclusion set shared by tool invocations and report filtering.

The same :class:`ExclusionSet` instance produces the ``-e`` flags passed to
the lint tools, the ``grep -v`` filter of the line counter, and the pattern
used to strip entries from the duplication report, so analysis-time and
report-time exclusions cannot drift apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Pattern

from objective_ci.core.environment import dependency_manifest_present
from objective_ci.core.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_EXCLUSIONS = ("vendor",)

# Directory CocoaPods installs dependencies into
DEPENDENCY_EXCLUSION = "Pods"


@dataclass
class ExclusionSet:
    """Ordered set of path prefixes, relative to the project root."""

    entries: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUSIONS))
    install_dependencies: bool = False

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self.entries

    def add(self, entry: str) -> None:
        """Append an entry unless it is already present."""
        if entry not in self.entries:
            self.entries.append(entry)

    def extend(self, entries: Iterable[str]) -> None:
        """Append several entries, keeping order and skipping duplicates."""
        for entry in entries:
            self.add(entry)

    def option_list(self, option_flag: str) -> str:
        """Render the set as repeated command-line flags.

        ``option_list("-e")`` gives ``-e "vendor" -e "Pods"``.

        Args:
            option_flag: Flag placed before each quoted entry.

        Returns:
            Flag string, or an empty string when there are no entries.
        """
        return " ".join(f'{option_flag} "{entry}"' for entry in self.entries)

    def absolute_prefixes(self, project_root: Path) -> List[str]:
        """Return each entry as an absolute directory prefix with a trailing slash."""
        root = str(project_root).rstrip("/")
        return [f"{root}/{entry.strip('/')}/" for entry in self.entries]

    def pattern(self, project_root: Path) -> Optional[Pattern[str]]:
        """Compile a single pattern matching any path under an excluded prefix.

        The pattern is searched, not anchored, so it also matches paths that
        carry the prefix after some leading text.

        Returns:
            Compiled pattern, or ``None`` when the set is empty.
        """
        prefixes = self.absolute_prefixes(project_root)
        if not prefixes:
            return None
        return re.compile("(" + "|".join(re.escape(p) for p in prefixes) + ")")


def resolve_exclusions(project_root: Path) -> ExclusionSet:
    """Compute the exclusion set for a project.

    Starts from ``vendor``. A Podfile in the project root adds ``Pods`` and
    flags that ``pod install`` has to run before any pipeline step.

    Args:
        project_root: Project root directory.

    Returns:
        ExclusionSet for the project.
    """
    exclusions = ExclusionSet()
    if dependency_manifest_present(project_root):
        LOGGER.info(f"Podfile found, excluding {DEPENDENCY_EXCLUSION} and enabling pod install")
        exclusions.add(DEPENDENCY_EXCLUSION)
        exclusions.install_dependencies = True
    LOGGER.debug(f"Exclusions: {exclusions.entries}")
    return exclusions
