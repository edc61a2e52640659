"""List steps command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from objective_ci.config.models import CiConfig

from objective_ci.cli.commands import Command
from objective_ci.cli.exit_codes import EXIT_SUCCESS
from objective_ci.steps import get_step, list_steps


class ListStepsCommand(Command):
    """Lists the pipeline steps in build order."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "list-steps"

    def execute(self, args: Namespace, config: "CiConfig | None" = None) -> int:
        """Print every step with its description.

        Args:
            args: Parsed command-line arguments (unused).
            config: Optional configuration (unused).

        Returns:
            Exit code (always 0).
        """
        print("Pipeline steps (build order):")
        print()
        for name in list_steps():
            step = get_step(name)
            if step is None:
                continue
            print(f"  {name.replace('_', '-')}")
            print(f"    {step.description}")
        return EXIT_SUCCESS
