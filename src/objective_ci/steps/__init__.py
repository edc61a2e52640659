"""Pipeline step registry.

Steps are looked up by name; ``BUILD_ORDER`` is the sequence ``build`` runs.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Type

from objective_ci.steps.base import (
    BUILD_LOG_DESTINATION,
    DUPLICATION_DESTINATION,
    LINE_COUNT_DESTINATION,
    LINT_DESTINATION,
    PipelineStep,
    StepContext,
    XcodeTarget,
)
from objective_ci.steps.duplication import DuplicationStep
from objective_ci.steps.line_count import LineCountStep
from objective_ci.steps.lint import LintStep
from objective_ci.steps.test_suite import TestSuiteStep

_STEPS: Dict[str, Type[PipelineStep]] = {
    "lint": LintStep,
    "lines_of_code": LineCountStep,
    "test_suite": TestSuiteStep,
    "duplicate_code_detection": DuplicationStep,
}

BUILD_ORDER = ("lint", "lines_of_code", "test_suite", "duplicate_code_detection")


def get_step(name: str) -> Optional[PipelineStep]:
    """Get a step instance by name.

    Args:
        name: Step name; dashes are accepted in place of underscores.

    Returns:
        Step instance, or None if no step has that name.
    """
    step_class = _STEPS.get(name.replace("-", "_"))
    return step_class() if step_class else None


def list_steps() -> List[str]:
    """Names of all steps, in build order."""
    return list(BUILD_ORDER)


__all__ = [
    "BUILD_LOG_DESTINATION",
    "BUILD_ORDER",
    "DUPLICATION_DESTINATION",
    "LINE_COUNT_DESTINATION",
    "LINT_DESTINATION",
    "DuplicationStep",
    "LineCountStep",
    "LintStep",
    "PipelineStep",
    "StepContext",
    "TestSuiteStep",
    "XcodeTarget",
    "get_step",
    "list_steps",
]
