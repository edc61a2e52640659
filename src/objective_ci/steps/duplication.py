"""Duplicate code detection step: PMD CPD for Objective-C."""

from __future__ import annotations

from objective_ci.config.models import DEFAULT_MINIMUM_TOKENS, CiConfig
from objective_ci.core.logging import get_logger
from objective_ci.reporting.duplication import post_process_duplication_report
from objective_ci.steps.base import DUPLICATION_DESTINATION, PipelineStep, StepContext

LOGGER = get_logger(__name__)

# Turns /some/code/./path.m into /some/code/path.m; Jenkins' Violations
# plugin cannot resolve paths with a /./ segment
PATH_NORMALIZER = r"LC_CTYPE=C LANG=C sed 's/\/\.\//\//'"


class DuplicationStep(PipelineStep):
    """Detects copy-pasted code and cleans up the resulting report."""

    @property
    def name(self) -> str:
        return "duplicate_code_detection"

    @property
    def description(self) -> str:
        return f"Detect duplicated code with PMD CPD, writing {DUPLICATION_DESTINATION}"

    def minimum_tokens(self, config: CiConfig) -> int:
        """Token threshold for a duplicate, 100 unless configured."""
        if config.minimum_tokens is None:
            return DEFAULT_MINIMUM_TOKENS
        return config.minimum_tokens

    def run(self, config: CiConfig, context: StepContext) -> None:
        context.invoker.invoke(
            "pmd-cpd-objc",
            f"--minimum-tokens {self.minimum_tokens(config)}",
            f"| {PATH_NORMALIZER} > {DUPLICATION_DESTINATION}",
            config,
        )
        removed = post_process_duplication_report(
            context.project_root / DUPLICATION_DESTINATION,
            context.exclusions,
            context.project_root,
        )
        LOGGER.info(f"Duplication report ready, {removed} excluded entries removed")
