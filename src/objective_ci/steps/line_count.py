"""Line count step: SLOCCount over the whole tree."""

from __future__ import annotations

from objective_ci.config.models import CiConfig
from objective_ci.steps.base import LINE_COUNT_DESTINATION, PipelineStep, StepContext

SLOCCOUNT_OPTIONS = "--duplicates --wide --details ."


class LineCountStep(PipelineStep):
    """Counts source lines, dropping lines for excluded directories."""

    @property
    def name(self) -> str:
        return "lines_of_code"

    @property
    def description(self) -> str:
        return f"Count source lines with SLOCCount, writing {LINE_COUNT_DESTINATION}"

    def run(self, config: CiConfig, context: StepContext) -> None:
        exclusion_flags = context.exclusions.option_list("-e")
        if exclusion_flags:
            tail = f"| grep -v {exclusion_flags} > {LINE_COUNT_DESTINATION}"
        else:
            tail = f"> {LINE_COUNT_DESTINATION}"
        context.invoker.invoke("sloccount", SLOCCOUNT_OPTIONS, tail, config)
