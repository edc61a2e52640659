"""Report post-processing for CI dashboard consumption."""

from objective_ci.reporting.duplication import (
    filter_duplication_report,
    normalize_report_encoding,
    post_process_duplication_report,
)

__all__ = [
    "filter_duplication_report",
    "normalize_report_encoding",
    "post_process_duplication_report",
]
