"""Post-processing of the PMD CPD duplication report.

pmd-cpd-objc has no way to exclude files from its results, and Jenkins' DRY
plugin rejects reports that are not UTF-8. Two passes fix both, in order:

1. :func:`filter_duplication_report` drops every ``<duplication>`` whose
   files all live under an excluded directory.
2. :func:`normalize_report_encoding` rewrites the file as UTF-8.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from lxml import etree

from objective_ci.core.errors import ReportParseError
from objective_ci.core.exclusions import ExclusionSet
from objective_ci.core.logging import get_logger

LOGGER = get_logger(__name__)

__all__ = [
    "filter_duplication_report",
    "normalize_report_encoding",
    "post_process_duplication_report",
]


def _parser(**kwargs) -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, **kwargs)


def _parse_report(report_path: Path) -> etree._ElementTree:
    # The declared encoding is often wrong (US-ASCII, x-mac-roman); the bytes are UTF-8
    raw = report_path.read_bytes()
    try:
        root = etree.fromstring(raw, _parser(encoding="utf-8"))
    except etree.XMLSyntaxError as e:
        raise ReportParseError(report_path, str(e)) from e
    if root is None:
        raise ReportParseError(report_path, "document is empty")
    return root.getroottree()


def _write_report(report_path: Path, tree: etree._ElementTree) -> None:
    report_path.write_bytes(etree.tostring(tree, encoding="UTF-8", xml_declaration=True))


def filter_duplication_report(
    report_path: Union[str, Path],
    exclusions: ExclusionSet,
    project_root: Path,
) -> int:
    """Remove duplication entries that only reference excluded files.

    An entry survives, untouched, as soon as one of its files is outside the
    excluded directories. Running the pass again removes nothing more.

    Args:
        report_path: Path of the CPD XML report, rewritten in place.
        exclusions: Exclusion set, resolved against ``project_root``.
        project_root: Root the report's absolute file paths start with.

    Returns:
        Number of removed entries.

    Raises:
        ReportParseError: If the report is not well-formed XML.
    """
    report_path = Path(report_path)
    tree = _parse_report(report_path)
    pattern = exclusions.pattern(project_root)

    removed = 0
    if pattern is not None:
        for duplication in tree.xpath("//duplication"):
            parent = duplication.getparent()
            if parent is None:
                continue
            paths = [node.get("path", "") for node in duplication.xpath("file")]
            if all(pattern.search(path) for path in paths):
                parent.remove(duplication)
                removed += 1

    _write_report(report_path, tree)
    LOGGER.info(f"Removed {removed} excluded duplication entries from {report_path}")
    return removed


def normalize_report_encoding(report_path: Union[str, Path]) -> None:
    """Rewrite the report as UTF-8, whatever encoding the tool declared.

    The raw bytes are read as UTF-8 regardless of the XML declaration.

    Raises:
        ReportParseError: If the bytes are not well-formed UTF-8 XML.
    """
    report_path = Path(report_path)
    _write_report(report_path, _parse_report(report_path))
    LOGGER.debug(f"Rewrote {report_path} as UTF-8")


def post_process_duplication_report(
    report_path: Union[str, Path],
    exclusions: ExclusionSet,
    project_root: Path,
) -> int:
    """Run the filter pass, then the encoding pass.

    Returns:
        Number of entries removed by the filter pass.
    """
    removed = filter_duplication_report(report_path, exclusions, project_root)
    normalize_report_encoding(report_path)
    return removed
