"""Argument parser for the objective-ci CLI."""

from __future__ import annotations

import argparse
from pathlib import Path

STEP_COMMANDS = {
    "build": "Run lint, lines-of-code, test-suite and duplication in order.",
    "lint": "Build with xcodebuild and run OCLint.",
    "lines-of-code": "Count source lines with SLOCCount.",
    "test-suite": "Run the tests and write JUnit reports.",
    "duplication": "Detect duplicated code with PMD CPD.",
}

# CLI subcommand -> pipeline step name
STEP_ALIASES = {
    "build": "build",
    "lint": "lint",
    "lines-of-code": "lines_of_code",
    "test-suite": "test_suite",
    "duplication": "duplicate_code_detection",
}


def _add_step_options(parser: argparse.ArgumentParser) -> None:
    """Options that map one-to-one onto configuration keys."""
    parser.add_argument(
        "--path",
        default=".",
        help="Project root (default: current directory).",
    )
    parser.add_argument("--workspace", help="Xcode workspace to build.")
    parser.add_argument("--project", help="Xcode project to build.")
    parser.add_argument("--scheme", help="Scheme to build and test.")
    parser.add_argument(
        "--configuration",
        help="Build configuration for lint (default: Release).",
    )
    parser.add_argument(
        "--minimum-tokens",
        type=int,
        dest="minimum_tokens",
        help="Minimum duplicate size in tokens (default: 100).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="DIR",
        help="Additional directory to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .objective-ci.yml in project root).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objective-ci",
        description="objective-ci - CI pipeline for Xcode projects.",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show objective-ci version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )

    subparsers = parser.add_subparsers(dest="command")

    for command, help_text in STEP_COMMANDS.items():
        step_parser = subparsers.add_parser(command, help=help_text, description=help_text)
        _add_step_options(step_parser)
        step_parser.set_defaults(step=STEP_ALIASES[command])

    subparsers.add_parser("list-steps", help="List the pipeline steps.")

    return parser


def args_to_overrides(args: argparse.Namespace) -> dict:
    """Convert step options given on the command line to config overrides.

    Only options that were actually given are returned, so config file
    values survive for everything else.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Dictionary of config overrides.
    """
    overrides = {}
    for key in ("workspace", "project", "scheme", "configuration", "minimum_tokens"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    exclude = getattr(args, "exclude", None)
    if exclude:
        overrides["exclude"] = exclude
    return overrides
