"""objective-ci CLI package.

This package provides the command-line interface for objective-ci.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Iterable, Optional

from objective_ci.cli.arguments import args_to_overrides, build_parser
from objective_ci.cli.commands import ListStepsCommand, RunCommand
from objective_ci.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_REPORT_ERROR,
    EXIT_SUCCESS,
)
from objective_ci.config import load_config
from objective_ci.core.errors import ConfigurationError
from objective_ci.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    try:
        return version("objective-ci")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from objective_ci import __version__

        return __version__


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    # Configure logging as early as possible.
    configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

    if args.version:
        print(get_version())
        return EXIT_SUCCESS

    if args.command is None:
        parser.print_help()
        return EXIT_SUCCESS

    if args.command == "list-steps":
        return ListStepsCommand().execute(args)

    try:
        config = load_config(
            project_root=Path(args.path).resolve(),
            cli_config_path=args.config,
            cli_overrides=args_to_overrides(args),
        )
    except ConfigurationError as e:
        LOGGER.error(str(e))
        return EXIT_INVALID_USAGE

    return RunCommand().execute(args, config)


__all__ = [
    "main",
    "build_parser",
    "get_version",
    "EXIT_SUCCESS",
    "EXIT_REPORT_ERROR",
    "EXIT_INVALID_USAGE",
]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
