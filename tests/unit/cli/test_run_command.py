"""Tests for RunCommand."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock

from objective_ci.cli.commands import RunCommand
from objective_ci.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_REPORT_ERROR, EXIT_SUCCESS
from objective_ci.config.models import CiConfig
from objective_ci.core.errors import ConfigurationError, ReportParseError
from objective_ci.core.streaming import NullStreamHandler


def _command(factory: MagicMock) -> RunCommand:
    return RunCommand(executor_factory=factory, stream_handler=NullStreamHandler())


class TestRunCommand:
    """Tests for RunCommand.execute."""

    def test_build_runs_whole_pipeline(self, tmp_path: Path) -> None:
        factory = MagicMock()
        config = CiConfig(scheme="App", exclude=["ThirdParty"])

        result = _command(factory).execute(Namespace(path=str(tmp_path), step="build"), config)

        assert result == EXIT_SUCCESS
        factory.return_value.build.assert_called_once_with(config)
        assert factory.call_args[1]["extra_exclusions"] == ["ThirdParty"]
        assert factory.call_args[0][0] == tmp_path.resolve()

    def test_single_step(self, tmp_path: Path) -> None:
        factory = MagicMock()

        result = _command(factory).execute(Namespace(path=str(tmp_path), step="lines_of_code"))

        assert result == EXIT_SUCCESS
        factory.return_value.run_step.assert_called_once()
        assert factory.return_value.run_step.call_args[0][0] == "lines_of_code"

    def test_configuration_error(self, tmp_path: Path) -> None:
        factory = MagicMock()
        factory.return_value.run_step.side_effect = ConfigurationError("option scheme is required.")

        result = _command(factory).execute(Namespace(path=str(tmp_path), step="lint"))

        assert result == EXIT_INVALID_USAGE

    def test_report_parse_error(self, tmp_path: Path) -> None:
        factory = MagicMock()
        factory.return_value.run_step.side_effect = ReportParseError(
            tmp_path / "duplication.xml", "Document is empty"
        )

        result = _command(factory).execute(
            Namespace(path=str(tmp_path), step="duplicate_code_detection")
        )

        assert result == EXIT_REPORT_ERROR
