"""Tests for the CLI argument parser."""

from __future__ import annotations

from pathlib import Path

from objective_ci.cli.arguments import args_to_overrides, build_parser


class TestBuildParser:
    """Tests for build_parser."""

    def test_step_aliases(self) -> None:
        parser = build_parser()
        assert parser.parse_args(["duplication"]).step == "duplicate_code_detection"
        assert parser.parse_args(["lines-of-code"]).step == "lines_of_code"
        assert parser.parse_args(["build"]).step == "build"

    def test_step_options(self) -> None:
        args = build_parser().parse_args([
            "lint",
            "--path", "ios",
            "--workspace", "App.xcworkspace",
            "--scheme", "App",
            "--exclude", "ThirdParty",
            "--exclude", "Carthage",
            "--config", "ci.yml",
        ])
        assert args.path == "ios"
        assert args.exclude == ["ThirdParty", "Carthage"]
        assert args.config == Path("ci.yml")

    def test_global_flags_before_command(self) -> None:
        args = build_parser().parse_args(["--debug", "test-suite"])
        assert args.debug is True
        assert args.command == "test-suite"


class TestArgsToOverrides:
    """Tests for args_to_overrides."""

    def test_only_given_options(self) -> None:
        args = build_parser().parse_args(["duplication", "--minimum-tokens", "60"])
        assert args_to_overrides(args) == {"minimum_tokens": 60}

    def test_exclude_and_scheme(self) -> None:
        args = build_parser().parse_args(["build", "--scheme", "App", "--exclude", "ThirdParty"])
        assert args_to_overrides(args) == {"scheme": "App", "exclude": ["ThirdParty"]}

    def test_list_steps_has_no_overrides(self) -> None:
        args = build_parser().parse_args(["list-steps"])
        assert args_to_overrides(args) == {}
