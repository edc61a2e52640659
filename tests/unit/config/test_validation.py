"""Tests for objective_ci.config.validation."""

from __future__ import annotations

from objective_ci.config.validation import (
    ConfigValidationWarning,
    _suggest_key,
    validate_config,
)


class TestSuggestKey:
    """Tests for _suggest_key function."""

    def test_suggests_typo_fix(self) -> None:
        assert _suggest_key("shceme", {"scheme", "project", "workspace"}) == "scheme"

    def test_returns_none_for_no_match(self) -> None:
        assert _suggest_key("xyz", {"scheme", "project"}) is None

    def test_handles_empty_valid_keys(self) -> None:
        assert _suggest_key("scheme", set()) is None


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_returns_no_warnings(self) -> None:
        data = {
            "workspace": "App.xcworkspace",
            "scheme": "App",
            "minimum_tokens": 80,
            "exclude": ["ThirdParty"],
            "binaries": {"sloccount": {"options": "--follow"}},
        }
        assert validate_config(data, source="test.yml") == []

    def test_flat_binary_keys_allowed(self) -> None:
        data = {"oclint-xcodebuild_options": "-foo", "xcodebuild_override": "-scheme App test"}
        assert validate_config(data, source="test.yml") == []

    def test_unknown_key_with_suggestion(self) -> None:
        warnings = validate_config({"schema": "App"}, source="test.yml")
        assert len(warnings) == 1
        assert warnings[0].key == "schema"
        assert warnings[0].suggestion == "scheme"

    def test_wrong_types(self) -> None:
        warnings = validate_config(
            {"scheme": 3, "minimum_tokens": "many", "exclude": 5},
            source="test.yml",
        )
        assert {w.key for w in warnings} == {"scheme", "minimum_tokens", "exclude"}

    def test_single_string_exclude_accepted(self) -> None:
        assert validate_config({"exclude": "ThirdParty"}, source="test.yml") == []

    def test_boolean_is_not_an_integer(self) -> None:
        warnings = validate_config({"destination_timeout": True}, source="test.yml")
        assert [w.key for w in warnings] == ["destination_timeout"]

    def test_unknown_binary_key(self) -> None:
        warnings = validate_config({"binaries": {"sloccount": {"option": "--follow"}}}, source="test.yml")
        assert warnings[0].key == "binaries.sloccount.option"
        assert warnings[0].suggestion == "options"

    def test_binary_entry_must_be_mapping(self) -> None:
        warnings = validate_config({"binaries": {"sloccount": "--follow"}}, source="test.yml")
        assert [w.key for w in warnings] == ["binaries.sloccount"]

    def test_non_mapping_config(self) -> None:
        warnings = validate_config(["scheme"], source="test.yml")  # type: ignore[arg-type]
        assert len(warnings) == 1
        assert isinstance(warnings[0], ConfigValidationWarning)

    def test_warnings_are_logged(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="objective_ci"):
            validate_config({"shceme": "App"}, source="ci.yml")
        assert "ci.yml: Unknown top-level key 'shceme'" in caplog.text
        assert "did you mean 'scheme'" in caplog.text
