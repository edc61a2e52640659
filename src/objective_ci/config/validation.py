"""Configuration validation for objective-ci.

Warns on unknown keys and wrong value types. Never raises; the pipeline
steps themselves enforce required options.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from objective_ci.config.models import OPTIONS_SUFFIX, OVERRIDE_SUFFIX
from objective_ci.core.logging import get_logger

LOGGER = get_logger(__name__)

VALID_TOP_LEVEL_KEYS: Set[str] = {
    "workspace",
    "project",
    "scheme",
    "configuration",
    "minimum_tokens",
    "destination",
    "destination_timeout",
    "exclude",
    "binaries",
}

VALID_BINARY_KEYS: Set[str] = {
    "options",
    "override",
}

STRING_KEYS = ("workspace", "project", "scheme", "configuration", "destination")
INTEGER_KEYS = ("minimum_tokens", "destination_timeout")


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        ))
        return warnings

    for key in data.keys():
        # Flat <binary>_options / <binary>_override keys are allowed at top level
        if key in VALID_TOP_LEVEL_KEYS or key.endswith((OPTIONS_SUFFIX, OVERRIDE_SUFFIX)):
            continue
        _warn(warnings, ConfigValidationWarning(
            message=f"Unknown top-level key '{key}'",
            source=source,
            key=key,
            suggestion=_suggest_key(key, VALID_TOP_LEVEL_KEYS),
        ))

    for key in STRING_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            _warn(warnings, ConfigValidationWarning(
                message=f"'{key}' must be a string, got {type(value).__name__}",
                source=source,
                key=key,
            ))

    for key in INTEGER_KEYS:
        value = data.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            _warn(warnings, ConfigValidationWarning(
                message=f"'{key}' must be an integer, got {type(value).__name__}",
                source=source,
                key=key,
            ))

    exclude = data.get("exclude")
    if exclude is not None and not isinstance(exclude, (list, str)):
        _warn(warnings, ConfigValidationWarning(
            message=f"'exclude' must be a list or a string, got {type(exclude).__name__}",
            source=source,
            key="exclude",
        ))

    binaries = data.get("binaries")
    if binaries is not None:
        if not isinstance(binaries, dict):
            _warn(warnings, ConfigValidationWarning(
                message=f"'binaries' must be a mapping, got {type(binaries).__name__}",
                source=source,
                key="binaries",
            ))
        else:
            for binary, binary_config in binaries.items():
                if not isinstance(binary_config, dict):
                    _warn(warnings, ConfigValidationWarning(
                        message=f"'binaries.{binary}' must be a mapping",
                        source=source,
                        key=f"binaries.{binary}",
                    ))
                    continue
                for key in binary_config.keys():
                    if key not in VALID_BINARY_KEYS:
                        _warn(warnings, ConfigValidationWarning(
                            message=f"Unknown key 'binaries.{binary}.{key}'",
                            source=source,
                            key=f"binaries.{binary}.{key}",
                            suggestion=_suggest_key(key, VALID_BINARY_KEYS),
                        ))

    return warnings


def _warn(warnings: List[ConfigValidationWarning], warning: ConfigValidationWarning) -> None:
    warnings.append(warning)
    _log_warning(warning)


def _suggest_key(key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a similar valid key for typos."""
    matches = get_close_matches(key, valid_keys, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    """Log a validation warning."""
    msg = f"{warning.source}: {warning.message}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)
