"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.objective-ci.yml)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from objective_ci.config.models import BinaryOptions, CiConfig, as_option_string
from objective_ci.config.validation import validate_config
from objective_ci.core.errors import ConfigurationError
from objective_ci.core.logging import get_logger

LOGGER = get_logger(__name__)

PROJECT_CONFIG_NAMES = [
    ".objective-ci.yml",
    ".objective-ci.yaml",
    "objective-ci.yml",
    "objective-ci.yaml",
]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> CiConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.objective-ci.yml)
    3. Built-in defaults

    Args:
        project_root: Project root directory for finding .objective-ci.yml.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged CiConfig instance.

    Raises:
        ConfigurationError: If the config file doesn't exist or has parse errors.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigurationError(f"Config file not found: {cli_config_path}")
        config_path: Optional[Path] = cli_config_path
        source_kind = "custom"
    else:
        config_path = find_project_config(project_root)
        source_kind = "project"

    if config_path is not None:
        try:
            file_dict = load_yaml_file(config_path)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
        validate_config(file_dict, source=str(config_path))
        merged = merge_configs(merged, file_dict)
        sources.append(f"{source_kind}:{config_path}")
        LOGGER.debug(f"Loaded {source_kind} config from {config_path}")

    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigurationError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        data: Config data (dict, list, or scalar).

    Returns:
        Data with environment variables expanded.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge

    Args:
        base: Base configuration dictionary.
        overlay: Overlay configuration to merge on top.

    Returns:
        Merged configuration dictionary.
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def dict_to_config(data: Dict[str, Any]) -> CiConfig:
    """Convert a merged config dict to a typed CiConfig.

    Top-level keys go through :meth:`CiConfig.from_mapping`; the nested
    ``binaries`` section is folded in afterwards and wins over flat
    ``<binary>_options`` keys for the same binary.

    Args:
        data: Configuration dictionary.

    Returns:
        Typed CiConfig instance.
    """
    flat = {k: v for k, v in data.items() if k != "binaries"}
    config = CiConfig.from_mapping(flat)

    binaries_data = data.get("binaries") or {}
    if isinstance(binaries_data, dict):
        for binary, binary_data in binaries_data.items():
            if not isinstance(binary_data, dict):
                continue
            record = config.binaries.setdefault(str(binary), BinaryOptions())
            if "options" in binary_data:
                record.extra_options = as_option_string(binary_data["options"])
            if "override" in binary_data:
                record.override_options = as_option_string(binary_data["override"])

    return config

