"""Configuration module for objective-ci.

Provides the typed configuration model, the option merger used to build
tool command lines, and YAML config file loading with:
- Project-level config (.objective-ci.yml)
- Environment variable expansion
- Flat ``<binary>_options`` / ``<binary>_override`` keys
"""

from objective_ci.config.models import (
    BinaryOptions,
    CiConfig,
    CORE_OPTION_KEYS,
)
from objective_ci.config.loader import load_config, find_project_config
from objective_ci.config.options import merge_options, require_all, require_at_least_one_of
from objective_ci.config.validation import validate_config, ConfigValidationWarning

__all__ = [
    "BinaryOptions",
    "CiConfig",
    "CORE_OPTION_KEYS",
    "load_config",
    "find_project_config",
    "merge_options",
    "require_all",
    "require_at_least_one_of",
    "validate_config",
    "ConfigValidationWarning",
]
