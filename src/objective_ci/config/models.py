"""Configuration data models for objective-ci.

Defines typed configuration classes for the options accepted by the pipeline
steps. The flat option map used by Rakefile-style callers
(``{"scheme": ..., "oclint-xcodebuild_options": ...}``) and the
``.objective-ci.yml`` file both end up in a :class:`CiConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from objective_ci.core.errors import ConfigurationError
from objective_ci.core.logging import get_logger

LOGGER = get_logger(__name__)

# Keys that are passed to xcodebuild as ``-key value`` when present
CORE_OPTION_KEYS = ("workspace", "project", "scheme", "configuration")

OPTIONS_SUFFIX = "_options"
OVERRIDE_SUFFIX = "_override"

DEFAULT_CONFIGURATION = "Release"
DEFAULT_MINIMUM_TOKENS = 100
DEFAULT_DESTINATION = "iPhone 6"
DEFAULT_DESTINATION_TIMEOUT = 10


@dataclass
class BinaryOptions:
    """Per-binary command-line extension.

    ``extra_options`` is appended to the options the pipeline builds;
    ``override_options`` replaces them entirely.
    """

    extra_options: Optional[str] = None
    override_options: Optional[str] = None

    @property
    def overridden(self) -> bool:
        """Whether an override value is set."""
        return bool(self.override_options)


@dataclass
class CiConfig:
    """Complete objective-ci configuration.

    Example .objective-ci.yml:
        workspace: App.xcworkspace
        scheme: App
        minimum_tokens: 80
        exclude:
          - ThirdParty
        binaries:
          oclint-json-compilation-database:
            options: "-max-priority-2=10"
    """

    workspace: Optional[str] = None
    project: Optional[str] = None
    scheme: Optional[str] = None
    configuration: Optional[str] = None
    minimum_tokens: Optional[int] = None
    destination: str = DEFAULT_DESTINATION
    destination_timeout: int = DEFAULT_DESTINATION_TIMEOUT

    # Extra exclusions on top of the resolved defaults
    exclude: List[str] = field(default_factory=list)

    # Keyed by binary name, e.g. "xcodebuild", "oclint-xcodebuild"
    binaries: Dict[str, BinaryOptions] = field(default_factory=dict)

    # Metadata (not from YAML, set by loader)
    _config_sources: List[str] = field(default_factory=list, repr=False)

    def binary_options(self, binary: str) -> BinaryOptions:
        """Get the extension record for a binary, empty if not configured."""
        return self.binaries.get(binary, BinaryOptions())

    def as_mapping(self) -> Dict[str, Any]:
        """Return the xcodebuild option keys that are set, in declaration order."""
        return {
            key: getattr(self, key)
            for key in CORE_OPTION_KEYS
            if getattr(self, key) is not None
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CiConfig":
        """Build a config from a flat option map.

        Recognized keys become fields; ``<binary>_options`` and
        ``<binary>_override`` keys become :class:`BinaryOptions` records.
        Anything else is ignored.

        Args:
            data: Flat option map.

        Returns:
            CiConfig instance.

        Raises:
            ConfigurationError: If ``exclude`` is neither a list nor a string.
        """
        config = cls()
        for raw_key, value in data.items():
            key = str(raw_key)
            if key in CORE_OPTION_KEYS:
                setattr(config, key, None if value is None else str(value))
            elif key == "minimum_tokens":
                config.minimum_tokens = None if value is None else int(value)
            elif key == "destination":
                config.destination = str(value)
            elif key == "destination_timeout":
                config.destination_timeout = int(value)
            elif key == "exclude":
                # A single directory may be given as a plain string
                if isinstance(value, str):
                    value = [value]
                elif value is not None and not isinstance(value, (list, tuple)):
                    raise ConfigurationError(
                        f"option exclude must be a list of directories, got {type(value).__name__}",
                        keys=["exclude"],
                    )
                config.exclude = [str(entry) for entry in value or []]
            elif key.endswith(OVERRIDE_SUFFIX):
                binary = key[: -len(OVERRIDE_SUFFIX)]
                config.binaries.setdefault(binary, BinaryOptions()).override_options = as_option_string(value)
            elif key.endswith(OPTIONS_SUFFIX):
                binary = key[: -len(OPTIONS_SUFFIX)]
                config.binaries.setdefault(binary, BinaryOptions()).extra_options = as_option_string(value)
            else:
                LOGGER.debug(f"Ignoring unrecognized option '{key}'")
        return config


def as_option_string(value: Any) -> Optional[str]:
    """Normalize an options value: lists are joined, ``None``/``False`` means unset."""
    if value is None or value is False:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)
