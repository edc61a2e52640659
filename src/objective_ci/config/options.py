"""Option validation and merging for tool command lines."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from objective_ci.core.errors import ConfigurationError

__all__ = ["merge_options", "require_all", "require_at_least_one_of"]


def require_all(configuration: Mapping[str, Any], *keys: str) -> None:
    """Check that every key is present.

    Raises:
        ConfigurationError: Naming the first missing key.
    """
    for key in keys:
        if key not in configuration:
            raise ConfigurationError(f"option {key} is required.", keys=[key])


def require_at_least_one_of(configuration: Mapping[str, Any], *keys: str) -> None:
    """Check that at least one of the keys is present.

    Only the named keys count; other options in the map do not satisfy
    the requirement.

    Raises:
        ConfigurationError: If none of the keys is present.
    """
    if not any(key in configuration for key in keys):
        raise ConfigurationError(
            f"at least one of the options {', '.join(keys)} is required",
            keys=keys,
        )


def merge_options(configuration: Mapping[str, Any], recognized_keys: Iterable[str]) -> str:
    """Fold the recognized keys of a map into a ``-key value`` argument string.

    Flags follow the iteration order of ``configuration``, not of
    ``recognized_keys``. Each flag is preceded by a space, so the result can
    be appended directly to a binary name.

    Args:
        configuration: Option map.
        recognized_keys: Keys that belong on this tool's command line.

    Returns:
        Argument string, empty when no recognized key is present.
    """
    recognized = set(recognized_keys)
    return "".join(
        f" -{key} {value}"
        for key, value in configuration.items()
        if key in recognized
    )
