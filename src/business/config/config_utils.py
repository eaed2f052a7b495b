"""
Config Utilities

Helpers shared by the configuration modules.
"""

from typing import Any


class ConfigError(ValueError):
    """Configuration file missing required structure or failing to parse."""

    pass


def merge_overrides(
    base: dict[str, Any],
    overrides: dict[str, Any],
) -> dict[str, Any]:
    """Recursively deep-merge overrides into a base config dict.

    - Nested dicts: merged recursively
    - Anything else: replaced

    Args:
        base: Base config dict.
        overrides: Override dict.

    Returns:
        Merged dict. Neither input is modified.
    """
    result = base.copy()
    for key, value in overrides.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_overrides(result[key], value)
        else:
            result[key] = value
    return result
