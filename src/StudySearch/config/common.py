"""Shared helpers for configuration and catalogue validation.

Every helper takes the full key path of the value it checks so that error
messages point at the offending entry (e.g. ``search.default_fields[2]``).
"""

from __future__ import annotations

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or empty mapping for optional missing sections.

    Raises:
        ValueError: If section is required but missing.
        TypeError: If section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return a required field value, raising ValueError when it is missing."""
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_optional_str(value: Any, config_key: str) -> str | None:
    """Validate a string value that may be null; numbers are accepted as text."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError(f"{config_key} must be a string")
    if isinstance(value, int):
        return str(value)
    return expect_str(value, config_key)


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate and return integer value (excluding bool)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{config_key}[{idx}] must be a string")
    return list(value)
