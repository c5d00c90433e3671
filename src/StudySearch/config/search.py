"""Search domain configuration and saved query parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from StudySearch.config.common import (
    expect_int,
    expect_str,
    expect_str_list,
    get_required_value,
    get_section,
)
from StudySearch.core.models import DEFAULT_FIELDS, StudyField

_ALLOWED_QUERY_KEYS = {"NAME", "QUERY"}


@dataclass(frozen=True, slots=True)
class SavedQuery:
    """A named query written in search box syntax."""

    name: str | None
    text: str


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search behavior and saved queries."""

    default_fields: tuple[StudyField, ...]
    max_results: int
    queries: tuple[SavedQuery, ...]


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing or fields are unknown.
    """
    section = get_section(raw, "search", required=True)

    queries_obj = raw.get("queries", [])
    if queries_obj is None:
        queries_obj = []
    if not isinstance(queries_obj, list):
        raise TypeError("queries must be a list")
    queries = tuple(parse_saved_query(item, f"queries[{idx}]") for idx, item in enumerate(queries_obj))

    return SearchConfig(
        default_fields=_parse_fields(section.get("default_fields", [f.value for f in DEFAULT_FIELDS])),
        max_results=expect_int(get_required_value(section, "max_results", "search.max_results"), "search.max_results"),
        queries=queries,
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if not config.default_fields:
        raise ValueError("search.default_fields must include at least one field")
    if config.max_results != -1 and config.max_results <= 0:
        raise ValueError("search.max_results must be -1 or positive")


def _parse_fields(value: Any) -> tuple[StudyField, ...]:
    """Parse configured field names into unique fields in configured order."""
    items = expect_str_list(value, "search.default_fields")
    fields: list[StudyField] = []
    for idx, item in enumerate(items):
        name = item.strip()
        try:
            field = StudyField.parse(name)
        except ValueError:
            raise ValueError(f"search.default_fields[{idx}] has unknown field: {name}") from None
        if field not in fields:
            fields.append(field)
    return tuple(fields)


def parse_saved_query(value: Any, config_key: str) -> SavedQuery:
    """Parse a saved query mapping.

    Args:
        value: Mapping with ``QUERY`` and optional ``NAME``.
        config_key: Full key path used in error messages.

    Raises:
        TypeError: If the query shape/types are invalid.
        ValueError: If keys are unknown or the query text is empty.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")

    unknown = {str(k) for k in value.keys()} - _ALLOWED_QUERY_KEYS
    if unknown:
        raise ValueError(f"{config_key} has unknown keys: {sorted(unknown)}")

    name = None
    if "NAME" in value:
        name = expect_str(value["NAME"], f"{config_key}.NAME").strip() or None
    text = expect_str(get_required_value(value, "QUERY", f"{config_key}.QUERY"), f"{config_key}.QUERY").strip()
    if not text:
        raise ValueError(f"{config_key}.QUERY must not be empty")
    return SavedQuery(name=name, text=text)
