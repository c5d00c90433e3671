"""Catalogue domain configuration: where study records are read from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from StudySearch.config.common import expect_str, get_required_value, get_section

_ALLOWED_SUFFIXES = (".json", ".yml", ".yaml")


@dataclass(frozen=True, slots=True)
class CatalogueConfig:
    """Study catalogue location."""

    path: str


def load_catalogue_config(raw: Mapping[str, Any]) -> CatalogueConfig:
    """Load catalogue config from raw mapping."""
    section = get_section(raw, "catalogue", required=True)
    return CatalogueConfig(
        path=expect_str(get_required_value(section, "path", "catalogue.path"), "catalogue.path").strip(),
    )


def check_catalogue(config: CatalogueConfig) -> None:
    """Validate catalogue constraints."""
    if not config.path:
        raise ValueError("catalogue.path must not be empty")
    if not config.path.lower().endswith(_ALLOWED_SUFFIXES):
        raise ValueError(f"catalogue.path must end with one of {list(_ALLOWED_SUFFIXES)}")
