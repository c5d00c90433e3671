"""Public configuration API for StudySearch."""

from __future__ import annotations

from StudySearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from StudySearch.config.catalogue import CatalogueConfig
from StudySearch.config.output import OutputConfig
from StudySearch.config.runtime import RuntimeConfig
from StudySearch.config.search import SavedQuery, SearchConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "CatalogueConfig",
    "SearchConfig",
    "SavedQuery",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
