"""Storage layer for StudySearch.

Provides access to the study catalogue the queries run against.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from StudySearch.storage.catalogue import StudyCatalogue, load_catalogue, parse_catalogue

if TYPE_CHECKING:
    from StudySearch.config import AppConfig


def create_catalogue(config: AppConfig) -> StudyCatalogue:
    """Create the study catalogue configured in ``catalogue.path``."""
    return StudyCatalogue(Path(config.catalogue.path))


__all__ = [
    "StudyCatalogue",
    "create_catalogue",
    "load_catalogue",
    "parse_catalogue",
]
