"""Search service layer for StudySearch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from StudySearch.services.search import StudySearchService

if TYPE_CHECKING:
    from StudySearch.config import AppConfig
    from StudySearch.storage.catalogue import StudyCatalogue


def create_search_service(config: AppConfig, catalogue: StudyCatalogue) -> StudySearchService:
    """Create a search service over the catalogue studies.

    Args:
        config: Application configuration containing search settings.
        catalogue: Catalogue providing the studies.

    Returns:
        Configured StudySearchService instance.
    """
    return StudySearchService(studies=catalogue.studies, default_fields=config.search.default_fields)


__all__ = [
    "StudySearchService",
    "create_search_service",
]
