"""Command implementations for StudySearch CLI.

Encapsulates query execution, separated from CLI parameter handling and
output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from StudySearch.config import AppConfig, SavedQuery
from StudySearch.core.models import CancerTreeNode
from StudySearch.core.query import Query
from StudySearch.renderers import OutputWriter
from StudySearch.services.search import StudySearchService
from StudySearch.utils.log import log, query_context


@dataclass(slots=True)
class SearchCommand:
    """Run queries against the catalogue and hand results to the writer.

    Every query is edited with `excludes` (phrases to negate) and `drops`
    (phrases to remove) before it runs.
    """

    config: AppConfig
    search_service: StudySearchService
    output_writer: OutputWriter
    queries: Sequence[SavedQuery]
    excludes: Sequence[str] = ()
    drops: Sequence[str] = ()
    results: list[tuple[Query, list[CancerTreeNode]]] = field(default_factory=list)

    def execute(self) -> None:
        """Execute every query and write its results."""
        multiple = len(self.queries) > 1
        for idx, saved in enumerate(self.queries, start=1):
            if multiple:
                log.info("=== Query %d/%d ===", idx, len(self.queries))
            with query_context(saved.name or saved.text):
                query = self.build_query(saved.text)
                studies = self.search_service.search(query, max_results=self.config.search.max_results)
                self.results.append((query, studies))
                self.output_writer.write_query_result(studies, query, saved.name)

    def build_query(self, text: str) -> Query:
        """Parse query text and apply the command-line edits."""
        query = self.search_service.parse(text)
        for item in self.excludes:
            query = self.search_service.exclude(query, item)
        for item in self.drops:
            query = self.search_service.drop(query, item)
        return query
