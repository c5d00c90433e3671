"""Search service layer: parse, edit and run queries over the catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from StudySearch.core.clause import NotSearchClause, SearchClause
from StudySearch.core.models import DEFAULT_FIELDS, CancerTreeNode, StudyField
from StudySearch.core.query import Query, QueryUpdate, apply_query_update, filter_studies, to_query_string
from StudySearch.core.tokenizer import parse_query, tokenize
from StudySearch.utils.log import log


@dataclass(slots=True)
class StudySearchService:
    """Application service that filters catalogue studies by query."""

    studies: Sequence[CancerTreeNode]
    default_fields: tuple[StudyField, ...] = DEFAULT_FIELDS

    def parse(self, text: str) -> Query:
        """Parse search box text using the configured default fields."""
        query = parse_query(text, self.default_fields)
        log.debug("Parsed query text=%r clauses=%d", text, len(query))
        return query

    def update(self, query: Query, update: QueryUpdate) -> Query:
        """Apply an edit to a query and return the new query."""
        updated = apply_query_update(query, update)
        log.debug("Query updated: %r -> %r", to_query_string(query), to_query_string(updated))
        return updated

    def exclude(self, query: Query, text: str) -> Query:
        """Negate every phrase in `text`.

        The phrases are also removed from the existing clauses so the query
        never asserts a phrase and its negation at once.
        """
        phrases = [phrase for phrase, _ in tokenize(text, self.default_fields)]
        to_add: list[SearchClause] = [NotSearchClause(phrase) for phrase in phrases]
        return self.update(query, QueryUpdate(to_add=to_add, to_remove=phrases))

    def drop(self, query: Query, text: str) -> Query:
        """Remove every phrase in `text` from the query, whatever its clause."""
        phrases = [phrase for phrase, _ in tokenize(text, self.default_fields)]
        return self.update(query, QueryUpdate(to_remove=phrases))

    def search(self, query: Query, *, max_results: int = -1) -> list[CancerTreeNode]:
        """Return catalogue studies matching the query.

        Args:
            query: Query to evaluate.
            max_results: Maximum number of studies, -1 for no limit.

        Returns:
            Matching studies in catalogue order.
        """
        matched = filter_studies(query, self.studies)
        log.debug("Query %r matched %d/%d studies", to_query_string(query), len(matched), len(self.studies))
        if max_results >= 0:
            return matched[:max_results]
        return matched
