"""Query sequences: evaluation against studies and incremental updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from StudySearch.core.clause import AndSearchClause, SearchClause
from StudySearch.core.models import CancerTreeNode
from StudySearch.core.phrase import Phrase, are_equal_phrases

Query = tuple[SearchClause, ...]


@dataclass(frozen=True, slots=True)
class QueryUpdate:
    """Requested change to a query.

    Attributes:
        to_add: Clauses appended to the query. An existing clause equal to an
            added one is replaced.
        to_remove: Phrases removed from every clause, ignoring the type of
            their containing clause, so that no conflicting clauses remain.
    """

    to_add: Sequence[SearchClause] = ()
    to_remove: Sequence[Phrase] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "to_add", tuple(self.to_add or ()))
        object.__setattr__(self, "to_remove", tuple(self.to_remove or ()))


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Outcome of evaluating a query against one study.

    Attributes:
        match: Whether the study satisfies the query.
        forced: True when a NOT clause excluded the study.
    """

    match: bool
    forced: bool = False


def apply_query_update(current: Iterable[SearchClause], update: QueryUpdate) -> Query:
    """Compute the query that results from applying `update` to `current`.

    Removed phrases are taken out of every clause. AND clauses left without
    phrases and NOT clauses whose phrase was removed are dropped. Added clauses
    are then appended, each replacing any existing clause equal to it.

    Args:
        current: Current query. Not modified.
        update: Phrases to remove and clauses to add.

    Returns:
        The new query.
    """
    result: list[SearchClause] = []
    for clause in current:
        kept = _without_phrases(clause, update.to_remove)
        if kept is not None:
            result.append(kept)

    for added in update.to_add:
        result = [clause for clause in result if not clause.equals(added)]
        result.append(added)
    return tuple(result)


def _without_phrases(clause: SearchClause, to_remove: Sequence[Phrase]) -> SearchClause | None:
    """Return `clause` without the given phrases, or None when nothing is left."""
    phrases = clause.get_phrases()
    remaining = [
        phrase for phrase in phrases if not any(are_equal_phrases(phrase, removed) for removed in to_remove)
    ]
    if clause.is_not():
        return clause if remaining else None
    if not remaining:
        return None
    if len(remaining) == len(phrases):
        return clause
    return AndSearchClause(remaining)


def perform_search(query: Iterable[SearchClause], study: CancerTreeNode) -> SearchResult:
    """Evaluate a query against one study.

    NOT clauses are checked first; a matching negated phrase excludes the study
    regardless of the other clauses.
    """
    clauses = tuple(query)
    for clause in clauses:
        if clause.is_not() and not clause.match(study):
            return SearchResult(match=False, forced=True)
    return SearchResult(match=all(clause.match(study) for clause in clauses if clause.is_and()))


def filter_studies(query: Iterable[SearchClause], studies: Iterable[CancerTreeNode]) -> list[CancerTreeNode]:
    """Return the studies matching the query, in their original order."""
    clauses = tuple(query)
    return [study for study in studies if perform_search(clauses, study).match]


def to_query_string(query: Iterable[SearchClause]) -> str:
    """Render a query back into search box text."""
    return " ".join(text for text in (str(clause) for clause in query) if text)
