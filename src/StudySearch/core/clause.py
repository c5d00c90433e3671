"""Search clauses: the boolean building blocks of a study query.

A query is a sequence of clauses that must all hold for a study:

- `NotSearchClause`: the study must NOT match a single phrase.
- `AndSearchClause`: the study must match every phrase of the clause.

Clauses are immutable. Editing a query replaces clauses instead of changing
them (see `StudySearch.core.query.apply_query_update`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Sequence, Union

from StudySearch.core.models import CancerTreeNode
from StudySearch.core.phrase import Phrase, are_equal_phrases

NOT_PREFIX: Final[str] = "-"

PhrasePredicate = Callable[[Phrase], bool]
PhraseMatch = Union[Phrase, None, PhrasePredicate]


class InvalidClauseError(ValueError):
    """Raised when a clause is constructed from malformed input."""


class SearchClause(ABC):
    """Common interface of NOT and AND clauses."""

    __slots__ = ()

    @abstractmethod
    def is_not(self) -> bool:
        """Return True for a negative clause."""

    @abstractmethod
    def is_and(self) -> bool:
        """Return True for a conjunctive clause."""

    @abstractmethod
    def get_phrases(self) -> list[Phrase]:
        """Return the phrases of this clause.

        A NOT clause returns its single phrase, an AND clause all of its
        phrases in display order.
        """

    @abstractmethod
    def contains_phrase(self, phrase: Phrase | None) -> bool:
        """Return True if the clause holds a phrase equal to `phrase`.

        Passing None asks whether the clause holds no phrase at all.
        """

    @abstractmethod
    def contains_matching(self, predicate: PhrasePredicate) -> bool:
        """Return True if `predicate` holds for one of the clause phrases."""

    @abstractmethod
    def equals(self, other: SearchClause) -> bool:
        """Compare clauses by variant and phrase set."""

    @abstractmethod
    def match(self, study: CancerTreeNode) -> bool:
        """Return True if the study satisfies this clause."""

    @abstractmethod
    def _key(self) -> tuple:
        """Hashable key consistent with `equals`."""

    def contains(self, match: PhraseMatch) -> bool:
        """Check the clause for a phrase or for a phrase matching a predicate."""
        if match is None:
            return self.contains_phrase(None)
        if callable(match):
            return self.contains_matching(match)
        return self.contains_phrase(match)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchClause):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._key())


@dataclass(frozen=True, slots=True, eq=False)
class NotSearchClause(SearchClause):
    """Negative clause holding a single phrase."""

    phrase: Phrase | None

    def __post_init__(self) -> None:
        if self.phrase is not None and not isinstance(self.phrase, Phrase):
            raise InvalidClauseError(f"invalid clause construction: expected Phrase, got {type(self.phrase).__name__}")

    def is_not(self) -> bool:
        return True

    def is_and(self) -> bool:
        return False

    def get_phrases(self) -> list[Phrase]:
        return [self.phrase]

    def __str__(self) -> str:
        if self.phrase is None:
            return ""
        return f"{NOT_PREFIX} {self.phrase}"

    def contains_phrase(self, phrase: Phrase | None) -> bool:
        if phrase is None:
            return self.phrase is None
        return are_equal_phrases(self.phrase, phrase)

    def contains_matching(self, predicate: PhrasePredicate) -> bool:
        return bool(predicate(self.phrase))

    def equals(self, other: SearchClause) -> bool:
        if other.is_and():
            return False
        return other.contains_phrase(self.phrase)

    def match(self, study: CancerTreeNode) -> bool:
        if self.phrase is None:
            return True
        return not self.phrase.match(study)

    def _key(self) -> tuple:
        return ("not", self.phrase)


@dataclass(frozen=True, slots=True, eq=False)
class AndSearchClause(SearchClause):
    """Conjunctive clause: all of its phrases must match.

    Phrase order only affects display. Equality treats the phrases as a set,
    so repeated phrases collapse and ordering is ignored.
    """

    phrases: Sequence[Phrase]

    def __post_init__(self) -> None:
        if self.phrases is None or isinstance(self.phrases, (str, Phrase)):
            raise InvalidClauseError("invalid clause construction: expected a sequence of phrases")
        phrases = tuple(self.phrases)
        for item in phrases:
            if not isinstance(item, Phrase):
                raise InvalidClauseError(f"invalid clause construction: expected Phrase, got {type(item).__name__}")
        object.__setattr__(self, "phrases", phrases)

    def is_not(self) -> bool:
        return False

    def is_and(self) -> bool:
        return True

    def get_phrases(self) -> list[Phrase]:
        return list(self.phrases)

    def __str__(self) -> str:
        return " ".join(str(phrase) for phrase in self.phrases)

    def contains_phrase(self, phrase: Phrase | None) -> bool:
        if phrase is None:
            return not self.phrases
        return any(are_equal_phrases(item, phrase) for item in self.phrases)

    def contains_matching(self, predicate: PhrasePredicate) -> bool:
        for phrase in self.phrases:
            if predicate(phrase):
                return True
        return False

    def equals(self, other: SearchClause) -> bool:
        if other.is_not():
            return False
        return all(other.contains_phrase(phrase) for phrase in self.phrases) and all(
            self.contains_phrase(phrase) for phrase in other.get_phrases()
        )

    def match(self, study: CancerTreeNode) -> bool:
        return all(phrase.match(study) for phrase in self.phrases)

    def _key(self) -> tuple:
        return ("and", frozenset(self.phrases))
