"""Search phrases and the field-level matching predicate.

A phrase is the leaf of a search query: a piece of text that must occur in
one of a restricted set of study fields. Matching is a case-insensitive
substring test (both sides casefolded), so results never depend on the case
the user typed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from StudySearch.core.models import DEFAULT_FIELDS, CancerTreeNode, StudyField


def match_phrase_in_fields(
    phrase: str,
    study: CancerTreeNode,
    fields: Iterable[StudyField],
) -> bool:
    """Return True if phrase occurs in any of the given study fields.

    Args:
        phrase: Text to look for.
        study: Study record to inspect.
        fields: Fields to search. Missing fields never match.

    Returns:
        Whether at least one field contains the phrase.
    """
    needle = phrase.strip().casefold()
    for item in fields:
        value = study.get_field(item)
        if value is None:
            continue
        if needle in str(value).casefold():
            return True
    return False


def are_equal_phrases(a: Phrase | None, b: Phrase | None) -> bool:
    """Compare two phrases by text and field set.

    The display form is ignored. Two missing phrases are equal.
    """
    if a is None or b is None:
        return a is b
    return a.phrase == b.phrase and a.fields == b.fields


@dataclass(frozen=True, slots=True)
class Phrase:
    """Phrase string and the fields it is restricted to.

    Attributes:
        phrase: Raw text to match.
        text_representation: Phrase as shown in the search box, including
            any field prefix or quotes. Not part of equality.
        fields: Fields to match against; empty means the default fields.
    """

    phrase: str
    text_representation: str = field(default="", compare=False)
    fields: frozenset[StudyField] = frozenset()

    def __post_init__(self) -> None:
        if not isinstance(self.phrase, str):
            raise TypeError("phrase must be a string")
        object.__setattr__(
            self,
            "fields",
            frozenset(item if isinstance(item, StudyField) else StudyField.parse(item) for item in self.fields),
        )
        if not self.text_representation:
            object.__setattr__(self, "text_representation", self.phrase)

    def __str__(self) -> str:
        return self.text_representation

    def searched_fields(self) -> tuple[StudyField, ...]:
        """Return the fields this phrase is matched against."""
        if not self.fields:
            return DEFAULT_FIELDS
        return tuple(sorted(self.fields, key=lambda item: item.value))

    def match(self, study: CancerTreeNode) -> bool:
        """Return True if this phrase matches the study."""
        return match_phrase_in_fields(self.phrase, study, self.searched_fields())
