"""Turn search box text into clauses.

Syntax:

- whitespace separates phrases, double quotes group words into one phrase;
- a leading ``-`` (attached or standalone) negates the following phrase;
- ``prefix:value`` restricts the phrase to the fields registered for
  ``prefix`` (unknown prefixes are kept as plain text).

Positive phrases form one AND clause, each negated phrase its own NOT
clause. When the same phrase is mentioned twice, the last mention wins.
"""

from __future__ import annotations

import re
from typing import Final, Iterable, Mapping

from StudySearch.core.clause import NOT_PREFIX, AndSearchClause, NotSearchClause, SearchClause
from StudySearch.core.models import DEFAULT_FIELDS, StudyField
from StudySearch.core.phrase import Phrase
from StudySearch.core.query import Query, QueryUpdate, apply_query_update

FILTER_SEPARATOR: Final[str] = ":"

FIELD_PREFIXES: Final[Mapping[str, tuple[StudyField, ...]]] = {
    "study": (StudyField.STUDY_ID,),
    "cancer-type": (StudyField.CANCER_TYPE_ID, StudyField.CANCER_TYPE),
    "reference-genome": (StudyField.REFERENCE_GENOME,),
    "pmid": (StudyField.PMID,),
    "description": (StudyField.DESCRIPTION,),
}

_TOKEN_RE = re.compile(
    r"(?P<neg>%s)?(?:(?P<prefix>[A-Za-z][\w-]*)%s)?(?:\"(?P<quoted>[^\"]*)\"?|(?P<bare>[^\s\"]+))"
    % (re.escape(NOT_PREFIX), re.escape(FILTER_SEPARATOR))
)
_NEEDS_QUOTES_RE = re.compile(r"\s|%s" % re.escape(FILTER_SEPARATOR))


def parse_phrase(value: str, prefix: str | None = None, default_fields: Iterable[StudyField] = ()) -> Phrase | None:
    """Build a phrase from a token value and its optional field prefix.

    Args:
        value: Token text without quotes.
        prefix: Field prefix written before the separator, if any.
        default_fields: Fields for phrases without a known prefix.

    Returns:
        The phrase, or None for blank values.
    """
    text = value.strip()
    if not text:
        return None

    display = _quote(text)
    if prefix is not None:
        fields = FIELD_PREFIXES.get(prefix.lower())
        if fields is not None:
            return Phrase(
                phrase=text.casefold(),
                text_representation=f"{prefix.lower()}{FILTER_SEPARATOR}{display}",
                fields=frozenset(fields),
            )
        text = f"{prefix}{FILTER_SEPARATOR}{text}"
        display = f"{prefix}{FILTER_SEPARATOR}{display}"

    fields = frozenset(default_fields)
    if fields == frozenset(DEFAULT_FIELDS):
        fields = frozenset()
    return Phrase(phrase=text.casefold(), text_representation=display, fields=fields)


def _quote(text: str) -> str:
    """Return the search box form of a value, quoted when it would not read back as itself."""
    if text.startswith(NOT_PREFIX) or _NEEDS_QUOTES_RE.search(text):
        return f'"{text}"'
    return text


def tokenize(text: str, default_fields: Iterable[StudyField] = ()) -> list[tuple[Phrase, bool]]:
    """Split search text into phrases.

    Returns:
        ``(phrase, negated)`` pairs in input order.
    """
    default_fields = tuple(default_fields)
    tokens: list[tuple[Phrase, bool]] = []
    pending_not = False
    for m in _TOKEN_RE.finditer(text or ""):
        if m.group("bare") == NOT_PREFIX and not m.group("neg") and not m.group("prefix"):
            pending_not = True
            continue
        value = m.group("quoted") if m.group("quoted") is not None else m.group("bare")
        phrase = parse_phrase(value or "", m.group("prefix"), default_fields)
        negated = pending_not or bool(m.group("neg"))
        pending_not = False
        if phrase is not None:
            tokens.append((phrase, negated))
    return tokens


def parse_query(text: str, default_fields: Iterable[StudyField] = ()) -> Query:
    """Parse search text into a query.

    Args:
        text: Raw search box text.
        default_fields: Fields searched by phrases without a prefix.

    Returns:
        One AND clause with the positive phrases (if any) followed by one NOT
        clause per negated phrase.
    """
    latest: dict[Phrase, bool] = {}
    for phrase, negated in tokenize(text, default_fields):
        latest.pop(phrase, None)
        latest[phrase] = negated

    positive = [phrase for phrase, negated in latest.items() if not negated]
    to_add: list[SearchClause] = [AndSearchClause(positive)] if positive else []
    to_add.extend(NotSearchClause(phrase) for phrase, negated in latest.items() if negated)
    return apply_query_update((), QueryUpdate(to_add=to_add))
