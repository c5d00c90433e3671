"""Tests for query updates and query evaluation."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from StudySearch.core.clause import AndSearchClause, NotSearchClause
from StudySearch.core.models import CancerTreeNode
from StudySearch.core.phrase import Phrase
from StudySearch.core.query import (
    QueryUpdate,
    SearchResult,
    apply_query_update,
    filter_studies,
    perform_search,
    to_query_string,
)

X = Phrase("x")
Y = Phrase("y")
Z = Phrase("z")


def _assert_query(test: unittest.TestCase, actual, expected) -> None:
    test.assertEqual(len(actual), len(expected))
    for got, want in zip(actual, expected):
        test.assertEqual(got.is_not(), want.is_not())
        test.assertEqual(got.get_phrases(), want.get_phrases())


class TestApplyQueryUpdate(unittest.TestCase):
    def test_remove_then_add(self) -> None:
        current = (AndSearchClause([X, Y]), NotSearchClause(Z))
        result = apply_query_update(current, QueryUpdate(to_add=[NotSearchClause(X)], to_remove=[Y]))
        _assert_query(self, result, [AndSearchClause([X]), NotSearchClause(Z), NotSearchClause(X)])

    def test_adding_equal_clause_does_not_duplicate(self) -> None:
        result = apply_query_update((NotSearchClause(X),), QueryUpdate(to_add=[NotSearchClause(X)]))
        _assert_query(self, result, [NotSearchClause(X)])

    def test_added_clause_replaces_equal_clause_at_end(self) -> None:
        current = (AndSearchClause([X, Y]), NotSearchClause(Z))
        result = apply_query_update(current, QueryUpdate(to_add=[AndSearchClause([Y, X])]))
        _assert_query(self, result, [NotSearchClause(Z), AndSearchClause([Y, X])])

    def test_empty_and_clause_is_dropped(self) -> None:
        self.assertEqual(apply_query_update((AndSearchClause([X]),), QueryUpdate(to_remove=[X])), ())

    def test_not_clause_with_removed_phrase_is_dropped(self) -> None:
        result = apply_query_update((NotSearchClause(X), NotSearchClause(Y)), QueryUpdate(to_remove=[X]))
        _assert_query(self, result, [NotSearchClause(Y)])

    def test_removal_ignores_clause_variant(self) -> None:
        current = (AndSearchClause([X, Y]), NotSearchClause(X))
        result = apply_query_update(current, QueryUpdate(to_remove=[X]))
        _assert_query(self, result, [AndSearchClause([Y])])

    def test_removal_uses_phrase_equality(self) -> None:
        current = (AndSearchClause([X]),)
        result = apply_query_update(current, QueryUpdate(to_remove=[Phrase("x", fields=["name"])]))
        _assert_query(self, result, [AndSearchClause([X])])

    def test_remove_is_idempotent(self) -> None:
        current = (AndSearchClause([X, Y]), NotSearchClause(Z), NotSearchClause(Y))
        update = QueryUpdate(to_remove=[Y])
        once = apply_query_update(current, update)
        twice = apply_query_update(once, update)
        _assert_query(self, twice, once)

    def test_conflicting_not_replaces_and_phrase(self) -> None:
        current = (AndSearchClause([X, Y]),)
        result = apply_query_update(current, QueryUpdate(to_add=[NotSearchClause(Y)], to_remove=[Y]))
        _assert_query(self, result, [AndSearchClause([X]), NotSearchClause(Y)])

    def test_duplicates_within_to_add_collapse(self) -> None:
        result = apply_query_update((), QueryUpdate(to_add=[NotSearchClause(X), NotSearchClause(X)]))
        self.assertEqual(len(result), 1)

    def test_input_is_not_mutated(self) -> None:
        clause = AndSearchClause([X, Y])
        current = [clause]
        result = apply_query_update(current, QueryUpdate(to_remove=[Y]))
        self.assertEqual(current, [clause])
        self.assertEqual(clause.get_phrases(), [X, Y])
        self.assertIsInstance(result, tuple)
        self.assertIsNot(result[0], clause)

    def test_untouched_clauses_are_kept(self) -> None:
        clause = NotSearchClause(Z)
        result = apply_query_update((clause,), QueryUpdate(to_remove=[X]))
        self.assertIs(result[0], clause)

    def test_empty_update(self) -> None:
        current = (AndSearchClause([X]), NotSearchClause(Y))
        self.assertEqual(apply_query_update(current, QueryUpdate()), current)


class TestPerformSearch(unittest.TestCase):
    def setUp(self) -> None:
        self.brca = CancerTreeNode(study_id="brca_tcga", name="Breast Carcinoma (TCGA)", cancer_type_id="brca")
        self.pdx = CancerTreeNode(study_id="brca_pdx", name="Breast Cancer Xenografts", cancer_type_id="brca")
        self.luad = CancerTreeNode(study_id="luad_tcga", name="Lung Adenocarcinoma (TCGA)", cancer_type_id="luad")

    def test_empty_query_matches_everything(self) -> None:
        self.assertEqual(perform_search((), self.brca), SearchResult(match=True))

    def test_not_clause_forces_exclusion(self) -> None:
        query = (AndSearchClause([Phrase("breast")]), NotSearchClause(Phrase("pdx")))
        self.assertEqual(perform_search(query, self.pdx), SearchResult(match=False, forced=True))
        self.assertEqual(perform_search(query, self.brca), SearchResult(match=True, forced=False))

    def test_all_and_clauses_must_match(self) -> None:
        query = (AndSearchClause([Phrase("tcga")]), AndSearchClause([Phrase("lung")]))
        self.assertTrue(perform_search(query, self.luad).match)
        self.assertEqual(perform_search(query, self.brca), SearchResult(match=False, forced=False))

    def test_filter_studies_keeps_order(self) -> None:
        query = (NotSearchClause(Phrase("xenografts")),)
        self.assertEqual(filter_studies(query, [self.luad, self.pdx, self.brca]), [self.luad, self.brca])

    def test_to_query_string(self) -> None:
        query = (AndSearchClause([Phrase("breast"), Phrase("tcga")]), AndSearchClause([]), NotSearchClause(Phrase("pdx")))
        self.assertEqual(to_query_string(query), "breast tcga - pdx")


if __name__ == "__main__":
    unittest.main()
