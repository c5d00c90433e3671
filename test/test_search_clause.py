"""Tests for NOT/AND search clause contracts."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from StudySearch.core.clause import AndSearchClause, InvalidClauseError, NotSearchClause
from StudySearch.core.models import CancerTreeNode, StudyField
from StudySearch.core.phrase import Phrase

A = Phrase("breast")
B = Phrase("tcga")
C = Phrase("hg19", "reference-genome:hg19", frozenset({StudyField.REFERENCE_GENOME}))

STUDY = CancerTreeNode(
    study_id="brca_tcga",
    name="Breast Invasive Carcinoma (TCGA)",
    reference_genome="hg19",
)


class TestNotSearchClause(unittest.TestCase):
    def test_variant_flags_and_phrases(self) -> None:
        clause = NotSearchClause(A)
        self.assertTrue(clause.is_not())
        self.assertFalse(clause.is_and())
        self.assertEqual(clause.get_phrases(), [A])

    def test_to_string(self) -> None:
        self.assertEqual(str(NotSearchClause(C)), "- reference-genome:hg19")
        self.assertEqual(str(NotSearchClause(None)), "")

    def test_contains_phrase(self) -> None:
        clause = NotSearchClause(A)
        self.assertTrue(clause.contains(Phrase("breast", "other display")))
        self.assertFalse(clause.contains(B))

    def test_contains_none(self) -> None:
        self.assertFalse(NotSearchClause(A).contains(None))
        self.assertTrue(NotSearchClause(None).contains(None))

    def test_contains_predicate(self) -> None:
        clause = NotSearchClause(A)
        self.assertTrue(clause.contains(lambda p: p.phrase.startswith("bre")))
        self.assertFalse(clause.contains_matching(lambda p: bool(p.fields)))

    def test_equality(self) -> None:
        self.assertTrue(NotSearchClause(A).equals(NotSearchClause(Phrase("breast"))))
        self.assertFalse(NotSearchClause(A).equals(NotSearchClause(B)))
        self.assertEqual(NotSearchClause(A), NotSearchClause(A))

    def test_match(self) -> None:
        self.assertFalse(NotSearchClause(A).match(STUDY))
        self.assertTrue(NotSearchClause(Phrase("lung")).match(STUDY))
        self.assertTrue(NotSearchClause(None).match(STUDY))

    def test_rejects_non_phrase(self) -> None:
        with self.assertRaises(InvalidClauseError):
            NotSearchClause("breast")


class TestAndSearchClause(unittest.TestCase):
    def test_variant_flags_and_phrases_keep_order(self) -> None:
        clause = AndSearchClause([B, A, C])
        self.assertFalse(clause.is_not())
        self.assertTrue(clause.is_and())
        self.assertEqual(clause.get_phrases(), [B, A, C])

    def test_to_string(self) -> None:
        self.assertEqual(str(AndSearchClause([A, C])), "breast reference-genome:hg19")
        self.assertEqual(str(AndSearchClause([])), "")

    def test_contains(self) -> None:
        clause = AndSearchClause([A, B])
        self.assertTrue(clause.contains(B))
        self.assertFalse(clause.contains(C))
        self.assertTrue(clause.contains_phrase(Phrase("tcga")))

    def test_contains_none(self) -> None:
        self.assertTrue(AndSearchClause([]).contains(None))
        self.assertFalse(AndSearchClause([A]).contains(None))

    def test_contains_predicate_short_circuits(self) -> None:
        seen: list[Phrase] = []

        def predicate(phrase: Phrase) -> bool:
            seen.append(phrase)
            return phrase.phrase == "breast"

        self.assertTrue(AndSearchClause([A, B, C]).contains(predicate))
        self.assertEqual(seen, [A])
        self.assertFalse(AndSearchClause([]).contains(predicate))

    def test_equality_is_order_independent(self) -> None:
        self.assertTrue(AndSearchClause([A, B]).equals(AndSearchClause([B, A])))
        self.assertEqual(hash(AndSearchClause([A, B])), hash(AndSearchClause([B, A])))

    def test_equality_requires_mutual_containment(self) -> None:
        self.assertFalse(AndSearchClause([A, B]).equals(AndSearchClause([A])))
        self.assertFalse(AndSearchClause([A]).equals(AndSearchClause([A, B])))

    def test_duplicate_phrases_collapse(self) -> None:
        self.assertTrue(AndSearchClause([A, A, B]).equals(AndSearchClause([B, A])))

    def test_empty_clauses_are_equal(self) -> None:
        self.assertTrue(AndSearchClause([]).equals(AndSearchClause(())))

    def test_match(self) -> None:
        self.assertTrue(AndSearchClause([A, B, C]).match(STUDY))
        self.assertFalse(AndSearchClause([A, Phrase("lung")]).match(STUDY))
        self.assertTrue(AndSearchClause([]).match(STUDY))

    def test_input_list_is_not_aliased(self) -> None:
        phrases = [A]
        clause = AndSearchClause(phrases)
        phrases.append(B)
        self.assertEqual(clause.get_phrases(), [A])

    def test_invalid_construction(self) -> None:
        with self.assertRaises(InvalidClauseError):
            AndSearchClause(None)
        with self.assertRaises(InvalidClauseError):
            AndSearchClause([A, "tcga"])
        with self.assertRaises(InvalidClauseError):
            AndSearchClause(A)


class TestClauseEqualityLaws(unittest.TestCase):
    def test_variant_sensitive(self) -> None:
        for phrase in (A, B, C):
            self.assertFalse(NotSearchClause(phrase).equals(AndSearchClause([phrase])))
            self.assertFalse(AndSearchClause([phrase]).equals(NotSearchClause(phrase)))
            self.assertNotEqual(NotSearchClause(phrase), AndSearchClause([phrase]))

    def test_reflexive_and_symmetric(self) -> None:
        clauses = [
            NotSearchClause(A),
            NotSearchClause(C),
            AndSearchClause([]),
            AndSearchClause([A, B]),
            AndSearchClause([B, A]),
            AndSearchClause([C]),
        ]
        for left in clauses:
            self.assertTrue(left.equals(left))
            for right in clauses:
                self.assertEqual(left.equals(right), right.equals(left))

    def test_not_equal_to_other_types(self) -> None:
        self.assertNotEqual(NotSearchClause(A), "- breast")


if __name__ == "__main__":
    unittest.main()
