"""
Unit tests for word-level alignment: order preservation, coverage, gap handling
and the pairing ceiling.
Run: python -m pytest tests/test_alignment.py -v
"""
import unittest

from alignment.word_alignment import align_words, match_cost_matrix, pairing_ceiling
from core.models import AlignmentPair
from core.tokenizer import tokenize_normalized

BASMALA = "بسم الله الرحمن الرحيم"


def _align(ref_text, spoken_text, **kwargs):
    ref = tokenize_normalized(ref_text)
    spoken = tokenize_normalized(spoken_text)
    return ref, spoken, align_words(ref, spoken, **kwargs)


def _as_tuples(pairs):
    return [(p.ref_index, p.spoken_index) for p in pairs]


class TestAlignWords(unittest.TestCase):
    def test_identical(self):
        _, _, pairs = _align(BASMALA, BASMALA)
        self.assertEqual(_as_tuples(pairs), [(0, 0), (1, 1), (2, 2), (3, 3)])

    def test_dropped_last_word(self):
        _, _, pairs = _align(BASMALA, "بسم الله الرحمن")
        self.assertEqual(_as_tuples(pairs), [(0, 0), (1, 1), (2, 2), (3, None)])

    def test_trailing_extra_word(self):
        _, _, pairs = _align(BASMALA, BASMALA + " كتاب")
        self.assertEqual(_as_tuples(pairs)[-1], (None, 4))

    def test_extra_word_in_the_middle(self):
        _, _, pairs = _align("بسم الله الرحمن", "بسم كتاب الله الرحمن")
        self.assertEqual(_as_tuples(pairs), [(0, 0), (None, 1), (1, 2), (2, 3)])

    def test_substituted_word_still_paired(self):
        _, _, pairs = _align("الحمد لله رب العالمين", "الحمد كله رب العالمين")
        self.assertEqual(_as_tuples(pairs), [(0, 0), (1, 1), (2, 2), (3, 3)])

    def test_empty_spoken(self):
        _, _, pairs = _align(BASMALA, "")
        self.assertEqual(_as_tuples(pairs), [(0, None), (1, None), (2, None), (3, None)])

    def test_empty_reference(self):
        _, _, pairs = _align("", "بسم الله")
        self.assertEqual(_as_tuples(pairs), [(None, 0), (None, 1)])

    def test_both_empty(self):
        _, _, pairs = _align("", "")
        self.assertEqual(pairs, [])

    def test_dissimilar_words_never_paired(self):
        _, _, pairs = _align("بسم", "كتاب")
        self.assertEqual(sorted(_as_tuples(pairs), key=str), sorted([(0, None), (None, 0)], key=str))

    def test_different_scripts_never_paired(self):
        _, _, pairs = _align("بسم الله", "hello world")
        self.assertFalse(any(p.is_match for p in pairs))

    def test_order_and_coverage(self):
        cases = [
            (BASMALA, "الله بسم الرحيم"),
            (BASMALA, "بسم بسم الله الله الرحمن"),
            ("الحمد لله رب العالمين", "الحمد رب"),
            ("قل هو الله احد", "قل الله هو احد الصمد"),
        ]
        for ref_text, spoken_text in cases:
            ref, spoken, pairs = _align(ref_text, spoken_text)
            ref_seen = [p.ref_index for p in pairs if p.ref_index is not None]
            spoken_seen = [p.spoken_index for p in pairs if p.spoken_index is not None]
            self.assertEqual(ref_seen, list(range(len(ref))), (ref_text, spoken_text))
            self.assertEqual(spoken_seen, list(range(len(spoken))), (ref_text, spoken_text))

    def test_deterministic(self):
        _, _, first = _align(BASMALA, "بسم الرحمان الرحيم كتاب")
        _, _, second = _align(BASMALA, "بسم الرحمان الرحيم كتاب")
        self.assertEqual(first, second)


class TestPairingCeiling(unittest.TestCase):
    def test_ceiling_is_twice_gap_cost(self):
        self.assertAlmostEqual(pairing_ceiling(0.4), 0.8)

    def test_lower_gap_cost_rejects_distant_pairs(self):
        # لله vs كله: distance 1/3, above a 0.2 ceiling
        _, _, pairs = _align("لله", "كله", gap_cost=0.1)
        self.assertFalse(any(p.is_match for p in pairs))
        # الرحمن vs الرحمان: distance 1/7, below it
        _, _, pairs = _align("الرحمن", "الرحمان", gap_cost=0.1)
        self.assertEqual(_as_tuples(pairs), [(0, 0)])

    def test_cost_matrix_shape(self):
        ref = tokenize_normalized(BASMALA)
        spoken = tokenize_normalized("بسم الله")
        costs = match_cost_matrix(ref, spoken)
        self.assertEqual(costs.shape, (4, 2))
        self.assertEqual(costs[0, 0], 0.0)


class TestAlignmentPair(unittest.TestCase):
    def test_needs_one_index(self):
        with self.assertRaises(ValueError):
            AlignmentPair(None, None)

    def test_is_match(self):
        self.assertTrue(AlignmentPair(0, 1).is_match)
        self.assertFalse(AlignmentPair(0, None).is_match)
        self.assertFalse(AlignmentPair(None, 2).is_match)


if __name__ == "__main__":
    unittest.main()
