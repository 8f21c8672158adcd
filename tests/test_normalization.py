"""
Unit tests for text normalization and tokenization: skeleton/full profiles,
letter splitting, word tokens and transcript segmentation.
Run: python -m pytest tests/test_normalization.py -v
"""
import unittest

from core.normalization import (
    FULL,
    KASRA,
    SKELETON,
    SUKUN,
    Letter,
    NormalizationProfile,
    haraka_signature,
    normalize,
    split_letters,
)
from core.tokenizer import segment_transcript_by_reference, tokenize, tokenize_normalized

BASMALA = "بِسْمِ اللَّهِ الرَّحْمٰنِ الرَّحِيمِ"


class TestSkeletonProfile(unittest.TestCase):
    def test_diacritics_removed(self):
        self.assertEqual(normalize(BASMALA, SKELETON), "بسم الله الرحمن الرحيم")

    def test_default_profile_is_skeleton(self):
        self.assertEqual(normalize(BASMALA), normalize(BASMALA, SKELETON))

    def test_profile_by_name(self):
        self.assertEqual(normalize(BASMALA, "skeleton"), normalize(BASMALA, NormalizationProfile.SKELETON))

    def test_alef_variants_unified(self):
        self.assertEqual(normalize("إِيَّاكَ"), "اياك")

    def test_persian_letters_unified(self):
        # Persian ی ک vs Arabic ي ك
        self.assertEqual(normalize("الرحیم"), "الرحيم")
        self.assertEqual(normalize("کتاب"), "كتاب")

    def test_ayah_marker_and_number_removed(self):
        self.assertEqual(normalize("الرَّحِيمِ \u06DD\u0661"), "الرحيم")

    def test_tatweel_removed(self):
        self.assertEqual(normalize("الرح\u0640\u0640\u0640من"), "الرحمن")

    def test_presentation_form_expanded(self):
        self.assertEqual(normalize("\uFEFB"), "لا")

    def test_latin_passes_through(self):
        self.assertEqual(normalize("hello  world"), "hello world")

    def test_empty_and_none(self):
        self.assertEqual(normalize(""), "")
        self.assertEqual(normalize(None), "")
        self.assertEqual(normalize("   ", FULL), "")

    def test_idempotent(self):
        once = normalize(BASMALA)
        self.assertEqual(normalize(once), once)


class TestFullProfile(unittest.TestCase):
    def test_diacritics_kept_punctuation_removed(self):
        self.assertEqual(normalize("بِسْمِ، الْحَمْدُ!", FULL), "بِسْمِ الْحَمْدُ")

    def test_whitespace_collapsed(self):
        self.assertEqual(normalize("  بِسْمِ \n\t الْحَمْدُ ", FULL), "بِسْمِ الْحَمْدُ")

    def test_skeleton_of_full_equals_skeleton(self):
        self.assertEqual(normalize(normalize(BASMALA, FULL)), normalize(BASMALA))


class TestSplitLetters(unittest.TestCase):
    def test_letters_and_marks(self):
        letters = split_letters("بِسْمِ")
        self.assertEqual([l.char for l in letters], ["ب", "س", "م"])
        self.assertEqual([(l.start, l.end) for l in letters], [(0, 2), (2, 4), (4, 6)])
        self.assertEqual(haraka_signature(letters[1].marks), frozenset({SUKUN}))
        self.assertEqual(haraka_signature(letters[2].marks), frozenset({KASRA}))

    def test_leading_mark_dropped(self):
        self.assertEqual(split_letters("\u064Eب"), [Letter("ب", "", 1, 2)])

    def test_tatweel_extends_letter(self):
        letters = split_letters("ب\u0640\u064E")
        self.assertEqual(len(letters), 1)
        self.assertEqual(letters[0].end, 3)

    def test_uthmani_sukun_alias(self):
        self.assertEqual(haraka_signature("\u06E1"), frozenset({SUKUN}))


class TestTokenizer(unittest.TestCase):
    def test_tokenize_whitespace(self):
        self.assertEqual(tokenize("  بسم   الله \n"), ["بسم", "الله"])
        self.assertEqual(tokenize(None), [])

    def test_tokens_carry_both_profiles(self):
        tokens = tokenize_normalized(BASMALA)
        self.assertEqual(len(tokens), 4)
        self.assertEqual(tokens[0].original, "بِسْمِ")
        self.assertEqual(tokens[0].skeleton, "بسم")
        self.assertEqual(tokens[0].full, "بِسْمِ")
        self.assertEqual([t.position for t in tokens], [0, 1, 2, 3])

    def test_mark_only_tokens_dropped(self):
        tokens = tokenize_normalized("بِسْمِ اللَّهِ \u06DD\u0661")
        self.assertEqual([t.skeleton for t in tokens], ["بسم", "الله"])

    def test_ligature_word(self):
        tokens = tokenize_normalized("\uFDF2")
        self.assertEqual([t.skeleton for t in tokens], ["الله"])

    def test_empty(self):
        self.assertEqual(tokenize_normalized(""), [])
        self.assertEqual(tokenize_normalized("۞ ، !"), [])


class TestSegmentTranscript(unittest.TestCase):
    def test_unspaced_transcript_segmented(self):
        out = segment_transcript_by_reference("بسماللهالرحمنالرحيم", BASMALA)
        self.assertEqual(out, "بسم الله الرحمن الرحيم")

    def test_spaced_transcript_unchanged(self):
        out = segment_transcript_by_reference("بسم الله الرحمن الرحيم", BASMALA)
        self.assertEqual(out, "بسم الله الرحمن الرحيم")

    def test_empty_inputs(self):
        self.assertEqual(segment_transcript_by_reference("", BASMALA), "")
        self.assertEqual(segment_transcript_by_reference("بسم", ""), "بسم")


if __name__ == "__main__":
    unittest.main()
