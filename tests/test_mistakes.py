"""
Unit tests for mistake classification between a reference word and the spoken word paired with it.
Run: python -m pytest tests/test_mistakes.py -v
"""
import unittest

from core.mistakes import classify_mistakes, omission_mistake
from core.models import MistakeType
from core.tokenizer import tokenize_normalized


def _token(text):
    return tokenize_normalized(text)[0]


def _types(ref, spoken):
    return [m.type for m in classify_mistakes(_token(ref), _token(spoken))]


class TestLetterMistakes(unittest.TestCase):
    def test_identical_has_no_mistakes(self):
        self.assertEqual(_types("الرحمن", "الرحمن"), [])

    def test_substitution(self):
        mistakes = classify_mistakes(_token("لله"), _token("كله"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.LETTER_SUBSTITUTION])
        self.assertEqual(mistakes[0].position, 0)
        self.assertIn("ل", mistakes[0].description)
        self.assertIn("ك", mistakes[0].description)

    def test_omission(self):
        mistakes = classify_mistakes(_token("الرحيم"), _token("الريم"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.LETTER_OMISSION])
        self.assertEqual(mistakes[0].position, 3)
        self.assertIn("ح", mistakes[0].description)

    def test_insertion(self):
        self.assertEqual(_types("بسم", "بسسم"), [MistakeType.LETTER_INSERTION])

    def test_persian_letters_are_not_mistakes(self):
        self.assertEqual(_types("الرحيم", "الرحیم"), [])

    def test_dropped_hamza_after_alif(self):
        mistakes = classify_mistakes(_token("السَّمَاءِ"), _token("السما"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.LETTER_OMISSION])
        self.assertEqual(mistakes[0].position, 5)
        self.assertIn("ء", mistakes[0].description)

    def test_dropped_initial_hamza(self):
        mistakes = classify_mistakes(_token("أَكَلَ"), _token("كل"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.LETTER_OMISSION])
        self.assertEqual(mistakes[0].position, 0)
        self.assertIn("أ", mistakes[0].description)

    def test_added_initial_hamza(self):
        self.assertEqual(_types("كل", "أكل"), [MistakeType.LETTER_INSERTION])

    def test_dropped_conjunction_waw(self):
        mistakes = classify_mistakes(_token("وَقَالَ"), _token("قال"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.LETTER_OMISSION])
        self.assertIn("و", mistakes[0].description)

    def test_dropped_consonantal_ya(self):
        self.assertEqual(_types("يَوْمِ", "وم"), [MistakeType.LETTER_OMISSION])

    def test_dropped_waw_with_sukun(self):
        self.assertEqual(_types("يَوْمِ", "يَمِ"), [MistakeType.LETTER_OMISSION])

    def test_adjacent_edits_are_one_mistake(self):
        mistakes = classify_mistakes(_token("الرحيم"), _token("الركتيم"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.LETTER_SUBSTITUTION])
        self.assertEqual(mistakes[0].position, 3)
        self.assertEqual(len(classify_mistakes(_token("مستقيم"), _token("مستكتيم"))), 1)


class TestMaddMistakes(unittest.TestCase):
    def test_elongation_added(self):
        mistakes = classify_mistakes(_token("الرَّحْمٰنِ"), _token("الرحمان"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.MADD_ERROR])
        self.assertEqual(mistakes[0].position, 5)

    def test_elongation_dropped(self):
        self.assertEqual(_types("العالمين", "العلمين"), [MistakeType.MADD_ERROR])

    def test_elongation_after_matching_vowel(self):
        self.assertEqual(_types("قَالَ", "قَلَ"), [MistakeType.MADD_ERROR])
        self.assertEqual(_types("يَقُولُ", "يَقُلُ"), [MistakeType.MADD_ERROR])


class TestHarakaMistakes(unittest.TestCase):
    def test_wrong_vowel_with_madd(self):
        mistakes = classify_mistakes(_token("الرَّحْمٰنِ"), _token("الرَّحْمَانُ"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.MADD_ERROR, MistakeType.HARAKA_ERROR])
        self.assertIn("kasra", mistakes[1].description)
        self.assertIn("damma", mistakes[1].description)

    def test_wrong_vowel(self):
        mistakes = classify_mistakes(_token("بِسْمِ"), _token("بَسْمِ"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.HARAKA_ERROR])
        self.assertEqual(mistakes[0].position, 0)

    def test_unvocalized_spoken_not_judged(self):
        self.assertEqual(_types("بِسْمِ", "بسم"), [])

    def test_contiguous_region_is_one_mistake(self):
        mistakes = classify_mistakes(_token("بِسْمِ"), _token("بَسَمَ"))
        self.assertEqual([m.type for m in mistakes], [MistakeType.HARAKA_ERROR])

    def test_sorted_by_position(self):
        mistakes = classify_mistakes(_token("الرَّحْمٰنِ"), _token("كرَّحْمٰنُ"))
        positions = [m.position for m in mistakes]
        self.assertEqual(positions, sorted(positions))


class TestOmission(unittest.TestCase):
    def test_word_omission(self):
        mistake = omission_mistake(_token("الرَّحِيمِ"))
        self.assertEqual(mistake.type, MistakeType.WORD_OMISSION)
        self.assertIn("الرَّحِيمِ", mistake.description)


if __name__ == "__main__":
    unittest.main()
