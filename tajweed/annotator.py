"""
Tajweed annotation of reference words by positional scanning.

Each detector looks at letter k of a word (and at most the letter after it) and
returns the letter index just past the match, or None. Detectors run in
registry order over every position; annotations are then ordered by the
offset of their first character, registry order breaking ties.
"""
from typing import List, Optional, Sequence

from core.models import TajweedAnnotation
from core.normalization import (
    DAMMA,
    FATHA,
    KASRA,
    MADDAH,
    SHADDA,
    SUKUN,
    SUPERSCRIPT_ALEF,
    VOWELS,
    Letter,
    haraka_signature,
    split_letters,
)
from tajweed.rules import RULE_ORDER, TAJWEED_RULES

# Small high/low meem written over a noon or tanween to mark iqlab
IQLAB_MARKS = ("\u06E2", "\u06ED")
TANWEEN = frozenset("\u064B\u064C\u064D")


class TajweedAnnotator:
    """
    Static (text-only) tajweed checks: Ghunnah, Idgham, Ikhfa, Iqlab,
    Meem Sakinah, Qalqalah and Madd. Stateless; one instance can be shared.

    Noon/meem rules look at the letter that follows; for the last letter of a
    word that is the first letter of the next reference word, when given.
    Spans never leave the annotated word.
    """

    qalqalah_letters = frozenset("قطبجد")
    idgham_letters = frozenset("يرملون")
    ikhfa_letters = frozenset("تثجدذزسشصضطظفقك")
    madd_after = {FATHA: frozenset("اى"), DAMMA: frozenset("و"), KASRA: frozenset("يى")}

    def __init__(self):
        self._detectors = (
            ("ghunnah", self._detect_ghunnah),
            ("idgham", self._detect_idgham),
            ("ikhfa", self._detect_ikhfa),
            ("iqlab", self._detect_iqlab),
            ("ikhfa_shafawi", self._detect_ikhfa_shafawi),
            ("idgham_shafawi", self._detect_idgham_shafawi),
            ("qalqalah", self._detect_qalqalah),
            ("madd", self._detect_madd),
            ("madd_long", self._detect_madd_long),
        )

    @staticmethod
    def _is_sakin(letter: Letter, vocalized: bool) -> bool:
        sig = haraka_signature(letter.marks)
        if SUKUN in sig:
            return True
        return vocalized and not (sig & VOWELS) and SHADDA not in sig

    def _noon_follower(self, letters: Sequence[Letter], k: int, vocalized: bool, next_first: Optional[Letter]):
        """
        (following letter, end index) when letter k is a noon sakinah or carries
        tanween; (None, None) otherwise. The end index covers the following
        letter only when it is in the same word.
        """
        letter = letters[k]
        last = len(letters) - 1
        if haraka_signature(letter.marks) & TANWEEN:
            # Fathatan is written before a silent alif / alif maqsura
            silent_tail = (
                k == last - 1
                and letters[last].char in "اى"
                and not haraka_signature(letters[last].marks)
            )
            if k == last or silent_tail:
                return next_first, k + 1
            return None, None
        if letter.char != "ن" or not self._is_sakin(letter, vocalized):
            return None, None
        if k < last:
            return letters[k + 1], k + 2
        return next_first, k + 1

    def _meem_follower(self, letters, k, vocalized, next_first):
        letter = letters[k]
        if letter.char != "م" or not self._is_sakin(letter, vocalized):
            return None, None
        if k < len(letters) - 1:
            return letters[k + 1], k + 2
        return next_first, k + 1

    def _detect_ghunnah(self, letters, k, vocalized, next_first):
        if letters[k].char in "نم" and SHADDA in haraka_signature(letters[k].marks):
            return k + 1
        return None

    def _detect_idgham(self, letters, k, vocalized, next_first):
        follower, end = self._noon_follower(letters, k, vocalized, next_first)
        # Inside one word the noon stays clear (izhar mutlaq), so only across words
        if follower is None or follower is not next_first:
            return None
        return end if follower.char in self.idgham_letters else None

    def _detect_ikhfa(self, letters, k, vocalized, next_first):
        follower, end = self._noon_follower(letters, k, vocalized, next_first)
        if follower is not None and follower.char in self.ikhfa_letters:
            return end
        return None

    def _detect_iqlab(self, letters, k, vocalized, next_first):
        if any(mark in letters[k].marks for mark in IQLAB_MARKS):
            return k + 1
        follower, end = self._noon_follower(letters, k, vocalized, next_first)
        if follower is not None and follower.char == "ب":
            return end
        return None

    def _detect_ikhfa_shafawi(self, letters, k, vocalized, next_first):
        follower, end = self._meem_follower(letters, k, vocalized, next_first)
        if follower is not None and follower.char == "ب":
            return end
        return None

    def _detect_idgham_shafawi(self, letters, k, vocalized, next_first):
        follower, end = self._meem_follower(letters, k, vocalized, next_first)
        if follower is not None and follower.char == "م":
            return end
        return None

    def _detect_qalqalah(self, letters, k, vocalized, next_first):
        if letters[k].char not in self.qalqalah_letters:
            return None
        # Word-final: the reciter stops on it
        if k == len(letters) - 1 or SUKUN in haraka_signature(letters[k].marks):
            return k + 1
        return None

    def _detect_madd(self, letters, k, vocalized, next_first):
        if SUPERSCRIPT_ALEF in letters[k].marks:
            return k + 1
        if k + 1 >= len(letters):
            return None
        sig = haraka_signature(letters[k].marks)
        nxt = letters[k + 1]
        if haraka_signature(nxt.marks) & (VOWELS | {SHADDA}):
            return None
        for vowel, elongation in self.madd_after.items():
            if vowel in sig and nxt.char in elongation:
                return k + 2
        return None

    def _detect_madd_long(self, letters, k, vocalized, next_first):
        if letters[k].char == "آ" or MADDAH in letters[k].marks:
            return k + 1
        return None

    def annotate(self, full_word: str, next_word: Optional[str] = None) -> List[TajweedAnnotation]:
        """
        Annotations for one full-form (diacritized) word, ordered by position.
        next_word: the following reference word, for rules that span a word boundary.
        """
        letters = split_letters(full_word or "")
        following = split_letters(next_word or "")
        next_first = following[0] if following else None
        vocalized = any(haraka_signature(l.marks) for l in letters)
        found = []
        for rule_id, detect in self._detectors:
            for k in range(len(letters)):
                end = detect(letters, k, vocalized, next_first)
                if end is None:
                    continue
                rule = TAJWEED_RULES[rule_id]
                found.append(TajweedAnnotation(
                    rule=rule_id,
                    span=(letters[k].start, letters[end - 1].end),
                    info=rule.info,
                ))
        found.sort(key=lambda a: (a.span[0], RULE_ORDER[a.rule]))
        return found


_default_annotator = TajweedAnnotator()


def annotate_word(full_word: str, next_word: Optional[str] = None) -> List[TajweedAnnotation]:
    """Annotate one reference word with the shared stateless annotator."""
    return _default_annotator.annotate(full_word, next_word)
