"""
Arabic/Quranic text normalization into two comparison profiles.

- skeleton: base letters only, one script, no diacritics (matching/alignment)
- full: letters + diacritics kept, punctuation removed (pronunciation checks)

Every skeleton character comes from exactly one full-form character, so the
skeleton of a word is the concatenation of the skeletons of its letters.
"""
import re
import unicodedata
from enum import Enum
from typing import List, NamedTuple, Optional, Union

TATWEEL = "\u0640"
# Small waw / small yeh (Lm) behave like Quranic annotation marks
SMALL_WAW = "\u06E5"
SMALL_YEH = "\u06E6"

# Letter variants → canonical letter. ASR often uses ا for ء and Persian ی، ک.
_VARIANT_GROUPS = (
    ("إأآاٱٲٳء", "ا"),
    ("يىیئ", "ي"),
    ("ة", "ه"),
    ("ؤو", "و"),
    ("كک", "ك"),
)
_CANONICAL = {src: dst for group, dst in _VARIANT_GROUPS for src in group}

_WHITESPACE = re.compile(r"\s+")

FATHA = "\u064E"
DAMMA = "\u064F"
KASRA = "\u0650"
SHADDA = "\u0651"
SUKUN = "\u0652"
MADDAH = "\u0653"
SUPERSCRIPT_ALEF = "\u0670"

# Canonical harakat in display order
HARAKA_NAMES = {
    FATHA: "fatha",
    DAMMA: "damma",
    KASRA: "kasra",
    "\u064B": "fathatan",
    "\u064C": "dammatan",
    "\u064D": "kasratan",
    SHADDA: "shadda",
    SUKUN: "sukun",
}
VOWELS = frozenset("\u064B\u064C\u064D\u064E\u064F\u0650")
# Uthmani spellings of the same harakat
_HARAKA_ALIASES = {
    "\u06E1": SUKUN,  # small high dotless head of khah (Uthmani sukun)
    SUPERSCRIPT_ALEF: FATHA,
    "\u08F0": "\u064B",  # open fathatan
    "\u08F1": "\u064C",  # open dammatan
    "\u08F2": "\u064D",  # open kasratan
}


class NormalizationProfile(str, Enum):
    SKELETON = "skeleton"
    FULL = "full"


SKELETON = NormalizationProfile.SKELETON
FULL = NormalizationProfile.FULL


class Letter(NamedTuple):
    """One base letter of a full-form word with the marks written on it."""
    char: str
    marks: str
    start: int  # offset of the letter in the word
    end: int    # offset just past its last mark


def _is_presentation_form(ch: str) -> bool:
    return "\uFB50" <= ch <= "\uFDFF" or "\uFE70" <= ch <= "\uFEFF"


def is_mark(ch: str) -> bool:
    """Harakat, shadda, sukun, superscript alef and Quranic annotation marks."""
    return unicodedata.category(ch).startswith("M") or ch in (SMALL_WAW, SMALL_YEH)


def _full_char(ch: str) -> str:
    if ch.isspace():
        return " "
    category = unicodedata.category(ch)
    # Punctuation, symbols (۞ ۩), format chars (end-of-ayah sign) and ayah numbers
    if category[0] in ("P", "S") or category in ("Cf", "Nd"):
        return ""
    return ch


def skeleton_letter(ch: str) -> str:
    """Skeleton of a single full-form character ('' for marks and tatweel)."""
    if ch.isspace():
        return " "
    if ch == TATWEEL or is_mark(ch):
        return ""
    return _CANONICAL.get(ch, ch)


def normalize(text: Optional[str], profile: Union[NormalizationProfile, str] = SKELETON) -> str:
    """
    Canonicalize text for the given profile. Pure; empty or None input gives "".
    Characters outside the Arabic rules (e.g. Latin letters) pass through.
    """
    profile = NormalizationProfile(profile)
    if not text:
        return ""

    text = unicodedata.normalize("NFC", text)
    if any(_is_presentation_form(ch) for ch in text):
        text = "".join(unicodedata.normalize("NFKC", ch) if _is_presentation_form(ch) else ch for ch in text)

    text = "".join(_full_char(ch) for ch in text)
    if profile is SKELETON:
        text = "".join(skeleton_letter(ch) for ch in text)

    return _WHITESPACE.sub(" ", text).strip()


def haraka_signature(marks: str) -> frozenset:
    """Set of canonical harakat written on a letter (Quranic annotation marks ignored)."""
    canonical = (_HARAKA_ALIASES.get(ch, ch) for ch in marks)
    return frozenset(ch for ch in canonical if ch in HARAKA_NAMES)


def split_letters(word: str) -> List[Letter]:
    """
    Split a full-form word into (letter, marks) records in reading order.
    Marks with no preceding letter are dropped; tatweel extends the previous letter.
    """
    letters: List[Letter] = []
    for offset, ch in enumerate(word):
        if ch == TATWEEL or is_mark(ch):
            if not letters:
                continue
            prev = letters[-1]
            marks = prev.marks if ch == TATWEEL else prev.marks + ch
            letters[-1] = prev._replace(marks=marks, end=offset + 1)
            continue
        letters.append(Letter(char=ch, marks="", start=offset, end=offset + 1))
    return letters
