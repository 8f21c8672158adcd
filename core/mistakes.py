"""
Mistake classification for a reference word and the spoken word paired with it.

Letter-level divergences come from the edit script between the two skeletons;
consecutive edit operations form one divergence region and one mistake.
Haraka mismatches are read from the diacritics on letters the skeletons agree
on. A region that only drops or adds lengthening letters (a plain ا و ي ى with
no marks of its own, after the matching short vowel) is a madd error rather
than a letter error.
"""
from typing import List, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from .models import Mistake, MistakeType, NormalizedToken
from .normalization import (
    DAMMA,
    FATHA,
    HARAKA_NAMES,
    KASRA,
    SUKUN,
    VOWELS,
    Letter,
    haraka_signature,
    skeleton_letter,
    split_letters,
)

# Elongation letter -> short vowels it lengthens
ELONGATION_LETTERS = {
    "ا": frozenset({FATHA}),
    "ى": frozenset({FATHA, KASRA}),
    "و": frozenset({DAMMA}),
    "ي": frozenset({KASRA}),
}
HAMZA_MARKS = frozenset("\u0654\u0655")


def _describe_harakat(signature: frozenset) -> str:
    names = [name for ch, name in HARAKA_NAMES.items() if ch in signature]
    return "+".join(names) if names else "none"


def _plural(chunk: str) -> str:
    return "letters" if len(chunk) > 1 else "letter"


def _chars(letters: Sequence[Letter], start: int, end: int) -> str:
    return "".join(l.char for l in letters[start:end])


def _is_elongation(letters: Sequence[Letter], k: int) -> bool:
    """Letter k only lengthens the vowel of the letter before it."""
    letter = letters[k]
    if k == 0 or letter.char not in ELONGATION_LETTERS:
        return False
    if haraka_signature(letter.marks) or any(m in HAMZA_MARKS for m in letter.marks):
        return False
    before = haraka_signature(letters[k - 1].marks)
    if before & ELONGATION_LETTERS[letter.char]:
        return True
    # Unvocalized text: nothing contradicts a long vowel
    return not (before & VOWELS) and SUKUN not in before


def _gap_windows(skel: str, start: int, end: int) -> List[Tuple[int, int]]:
    """
    Equivalent placements of a one-sided gap [start, end) in skel: sliding it
    through a run of repeated letters leaves the same remaining text.
    """
    windows = [(start, end)]
    s, e = start, end
    while s > 0 and skel[s - 1] == skel[e - 1]:
        s, e = s - 1, e - 1
        windows.append((s, e))
    s, e = start, end
    while e < len(skel) and skel[e] == skel[s]:
        s, e = s + 1, e + 1
        windows.append((s, e))
    return windows


def _gap_mistake(letters: Sequence[Letter], skel: str, start: int, end: int, ref_position: int, deleted: bool) -> Mistake:
    """
    Omission (deleted=True, letters from the reference) or insertion (letters
    from the spoken word). Any placement of the gap that lands on a consonant
    makes it a letter mistake, so a dropped hamza next to an alif is not madd.
    """
    consonant = next(
        ((s, e) for s, e in _gap_windows(skel, start, end)
         if not all(_is_elongation(letters, k) for k in range(s, e))),
        None,
    )
    if consonant is None:
        chunk = _chars(letters, start, end)
        if deleted:
            return Mistake(MistakeType.MADD_ERROR, f"Elongation too short: missing '{chunk}'", ref_position)
        return Mistake(MistakeType.MADD_ERROR, f"Elongation too long: extra '{chunk}'", ref_position)

    s, e = consonant
    chunk = _chars(letters, s, e)
    position = ref_position + (s - start)
    if deleted:
        return Mistake(MistakeType.LETTER_OMISSION, f"Missing {_plural(chunk)} '{chunk}'", position)
    return Mistake(MistakeType.LETTER_INSERTION, f"Extra {_plural(chunk)} '{chunk}'", position)


def _region_mistake(
    ref_letters: Sequence[Letter],
    spoken_letters: Sequence[Letter],
    ref_skel: str,
    spoken_skel: str,
    region: List[int],
) -> Mistake:
    src_start, src_end, dest_start, dest_end = region
    if src_start < src_end and dest_start < dest_end:
        return Mistake(
            MistakeType.LETTER_SUBSTITUTION,
            f"'{_chars(ref_letters, src_start, src_end)}' pronounced as "
            f"'{_chars(spoken_letters, dest_start, dest_end)}'",
            src_start,
        )
    if src_start < src_end:
        return _gap_mistake(ref_letters, ref_skel, src_start, src_end, src_start, deleted=True)
    return _gap_mistake(spoken_letters, spoken_skel, dest_start, dest_end, src_start, deleted=False)


def _haraka_mistakes(
    ref_letters: List[Letter],
    spoken_letters: List[Letter],
    ref_start: int,
    spoken_start: int,
    length: int,
) -> List[Mistake]:
    """Haraka mismatches over a run of letters both skeletons agree on, one per contiguous region."""
    mistakes: List[Mistake] = []
    region: List[int] = []
    expected: Optional[frozenset] = None
    heard: Optional[frozenset] = None

    def flush():
        if not region:
            return
        letters = "".join(ref_letters[k].char for k in region)
        if len(region) == 1:
            desc = f"Haraka on '{letters}' should be {_describe_harakat(expected)}, heard {_describe_harakat(heard)}"
        else:
            desc = f"Harakat differ on '{letters}'"
        mistakes.append(Mistake(MistakeType.HARAKA_ERROR, desc, region[0]))
        region.clear()

    for k in range(length):
        ri, si = ref_start + k, spoken_start + k
        spoken_sig = haraka_signature(spoken_letters[si].marks)
        ref_sig = haraka_signature(ref_letters[ri].marks)
        # Letters the reciter left unvocalized are not judged
        if spoken_sig and spoken_sig != ref_sig:
            if not region:
                expected, heard = ref_sig, spoken_sig
            region.append(ri)
        else:
            flush()
    flush()
    return mistakes


def classify_mistakes(ref: NormalizedToken, spoken: NormalizedToken) -> List[Mistake]:
    """
    Localize and type the divergences between a reference word and its spoken
    counterpart, ordered by position in the reference word.
    """
    ref_letters = split_letters(ref.full)
    spoken_letters = split_letters(spoken.full)
    ref_skel = "".join(skeleton_letter(l.char) for l in ref_letters)
    spoken_skel = "".join(skeleton_letter(l.char) for l in spoken_letters)

    mistakes: List[Mistake] = []
    region: Optional[List[int]] = None  # [src_start, src_end, dest_start, dest_end]
    for op in Levenshtein.opcodes(ref_skel, spoken_skel):
        if op.tag != "equal":
            if region is None:
                region = [op.src_start, op.src_end, op.dest_start, op.dest_end]
            else:
                region[1], region[3] = op.src_end, op.dest_end
            continue
        if region is not None:
            mistakes.append(_region_mistake(ref_letters, spoken_letters, ref_skel, spoken_skel, region))
            region = None
        mistakes.extend(_haraka_mistakes(
            ref_letters, spoken_letters, op.src_start, op.dest_start, op.src_end - op.src_start,
        ))
    if region is not None:
        mistakes.append(_region_mistake(ref_letters, spoken_letters, ref_skel, spoken_skel, region))

    mistakes.sort(key=lambda m: m.position)
    return mistakes


def omission_mistake(ref: NormalizedToken) -> Mistake:
    """The single mistake carried by a reference word that was never recited."""
    return Mistake(MistakeType.WORD_OMISSION, f"Word '{ref.original}' was not recited", 0)
