"""
Edit-distance metrics on skeleton text: word/letter distances, WER and CER.
"""
from typing import Tuple

from rapidfuzz.distance import Levenshtein

from .normalization import normalize


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (unit cost insert/delete/substitute)."""
    return Levenshtein.distance(a, b)


def normalized_edit_distance(a: str, b: str) -> float:
    """edit_distance / max(len(a), len(b), 1), in [0, 1]."""
    return edit_distance(a, b) / max(len(a), len(b), 1)


def wer(reference: str, hypothesis: str) -> float:
    """
    Word Error Rate: (S + D + I) / N where N = number of reference words.
    Both texts are skeleton-normalized. Returns value in [0, +inf); 0 = perfect match.
    """
    ref_words = normalize(reference).split()
    hyp_words = normalize(hypothesis or "").split()
    if not ref_words:
        return 0.0 if not hyp_words else 1.0
    return Levenshtein.distance(ref_words, hyp_words) / len(ref_words)


def cer(reference: str, hypothesis: str, remove_spaces: bool = True) -> float:
    """
    Character Error Rate: (S + D + I) / N where N = number of reference characters.
    remove_spaces: if True, compare without spaces (standard for Arabic).
    """
    ref_norm = normalize(reference)
    hyp_norm = normalize(hypothesis or "")
    if remove_spaces:
        ref_norm = ref_norm.replace(" ", "")
        hyp_norm = hyp_norm.replace(" ", "")
    if not ref_norm:
        return 0.0 if not hyp_norm else 1.0
    return Levenshtein.distance(ref_norm, hyp_norm) / len(ref_norm)


def wer_cer(reference: str, hypothesis: str) -> Tuple[float, float]:
    """Compute both WER and CER for reference vs hypothesis. Returns (wer, cer)."""
    return wer(reference, hypothesis), cer(reference, hypothesis)
