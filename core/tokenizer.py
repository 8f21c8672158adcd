"""
Word tokenization of reference and spoken text into NormalizedToken sequences.
"""
from typing import List, Optional

from rapidfuzz import fuzz

from .models import NormalizedToken
from .normalization import FULL, SKELETON, normalize


def tokenize(text: Optional[str]) -> List[str]:
    """Split on runs of whitespace, drop empty tokens, keep source order."""
    return (text or "").split()


def tokenize_normalized(text: Optional[str]) -> List[NormalizedToken]:
    """
    Tokenize raw text and compute both profiles per word.
    Words with an empty skeleton (punctuation, lone Quranic marks, ayah numbers) are dropped.
    """
    tokens: List[NormalizedToken] = []
    for raw in tokenize(text):
        # Ligature expansion can split one raw token into several words
        pieces = tokenize(normalize(raw, FULL))
        for piece in pieces:
            skeleton = normalize(piece, SKELETON)
            if not skeleton:
                continue
            tokens.append(NormalizedToken(
                original=raw if len(pieces) == 1 else piece,
                skeleton=skeleton,
                full=piece,
                position=len(tokens),
            ))
    return tokens


def segment_transcript_by_reference(raw_transcript: Optional[str], reference_text: Optional[str]) -> str:
    """
    When a speech engine returns text without spaces, segment it using the
    reference verse so we get word boundaries to align against.
    """
    raw_norm = normalize(raw_transcript or "").replace(" ", "")
    ref_words = tokenize(normalize(reference_text or ""))
    if not ref_words or not raw_norm:
        return (raw_transcript or "").strip()

    # If transcript already has several spaces, assume it's already word-segmented
    if (raw_transcript or "").count(" ") >= max(1, len(ref_words) - 2):
        return (raw_transcript or "").strip()

    segments: List[str] = []
    remaining = raw_norm
    # Greedy: for each ref word, take the best-matching prefix of what is left
    for ref_w in ref_words:
        if not remaining:
            break
        best_len = 1
        best_sim = 0.0
        max_len = min(len(remaining), len(ref_w) + 10)
        for L in range(1, max_len + 1):
            cand = remaining[:L]
            sim = fuzz.ratio(ref_w, cand) / 100.0
            if sim > best_sim:
                best_sim = sim
                best_len = L
        segments.append(remaining[:best_len])
        remaining = remaining[best_len:]
    if remaining:
        segments.append(remaining)
    return " ".join(segments)
