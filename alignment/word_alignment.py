"""
Word-level global alignment of a spoken attempt against the reference verse.

Needleman–Wunsch over skeleton forms: the match cost of two words is their
normalized edit distance, leaving a word unpaired (missed reference word or
extra spoken word) costs a fixed gap cost. Two words are only ever paired when
their distance is below 2 * gap cost; beyond that, two gaps are never more
expensive than the pair. The result is order-preserving (no crossing pairs).

Does not depend on diacritics; operates on tokens produced by core/tokenizer.py.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

import config
from core.models import AlignmentPair, NormalizedToken

logger = logging.getLogger(__name__)

# Backtrack moves stored in the DP move table
_DIAG, _UP, _LEFT = 0, 1, 2
_EPS = 1e-9


def pairing_ceiling(gap_cost: float) -> float:
    """Normalized edit distance at or above which two words are never paired."""
    return 2.0 * gap_cost


def match_cost_matrix(reference: Sequence[NormalizedToken], spoken: Sequence[NormalizedToken]) -> np.ndarray:
    """n x m matrix of normalized edit distances between skeletons."""
    if not reference or not spoken:
        return np.zeros((len(reference), len(spoken)), dtype=np.float64)
    return process.cdist(
        [t.skeleton for t in reference],
        [t.skeleton for t in spoken],
        scorer=Levenshtein.normalized_distance,
        dtype=np.float64,
    )


def align_words(
    reference: Sequence[NormalizedToken],
    spoken: Sequence[NormalizedToken],
    gap_cost: Optional[float] = None,
) -> List[AlignmentPair]:
    """
    Minimum-cost global alignment of reference and spoken tokens.

    Returns pairs in order; every reference index and every spoken index appears
    exactly once, either paired or against a gap (None). Ties prefer pairing,
    then a missed reference word, then an extra spoken word.
    """
    if gap_cost is None:
        gap_cost = config.ALIGNMENT_GAP_COST
    n, m = len(reference), len(spoken)
    ceiling = pairing_ceiling(gap_cost)
    match_cost = match_cost_matrix(reference, spoken)

    cost = np.zeros((n + 1, m + 1), dtype=np.float64)
    move = np.zeros((n + 1, m + 1), dtype=np.int8)
    cost[1:, 0] = np.arange(1, n + 1) * gap_cost
    move[1:, 0] = _UP
    cost[0, 1:] = np.arange(1, m + 1) * gap_cost
    move[0, 1:] = _LEFT

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            best, step = cost[i - 1, j] + gap_cost, _UP  # reference word missed
            left = cost[i, j - 1] + gap_cost  # spoken word extra
            if left < best - _EPS:
                best, step = left, _LEFT
            d = match_cost[i - 1, j - 1]
            if d < ceiling:
                diag = cost[i - 1, j - 1] + d
                if diag <= best + _EPS:
                    best, step = diag, _DIAG
            cost[i, j] = best
            move[i, j] = step

    pairs: List[AlignmentPair] = []
    i, j = n, m
    while i > 0 or j > 0:
        step = move[i, j]
        if step == _DIAG:
            pairs.append(AlignmentPair(i - 1, j - 1))
            i -= 1
            j -= 1
        elif step == _UP:
            pairs.append(AlignmentPair(i - 1, None))
            i -= 1
        else:
            pairs.append(AlignmentPair(None, j - 1))
            j -= 1
    pairs.reverse()

    logger.debug("Aligned %d reference / %d spoken words, cost=%.3f", n, m, float(cost[n, m]))
    return pairs
