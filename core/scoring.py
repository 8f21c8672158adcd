"""
Recitation scoring: per-word similarity/status and aggregate sub-scores.

Per word (skeleton forms):
    similarity = round(100 * (1 - edit_distance / max(len_ref, len_spoken, 1)))
    100 → correct, SIMILARITY_PARTIAL..99 → partial, below → wrong.
Unpaired reference words are missed (similarity 0); unpaired spoken words are extra.

Overall score = weighted sum of letter, haraka, madd and completeness scores
(equal quartiles by default), graded Excellent ≥ 85, Good ≥ 60, else Needs Practice.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import config
from .metrics import normalized_edit_distance
from .models import MistakeType, RecitationResult, WordResult, WordStatus

SIMILARITY_CORRECT = 100
SIMILARITY_PARTIAL = config.SIMILARITY_PARTIAL  # similarity == 70 is partial

GRADE_EXCELLENT = 85
GRADE_GOOD = 60

GRADES = (
    (GRADE_EXCELLENT, "Excellent", "ممتاز"),
    (GRADE_GOOD, "Good", "جيد"),
    (0, "Needs Practice", "يحتاج تدريب"),
)

MATCHED_STATUSES = (WordStatus.CORRECT, WordStatus.PARTIAL, WordStatus.WRONG)


@dataclass(frozen=True)
class ScoreWeights:
    letter: float = config.WEIGHT_LETTER
    haraka: float = config.WEIGHT_HARAKA
    madd: float = config.WEIGHT_MADD
    completeness: float = config.WEIGHT_COMPLETENESS


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (deterministic, unlike banker's round)."""
    return int(math.floor(value + 0.5))


def word_similarity(ref_skeleton: str, spoken_skeleton: str) -> int:
    """Similarity in [0, 100] of two skeleton words."""
    score = round_half_up(100 * (1 - normalized_edit_distance(ref_skeleton, spoken_skeleton)))
    return max(0, min(100, score))


def status_for_similarity(similarity: int) -> WordStatus:
    if similarity >= SIMILARITY_CORRECT:
        return WordStatus.CORRECT
    if similarity >= SIMILARITY_PARTIAL:
        return WordStatus.PARTIAL
    return WordStatus.WRONG


def grade_for_score(overall_score: int) -> Tuple[str, str]:
    """(grade, grade in Arabic) for an overall score."""
    for threshold, grade, grade_arabic in GRADES:
        if overall_score >= threshold:
            return grade, grade_arabic
    return GRADES[-1][1], GRADES[-1][2]


def _share_without(matched: Sequence[WordResult], mistake_type: MistakeType) -> int:
    """Percentage of matched words with no mistake of the given type; 100 when nothing matched."""
    if not matched:
        return 100
    clean = sum(1 for w in matched if all(m.type != mistake_type for m in w.mistakes))
    return round_half_up(100 * clean / len(matched))


def aggregate(word_results: List[WordResult], weights: Optional[ScoreWeights] = None) -> RecitationResult:
    """
    Fold per-word results into counts, sub-scores, overall score and grade.
    Extra-only entries count toward extra_count and nothing else.
    """
    weights = weights or ScoreWeights()
    counts = {status: 0 for status in WordStatus}
    for w in word_results:
        counts[w.status] += 1

    total = len(word_results) - counts[WordStatus.EXTRA]
    matched = [w for w in word_results if w.status in MATCHED_STATUSES]

    present = counts[WordStatus.CORRECT] + counts[WordStatus.PARTIAL]
    completeness_score = round_half_up(100 * present / total) if total else 0
    letter_score = round_half_up(sum(w.similarity for w in matched) / len(matched)) if matched else 0
    haraka_score = _share_without(matched, MistakeType.HARAKA_ERROR)
    madd_score = _share_without(matched, MistakeType.MADD_ERROR)

    overall_score = round_half_up(
        weights.letter * letter_score
        + weights.haraka * haraka_score
        + weights.madd * madd_score
        + weights.completeness * completeness_score
    )
    overall_score = max(0, min(100, overall_score))
    grade, grade_arabic = grade_for_score(overall_score)

    return RecitationResult(
        overall_score=overall_score,
        grade=grade,
        grade_arabic=grade_arabic,
        correct_count=counts[WordStatus.CORRECT],
        partial_count=counts[WordStatus.PARTIAL],
        wrong_count=counts[WordStatus.WRONG],
        missed_count=counts[WordStatus.MISSED],
        extra_count=counts[WordStatus.EXTRA],
        total_original_words=total,
        letter_score=letter_score,
        madd_score=madd_score,
        haraka_score=haraka_score,
        completeness_score=completeness_score,
        word_results=word_results,
    )
