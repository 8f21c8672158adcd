"""
Recitation comparison: the single entry point that turns a reference verse and
a spoken (transcribed) attempt into word-level feedback and scores.

tokenize both → align words → similarity/status + mistakes per pair
→ tajweed annotations per reference word (with its successor) → aggregate.

Pure and deterministic; never raises for any text input.
"""
import logging
from typing import List, Optional

from alignment.word_alignment import align_words
from tajweed.annotator import annotate_word
from .mistakes import classify_mistakes, omission_mistake
from .models import RecitationResult, WordResult, WordStatus
from .scoring import ScoreWeights, aggregate, status_for_similarity, word_similarity
from .tokenizer import segment_transcript_by_reference, tokenize_normalized

logger = logging.getLogger(__name__)


def compare_recitation(
    reference_text: Optional[str],
    spoken_text: Optional[str],
    segment: bool = False,
    weights: Optional[ScoreWeights] = None,
    gap_cost: Optional[float] = None,
) -> RecitationResult:
    """
    Compare a spoken attempt against the reference verse.

    Args:
        reference_text: Canonical verse text (trusted verbatim).
        spoken_text: Transcribed attempt, any quality; empty means nothing was recited.
        segment: Re-insert word boundaries into unspaced transcripts before comparing.
        weights: Overall-score weights (equal quartiles by default).
        gap_cost: Alignment gap cost override (config.ALIGNMENT_GAP_COST by default).

    Returns:
        RecitationResult whose word_results follow reference order, with extra
        spoken words inserted where the alignment placed them.
    """
    reference_text = reference_text or ""
    spoken_text = spoken_text or ""
    if segment:
        spoken_text = segment_transcript_by_reference(spoken_text, reference_text)

    ref_tokens = tokenize_normalized(reference_text)
    spoken_tokens = tokenize_normalized(spoken_text)
    pairs = align_words(ref_tokens, spoken_tokens, gap_cost=gap_cost)

    word_results: List[WordResult] = []
    for pair in pairs:
        if pair.ref_index is None:
            extra = spoken_tokens[pair.spoken_index]
            word_results.append(WordResult(original="", spoken=extra.original, status=WordStatus.EXTRA, similarity=0))
            continue

        ref = ref_tokens[pair.ref_index]
        following = ref_tokens[pair.ref_index + 1].full if pair.ref_index + 1 < len(ref_tokens) else None
        annotations = annotate_word(ref.full, following)
        if pair.spoken_index is None:
            word_results.append(WordResult(
                original=ref.original,
                spoken="",
                status=WordStatus.MISSED,
                similarity=0,
                mistakes=[omission_mistake(ref)],
                annotations=annotations,
            ))
            continue

        spoken = spoken_tokens[pair.spoken_index]
        similarity = word_similarity(ref.skeleton, spoken.skeleton)
        status = status_for_similarity(similarity)
        mistakes = [] if status == WordStatus.CORRECT else classify_mistakes(ref, spoken)
        word_results.append(WordResult(
            original=ref.original,
            spoken=spoken.original,
            status=status,
            similarity=similarity,
            mistakes=mistakes,
            annotations=annotations,
        ))

    result = aggregate(word_results, weights)
    logger.debug(
        "Recitation compared: %d words, correct=%d partial=%d wrong=%d missed=%d extra=%d overall=%d",
        result.total_original_words, result.correct_count, result.partial_count,
        result.wrong_count, result.missed_count, result.extra_count, result.overall_score,
    )
    return result
