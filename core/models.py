"""
Result types for recitation comparison.

All instances are created fresh by compare_recitation and owned by the caller.
to_dict() renders the camelCase keys the presentation layer expects.
"""
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class WordStatus(str, Enum):
    CORRECT = "correct"
    PARTIAL = "partial"
    WRONG = "wrong"
    MISSED = "missed"
    EXTRA = "extra"


class MistakeType(str, Enum):
    LETTER_SUBSTITUTION = "letter-substitution"
    LETTER_OMISSION = "letter-omission"
    LETTER_INSERTION = "letter-insertion"
    HARAKA_ERROR = "haraka-error"
    MADD_ERROR = "madd-error"
    WORD_OMISSION = "word-omission"


@dataclass(frozen=True)
class NormalizedToken:
    """One word of a text in both comparison profiles."""
    original: str
    skeleton: str
    full: str
    position: int


@dataclass(frozen=True)
class AlignmentPair:
    """Reference/spoken index pair; None on one side marks a gap (missed or extra)."""
    ref_index: Optional[int]
    spoken_index: Optional[int]

    def __post_init__(self):
        if self.ref_index is None and self.spoken_index is None:
            raise ValueError("AlignmentPair needs at least one index")

    @property
    def is_match(self) -> bool:
        return self.ref_index is not None and self.spoken_index is not None


@dataclass
class Mistake:
    type: MistakeType
    description: str
    position: int = 0  # index into the reference skeleton where the divergence starts

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "description": self.description, "position": self.position}


@dataclass
class TajweedAnnotation:
    rule: str
    span: Tuple[int, int]  # [start, end) in the full-form word
    info: Dict[str, str]   # {"color", "description"}

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.rule, "span": list(self.span), "info": dict(self.info)}


@dataclass
class WordResult:
    original: str
    spoken: str
    status: WordStatus
    similarity: int
    mistakes: List[Mistake] = field(default_factory=list)
    annotations: List[TajweedAnnotation] = field(default_factory=list)

    @property
    def is_extra(self) -> bool:
        return self.status == WordStatus.EXTRA

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "spoken": self.spoken,
            "status": self.status.value,
            "similarity": self.similarity,
            "mistakes": [m.to_dict() for m in self.mistakes],
            "tajweed": {"annotations": [a.to_dict() for a in self.annotations]},
        }


@dataclass
class RecitationResult:
    overall_score: int
    grade: str
    grade_arabic: str
    correct_count: int
    partial_count: int
    wrong_count: int
    missed_count: int
    extra_count: int
    total_original_words: int
    letter_score: int
    madd_score: int
    haraka_score: int
    completeness_score: int
    word_results: List[WordResult] = field(default_factory=list)

    def mistake_types(self) -> Dict[str, int]:
        """Histogram of mistake types across all words (stored per attempt by history)."""
        counts = Counter(m.type.value for w in self.word_results for m in w.mistakes)
        return dict(sorted(counts.items()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "grade": self.grade,
            "gradeArabic": self.grade_arabic,
            "correctCount": self.correct_count,
            "partialCount": self.partial_count,
            "wrongCount": self.wrong_count,
            "missedCount": self.missed_count,
            "extraCount": self.extra_count,
            "totalOriginalWords": self.total_original_words,
            "letterScore": self.letter_score,
            "maddScore": self.madd_score,
            "harakaScore": self.haraka_score,
            "completenessScore": self.completeness_score,
            "wordResults": [w.to_dict() for w in self.word_results],
        }
