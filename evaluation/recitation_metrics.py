"""
Recitation score distribution over many attempts: mean, median, p95, grade and
mistake-type histograms, worst cases, WER/CER. Failing attempts are logged.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from core.metrics import wer_cer
from core.recitation import compare_recitation
from core.scoring import GRADE_GOOD

logger = logging.getLogger(__name__)


@dataclass
class SampleResult:
    """Single attempt: reference, spoken text, scores and optional id."""
    ref: str
    spoken: str
    overall_score: int
    grade: str
    wer: float
    cer: float
    mistake_types: Dict[str, int]
    sample_id: Optional[str] = None  # verse_key or index


@dataclass
class EvaluationReport:
    """Structured report: distribution stats, histograms, worst cases, failures."""
    n_samples: int = 0
    score_mean: float = 0.0
    score_median: float = 0.0
    score_p95: float = 0.0
    wer_mean: float = 0.0
    cer_mean: float = 0.0
    grades: Dict[str, int] = field(default_factory=dict)
    mistake_types: Dict[str, int] = field(default_factory=dict)
    worst_cases: List[Dict[str, Any]] = field(default_factory=list)   # lowest overall scores
    failures: List[Dict[str, Any]] = field(default_factory=list)      # overall < GRADE_GOOD
    all_scores: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_samples": self.n_samples,
            "score_mean": round(self.score_mean, 2),
            "score_median": round(self.score_median, 2),
            "score_p95": round(self.score_p95, 2),
            "wer_mean": round(self.wer_mean, 4),
            "cer_mean": round(self.cer_mean, 4),
            "grades": self.grades,
            "mistake_types": self.mistake_types,
            "worst_cases": self.worst_cases,
            "failures": self.failures,
        }


def _summary(r: SampleResult) -> Dict[str, Any]:
    return {
        "sample_id": r.sample_id,
        "overall_score": r.overall_score,
        "grade": r.grade,
        "wer": round(r.wer, 4),
        "ref": r.ref[:80],
        "spoken": r.spoken[:80],
    }


def evaluate_sample(reference: str, spoken: str, sample_id: Optional[str] = None, segment: bool = False) -> SampleResult:
    result = compare_recitation(reference, spoken, segment=segment)
    w, c = wer_cer(reference, spoken)
    return SampleResult(
        ref=reference,
        spoken=spoken,
        overall_score=result.overall_score,
        grade=result.grade,
        wer=w,
        cer=c,
        mistake_types=result.mistake_types(),
        sample_id=sample_id,
    )


def compute_score_distribution(
    samples: List[Dict[str, Any]],
    reference_key: str = "reference",
    spoken_key: str = "spoken",
    sample_id_key: str = "verse_key",
    failure_threshold: int = GRADE_GOOD,
    worst_n: int = 10,
    segment: bool = False,
) -> EvaluationReport:
    """
    Compare every sample and build the distribution report.
    samples: list of {"reference": ref, "spoken": text, "verse_key": optional id}.
    Samples with an empty reference are skipped.
    """
    report = EvaluationReport()
    results: List[SampleResult] = []

    for i, item in enumerate(samples):
        ref = item.get(reference_key) or ""
        if not ref.strip():
            continue
        sid = item.get(sample_id_key) or str(i)
        results.append(evaluate_sample(ref, item.get(spoken_key) or "", sample_id=sid, segment=segment))

    if not results:
        return report

    scores = np.array([r.overall_score for r in results], dtype=np.float64)
    report.n_samples = len(results)
    report.all_scores = [r.overall_score for r in results]
    report.score_mean = float(np.mean(scores))
    report.score_median = float(np.median(scores))
    report.score_p95 = float(np.percentile(scores, 95))
    report.wer_mean = float(np.mean([r.wer for r in results]))
    report.cer_mean = float(np.mean([r.cer for r in results]))

    report.grades = dict(Counter(r.grade for r in results))
    mistakes: Counter = Counter()
    for r in results:
        mistakes.update(r.mistake_types)
    report.mistake_types = dict(sorted(mistakes.items()))

    by_score = sorted(results, key=lambda x: x.overall_score)
    report.worst_cases = [_summary(r) for r in by_score[:worst_n]]

    report.failures = [_summary(r) for r in results if r.overall_score < failure_threshold]
    for r in report.failures:
        logger.warning("Failing recitation: %s overall=%d WER=%.2f", r["sample_id"], r["overall_score"], r["wer"])

    return report
