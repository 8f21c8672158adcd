"""
Benchmark runner: compare a dataset of recorded attempts and output structured reports.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from evaluation.recitation_metrics import EvaluationReport, compute_score_distribution

logger = logging.getLogger(__name__)


def _get_reference(item: Dict[str, Any]) -> str:
    return (
        (item.get("reference") or item.get("text_uthmani") or item.get("text") or "")
    ).strip()


def _get_spoken(item: Dict[str, Any]) -> str:
    return (item.get("spoken") or item.get("hypothesis") or item.get("transcript") or "").strip()


def load_dataset(dataset_path: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Load a JSON list of attempts. Raises ValueError when the file is not a list."""
    with open(dataset_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Dataset must be a list of items")
    return data[:limit] if limit else data


def run_benchmark(
    dataset_path: str,
    limit: Optional[int] = None,
    self_test: bool = False,
    segment: bool = False,
    sample_id_key: str = "verse_key",
) -> EvaluationReport:
    """
    Load dataset JSON and compute the score distribution.
    self_test: use the reference as the spoken text (expect every score to be 100).
    """
    items = load_dataset(dataset_path, limit)

    samples = []
    for i, item in enumerate(items):
        ref = _get_reference(item)
        if not ref:
            logger.info("Skipping item %s: no reference text", item.get(sample_id_key, i))
            continue
        samples.append({
            "reference": ref,
            "spoken": ref if self_test else _get_spoken(item),
            sample_id_key: item.get(sample_id_key) or str(i),
        })

    return compute_score_distribution(samples, sample_id_key=sample_id_key, segment=segment)


def write_report(report: EvaluationReport, output_path: str) -> None:
    """Write evaluation report to JSON file."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)
    logger.info("Wrote evaluation report to %s", output_path)
