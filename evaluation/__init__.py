"""
Evaluation layer: score distribution over recorded attempts and benchmark runner.
"""
from evaluation.recitation_metrics import (
    compute_score_distribution,
    evaluate_sample,
    EvaluationReport,
)
from evaluation.benchmark_runner import load_dataset, run_benchmark, write_report

__all__ = [
    "compute_score_distribution",
    "evaluate_sample",
    "EvaluationReport",
    "load_dataset",
    "run_benchmark",
    "write_report",
]
