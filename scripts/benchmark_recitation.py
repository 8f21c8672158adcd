#!/usr/bin/env python3
"""
Benchmark recitation scoring over a dataset of transcribed attempts.

Usage:
  # Score every attempt in a dataset with "reference" (or "text_uthmani") and "spoken" (or "transcript")
  python scripts/benchmark_recitation.py dataset/fatiha_attempts.json

  # Sanity check: every reference recited perfectly (expect all scores 100)
  python scripts/benchmark_recitation.py dataset/fatiha_attempts.json --self-test

  # Write the JSON report and segment unspaced transcripts first
  python scripts/benchmark_recitation.py dataset/attempts.json --segment --output report.json

Expects JSON:
  - List of {"verse_key": "1:1", "reference": "...", "spoken": "..."}
"""
import argparse
import logging
import os
import sys

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from evaluation.benchmark_runner import run_benchmark, write_report


def main():
    parser = argparse.ArgumentParser(description="Benchmark recitation scoring")
    parser.add_argument("dataset", help="Path to dataset JSON (list of {reference, spoken, verse_key?})")
    parser.add_argument("--limit", type=int, default=None, help="Max number of items to process")
    parser.add_argument("--self-test", action="store_true", help="Use reference as spoken text (expect 100)")
    parser.add_argument("--segment", action="store_true", help="Segment unspaced transcripts by the reference")
    parser.add_argument("--output", default=None, help="Write the JSON report to this path")
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    report = run_benchmark(args.dataset, limit=args.limit, self_test=args.self_test, segment=args.segment)
    if not report.n_samples:
        print("No items with reference text. Add 'reference' or 'text_uthmani' to the dataset items.")
        return 1

    for case in report.worst_cases:
        print(f"  {case['sample_id']}: {case['overall_score']}% {case['grade']} WER={case['wer']:.4f}")
    print(f"\nProcessed {report.n_samples} items.")
    print(f"Mean score: {report.score_mean:.2f}  median: {report.score_median:.2f}  p95: {report.score_p95:.2f}")
    print(f"Average WER: {report.wer_mean:.4f}  CER: {report.cer_mean:.4f}")
    print(f"Grades: {report.grades}")

    if args.output:
        write_report(report, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
