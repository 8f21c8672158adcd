"""
Static tajweed annotation of reference text: rule registry and positional scanner.
"""
from tajweed.annotator import TajweedAnnotator, annotate_word
from tajweed.rules import (
    TAJWEED_RULES,
    TajweedRule,
    get_rule_legend,
    rules_in_result,
)

__all__ = [
    "TAJWEED_RULES",
    "TajweedAnnotator",
    "TajweedRule",
    "annotate_word",
    "get_rule_legend",
    "rules_in_result",
]
