"""
Static tajweed rule registry.

Each rule has a display color, a learner-facing description and the structural
pattern the annotator scans for. The registry is built once at import and
exposed read-only; registry order is the order detectors run in.

Patterns are over (letter, harakat) pairs of a word and the first letter of
the word after it:
- Noon/meem "sakinah" = sukun, or no vowel/shadda in a vocalized word
  (Uthmani script leaves the noon bare before idgham/ikhfa letters).
- Tanween counts as a noon sakinah at the end of its word.
- Elongation letters: ا after fatha, و after damma, ي/ى after kasra.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping


@dataclass(frozen=True)
class TajweedRule:
    """One tajweed rule as shown in the legend."""
    rule_id: str
    name: str
    arabic_name: str
    color: str
    description: str
    pattern: str

    @property
    def info(self) -> Dict[str, str]:
        return {"color": self.color, "description": self.description}


_RULES = (
    TajweedRule(
        rule_id="ghunnah",
        name="Ghunnah",
        arabic_name="غنة",
        color="#FF7E1E",
        description="Nasalize the doubled noon/meem for two counts.",
        pattern="ن or م carrying shadda",
    ),
    TajweedRule(
        rule_id="idgham",
        name="Idgham",
        arabic_name="إدغام",
        color="#169777",
        description="Merge the noon sakinah into the following letter.",
        pattern="word-final noon sakinah or tanween, next word starting with one of ي ر م ل و ن",
    ),
    TajweedRule(
        rule_id="ikhfa",
        name="Ikhfa",
        arabic_name="إخفاء",
        color="#9400A8",
        description="Hide the noon sakinah with a light nasal sound before the next letter.",
        pattern="noon sakinah followed by one of ت ث ج د ذ ز س ش ص ض ط ظ ف ق ك",
    ),
    TajweedRule(
        rule_id="iqlab",
        name="Iqlab",
        arabic_name="إقلاب",
        color="#26BFFD",
        description="Turn the noon sakinah into a hidden meem before ب.",
        pattern="noon sakinah followed by ب, or noon marked with small high meem",
    ),
    TajweedRule(
        rule_id="ikhfa_shafawi",
        name="Ikhfa Shafawi",
        arabic_name="إخفاء شفوي",
        color="#D500B7",
        description="Hide the meem sakinah with nasalization before ب.",
        pattern="meem sakinah followed by ب",
    ),
    TajweedRule(
        rule_id="idgham_shafawi",
        name="Idgham Shafawi",
        arabic_name="إدغام شفوي",
        color="#58B800",
        description="Merge the meem sakinah into the following meem with ghunnah.",
        pattern="meem sakinah followed by م",
    ),
    TajweedRule(
        rule_id="qalqalah",
        name="Qalqalah",
        arabic_name="قلقلة",
        color="#DD0008",
        description="Bounce the letter when it is silent or when stopping on it.",
        pattern="one of ق ط ب ج د with sukun, or as the last letter of the word",
    ),
    TajweedRule(
        rule_id="madd",
        name="Madd",
        arabic_name="مد طبيعي",
        color="#537FFF",
        description="Lengthen the vowel for two counts.",
        pattern="fatha + ا/ى, damma + و, kasra + ي with no vowel of its own; or superscript alef",
    ),
    TajweedRule(
        rule_id="madd_long",
        name="Madd (long)",
        arabic_name="مد لازم / متصل",
        color="#000EBC",
        description="Lengthen the vowel for four to six counts.",
        pattern="letter carrying the maddah sign, or alef with madda",
    ),
)

TAJWEED_RULES: Mapping[str, TajweedRule] = MappingProxyType({rule.rule_id: rule for rule in _RULES})
RULE_ORDER: Mapping[str, int] = MappingProxyType({rule.rule_id: i for i, rule in enumerate(_RULES)})


def get_rule_legend() -> Dict[str, Dict[str, str]]:
    """rule_id -> {color, description}, in registry order (a fresh copy per call)."""
    return {rule_id: rule.info for rule_id, rule in TAJWEED_RULES.items()}


def rules_in_result(word_results) -> List[str]:
    """Distinct rule ids used across word results, in registry order (for legend rendering)."""
    used = {a.rule for w in word_results for a in w.annotations}
    return [rule_id for rule_id in TAJWEED_RULES if rule_id in used]
