"""
Advisory engine for Precision PGx
Maps a (drug, gene, phenotype) selection to a canned advisory record.
Rules are ordered; the first match wins.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger("PrecisionPGx.Advisory")


# ── Enumerations ──────────────────────────────────────────────────────────────
class Gene(str, Enum):
    NONE    = ""
    CYP2C19 = "CYP2C19"
    TPMT    = "TPMT"
    DPYD    = "DPYD"
    BRCA1   = "BRCA1"


class Drug(str, Enum):
    NONE         = "No drug selected"
    CLOPIDOGREL  = "Clopidogrel"
    AZATHIOPRINE = "Azathioprine"
    FLUOROURACIL = "Fluorouracil (5-FU)"
    CAPECITABINE = "Capecitabine"


class RiskLevel(str, Enum):
    HIGH     = "High risk"
    MODERATE = "Moderate risk"
    INFO     = "Info"


ALL_GENES = [g.value for g in Gene if g is not Gene.NONE]
ALL_DRUGS = [d.value for d in Drug if d is not Drug.NONE]
FLUOROPYRIMIDINES = (Drug.FLUOROURACIL, Drug.CAPECITABINE)

# Phenotypes per gene, ordered normal → worst
PHENOTYPE_OPTIONS: Dict[str, List[str]] = {
    "CYP2C19": ["Normal metabolizer", "Intermediate metabolizer", "Poor metabolizer"],
    "TPMT":    ["Normal activity", "Intermediate activity", "Low activity"],
    "DPYD":    ["Normal function", "Intermediate function", "Poor function"],
}

SUPPORTED_RULES = [
    {"gene": "TPMT",    "drugs": "Azathioprine",               "concern": "myelosuppression risk"},
    {"gene": "CYP2C19", "drugs": "Clopidogrel",                "concern": "reduced activation"},
    {"gene": "DPYD",    "drugs": "Fluorouracil / Capecitabine", "concern": "toxicity risk"},
    {"gene": "BRCA1",   "drugs": "any",                        "concern": "risk info → counseling/screening"},
]


@dataclass(frozen=True)
class AdvisoryRecord:
    level: str
    message: str
    recommendation: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


# ── Rule table ────────────────────────────────────────────────────────────────
# (drug(s), gene) → {phenotype: (level, message, recommendation)}
PHENOTYPE_RULES = [
    ((Drug.CLOPIDOGREL,), Gene.CYP2C19, {
        "Poor metabolizer": (
            RiskLevel.HIGH,
            "Reduced activation → lower efficacy expected.",
            "Consider alternative antiplatelet therapy (per clinical guidelines).",
        ),
        "Intermediate metabolizer": (
            RiskLevel.MODERATE,
            "Potentially reduced activation → efficacy may be lower.",
            "Consider dose/therapy adjustment based on clinical context.",
        ),
    }),
    ((Drug.AZATHIOPRINE,), Gene.TPMT, {
        "Low activity": (
            RiskLevel.HIGH,
            "High toxicity risk (myelosuppression).",
            "Avoid or use substantial dose reduction + close monitoring.",
        ),
        "Intermediate activity": (
            RiskLevel.MODERATE,
            "Increased toxicity risk possible.",
            "Start with reduced dose and monitor blood counts closely.",
        ),
    }),
    (FLUOROPYRIMIDINES, Gene.DPYD, {
        "Poor function": (
            RiskLevel.HIGH,
            "Severe toxicity risk.",
            "Avoid fluoropyrimidines or use drastically reduced dose with specialist oversight.",
        ),
        "Intermediate function": (
            RiskLevel.MODERATE,
            "Toxicity risk increased.",
            "Consider dose reduction and enhanced monitoring.",
        ),
    }),
]

NO_ALERT = (
    RiskLevel.INFO,
    "No major alert selected for this phenotype.",
    "Proceed with standard care and monitoring.",
)
BRCA1_INFO = (
    RiskLevel.INFO,
    "BRCA1 variants may indicate elevated cancer risk.",
    "Recommend genetic counseling and guideline-based screening.",
)
NO_MATCH = (
    RiskLevel.INFO,
    "No matching rule for the current selection.",
    "Try selecting a gene/drug pair listed above.",
)


def _value(x):
    return getattr(x, "value", x)


def _record(entry) -> AdvisoryRecord:
    level, message, recommendation = entry
    return AdvisoryRecord(level=level.value, message=message, recommendation=recommendation)


def phenotypes_for(gene) -> List[str]:
    """Phenotype choices for a gene; empty for BRCA1 and unset."""
    return list(PHENOTYPE_OPTIONS.get(_value(gene) or "", []))


def is_drug_unset(drug) -> bool:
    return not drug or drug == Drug.NONE


def resolve_advisory(drug, gene, phenotype) -> Optional[AdvisoryRecord]:
    """
    Return the advisory for the current selection, or None when no drug is chosen.

    Inputs may be enum members or their plain string values. Anything that
    does not match a rule falls through to the generic informational record.
    """
    if is_drug_unset(drug):
        return None

    for drugs, rule_gene, by_phenotype in PHENOTYPE_RULES:
        if drug in drugs and gene == rule_gene:
            entry = by_phenotype.get(phenotype, NO_ALERT)
            logger.debug(f"Matched {rule_gene.value} rule for {_value(drug)} / {phenotype or '-'}")
            return _record(entry)

    if gene == Gene.BRCA1:
        logger.debug("Matched BRCA1 informational rule")
        return _record(BRCA1_INFO)

    logger.debug(f"No rule for drug={_value(drug)} gene={_value(gene) or '-'}")
    return _record(NO_MATCH)
