"""
Form state for the advisory page.

The page keeps its fields in Streamlit's session state; the helpers here
take any mutable mapping so the same rules apply in tests. The one rule
that matters: a phenotype only makes sense for the gene it was picked
under, so changing the gene clears it.
"""

import logging
from dataclasses import dataclass, replace
from typing import MutableMapping, Mapping, Optional

from advisory_engine import Drug, Gene, AdvisoryRecord, phenotypes_for, resolve_advisory

logger = logging.getLogger("PrecisionPGx.Form")

FORM_DEFAULTS = {
    "patient_name": "",
    "age":          "",
    "condition":    "",
    "drug":         Drug.NONE.value,
    "gene":         Gene.NONE.value,
    "phenotype":    "",
}

DEMO_PATIENT = {
    "patient_name": "Demo Patient A",
    "age":          "26",
    "condition":    "High ferritin, low neutrophil (demo)",
    "drug":         Drug.AZATHIOPRINE.value,
    "gene":         Gene.TPMT.value,
    "phenotype":    "Intermediate activity",
}


@dataclass(frozen=True)
class FormState:
    patient_name: str = ""
    age: str = ""
    condition: str = ""
    drug: str = Drug.NONE.value
    gene: str = Gene.NONE.value
    phenotype: str = ""

    @classmethod
    def from_mapping(cls, state: Mapping) -> "FormState":
        values = {k: state.get(k, v) or v for k, v in FORM_DEFAULTS.items()}
        if values["phenotype"] not in phenotypes_for(values["gene"]):
            values["phenotype"] = ""
        return cls(**values)

    @property
    def phenotype_enabled(self) -> bool:
        return bool(phenotypes_for(self.gene))

    @property
    def phenotype_options(self):
        return phenotypes_for(self.gene)

    def select_gene(self, gene: str) -> "FormState":
        return replace(self, gene=gene, phenotype="")

    def advisory(self) -> Optional[AdvisoryRecord]:
        return resolve_advisory(self.drug, self.gene, self.phenotype)


# ── Session helpers (used as widget callbacks) ───────────────────────────────

def init_session(state: MutableMapping) -> None:
    for key, value in FORM_DEFAULTS.items():
        if key not in state:
            state[key] = value


def on_gene_change(state: MutableMapping) -> None:
    state["phenotype"] = ""


def load_demo(state: MutableMapping) -> None:
    logger.info("Loading demo patient")
    for key, value in DEMO_PATIENT.items():
        state[key] = value


def clear_form(state: MutableMapping) -> None:
    logger.info("Clearing form")
    for key, value in FORM_DEFAULTS.items():
        state[key] = value
