"""
Output documents for Precision PGx
JSON advisory document and plain-text clinical note built from the
current form and its advisory.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from advisory_engine import AdvisoryRecord
from form_state import FormState

DISCLAIMER = "Demo only — not clinical advice."


def build_output_schema(form: FormState, record: AdvisoryRecord,
                        timestamp: Optional[str] = None, report_id: Optional[str] = None) -> Dict:
    """Build the advisory document offered as a JSON download."""
    return {
        "report_id": report_id or f"PGX-{str(uuid.uuid4())[:8].upper()}",
        "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
        "patient": {
            "name":      form.patient_name or None,
            "age":       form.age or None,
            "condition": form.condition or None,
        },
        "selection": {
            "drug":      form.drug,
            "gene":      form.gene or None,
            "phenotype": form.phenotype or None,
        },
        "advisory": {
            "risk_level":       record.level,
            "rationale":        record.message,
            "suggested_action": record.recommendation,
        },
        "disclaimer": DISCLAIMER,
    }


def build_clinical_note(form: FormState, record: AdvisoryRecord) -> str:
    who = form.patient_name or "Unnamed patient"
    lines = [f"Precision PGx Advisory — {who} — {datetime.now(timezone.utc).strftime('%Y-%m-%d')}", "=" * 60, ""]
    if form.age:
        lines.append(f"Age: {form.age}")
    if form.condition:
        lines.append(f"Condition: {form.condition}")
    lines.append(f"Drug: {form.drug} | Gene: {form.gene or '-'} | Phenotype: {form.phenotype or '-'}")
    lines.append(f"Risk level: {record.level}")
    lines.append(f"Why: {record.message}")
    lines.append(f"Suggested action: {record.recommendation}")
    lines += ["", "—" * 60, DISCLAIMER]
    return "\n".join(lines)
