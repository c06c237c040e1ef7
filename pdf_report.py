"""
PDF Report Generator for Precision PGx
Renders the current advisory as a one-page clinical summary
Uses fpdf2 library
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fpdf import FPDF, XPos, YPos

from advisory_engine import AdvisoryRecord, RiskLevel
from form_state import FormState
from schema import DISCLAIMER

logger = logging.getLogger("PrecisionPGx.Report")

LEVEL_COLORS = {
    RiskLevel.HIGH.value:     (127, 29,  29),   # dark red
    RiskLevel.MODERATE.value: (120, 53,  15),   # dark amber
    RiskLevel.INFO.value:     (30,  58,  138),  # dark blue
}

ALERT_COLORS = {
    RiskLevel.HIGH.value:     ((69, 10, 10), (239, 68, 68)),
    RiskLevel.MODERATE.value: ((69, 26, 3),  (249, 115, 22)),
}

# Core fonts are latin-1 only
_FOLD = {"→": "->", "—": "-", "–": "-", "’": "'", "“": '"', "”": '"'}


def to_latin1(text) -> str:
    text = str(text)
    for src, dst in _FOLD.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", "replace").decode("latin-1")


class AdvisoryPDF(FPDF):
    def __init__(self, title: str):
        super().__init__()
        self.report_title = to_latin1(title)
        self.set_margins(15, 15, 15)
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        self.set_fill_color(15, 23, 42)
        self.rect(0, 0, 210, 22, 'F')
        self.set_text_color(224, 242, 254)
        self.set_font("Helvetica", "B", 13)
        self.set_xy(10, 5)
        self.cell(0, 12, self.report_title)
        self.set_font("Helvetica", "", 8)
        self.set_text_color(148, 163, 184)
        self.set_xy(10, 14)
        self.cell(0, 6, f"Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(8)

    def footer(self):
        self.set_y(-15)
        self.set_text_color(100, 116, 139)
        self.set_font("Helvetica", "I", 7)
        self.cell(0, 6, to_latin1(DISCLAIMER))
        self.set_x(-30)
        self.cell(0, 6, f"Page {self.page_no()}", align="R")

    def section_title(self, title: str, color=(30, 64, 175)):
        self.set_fill_color(*color)
        self.set_text_color(255, 255, 255)
        self.set_font("Helvetica", "B", 10)
        self.cell(0, 8, f"  {to_latin1(title)}", fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(2)
        self.set_text_color(0, 0, 0)

    def key_value(self, key: str, value, bold_val=False):
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(71, 85, 105)
        self.cell(55, 6, to_latin1(key) + ":")
        self.set_font("Helvetica", "B" if bold_val else "", 9)
        self.set_text_color(15, 23, 42)
        self.cell(0, 6, to_latin1(value or "-"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def alert_box(self, text: str, level: str) -> float:
        bg, border = ALERT_COLORS.get(level, ((31, 41, 55), (107, 114, 128)))
        body = f"CLINICAL ALERT: {to_latin1(text)}"
        self.set_font("Helvetica", "B", 8)
        lines = self.multi_cell(170, 4.5, body, dry_run=True, output="LINES")
        height = max(14, len(lines) * 4.5 + 6)
        x, y = self.get_x(), self.get_y()
        self.set_fill_color(*bg)
        self.rect(x, y, 180, height, 'F')
        self.set_fill_color(*border)
        self.rect(x, y, 4, height, 'F')
        self.set_xy(x + 7, y + 3)
        self.set_text_color(254, 226, 226)
        self.multi_cell(170, 4.5, body)
        self.set_xy(x, y + height + 4)
        self.set_text_color(0, 0, 0)
        return height


def generate_pdf_report(form: FormState, record: AdvisoryRecord,
                        title: Optional[str] = None) -> bytes:
    """Generate the advisory PDF and return it as bytes."""
    pdf = AdvisoryPDF(title or "Precision PGx | Pharmacogenomic Advisory")
    pdf.add_page()

    pdf.section_title("PATIENT", color=(15, 23, 42))
    pdf.key_value("Patient", form.patient_name, bold_val=True)
    pdf.key_value("Age", form.age)
    pdf.key_value("Clinical condition", form.condition)
    pdf.ln(4)

    pdf.section_title("SELECTION", color=(15, 23, 42))
    pdf.key_value("Drug", form.drug, bold_val=True)
    pdf.key_value("Genetic marker", form.gene, bold_val=True)
    pdf.key_value("Phenotype / function", form.phenotype, bold_val=True)
    pdf.ln(4)

    color = LEVEL_COLORS.get(record.level, (31, 41, 55))
    pdf.set_fill_color(*color)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 10, f"  {to_latin1(record.level)}", fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)

    if record.level in ALERT_COLORS:
        pdf.alert_box(record.message, record.level)

    pdf.set_font("Helvetica", "B", 8)
    pdf.set_text_color(30, 64, 175)
    pdf.cell(0, 5, "WHY", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(51, 65, 85)
    pdf.multi_cell(0, 5, to_latin1(record.message))
    pdf.ln(2)

    pdf.set_font("Helvetica", "B", 8)
    pdf.set_text_color(6, 95, 70)
    pdf.cell(0, 5, "SUGGESTED ACTION", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(15, 23, 42)
    pdf.multi_cell(0, 5, to_latin1(record.recommendation))

    logger.info(f"Rendered PDF advisory ({record.level}) for {form.drug}")
    return bytes(pdf.output())
