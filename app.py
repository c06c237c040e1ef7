"""
Precision PGx — Genomics-Based Precision Medicine Platform
Clinician form: pick a drug, a genetic marker and its phenotype, get an
explainable risk alert with therapy guidance.
- Dependent dropdowns: phenotype choices follow the selected gene
- Demo patient preset and one-click clear
- JSON / PDF / clinical-note downloads for the current advisory
"""

import json
import logging

import pandas as pd
import streamlit as st

import settings
from advisory_engine import ALL_DRUGS, ALL_GENES, Drug, RiskLevel, SUPPORTED_RULES
from form_state import FormState, init_session, on_gene_change, load_demo, clear_form
from schema import DISCLAIMER, build_output_schema, build_clinical_note
from pdf_report import generate_pdf_report

settings.configure_logging()
logger = logging.getLogger("PrecisionPGx.App")

# ── Constants ─────────────────────────────────────────────────────────────────
DRUG_OPTIONS = [Drug.NONE.value] + ALL_DRUGS
GENE_OPTIONS = [""] + ALL_GENES

LEVEL_CFG = {
    RiskLevel.HIGH.value:     {"color": "#FCA5A5", "bg": "rgba(220,38,38,0.14)",  "border": "rgba(239,68,68,0.40)",  "shape": "⬛"},
    RiskLevel.MODERATE.value: {"color": "#FCD34D", "bg": "rgba(217,119,6,0.14)",  "border": "rgba(251,191,36,0.40)", "shape": "▲"},
    RiskLevel.INFO.value:     {"color": "#7DD3FC", "bg": "rgba(0,200,255,0.10)",  "border": "rgba(0,200,255,0.28)",  "shape": "●"},
}

# ── Page Config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title=settings.page_title(),
    page_icon="🧬",
    layout="wide",
    initial_sidebar_state="collapsed"
)

st.markdown("""
<style>
.stApp {
  background:
    radial-gradient(900px 500px at 20% 10%, rgba(120, 95, 255, 0.32), transparent 60%),
    radial-gradient(700px 420px at 80% 20%, rgba(0, 200, 255, 0.22), transparent 55%),
    radial-gradient(900px 600px at 60% 90%, rgba(255, 77, 199, 0.12), transparent 60%),
    linear-gradient(180deg, #070a10 0%, #070a10 100%);
  color: #e8eef7;
}
.pg-header h1 { margin: 0 0 8px; font-size: 28px; letter-spacing: 0.2px; }
.pg-header p  { margin: 0 0 14px; color: rgba(234,242,255,0.86); line-height: 1.5; max-width: 900px; }
.sec-label { font-size: 18px; font-weight: 700; margin: 0 0 12px; }
.hint-card {
  margin-top: 12px; padding: 12px; border-radius: 14px;
  border: 1px dashed rgba(255,255,255,0.16); background: rgba(10,15,22,0.35);
  color: rgba(154,167,182,0.95); font-size: 13px;
}
.rec-card {
  border-radius: 16px; padding: 18px; border: 1px solid rgba(255,255,255,0.14);
  background: rgba(10,15,22,0.55); box-shadow: 0 10px 30px rgba(0,0,0,0.25);
}
.rec-card p { margin: 8px 0; }
.level-badge { display:inline-block; padding:2px 10px; border-radius:999px; border:1px solid; font-weight:700; }
.muted { color: rgba(154,167,182,0.95); }
.disclaimer { margin-top: 12px; font-size: 12px; color: rgba(154,167,182,0.95); }
</style>
""", unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════════════════
# COMPONENTS
# ══════════════════════════════════════════════════════════════════════════════

def sec(label):
    st.markdown(f'<div class="sec-label">{label}</div>', unsafe_allow_html=True)


def level_badge_html(level):
    lc = LEVEL_CFG.get(level, LEVEL_CFG[RiskLevel.INFO.value])
    return (f'<span class="level-badge" style="background:{lc["bg"]};color:{lc["color"]};'
            f'border-color:{lc["border"]};">{lc["shape"]} {level}</span>')


def render_header():
    st.markdown(f"""
    <div class="pg-header">
      <h1>{settings.page_title()}</h1>
      <p><b>Functional MVP (hackathon demo)</b>: clinician selects a drug + genetic marker (and phenotype).
      The system returns explainable risk alerts and therapy guidance.</p>
    </div>""", unsafe_allow_html=True)
    b1, b2, _ = st.columns([1, 1, 4])
    with b1:
        st.button("Load demo patient", key="load_demo", type="primary",
            on_click=load_demo, args=(st.session_state,), width="stretch")
    with b2:
        st.button("Clear", key="clear_form",
            on_click=clear_form, args=(st.session_state,), width="stretch")


def render_inputs(form):
    sec("Clinician input")
    c1, c2 = st.columns(2)
    with c1:
        st.text_input("Patient name (optional)", key="patient_name", placeholder="e.g., Patient A")
    with c2:
        st.text_input("Age", key="age", placeholder="e.g., 52")
    st.text_input("Clinical condition (short)", key="condition",
        placeholder="e.g., post-PCI / oncology / autoimmune")

    c3, c4 = st.columns(2)
    with c3:
        st.selectbox("Drug (example)", DRUG_OPTIONS, key="drug")
    with c4:
        st.selectbox("Genetic marker", GENE_OPTIONS, key="gene",
            format_func=lambda g: g or "Select gene",
            on_change=on_gene_change, args=(st.session_state,))

    st.selectbox("Phenotype / Function (demo)", [""] + form.phenotype_options, key="phenotype",
        format_func=lambda p: p or "Select phenotype",
        disabled=not form.phenotype_enabled)

    render_rule_hints()


def render_rule_hints():
    items = "".join(f"<li>{r['gene']} + {r['drugs']} ({r['concern']})</li>" for r in SUPPORTED_RULES)
    st.markdown(f'<div class="hint-card"><b>Supported demo rules:</b><ul>{items}</ul></div>',
        unsafe_allow_html=True)
    with st.expander("Rule table"):
        df = pd.DataFrame(SUPPORTED_RULES).rename(columns={"gene": "Gene", "drugs": "Drug(s)", "concern": "Concern"})
        st.dataframe(df, hide_index=True, width="stretch")


def render_recommendation(form, record):
    sec("Recommendation")
    if record is None:
        st.markdown(f"""
        <div class="rec-card">
          <p class="muted">Select a drug + gene (and phenotype if available) to see decision support output.</p>
          <p class="disclaimer">{DISCLAIMER}</p>
        </div>""", unsafe_allow_html=True)
        return

    st.markdown(f"""
    <div class="rec-card">
      <p><b>Risk level:</b> {level_badge_html(record.level)}</p>
      <p><b>Why:</b> {record.message}</p>
      <p><b>Suggested action:</b> {record.recommendation}</p>
      <p class="disclaimer">{DISCLAIMER}</p>
    </div>""", unsafe_allow_html=True)
    render_downloads(form, record)


def render_downloads(form, record):
    doc = build_output_schema(form, record)
    rid = doc["report_id"]
    st.markdown("<div style='height:12px'></div>", unsafe_allow_html=True)
    st.download_button("⬇ Download JSON", data=json.dumps(doc, indent=2),
        file_name=f"advisory_{rid}.json", mime="application/json",
        width="stretch", key="dl_json")
    st.download_button("⬇ Download Clinical Note", data=build_clinical_note(form, record),
        file_name=f"clinical_note_{rid}.txt", mime="text/plain",
        width="stretch", key="dl_note")

    if not settings.pdf_enabled():
        return
    try:
        pdf_bytes = generate_pdf_report(form, record)
    except Exception as e:
        logger.error(f"PDF generation failed: {e}")
        return
    st.download_button("⬇ Download PDF Report", data=pdf_bytes,
        file_name=f"advisory_{rid}.pdf", mime="application/pdf",
        width="stretch", key="dl_pdf")


# ══════════════════════════════════════════════════════════════════════════════
# PAGE
# ══════════════════════════════════════════════════════════════════════════════

init_session(st.session_state)
render_header()

form = FormState.from_mapping(st.session_state)
if st.session_state["phenotype"] != form.phenotype:
    st.session_state["phenotype"] = form.phenotype

col_l, col_r = st.columns([1.2, 0.8], gap="large")
with col_l:
    render_inputs(form)
with col_r:
    render_recommendation(form, form.advisory())
