"""
Smoke tests for the Streamlit page, driven through streamlit's AppTest.
"""

import logging
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import pdf_report

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def at():
    app = AppTest.from_file(APP_PATH, default_timeout=30)
    app.run()
    assert not app.exception
    return app


def page_text(app):
    return "\n".join(m.value for m in app.markdown)


def download_labels(app):
    return [b.proto.label for b in app.get("download_button")]


class TestPage:

    def test_initial_render_prompts_for_selection(self, at):
        assert at.session_state["drug"] == "No drug selected"
        assert at.session_state["phenotype"] == ""
        assert "Select a drug + gene" in page_text(at)
        assert at.selectbox(key="phenotype").disabled

    def test_load_demo_shows_moderate_risk(self, at):
        at.button(key="load_demo").click().run()
        assert not at.exception
        assert at.session_state["gene"] == "TPMT"
        assert at.session_state["phenotype"] == "Intermediate activity"
        text = page_text(at)
        assert "Moderate risk" in text
        assert "monitor blood counts closely" in text

    def test_changing_gene_resets_phenotype(self, at):
        at.button(key="load_demo").click().run()
        at.selectbox(key="gene").select("DPYD").run()
        assert not at.exception
        assert at.session_state["gene"] == "DPYD"
        assert at.session_state["phenotype"] == ""
        assert "No matching rule for the current selection." in page_text(at)

    def test_clear_resets_form(self, at):
        at.button(key="load_demo").click().run()
        at.button(key="clear_form").click().run()
        assert not at.exception
        assert at.session_state["patient_name"] == ""
        assert at.session_state["drug"] == "No drug selected"
        assert "Select a drug + gene" in page_text(at)

    def test_brca1_disables_phenotype(self, at):
        at.selectbox(key="drug").select("Capecitabine").run()
        at.selectbox(key="gene").select("BRCA1").run()
        assert not at.exception
        assert at.selectbox(key="phenotype").disabled
        assert "BRCA1 variants may indicate elevated cancer risk." in page_text(at)

    def test_downloads_offered_once_drug_selected(self, at):
        assert not at.get("download_button")
        at.button(key="load_demo").click().run()
        assert download_labels(at) == [
            "⬇ Download JSON", "⬇ Download Clinical Note", "⬇ Download PDF Report",
        ]

    def test_pdf_download_can_be_switched_off(self, at, monkeypatch):
        monkeypatch.setenv("PGX_ENABLE_PDF", "false")
        at.button(key="load_demo").click().run()
        assert not at.exception
        assert download_labels(at) == ["⬇ Download JSON", "⬇ Download Clinical Note"]

    def test_pdf_failure_hides_button_and_logs(self, at, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise RuntimeError("font table missing")

        monkeypatch.setattr(pdf_report, "generate_pdf_report", broken)
        with caplog.at_level(logging.ERROR, logger="PrecisionPGx.App"):
            at.button(key="load_demo").click().run()
        assert not at.exception
        assert download_labels(at) == ["⬇ Download JSON", "⬇ Download Clinical Note"]
        assert "Moderate risk" in page_text(at)
        errors = [r for r in caplog.records if r.name == "PrecisionPGx.App" and r.levelno == logging.ERROR]
        assert errors and "font table missing" in errors[0].getMessage()


class TestStalePhenotype:

    def test_phenotype_from_another_gene_is_cleared(self):
        app = AppTest.from_file(APP_PATH, default_timeout=30)
        app.session_state["drug"] = "Clopidogrel"
        app.session_state["gene"] = "TPMT"
        app.session_state["phenotype"] = "Poor metabolizer"
        app.run()
        assert not app.exception
        assert app.session_state["phenotype"] == ""
        assert "No matching rule for the current selection." in page_text(app)
