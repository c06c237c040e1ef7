"""
Tests for environment-driven settings.
"""

import logging

import pytest

import settings


class TestSettings:

    def test_page_title_default(self, monkeypatch):
        monkeypatch.delenv("PGX_PAGE_TITLE", raising=False)
        assert settings.page_title() == settings.DEFAULT_PAGE_TITLE

    def test_page_title_override(self, monkeypatch):
        monkeypatch.setenv("PGX_PAGE_TITLE", "  Ward 7 PGx  ")
        assert settings.page_title() == "Ward 7 PGx"

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("1", True), ("YES", True), ("off", False), ("0", False), ("False", False),
    ])
    def test_pdf_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("PGX_ENABLE_PDF", raw)
        assert settings.pdf_enabled() is expected

    def test_pdf_flag_default(self, monkeypatch):
        monkeypatch.delenv("PGX_ENABLE_PDF", raising=False)
        assert settings.pdf_enabled() is True

    def test_invalid_flag_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("PGX_ENABLE_PDF", "maybe")
        with caplog.at_level(logging.WARNING, logger="PrecisionPGx.Settings"):
            assert settings.pdf_enabled() is True
        assert "PGX_ENABLE_PDF" in caplog.text

    @pytest.mark.parametrize("raw,expected", [
        ("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR),
    ])
    def test_log_level(self, monkeypatch, raw, expected):
        monkeypatch.setenv("PGX_LOG_LEVEL", raw)
        assert settings.log_level() == expected

    def test_log_level_default(self, monkeypatch):
        monkeypatch.delenv("PGX_LOG_LEVEL", raising=False)
        assert settings.log_level() == logging.INFO

    def test_invalid_log_level_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("PGX_LOG_LEVEL", "chatty")
        with caplog.at_level(logging.WARNING, logger="PrecisionPGx.Settings"):
            assert settings.log_level() == logging.INFO
        assert "PGX_LOG_LEVEL" in caplog.text
