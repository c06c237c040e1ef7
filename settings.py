"""
Runtime settings for Precision PGx.
Values come from the environment, optionally seeded by a local .env file.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PAGE_TITLE = "Genomics-Based Precision Medicine Platform"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY  = {"0", "false", "no", "off"}


def env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    logging.getLogger("PrecisionPGx.Settings").warning(
        f"Ignoring invalid value {raw!r} for {name}; using {default}")
    return default


def page_title() -> str:
    return os.environ.get("PGX_PAGE_TITLE", "").strip() or DEFAULT_PAGE_TITLE


def pdf_enabled() -> bool:
    return env_flag("PGX_ENABLE_PDF", True)


def log_level() -> int:
    raw = os.environ.get("PGX_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    logging.getLogger("PrecisionPGx.Settings").warning(
        f"Ignoring invalid value {raw!r} for PGX_LOG_LEVEL; using INFO")
    return logging.INFO


def configure_logging() -> None:
    logging.basicConfig(level=log_level(), format=LOG_FORMAT)
