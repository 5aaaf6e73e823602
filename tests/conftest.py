"""Shared test configuration and fixtures."""

try:
    import app.main  # noqa: F401
except ImportError:
    raise ImportError("app is not importable. Run: pip install -e '.[dev]'") from None

import pytest

from app.config import Config


@pytest.fixture(autouse=True)
def _default_scanner(monkeypatch):
    """Tests run against the regex scanner and the Mercado Libre host marker."""
    monkeypatch.setattr(Config, "HTML_SCANNER", "regex")
    monkeypatch.setattr(Config, "MARKETPLACE_DOMAIN", "mercadolibre")
    monkeypatch.setattr(Config, "MAX_JSONLD_DEPTH", 64)
