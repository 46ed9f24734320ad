"""Shared fixtures."""

from __future__ import annotations

import pytest

from config.settings import Settings


@pytest.fixture
def settings(monkeypatch) -> Settings:
    for name in (
        "HTTP_TIMEOUT", "SUMMARY_API_URL", "PAPER_API_URL", "RECENCY_YEARS",
        "MAX_KEYWORD_TERMS", "PAPER_SEARCH_RESULTS", "MAX_CANDIDATES",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings()
