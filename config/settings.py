"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError on nonsensical values
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "3001"))
    )

    # ── External sources ────────────────────────────────────────────────────
    #: Seconds to wait on either external source before giving up.
    http_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HTTP_TIMEOUT", "10"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "HTTP_USER_AGENT", "research-brief/0.1 (+https://example.org/research-brief)"
        )
    )
    summary_url: str = field(
        default_factory=lambda: os.environ.get(
            "SUMMARY_API_URL", "https://en.wikipedia.org/api/rest_v1/page/summary"
        )
    )
    paper_url: str = field(
        default_factory=lambda: os.environ.get(
            "PAPER_API_URL", "http://export.arxiv.org/api/query"
        )
    )

    # ── Pipeline policy ─────────────────────────────────────────────────────
    #: Papers older than this many years are dropped.
    recency_years: int = field(
        default_factory=lambda: int(os.environ.get("RECENCY_YEARS", "6"))
    )
    #: Summary terms appended after the topic in the keyword list.
    max_keyword_terms: int = field(
        default_factory=lambda: int(os.environ.get("MAX_KEYWORD_TERMS", "3"))
    )
    search_results: int = field(
        default_factory=lambda: int(os.environ.get("PAPER_SEARCH_RESULTS", "20"))
    )
    max_candidates: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CANDIDATES", "5"))
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any numeric setting is not positive."""
        for name in (
            "port", "http_timeout", "recency_years",
            "max_keyword_terms", "search_results", "max_candidates",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(
                    f"{name} must be positive, got {getattr(self, name)!r}. "
                    "Check the corresponding environment variable."
                )
